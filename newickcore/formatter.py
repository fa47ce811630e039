"""Serialization of trees into Newick text."""

from typing import List, Optional, Sequence, Tuple

from newickcore.config import Config
from newickcore.tree import ToNewick


def format_length(length: float) -> str:
    """
    Render a branch length as decimal text.

    Uses the shortest representation that parses back to the same float,
    e.g. ``0.1`` stays ``0.1`` instead of ``0.100000``.
    """
    return repr(float(length))


def _label(node: ToNewick, lengths: bool) -> str:
    label = node.get_name()
    if lengths:
        length: Optional[float] = node.get_length()
        if length is not None:
            label += ":" + format_length(length)
    return label


def to_newick(tree: ToNewick, lengths: Optional[bool] = None) -> str:
    """
    Convert a tree into a Newick string terminated by ``;``.

    Every node is written as ``{children}{name}{length}``. Names are written
    verbatim and are never quoted, so a name containing Newick delimiters
    produces text that does not parse back to the same tree.

    Args:
        tree: Root node implementing the ``ToNewick`` traversal capability
        lengths: Whether to write branch lengths. Defaults to
            ``Config.FORMAT_LENGTHS``.

    Returns:
        The Newick string.
    """
    if lengths is None:
        lengths = Config.FORMAT_LENGTHS

    # Iterative post-order walk: (node, its children, rendered children so far)
    out: List[str] = []
    stack: List[Tuple[ToNewick, Sequence[ToNewick], List[str]]] = [
        (tree, tree.get_children(), [])
    ]
    while stack:
        node, children, rendered = stack[-1]
        if len(rendered) < len(children):
            child = children[len(rendered)]
            stack.append((child, child.get_children(), []))
            continue

        stack.pop()
        text = _label(node, lengths)
        if children:
            text = "(" + ",".join(rendered) + ")" + text
        if stack:
            stack[-1][2].append(text)
        else:
            out.append(text)

    return out[0] + ";"
