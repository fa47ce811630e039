import logging
import re
from typing import List, Optional, Tuple, Type, Union

from newickcore.exceptions import NewickSyntaxError
from newickcore.tree import FromNewick, FromNewickT

logger = logging.getLogger(__name__)

# Skipped between tokens. Other whitespace belongs to bare names.
WHITESPACE = frozenset(" \t")

# Allowed after the terminating ';' and between trees of a multi-tree text
TREE_SEPARATORS = frozenset(" \t\r\n")

# Characters that end a bare (unquoted) name
NAME_DELIMITERS = frozenset(" ()[]':;,")

_NUMBER = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|(?i:infinity|inf|nan))"
)


# ===================================================================
# 1. LEXICAL RULES
# ===================================================================
#
# Every rule takes the full text and a position and returns the parsed value
# together with the position right after it.


def skip_whitespace(text: str, pos: int) -> int:
    """Return the first position at or after ``pos`` that is not a space or tab."""
    while pos < len(text) and text[pos] in WHITESPACE:
        pos += 1
    return pos


def read_quoted_name(text: str, pos: int) -> Tuple[str, int]:
    """
    Read a name enclosed in single quotes.

    Everything between the quotes is kept verbatim, delimiters included.

    Raises:
        NewickSyntaxError: If ``pos`` is not on a quote or the quote is never closed.
    """
    if not text.startswith("'", pos):
        raise NewickSyntaxError.at(text, pos, "\"'\"")
    closing = text.find("'", pos + 1)
    if closing == -1:
        raise NewickSyntaxError.at(
            text, pos, "a closing \"'\"", "Unterminated quoted name"
        )
    return text[pos + 1 : closing], closing + 1


def read_bare_name(text: str, pos: int) -> Tuple[str, int]:
    """Read an unquoted name. An empty name is valid."""
    end = pos
    while end < len(text) and text[end] not in NAME_DELIMITERS:
        end += 1
    return text[pos:end], end


def read_name(text: str, pos: int) -> Tuple[str, int]:
    """
    Read an optional node name, quoted or bare.

    Leading whitespace is skipped. A missing name yields ``""``.
    """
    pos = skip_whitespace(text, pos)
    if text.startswith("'", pos):
        return read_quoted_name(text, pos)
    return read_bare_name(text, pos)


def read_length(text: str, pos: int) -> Tuple[Optional[float], int]:
    """
    Read an optional ``:number`` branch length.

    Whitespace is allowed on both sides of the colon. When no colon follows,
    nothing is consumed and ``None`` is returned.

    Raises:
        NewickSyntaxError: If a colon is not followed by a valid number.
    """
    cursor = skip_whitespace(text, pos)
    if not text.startswith(":", cursor):
        return None, pos
    cursor = skip_whitespace(text, cursor + 1)
    match = _NUMBER.match(text, cursor)
    if match is None:
        raise NewickSyntaxError.at(
            text, cursor, "a number", "Invalid branch length"
        )
    return float(match.group()), match.end()


# ===================================================================
# 2. TREE RULES
# ===================================================================


class _Frame:
    """An internal node whose closing parenthesis has not been read yet."""

    __slots__ = ("start", "children")

    def __init__(self, start: int):
        self.start = start
        self.children: List[FromNewick] = []


def _unexpected_in_branch_set(
    text: str, pos: int, stack: List[_Frame]
) -> NewickSyntaxError:
    if skip_whitespace(text, pos) >= len(text):
        return NewickSyntaxError.at(
            text,
            stack[-1].start,
            "a matching ')'",
            "Unclosed '('",
        )
    return NewickSyntaxError.at(text, pos, "',' or ')'")


def _unexpected_after_tree(text: str, pos: int) -> NewickSyntaxError:
    if pos >= len(text):
        return NewickSyntaxError.at(
            text, pos, "';'", "Missing terminating ';'"
        )
    if text[pos] == ")":
        return NewickSyntaxError.at(text, pos, "';'", "Unbalanced ')'")
    return NewickSyntaxError.at(text, pos, "';'")


def _read_tree(
    text: str, pos: int, factory: Type[FromNewickT]
) -> Tuple[FromNewickT, int, int]:
    """
    Read one ``;``-terminated tree starting at ``pos``.

    Nested parentheses are kept on an explicit stack of open frames, so the
    nesting depth of the input does not touch the Python call stack.

    Returns:
        Tuple of (tree, position after ';', number of nodes built)
    """
    stack: List[_Frame] = []
    node_count = 0

    while True:
        # sub_tree := internal | leaf, internal is recognised by its '('
        cursor = skip_whitespace(text, pos)
        if text.startswith("(", cursor):
            stack.append(_Frame(cursor))
            pos = cursor + 1
            continue

        name, pos = read_name(text, pos)
        node = factory.leaf(name)

        # Complete nodes bottom-up until the next branch of a branch set starts
        while True:
            length, pos = read_length(text, pos)
            node = node.with_length(length)
            node_count += 1

            if not stack:
                if not text.startswith(";", pos):
                    raise _unexpected_after_tree(text, pos)
                return node, pos + 1, node_count

            frame = stack[-1]
            frame.children.append(node)

            cursor = skip_whitespace(text, pos)
            if text.startswith(",", cursor):
                pos = cursor + 1
                break
            if text.startswith(")", pos):
                stack.pop()
                name, pos = read_name(text, pos + 1)
                node = factory.internal(name, frame.children)
                continue
            raise _unexpected_in_branch_set(text, pos, stack)


# ===================================================================
# 3. PUBLIC API FUNCTIONS
# ===================================================================


def _skip_separators(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in TREE_SEPARATORS:
        pos += 1
    return pos


def _as_text(data: Union[str, bytes]) -> str:
    if not isinstance(data, (bytes, bytearray)):
        return data
    data = bytes(data)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        # Report the offset in characters of the readable prefix
        position = len(data[: exc.start].decode("utf-8"))
        raise NewickSyntaxError(
            "Invalid UTF-8 byte",
            data.decode("utf-8", errors="replace"),
            position,
            "UTF-8 encoded text",
        ) from exc


def parse_newick(
    text: Union[str, bytes], factory: Type[FromNewickT]
) -> FromNewickT:
    """
    Parse a single Newick tree.

    Args:
        text: Newick text (``bytes`` are decoded as UTF-8)
        factory: Tree type implementing the ``FromNewick`` build capability

    Returns:
        The root node built through ``factory``.

    Raises:
        NewickSyntaxError: If the text is not exactly one valid tree. Only
            spaces, tabs and line breaks may follow the terminating ``;``.
    """
    text = _as_text(text)
    tree, pos, node_count = _read_tree(text, 0, factory)

    rest = _skip_separators(text, pos)
    if rest != len(text):
        raise NewickSyntaxError.at(
            text, rest, "end of input", "Trailing input after ';'"
        )

    logger.debug("Parsed Newick tree with %d nodes", node_count)
    return tree


def parse_newick_list(
    text: Union[str, bytes], factory: Type[FromNewickT]
) -> List[FromNewickT]:
    """
    Parse a sequence of ``;``-terminated Newick trees.

    Trees may be separated by spaces, tabs and line breaks (one tree per
    line is the usual layout of multi-tree files).

    Raises:
        NewickSyntaxError: On empty input or if any tree is malformed.
    """
    text = _as_text(text)
    pos = _skip_separators(text, 0)
    if pos == len(text):
        raise NewickSyntaxError.at(text, pos, "a Newick tree", "Empty input")

    trees: List[FromNewickT] = []
    total_nodes = 0
    while pos < len(text):
        tree, pos, node_count = _read_tree(text, pos, factory)
        trees.append(tree)
        total_nodes += node_count
        pos = _skip_separators(text, pos)

    logger.debug("Parsed %d Newick trees with %d nodes", len(trees), total_nodes)
    return trees
