from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Union

try:
    from typing import Self
except ImportError:
    from typing_extensions import Self

from newickcore.formatter import to_newick
from newickcore.parser.newick_parser import parse_newick


class SimpleTree:
    """
    Plain owned-children tree implementing both Newick capabilities.

    A node is a name (possibly empty), an optional branch length and an
    ordered list of children. Nodes hold no reference to their parent.
    """

    __slots__ = ("name", "length", "children")

    name: str
    length: Optional[float]
    children: List[Self]

    def __init__(
        self,
        name: str = "",
        length: Optional[float] = None,
        children: Optional[List[Self]] = None,
    ):
        self.name = name
        self.length = length
        # Avoid mutable default arguments; create a fresh list
        self.children = list(children) if children is not None else []

    # ------------------------------------------------------------------------
    # Build capability
    # ------------------------------------------------------------------------
    @classmethod
    def leaf(cls, name: str) -> Self:
        return cls(name)

    @classmethod
    def internal(cls, name: str, children: List[Self]) -> Self:
        return cls(name, None, children)

    def with_length(self, length: Optional[float]) -> Self:
        self.length = length
        return self

    # ------------------------------------------------------------------------
    # Traversal capability
    # ------------------------------------------------------------------------
    def get_name(self) -> str:
        return self.name

    def get_children(self) -> List[Self]:
        return self.children

    def get_length(self) -> Optional[float]:
        return self.length

    # ------------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------------
    def __eq__(self, other: Any) -> bool:
        """
        Structural equality: same name, same length and equal children in
        the same order.
        """
        if not isinstance(other, SimpleTree):
            return NotImplemented

        # Compare pairwise with an explicit stack so deep trees are fine
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a.name != b.name or a.length != b.length:
                return False
            if len(a.children) != len(b.children):
                return False
            pending.extend(zip(a.children, b.children))
        return True

    # Mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return self._render(
            lambda node: f"{type(node).__name__}({node.name!r}, {node.length!r}, [",
            "])",
        )

    def __str__(self) -> str:
        return self.to_newick()

    # ------------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------------
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def is_internal(self) -> bool:
        return bool(self.children)

    def traverse(self) -> List[Self]:
        """Return all nodes of the subtree in pre-order."""
        result: List[Self] = []
        stack = [self]
        while stack:
            node = stack.pop()
            result.append(node)
            stack.extend(reversed(node.children))
        return result

    @property
    def leaves(self) -> List[Self]:
        """All leaf nodes of the subtree, left to right."""
        return [node for node in self.traverse() if node.is_leaf()]

    def get_current_order(self) -> tuple[str, ...]:
        """Return the leaf names from left to right."""
        return tuple(leaf.name for leaf in self.leaves)

    # ------------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------------
    @classmethod
    def from_newick(cls, text: Union[str, bytes]) -> Self:
        return parse_newick(text, cls)

    def to_newick(self, lengths: Optional[bool] = None) -> str:
        return to_newick(self, lengths=lengths)

    def to_dict(self) -> Dict[str, Any]:
        root: Dict[str, Any] = {}
        stack = [(self, root)]
        while stack:
            node, data = stack.pop()
            data["name"] = node.name
            data["length"] = node.length
            data["children"] = [{} for _ in node.children]
            stack.extend(zip(node.children, data["children"]))
        return root

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        """
        Build a tree from the nested dictionaries produced by ``to_dict``.

        ``length`` and ``children`` may be omitted; ``name`` defaults to "".
        """

        def _node(entry: Dict[str, Any]) -> Self:
            length = entry.get("length")
            return cls(
                name=entry.get("name") or "",
                length=float(length) if length is not None else None,
            )

        root = _node(data)
        stack = [(data, root)]
        while stack:
            entry, node = stack.pop()
            for child_entry in entry.get("children", []):
                child = _node(child_entry)
                node.children.append(child)
                stack.append((child_entry, child))
        return root

    def to_json(self) -> str:
        return self._render(
            lambda node: (
                f'{{"name": {json.dumps(node.name)}, '
                f'"length": {json.dumps(node.length)}, "children": ['
            ),
            "]}",
        )

    @classmethod
    def from_json(cls, data: str) -> Self:
        """
        Build a tree from ``to_json`` output.

        Decoding goes through ``json.loads``, which is bounded by the
        interpreter recursion limit on very deeply nested documents.
        """
        return cls.from_dict(json.loads(data))

    def _render(self, opening: Callable[[Self], str], closing: str) -> str:
        """
        Render the subtree as ``opening(node)``, the children separated by
        ``", "``, then ``closing``, walking with an explicit stack.
        """
        parts: List[str] = []
        stack: List[Union[Self, str]] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            parts.append(opening(item))
            stack.append(closing)
            for index in range(len(item.children) - 1, -1, -1):
                stack.append(item.children[index])
                if index:
                    stack.append(", ")
        return "".join(parts)
