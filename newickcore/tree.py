"""
Capability contracts between the Newick grammar and concrete tree types.

The parser only ever talks to a tree type through ``FromNewick`` and the
formatter only through ``ToNewick``. A tree type may implement either, both,
or neither.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, TypeVar, runtime_checkable

try:
    from typing import Self
except ImportError:
    from typing_extensions import Self


@runtime_checkable
class FromNewick(Protocol):
    """Build capability: what the parser needs to construct nodes."""

    @classmethod
    def leaf(cls, name: str) -> Self:
        """Construct a childless node. ``name`` is ``""`` when unnamed."""
        ...

    @classmethod
    def internal(cls, name: str, children: List[Self]) -> Self:
        """Construct a node from an ordered, non-empty list of children."""
        ...

    def with_length(self, length: Optional[float]) -> Self:
        """
        Return this node (or a copy) with its branch length set.

        Called exactly once per parsed node, right after the node is
        complete, with ``None`` when the input carried no length.
        """
        ...


@runtime_checkable
class ToNewick(Protocol):
    """Traversal capability: what the formatter needs to read nodes."""

    def get_name(self) -> str: ...

    def get_children(self) -> Sequence[ToNewick]: ...

    def get_length(self) -> Optional[float]: ...


FromNewickT = TypeVar("FromNewickT", bound=FromNewick)

__all__ = ["FromNewick", "ToNewick", "FromNewickT"]
