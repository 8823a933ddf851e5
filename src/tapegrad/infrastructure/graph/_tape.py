"""
The tape: an ordered record of graph nodes.

A `Tape` maps node ids to shared `GraphNode` references. The tape owned by a
`Variable` holds that variable's node and the transitive closure of every node
it depends on, so a single backward scan over it reaches every ancestor.

Tapes are append-only. Combining two tracked operands merges their tapes into
a new one; nodes with the same id are the same object (ids are never reused),
so shared history collapses instead of being duplicated.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional, Union

from .._logging import get_logger
from ._node import GraphNode, NodeId

logger = get_logger(__name__)


class Tape:
    """
    Ordered mapping from node id to graph node.

    Parameters
    ----------
    nodes : Optional[Mapping[NodeId, GraphNode]], optional
        Initial contents. The mapping is copied.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Optional[Mapping[NodeId, GraphNode]] = None) -> None:
        self._nodes: dict[NodeId, GraphNode] = dict(nodes) if nodes else {}

    def push(self, node: GraphNode) -> None:
        """Insert a node, keyed by its id."""
        self._nodes[node.id] = node

    def nodes(self) -> list[GraphNode]:
        """
        Return the recorded nodes ordered by id.

        Ids follow creation order, so the result lists every node after all of
        the nodes it depends on.
        """
        return [self._nodes[k] for k in sorted(self._nodes)]

    def merge(self, other: "Tape") -> "Tape":
        """
        Return a new tape holding the union of both tapes.

        Parameters
        ----------
        other : Tape
            The tape to merge with.

        Returns
        -------
        Tape
            A tape containing every node of `self` and `other`. Neither input
            is modified.
        """
        merged = Tape(self._nodes)
        merged._nodes.update(other._nodes)
        logger.debug(
            "merged tapes (%d + %d nodes -> %d)",
            len(self._nodes),
            len(other._nodes),
            len(merged._nodes),
        )
        return merged

    def copy(self) -> "Tape":
        """Return a shallow copy sharing the same nodes."""
        return Tape(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes())

    def __contains__(self, item: Union[GraphNode, NodeId]) -> bool:
        if isinstance(item, GraphNode):
            return self._nodes.get(item.id) is item
        return item in self._nodes

    def __repr__(self) -> str:
        return f"Tape(nodes={len(self._nodes)})"
