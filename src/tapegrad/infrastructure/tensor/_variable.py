"""
Tracked tensor values.

A `Variable` pairs a `Tape` with the `GraphNode` holding its own value. The
tape contains that node and every node it transitively depends on, which is
exactly the set a backward pass from this variable has to visit.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ...domain._tensor import Tracking
from .._kernels import from_raw
from .._logging import get_logger
from ..graph import GraphNode, Tape
from ._base import TensorValue

logger = get_logger(__name__)


class Variable(TensorValue):
    """
    A tensor value recorded in a computation graph.

    Parameters
    ----------
    tape : Tape
        The history leading to `node`. `node` is pushed onto it.
    node : GraphNode
        The node holding this variable's value and gradient.

    Notes
    -----
    The forward value is fixed at construction. The only state that changes
    afterwards is the gradient accumulator of the node (and of its
    ancestors), through `backward` and `reset`.
    """

    __slots__ = ("_tape", "_node")

    def __init__(self, tape: Tape, node: GraphNode) -> None:
        tape.push(node)
        self._tape = tape
        self._node = node

    @classmethod
    def declare(cls, values: Any) -> "Variable":
        """
        Create a variable with no history from raw values.

        Parameters
        ----------
        values : Any
            Scalar, nested sequence or array. Converted to the configured
            dtype.

        Returns
        -------
        Variable
            A variable whose tape holds a single declaration node.
        """
        return cls(Tape(), GraphNode.declaration(from_raw(values)))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def data(self) -> np.ndarray:
        return self._node.data

    @property
    def tape(self) -> Tape:
        """Return the tape recording this variable's history."""
        return self._tape

    @property
    def node(self) -> GraphNode:
        """Return the node holding this variable's value and gradient."""
        return self._node

    @property
    def is_tracked(self) -> bool:
        return True

    @property
    def _state(self) -> Tracking:
        return Tracking.TRACKED

    # ------------------------------------------------------------------
    # Differentiation
    # ------------------------------------------------------------------
    def backward(self) -> None:
        """
        Accumulate the gradient of this variable into every ancestor node.

        The variable's own gradient is seeded with ones, then every node of
        the tape is reversed in descending id order. For a non-scalar root
        this computes, for each ancestor, the sum over all root elements of
        their partial derivatives.

        Gradients accumulate: a second call without `reset` in between adds
        to the previous result.
        """
        nodes = self._tape.nodes()
        logger.debug(
            "backward from node %d over %d nodes", self._node.id, len(nodes)
        )
        self._node.ones_grad()
        for node in reversed(nodes):
            node.reverse()

    def reset(self) -> None:
        """Zero the gradient of every node on this variable's tape."""
        nodes = self._tape.nodes()
        logger.debug("reset %d nodes from node %d", len(nodes), self._node.id)
        for node in nodes:
            node.zero_grad()

    def grad(self):
        """
        Return the current gradient as an untracked snapshot.

        Returns
        -------
        Constant
            A copy of the node's gradient accumulator. All zeros unless a
            backward pass reached this variable.
        """
        from ._constant import Constant

        return Constant(self._node.grad)

    def freeze(self):
        """
        Return an untracked copy of this variable's value.

        Returns
        -------
        Constant
            A constant holding the same data. The history is not carried over.
        """
        from ._constant import Constant

        logger.debug("freeze node %d", self._node.id)
        return Constant(self.data)

    def __repr__(self) -> str:
        return (
            f"Variable(shape={self.shape}, dtype={self.dtype}, "
            f"node={self._node.id}, tape={len(self._tape)})"
        )
