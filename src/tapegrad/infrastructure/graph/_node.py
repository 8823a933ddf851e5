"""
Graph nodes and their origins.

A `GraphNode` is one vertex of the computation graph. It holds:

- the forward value (`data`), fixed when the node is created,
- a gradient accumulator (`grad`) of the same shape, initialised to zero,
- its *origin*: how the value was produced.

Origins
-------
- `Declaration`: a fresh tracked value with no dependencies.
- `UnaryOrigin`: produced by a one-operand operation from one ancestor.
- `BinaryOrigin`: produced by a two-operand operation. Its ancestors are one
  of `BothTracked`, `FirstTracked` or `SecondTracked`, depending on which
  operands were tracked.

Each non-declaration origin carries a reverse rule and the forward arrays the
rule needs (`args`), captured when the node is recorded. A reverse rule maps
the node's incoming adjoint ``df`` to the partial(s) for its operand(s):

    unary:  reverse(df, args) -> partial
    binary: reverse(df, args) -> (partial_a, partial_b)

Identity
--------
Node ids come from a process-wide monotonically increasing counter and are
never reused, so ids order nodes by creation time and no two live nodes can
share an id. Since an origin can only reference nodes that already exist,
every ancestor has a smaller id than its dependents; iterating nodes in
reverse id order is therefore a valid reverse-topological order.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

import numpy as np

from ...domain._errors import ShapeMismatchError
from .._kernels import as_array, frozen_view, zeros_like
from .._logging import get_logger

logger = get_logger(__name__)

NodeId = int

Args = Tuple[np.ndarray, ...]
UnaryReverseFn = Callable[[np.ndarray, Args], np.ndarray]
BinaryReverseFn = Callable[[np.ndarray, Args], Tuple[np.ndarray, np.ndarray]]

_node_ids = itertools.count()


class Declaration:
    """Origin of a node with no dependencies (a root of differentiation)."""

    kind = "declaration"

    def reverse(self, df: np.ndarray) -> None:
        """Declarations have no ancestors; nothing to propagate."""


@dataclass(frozen=True)
class UnaryOrigin:
    """
    Origin of a node produced by a one-operand operation.

    Attributes
    ----------
    ancestor : GraphNode
        The tracked operand's node.
    reverse_fn : UnaryReverseFn
        Local reverse rule.
    args : Args
        Forward arrays captured for the reverse rule.
    """

    ancestor: "GraphNode"
    reverse_fn: UnaryReverseFn
    args: Args = ()

    kind = "unary"

    def reverse(self, df: np.ndarray) -> None:
        self.ancestor.accumulate_grad(self.reverse_fn(df, self.args))


@dataclass(frozen=True)
class BothTracked:
    """Both operands of a binary operation are tracked."""

    a: "GraphNode"
    b: "GraphNode"

    def accumulate(self, partial_a: np.ndarray, partial_b: np.ndarray) -> None:
        self.a.accumulate_grad(partial_a)
        self.b.accumulate_grad(partial_b)

    def nodes(self) -> tuple["GraphNode", ...]:
        return (self.a, self.b)


@dataclass(frozen=True)
class FirstTracked:
    """Only the first operand of a binary operation is tracked."""

    a: "GraphNode"

    def accumulate(self, partial_a: np.ndarray, partial_b: np.ndarray) -> None:
        self.a.accumulate_grad(partial_a)

    def nodes(self) -> tuple["GraphNode", ...]:
        return (self.a,)


@dataclass(frozen=True)
class SecondTracked:
    """Only the second operand of a binary operation is tracked."""

    b: "GraphNode"

    def accumulate(self, partial_a: np.ndarray, partial_b: np.ndarray) -> None:
        self.b.accumulate_grad(partial_b)

    def nodes(self) -> tuple["GraphNode", ...]:
        return (self.b,)


BinaryAncestors = Union[BothTracked, FirstTracked, SecondTracked]


@dataclass(frozen=True)
class BinaryOrigin:
    """
    Origin of a node produced by a two-operand operation.

    Both partials are always computed by the reverse rule; only the ones for
    tracked ancestors are accumulated.
    """

    ancestors: BinaryAncestors
    reverse_fn: BinaryReverseFn
    args: Args = ()

    kind = "binary"

    def reverse(self, df: np.ndarray) -> None:
        partial_a, partial_b = self.reverse_fn(df, self.args)
        self.ancestors.accumulate(partial_a, partial_b)


Origin = Union[Declaration, UnaryOrigin, BinaryOrigin]


class GraphNode:
    """
    One recorded computation: value, gradient accumulator, and origin.

    Nodes are shared by reference between every tape that recorded them and
    every value that depends on them; they are collected when the last
    reference goes away.

    Notes
    -----
    - `data` is stored read-only.
    - `grad` is exposed as a read-only view; it changes only through
      `accumulate_grad`, `ones_grad` and `zero_grad`.
    """

    __slots__ = ("_id", "_data", "_grad", "_origin", "__weakref__")

    def __init__(self, data: np.ndarray, origin: Optional[Origin] = None) -> None:
        """
        Create a node and assign it the next id.

        Parameters
        ----------
        data : np.ndarray
            Forward value. Converted to a read-only array.
        origin : Optional[Origin], optional
            How the value was produced. Defaults to a `Declaration`.
        """
        self._data = as_array(data)
        self._grad = zeros_like(self._data)
        self._origin = origin if origin is not None else Declaration()
        self._id: NodeId = next(_node_ids)
        logger.debug(
            "node %d created (%s, shape=%s)",
            self._id,
            self._origin.kind,
            self._data.shape,
        )

    # ---------------------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------------------
    @classmethod
    def declaration(cls, data: np.ndarray) -> "GraphNode":
        """Create a node with no dependencies."""
        return cls(data, Declaration())

    @classmethod
    def unary(
        cls,
        data: np.ndarray,
        ancestor: "GraphNode",
        reverse_fn: UnaryReverseFn,
        args: Sequence[np.ndarray] = (),
    ) -> "GraphNode":
        """Create a node produced by a one-operand operation."""
        return cls(data, UnaryOrigin(ancestor, reverse_fn, tuple(args)))

    @classmethod
    def binary_both(
        cls,
        data: np.ndarray,
        ancestors: tuple["GraphNode", "GraphNode"],
        reverse_fn: BinaryReverseFn,
        args: Sequence[np.ndarray] = (),
    ) -> "GraphNode":
        """Create a node produced by a binary operation with both operands tracked."""
        a, b = ancestors
        return cls(data, BinaryOrigin(BothTracked(a, b), reverse_fn, tuple(args)))

    @classmethod
    def binary_first(
        cls,
        data: np.ndarray,
        ancestor: "GraphNode",
        reverse_fn: BinaryReverseFn,
        args: Sequence[np.ndarray] = (),
    ) -> "GraphNode":
        """Create a node produced by a binary operation with only the first operand tracked."""
        return cls(data, BinaryOrigin(FirstTracked(ancestor), reverse_fn, tuple(args)))

    @classmethod
    def binary_second(
        cls,
        data: np.ndarray,
        ancestor: "GraphNode",
        reverse_fn: BinaryReverseFn,
        args: Sequence[np.ndarray] = (),
    ) -> "GraphNode":
        """Create a node produced by a binary operation with only the second operand tracked."""
        return cls(data, BinaryOrigin(SecondTracked(ancestor), reverse_fn, tuple(args)))

    # ---------------------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------------------
    @property
    def id(self) -> NodeId:
        return self._id

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def grad(self) -> np.ndarray:
        return frozen_view(self._grad)

    @property
    def origin(self) -> Origin:
        return self._origin

    @property
    def shape(self) -> tuple[int, ...]:
        return self._data.shape

    @property
    def is_declaration(self) -> bool:
        return isinstance(self._origin, Declaration)

    def ancestors(self) -> tuple["GraphNode", ...]:
        """Return the tracked nodes this node was computed from."""
        origin = self._origin
        if isinstance(origin, UnaryOrigin):
            return (origin.ancestor,)
        if isinstance(origin, BinaryOrigin):
            return origin.ancestors.nodes()
        return ()

    # ---------------------------------------------------------------------
    # Gradient accumulator
    # ---------------------------------------------------------------------
    def accumulate_grad(self, partial: np.ndarray) -> None:
        """
        Add a partial derivative into the gradient accumulator.

        Parameters
        ----------
        partial : np.ndarray
            Contribution from one downstream consumer. Must have exactly the
            shape of this node's data.

        Raises
        ------
        ShapeMismatchError
            If `partial` does not match the gradient's shape.
        """
        partial = np.asarray(partial)
        if partial.shape != self._grad.shape:
            raise ShapeMismatchError(
                "accumulate_grad", self._grad.shape, partial.shape
            )
        self._grad += partial

    def ones_grad(self) -> None:
        """Seed the gradient with ones (d(self)/d(self))."""
        self._grad.fill(1)

    def zero_grad(self) -> None:
        """Clear the gradient accumulator."""
        self._grad.fill(0)

    def reverse(self) -> None:
        """
        Propagate this node's gradient to its ancestors.

        Declarations are a no-op; unary and binary origins apply their reverse
        rule to the current gradient and accumulate the partials.
        """
        self._origin.reverse(frozen_view(self._grad))

    def __repr__(self) -> str:
        return (
            f"GraphNode(id={self._id}, origin={self._origin.kind}, "
            f"shape={self._data.shape})"
        )
