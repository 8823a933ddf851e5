"""
Common base class of tracked and untracked tensor values.

`TensorValue` combines the operation mixins with the two recording hooks the
mixins call, ``_push_unary`` and ``_push_binary``. The hooks have no body of
their own: implementations are registered per tracking combination in
``_dispatch`` through the tensor control-path manager, which replaces the
hooks with a dispatcher keyed on the operands' ``_state``.

Operand lifting
---------------
Binary operations accept, as the non-receiver operand, another tensor value,
a real scalar, or array-like numeric data. Non-tensor operands become
`Constant`s; scalars are broadcast to the shape of the tensor they are
combined with.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Optional, Sequence

import numpy as np

from ...domain._errors import UnsupportedOperandError
from ...domain._tensor import Tracking
from .._kernels import from_raw
from .mixins import (
    TensorMixinArithmetic,
    TensorMixinComparison,
    TensorMixinMemory,
    TensorMixinReduction,
    TensorMixinUnary,
)

_NUMERIC_KINDS = "biuf"


class TensorValue(
    TensorMixinArithmetic,
    TensorMixinUnary,
    TensorMixinReduction,
    TensorMixinMemory,
    TensorMixinComparison,
    ABC,
):
    """
    Abstract tensor value: the shared surface of `Variable` and `Constant`.

    Notes
    -----
    - ``__array_ufunc__`` is set to ``None`` so that expressions such as
      ``ndarray + value`` defer to this class's reflected operators instead of
      being evaluated elementwise by NumPy.
    - Values define no ``__eq__``; they hash by identity.
    """

    __array_ufunc__ = None

    @property
    @abstractmethod
    def data(self) -> np.ndarray:
        """Return the forward value as a read-only array."""

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the forward value."""
        return self.data.shape

    @property
    def dtype(self) -> np.dtype:
        """Return the dtype of the forward value."""
        return self.data.dtype

    @property
    @abstractmethod
    def is_tracked(self) -> bool:
        """Return True when the value is recorded in a computation graph."""

    @property
    @abstractmethod
    def _state(self) -> Tracking:
        """Return the tracking tag read by the control-path dispatcher."""

    def item(self) -> Any:
        """
        Return the single element of the value as a Python scalar.

        Raises
        ------
        ValueError
            If the value holds more than one element.
        """
        return self.data.item()

    def numpy(self) -> np.ndarray:
        """Return a writable copy of the forward value."""
        return np.array(self.data)

    # ------------------------------------------------------------------
    # Recording hooks (replaced by control-path dispatchers)
    # ------------------------------------------------------------------
    def _push_unary(
        self, result: np.ndarray, reverse_fn: Any, args: Sequence[Any]
    ) -> "TensorValue":
        """
        Wrap the result of a one-operand operation.

        Parameters
        ----------
        result : np.ndarray
            Forward value computed by the operation.
        reverse_fn : Callable
            Reverse rule ``reverse_fn(df, args) -> partial``.
        args : Sequence
            Forward data captured for the reverse rule.

        Returns
        -------
        TensorValue
            A `Variable` with a new node if ``self`` is tracked, otherwise a
            `Constant`.
        """
        ...

    def _push_binary(
        self,
        other: "TensorValue",
        result: np.ndarray,
        reverse_fn: Any,
        args: Sequence[Any],
    ) -> "TensorValue":
        """
        Wrap the result of a two-operand operation.

        Parameters
        ----------
        other : TensorValue
            The second operand, already lifted to a tensor value.
        result : np.ndarray
            Forward value computed by the operation.
        reverse_fn : Callable
            Reverse rule ``reverse_fn(df, args) -> (partial_a, partial_b)``.
        args : Sequence
            Forward data captured for the reverse rule.

        Returns
        -------
        TensorValue
            A `Variable` whose node depends on every tracked operand, or a
            `Constant` when neither operand is tracked.
        """
        ...

    # ------------------------------------------------------------------
    # Operand lifting
    # ------------------------------------------------------------------
    @staticmethod
    def _as_tensor_like(
        x: Any, like: Optional["TensorValue"], op: str
    ) -> "TensorValue":
        """
        Lift an operand to a tensor value.

        Parameters
        ----------
        x : Any
            The operand. Tensor values are returned unchanged.
        like : Optional[TensorValue]
            The tensor the operand is combined with. Scalars take its shape
            and dtype; without one they become 0-d values of the configured
            dtype.
        op : str
            Operation name, used in error messages.

        Returns
        -------
        TensorValue
            `x` itself, or a `Constant` wrapping it.

        Raises
        ------
        UnsupportedOperandError
            If `x` is not a tensor value, a real scalar, or numeric array-like
            data.
        """
        if isinstance(x, TensorValue):
            return x

        from ._constant import Constant

        if isinstance(x, (Real, np.number, np.bool_)):
            if isinstance(x, np.complexfloating):
                raise UnsupportedOperandError(op, x)
            if like is None:
                return Constant(from_raw(x))
            return Constant(np.full(like.shape, x, dtype=like.dtype))

        if isinstance(x, (np.ndarray, list, tuple)):
            try:
                arr = np.asarray(x)
            except ValueError:
                raise UnsupportedOperandError(op, x) from None
            if arr.dtype.kind not in _NUMERIC_KINDS:
                raise UnsupportedOperandError(op, x)
            return Constant(arr if isinstance(x, np.ndarray) else from_raw(arr))

        raise UnsupportedOperandError(op, x)
