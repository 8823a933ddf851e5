"""
Comparison mixin defining the differentiable elementwise maximum.

The comparison itself only selects which operand's value is kept; gradients
are routed to the selected operand.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Union

import numpy as np

from ..._kernels import check_same_shape

if TYPE_CHECKING:
    from .._base import TensorValue

Number = Union[int, float]


def _maximum_reverse(df, args):
    (first_wins,) = args
    return np.where(first_wins, df, 0), np.where(first_wins, 0, df)


class TensorMixinComparison(ABC):
    """Mixin implementing comparison-based operations."""

    def maximum(
        self: "TensorValue", other: Union["TensorValue", Number, np.ndarray]
    ) -> "TensorValue":
        """
        Elementwise maximum of two values.

        Parameters
        ----------
        other : Union[TensorValue, Number, np.ndarray]
            Second operand. Scalars are lifted to constants of the receiver's
            shape.

        Returns
        -------
        TensorValue
            ``max(self, other)`` computed elementwise.

        Notes
        -----
        Backward rule:
            Where ``self >= other`` the gradient goes to ``self``, elsewhere to
            ``other``. Ties therefore route the gradient to the first operand
            only.
        """
        other = self._as_tensor_like(other, self, "maximum")
        a, b = self.data, other.data
        check_same_shape("maximum", a, b)
        first_wins = a >= b
        return self._push_binary(
            other, np.where(first_wins, a, b), _maximum_reverse, (first_wins,)
        )
