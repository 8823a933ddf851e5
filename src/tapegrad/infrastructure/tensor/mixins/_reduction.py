"""
Reduction mixin defining summation over tensor values.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING

import numpy as np

from ..._kernels import Axis, normalize_axis

if TYPE_CHECKING:
    from .._base import TensorValue


def _sum_reverse(df, args):
    shape, axes = args
    if axes is not None:
        df = np.expand_dims(df, axes)
    return np.broadcast_to(df, shape)


class TensorMixinReduction(ABC):
    """Mixin implementing reductions."""

    def sum(self: "TensorValue", axis: Axis = None) -> "TensorValue":
        """
        Sum elements over the given axes.

        Parameters
        ----------
        axis : None | int | Sequence[int], optional
            Axes to reduce. ``None`` (the default) reduces every axis and
            produces a 0-d value. Negative axes count from the end.

        Returns
        -------
        TensorValue
            The reduced value. Reduced axes are removed from the shape.

        Raises
        ------
        ShapeMismatchError
            If an axis is out of range or repeated.

        Notes
        -----
        Backward rule:
            The incoming gradient is broadcast back over the reduced axes,
            i.e. every input element receives the gradient of the sum it
            contributed to.
        """
        x = self.data
        axes = normalize_axis(axis, x.shape)
        out = np.sum(x, axis=axes)
        return self._push_unary(
            np.asarray(out, dtype=x.dtype), _sum_reverse, (x.shape, axes)
        )
