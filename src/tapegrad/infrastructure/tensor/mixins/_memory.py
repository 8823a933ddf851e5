"""
Memory/layout mixin: operations that change shape without changing values.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Sequence, Union

import numpy as np

from ..._kernels import resolve_reshape

if TYPE_CHECKING:
    from .._base import TensorValue


def _reshape_reverse(df, args):
    (shape,) = args
    return np.reshape(df, shape)


class TensorMixinMemory(ABC):
    """Mixin implementing layout operations."""

    def reshape(self: "TensorValue", *shape: Union[int, Sequence[int]]) -> "TensorValue":
        """
        Return a value with the same elements arranged in a new shape.

        The target may be passed as a single sequence (``x.reshape((2, 3))``)
        or as separate integers (``x.reshape(2, 3)``). At most one dimension
        may be ``-1``; it is inferred from the element count.

        Raises
        ------
        ShapeMismatchError
            If the element count would change or the target shape is invalid.

        Notes
        -----
        Backward rule:
            The incoming gradient is reshaped back to the input shape.
        """
        if len(shape) == 1 and not isinstance(shape[0], (int, np.integer)):
            shape = tuple(shape[0])
        x = self.data
        target = resolve_reshape(x.shape, shape)
        return self._push_unary(
            np.reshape(x, target).copy(), _reshape_reverse, (x.shape,)
        )
