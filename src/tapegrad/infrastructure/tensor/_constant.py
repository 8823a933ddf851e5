"""
Untracked tensor values.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ...domain._tensor import Tracking
from .._kernels import as_array
from .._logging import get_logger
from ..graph import GraphNode, Tape
from ._base import TensorValue
from ._variable import Variable

logger = get_logger(__name__)


class Constant(TensorValue):
    """
    A plain tensor value with no graph participation.

    Operations between constants compute their result and record nothing.
    Combining a constant with a `Variable` produces a `Variable` whose node
    does not depend on the constant.

    Parameters
    ----------
    value : Any
        Scalar, nested sequence or array. Stored as a read-only copy;
        non-floating input is converted to the configured dtype.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = as_array(value)

    @property
    def data(self) -> np.ndarray:
        return self._value

    @property
    def is_tracked(self) -> bool:
        return False

    @property
    def _state(self) -> Tracking:
        return Tracking.UNTRACKED

    def unfreeze(self) -> Variable:
        """
        Start a new history from this constant's value.

        Returns
        -------
        Variable
            A variable whose tape holds exactly one declaration node with a
            copy of this value and a zero gradient.
        """
        var = Variable(Tape(), GraphNode.declaration(self._value))
        logger.debug("unfreeze into node %d", var.node.id)
        return var

    def __repr__(self) -> str:
        return f"Constant(shape={self.shape}, dtype={self.dtype})"
