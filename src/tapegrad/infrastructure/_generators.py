"""
Constructors for fresh tensor values.

Every generator except `constant` returns a `Variable` whose tape holds a
single declaration node. Values are converted to the configured dtype.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from ..domain._errors import ShapeMismatchError
from ._config import get_settings
from .tensor import Constant, Variable

Shape = Union[int, Sequence[int]]


def _as_shape(shape: Shape) -> tuple[int, ...]:
    if isinstance(shape, (int, np.integer)):
        return (int(shape),)
    return tuple(int(d) for d in shape)


def variable(values: Any) -> Variable:
    """Declare a tracked value with no history."""
    return Variable.declare(values)


def constant(values: Any) -> Constant:
    """Create an untracked value."""
    return Constant(np.asarray(values, dtype=get_settings().np_dtype))


def custom(values: Sequence[float], shape: Shape) -> Variable:
    """
    Declare a variable from a flat sequence of values.

    Parameters
    ----------
    values : Sequence[float]
        Element values in row-major (C) order.
    shape : int | Sequence[int]
        Target shape.

    Raises
    ------
    ShapeMismatchError
        If the number of values does not match the shape's element count.
    """
    shape = _as_shape(shape)
    flat = np.asarray(values).ravel()
    if flat.size != int(np.prod(shape, dtype=np.int64)):
        raise ShapeMismatchError(
            "custom", flat.shape, shape, detail="element count differs"
        )
    return Variable.declare(flat.reshape(shape))


def fill(shape: Shape, value: float) -> Variable:
    """Declare a variable with every element set to `value`."""
    return Variable.declare(np.full(_as_shape(shape), value))


def eye(shape: Shape, value: float = 1.0) -> Variable:
    """
    Declare a variable holding `value` on the main diagonal, zero elsewhere.

    The diagonal is taken over the last two axes and repeated over any
    leading axes. Non-square trailing shapes are allowed.

    Raises
    ------
    ShapeMismatchError
        If `shape` has fewer than two dimensions.
    """
    shape = _as_shape(shape)
    if len(shape) < 2:
        raise ShapeMismatchError("eye", shape, detail="need at least 2 dimensions")
    rows, cols = shape[-2:]
    diag = np.eye(rows, cols) * value
    return Variable.declare(np.broadcast_to(diag, shape))


def randu(shape: Shape, rng: Optional[np.random.Generator] = None) -> Variable:
    """Declare a variable with samples from the uniform distribution on [0, 1)."""
    rng = rng if rng is not None else np.random.default_rng()
    return Variable.declare(rng.random(_as_shape(shape)))


def randn(shape: Shape, rng: Optional[np.random.Generator] = None) -> Variable:
    """Declare a variable with samples from the standard normal distribution."""
    rng = rng if rng is not None else np.random.default_rng()
    return Variable.declare(rng.standard_normal(_as_shape(shape)))
