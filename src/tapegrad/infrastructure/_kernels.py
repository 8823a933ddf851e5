"""
NumPy backend helpers used by the differentiation core.

The core treats arrays as opaque values and delegates all numeric work to
NumPy. This module gathers the few places where the core touches the backend
directly:

- converting raw input into frozen arrays of the configured dtype,
- allocating gradient accumulators,
- validating operand shapes before an operation is recorded.

Shape validation is done here, at the operation boundary, because Python has
no static guarantee equivalent to compile-time shape checking.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from ..domain._errors import ShapeMismatchError
from ._config import get_settings

Axis = Union[None, int, Sequence[int]]


def as_array(values: Any, dtype: Optional[np.dtype] = None) -> np.ndarray:
    """
    Convert values into a read-only array.

    Parameters
    ----------
    values : Any
        Scalar, nested sequence, NumPy scalar or array.
    dtype : Optional[np.dtype], optional
        Target dtype. Defaults to the configured dtype for non-floating input
        and keeps the input dtype for floating arrays.

    Returns
    -------
    np.ndarray
        A freshly allocated array with the writeable flag cleared.
    """
    if dtype is None:
        src = np.asarray(values)
        dtype = (
            src.dtype
            if np.issubdtype(src.dtype, np.floating)
            else get_settings().np_dtype
        )
    arr = np.array(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


def from_raw(values: Any) -> np.ndarray:
    """
    Convert user-supplied values into a read-only array of the configured dtype.

    Unlike `as_array`, floating input is cast as well, so every value created
    through a generator shares the configured dtype.
    """
    return as_array(values, dtype=get_settings().np_dtype)


def zeros_like(arr: np.ndarray) -> np.ndarray:
    """Allocate a writable all-zero array with the shape and dtype of `arr`."""
    return np.zeros(arr.shape, dtype=arr.dtype)


def frozen_view(arr: np.ndarray) -> np.ndarray:
    """Return a read-only view of `arr`."""
    view = arr.view()
    view.flags.writeable = False
    return view


def check_same_shape(op: str, a: np.ndarray, b: np.ndarray) -> None:
    """
    Validate shapes for a binary elementwise operation.

    Strict shape equality is required; scalars are lifted to the other
    operand's shape before this check runs.

    Raises
    ------
    ShapeMismatchError
        If the shapes differ.
    """
    if a.shape != b.shape:
        raise ShapeMismatchError(op, a.shape, b.shape)


def check_matmul_shapes(a: np.ndarray, b: np.ndarray) -> None:
    """
    Validate shapes for (batched) matrix multiplication.

    Both operands must have at least two dimensions, the same number of
    dimensions, identical leading (batch) dimensions, and matching inner
    dimensions.

    Raises
    ------
    ShapeMismatchError
        If any of the conditions above is violated.
    """
    if a.ndim < 2 or b.ndim < 2:
        raise ShapeMismatchError(
            "matmul", a.shape, b.shape, detail="operands must be at least 2-D"
        )
    if a.ndim != b.ndim or a.shape[:-2] != b.shape[:-2]:
        raise ShapeMismatchError(
            "matmul", a.shape, b.shape, detail="batch dimensions differ"
        )
    if a.shape[-1] != b.shape[-2]:
        raise ShapeMismatchError(
            "matmul", a.shape, b.shape, detail="inner dimensions differ"
        )


def resolve_reshape(shape: tuple[int, ...], new_shape: Sequence[int]) -> tuple[int, ...]:
    """
    Resolve a target shape for reshape, allowing one ``-1`` placeholder.

    Parameters
    ----------
    shape : tuple[int, ...]
        The current shape.
    new_shape : Sequence[int]
        Requested shape, possibly containing a single ``-1``.

    Returns
    -------
    tuple[int, ...]
        The concrete target shape.

    Raises
    ------
    ShapeMismatchError
        If the element count would change or the placeholder is ambiguous.
    """
    new_shape = tuple(int(d) for d in new_shape)
    numel = int(np.prod(shape, dtype=np.int64))

    if new_shape.count(-1) > 1 or any(d < -1 for d in new_shape):
        raise ShapeMismatchError(
            "reshape", shape, new_shape, detail="invalid target shape"
        )
    if -1 in new_shape:
        known = int(np.prod([d for d in new_shape if d != -1], dtype=np.int64))
        if known == 0 or numel % known != 0:
            raise ShapeMismatchError(
                "reshape", shape, new_shape, detail="cannot infer placeholder"
            )
        new_shape = tuple(numel // known if d == -1 else d for d in new_shape)

    if int(np.prod(new_shape, dtype=np.int64)) != numel:
        raise ShapeMismatchError(
            "reshape", shape, new_shape, detail="element count changes"
        )
    return new_shape


def normalize_axis(axis: Axis, shape: tuple[int, ...]) -> Optional[tuple[int, ...]]:
    """
    Normalize a reduction axis argument to a sorted tuple of positive axes.

    Returns
    -------
    Optional[tuple[int, ...]]
        `None` for a full reduction, otherwise the normalized axes.

    Raises
    ------
    ShapeMismatchError
        If an axis is out of range for `shape` or repeated.
    """
    if axis is None:
        return None
    ndim = len(shape)
    axes = (axis,) if isinstance(axis, (int, np.integer)) else tuple(axis)
    normalized = []
    for ax in axes:
        ax = int(ax)
        if not -ndim <= ax < ndim:
            raise ShapeMismatchError(
                "sum", shape, detail=f"axis {ax} out of range"
            )
        normalized.append(ax % ndim)
    if len(set(normalized)) != len(normalized):
        raise ShapeMismatchError("sum", shape, detail="repeated axis")
    return tuple(sorted(normalized))
