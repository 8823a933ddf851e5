"""
Numeric array interface definitions.

The differentiation core never implements numeric kernels. It treats the
values stored in graph nodes as opaque, fixed-shape N-dimensional arrays
supplied by a backend and relies only on the small surface described by
`IArray`.

The protocol is structural, so `numpy.ndarray` satisfies it without any
adapter. Other array libraries with NumPy-compatible operators satisfy it the
same way.
"""

from __future__ import annotations

from typing import Any, Protocol, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class IArray(Protocol):
    """
    Numeric backend contract.

    An `IArray` is a real-valued array of fixed shape. The core requires
    elementwise arithmetic (with scalar broadcast), negation, matrix
    multiplication, reduce-sum and shape introspection.

    Notes
    -----
    - Arithmetic results are treated as values: the core never mutates an
      operand, only the gradient accumulators it owns.
    - Device placement and kernel performance are the backend's concern.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the array.

        Returns
        -------
        tuple[int, ...]
            The array's shape.
        """
        ...

    @property
    def dtype(self) -> Any:
        """Return the element type of the array."""
        ...

    def __add__(self, other: Union["IArray", Number]) -> "IArray": ...

    def __sub__(self, other: Union["IArray", Number]) -> "IArray": ...

    def __mul__(self, other: Union["IArray", Number]) -> "IArray": ...

    def __truediv__(self, other: Union["IArray", Number]) -> "IArray": ...

    def __neg__(self) -> "IArray": ...

    def __matmul__(self, other: "IArray") -> "IArray": ...

    def sum(self, axis: Any = None) -> Any:
        """
        Reduce the array by summation.

        Parameters
        ----------
        axis : None | int | tuple[int, ...], optional
            Axes to reduce. `None` reduces over every element.

        Returns
        -------
        Any
            The reduced array (or backend scalar for a full reduction).
        """
        ...
