"""
Arithmetic mixin defining binary tensor operations.

This module declares :class:`TensorMixinArithmetic`, which implements the
elementwise arithmetic operators and matrix multiplication for tensor values.

Every operation follows the same three steps:

1. lift non-tensor operands and validate shapes,
2. compute the forward result with NumPy,
3. hand the result, the reverse rule and the captured forward arrays to
   ``_push_binary``, whose control path decides whether a node is recorded
   and whether the result is a `Variable` or a `Constant`.

Reverse rules are module-level functions with the signature
``reverse(df, args) -> (partial_a, partial_b)``.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Union

import numpy as np

from ..._kernels import check_matmul_shapes, check_same_shape

if TYPE_CHECKING:
    from .._base import TensorValue

Number = Union[int, float]
Operand = Union["TensorValue", Number, np.ndarray]


def _add_reverse(df, args):
    return df, df


def _sub_reverse(df, args):
    return df, -df


def _mul_reverse(df, args):
    a, b = args
    return df * b, df * a


def _div_reverse(df, args):
    a, b = args
    return df / b, -df * a / (b * b)


def _pow_reverse(df, args):
    a, b, out = args
    # the log partial is undefined for a <= 0; it is discarded when b is untracked
    with np.errstate(divide="ignore", invalid="ignore"):
        return df * b * np.power(a, b - 1), df * out * np.log(a)


def _matmul_reverse(df, args):
    a, b = args
    return df @ np.swapaxes(b, -1, -2), np.swapaxes(a, -1, -2) @ df


class TensorMixinArithmetic(ABC):
    """
    Mixin implementing binary arithmetic on tensor values.

    Notes
    -----
    - Scalars are promoted to constants matching the receiver's shape; NumPy
      arrays are promoted to constants as they are.
    - Elementwise operations require identical shapes (no implicit
      broadcasting beyond scalar promotion).
    - Backward rules documented on each method are implemented by the reverse
      functions of this module.
    """

    # ----------------------------
    # Addition
    # ----------------------------
    def add(self: "TensorValue", other: Operand) -> "TensorValue":
        """
        Elementwise addition.

        Backward rule:
        - ``d(a + b) / da = 1``
        - ``d(a + b) / db = 1``
        """
        other = self._as_tensor_like(other, self, "add")
        a, b = self.data, other.data
        check_same_shape("add", a, b)
        return self._push_binary(other, a + b, _add_reverse, ())

    def __add__(self, other: Operand) -> "TensorValue":
        return self.add(other)

    def __radd__(self, other: Operand) -> "TensorValue":
        return self._as_tensor_like(other, self, "add").add(self)

    # ----------------------------
    # Subtraction
    # ----------------------------
    def sub(self: "TensorValue", other: Operand) -> "TensorValue":
        """
        Elementwise subtraction.

        Backward rule:
        - ``d(a - b) / da = 1``
        - ``d(a - b) / db = -1``
        """
        other = self._as_tensor_like(other, self, "sub")
        a, b = self.data, other.data
        check_same_shape("sub", a, b)
        return self._push_binary(other, a - b, _sub_reverse, ())

    def __sub__(self, other: Operand) -> "TensorValue":
        return self.sub(other)

    def __rsub__(self, other: Operand) -> "TensorValue":
        return self._as_tensor_like(other, self, "sub").sub(self)

    # ----------------------------
    # Multiplication
    # ----------------------------
    def mul(self: "TensorValue", other: Operand) -> "TensorValue":
        """
        Elementwise (Hadamard) product.

        Backward rule:
        - ``d(a * b) / da = b``
        - ``d(a * b) / db = a``
        """
        other = self._as_tensor_like(other, self, "mul")
        a, b = self.data, other.data
        check_same_shape("mul", a, b)
        return self._push_binary(other, a * b, _mul_reverse, (a, b))

    def __mul__(self, other: Operand) -> "TensorValue":
        return self.mul(other)

    def __rmul__(self, other: Operand) -> "TensorValue":
        return self._as_tensor_like(other, self, "mul").mul(self)

    # ----------------------------
    # True division
    # ----------------------------
    def div(self: "TensorValue", other: Operand) -> "TensorValue":
        """
        Elementwise true division.

        Backward rule:
        - ``d(a / b) / da = 1 / b``
        - ``d(a / b) / db = -a / (b^2)``
        """
        other = self._as_tensor_like(other, self, "div")
        a, b = self.data, other.data
        check_same_shape("div", a, b)
        return self._push_binary(other, a / b, _div_reverse, (a, b))

    def __truediv__(self, other: Operand) -> "TensorValue":
        return self.div(other)

    def __rtruediv__(self, other: Operand) -> "TensorValue":
        return self._as_tensor_like(other, self, "div").div(self)

    # ----------------------------
    # Power
    # ----------------------------
    def pow(self: "TensorValue", other: Operand) -> "TensorValue":
        """
        Elementwise power ``a ** b``.

        Backward rule:
        - ``d(a ** b) / da = b * a ** (b - 1)``
        - ``d(a ** b) / db = a ** b * ln(a)``
        """
        other = self._as_tensor_like(other, self, "pow")
        a, b = self.data, other.data
        check_same_shape("pow", a, b)
        out = np.power(a, b)
        return self._push_binary(other, out, _pow_reverse, (a, b, out))

    def __pow__(self, other: Operand) -> "TensorValue":
        return self.pow(other)

    def __rpow__(self, other: Operand) -> "TensorValue":
        return self._as_tensor_like(other, self, "pow").pow(self)

    # ----------------------------
    # Matrix multiplication
    # ----------------------------
    def matmul(self: "TensorValue", other: Operand) -> "TensorValue":
        """
        Matrix product over the last two axes.

        Leading axes are treated as batch axes and must match exactly.

        Backward rule (per batch element):
        - ``d(A @ B) / dA = grad_out @ B^T``
        - ``d(A @ B) / dB = A^T @ grad_out``
        """
        other = self._as_tensor_like(other, self, "matmul")
        a, b = self.data, other.data
        check_matmul_shapes(a, b)
        return self._push_binary(other, a @ b, _matmul_reverse, (a, b))

    def __matmul__(self, other: Operand) -> "TensorValue":
        return self.matmul(other)

    def __rmatmul__(self, other: Operand) -> "TensorValue":
        return self._as_tensor_like(other, self, "matmul").matmul(self)
