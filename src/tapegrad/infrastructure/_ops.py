"""
Free-function operation surface.

Every function accepts tensor values (tracked or untracked, in any mix) and,
for binary operations, scalars or array-like data as either operand. The
tracked-ness of the result follows the operands:

- any tracked operand -> `Variable`
- no tracked operand  -> `Constant`

Functions that only make sense for one kind of value (`backward`, `reset`,
`grad_of`, `freeze`, `unfreeze`) reject the other kind with
`UnsupportedOperandError`.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np

from ..domain._errors import UnsupportedOperandError
from ._kernels import Axis
from .tensor import Constant, TensorValue, Variable

Operand = Union[TensorValue, int, float, Any]


def _binary(a: Operand, b: Operand, op: str) -> tuple[TensorValue, TensorValue]:
    """Lift both operands; scalars take the shape of the other operand."""
    if isinstance(a, TensorValue):
        return a, TensorValue._as_tensor_like(b, a, op)
    if isinstance(b, TensorValue):
        return TensorValue._as_tensor_like(a, b, op), b
    if np.ndim(b) > np.ndim(a):
        b = TensorValue._as_tensor_like(b, None, op)
        return TensorValue._as_tensor_like(a, b, op), b
    a = TensorValue._as_tensor_like(a, None, op)
    return a, TensorValue._as_tensor_like(b, a, op)


def _unary(x: Operand, op: str) -> TensorValue:
    return TensorValue._as_tensor_like(x, None, op)


# ----------------------------------------------------------------------
# Binary operations
# ----------------------------------------------------------------------
def add(a: Operand, b: Operand) -> TensorValue:
    """Elementwise ``a + b``."""
    a, b = _binary(a, b, "add")
    return a.add(b)


def sub(a: Operand, b: Operand) -> TensorValue:
    """Elementwise ``a - b``."""
    a, b = _binary(a, b, "sub")
    return a.sub(b)


def mul(a: Operand, b: Operand) -> TensorValue:
    """Elementwise ``a * b``."""
    a, b = _binary(a, b, "mul")
    return a.mul(b)


def div(a: Operand, b: Operand) -> TensorValue:
    """Elementwise ``a / b``."""
    a, b = _binary(a, b, "div")
    return a.div(b)


def pow(a: Operand, b: Operand) -> TensorValue:
    """Elementwise ``a ** b``."""
    a, b = _binary(a, b, "pow")
    return a.pow(b)


def matmul(a: Operand, b: Operand) -> TensorValue:
    """Matrix product over the last two axes."""
    a, b = _binary(a, b, "matmul")
    return a.matmul(b)


def maximum(a: Operand, b: Operand) -> TensorValue:
    """Elementwise maximum. Ties send the gradient to `a`."""
    a, b = _binary(a, b, "maximum")
    return a.maximum(b)


# ----------------------------------------------------------------------
# Unary operations
# ----------------------------------------------------------------------
def neg(x: Operand) -> TensorValue:
    return _unary(x, "neg").neg()


def sin(x: Operand) -> TensorValue:
    return _unary(x, "sin").sin()


def cos(x: Operand) -> TensorValue:
    return _unary(x, "cos").cos()


def exp(x: Operand) -> TensorValue:
    return _unary(x, "exp").exp()


def log(x: Operand) -> TensorValue:
    return _unary(x, "log").log()


def identity(x: Operand) -> TensorValue:
    return _unary(x, "identity").identity()


def reshape(x: Operand, shape: Union[int, Sequence[int]]) -> TensorValue:
    """Reshape `x`; one dimension of `shape` may be ``-1``."""
    return _unary(x, "reshape").reshape(shape)


def sum(x: Operand, axis: Axis = None) -> TensorValue:
    """Sum over `axis` (all axes by default)."""
    return _unary(x, "sum").sum(axis)


# ----------------------------------------------------------------------
# Graph operations
# ----------------------------------------------------------------------
def _require_variable(x: Any, op: str) -> Variable:
    if not isinstance(x, Variable):
        raise UnsupportedOperandError(op, x)
    return x


def backward(x: Variable) -> None:
    """Run a backward pass rooted at `x`."""
    _require_variable(x, "backward").backward()


def reset(x: Variable) -> None:
    """Zero every gradient on the tape of `x`."""
    _require_variable(x, "reset").reset()


def grad_of(x: Variable) -> Constant:
    """Return the gradient of `x` as an untracked snapshot."""
    return _require_variable(x, "grad_of").grad()


def freeze(x: Variable) -> Constant:
    """Drop the history of `x`, keeping its value."""
    return _require_variable(x, "freeze").freeze()


def unfreeze(x: Constant) -> Variable:
    """Start a new history from the value of `x`."""
    if not isinstance(x, Constant):
        raise UnsupportedOperandError("unfreeze", x)
    return x.unfreeze()
