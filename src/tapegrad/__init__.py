"""
tapegrad: reverse-mode automatic differentiation on a tape.

Operations on tensor values are evaluated eagerly with NumPy. When at least
one operand is a tracked `Variable`, the operation records a node on the
result's tape; `Variable.backward()` then walks that tape in reverse creation
order and accumulates gradients into every ancestor.

Example
-------
>>> import tapegrad as tg
>>> x = tg.variable([2.0])
>>> z = x * x
>>> z.backward()
>>> x.grad().data
array([4.], dtype=float32)
"""

from .domain import (
    ConfigurationError,
    ShapeMismatchError,
    TapegradError,
    Tracking,
    UnsupportedOperandError,
)
from .infrastructure import (
    Constant,
    GraphNode,
    Settings,
    Tape,
    TensorValue,
    Variable,
    configure,
    get_settings,
)
from .infrastructure._ops import (
    add,
    backward,
    cos,
    div,
    exp,
    freeze,
    grad_of,
    identity,
    log,
    matmul,
    maximum,
    mul,
    neg,
    pow,
    reset,
    reshape,
    sin,
    sub,
    sum,
    unfreeze,
)
from .infrastructure._generators import (
    constant,
    custom,
    eye,
    fill,
    randn,
    randu,
    variable,
)

__version__ = "0.1.0"

__all__ = [
    # values
    "TensorValue",
    "Variable",
    "Constant",
    "GraphNode",
    "Tape",
    "Tracking",
    # generators
    "variable",
    "constant",
    "custom",
    "fill",
    "eye",
    "randu",
    "randn",
    # operations
    "add",
    "sub",
    "mul",
    "div",
    "pow",
    "matmul",
    "maximum",
    "neg",
    "sin",
    "cos",
    "exp",
    "log",
    "identity",
    "reshape",
    "sum",
    # graph operations
    "backward",
    "reset",
    "grad_of",
    "freeze",
    "unfreeze",
    # configuration
    "Settings",
    "configure",
    "get_settings",
    # errors
    "TapegradError",
    "ShapeMismatchError",
    "UnsupportedOperandError",
    "ConfigurationError",
]
