"""
Backend-agnostic contracts of the differentiation core.

The domain layer holds structural interfaces (`IArray`, `ITensorValue`), the
`Tracking` tag, the error taxonomy, and the control-path dispatcher. It has no
dependency on NumPy or on any concrete graph implementation.
"""

from ._array import IArray
from ._tensor import ITensorValue, Tracking
from ._errors import (
    TapegradError,
    ShapeMismatchError,
    UnsupportedOperandError,
    ConfigurationError,
)

__all__ = [
    "IArray",
    "ITensorValue",
    "Tracking",
    "TapegradError",
    "ShapeMismatchError",
    "UnsupportedOperandError",
    "ConfigurationError",
]
