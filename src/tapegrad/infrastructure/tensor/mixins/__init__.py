"""
Operation mixins for tensor values.

Each mixin groups one family of operations:

- ``TensorMixinArithmetic`` : add, sub, mul, div, pow, matmul and their operators
- ``TensorMixinUnary``      : identity, neg, sin, cos, exp, log
- ``TensorMixinReduction``  : sum
- ``TensorMixinMemory``     : reshape
- ``TensorMixinComparison`` : maximum

Mixins compute forward values and choose reverse rules. Whether a node is
recorded is decided by the control paths registered for ``_push_unary`` and
``_push_binary``.
"""

from ._arithmetic import TensorMixinArithmetic
from ._unary import TensorMixinUnary
from ._reduction import TensorMixinReduction
from ._memory import TensorMixinMemory
from ._comparison import TensorMixinComparison

__all__ = [
    TensorMixinArithmetic.__name__,
    TensorMixinUnary.__name__,
    TensorMixinReduction.__name__,
    TensorMixinMemory.__name__,
    TensorMixinComparison.__name__,
]
