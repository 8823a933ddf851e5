"""
Tensor values: tracked `Variable`, untracked `Constant`, and their shared
base `TensorValue`.

Importing this package registers the control paths of ``_dispatch``.
"""

from ._base import TensorValue
from ._variable import Variable
from ._constant import Constant
from . import _dispatch  # registers control paths

__all__ = [
    TensorValue.__name__,
    Variable.__name__,
    Constant.__name__,
]
