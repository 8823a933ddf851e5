"""
NumPy-backed implementation of the differentiation core.

Submodules
----------
- ``_config`` / ``_logging``: settings and package logger
- ``_kernels``: array conversion and shape validation helpers
- ``graph``: `GraphNode` and `Tape`
- ``tensor``: `Variable`, `Constant` and the tracked/untracked dispatch
- ``_ops``: free-function operation surface
- ``_generators``: constructors for fresh values
"""

from ._config import Settings, configure, get_settings
from ._logging import get_logger
from .graph import GraphNode, Tape
from .tensor import Constant, TensorValue, Variable

__all__ = [
    "Settings",
    "configure",
    "get_settings",
    "get_logger",
    "GraphNode",
    "Tape",
    "TensorValue",
    "Variable",
    "Constant",
]
