"""
Computation graph: nodes and tapes.

- ``GraphNode``: forward value, gradient accumulator and origin of one
  recorded computation.
- ``Tape``: ordered id-to-node mapping supporting push, traversal and merge.
"""

from ._node import (
    GraphNode,
    Declaration,
    UnaryOrigin,
    BinaryOrigin,
    BothTracked,
    FirstTracked,
    SecondTracked,
)
from ._tape import Tape

__all__ = [
    GraphNode.__name__,
    Declaration.__name__,
    UnaryOrigin.__name__,
    BinaryOrigin.__name__,
    BothTracked.__name__,
    FirstTracked.__name__,
    SecondTracked.__name__,
    Tape.__name__,
]
