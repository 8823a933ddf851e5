"""
Control paths deciding how operation results are recorded.

This module registers one implementation of ``TensorValue._push_unary`` per
tracking state of the receiver and one implementation of
``TensorValue._push_binary`` per combination of the two operands' tracking
states:

Unary
-----
- tracked    -> `Variable`, new unary node on a copy of the operand's tape
- untracked  -> `Constant`, nothing recorded

Binary (a, b)
-------------
- tracked,   tracked    -> `Variable`, node depends on both, tapes merged
- tracked,   untracked  -> `Variable`, node depends on ``a`` only
- untracked, tracked    -> `Variable`, node depends on ``b`` only
- untracked, untracked  -> `Constant`, nothing recorded

Importing this module has the side effect of installing the dispatchers.

Notes
-----
Each tracked result receives its own tape. Tapes are never shared between
two variables, so pushing a result's node cannot leak into the history of
its operands.
"""

from ...domain._tensor import Tracking
from ..graph import GraphNode
from ._base import TensorValue as TV
from ._constant import Constant
from ._tensor_builder import tensor_control_path_manager
from ._variable import Variable

TRACKED = Tracking.TRACKED
UNTRACKED = Tracking.UNTRACKED


# ----------------------------------------------------------------------
# Unary
# ----------------------------------------------------------------------
@tensor_control_path_manager(TV, TV._push_unary, (TRACKED,))
def push_unary_tracked(self: Variable, result, reverse_fn, args) -> Variable:
    node = GraphNode.unary(result, self.node, reverse_fn, args)
    return Variable(self.tape.copy(), node)


@tensor_control_path_manager(TV, TV._push_unary, (UNTRACKED,))
def push_unary_untracked(self: Constant, result, reverse_fn, args) -> Constant:
    return Constant(result)


# ----------------------------------------------------------------------
# Binary
# ----------------------------------------------------------------------
@tensor_control_path_manager(TV, TV._push_binary, (TRACKED, TRACKED))
def push_binary_both(
    self: Variable, other: Variable, result, reverse_fn, args
) -> Variable:
    node = GraphNode.binary_both(result, (self.node, other.node), reverse_fn, args)
    return Variable(self.tape.merge(other.tape), node)


@tensor_control_path_manager(TV, TV._push_binary, (TRACKED, UNTRACKED))
def push_binary_first(
    self: Variable, other: Constant, result, reverse_fn, args
) -> Variable:
    node = GraphNode.binary_first(result, self.node, reverse_fn, args)
    return Variable(self.tape.copy(), node)


@tensor_control_path_manager(TV, TV._push_binary, (UNTRACKED, TRACKED))
def push_binary_second(
    self: Constant, other: Variable, result, reverse_fn, args
) -> Variable:
    node = GraphNode.binary_second(result, other.node, reverse_fn, args)
    return Variable(other.tape.copy(), node)


@tensor_control_path_manager(TV, TV._push_binary, (UNTRACKED, UNTRACKED))
def push_binary_untracked(
    self: Constant, other: Constant, result, reverse_fn, args
) -> Constant:
    return Constant(result)
