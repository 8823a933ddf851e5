"""
Tensor control-path manager for tracked/untracked dispatch.

This module defines the shared control-path manager used to register and
resolve the node-construction paths of tensor operations.

Recording methods on `TensorValue` dispatch on the tracking state of their
operands, read from each operand's ``_state`` property:

    @tensor_control_path_manager(TV, TV._push_unary, (Tracking.TRACKED,))
    def push_unary_tracked(self, result, reverse_fn, args): ...

    @tensor_control_path_manager(
        TV, TV._push_binary, (Tracking.TRACKED, Tracking.UNTRACKED)
    )
    def push_binary_tracked_untracked(self, other, result, reverse_fn, args): ...

Notes
-----
All control paths registered via this manager share a single internal
registry, ensuring consistent dispatch behavior across the tensor subsystem.
"""

from ...domain.utils._control_path import create_path_builder

# Control-path manager that dispatches recording methods on operand tracking
tensor_control_path_manager = create_path_builder()
