"""
Tensor value interface definitions.

This module defines the domain-level contract shared by the two kinds of
tensor values client code manipulates:

- tracked values (`Variable`), which own a tape and a graph node, and
- untracked values (`Constant`), which hold nothing but their numeric data.

The `Tracking` enum is the runtime tag the dispatch layer reads to decide, per
operation, which node-construction path runs and whether the result is
tracked.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable

from ._array import IArray


class Tracking(Enum):
    """
    Enumeration of graph participation states.

    Attributes
    ----------
    TRACKED : Tracking
        The value participates in the computation graph and has a gradient.
    UNTRACKED : Tracking
        The value is a plain numeric value with no graph participation.
    """

    TRACKED = "tracked"
    UNTRACKED = "untracked"


@runtime_checkable
class ITensorValue(Protocol):
    """
    Tensor value interface.

    Both tracked and untracked values expose their forward data and shape,
    and report their tracking state through `_state`, which is the key used by
    the control-path dispatcher.

    Notes
    -----
    The data of a value is fixed when the value is created. Only gradient
    accumulators (owned by graph nodes) change afterwards.
    """

    @property
    def data(self) -> IArray:
        """
        Return the forward value.

        Returns
        -------
        IArray
            A read-only array holding the value's data.
        """
        ...

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the value's data."""
        ...

    @property
    def is_tracked(self) -> bool:
        """Return True for values recorded in a computation graph."""
        ...

    @property
    def _state(self) -> Tracking:
        """Return the tracking tag used for dispatch."""
        ...

    def item(self) -> Any:
        """Return the single element of a one-element value as a Python scalar."""
        ...
