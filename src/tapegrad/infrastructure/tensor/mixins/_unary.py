"""
Unary operation mixin defining elementwise tensor functions.

This module declares :class:`TensorMixinUnary`, which implements negation,
the trigonometric functions ``sin`` and ``cos``, ``exp``, ``log`` and the
identity map.

Forward values are computed with NumPy; the reverse rule and any forward
arrays it needs are passed to ``_push_unary``.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .._base import TensorValue


def _identity_reverse(df, args):
    return df


def _neg_reverse(df, args):
    return -df


def _sin_reverse(df, args):
    (x,) = args
    return df * np.cos(x)


def _cos_reverse(df, args):
    (x,) = args
    return -df * np.sin(x)


def _exp_reverse(df, args):
    (out,) = args
    return df * out


def _log_reverse(df, args):
    (x,) = args
    with np.errstate(divide="ignore", invalid="ignore"):
        return df / x


class TensorMixinUnary(ABC):
    """
    Mixin implementing elementwise unary operations.

    Every method returns a value with the receiver's shape. A tracked receiver
    produces a tracked result whose node depends on the receiver's node; an
    untracked receiver produces an untracked result and records nothing.
    """

    def identity(self: "TensorValue") -> "TensorValue":
        """
        Return a new value equal to ``self``.

        For a tracked receiver this records a node, so gradients flowing into
        the result are passed through unchanged.

        Backward rule:
            ``d(x) / dx = 1``
        """
        return self._push_unary(self.data.copy(), _identity_reverse, ())

    def neg(self: "TensorValue") -> "TensorValue":
        """
        Elementwise negation.

        Backward rule:
            ``d(-x) / dx = -1``
        """
        return self._push_unary(-self.data, _neg_reverse, ())

    def __neg__(self) -> "TensorValue":
        return self.neg()

    def sin(self: "TensorValue") -> "TensorValue":
        """
        Elementwise sine.

        Backward rule:
            ``d(sin(x)) / dx = cos(x)``
        """
        x = self.data
        return self._push_unary(np.sin(x), _sin_reverse, (x,))

    def cos(self: "TensorValue") -> "TensorValue":
        """
        Elementwise cosine.

        Backward rule:
            ``d(cos(x)) / dx = -sin(x)``
        """
        x = self.data
        return self._push_unary(np.cos(x), _cos_reverse, (x,))

    def exp(self: "TensorValue") -> "TensorValue":
        """
        Elementwise exponential.

        Backward rule:
            ``d(exp(x)) / dx = exp(x)``
        """
        out = np.exp(self.data)
        return self._push_unary(out, _exp_reverse, (out,))

    def log(self: "TensorValue") -> "TensorValue":
        """
        Elementwise natural logarithm.

        Non-positive entries follow NumPy semantics (``-inf`` or ``nan``).

        Backward rule:
            ``d(log(x)) / dx = 1 / x``
        """
        x = self.data
        with np.errstate(divide="ignore", invalid="ignore"):
            out = np.log(x)
        return self._push_unary(out, _log_reverse, (x,))
