"""Error types raised by opshape.

Broadcast incompatibility is not an error: the broadcast queries return
None so callers can branch on it.
"""

from __future__ import annotations


class OpShapeError(ValueError):
    """Base class for every error raised by this package."""


class ShapeError(OpShapeError):
    """Malformed shape, or operand shapes that do not fit together."""


class InvalidAttributeError(OpShapeError):
    """Operator attribute (kernel, stride, pad, split, reshape hint, axis) is invalid."""


class BoundsError(OpShapeError, IndexError):
    """Buffer index or block size outside the buffer."""


class UnsupportedError(OpShapeError, NotImplementedError):
    """Feature deliberately not implemented (e.g. scalar tensors)."""


class TypeMismatchError(OpShapeError, TypeError):
    """Operator inputs do not share one element type."""
