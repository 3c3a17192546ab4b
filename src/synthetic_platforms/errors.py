from __future__ import annotations


class UnsupportedExecutionError(RuntimeError):
    """Raised when something asks a synthetic platform to actually run work."""


class DensityUnsatisfiableError(ValueError):
    """The requested graph density needs more cross-platform channel pairs than exist."""


class SlotIndexMismatchError(AssertionError):
    """A loop-head role slot has no copy at the same index."""
