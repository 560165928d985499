"""
Error types raised by the estimation engine.

All errors derive from ValueError so callers that already guard bad
arguments with ``except ValueError`` keep working, while the subclasses
let a caller tell a malformed input apart from a level that lies outside
the sample's support.

Provides:
- QuantileError: Base class
- InvalidLevelError: Level not in the open interval (0, 1)
- EmptySampleError: Zero-length sample
- InvalidSampleError: Sample that is not a finite 1-D sequence
- OutOfRangeError: Strict estimate whose rank falls outside [1, size]
"""

from typing import Optional


class QuantileError(ValueError):
    """Base class for quantile and expected shortfall estimation errors."""


class InvalidLevelError(QuantileError):
    """Raised when the probability level is not strictly between 0 and 1."""

    def __init__(self, level: float):
        self.level = level
        super().__init__(f"Level must be in the open interval (0, 1), got {level!r}")


class EmptySampleError(QuantileError):
    """Raised when the sample has no observations."""

    def __init__(self):
        super().__init__("Sample must contain at least one observation")


class InvalidSampleError(QuantileError):
    """Raised when the sample is not a one-dimensional sequence of finite numbers."""


class OutOfRangeError(QuantileError):
    """
    Raised by the strict entry points when the rank implied by the level
    falls outside the sample's index range.
    
    Attributes:
        direction: "below" if the rank is under 1, "above" if it exceeds the size
        index: The offending rank
        size: The sample size
    """
    BELOW = "below"
    ABOVE = "above"
    
    def __init__(self, direction: str, index: Optional[float] = None, size: Optional[int] = None):
        if direction not in (self.BELOW, self.ABOVE):
            raise ValueError(f"Unknown out-of-range direction: {direction}")
        self.direction = direction
        self.index = index
        self.size = size
        if direction == self.BELOW:
            message = "Quantile can not be computed below the lowest probability level."
        else:
            message = "Quantile can not be computed above the highest probability level."
        super().__init__(message)
    
    @property
    def is_below(self) -> bool:
        return self.direction == self.BELOW
    
    @property
    def is_above(self) -> bool:
        return self.direction == self.ABOVE


__all__ = [
    "QuantileError",
    "InvalidLevelError",
    "EmptySampleError",
    "InvalidSampleError",
    "OutOfRangeError",
]
