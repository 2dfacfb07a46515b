"""Byte range selection for object reads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from mdsclient.domain.errors import InvalidRangeError


@dataclass(frozen=True)
class NoRange:
    """Whole object."""

    def header_value(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class From:
    """Open-ended range from ``start`` to the end of the object."""

    start: int

    def __post_init__(self) -> None:
        _check_bound(self.start)

    def header_value(self) -> Optional[str]:
        return f"bytes={self.start}-"


@dataclass(frozen=True)
class Between:
    """Closed range; both ``start`` and ``end`` are inclusive."""

    start: int
    end: int

    def __post_init__(self) -> None:
        _check_bound(self.start)
        _check_bound(self.end)
        if self.end < self.start:
            raise InvalidRangeError(
                f"invalid range: end {self.end} is before start {self.start}"
            )

    def header_value(self) -> Optional[str]:
        return f"bytes={self.start}-{self.end}"


ByteRange = Union[NoRange, From, Between]

NO_RANGE = NoRange()


def _check_bound(value: int) -> None:
    # bool is an int subclass but never a meaningful offset
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRangeError(f"invalid range bound: {value!r}")
    if value < 0:
        raise InvalidRangeError(f"invalid range bound: {value} is negative")


def byte_range_from_bounds(*bounds: int) -> ByteRange:
    """Convert zero, one or two unsigned bounds into a ``ByteRange``.

    Raises:
        InvalidRangeError: More than two bounds, or an invalid bound.
    """
    if len(bounds) == 0:
        return NO_RANGE
    if len(bounds) == 1:
        return From(bounds[0])
    if len(bounds) == 2:
        return Between(bounds[0], bounds[1])
    raise InvalidRangeError(f"invalid range: expected at most 2 bounds, got {len(bounds)}")


__all__ = ["Between", "ByteRange", "From", "NO_RANGE", "NoRange", "byte_range_from_bounds"]
