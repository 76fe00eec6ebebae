"""Regularity check for a five-line staff candidate."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from stafflines.line_models import StaffCandidate

logger = logging.getLogger(__name__)


@dataclass
class _Spread:
    """Running minimum and maximum of a measurement; ``None`` until first seen."""

    minimum: int | None = None
    maximum: int | None = None

    def add(self, value: int) -> None:
        if self.minimum is None or value < self.minimum:
            self.minimum = value
        if self.maximum is None or value > self.maximum:
            self.maximum = value

    @property
    def width(self) -> int:
        if self.minimum is None or self.maximum is None:
            return 0
        return self.maximum - self.minimum


def is_regular_staff(candidate: StaffCandidate | Sequence[tuple[int, int]]) -> bool:
    """
    Check that the lines of a staff candidate are evenly drawn and evenly spaced.

    Algorithm
    ---------
    For each of the four adjacent pairs of lines:

    1. **Line thickness** – the thickness of the upper line of the pair. The
       bottom line's thickness is therefore never measured.
    2. **Spacing** – blank rows between the end of the upper line and the
       start of the lower one.

    The thinnest measured line is the tolerance: the candidate is a regular
    staff when both the thickness spread and the spacing spread (max - min)
    are at most that tolerance. Thicker staves thus get a looser tolerance.

    Args:
        candidate: A StaffCandidate, or five ``(start, thickness)`` pairs ordered
                   top to bottom.

    Returns:
        True if the candidate is a regular staff.

    Raises:
        ValueError: If a plain sequence is not five ordered, non-overlapping
                    segments.
    """
    if not isinstance(candidate, StaffCandidate):
        candidate = StaffCandidate.from_segments(candidate)

    line_spread = _Spread()
    spacing_spread = _Spread()

    for upper, lower in zip(candidate.lines, candidate.lines[1:]):
        line_spread.add(upper.thickness)
        spacing_spread.add(lower.start - upper.end)

    deviation = line_spread.minimum or 0

    is_regular = line_spread.width <= deviation and spacing_spread.width <= deviation
    logger.debug(
        f"Staff at rows {candidate.top}-{candidate.bottom}: "
        f"line spread {line_spread.width}, spacing spread {spacing_spread.width}, "
        f"tolerance {deviation} -> {'regular' if is_regular else 'irregular'}"
    )
    return is_regular
