"""Value types shared by the staff line detection stages."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple, cast

# Number of lines in a standard five-line staff
STAFF_LINE_COUNT = 5


class LineSegment(NamedTuple):
    """
    A maximal run of consecutive dark rows.

    Attributes:
        start:     Index of the first dark row of the run (0 = top of the image).
        thickness: Number of consecutive dark rows.
    """

    start: int
    thickness: int

    @property
    def end(self) -> int:
        """Index of the first row below the segment."""
        return self.start + self.thickness


@dataclass(frozen=True)
class StaffCandidate:
    """
    Exactly five line segments, ordered top to bottom, tested as one staff.

    Construction rejects anything that is not five ordered, non-overlapping
    segments, so the validator never has to deal with a malformed group.
    """

    lines: tuple[LineSegment, LineSegment, LineSegment, LineSegment, LineSegment]

    def __post_init__(self) -> None:
        if len(self.lines) != STAFF_LINE_COUNT:
            raise ValueError(
                f"A staff candidate needs exactly {STAFF_LINE_COUNT} line segments, "
                f"got {len(self.lines)}."
            )

        for line in self.lines:
            if line.start < 0:
                raise ValueError(f"Line segment {tuple(line)} starts above row 0.")
            if line.thickness < 0:
                raise ValueError(f"Line segment {tuple(line)} has a negative thickness.")

        for upper, lower in zip(self.lines, self.lines[1:]):
            if lower.start < upper.end:
                raise ValueError(
                    f"Line segments {tuple(upper)} and {tuple(lower)} "
                    "overlap or are out of order."
                )

    @classmethod
    def from_segments(cls, segments: Iterable[tuple[int, int]]) -> StaffCandidate:
        """
        Build a candidate from LineSegments or plain ``(start, thickness)`` pairs.

        Raises:
            ValueError: If there are not exactly five segments, or they are
                        out of order, overlapping or negative.
        """
        lines = tuple(LineSegment(int(start), int(thickness)) for start, thickness in segments)
        return cls(cast("tuple[LineSegment, LineSegment, LineSegment, LineSegment, LineSegment]", lines))

    @property
    def top(self) -> int:
        """First row of the top line."""
        return self.lines[0].start

    @property
    def bottom(self) -> int:
        """First row below the bottom line."""
        return self.lines[-1].end

    def line_thicknesses(self) -> list[int]:
        """Thickness of the first segment of every adjacent pair (top four lines)."""
        return [upper.thickness for upper in self.lines[:-1]]

    def spacings(self) -> list[int]:
        """Blank rows between each pair of adjacent lines."""
        return [lower.start - upper.end for upper, lower in zip(self.lines, self.lines[1:])]
