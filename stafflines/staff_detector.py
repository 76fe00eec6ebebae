"""Staff detection pipeline: row profile → line segments → regular staves."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from stafflines.line_detector import classify_row_values, dark_row_threshold, group_dark_runs
from stafflines.line_models import STAFF_LINE_COUNT, LineSegment, StaffCandidate
from stafflines.row_profiler import RowProfiler, profile_rows
from stafflines.staff_validator import is_regular_staff

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionResult:
    """
    Everything one pipeline run produced for a pixel grid.

    Attributes:
        row_values: Mean intensity of every row, top to bottom.
        threshold:  Row values at or below this are dark.
        mask:       Dark-row mask, one entry per row.
        segments:   Line segments grouped from the mask.
        staves:     Five-line groups of segments accepted as regular staves.
    """

    row_values: tuple[float, ...]
    threshold: float
    mask: tuple[bool, ...]
    segments: tuple[LineSegment, ...]
    staves: tuple[StaffCandidate, ...]


def find_staves(segments: Sequence[tuple[int, int]]) -> list[StaffCandidate]:
    """
    Slide a five-line window down the segments and collect the regular staves.

    When a window is accepted the search continues after its last line, so a
    line belongs to at most one staff; otherwise the window moves down by one
    segment.

    Args:
        segments: Line segments ordered by start row, as from group_dark_runs.

    Returns:
        Accepted staff candidates, top to bottom.
    """
    staves: list[StaffCandidate] = []
    index = 0

    while index + STAFF_LINE_COUNT <= len(segments):
        candidate = StaffCandidate.from_segments(segments[index : index + STAFF_LINE_COUNT])
        if is_regular_staff(candidate):
            staves.append(candidate)
            index += STAFF_LINE_COUNT
        else:
            index += 1

    logger.debug(f"Found {len(staves)} staves among {len(segments)} line segments")
    return staves


def _detect_from_row_values(row_values: Sequence[float]) -> DetectionResult:
    threshold = dark_row_threshold(row_values)
    mask = classify_row_values(row_values, threshold)
    segments = group_dark_runs(mask)
    staves = find_staves(segments)

    return DetectionResult(
        row_values=tuple(row_values),
        threshold=threshold,
        mask=tuple(mask),
        segments=tuple(segments),
        staves=tuple(staves),
    )


def detect(pixels: Iterable[Sequence[int] | np.ndarray]) -> DetectionResult:
    """
    Detect staff lines and regular staves in a decoded pixel grid.

    Args:
        pixels: Pixel grid, rows top to bottom ("0 = black" encoding).

    Returns:
        DetectionResult with every intermediate stage.

    Raises:
        ValueError: If a row is empty or the grid has fewer than two rows.
    """
    return _detect_from_row_values(profile_rows(pixels))


def detect_incremental(rows: Iterable[Sequence[int] | np.ndarray]) -> DetectionResult:
    """
    Same as :func:`detect`, but streams the rows through a RowProfiler.

    Only one row value per row is kept in memory, which suits row iterators
    over images too large to hold as a full grid.
    """
    profiler = RowProfiler()
    profiler.extend(rows)
    return _detect_from_row_values(profiler.finalize())
