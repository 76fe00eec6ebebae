"""Dark-row classification and grouping of dark rows into line segments."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from stafflines.line_models import LineSegment
from stafflines.row_profiler import profile_rows

logger = logging.getLogger(__name__)


# ── Statistics ────────────────────────────────────────────────────────────────

def mean(numbers: Sequence[float]) -> float:
    """
    Arithmetic mean of *numbers*.

    Raises:
        ValueError: If *numbers* is empty.
    """
    values = np.asarray(numbers, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Cannot take the mean of an empty sequence.")
    return float(values.mean())


def standard_deviation(numbers: Sequence[float], center: float) -> float:
    """
    Sample standard deviation of *numbers* around a precomputed mean *center*.

    Uses Bessel's correction (divisor ``n - 1``), so at least two values are
    required.

    Raises:
        ValueError: If fewer than two values are given.
    """
    values = np.asarray(numbers, dtype=np.float64)
    if values.size < 2:
        raise ValueError(
            f"The sample standard deviation needs at least 2 values, got {values.size}."
        )
    variance = float(np.sum((values - center) ** 2)) / (values.size - 1)
    return float(np.sqrt(variance))


# ── Classification ────────────────────────────────────────────────────────────

def dark_row_threshold(row_values: Sequence[float]) -> float:
    """
    Global darkness threshold for a row profile: mean minus one standard deviation.

    Staff lines are ink (low intensity) and cover a minority of the rows, so
    rows more than one standard deviation darker than the average row are
    taken as line material.

    A profile whose rows all share one value has a deviation of zero, and
    that value itself is the threshold.

    Raises:
        ValueError: If fewer than two row values are given.
    """
    if len(row_values) < 2:
        raise ValueError(
            f"At least 2 rows are needed to classify dark rows, got {len(row_values)}."
        )

    values = np.asarray(row_values, dtype=np.float64)
    lowest = float(values.min())
    if lowest == float(values.max()):
        # Zero spread: the shared value is the threshold
        return lowest

    row_value_mean = mean(row_values)
    row_value_deviation = standard_deviation(row_values, row_value_mean)
    return row_value_mean - row_value_deviation


def classify_row_values(
    row_values: Sequence[float],
    threshold: float | None = None,
) -> list[bool]:
    """
    Turn a row profile into a dark-row mask.

    A row is dark when its value is less than or equal to the threshold
    returned by :func:`dark_row_threshold`.

    Args:
        row_values: One mean intensity per row, top to bottom.
        threshold:  Precomputed threshold for *row_values*; computed when omitted.

    Returns:
        One boolean per row, in the same order.

    Raises:
        ValueError: If fewer than two row values are given.
    """
    if threshold is None:
        threshold = dark_row_threshold(row_values)
    mask = [value <= threshold for value in row_values]
    logger.debug(f"Threshold {threshold:.4f}: {sum(mask)} of {len(mask)} rows are dark")
    return mask


def compute_dark_row_mask(pixels: Iterable[Sequence[int] | np.ndarray]) -> list[bool]:
    """
    Profile every row of a pixel grid and classify it as dark or not.

    Args:
        pixels: Pixel grid, rows top to bottom (nested sequences or a 2-D array).
                Pixel values follow the "0 = black" convention.

    Returns:
        Dark-row mask with one entry per row.

    Raises:
        ValueError: If a row is empty or the grid has fewer than two rows.
    """
    return classify_row_values(profile_rows(pixels))


# ── Grouping ──────────────────────────────────────────────────────────────────

def group_dark_runs(mask: Sequence[bool]) -> list[LineSegment]:
    """
    Run-length encode the ``True`` runs of a dark-row mask.

    Args:
        mask: Dark-row mask, one entry per row.

    Returns:
        One LineSegment per maximal run of dark rows, ordered by start row.
    """
    segments: list[LineSegment] = []
    run_start: int | None = None

    for index, is_dark in enumerate(mask):
        if is_dark:
            if run_start is None:
                run_start = index
            continue

        # Emit the run that just closed
        if run_start is not None:
            segments.append(LineSegment(run_start, index - run_start))
            run_start = None

    # Emit a run still open at the bottom of the image
    if run_start is not None:
        segments.append(LineSegment(run_start, len(mask) - run_start))

    return segments
