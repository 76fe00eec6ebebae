"""RowProfiler: Reduces every row of a pixel grid to its mean intensity."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

logger = logging.getLogger(__name__)


def row_mean(row: Sequence[int] | np.ndarray) -> float:
    """
    Average pixel intensity of a single image row.

    Args:
        row: Pixel intensities of one row (any numeric sequence or 1-D array).

    Returns:
        The arithmetic mean as a Python float.

    Raises:
        ValueError: If the row is empty.
    """
    values = np.asarray(row, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Cannot profile an empty row.")
    return float(values.mean())


def profile_rows(pixels: Iterable[Sequence[int] | np.ndarray]) -> list[float]:
    """Return one row value per row of *pixels*, top to bottom."""
    return [row_mean(row) for row in pixels]


class RowProfiler:
    """
    Incremental row profiler.

    Rows are pushed one at a time and only their mean is kept, so memory grows
    with the image height rather than with the number of pixels. Once
    :meth:`finalize` has been called the profile is frozen.

        profiler = RowProfiler()
        for row in decoder.rows():
            profiler.push(row)
        mask = classify_row_values(profiler.finalize())
    """

    def __init__(self) -> None:
        self._row_values: list[float] = []
        self._finalized = False

    def push(self, row: Sequence[int] | np.ndarray) -> float:
        """
        Profile one row and append its value.

        Returns:
            The row value that was stored.

        Raises:
            RuntimeError: If the profiler has already been finalized.
            ValueError:   If the row is empty.
        """
        if self._finalized:
            raise RuntimeError("RowProfiler is finalized; no more rows can be pushed.")

        value = row_mean(row)
        self._row_values.append(value)
        return value

    def extend(self, rows: Iterable[Sequence[int] | np.ndarray]) -> None:
        """Push every row of *rows* in order."""
        for row in rows:
            self.push(row)

    def finalize(self) -> tuple[float, ...]:
        """Freeze the profiler and return the accumulated row values."""
        if not self._finalized:
            logger.debug(f"Finalizing row profile with {len(self._row_values)} rows")
            self._finalized = True
        return self.row_values

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def row_values(self) -> tuple[float, ...]:
        return tuple(self._row_values)

    def __len__(self) -> int:
        return len(self._row_values)
