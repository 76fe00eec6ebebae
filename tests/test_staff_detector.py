"""Unit tests for the end-to-end staff detection pipeline."""

import numpy as np
import pytest

from stafflines.line_models import LineSegment
from stafflines.staff_detector import detect, detect_incremental, find_staves

FIRST_STAFF_ROWS = [10, 14, 18, 22, 26]
SECOND_STAFF_ROWS = [60, 64, 68, 72, 76]


def _synthetic_page(extra_rows: tuple[int, ...] = ()) -> np.ndarray:
    page = np.full((100, 40), 255, dtype=np.uint8)
    for row in [*FIRST_STAFF_ROWS, *SECOND_STAFF_ROWS, *extra_rows]:
        page[row] = 0
    return page


def test_detect_two_staves() -> None:
    result = detect(_synthetic_page())

    assert len(result.row_values) == 100
    assert len(result.mask) == 100
    assert [segment.start for segment in result.segments] == FIRST_STAFF_ROWS + SECOND_STAFF_ROWS
    assert len(result.staves) == 2
    assert [line.start for line in result.staves[0].lines] == FIRST_STAFF_ROWS
    assert [line.start for line in result.staves[1].lines] == SECOND_STAFF_ROWS


def test_detect_skips_stray_line_above_staff() -> None:
    result = detect(_synthetic_page(extra_rows=(2,)))

    assert result.segments[0] == LineSegment(2, 1)
    assert len(result.staves) == 2
    assert result.staves[0].top == 10


def test_detect_threshold_reported() -> None:
    result = detect(_synthetic_page())
    assert 0 < result.threshold < 255
    assert all(value <= result.threshold for value, dark in zip(result.row_values, result.mask) if dark)


def test_detect_uniform_page_is_one_thick_line() -> None:
    # a uniform page sits exactly on its own threshold, so every row is dark
    result = detect(np.full((10, 4), 255, dtype=np.uint8))
    assert result.segments == (LineSegment(0, 10),)
    assert result.staves == ()


def test_detect_incremental_matches_batch() -> None:
    page = _synthetic_page(extra_rows=(40, 41))
    assert detect_incremental(iter(page)) == detect(page)


def test_detect_single_row_rejected() -> None:
    with pytest.raises(ValueError):
        detect([[0, 0, 0]])


def test_find_staves_jumps_past_accepted_staff() -> None:
    segments = [(index * 4, 1) for index in range(10)]
    staves = find_staves(segments)
    assert [staff.top for staff in staves] == [0, 20]


def test_find_staves_slides_past_irregular_window() -> None:
    segments = [(0, 1), (30, 1), (34, 1), (38, 1), (42, 1), (46, 1)]
    staves = find_staves(segments)
    assert len(staves) == 1
    assert staves[0].top == 30


def test_find_staves_needs_five_lines() -> None:
    assert find_staves([(0, 1), (4, 1), (8, 1), (12, 1)]) == []
