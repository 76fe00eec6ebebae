"""Unit tests for dark-row classification and run grouping."""

import itertools

import numpy as np
import pytest

from stafflines.line_detector import (
    classify_row_values,
    compute_dark_row_mask,
    dark_row_threshold,
    group_dark_runs,
    mean,
    standard_deviation,
)
from stafflines.line_models import LineSegment


def _alternating_grid() -> list[list[int]]:
    bright = [1, 1, 1, 1, 1]
    line = [1, 0, 0, 0, 1]
    return [bright if index % 2 == 0 else line for index in range(9)]


def _expand(segments: list[LineSegment], length: int) -> list[bool]:
    mask = [False] * length
    for start, thickness in segments:
        for row in range(start, start + thickness):
            mask[row] = True
    return mask


# ── Statistics ────────────────────────────────────────────────────────────────

def test_mean() -> None:
    assert mean([0]) == 0.0
    assert mean([1, 2]) == 1.5


def test_mean_empty_rejected() -> None:
    with pytest.raises(ValueError):
        mean([])


def test_standard_deviation() -> None:
    assert standard_deviation([1.0, 1.0], 1.0) == 0.0
    assert standard_deviation([2.0, 4.0, 6.0], center=4.0) == 2.0


def test_standard_deviation_single_value_rejected() -> None:
    with pytest.raises(ValueError):
        standard_deviation([3.0], 3.0)


def test_dark_row_threshold_is_mean_minus_deviation() -> None:
    assert dark_row_threshold([2.0, 4.0, 6.0]) == 2.0


# ── Classification ────────────────────────────────────────────────────────────

def test_pixels_to_lines_small() -> None:
    assert compute_dark_row_mask([[1, 1], [0, 1], [1, 1]]) == [False, True, False]


def test_pixels_to_lines_alternating() -> None:
    assert compute_dark_row_mask(_alternating_grid()) == [
        False, True, False, True, False, True, False, True, False,
    ]


def test_pixels_to_lines_numpy_grid() -> None:
    pixels = np.full((20, 8), 255, dtype=np.uint8)
    pixels[5] = 0
    pixels[12:14] = 0
    mask = compute_dark_row_mask(pixels)
    assert [index for index, is_dark in enumerate(mask) if is_dark] == [5, 12, 13]


def test_mask_length_matches_rows() -> None:
    rows = [[value, value + 1] for value in (9, 3, 7, 7, 0, 12)]
    assert len(compute_dark_row_mask(rows)) == len(rows)


def test_threshold_boundary_is_dark() -> None:
    # mean 4, sample deviation 2 -> threshold exactly 2
    assert classify_row_values([2.0, 4.0, 6.0]) == [True, False, False]


def test_every_row_at_or_below_threshold_is_dark() -> None:
    values = [10.0, 80.0, 200.0, 200.0, 15.0, 199.0, 64.0]
    threshold = dark_row_threshold(values)
    assert classify_row_values(values) == [value <= threshold for value in values]


def test_uniform_rows_all_dark() -> None:
    # zero deviation puts every row exactly on the threshold
    assert compute_dark_row_mask([[3, 3], [3, 3], [3, 3]]) == [True, True, True]


def test_uniform_inexact_row_values_all_dark() -> None:
    assert classify_row_values([0.1] * 6) == [True] * 6
    assert dark_row_threshold([0.1] * 6) == 0.1


@pytest.mark.parametrize("row", [[0, 0, 1], [1, 2, 4]])
def test_uniform_grid_all_dark_for_any_height(row: list[int]) -> None:
    # row means of 1/3 and 7/3 are inexact in binary floating point
    for height in range(2, 41):
        assert compute_dark_row_mask([row] * height) == [True] * height


def test_precomputed_threshold_is_used() -> None:
    assert classify_row_values([1.0, 5.0, 9.0], threshold=5.0) == [True, True, False]


def test_single_row_rejected() -> None:
    with pytest.raises(ValueError):
        compute_dark_row_mask([[0, 255]])


def test_empty_row_rejected() -> None:
    with pytest.raises(ValueError):
        compute_dark_row_mask([[1, 1], []])


# ── Grouping ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    ("mask", "expected"),
    [
        ([True], [(0, 1)]),                      # one line
        ([True, True], [(0, 2)]),                # one bold line
        ([False, True], [(1, 1)]),               # one line after spacing
        ([True, False, True], [(0, 1), (2, 1)]), # two lines
        ([False, False, False], []),
        ([], []),
        ([False, True, True, True], [(1, 3)]),
    ],
)
def test_group_dark_runs(mask: list[bool], expected: list[tuple[int, int]]) -> None:
    assert group_dark_runs(mask) == expected


def test_group_dark_runs_returns_line_segments() -> None:
    segments = group_dark_runs([False, True, True, False])
    assert segments == [LineSegment(start=1, thickness=2)]
    assert segments[0].end == 3


def test_group_dark_runs_reproduces_every_short_mask() -> None:
    for length in range(7):
        for mask in itertools.product([False, True], repeat=length):
            segments = group_dark_runs(mask)
            assert _expand(segments, length) == list(mask)
            for upper, lower in zip(segments, segments[1:]):
                assert lower.start > upper.end
