"""stafflines: Staff line detection for scanned sheet music."""

from stafflines.line_detector import (
    classify_row_values,
    compute_dark_row_mask,
    group_dark_runs,
)
from stafflines.line_models import STAFF_LINE_COUNT, LineSegment, StaffCandidate
from stafflines.row_profiler import RowProfiler, profile_rows, row_mean
from stafflines.staff_detector import DetectionResult, detect, detect_incremental, find_staves
from stafflines.staff_validator import is_regular_staff

__version__ = "0.1.0"

__all__ = [
    "STAFF_LINE_COUNT",
    "DetectionResult",
    "LineSegment",
    "RowProfiler",
    "StaffCandidate",
    "__version__",
    "classify_row_values",
    "compute_dark_row_mask",
    "detect",
    "detect_incremental",
    "find_staves",
    "group_dark_runs",
    "is_regular_staff",
    "profile_rows",
    "row_mean",
]
