"""Functional core - pure business logic with no I/O."""

from .todo import (
    Todo,
    NotATodoLine,
    is_todo_line,
    is_pending_todo_line,
    parse_todo,
    format_todo,
    format_minutes,
    format_points,
    strip_annotations,
    format_annotations,
)
from .region import (
    NoRegionFound,
    is_header_line,
    find_header,
    find_region,
    organize_region,
    mark_done,
    apply_timing,
    archive_region,
)

__all__ = [
    # Line codec
    "Todo",
    "NotATodoLine",
    "is_todo_line",
    "is_pending_todo_line",
    "parse_todo",
    "format_todo",
    "format_minutes",
    "format_points",
    "strip_annotations",
    "format_annotations",
    # Region
    "NoRegionFound",
    "is_header_line",
    "find_header",
    "find_region",
    "organize_region",
    "mark_done",
    "apply_timing",
    "archive_region",
]
