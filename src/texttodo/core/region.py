"""Pure TODO region logic - grouping, sorting and line mutations, no I/O."""

import re
from dataclasses import replace
from datetime import datetime, time

from .todo import (
    Todo,
    NotATodoLine,
    format_annotations,
    format_minutes,
    format_todo,
    is_pending_todo_line,
    is_todo_line,
    parse_todo,
)

HEADER_RE = re.compile(r"^TODOs(:)?(\s*##.*)?$")
BLANK_LINE_RE = re.compile(r"^\s*$")
MAX_REGION_LINES = 1000
MINUTES_PER_DAY = 24 * 60

ELAPSED_PRIORITY = float("inf")
NO_RATE_PRIORITY = -1


class NoRegionFound(LookupError):
    """Raised when no TODOs header encloses the requested line."""

    pass


def is_header_line(line: str) -> bool:
    return HEADER_RE.match(line) is not None


def is_blank_line(line: str) -> bool:
    return BLANK_LINE_RE.match(line) is not None


def _is_region_body(line: str) -> bool:
    return is_todo_line(line) or is_blank_line(line)


def find_header(lines: list[str], max_lines: int = MAX_REGION_LINES) -> int:
    """Index of the first TODOs header in the first max_lines lines."""
    for i, line in enumerate(lines[:max_lines]):
        if is_header_line(line):
            return i
    raise NoRegionFound("No TODOs header found")


def find_region(
    lines: list[str],
    index: int,
    max_lines: int = MAX_REGION_LINES,
) -> tuple[int, int]:
    """
    Locate the TODO region containing line `index`.

    Walks up over TODO and blank lines to a header, then down from the header
    while lines are TODO or blank. Trailing blank lines are left out.

    Returns: (start, end) as a half-open range of line indices.
    """
    if not 0 <= index < len(lines):
        raise NoRegionFound(f"Line {index + 1} is outside the document")

    start = None
    for i in range(index, max(index - max_lines, -1), -1):
        if is_header_line(lines[i]):
            start = i
            break
        if not _is_region_body(lines[i]):
            break
    if start is None:
        raise NoRegionFound(f"No TODOs header above line {index + 1}")

    end = start + 1
    limit = min(len(lines), start + max_lines)
    while end < limit and _is_region_body(lines[end]):
        end += 1
    while end > start + 1 and is_blank_line(lines[end - 1]):
        end -= 1
    return start, end


def priority(todo: Todo) -> float:
    """Sort key for pending todos, higher sorts first."""
    if todo.is_elapsed():
        return ELAPSED_PRIORITY
    if not todo.has_completion_rate():
        return NO_RATE_PRIORITY
    return todo.completion_rate()


def summarize(pending: list[Todo]) -> str:
    """Summary annotation for the region header."""
    if any(t.is_elapsed() for t in pending):
        return "∑: ELAPSED!"
    total = sum(t.completion_rate() for t in pending)
    return f"∑: {format_minutes(total)}/d"


def organize_region(lines: list[str], now: datetime | None = None) -> list[str]:
    """
    Reorder a TODO region.

    Header and other unknown lines come first (the first one carrying the
    summary), then pending todos by priority, then completed lines grouped
    Monday through Sunday. Blank lines are dropped.
    """
    now = now or datetime.now()
    unknown: list[str] = []
    pending: list[Todo] = []
    done_by_day: list[list[str]] = [[] for _ in range(7)]

    for line in lines:
        if is_blank_line(line):
            continue
        todo = parse_todo(line, now)
        if todo is None:
            unknown.append(line)
        elif todo.is_done():
            done_by_day[todo.day_number].append(line)
        else:
            pending.append(todo)

    # sorted() is stable with reverse=True, so equal priorities keep their order
    pending = sorted(pending, key=priority, reverse=True)

    if unknown:
        unknown[0] = format_annotations(unknown[0], [summarize(pending)])

    result = unknown + [format_todo(t) for t in pending]
    for day_lines in done_by_day:
        result.extend(day_lines)
    return result


def mark_done(line: str, weekday: int, now: datetime | None = None) -> tuple[str, bool]:
    """
    Toggle a TODO line between pending and done on `weekday` (Mon=0).

    Returns: (new_line, marked_done) where marked_done is False when the
    line was un-marked.
    """
    todo = parse_todo(line, now)
    if todo is None:
        raise NotATodoLine(line)

    if todo.is_done():
        todo = replace(todo, day_number=-1)
        marked = False
    else:
        todo = replace(todo, day_number=weekday)
        marked = True
    return format_todo(todo), marked


def _minute_of_day(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def apply_timing(
    lines: list[str],
    now: datetime | None = None,
    active_index: int | None = None,
    is_starting: bool = False,
) -> tuple[list[str], list[int]]:
    """
    Stop every running timer in the region and optionally start one.

    Time on a running timer is added to the line's spent minutes. When
    `is_starting`, the pending TODO at `active_index` gets a timer starting
    now. Lines that are not TODOs pass through unchanged.

    Returns: (new_lines, indices of lines now being timed)
    """
    now = now or datetime.now()
    new_lines: list[str] = []
    started: list[int] = []

    for i, line in enumerate(lines):
        todo = parse_todo(line, now)
        if todo is None:
            new_lines.append(line)
            continue

        if todo.start is not None:
            elapsed = (_minute_of_day(now) - _minute_of_day(todo.start)) % MINUTES_PER_DAY
            todo = replace(todo, start=None, spent_minutes=(todo.spent_minutes or 0) + elapsed)

        if is_starting and i == active_index and not todo.is_done():
            todo = replace(todo, start=time(now.hour, now.minute))
            started.append(i)

        new_lines.append(format_todo(todo))

    return new_lines, started


def archive_region(lines: list[str]) -> tuple[list[str], list[str]]:
    """
    Split a region into the lines that stay and the lines to archive.

    Non-TODO lines (the header included) go to both, pending todos stay and
    completed todos are archived.

    Returns: (kept, archived)
    """
    kept: list[str] = []
    archived: list[str] = []
    for line in lines:
        if not is_todo_line(line):
            kept.append(line)
            archived.append(line)
        elif is_pending_todo_line(line):
            kept.append(line)
        else:
            archived.append(line)
    return kept, archived
