"""Shared workflow layer between the CLI and the core.

Each function loads a document, finds the TODO region around a line, runs
one core operation with an explicit `now`, and writes the result back.
"""

import logging
from datetime import datetime
from pathlib import Path

from .adapters.text_file import TextFileDocument
from .config import Config
from .core.region import (
    MAX_REGION_LINES,
    apply_timing,
    archive_region,
    find_header,
    find_region,
    mark_done,
    organize_region,
)
from .core.todo import is_todo_line, parse_todo
from .ports.document import TodoDocument

logger = logging.getLogger(__name__)


def get_document(config: Config, path: Path | str | None = None) -> TextFileDocument:
    """Resolve the TODO document from an explicit path or the config."""
    target = path or config.todo_file
    if not target:
        raise ValueError("No TODO file given and TODO_FILE is not configured")
    return TextFileDocument(target)


def get_archive(config: Config, path: Path | str | None = None) -> TextFileDocument | None:
    """Resolve the archive document, or None to archive in place."""
    target = path or config.archive_file
    return TextFileDocument(target) if target else None


def locate_region(
    lines: list[str],
    line: int | None = None,
    max_lines: int = MAX_REGION_LINES,
) -> tuple[int, int]:
    """Region around a 0-based line, or the first region in the document."""
    index = line if line is not None else find_header(lines, max_lines)
    start, end = find_region(lines, index, max_lines)
    logger.debug(f"TODO region spans lines {start + 1}-{end}")
    return start, end


def sort_todos(
    doc: TodoDocument,
    now: datetime,
    line: int | None = None,
    max_lines: int = MAX_REGION_LINES,
) -> list[str]:
    """Organize the region and return its new lines."""
    lines = doc.read_lines()
    start, end = locate_region(lines, line, max_lines)
    region = organize_region(lines[start:end], now)
    doc.write_lines(lines[:start] + region + lines[end:])
    logger.info(f"Sorted {len(region)} lines in TODO region at line {start + 1}")
    return region


def toggle_done(doc: TodoDocument, now: datetime, line: int) -> tuple[str, bool]:
    """Mark a line done on today's weekday, or pending again if already done."""
    lines = doc.read_lines()
    if not 0 <= line < len(lines):
        raise IndexError(f"Line {line + 1} is outside the document")

    new_line, marked = mark_done(lines[line], now.weekday(), now)
    lines[line] = new_line
    doc.write_lines(lines)
    logger.info(f"{'Marked' if marked else 'Unmarked'} done at line {line + 1}")
    return new_line, marked


def _retime(
    doc: TodoDocument,
    now: datetime,
    line: int | None,
    is_starting: bool,
    max_lines: int,
) -> list[int]:
    lines = doc.read_lines()
    start, end = locate_region(lines, line, max_lines)
    active = line - start if line is not None else None
    region, started = apply_timing(lines[start:end], now, active, is_starting)
    doc.write_lines(lines[:start] + region + lines[end:])
    return [start + i for i in started]


def start_timing(
    doc: TodoDocument,
    now: datetime,
    line: int,
    max_lines: int = MAX_REGION_LINES,
) -> list[int]:
    """
    Start timing a line, stopping any other timer in its region.

    Returns: 0-based document indices of the lines now being timed
    """
    started = _retime(doc, now, line, True, max_lines)
    if started:
        logger.info(f"Started timer on line {started[0] + 1} at {now:%H:%M}")
    else:
        logger.info(f"Line {line + 1} is not a pending TODO, no timer started")
    return started


def stop_timing(
    doc: TodoDocument,
    now: datetime,
    line: int | None = None,
    max_lines: int = MAX_REGION_LINES,
) -> int:
    """
    Stop every running timer in the region, logging time spent.

    Returns: number of timers stopped
    """
    lines = doc.read_lines()
    start, end = locate_region(lines, line, max_lines)
    running = 0
    for text in lines[start:end]:
        todo = parse_todo(text, now)
        if todo is not None and todo.start is not None:
            running += 1

    _retime(doc, now, line, False, max_lines)
    logger.info(f"Stopped {running} timer(s) at {now:%H:%M}")
    return running


def archive_todos(
    doc: TodoDocument,
    line: int | None = None,
    archive: TodoDocument | None = None,
    max_lines: int = MAX_REGION_LINES,
) -> list[str]:
    """
    Move completed todos out of the region.

    The region keeps its header and pending todos. Completed lines, under a
    copy of the header, go to `archive` when given, otherwise they are
    written below the region in the same document.

    Returns: the archived lines (empty if nothing was completed)
    """
    lines = doc.read_lines()
    start, end = locate_region(lines, line, max_lines)
    kept, archived = archive_region(lines[start:end])

    if not any(is_todo_line(text) for text in archived):
        logger.info("No completed todos to archive")
        return []

    if archive is not None:
        archive.append_lines(archived)
        doc.write_lines(lines[:start] + kept + lines[end:])
    else:
        doc.write_lines(lines[:start] + kept + [""] + archived + lines[end:])
    logger.info(f"Archived {len(archived)} lines from TODO region at line {start + 1}")
    return archived
