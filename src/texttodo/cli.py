"""text-todo CLI - TODO lists in plain text files."""

import json
import logging
import sys
from functools import wraps

import click

from .config import load_config, now_for
from .core.region import NoRegionFound
from .core.todo import NotATodoLine, format_minutes, parse_todo
from .workflows import (
    archive_todos,
    get_archive,
    get_document,
    sort_todos,
    start_timing,
    stop_timing,
    toggle_done,
)

file_argument = click.argument("file", required=False, type=click.Path(dir_okay=False))


def line_option(required: bool):
    return click.option(
        "--line",
        "-l",
        type=click.IntRange(min=1),
        required=required,
        help="1-based line number inside the TODO region",
    )


def _index(line: int | None) -> int | None:
    return line - 1 if line is not None else None


def handle_errors(f):
    """Turn expected failures into an error message and exit status 1."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (NotATodoLine, NoRegionFound, FileNotFoundError, IndexError, ValueError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(package_name="text-todo")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """text-todo - TODO lists in plain text files."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command("sort")
@file_argument
@line_option(required=False)
@handle_errors
def sort_cmd(file: str | None, line: int | None):
    """Sort a TODO region by priority and refresh its annotations."""
    config = load_config()
    doc = get_document(config, file)
    region = sort_todos(doc, now_for(config), _index(line), config.max_region_lines)
    for text in region:
        click.echo(text)


@main.command()
@file_argument
@line_option(required=True)
@handle_errors
def done(file: str | None, line: int):
    """Mark a TODO line done, or pending again."""
    config = load_config()
    doc = get_document(config, file)
    new_line, marked = toggle_done(doc, now_for(config), _index(line))
    click.echo("Marked done" if marked else "Unmarked done")
    click.echo(new_line)


@main.command()
@file_argument
@line_option(required=True)
@handle_errors
def start(file: str | None, line: int):
    """Start timing a TODO line, stopping any running timer."""
    config = load_config()
    doc = get_document(config, file)
    started = start_timing(doc, now_for(config), _index(line), config.max_region_lines)
    if not started:
        click.echo(f"Line {line} is not a pending TODO.", err=True)
        sys.exit(1)
    click.echo(f"Timing line {started[0] + 1}")


@main.command()
@file_argument
@line_option(required=False)
@handle_errors
def stop(file: str | None, line: int | None):
    """Stop running timers and add the time to spent."""
    config = load_config()
    doc = get_document(config, file)
    stopped = stop_timing(doc, now_for(config), _index(line), config.max_region_lines)
    if not stopped:
        click.echo("No timers running.")
        return
    click.echo(f"Stopped {stopped} timer(s)")


@main.command()
@file_argument
@line_option(required=False)
@click.option("--to", "archive_path", type=click.Path(dir_okay=False), help="Archive file")
@handle_errors
def archive(file: str | None, line: int | None, archive_path: str | None):
    """Move completed todos out of a TODO region."""
    config = load_config()
    doc = get_document(config, file)
    archived = archive_todos(doc, _index(line), get_archive(config, archive_path), config.max_region_lines)
    if not archived:
        click.echo("Nothing to archive.")
        return
    click.echo(f"Archived {len(archived)} lines")


@main.command()
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@handle_errors
def show(text: str, as_json: bool):
    """Parse a single TODO line and show its fields."""
    todo = parse_todo(text, now_for(load_config()))
    if todo is None:
        raise NotATodoLine(text)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "day_number": todo.day_number,
                    "desc": todo.desc,
                    "duration": todo.duration,
                    "due_date": todo.due_date.isoformat() if todo.due_date else None,
                    "days_left": todo.days_left,
                    "start": todo.start.strftime("%H:%M") if todo.start else None,
                    "spent_minutes": todo.spent_minutes,
                    "points": todo.points,
                    "done": todo.is_done(),
                    "elapsed": todo.is_elapsed(),
                    "completion_rate": (
                        todo.completion_rate() if todo.has_completion_rate() and not todo.is_elapsed() else None
                    ),
                },
                indent=2,
            )
        )
        return

    click.echo(f"{'done' if todo.is_done() else 'pending'}: {todo.desc}")
    if todo.duration is not None:
        click.echo(f"  duration: {format_minutes(todo.duration)}")
    if todo.spent_minutes is not None:
        click.echo(f"  spent:    {format_minutes(todo.spent_minutes)}")
    if todo.due_date is not None:
        click.echo(f"  due:      {todo.due_date:%b %d} ({todo.days_left}d left)")
    if todo.is_elapsed():
        click.echo("  ELAPSED!")
    elif todo.has_completion_rate():
        click.echo(f"  rate:     {format_minutes(todo.completion_rate())}/d")
