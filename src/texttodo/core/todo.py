"""Pure TODO line parsing and rendering - no I/O dependencies."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time

DAY_LETTERS = ["M", "T", "W", "R", "F", "S", "N"]  # Mon..Sun
ANNOTATION_MARKER = "##"
ANNOTATION_COLUMN = 65

TODO_LINE_RE = re.compile(r"^[MTWRFSN*] ")

# Inline tokens. Each one swallows its leading whitespace so removing it
# leaves the surrounding words joined by a single space.
_NUMBER = r"(\d+(?:\.\d+)?)"
SPENT_RE = re.compile(r"(?:^|\s+)\+" + _NUMBER + r"(m|hr)(?=\s|$)")
DURATION_RE = re.compile(r"(?:^|\s+)" + _NUMBER + r"(m|hrs?)(?=\s|$)")
POINTS_RE = re.compile(r"(?:^|\s+)" + _NUMBER + r"c(?=\s|$)")
DUE_DATE_RE = re.compile(r"(?:^|\s+)<=(\d{1,2})/(\d{1,2})(?=\s|$)")
START_TIME_RE = re.compile(r"(?:^|\s+)@(\d{1,2}):(\d{2})(?=\s|$)")

# Inside the annotation comment the start time follows "##" directly.
ANNOTATED_START_RE = re.compile(r"(?:^|\s)@(\d{1,2}):(\d{2})(?=\s|$)")


class NotATodoLine(ValueError):
    """Raised when a line does not start with a TODO marker."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Not a TODO line: {line!r}")


@dataclass
class Todo:
    """One parsed TODO line."""

    day_number: int = -1  # -1 pending, 0..6 weekday it was completed on
    desc: str = ""
    duration: float | None = None  # minutes
    due_date: date | None = None
    days_left: int | None = None
    start: time | None = None
    spent_minutes: float | None = None
    points: float | None = None

    def is_done(self) -> bool:
        return self.day_number >= 0

    def is_elapsed(self) -> bool:
        """Due today or already overdue."""
        return self.days_left is not None and self.days_left < 1

    def has_completion_rate(self) -> bool:
        return self.days_left is not None and self.duration is not None

    def completion_rate(self) -> float:
        """Minutes per day needed to finish before the due date."""
        if not self.has_completion_rate() or self.is_elapsed():
            return 0
        return self.duration / self.days_left

    def has_points_rate(self) -> bool:
        return self.points is not None and bool(self.duration)

    def points_rate(self) -> float:
        """Points earned per hour of estimated work."""
        if not self.has_points_rate():
            return 0
        return self.points / (self.duration / 60)


def is_todo_line(line: str) -> bool:
    return TODO_LINE_RE.match(line) is not None


def is_pending_todo_line(line: str) -> bool:
    return line.startswith("* ")


def _to_minutes(value: str, unit: str) -> float:
    minutes = float(value)
    if unit.startswith("hr"):
        minutes *= 60
    return minutes


def _cut(text: str, match: re.Match) -> str:
    rest = text[match.end() :]
    if match.start() == 0:
        # A leading token leaves no separator to keep
        rest = rest.lstrip()
    return text[: match.start()] + rest


def _parse_start(match: re.Match | None) -> time | None:
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return time(hour, minute)


def parse_todo(line: str, now: datetime | None = None) -> Todo | None:
    """
    Parse a TODO line into a Todo.

    Returns None when the line does not start with a TODO marker. Tokens
    that do not parse cleanly are left in the description.
    """
    if not is_todo_line(line):
        return None
    now = now or datetime.now()

    todo = Todo()
    if line[0] != "*":
        todo.day_number = DAY_LETTERS.index(line[0])

    text = line[2:]
    annotations = ""
    if ANNOTATION_MARKER in text:
        marker = text.index(ANNOTATION_MARKER)
        annotations = text[marker + len(ANNOTATION_MARKER) :]
        text = text[:marker]

    # Cut from the end so earlier match offsets stay valid
    for match in reversed(list(SPENT_RE.finditer(text))):
        todo.spent_minutes = (todo.spent_minutes or 0) + _to_minutes(match.group(1), match.group(2))
        text = _cut(text, match)

    match = DURATION_RE.search(text)
    if match:
        todo.duration = _to_minutes(match.group(1), match.group(2))
        text = _cut(text, match)

    match = POINTS_RE.search(text)
    if match:
        todo.points = float(match.group(1))
        text = _cut(text, match)

    match = DUE_DATE_RE.search(text)
    if match:
        try:
            todo.due_date = date(now.year, int(match.group(1)), int(match.group(2)))
        except ValueError:
            pass  # impossible month/day stays in the description
        else:
            todo.days_left = (todo.due_date - now.date()).days
            text = _cut(text, match)

    match = START_TIME_RE.search(text)
    todo.start = _parse_start(match)
    if todo.start is not None:
        text = _cut(text, match)
    else:
        todo.start = _parse_start(ANNOTATED_START_RE.search(annotations))

    todo.desc = text.rstrip()
    return todo


def _trim_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_minutes(minutes: float) -> str:
    """Render minutes as '45m', '1hr' or '2.5hr'."""
    if minutes >= 90 or minutes == 60:
        return _trim_number(minutes / 60) + "hr"
    return f"{int(minutes)}m"


def format_points(points: float) -> str:
    return _trim_number(points) + "c"


def strip_annotations(line: str) -> str:
    """Remove the trailing '##' comment, if any."""
    if ANNOTATION_MARKER in line:
        return line[: line.index(ANNOTATION_MARKER)].rstrip()
    return line


def format_annotations(line: str, annotations: list[str]) -> str:
    """Replace the line's annotation comment with the given annotations."""
    line = strip_annotations(line)
    return f"{line.ljust(ANNOTATION_COLUMN)} {ANNOTATION_MARKER}{' '.join(annotations)}"


def format_todo(todo: Todo) -> str:
    """Render a Todo as canonical text, recomputing its annotations."""
    line = f"{DAY_LETTERS[todo.day_number]} " if todo.is_done() else "* "
    line += todo.desc

    if todo.duration is not None:
        line += " " + format_minutes(todo.duration)
    if todo.spent_minutes is not None:
        line += " +" + format_minutes(todo.spent_minutes)
    if todo.points is not None:
        line += " " + format_points(todo.points)
    if todo.due_date is not None:
        line += f" <={todo.due_date.month}/{todo.due_date.day}"

    # Done lines carry no annotations
    if todo.is_done():
        return line

    annotations = []
    if todo.start is not None:
        annotations.append(f"@{todo.start.hour}:{todo.start.minute:02d}")
    if todo.is_elapsed():
        annotations.append("ELAPSED!")
    elif todo.has_completion_rate():
        annotations.append(f"{format_minutes(todo.completion_rate())}/d")
    if todo.has_points_rate():
        annotations.append(f"{round(todo.points_rate())}c/hr")

    return format_annotations(line, annotations) if annotations else line
