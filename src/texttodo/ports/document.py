"""Line-oriented document interface."""

from typing import Protocol


class TodoDocument(Protocol):
    """Interface for a text document holding one or more TODO regions."""

    def read_lines(self) -> list[str]:
        """Read the document as a list of lines without line endings."""
        ...

    def write_lines(self, lines: list[str]) -> None:
        """Replace the whole document with the given lines."""
        ...

    def append_lines(self, lines: list[str]) -> None:
        """Append lines to the end of the document, creating it if needed."""
        ...
