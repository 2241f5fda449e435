"""Plain text file document adapter."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class TextFileDocument:
    """
    Plain text file on disk.

    Implements TodoDocument protocol. Lines are read without their endings
    and written back joined by newlines, with a trailing newline.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def read_lines(self) -> list[str]:
        """Read the file's lines. Raises FileNotFoundError if missing."""
        return self.path.read_text().splitlines()

    def write_lines(self, lines: list[str]) -> None:
        """Overwrite the file with the given lines."""
        self.path.write_text("\n".join(lines) + "\n")
        logger.debug(f"Wrote {len(lines)} lines to {self.path}")

    def append_lines(self, lines: list[str]) -> None:
        """Append lines, separated from existing content by a blank line."""
        content = "\n".join(lines) + "\n"
        if self.path.exists():
            existing = self.path.read_text().rstrip("\n")
            if existing:
                content = f"{existing}\n\n{content}"
        else:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(content)
        logger.debug(f"Appended {len(lines)} lines to {self.path}")
