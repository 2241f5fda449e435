"""Configuration management for text-todo."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.region import MAX_REGION_LINES

logger = logging.getLogger(__name__)

TEXTTODO_HOME = Path(os.environ.get("TEXTTODO_HOME", Path.home() / "texttodo"))
CONFIG_FILE = TEXTTODO_HOME / "config" / "texttodo.conf"


@dataclass
class Config:
    """text-todo configuration."""

    todo_file: str = ""
    archive_file: str = ""
    timezone: str = ""  # empty = system local time
    max_region_lines: int = MAX_REGION_LINES


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path = CONFIG_FILE) -> Config:
    """Load configuration from a texttodo.conf file."""
    config = Config()

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "todo_file":
                config.todo_file = value
            case "archive_file":
                config.archive_file = value
            case "timezone":
                config.timezone = value
            case "max_region_lines":
                try:
                    lines = int(value)
                except ValueError:
                    lines = 0
                if lines > 0:
                    config.max_region_lines = lines
                else:
                    logger.warning(f"Ignoring invalid MAX_REGION_LINES: {value!r}")
            case _:
                logger.warning(f"Unknown config key: {key}")

    return config


def now_for(config: Config) -> datetime:
    """Current wall-clock time in the configured timezone, as a naive datetime."""
    if config.timezone:
        try:
            return datetime.now(ZoneInfo(config.timezone)).replace(tzinfo=None)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {config.timezone!r}, using local time")
    return datetime.now()
