"""Adapters - I/O implementations of ports."""

from .text_file import TextFileDocument

__all__ = [
    "TextFileDocument",
]
