"""Ports - interfaces/protocols for external dependencies."""

from .document import TodoDocument

__all__ = [
    "TodoDocument",
]
