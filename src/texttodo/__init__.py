"""text-todo - a TODO list micro-language for plain text files."""

__version__ = "0.1.0"
