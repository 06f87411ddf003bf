"""TaskFlow: personal task tracking with local snapshot persistence."""

__version__ = "0.1.0"
