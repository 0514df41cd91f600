"""wimt (where is my time): session-based work time tracking."""

__version__ = "0.1.0"
