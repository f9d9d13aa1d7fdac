"""Course progression engine for an LMS course player."""

__version__ = "0.1.0"
