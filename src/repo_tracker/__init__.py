"""Repository Tracker - keep a local store in sync with tracked GitHub repositories."""

__version__ = "0.1.0"
