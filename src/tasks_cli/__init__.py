"""Personal task tracker: SQLite-backed task store with a small CLI."""

__version__ = "0.1.0"
