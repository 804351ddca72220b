"""Notebook storage for hierarchical memos kept in a single SQLite file."""

__version__ = "0.11.0"