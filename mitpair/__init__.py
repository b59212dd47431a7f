"""Pair and mob programming helpers for git: authors, co-authors, relates-to and hooks."""

__version__ = "0.1.0"