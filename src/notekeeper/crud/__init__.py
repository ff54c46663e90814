"""Entity access: one module of plain functions per table."""

from . import categories, comments, notes, users

__all__ = ["categories", "comments", "notes", "users"]
