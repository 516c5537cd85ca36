"""Exceptions surfaced to the user by side-panel commands."""

from __future__ import annotations


class UserFacingError(Exception):
    """Command refused in the current context; message is shown verbatim."""
