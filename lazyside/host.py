"""Dependency bundles for the collaborators the side panel drives.

The window manager and the tree-browser engine belong to the host; the side
panel only calls into them through these callables. Each call re-reads live
host state, nothing here caches windows or sessions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .session import DockSpec, Session


@dataclass(frozen=True)
class WindowHostDeps:
    """Host window-manager primitives."""

    create_docked_window: Callable[[DockSpec], object]
    set_window_option: Callable[[object, str, object], None]
    list_visible_windows: Callable[[], list[object]]
    get_window_session: Callable[[object], Session | None]
    select_window: Callable[[object], None]
    selected_window: Callable[[], object | None]
    most_recently_used_window: Callable[[], object | None]
    delete_window: Callable[[object], None]
    set_window_width: Callable[[object, float], None]
    active_file: Callable[[], Path | None] = lambda: None


@dataclass(frozen=True)
class TreeBrowserDeps:
    """Extension points of the generic tree-browser engine.

    ``create_session`` receives the placement callable that opens the window
    the session is shown in, a callable choosing the window a file opened from
    the tree lands in, and an optional layout-change handler. The side panel
    passes ``None`` there because it already listens on the host's
    layout-changed event.

    Sessions and their ``window`` field belong to the engine:
    ``detach_session`` drops a session's window binding but keeps the session
    for a later ``resume_session``; ``destroy_session`` tears it down.
    """

    create_session: Callable[..., Session]
    resume_session: Callable[[Session, Callable[[], object]], None]
    navigate_to: Callable[[Session, Path], None]
    expand_to_entry: Callable[[Session, Path], None]
    select_entry: Callable[[Session, Path], None]
    current_session: Callable[[], Session | None]
    sessions: Callable[[], list[Session]]
    detach_session: Callable[[Session], None]
    destroy_session: Callable[[Session], None]
