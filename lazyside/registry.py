"""Live discovery of the docked side session.

Nothing is stored here: every lookup scans the host's current windows or the
engine's current session list.
"""

from __future__ import annotations

from dataclasses import dataclass

from .host import TreeBrowserDeps, WindowHostDeps
from .session import Session


@dataclass(frozen=True)
class SessionRegistry:
    """Find docked sessions by their creation-time placement tag."""

    host: WindowHostDeps
    engine: TreeBrowserDeps

    def find_visible_docked_session(self) -> object | None:
        """Return the first visible window showing a docked session."""
        for window in self.host.list_visible_windows():
            session = self.host.get_window_session(window)
            if session is not None and session.is_docked:
                return window
        return None

    def visible_docked_session(self) -> Session | None:
        """Return the docked session shown in a visible window, if any."""
        window = self.find_visible_docked_session()
        if window is None:
            return None
        return self.host.get_window_session(window)

    def hidden_docked_session(self) -> Session | None:
        """Return an engine-held docked session that has no visible window."""
        visible = self.host.list_visible_windows()
        for session in self.engine.sessions():
            if not session.is_docked:
                continue
            if session.window is None or session.window not in visible:
                return session
        return None
