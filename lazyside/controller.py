"""Side-panel visibility state machine.

``VisibilityController`` is the entry point for user commands and host hooks.
Every call re-queries the host for the docked window; the controller holds
configuration and event subscriptions, never a window snapshot.

Toggle protocol, checked in order:

1. the active window shows a fullframe session: refuse with
   ``UserFacingError`` before touching anything;
2. a docked session is visible: close its window (and destroy the session
   unless ``reuse_session`` is set);
3. an engine-held docked session has no window: reopen and re-sync it;
4. otherwise create a new docked session and sync it to the active file.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from .config import SidePanelConfig
from .errors import UserFacingError
from .events import HostEvents
from .follow import FollowEngine
from .host import TreeBrowserDeps, WindowHostDeps
from .placement import WindowPlacementStrategy
from .project import (
    ProjectRootDetector,
    containing_directory,
    detect_git_project_root,
    resolve_panel_root,
    safe_detect,
)
from .registry import SessionRegistry
from .session import PLACEMENT_DOCKED, EditorContext, Session

logger = logging.getLogger(__name__)

HIDDEN = "hidden"
REUSED = "reused"
CREATED = "created"
SHOWN = "shown"


def _follows_into(file_path: Path | None, explicit_root: Path | None) -> bool:
    """An explicit root only follows files it contains."""
    if file_path is None:
        return False
    if explicit_root is None:
        return True
    return file_path.resolve().is_relative_to(explicit_root.resolve())


class VisibilityController:
    """Toggle, show and hide the single docked side session."""

    def __init__(
        self,
        config: SidePanelConfig,
        *,
        host: WindowHostDeps,
        engine: TreeBrowserDeps,
        events: HostEvents,
        detect_project_root: ProjectRootDetector | None = detect_git_project_root,
    ) -> None:
        self.config = config
        self.host = host
        self.engine = engine
        self.events = events
        self.detect_project_root = detect_project_root
        self.registry = SessionRegistry(host=host, engine=engine)
        self.placement = WindowPlacementStrategy(
            config,
            host,
            find_docked_window=self.registry.find_visible_docked_session,
        )
        self.follow = FollowEngine(
            config.follow_buffer_file,
            engine,
            detect_project_root=detect_project_root,
        )
        self.events.layout_changed.subscribe(self._on_layout_changed)
        if config.follow_project_switch:
            self.events.project_switched.subscribe(self._on_project_switched)

    def close(self) -> None:
        """Drop every host subscription held by this controller."""
        self.events.layout_changed.unsubscribe(self._on_layout_changed)
        self.events.project_switched.unsubscribe(self._on_project_switched)

    def _context_session(self, context: EditorContext) -> Session | None:
        if context.window is not None:
            return self.host.get_window_session(context.window)
        return self.engine.current_session()

    def _check_can_toggle(self, context: EditorContext) -> None:
        session = self._context_session(context)
        if session is not None and session.is_fullframe:
            logger.info("refusing side panel toggle over fullframe session at %s", session.root_path)
            raise UserFacingError("Cannot open a side panel here: a fullframe session occupies this window")

    def toggle(self, context: EditorContext | None = None) -> str:
        """Hide the visible side panel, or show one (reused or new).

        Returns ``"hidden"``, ``"reused"`` or ``"created"``.
        """
        context = context or EditorContext()
        self._check_can_toggle(context)
        if self.registry.find_visible_docked_session() is not None:
            self.hide()
            return HIDDEN
        return self._show_hidden(context)

    def show(self, context: EditorContext | None = None) -> str:
        """Make the side panel visible and synced; never hides it.

        Returns ``"shown"`` when it was already visible.
        """
        context = context or EditorContext()
        self._check_can_toggle(context)
        window = self.registry.find_visible_docked_session()
        if window is None:
            return self._show_hidden(context)
        session = self.host.get_window_session(window)
        if _follows_into(context.file_path, context.explicit_root):
            self.follow.sync_to_file(session, context.file_path, self._root_hint(context), force=True)
        self.host.select_window(window)
        return SHOWN

    def hide(self) -> bool:
        """Close the visible side panel; False when none was visible."""
        window = self.registry.find_visible_docked_session()
        if window is None:
            return False
        session = self.host.get_window_session(window)
        with self.placement.own_layout_change():
            self.host.delete_window(window)
        if session is None:
            return True
        if self.config.reuse_session:
            self.engine.detach_session(session)
            logger.debug("side panel hidden; keeping session at %s", session.root_path)
        else:
            self.engine.destroy_session(session)
            logger.debug("side panel hidden; destroyed session at %s", session.root_path)
        return True

    def _show_hidden(self, context: EditorContext) -> str:
        session = self.registry.hidden_docked_session()
        if session is not None:
            self.engine.resume_session(session, self.placement.open_docked)
            explicit_root = context.explicit_root
            if explicit_root is not None and session.root_path != explicit_root.resolve():
                self.engine.navigate_to(session, explicit_root.resolve())
            if _follows_into(context.file_path, context.explicit_root):
                self.follow.sync_to_file(session, context.file_path, self._root_hint(context), force=True)
            logger.debug("side panel reused at %s", session.root_path)
            return REUSED

        root = resolve_panel_root(
            context.file_path,
            explicit_root=context.explicit_root,
            detect=self.detect_project_root,
            cwd=context.cwd,
        )
        session = self.engine.create_session(
            root,
            placement=self.placement.open_docked,
            on_file_open=self.placement.window_for_file,
            on_layout_change=None,
            placement_kind=PLACEMENT_DOCKED,
        )
        if _follows_into(context.file_path, context.explicit_root):
            self.follow.sync_to_file(session, context.file_path, self._root_hint(context, root))
        logger.debug("side panel created at %s", root)
        return CREATED

    def _root_hint(self, context: EditorContext, root: Path | None = None) -> Path | None:
        if context.explicit_root is not None:
            return context.explicit_root.resolve()
        if root is not None:
            return root
        if context.file_path is None:
            return None
        # Detect once; the file directory stands in for "no project".
        detected = safe_detect(self.detect_project_root, context.file_path)
        return detected if detected is not None else containing_directory(context.file_path)

    def follow_editor(self, context: EditorContext) -> bool:
        """Buffer-switch hook: sync the visible side panel to the active file."""
        session = self.registry.visible_docked_session()
        return self.follow.sync_to_file(session, context.file_path, self._root_hint(context))

    def set_follow_project_switch(self, enabled: bool) -> None:
        """Single setter path for the project-switch subscription."""
        enabled = bool(enabled)
        if enabled:
            self.events.project_switched.subscribe(self._on_project_switched)
        else:
            self.events.project_switched.unsubscribe(self._on_project_switched)
        if enabled != self.config.follow_project_switch:
            self.config = replace(self.config, follow_project_switch=enabled)
            self.placement.config = self.config
            logger.debug("follow project switch %s", "enabled" if enabled else "disabled")

    def _on_project_switched(self, new_root: Path | None = None) -> None:
        session = self.registry.visible_docked_session()
        if session is None:
            return
        self.follow.follow_project(session, new_root, self.host.active_file())

    def _on_layout_changed(self) -> None:
        self.placement.reassert_width()
