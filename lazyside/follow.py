"""Follow-the-editor synchronization for the docked session.

Planning is pure (``plan_follow``); ``FollowEngine`` applies a plan through
the tree-browser engine. Missing sessions or paths are silent no-ops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .host import TreeBrowserDeps
from .project import ProjectRootDetector, containing_directory, safe_detect
from .session import FOLLOW_EXPAND, FOLLOW_MODES, FOLLOW_OFF, FOLLOW_SELECT, Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FollowPlan:
    """Navigation target, directories to expand, and entry to select."""

    root: Path
    expand: tuple[Path, ...]
    select: Path


def ancestors_between(root: Path, path: Path) -> tuple[Path, ...]:
    """Return directories strictly between ``root`` and ``path``, outermost first."""
    if not path.is_relative_to(root) or path == root:
        return ()
    parts = path.relative_to(root).parts[:-1]
    out: list[Path] = []
    current = root
    for part in parts:
        current = current / part
        out.append(current)
    return tuple(out)


def plan_follow(mode: str, path: Path, project_root: Path | None) -> FollowPlan | None:
    """Compute what the session should show for ``path`` under ``mode``.

    A project root that does not contain ``path`` is ignored in favor of the
    file's own directory.
    """
    if mode not in FOLLOW_MODES:
        raise ValueError(f"unknown follow mode: {mode!r}")
    if mode == FOLLOW_OFF:
        return None
    target = path.resolve()
    root = project_root.resolve() if project_root is not None else None
    if root is None or target == root or not target.is_relative_to(root):
        root = target.parent
    if mode == FOLLOW_SELECT:
        return FollowPlan(root=root, expand=(), select=target)
    return FollowPlan(root=root, expand=ancestors_between(root, target), select=target)


class FollowEngine:
    """Drive a session so it shows the file the user is editing."""

    def __init__(
        self,
        mode: str,
        engine: TreeBrowserDeps,
        *,
        detect_project_root: ProjectRootDetector | None = None,
    ) -> None:
        if mode not in FOLLOW_MODES:
            raise ValueError(f"unknown follow mode: {mode!r}")
        self.mode = mode
        self.engine = engine
        self.detect_project_root = detect_project_root

    def _apply(self, session: Session, plan: FollowPlan) -> None:
        if session.root_path != plan.root:
            self.engine.navigate_to(session, plan.root)
        if self.mode == FOLLOW_EXPAND and plan.expand:
            self.engine.expand_to_entry(session, plan.select)
        self.engine.select_entry(session, plan.select)

    def sync_to_file(
        self,
        session: Session | None,
        path: Path | None,
        project_root: Path | None = None,
        *,
        force: bool = False,
    ) -> bool:
        """Show ``path`` in ``session`` per the configured mode.

        Unless ``force`` is set, nothing happens when the session already
        shows the same root and entry. A reopened panel passes ``force`` so
        expansion lost while it was hidden is restored.

        Returns True when the engine was asked to change anything.
        """
        if session is None or path is None or self.mode == FOLLOW_OFF:
            return False
        if project_root is None:
            project_root = safe_detect(self.detect_project_root, path)
        plan = plan_follow(self.mode, path, project_root)
        if plan is None:
            return False
        if not force and session.root_path == plan.root and session.current_entry == plan.select:
            return False
        logger.debug("following %s in %s (%s)", plan.select, plan.root, self.mode)
        self._apply(session, plan)
        return True

    def follow_project(
        self,
        session: Session | None,
        new_root: Path | None,
        active_file: Path | None,
    ) -> bool:
        """Re-root ``session`` after a project switch.

        When the event carries no root it is detected from ``active_file``,
        falling back to that file's directory. The active file is then
        selected (and revealed in expand mode) when it lies under the root.
        """
        if session is None:
            return False
        if new_root is None:
            new_root = safe_detect(self.detect_project_root, active_file)
        if new_root is None and active_file is not None:
            new_root = containing_directory(active_file)
        if new_root is None:
            return False
        root = new_root.resolve()
        if session.root_path != root:
            logger.debug("project switched; navigating side session to %s", root)
            self.engine.navigate_to(session, root)
        if active_file is None or self.mode == FOLLOW_OFF:
            return True
        target = active_file.resolve()
        if target == root or not target.is_relative_to(root):
            return True
        if self.mode == FOLLOW_EXPAND and ancestors_between(root, target):
            self.engine.expand_to_entry(session, target)
        self.engine.select_entry(session, target)
        return True
