"""Project-root detection and root fallback resolution.

Detection failing is never an error: callers fall back to the file's own
directory, then to the working directory of the invoking context.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 0.25

ProjectRootDetector = Callable[[Path], "Path | None"]


def detect_git_project_root(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path | None:
    """Return the git work tree containing ``path``, or ``None``."""
    probe = path if path.is_dir() else path.parent
    if not probe.is_dir():
        return None
    try:
        proc = subprocess.run(
            ["git", "-C", str(probe), "rev-parse", "--show-toplevel"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except Exception:
        logger.debug("git root probe failed for %s", probe, exc_info=True)
        return None
    if proc.returncode != 0:
        return None

    lines = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
    if not lines:
        return None
    return Path(lines[0]).resolve()


def safe_detect(detect: ProjectRootDetector | None, path: Path | None) -> Path | None:
    """Run ``detect`` on ``path``, treating exceptions as "no project"."""
    if detect is None or path is None:
        return None
    try:
        root = detect(path)
    except Exception:
        logger.debug("project root detection raised for %s", path, exc_info=True)
        return None
    return root.resolve() if root is not None else None


def containing_directory(path: Path) -> Path:
    """Return ``path`` itself for directories, else its parent."""
    resolved = path.resolve()
    return resolved if resolved.is_dir() else resolved.parent


def resolve_panel_root(
    file_path: Path | None,
    *,
    explicit_root: Path | None = None,
    detect: ProjectRootDetector | None = None,
    cwd: Path | None = None,
) -> Path:
    """Pick the root a new side session is opened at.

    Order: explicit root, detected project root, the file's directory, the
    context working directory, the process working directory.
    """
    if explicit_root is not None:
        return explicit_root.resolve()
    detected = safe_detect(detect, file_path)
    if detected is not None:
        return detected
    if file_path is not None:
        return containing_directory(file_path)
    if cwd is not None:
        return cwd.resolve()
    return Path.cwd().resolve()
