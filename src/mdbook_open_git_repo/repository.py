"""Locating the git working tree and chapter files inside it."""

import logging
from pathlib import Path, PurePosixPath
from typing import Optional

from .exceptions import PathOutsideRepositoryError, RepositoryRootNotFoundError

logger = logging.getLogger(__name__)

GIT_MARKER = '.git'


def find_repo_root(start_path: Path) -> Path:
    """Find the working tree root containing start_path.

    Checks start_path and then each parent for a .git entry. A .git file
    counts as well as a directory, since worktrees and submodules use one.
    The returned path is canonical.
    """
    current = Path(start_path).resolve()

    for candidate in (current, *current.parents):
        if (candidate / GIT_MARKER).exists():
            return candidate

    raise RepositoryRootNotFoundError(Path(start_path))


def relativize_chapter_path(
    repo_root: Path,
    src_root: Path,
    chapter_path: Optional[str],
) -> Optional[PurePosixPath]:
    """Map a chapter's src-relative path to a path relative to the repository.

    Returns None when the chapter has no path or its file cannot be resolved
    on disk (draft and generated chapters); such chapters are skipped.
    repo_root must be canonical, as returned by find_repo_root.
    """
    if not chapter_path:
        return None

    try:
        path = (src_root / chapter_path).resolve(strict=True)
    except (OSError, RuntimeError):
        logger.debug("Skipping %s: no file on disk", chapter_path)
        return None

    try:
        relpath = path.relative_to(repo_root)
    except ValueError:
        raise PathOutsideRepositoryError(path, repo_root) from None

    logger.debug("Chapter path: %s", path)
    logger.debug("Relative path: %s", relpath)
    return PurePosixPath(relpath.as_posix())
