"""Discovery of git repositories and their modules inside a workspace."""

from __future__ import annotations

from pathlib import Path

from commit_helper.git_ops import get_branch_name
from commit_helper.logging import get_logger
from commit_helper.models import RepositoryEntry

logger = get_logger("locator")

GIT_DIR = ".git"


def is_repository(path: Path) -> bool:
    """Whether `path` holds git metadata (a .git directory, or a .git file for worktrees)."""
    return (path / GIT_DIR).exists()


def find_repositories(root_dir: str | Path) -> list[RepositoryEntry]:
    """Find every git repository below `root_dir`, nested ones included.

    The walk is depth-first. It skips .git directories and does not follow
    symlinks. `root_dir` itself is not reported.

    Args:
        root_dir: Directory to scan.

    Returns:
        Repositories in discovery order.

    Raises:
        OSError: If a directory cannot be read. The scan is aborted.
    """
    root = Path(root_dir).resolve()
    repositories: list[RepositoryEntry] = []

    def _walk(path: Path) -> None:
        for entry in path.iterdir():
            if entry.name == GIT_DIR or entry.is_symlink() or not entry.is_dir():
                continue
            if is_repository(entry):
                branch = get_branch_name(entry)
                logger.debug("Found repository %s on %s", entry, branch)
                repositories.append(
                    RepositoryEntry(display_label=f"{entry.name} ({branch})", path=entry)
                )
            _walk(entry)

    _walk(root)
    logger.debug("Scan of %s found %d repositories", root, len(repositories))
    return repositories


def list_modules(repo_dir: str | Path) -> list[Path]:
    """List the module directories of a repository.

    Args:
        repo_dir: Root of the repository.

    Returns:
        Absolute paths of the immediate child directories, .git excluded,
        in directory-read order.
    """
    repo = Path(repo_dir).resolve()
    return [
        entry for entry in repo.iterdir()
        if entry.is_dir() and entry.name != GIT_DIR
    ]
