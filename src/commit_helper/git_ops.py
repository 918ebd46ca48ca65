"""Git operations layer for commit-helper."""

from __future__ import annotations

from pathlib import Path

from git import Repo
from git.exc import CommandError, InvalidGitRepositoryError, NoSuchPathError

from commit_helper.logging import get_logger

logger = get_logger("git_ops")

UNKNOWN_BRANCH = "unknown"


class GitError(Exception):
    """Custom exception for git operation errors."""
    pass


def get_repo(path: str | Path = ".") -> Repo:
    """Get the git repository containing the given path.

    Args:
        path: Any path inside the repository. Defaults to current directory.

    Returns:
        The git Repo object.

    Raises:
        GitError: If the path is not inside a git repository.
    """
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        raise GitError(f"Not a git repository: {path}")


def get_repo_root(repo: Repo) -> Path:
    """Get the root directory of the repository."""
    return Path(repo.working_dir)


def get_branch_name(path: str | Path) -> str:
    """Get the current branch of the repository at `path`.

    Lookup failures never propagate: the branch is reported as "unknown"
    so a workspace scan can carry on.

    Args:
        path: Root of the repository working tree.

    Returns:
        The abbreviated HEAD reference, or "unknown".
    """
    try:
        repo = Repo(path)
        return repo.git.rev_parse("--abbrev-ref", "HEAD")
    except (InvalidGitRepositoryError, NoSuchPathError, CommandError, ValueError) as e:
        logger.debug("Branch lookup failed for %s: %s", path, e)
        return UNKNOWN_BRANCH


def create_commit(repo_path: str | Path, message: str) -> str:
    """Create a commit with the staged changes.

    The message is passed as a separate argument, never through a shell.

    Args:
        repo_path: Path to the repository.
        message: The commit message.

    Returns:
        The short hash of the new commit.

    Raises:
        GitError: If the commit fails.
    """
    repo = get_repo(repo_path)
    try:
        repo.git.commit("-m", message)
        return repo.git.rev_parse("HEAD", short=7)
    except CommandError as e:
        raise GitError(f"Failed to create commit: {e}")
