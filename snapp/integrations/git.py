"""Git operations for SNAPP.

Commands are returned as argv tuples and executed by
:class:`snapp.integrations.shell.CommandRunner` inside the new project.
"""

from pathlib import Path

GIT_BINARY = "git"


def find_repo_root() -> Path | None:
    """Find the git repository root by looking for a .git directory.

    Traverses from the current working directory upward.

    Returns:
        Path to repository root, or None if not in a repository
    """
    current = Path.cwd()
    while True:
        if (current / ".git").exists():
            return current

        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    return None


def init_repo_commands(branch: str) -> tuple[tuple[str, ...], ...]:
    """Commands that create a quiet repository and rename its default branch.

    Args:
        branch: Name for the initial branch

    Returns:
        ``git init -q`` followed by ``git branch -m <branch>``
    """
    return (
        (GIT_BINARY, "init", "-q"),
        (GIT_BINARY, "branch", "-m", branch),
    )


def initial_commit_commands(message: str) -> tuple[tuple[str, ...], ...]:
    """Commands that stage everything and commit without running hooks.

    ``-n`` (no verify) skips the pre-commit hook the template installs
    during ``npm ci``.
    """
    return (
        (GIT_BINARY, "add", "."),
        (GIT_BINARY, "commit", "-m", message, "-q", "-n"),
    )


__all__ = [
    "GIT_BINARY",
    "find_repo_root",
    "init_repo_commands",
    "initial_commit_commands",
]
