"""Shell steps run after the template has been fetched.

Order matters: the template's ``prepare`` script (run by ``npm ci``)
installs git hooks into ``.git``, so the repository must exist before the
install step starts.
"""

from __future__ import annotations

from dataclasses import dataclass

from snapp import DEFAULT_BRANCH, INITIAL_COMMIT_MESSAGE
from snapp.integrations import git, npm

CLONE_LABEL = "Clone project template"
GIT_INIT_LABEL = "Initialize Git repo"
NPM_INSTALL_LABEL = "NPM install"
GIT_COMMIT_LABEL = "Git init commit"


@dataclass(frozen=True)
class ShellStep:
    """A labeled group of commands run as one step.

    Commands are chained like ``a && b``: the first non-zero exit status
    ends the step.

    Attributes:
        label: Text shown next to the step's status indicator
        commands: argv tuples, run in order
        discard_output: Send command output to the null device
    """

    label: str
    commands: tuple[tuple[str, ...], ...]
    discard_output: bool = False


@dataclass(frozen=True)
class StepResult:
    label: str
    succeeded: bool
    returncode: int = 0


def build_steps(
    branch: str = DEFAULT_BRANCH,
    commit_message: str = INITIAL_COMMIT_MESSAGE,
) -> list[ShellStep]:
    """Return the post-clone steps in execution order."""
    return [
        ShellStep(GIT_INIT_LABEL, git.init_repo_commands(branch)),
        ShellStep(NPM_INSTALL_LABEL, npm.install_commands(), discard_output=True),
        ShellStep(GIT_COMMIT_LABEL, git.initial_commit_commands(commit_message)),
    ]


__all__ = [
    "CLONE_LABEL",
    "GIT_INIT_LABEL",
    "NPM_INSTALL_LABEL",
    "GIT_COMMIT_LABEL",
    "ShellStep",
    "StepResult",
    "build_steps",
]
