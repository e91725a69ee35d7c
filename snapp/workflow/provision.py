"""Project provisioning pipeline.

Runs the fixed sequence that turns an empty path into a ready project:

    1. Clone the project template (never into a non-empty directory)
    2. Check that git is installed
    3. git init + rename the branch to main
    4. npm ci
    5. git add + initial commit (hooks skipped)
    6. Print next steps

Steps 1 and 2 always abort the pipeline on failure. For steps 3-5 the
``fail_fast`` setting decides whether the first failure aborts or the
remaining steps still run; in both cases a failure ends in StepFailedError.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from snapp import DEFAULT_BRANCH
from snapp.config.settings import Settings
from snapp.integrations.git import GIT_BINARY
from snapp.integrations.shell import CommandRunner
from snapp.integrations.template import TemplateFetcher
from snapp.utils.console import (
    console,
    print_error,
    print_warning,
    step_status,
)
from snapp.utils.errors import (
    DestinationNotEmptyError,
    MissingDependencyError,
    StepFailedError,
    TemplateFetchError,
)
from snapp.workflow.steps import CLONE_LABEL, StepResult, build_steps

logger = logging.getLogger(__name__)


def next_steps_message(name: str, succeeded: bool = True) -> str:
    """Build the closing message naming the follow-up commands."""
    title = "Success!" if succeeded else "Finished with errors."
    return (
        f"\n{title}\n"
        "\nNext steps:"
        f"\n  cd {name}"
        "\n  git remote add origin <your-repo-url>"
        f"\n  git push -u origin {DEFAULT_BRANCH}"
    )


class Provisioner:
    """Create a new project directory from the configured template.

    Collaborators are injected so tests can replace the network and
    subprocess layers:

    Args:
        settings: Effective configuration (defaults when omitted)
        fetcher: Template fetcher; built from settings when omitted
        runner: External command runner; a real CommandRunner when omitted
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        fetcher: TemplateFetcher | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.fetcher = fetcher or TemplateFetcher(
            self.settings.cache_path,
            use_cache=self.settings.template_cache,
            timeout=self.settings.fetch_timeout,
        )
        self.runner = runner or CommandRunner()

    def provision(self, target_path: str | Path) -> None:
        """Run the whole pipeline against ``target_path``.

        Every outcome is reported on the console before an error is raised,
        so callers only need the exception for the exit status.

        Raises:
            DestinationNotEmptyError: ``target_path`` already has files
            TemplateFetchError: The template could not be fetched
            MissingDependencyError: git is not installed
            StepFailedError: A shell step exited non-zero
        """
        name = str(target_path)
        target = Path(target_path)
        logger.info("Provisioning %s from %s", name, self.settings.template_source)

        self._fetch_template(target)

        if not self.runner.which(GIT_BINARY):
            print_error("Please ensure Git is installed, then try again.")
            raise MissingDependencyError(GIT_BINARY)

        failed: list[StepResult] = []
        for step in build_steps():
            result = self.run_step(
                step.label,
                step.commands,
                cwd=target,
                discard_output=step.discard_output,
            )
            if result.succeeded:
                continue
            failed.append(result)
            if self.settings.fail_fast:
                raise StepFailedError([result.label], result.returncode)

        if failed:
            print_warning(f"Failed steps: {', '.join(r.label for r in failed)}")
            self._print_summary(name, succeeded=False)
            raise StepFailedError([r.label for r in failed], failed[-1].returncode)

        self._print_summary(name, succeeded=True)

    def _fetch_template(self, target: Path) -> None:
        try:
            with step_status(CLONE_LABEL):
                self.fetcher.fetch(self.settings.template_source, target)
        except DestinationNotEmptyError:
            print_error("Destination directory is not empty. Not proceeding.")
            raise
        except TemplateFetchError as e:
            print_error(str(e))
            print_error(f"Error: {e.code}")
            raise

    def run_step(
        self,
        label: str,
        commands: Sequence[Sequence[str]],
        cwd: str | Path | None = None,
        *,
        discard_output: bool = False,
    ) -> StepResult:
        """Run one labeled step under a busy indicator.

        Commands run in order until one exits non-zero. Nothing is retried
        and no exception escapes for a failing command; the result says
        what happened.
        """
        returncode = 0
        with step_status(label) as status:
            for argv in commands:
                returncode = self.runner.run(argv, cwd=cwd, discard_output=discard_output)
                if returncode != 0:
                    break
            if returncode == 0:
                status.succeed()
            else:
                status.fail()
        return StepResult(label=label, succeeded=returncode == 0, returncode=returncode)

    def _print_summary(self, name: str, *, succeeded: bool) -> None:
        style = "green" if succeeded else "yellow"
        console.print(
            next_steps_message(name, succeeded),
            style=style,
            markup=False,
            highlight=False,
        )
        logger.info("Provisioning of %s finished (success=%s)", name, succeeded)


def provision(target_path: str | Path, settings: Settings | None = None) -> None:
    """Provision a new project at ``target_path`` with default collaborators."""
    Provisioner(settings).provision(target_path)


__all__ = [
    "Provisioner",
    "next_steps_message",
    "provision",
]
