"""Rich-based console output utilities.

This module provides colored terminal output functions and the per-step
busy indicator shown while external commands run.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from snapp import __version__

custom_theme = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "header": "bold magenta",
        "highlight": "bold white",
    }
)

# Global console instances
console = Console(theme=custom_theme)
console_err = Console(theme=custom_theme, stderr=True)

SUCCESS_GLYPH = "✔"
FAILURE_GLYPH = "✖"


def print_error(message: str) -> None:
    """Print error message in red.

    Args:
        message: Error message to display
    """
    from snapp.utils.logging import log_message

    console_err.print(f"[error][[ERROR]][/error] [red]{escape(message)}[/red]")
    log_message(f"ERROR: {message}")


def print_success(message: str) -> None:
    """Print success message in green.

    Args:
        message: Success message to display
    """
    from snapp.utils.logging import log_message

    console.print(f"[success][[SUCCESS]][/success] [green]{escape(message)}[/green]")
    log_message(f"SUCCESS: {message}")


def print_warning(message: str) -> None:
    """Print warning message in yellow.

    Args:
        message: Warning message to display
    """
    from snapp.utils.logging import log_message

    console.print(f"[warning][[WARNING]][/warning] [yellow]{escape(message)}[/yellow]")
    log_message(f"WARNING: {message}")


def print_info(message: str) -> None:
    """Print info message in blue/cyan.

    Args:
        message: Info message to display
    """
    from snapp.utils.logging import log_message

    console.print(f"[info][[INFO]][/info] [cyan]{escape(message)}[/cyan]")
    log_message(f"INFO: {message}")


def print_header(title: str) -> None:
    """Print section header in magenta."""
    console.print()
    console.print(f"[header]=== {title} ===[/header]")
    console.print()


def show_version() -> None:
    """Display version information."""
    from snapp import DEFAULT_TEMPLATE_SOURCE

    console.print(f"[bold]SNAPP[/bold] v{__version__}")
    console.print()
    console.print("Requirements:")
    console.print("  - git")
    console.print("  - npm")
    console.print(f"Default template: {DEFAULT_TEMPLATE_SOURCE}")
    console.print()


class StepIndicator:
    """Outcome holder for a single :func:`step_status` block.

    Attributes:
        label: Text shown next to the spinner and the final glyph
        succeeded: None while running, then True or False
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self.succeeded: bool | None = None

    def succeed(self) -> None:
        self.succeeded = True

    def fail(self) -> None:
        self.succeeded = False

    def render(self) -> None:
        """Print the final status line for this step."""
        from snapp.utils.logging import log_message

        if self.succeeded:
            console.print(
                f"[success]{SUCCESS_GLYPH}[/success] [green]{escape(self.label)}[/green]"
            )
            log_message(f"STEP OK: {self.label}")
        else:
            console.print(f"[error]{FAILURE_GLYPH}[/error] {escape(self.label)}")
            log_message(f"STEP FAILED: {self.label}")


@contextmanager
def step_status(label: str) -> Iterator[StepIndicator]:
    """Show a busy spinner for the duration of one step.

    The spinner is stopped and the final status line printed on every exit
    path. A block that raises is always reported as failed; a block that
    finishes without calling ``succeed()`` or ``fail()`` counts as succeeded.

    Args:
        label: Step label, shown as ``<label>...`` while running

    Yields:
        StepIndicator used to mark the outcome
    """
    indicator = StepIndicator(label)
    try:
        with console.status(f"{escape(label)}...", spinner="dots"):
            yield indicator
    except BaseException:
        indicator.fail()
        indicator.render()
        raise
    if indicator.succeeded is None:
        indicator.succeed()
    indicator.render()


__all__ = [
    "console",
    "console_err",
    "custom_theme",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "show_version",
    "StepIndicator",
    "step_status",
]
