"""CLI interface for SNAPP.

This module provides the Typer-based command-line interface:

    snapp project NAME     Scaffold a new project in NAME
    snapp config show      Show the effective configuration
    snapp config set K V   Persist a configuration value
"""

from typing import Annotated

import typer

from snapp.config.manager import ConfigManager
from snapp.utils.console import print_error, print_info, print_success, show_version
from snapp.utils.errors import SnappError, UserCancelledError
from snapp.utils.logging import setup_logging
from snapp.workflow.provision import Provisioner

app = typer.Typer(
    name="snapp",
    help="SNAPP - Scaffold a new project from a template",
    add_completion=False,
    no_args_is_help=True,
)

config_app = typer.Typer(help="Show or change configuration", no_args_is_help=True)
app.add_typer(config_app, name="config")


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """SNAPP - Scaffold a new project from a template."""
    setup_logging()


@app.command()
def project(
    name: Annotated[
        str,
        typer.Argument(help="Directory name or path for the new project"),
    ],
    template: Annotated[
        str | None,
        typer.Option(
            "--template",
            "-t",
            help="Template source, e.g. github:user/repo/subdir#ref",
        ),
    ] = None,
    no_cache: Annotated[
        bool,
        typer.Option(
            "--no-cache",
            help="Download the template even if a cached copy exists",
        ),
    ] = False,
    fail_fast: Annotated[
        bool | None,
        typer.Option(
            "--fail-fast/--keep-going",
            help="Stop at the first failed step (default: from config)",
        ),
    ] = None,
) -> None:
    """Create a new project: clone the template, git init, npm ci, commit.

    Refuses to write into a directory that already contains files.
    """
    config = ConfigManager()
    settings = config.load()

    if template is not None:
        settings.template_source = template
    if no_cache:
        settings.template_cache = False
    if fail_fast is not None:
        settings.fail_fast = fail_fast

    try:
        Provisioner(settings).provision(name)
    except SnappError as e:
        # Already reported by the provisioner
        raise typer.Exit(e.exit_code) from e
    except KeyboardInterrupt as e:
        cancelled = UserCancelledError("Operation cancelled by user")
        print_info(f"\n{cancelled}")
        raise typer.Exit(cancelled.exit_code) from e


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration and where each value comes from."""
    config = ConfigManager()
    config.load()
    config.show()


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Configuration key, e.g. TEMPLATE_SOURCE")],
    value: Annotated[str, typer.Argument(help="New value")],
    local: Annotated[
        bool,
        typer.Option("--local", help="Write to the project's .snapp file instead of ~/.snapp-config"),
    ] = False,
) -> None:
    """Persist a configuration value."""
    config = ConfigManager()
    config.load()
    scope = "local" if local else "global"
    try:
        config.save(key.upper(), value, scope=scope)
    except SnappError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e

    print_success(f"Saved {key.upper()} to {scope} config")


__all__ = [
    "app",
    "config_app",
]
