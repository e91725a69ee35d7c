"""npm operations for SNAPP."""

NPM_BINARY = "npm"


def install_commands() -> tuple[tuple[str, ...], ...]:
    """Reproducible, quiet dependency install from the lockfile.

    Output of this command must be discarded by the runner: the template's
    ``prepare`` script prints hook setup messages even with ``--silent``.
    """
    return ((NPM_BINARY, "ci", "--silent"),)


__all__ = [
    "NPM_BINARY",
    "install_commands",
]
