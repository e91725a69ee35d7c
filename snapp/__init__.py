"""SNAPP - Scaffold new projects from a remote template.

This package provides a Python CLI application that clones a project
template, initializes a git repository, installs npm dependencies and
records an initial commit.
"""

__version__ = "0.1.0"
DEFAULT_TEMPLATE_SOURCE = "github:o1-labs/snapp-cli/templates/project#main"
DEFAULT_BRANCH = "main"
INITIAL_COMMIT_MESSAGE = "Init commit"

__all__ = [
    "__version__",
    "DEFAULT_TEMPLATE_SOURCE",
    "DEFAULT_BRANCH",
    "INITIAL_COMMIT_MESSAGE",
]
