"""External collaborators for SNAPP.

This package contains:
- template: Remote template download, cache and extraction
- shell: Command runner for external binaries
- git: git command construction
- npm: npm command construction
"""

from snapp.integrations.shell import CommandRunner
from snapp.integrations.template import TemplateFetcher, TemplateSource, parse_template_source

__all__ = [
    "CommandRunner",
    "TemplateFetcher",
    "TemplateSource",
    "parse_template_source",
]
