"""Provisioning workflow for SNAPP.

This package contains:
- steps: Labeled shell steps and their execution order
- provision: The Provisioner pipeline
"""

from snapp.workflow.provision import Provisioner, next_steps_message, provision
from snapp.workflow.steps import ShellStep, StepResult, build_steps

__all__ = [
    "Provisioner",
    "ShellStep",
    "StepResult",
    "build_steps",
    "next_steps_message",
    "provision",
]
