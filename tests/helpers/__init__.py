"""Test helper utilities for the SNAPP project."""

from tests.helpers.archive import build_archive

__all__ = ["build_archive"]
