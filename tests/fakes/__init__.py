"""Test fakes for the provisioner's collaborators."""

from tests.fakes.fake_tools import FakeFetcher, FakeRunner

__all__ = [
    "FakeFetcher",
    "FakeRunner",
]
