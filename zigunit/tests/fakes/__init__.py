"""Fake implementations of core ports for testing.

- FakeNativeModule: In-memory compiled module with scripted test functions
- FakeTestSession: Captured live registrations
"""

from .native import FakeNativeModule
from .session import FakeTestSession

__all__ = ["FakeNativeModule", "FakeTestSession"]
