"""Test session adapters for live registration."""

from .pytest_session import PytestSession, session_active

__all__ = ["PytestSession", "session_active"]
