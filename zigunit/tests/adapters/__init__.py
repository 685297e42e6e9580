"""Tests for zigunit adapters."""
