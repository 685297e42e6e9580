"""Unit tests for zigunit core domain logic."""
