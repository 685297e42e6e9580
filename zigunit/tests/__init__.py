"""Test suite for zigunit.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - No native code, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - ctypes and extension-module adapters, manifest files, pytest session, CLI

3. fakes/: Port implementations for testing
   - FakeNativeModule and FakeTestSession

test_zigtest_live.py converts the zig sources in data/ into pytest tests at
import time, the same way a user's test module would.
"""
