"""External adapters for zigunit.

This package contains everything that touches the outside world and
provides implementations of the core port interfaces.

Adapter Organization:

- native/: Invoking compiled test functions (ctypes libraries, Python extension modules)
- manifest/: Reading build manifests written by the compile step
- session/: Registering tests with pytest
- cli/: Command-line commands
"""
