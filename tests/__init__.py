"""blockfields test suite."""
