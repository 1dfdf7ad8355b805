"""Parallel run: fan stdin lines out to a templated command."""

__version__ = "0.1.0"
