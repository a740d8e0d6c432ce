"""Pluggable toolkit for writing zero-knowledge VM programs, with a native host and examples."""

__version__ = "0.1.0"