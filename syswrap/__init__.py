"""Tracking wrappers for open files, memory blocks, mappings and child processes."""

__version__ = "0.1.0"