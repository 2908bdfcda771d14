"""Config parsing, window and workspace state, and a control client for a tiling compositor."""

__version__ = "0.1.0"