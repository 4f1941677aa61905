"""Compile a Python file in memory and run a named entry point."""

app_name = "pyrun"
__version__ = "0.1.0"
