"""
sexpc Command-Line Interface
============================

This package provides the command-line driver for the compiler:

- **sexpc**: compile call-syntax source to C-style call statements

The tool is a Click-based CLI application with help text and consistent
exit codes (see cli.errors.ExitCode).
"""

__all__ = ["sexpc"]
