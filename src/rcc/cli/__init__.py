"""
rcc Command-Line Interface
==========================

- **rcc**: tokenize a C source file and print its token stream

The tool is implemented as a Click-based CLI application.
"""

__all__ = ["rcc"]
