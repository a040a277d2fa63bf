"""
rcc Error Hierarchy
===================

This module defines the exception hierarchy for the rcc compiler front end.
All exceptions inherit from RccError, allowing callers to catch every
compiler error with a single except clause if desired.

Exception Hierarchy
-------------------
RccError (base)
├── LexError - the source text cannot be split into tokens
│   └── UnrecognizedCharacterError - character outside every token class
└── CorpusError - the compiler could not be run on a corpus file

Error Message Format
--------------------
Errors carry source location information and format like this:

    hello.c:3:12: error: unrecognized character '@' (0x40)
        return @;
               ^
    hint: supported tokens are int, return, identifiers, integers and (){};

Lexer errors are raised out of the lexer and never terminate the process.
The command-line driver decides how to report them (see rcc.cli.errors).
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class RccError(Exception):
    """
    Base exception for all rcc errors.

        try:
            tokens = list(Lexer(source, "hello.c"))
        except RccError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Lexer Exceptions
# =============================================================================

class LexError(RccError):
    """
    Base exception for lexical failures.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            main.c:1:8: error: unrecognized character '$' (0x24)
                int x$ ;
                     ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            # Tabs are kept so the caret lines up in a terminal
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                prefix = "".join(
                    c if c == "\t" else " "
                    for c in self.source_line[:self.location.column - 1]
                )
                parts.append(f"    {prefix}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnrecognizedCharacterError(LexError):
    """
    Character that cannot start any token.

    Raised when the lexer meets a character that is not whitespace, not
    one of ( ) { } ;, not a letter or underscore and not an ASCII digit.

    Attributes:
        char: The offending character
        offset: 0-based offset of the character in the source
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        offset: Optional[int] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        self.offset = offset
        super().__init__(
            f"unrecognized character {char!r} (0x{ord(char):02X})",
            location=location,
            hint="supported tokens are int, return, identifiers, "
                 "decimal integers and ( ) { } ;",
            source_line=source_line,
        )


# =============================================================================
# Corpus Harness Exceptions
# =============================================================================

class CorpusError(RccError):
    """
    The compiler could not be run on a corpus file.

    Raised when the compiler command is missing or a run times out. A run
    that finishes with a non-zero exit status is a test failure, not an
    error, and is reported in the stage report instead.

    Attributes:
        source_path: The corpus file being compiled
        command: The command line that was run
    """

    def __init__(self, message: str, source_path=None, command: Optional[list] = None):
        self.source_path = source_path
        self.command = command
        super().__init__(message)
