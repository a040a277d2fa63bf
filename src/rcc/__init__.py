"""
rcc - A Small C Compiler Front End
==================================

This package contains the front end of a compiler for a small subset of C.
The lexer is currently the only compilation stage; a parser will consume
its token stream.

Main Components
---------------
- **lexer**: pull-based tokenizer producing Keyword, Symbol, Identifier
  and IntLiteral tokens
- **errors**: exception hierarchy with source locations
- **corpus**: runner for the staged C test corpus
- **cli**: the ``rcc`` command

Quick Start
-----------
    >>> from rcc import Lexer, format_token
    >>> [format_token(t) for t in Lexer("return 42;")]
    ['Keyword(Return)', 'IntLiteral("42")', 'Symbol(Semicolon)']

Or from the command line:
    $ rcc hello.c
"""

__version__ = "0.1.0"

from rcc.errors import (
    RccError,
    SourceLocation,
    LexError,
    UnrecognizedCharacterError,
    CorpusError,
)
from rcc.lexer import (
    Lexer,
    Token,
    Keyword,
    Symbol,
    Identifier,
    IntLiteral,
    SpannedToken,
    KEYWORDS,
    format_token,
    tokenize,
)

__all__ = [
    "__version__",
    # Errors
    "RccError",
    "SourceLocation",
    "LexError",
    "UnrecognizedCharacterError",
    "CorpusError",
    # Lexer
    "Lexer",
    "Token",
    "Keyword",
    "Symbol",
    "Identifier",
    "IntLiteral",
    "SpannedToken",
    "KEYWORDS",
    "format_token",
    "tokenize",
]
