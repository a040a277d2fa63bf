"""
rcc Lexer (Tokenizer)
=====================

This module implements the lexer for the C subset understood by rcc.
It converts source text into a stream of tokens for the parser.

Token Categories
----------------
- Keywords: int, return
- Identifiers: letter or underscore, then letters, digits, underscores
- Integer literals: runs of decimal digits, kept as text
- Symbols: ( ) { } ;

Tokens form a closed set of four types, so a consumer can dispatch over
them exhaustively:

    Token = Keyword | Symbol | Identifier | IntLiteral

The lexer is pull-based. Each call to next_token() (or next() on the
lexer, which is its own iterator) skips whitespace, scans exactly one
token and returns it. Nothing is tokenized ahead of the consumer.

Example Usage
-------------
>>> from rcc.lexer import Lexer, format_token
>>> for token in Lexer("int main() { return 0; }"):
...     print(format_token(token))
Keyword(Int)
Identifier("main")
Symbol(OpenParen)
Symbol(CloseParen)
Symbol(OpenBrace)
Keyword(Return)
IntLiteral("0")
Symbol(Semicolon)
Symbol(CloseBrace)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from rcc.errors import SourceLocation, UnrecognizedCharacterError


logger = logging.getLogger(__name__)


# =============================================================================
# Token Types
# =============================================================================

class Keyword(Enum):
    """Reserved words. The value is the exact source spelling."""

    INT = "int"
    RETURN = "return"

    @property
    def lexeme(self) -> str:
        return self.value


class Symbol(Enum):
    """Single-character punctuation. The value is the source character."""

    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    SEMICOLON = ";"

    @property
    def lexeme(self) -> str:
        return self.value


@dataclass(frozen=True)
class Identifier:
    """A name that is not a keyword."""
    text: str

    @property
    def lexeme(self) -> str:
        return self.text


@dataclass(frozen=True)
class IntLiteral:
    """
    A decimal integer literal.

    The digits are kept as written; converting to a value (and checking
    its range) is left to later compiler stages.
    """
    digits: str

    @property
    def lexeme(self) -> str:
        return self.digits


Token = Union[Keyword, Symbol, Identifier, IntLiteral]


# Exact, case-sensitive spellings of the keywords
KEYWORDS: dict[str, Keyword] = {keyword.value: keyword for keyword in Keyword}

# Characters that form a complete token on their own
SYMBOLS: dict[str, Symbol] = {symbol.value: symbol for symbol in Symbol}

ASCII_DIGITS = "0123456789"

# str.isspace() accepts these separators; they are not whitespace in C source
NON_BLANK_SEPARATORS = "\x1c\x1d\x1e\x1f"


def _variant_name(member: Enum) -> str:
    """OPEN_PAREN -> OpenParen"""
    return "".join(part.capitalize() for part in member.name.split("_"))


def format_token(token: Token) -> str:
    """
    Format a token for display, one stable line per token.

    Examples:
        Keyword(Int), Symbol(OpenParen), Identifier("main"), IntLiteral("42")
    """
    if isinstance(token, Keyword):
        return f"Keyword({_variant_name(token)})"
    if isinstance(token, Symbol):
        return f"Symbol({_variant_name(token)})"
    if isinstance(token, Identifier):
        return f'Identifier("{token.text}")'
    if isinstance(token, IntLiteral):
        return f'IntLiteral("{token.digits}")'
    raise TypeError(f"not a token: {token!r}")


@dataclass(frozen=True)
class SpannedToken:
    """
    A token together with where it starts in the source.

    Attributes:
        token: The token itself
        location: Line and column of the first character (1-indexed)
        offset: Offset of the first character (0-indexed)
    """
    token: Token
    location: SourceLocation
    offset: int

    def __repr__(self) -> str:
        return f"{format_token(self.token)}@{self.location.line}:{self.location.column}"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Pull-based tokenizer for the rcc C subset.

    A lexer makes a single forward pass over its source. Every character
    is consumed once, either as whitespace between tokens or as part of
    exactly one token, and tokens come out in source order.

    Usage:
        lexer = Lexer(source_text, filename)
        while (token := lexer.next_token()) is not None:
            ...

    or simply iterate over it. End of input is not an error: next_token()
    returns None and iteration stops. An unrecognized character raises
    UnrecognizedCharacterError; the pass is then over and every later
    pull raises the same error again.

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The C source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source
        self.filename = filename

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

        self._token_count = 0
        self._finished = False
        self._error: Optional[UnrecognizedCharacterError] = None

    def __repr__(self) -> str:
        return f"Lexer({self.filename!r}, position={self._pos})"

    @property
    def position(self) -> int:
        """Offset of the cursor into the source (0-indexed)."""
        return self._pos

    @property
    def token_count(self) -> int:
        """Number of tokens produced so far."""
        return self._token_count

    # =========================================================================
    # Pull Interface
    # =========================================================================

    def next_spanned(self) -> Optional[SpannedToken]:
        """
        Scan the next token and its location.

        Returns:
            The next SpannedToken, or None at end of input

        Raises:
            UnrecognizedCharacterError: If the next token cannot start here
        """
        if self._error is not None:
            raise self._error.with_traceback(None)

        self._skip_whitespace()

        if self._at_end():
            if not self._finished:
                self._finished = True
                logger.debug(f"{self.filename}: end of input after {self._token_count} tokens")
            return None

        location = SourceLocation(self.filename, self._line, self._column)
        offset = self._pos

        token = self._scan_token(location, offset)
        self._token_count += 1
        return SpannedToken(token, location, offset)

    def next_token(self) -> Optional[Token]:
        """
        Scan the next token.

        Returns:
            The next Token, or None at end of input

        Raises:
            UnrecognizedCharacterError: If the next token cannot start here
        """
        spanned = self.next_spanned()
        if spanned is None:
            return None
        return spanned.token

    def __iter__(self) -> "Lexer":
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def spanned(self) -> Iterator[SpannedToken]:
        """Yield the remaining tokens with their locations."""
        while (spanned := self.next_spanned()) is not None:
            yield spanned

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Current character, or empty string past end of source."""
        if self._pos >= len(self.source):
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        """
        Consume and return the current character.

        Updates line and column tracking for error reporting.
        """
        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    @staticmethod
    def _is_whitespace(char: str) -> bool:
        return char.isspace() and char not in NON_BLANK_SEPARATORS

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._is_whitespace(self._peek()):
            self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self, location: SourceLocation, offset: int) -> Token:
        char = self._peek()

        # Symbols never prefix a longer token
        if char in SYMBOLS:
            self._advance()
            return SYMBOLS[char]

        if char.isalpha() or char == "_":
            return self._scan_word()

        if char in ASCII_DIGITS:
            return self._scan_number()

        self._error = UnrecognizedCharacterError(
            char,
            location,
            offset=offset,
            source_line=self._get_current_line(),
        )
        logger.debug(f"{location}: unrecognized character {char!r}")
        raise self._error

    def _scan_word(self) -> Token:
        """
        Scan a keyword or identifier.

        Consumes the longest run of letters, digits and underscores, then
        looks the whole run up in the keyword table. "integer" is therefore
        one identifier, never the keyword int followed by "eger".
        """
        start = self._pos
        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            self._advance()

        text = self.source[start:self._pos]

        if text in KEYWORDS:
            return KEYWORDS[text]
        return Identifier(text)

    def _scan_number(self) -> IntLiteral:
        """
        Scan a run of ASCII digits.

        Stops at the first non-digit. A letter right after the digits is
        not part of the literal: "42abc" scans as 42 here and the
        identifier abc on the next pull.
        """
        start = self._pos
        while not self._at_end() and self._peek() in ASCII_DIGITS:
            self._advance()

        return IntLiteral(self.source[start:self._pos])

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]


def tokenize(source: str, filename: str = "<input>") -> Lexer:
    """
    Create a lexer over source.

    The result is lazy; wrap it in list() to tokenize everything at once.
    """
    return Lexer(source, filename)
