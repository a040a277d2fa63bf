# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the rcc C-subset lexer.
#
# Test coverage includes:
#   - Keywords, identifiers, integer literals and symbols
#   - Maximal munch and exact keyword matching
#   - Whitespace handling
#   - Pull interface: next_token(), iteration, end of input
#   - Token locations
#   - Error conditions
# =============================================================================

import pytest
from rcc.lexer import (
    Lexer,
    Keyword,
    Symbol,
    Identifier,
    IntLiteral,
    KEYWORDS,
    format_token,
    tokenize,
)
from rcc.errors import LexError, RccError, SourceLocation, UnrecognizedCharacterError


# =============================================================================
# Helper Function
# =============================================================================

def lex(source: str) -> list:
    """Tokenize all of source into a list."""
    return list(Lexer(source, "<test>"))


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces no tokens and no error."""
        assert lex("") == []

    def test_whitespace_only(self):
        """Whitespace-only source produces no tokens."""
        assert lex("   \n\t  \r\n  ") == []

    def test_int_keyword(self):
        assert lex("int") == [Keyword.INT]

    def test_return_keyword(self):
        assert lex("return") == [Keyword.RETURN]

    def test_identifier(self):
        assert lex("main") == [Identifier("main")]

    def test_identifier_with_underscore(self):
        """Identifiers can start with and contain underscores."""
        assert lex("_start") == [Identifier("_start")]
        assert lex("my_var") == [Identifier("my_var")]

    def test_identifier_with_digits(self):
        """Digits and underscores mix freely after the first character."""
        assert lex("x1_2y") == [Identifier("x1_2y")]

    def test_integer_literal(self):
        assert lex("42") == [IntLiteral("42")]

    def test_integer_literal_keeps_digits(self):
        """Leading zeros are kept; literals are text, not values."""
        assert lex("007") == [IntLiteral("007")]

    def test_symbols(self):
        assert lex("(){};") == [
            Symbol.OPEN_PAREN,
            Symbol.CLOSE_PAREN,
            Symbol.OPEN_BRACE,
            Symbol.CLOSE_BRACE,
            Symbol.SEMICOLON,
        ]

    def test_minimal_program(self):
        """The classic stage 1 program."""
        assert lex("int main() { return 0; }") == [
            Keyword.INT,
            Identifier("main"),
            Symbol.OPEN_PAREN,
            Symbol.CLOSE_PAREN,
            Symbol.OPEN_BRACE,
            Keyword.RETURN,
            IntLiteral("0"),
            Symbol.SEMICOLON,
            Symbol.CLOSE_BRACE,
        ]

    def test_multiline_program(self):
        source = "int main()\n{\n    return 2;\n}\n"
        assert lex(source) == lex("int main() { return 2; }")


# =============================================================================
# Maximal Munch and Keyword Tests
# =============================================================================

class TestMaximalMunch:
    """Identifiers and numbers consume the longest possible run."""

    def test_keyword_prefix_is_identifier(self):
        """'integer' is one identifier, not int followed by eger."""
        assert lex("integer") == [Identifier("integer")]

    def test_keyword_suffix_is_identifier(self):
        assert lex("returned") == [Identifier("returned")]
        assert lex("int2") == [Identifier("int2")]
        assert lex("_int") == [Identifier("_int")]

    def test_keywords_are_case_sensitive(self):
        assert lex("Int RETURN") == [Identifier("Int"), Identifier("RETURN")]

    def test_keyword_table(self):
        assert KEYWORDS == {"int": Keyword.INT, "return": Keyword.RETURN}

    def test_symbol_ends_identifier(self):
        assert lex("main(") == [Identifier("main"), Symbol.OPEN_PAREN]

    def test_digits_then_letters_are_two_tokens(self):
        """A number runs up to the first non-digit; letters start a new token."""
        assert lex("42abc") == [IntLiteral("42"), Identifier("abc")]

    def test_digits_then_keyword(self):
        assert lex("1int") == [IntLiteral("1"), Keyword.INT]

    def test_symbol_ends_number(self):
        assert lex("0;") == [IntLiteral("0"), Symbol.SEMICOLON]

    def test_unicode_letters(self):
        """Alphabetic characters beyond ASCII form identifiers."""
        assert lex("café") == [Identifier("café")]


# =============================================================================
# Whitespace Tests
# =============================================================================

class TestWhitespace:
    """Whitespace separates tokens and never appears inside one."""

    @pytest.mark.parametrize("gap", [" ", "\t", "\n", "  \t\n ", "\r\n\r\n", " " * 50])
    def test_whitespace_run_invariance(self, gap):
        """Any whitespace run between tokens gives the same tokens."""
        assert lex(f"return{gap}x{gap};") == [Keyword.RETURN, Identifier("x"), Symbol.SEMICOLON]

    def test_whitespace_splits_identifiers(self):
        assert lex("in t") == [Identifier("in"), Identifier("t")]

    def test_whitespace_splits_numbers(self):
        assert lex("4 2") == [IntLiteral("4"), IntLiteral("2")]

    def test_leading_and_trailing_whitespace(self):
        assert lex("\n\n  int  \n") == [Keyword.INT]

    def test_unicode_whitespace(self):
        assert lex("int\u00a0x\u2028;") == [Keyword.INT, Identifier("x"), Symbol.SEMICOLON]

    @pytest.mark.parametrize("char", ["\x1c", "\x1d", "\x1e", "\x1f"])
    def test_information_separators_are_not_whitespace(self, char):
        """Control separators do not split tokens; they are rejected."""
        with pytest.raises(UnrecognizedCharacterError) as exc_info:
            lex(f"x{char}y")
        assert exc_info.value.char == char
        assert exc_info.value.offset == 1


# =============================================================================
# Pull Interface Tests
# =============================================================================

class TestPullInterface:
    """The lexer produces tokens only when asked."""

    def test_next_token_sequence(self):
        lexer = Lexer("return 1;")
        assert lexer.next_token() == Keyword.RETURN
        assert lexer.next_token() == IntLiteral("1")
        assert lexer.next_token() == Symbol.SEMICOLON
        assert lexer.next_token() is None

    def test_end_of_input_repeats(self):
        """Pulling past the end keeps returning None."""
        lexer = Lexer("x")
        assert lexer.next_token() == Identifier("x")
        assert lexer.next_token() is None
        assert lexer.next_token() is None

    def test_lexer_is_its_own_iterator(self):
        lexer = Lexer("int x")
        assert iter(lexer) is lexer
        assert next(lexer) == Keyword.INT
        assert next(lexer) == Identifier("x")
        with pytest.raises(StopIteration):
            next(lexer)

    def test_not_restartable(self):
        """A consumed lexer yields nothing on a second pass."""
        lexer = Lexer("int x;")
        assert len(list(lexer)) == 3
        assert list(lexer) == []

    def test_lazy_scanning(self):
        """Tokens before a bad character are delivered before the error."""
        lexer = Lexer("int x @")
        assert lexer.next_token() == Keyword.INT
        assert lexer.next_token() == Identifier("x")
        with pytest.raises(UnrecognizedCharacterError):
            lexer.next_token()

    def test_cursor_advances(self):
        lexer = Lexer("  int x")
        assert lexer.position == 0
        lexer.next_token()
        assert lexer.position == 5
        lexer.next_token()
        assert lexer.position == 7

    def test_token_count(self):
        lexer = Lexer("int main")
        list(lexer)
        assert lexer.token_count == 2

    def test_consumer_may_stop_early(self):
        lexer = Lexer("int main() { return 0; } @")
        assert lexer.next_token() == Keyword.INT
        # No draining needed; the rest of the source is never scanned

    def test_tokenize_is_lazy(self):
        lexer = tokenize("int @")
        assert isinstance(lexer, Lexer)
        assert next(lexer) == Keyword.INT

    def test_lexemes_reconstruct_source(self):
        """Joining token lexemes gives the source without whitespace."""
        source = "int main ( ) {\n  return 42 ;\n}  x1_2y 7abc"
        lexemes = "".join(token.lexeme for token in lex(source))
        assert lexemes == "".join(source.split())


# =============================================================================
# Location Tests
# =============================================================================

class TestLocations:
    """Tokens report where they start."""

    def test_spanned_locations(self):
        spans = list(Lexer("int main", "a.c").spanned())
        assert spans[0].token == Keyword.INT
        assert spans[0].location == SourceLocation("a.c", 1, 1)
        assert spans[0].offset == 0
        assert spans[1].location == SourceLocation("a.c", 1, 5)
        assert spans[1].offset == 4

    def test_locations_across_lines(self):
        spans = list(Lexer("int\n  main\n}").spanned())
        assert [(s.location.line, s.location.column) for s in spans] == [
            (1, 1),
            (2, 3),
            (3, 1),
        ]

    def test_next_spanned_end_of_input(self):
        assert Lexer("   ").next_spanned() is None

    def test_spanned_repr(self):
        spanned = Lexer("\n  return").next_spanned()
        assert repr(spanned) == "Keyword(Return)@2:3"


# =============================================================================
# Token Display Tests
# =============================================================================

class TestFormatToken:
    """Stable textual form of tokens."""

    @pytest.mark.parametrize("token, text", [
        (Keyword.INT, "Keyword(Int)"),
        (Keyword.RETURN, "Keyword(Return)"),
        (Identifier("main"), 'Identifier("main")'),
        (IntLiteral("0"), 'IntLiteral("0")'),
        (Symbol.OPEN_PAREN, "Symbol(OpenParen)"),
        (Symbol.CLOSE_PAREN, "Symbol(CloseParen)"),
        (Symbol.OPEN_BRACE, "Symbol(OpenBrace)"),
        (Symbol.CLOSE_BRACE, "Symbol(CloseBrace)"),
        (Symbol.SEMICOLON, "Symbol(Semicolon)"),
    ])
    def test_format(self, token, text):
        assert format_token(token) == text

    def test_format_rejects_non_tokens(self):
        with pytest.raises(TypeError):
            format_token("int")

    def test_tokens_are_immutable(self):
        token = Identifier("x")
        with pytest.raises(AttributeError):
            token.text = "y"


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrors:
    """Lexer error conditions."""

    def test_unrecognized_character(self):
        with pytest.raises(UnrecognizedCharacterError) as exc_info:
            lex("@")
        error = exc_info.value
        assert error.char == "@"
        assert error.offset == 0
        assert error.location == SourceLocation("<test>", 1, 1)

    def test_error_hierarchy(self):
        with pytest.raises(LexError):
            lex("$")
        with pytest.raises(RccError):
            lex("$")

    def test_error_location_mid_source(self):
        with pytest.raises(UnrecognizedCharacterError) as exc_info:
            lex("int main() {\n    return 1 + 2;\n}")
        error = exc_info.value
        assert error.char == "+"
        assert error.offset == 26
        assert error.location.line == 2
        assert error.location.column == 14

    @pytest.mark.parametrize("char", ["+", "-", "=", "#", "\"", "'", "/", "~", ",", "[", "\0"])
    def test_unsupported_characters(self, char):
        with pytest.raises(UnrecognizedCharacterError) as exc_info:
            lex(f"x {char} y")
        assert exc_info.value.char == char

    def test_non_ascii_digit_rejected(self):
        """Only ASCII digits start an integer literal."""
        with pytest.raises(UnrecognizedCharacterError):
            lex("٣")

    def test_error_message_format(self):
        with pytest.raises(UnrecognizedCharacterError) as exc_info:
            list(Lexer("int x @;", "main.c"))
        message = str(exc_info.value)
        lines = message.splitlines()
        assert lines[0] == "main.c:1:7: error: unrecognized character '@' (0x40)"
        assert lines[1] == "    int x @;"
        assert lines[2] == "          ^"
        assert lines[3].startswith("hint:")

    def test_failure_is_terminal(self):
        """After an error every pull raises the same error."""
        lexer = Lexer("@ int")
        with pytest.raises(UnrecognizedCharacterError) as first:
            lexer.next_token()
        with pytest.raises(UnrecognizedCharacterError) as second:
            lexer.next_token()
        assert second.value is first.value
        assert lexer.position == 0

    def test_repeated_failure_keeps_traceback_size(self):
        """Pulling after a failure does not grow the stored error's traceback."""
        lexer = Lexer("@")
        depths = []
        for _ in range(5):
            with pytest.raises(UnrecognizedCharacterError) as exc_info:
                lexer.next_token()
            depth = 0
            tb = exc_info.value.__traceback__
            while tb is not None:
                depth += 1
                tb = tb.tb_next
            depths.append(depth)
        assert len(set(depths[1:])) == 1
