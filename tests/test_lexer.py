"""Tests for the markup lexer."""

import pytest
from erdot.errors import LexError
from erdot.markup.lexer import Lexer, TokenKind, tokenize


def kinds(text):
    return [t.kind for t in tokenize(text)]


def test_entity_and_attribute_tokens():
    """Entity header, newline and a key attribute."""
    assert kinds("[Person]\n*id") == [
        TokenKind.LBRACKET,
        TokenKind.WORD,
        TokenKind.RBRACKET,
        TokenKind.NEWLINE,
        TokenKind.SYMBOL,
        TokenKind.WORD,
        TokenKind.EOF,
    ]


def test_relationship_tokens():
    """Cardinalities and the connector are separate tokens."""
    tokens = tokenize("Person 1--* Car")
    assert [(t.kind, t.value) for t in tokens] == [
        (TokenKind.WORD, "Person"),
        (TokenKind.WORD, "1"),
        (TokenKind.CONNECTOR, "--"),
        (TokenKind.SYMBOL, "*"),
        (TokenKind.WORD, "Car"),
        (TokenKind.EOF, ""),
    ]


def test_positions_are_one_based():
    """Token positions point at their first character."""
    tokens = tokenize("[A]\n  *id")
    star = tokens[4]
    assert star.value == "*"
    assert (star.position.line, star.position.column) == (2, 3)


def test_newlines_collapse_and_comments_are_skipped():
    """Blank and comment lines produce a single NEWLINE."""
    text = "# leading comment\n\n[A]\n\n# between\n\nid # trailing\n"
    assert kinds(text) == [
        TokenKind.LBRACKET,
        TokenKind.WORD,
        TokenKind.RBRACKET,
        TokenKind.NEWLINE,
        TokenKind.WORD,
        TokenKind.NEWLINE,
        TokenKind.EOF,
    ]


def test_no_newlines_inside_braces():
    """Option lists may span lines."""
    text = '[A] {\n  bgcolor: "#fff",\n  size: 12\n}'
    assert TokenKind.NEWLINE not in kinds(text)


def test_quoted_strings_and_escapes():
    """All three quote characters delimit strings; backslash escapes."""
    tokens = tokenize('"a b" \'c"d\' `e\\`f`')
    strings = [t.value for t in tokens if t.kind == TokenKind.STRING]
    assert strings == ["a b", 'c"d', "e`f"]


def test_unterminated_string():
    """A string still open at end of line is a LexError at its opening quote."""
    with pytest.raises(LexError) as exc_info:
        tokenize('[A]\n"broken\n')
    err = exc_info.value
    assert err.char == '"'
    assert (err.position.line, err.position.column) == (2, 1)
    assert "unterminated" in str(err)


def test_invalid_character():
    """A character that starts no token is rejected."""
    with pytest.raises(LexError) as exc_info:
        tokenize("[A]\nprice €")
    assert exc_info.value.char == "€"
    assert exc_info.value.position.column == 7


def test_lexer_is_restartable():
    """Iterating the same Lexer twice yields the same tokens."""
    lexer = Lexer("[A]\n*id\nA 1--+ A")
    assert list(lexer) == list(lexer)


def test_single_dash_is_a_symbol():
    """Only '--' is a connector."""
    tokens = tokenize("a-b")
    assert [t.kind for t in tokens[:3]] == [
        TokenKind.WORD,
        TokenKind.SYMBOL,
        TokenKind.WORD,
    ]
