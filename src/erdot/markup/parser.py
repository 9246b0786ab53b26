"""Recursive-descent parser: tokens to a Document."""

from typing import Dict, List, Optional, Sequence
from erdot.config.logging import get_logger
from erdot.config.settings import DIRECTIVES
from erdot.errors import ParseError
from erdot.ir.document import (
    Attribute,
    Cardinality,
    Document,
    Entity,
    GlobalOptions,
    Relationship,
    SourcePosition,
)
from .lexer import Lexer, Token, TokenKind

logger = get_logger(__name__)

IDENT_KINDS = (TokenKind.WORD, TokenKind.STRING)
KEY_MARKERS = {"*": "is_key", "+": "is_foreign_key"}
CARDINALITY_SYMBOLS = ", ".join(repr(c.value) for c in Cardinality)


class _EntityBuilder:
    """Collects attribute lines for the entity currently being declared."""

    def __init__(self, name: str, options: Dict[str, str], position: SourcePosition):
        self.name = name
        self.options = options
        self.position = position
        self.attributes: List[Attribute] = []

    def build(self) -> Entity:
        return Entity(
            name=self.name,
            attributes=tuple(self.attributes),
            options=self.options,
            position=self.position,
        )


class Parser:
    """
    Parse a token sequence into a Document.

    Parsing is all-or-nothing: the first token that does not fit the grammar
    raises ParseError and no partial document is returned.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].kind != TokenKind.EOF:
            end = self.tokens[-1].position if self.tokens else SourcePosition()
            self.tokens.append(Token(TokenKind.EOF, "", end))
        self.index = 0

    # -- token helpers -------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def peek(self, offset: int = 1) -> Token:
        at = min(self.index + offset, len(self.tokens) - 1)
        return self.tokens[at]

    def advance(self) -> Token:
        tok = self.current
        if tok.kind != TokenKind.EOF:
            self.index += 1
        return tok

    def check(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def expect(self, kind: TokenKind, expected: str) -> Token:
        if not self.check(kind):
            self.fail(expected)
        return self.advance()

    def fail(self, expected: str, token: Optional[Token] = None):
        token = token or self.current
        raise ParseError(token.position, expected, token.describe())

    def skip_newlines(self) -> None:
        while self.check(TokenKind.NEWLINE):
            self.advance()

    def end_of_statement(self) -> None:
        if self.check(TokenKind.EOF):
            return
        self.expect(TokenKind.NEWLINE, "end of line")

    def line_has_connector(self) -> bool:
        """True if a '--' appears before the end of the current line or an option list."""
        for tok in self.tokens[self.index:]:
            if tok.kind in (TokenKind.NEWLINE, TokenKind.EOF, TokenKind.LBRACE):
                return False
            if tok.kind == TokenKind.CONNECTOR:
                return True
        return False

    # -- grammar -------------------------------------------------------

    def parse(self) -> Document:
        """
        Parse the whole token sequence.

        Returns:
            Parsed Document

        Raises:
            ParseError: At the first grammar violation
        """
        directives: Dict[str, Dict[str, str]] = {name: {} for name in DIRECTIVES}
        entities: List[_EntityBuilder] = []
        declared: Dict[str, SourcePosition] = {}
        relationships: List[Relationship] = []

        self.skip_newlines()
        while self.is_directive():
            name = self.advance().value
            directives[name].update(self.parse_options())
            self.end_of_statement()
            self.skip_newlines()

        while not self.check(TokenKind.EOF):
            if self.check(TokenKind.LBRACKET):
                builder = self.parse_entity()
                if builder.name in declared:
                    raise ParseError(
                        builder.position,
                        "a new entity name",
                        f"{builder.name!r} (already declared at {declared[builder.name]})",
                    )
                declared[builder.name] = builder.position
                entities.append(builder)
            elif self.line_has_connector():
                relationships.append(self.parse_relationship())
            else:
                start = self.current
                attribute = self.parse_attribute()
                if not entities:
                    raise ParseError(
                        start.position,
                        "an entity declaration ('[Name]') before attribute lines",
                        f"attribute {attribute.name!r}",
                    )
                entities[-1].attributes.append(attribute)
            self.end_of_statement()
            self.skip_newlines()

        document = Document(
            global_options=GlobalOptions(**directives),
            entities=tuple(b.build() for b in entities),
            relationships=tuple(relationships),
        )
        logger.debug(
            f"Parsed {len(document.entities)} entities and "
            f"{len(document.relationships)} relationships"
        )
        return document

    def is_directive(self) -> bool:
        return (
            self.check(TokenKind.WORD)
            and self.current.value in DIRECTIVES
            and self.peek().kind == TokenKind.LBRACE
        )

    def parse_ident(self, expected: str) -> Token:
        if self.current.kind not in IDENT_KINDS:
            self.fail(expected)
        return self.advance()

    def parse_entity(self) -> _EntityBuilder:
        self.expect(TokenKind.LBRACKET, "'['")
        name = self.parse_ident("an entity name")
        self.expect(TokenKind.RBRACKET, "']' after entity name")
        options = self.parse_options() if self.check(TokenKind.LBRACE) else {}
        return _EntityBuilder(name.value, options, name.position)

    def parse_attribute(self) -> Attribute:
        start = self.current.position
        flags = {"is_key": False, "is_foreign_key": False}
        while self.check(TokenKind.SYMBOL) and self.current.value in KEY_MARKERS:
            flags[KEY_MARKERS[self.advance().value]] = True

        name = self.parse_ident("an attribute name")
        type_label = None
        if self.check(TokenKind.COLON):
            self.advance()
            type_label = self.parse_ident("a type label after ':'").value

        options = self.parse_options() if self.check(TokenKind.LBRACE) else {}
        return Attribute(
            name=name.value,
            type_label=type_label,
            options=options,
            position=start,
            **flags,
        )

    def parse_cardinality(self, side: str) -> Cardinality:
        tok = self.current
        card = None
        if tok.kind in (TokenKind.WORD, TokenKind.SYMBOL):
            card = Cardinality.from_symbol(tok.value)
        if card is None:
            self.fail(f"a {side} cardinality ({CARDINALITY_SYMBOLS})")
        self.advance()
        return card

    def parse_relationship(self) -> Relationship:
        left = self.parse_ident("an entity name")
        left_card = self.parse_cardinality("left")
        self.expect(TokenKind.CONNECTOR, "'--'")
        right_card = self.parse_cardinality("right")
        right = self.parse_ident("an entity name")
        options = self.parse_options() if self.check(TokenKind.LBRACE) else {}
        return Relationship(
            left=left.value,
            right=right.value,
            left_cardinality=left_card,
            right_cardinality=right_card,
            options=options,
            position=left.position,
        )

    def parse_options(self) -> Dict[str, str]:
        """Parse ``{key: value, ...}``; a trailing comma is allowed and later keys win."""
        self.expect(TokenKind.LBRACE, "'{'")
        options: Dict[str, str] = {}
        while not self.check(TokenKind.RBRACE):
            key = self.expect(TokenKind.WORD, "an option key or '}'")
            self.expect(TokenKind.COLON, f"':' after option key {key.value!r}")
            value = self.parse_ident(f"a value for option {key.value!r}")
            options[key.value] = value.value
            if self.check(TokenKind.COMMA):
                self.advance()
            elif not self.check(TokenKind.RBRACE):
                self.fail("',' or '}'")
        self.advance()
        return options


def parse(text: str) -> Document:
    """
    Parse markup text into a Document.

    Args:
        text: Markup source

    Returns:
        Parsed Document

    Raises:
        LexError: For an invalid character or unterminated string
        ParseError: At the first grammar violation
    """
    return Parser(Lexer(text)).parse()
