"""Errors that abort a translation."""

from typing import Optional
from erdot.ir.document import SourcePosition


class ErdotError(Exception):
    """Base class for fatal translation errors."""

    kind = "error"

    def __init__(self, message: str, position: Optional[SourcePosition] = None):
        self.position = position
        self.message = message
        if position is not None:
            message = f"{position}: {message}"
        super().__init__(message)


class LexError(ErdotError):
    """Raised for an unterminated string or a character that starts no token."""

    kind = "lex"

    def __init__(self, position: SourcePosition, char: str, reason: Optional[str] = None):
        self.char = char
        super().__init__(reason or f"unexpected character {char!r}", position)


class ParseError(ErdotError):
    """Raised at the first token that does not fit the grammar."""

    kind = "parse"

    def __init__(self, position: SourcePosition, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found {found}", position)


class UnresolvedEntityReference(ErdotError):
    """Raised when a relationship names an entity that was never declared."""

    kind = "unresolved_reference"

    def __init__(self, name: str, position: Optional[SourcePosition] = None):
        self.name = name
        super().__init__(
            f"relationship references undeclared entity {name!r}", position
        )
