"""Lexer: markup text to a lazy token stream."""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List
from erdot.errors import LexError
from erdot.ir.document import SourcePosition

QUOTES = {'"', "'", "`"}
COMMENT = "#"

SINGLE_CHAR_TOKENS = {
    "[": "LBRACKET",
    "]": "RBRACKET",
    "{": "LBRACE",
    "}": "RBRACE",
    ":": "COLON",
    ",": "COMMA",
}

# Any other ASCII punctuation becomes a SYMBOL; the parser decides whether it
# is a cardinality, a key marker, or an error.
SYMBOL_CHARS = set(string.punctuation) - set(SINGLE_CHAR_TOKENS) - QUOTES - {COMMENT}


class TokenKind(str, Enum):
    WORD = "WORD"
    STRING = "STRING"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    COLON = "COLON"
    COMMA = "COMMA"
    CONNECTOR = "CONNECTOR"
    SYMBOL = "SYMBOL"
    NEWLINE = "NEWLINE"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with the position of its first character."""

    kind: TokenKind
    value: str
    position: SourcePosition

    def describe(self) -> str:
        """Human-readable form used in parse errors."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        if self.kind == TokenKind.NEWLINE:
            return "end of line"
        if self.kind == TokenKind.STRING:
            return f"string {self.value!r}"
        return repr(self.value)


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class Lexer:
    """
    Iterable token stream over a markup document.

    Each call to ``iter()`` scans the text again from the start, so the same
    Lexer can be consumed any number of times.

    Newlines are significant between statements: one NEWLINE token is emitted
    for a run of line breaks, blank lines and comments. Inside ``{ ... }`` no
    NEWLINE tokens are produced so option lists may span several lines.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[Token]:
        return self._scan()

    def _scan(self) -> Iterator[Token]:
        text = self.text
        n = len(text)
        i = 0
        line = 1
        line_start = 0
        brace_depth = 0
        # Suppress leading NEWLINE tokens and collapse runs of them.
        pending_newline = False
        emitted_any = False

        def pos(at: int) -> SourcePosition:
            return SourcePosition(line=line, column=at - line_start + 1)

        while i < n:
            ch = text[i]

            if ch == "\n":
                if brace_depth == 0 and emitted_any:
                    if not pending_newline:
                        pending_newline = True
                        newline_pos = pos(i)
                i += 1
                line += 1
                line_start = i
                continue

            if ch.isspace():
                i += 1
                continue

            if ch == COMMENT:
                while i < n and text[i] != "\n":
                    i += 1
                continue

            if pending_newline:
                yield Token(TokenKind.NEWLINE, "\n", newline_pos)
                pending_newline = False

            start = pos(i)
            emitted_any = True

            if ch in QUOTES:
                value, i = self._scan_string(i, start)
                yield Token(TokenKind.STRING, value, start)
                continue

            if _is_word_char(ch):
                j = i
                while j < n and _is_word_char(text[j]):
                    j += 1
                yield Token(TokenKind.WORD, text[i:j], start)
                i = j
                continue

            if ch == "-" and text.startswith("--", i):
                yield Token(TokenKind.CONNECTOR, "--", start)
                i += 2
                continue

            if ch in SINGLE_CHAR_TOKENS:
                if ch == "{":
                    brace_depth += 1
                elif ch == "}" and brace_depth > 0:
                    brace_depth -= 1
                yield Token(TokenKind(SINGLE_CHAR_TOKENS[ch]), ch, start)
                i += 1
                continue

            if ch in SYMBOL_CHARS:
                yield Token(TokenKind.SYMBOL, ch, start)
                i += 1
                continue

            raise LexError(start, ch)

        if pending_newline:
            yield Token(TokenKind.NEWLINE, "\n", newline_pos)
        yield Token(TokenKind.EOF, "", pos(i))

    def _scan_string(self, i: int, start: SourcePosition):
        """Scan a quoted string starting at ``i``; return (value, next index)."""
        text = self.text
        quote = text[i]
        chars: List[str] = []
        j = i + 1
        while j < len(text):
            ch = text[j]
            if ch == "\\" and j + 1 < len(text) and text[j + 1] != "\n":
                chars.append(text[j + 1])
                j += 2
                continue
            if ch == quote:
                return "".join(chars), j + 1
            if ch == "\n":
                break
            chars.append(ch)
            j += 1
        raise LexError(start, quote, reason=f"unterminated string starting with {quote}")


def tokenize(text: str) -> List[Token]:
    """Scan ``text`` completely and return its tokens, ending with EOF."""
    return list(Lexer(text))
