"""Markup lexer and parser."""

from .lexer import Lexer, Token, TokenKind, tokenize
from .parser import Parser, parse

__all__ = ["Lexer", "Token", "TokenKind", "tokenize", "Parser", "parse"]
