# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for the Rust source subset read by witgen."""

from witgen.source.lexer import LexerError, Token, TokenType, tokenize
from witgen.source.parser import ParseError, parse

__all__ = [
    "LexerError",
    "ParseError",
    "Token",
    "TokenType",
    "parse",
    "tokenize",
]
