# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for Rust source files.

Converts raw source text into a sequence of tokens for the item parser. Only
the distinctions the parser needs are kept: structural delimiters and a few
keywords get their own token type, every other operator character is a
generic PUNCT token.
"""

import enum
from dataclasses import dataclass

from witgen.errors import WitgenError

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the Rust lexer."""

    # Keywords
    STRUCT = "struct"
    ENUM = "enum"
    IMPL = "impl"
    FN = "fn"
    PUB = "pub"
    FOR = "for"
    WHERE = "where"
    MUT = "mut"
    REF = "ref"
    USE = "use"
    MOD = "mod"
    CONST = "const"
    STATIC = "static"
    TYPE = "type"
    TRAIT = "trait"
    ASYNC = "async"
    UNSAFE = "unsafe"
    EXTERN = "extern"
    DYN = "dyn"

    # Delimiters and structural symbols
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LANGLE = "<"
    RANGLE = ">"
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    PATH_SEP = "::"
    HASH = "#"
    BANG = "!"
    AMP = "&"
    STAR = "*"
    EQUALS = "="
    ARROW = "->"
    FAT_ARROW = "=>"

    # Any other operator character
    PUNCT = "PUNCT"

    # Literals
    STRING = "STRING"
    CHAR = "CHAR"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    LIFETIME = "LIFETIME"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token (or decoded string content for STRING tokens).
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


class LexerError(WitgenError):
    """Raised when the scanner encounters an invalid character or unterminated literal.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Tokenize Rust source text into a sequence of tokens.

    Comments (including doc comments) and whitespace are consumed and not
    included in the output. A leading byte order mark is ignored.

    Args:
        source: The full text of a Rust source file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unexpected characters, unterminated literals, or
            unterminated block comments.
    """
    return _Lexer(source.removeprefix(_BYTE_ORDER_MARK)).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "struct": TokenType.STRUCT,
    "enum": TokenType.ENUM,
    "impl": TokenType.IMPL,
    "fn": TokenType.FN,
    "pub": TokenType.PUB,
    "for": TokenType.FOR,
    "where": TokenType.WHERE,
    "mut": TokenType.MUT,
    "ref": TokenType.REF,
    "use": TokenType.USE,
    "mod": TokenType.MOD,
    "const": TokenType.CONST,
    "static": TokenType.STATIC,
    "type": TokenType.TYPE,
    "trait": TokenType.TRAIT,
    "async": TokenType.ASYNC,
    "unsafe": TokenType.UNSAFE,
    "extern": TokenType.EXTERN,
    "dyn": TokenType.DYN,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "#": TokenType.HASH,
    "!": TokenType.BANG,
    "&": TokenType.AMP,
    "*": TokenType.STAR,
}

_TWO_CHAR_TOKENS: dict[str, TokenType] = {
    "::": TokenType.PATH_SEP,
    "->": TokenType.ARROW,
    "=>": TokenType.FAT_ARROW,
}

_PUNCT_CHARS = frozenset("+-/%^|.?@$~")

_BYTE_ORDER_MARK = "\ufeff"

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' past end of input."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comment runs at the current position."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/'. Block comments nest."""
        start_line = self._line
        start_col = self._column
        depth = 0
        while self._pos < len(self._source):
            if self._current() == "/" and self._peek() == "*":
                self._advance()  # /
                self._advance()  # *
                depth += 1
            elif self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                depth -= 1
                if depth == 0:
                    return
            else:
                self._advance()
        raise LexerError("Unterminated block comment", start_line, start_col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column

        pair = ch + self._peek()
        if pair in _TWO_CHAR_TOKENS:
            self._advance()
            self._advance()
            self._tokens.append(Token(_TWO_CHAR_TOKENS[pair], pair, line, col))
        elif ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col))
        elif ch == ":":
            self._advance()
            self._tokens.append(Token(TokenType.COLON, ch, line, col))
        elif ch == "=":
            self._advance()
            self._tokens.append(Token(TokenType.EQUALS, ch, line, col))
        elif ch in _PUNCT_CHARS:
            self._advance()
            self._tokens.append(Token(TokenType.PUNCT, ch, line, col))
        elif ch == '"':
            self._scan_string(line, col)
        elif ch == "'":
            self._scan_char_or_lifetime(line, col)
        elif ch.isdigit():
            self._scan_number(line, col)
        elif ch.isalpha() or ch == "_":
            self._scan_identifier_or_keyword(line, col)
        else:
            raise LexerError(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int) -> None:
        """Scan a double-quoted string literal with escape sequences.

        Rust string literals may span several lines.
        """
        self._advance()  # opening "
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()  # closing "
                self._tokens.append(Token(TokenType.STRING, "".join(chars), line, col))
                return
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    break
                esc = self._current()
                if esc in _SIMPLE_ESCAPES:
                    chars.append(_SIMPLE_ESCAPES[esc])
                    self._advance()
                elif esc == "\n":
                    # Line continuation: the newline and leading whitespace are dropped.
                    while self._pos < len(self._source) and self._current().isspace():
                        self._advance()
                else:
                    # \x.. and \u{..} escapes are kept verbatim.
                    chars.append("\\")
            else:
                chars.append(ch)
                self._advance()
        raise LexerError("Unterminated string literal", line, col)

    def _scan_raw_string(self, line: int, col: int) -> None:
        """Scan ``r"..."`` or ``r#"..."#`` after the prefix has been consumed."""
        hashes = 0
        while self._current() == "#":
            self._advance()
            hashes += 1
        if self._current() != '"':
            raise LexerError("Malformed raw string literal", line, col)
        self._advance()  # opening "
        terminator = '"' + "#" * hashes
        start = self._pos
        while self._pos < len(self._source):
            if self._source.startswith(terminator, self._pos):
                value = self._source[start : self._pos]
                for _ in terminator:
                    self._advance()
                self._tokens.append(Token(TokenType.STRING, value, line, col))
                return
            self._advance()
        raise LexerError("Unterminated raw string literal", line, col)

    def _scan_char_or_lifetime(self, line: int, col: int) -> None:
        """Scan a character literal (``'a'``, ``'\\n'``) or a lifetime (``'a``)."""
        nxt = self._peek()
        if nxt == "\\" or (nxt and self._peek(2) == "'"):
            self._advance()  # opening '
            start = self._pos
            while self._pos < len(self._source) and self._current() != "'":
                if self._current() == "\\":
                    self._advance()
                if self._current() == "\n" or self._pos >= len(self._source):
                    raise LexerError("Unterminated character literal", line, col)
                self._advance()
            if self._pos >= len(self._source):
                raise LexerError("Unterminated character literal", line, col)
            value = self._source[start : self._pos]
            self._advance()  # closing '
            self._tokens.append(Token(TokenType.CHAR, value, line, col))
            return
        if nxt.isalpha() or nxt == "_":
            self._advance()  # '
            start = self._pos
            while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
                self._advance()
            self._tokens.append(Token(TokenType.LIFETIME, "'" + self._source[start : self._pos], line, col))
            return
        raise LexerError("Unexpected character: \"'\"", line, col)

    def _scan_number(self, line: int, col: int) -> None:
        """Scan an integer or floating-point literal, including type suffixes.

        A float requires at least one digit after the decimal point, so that
        ``0..10`` stays an integer followed by a range operator.
        """
        start = self._pos
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()

        if self._current() == "." and self._peek().isdigit():
            self._advance()  # consume the '.'
            while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
                self._advance()
            self._tokens.append(Token(TokenType.FLOAT, self._source[start : self._pos], line, col))
        else:
            self._tokens.append(Token(TokenType.INTEGER, self._source[start : self._pos], line, col))

    def _scan_identifier_or_keyword(self, line: int, col: int) -> None:
        """Scan an identifier and map it to a keyword token type if applicable.

        Also recognises the literal prefixes ``r"``, ``r#"``, ``b"``, ``b'``,
        ``br"`` and raw identifiers such as ``r#type``.
        """
        ch = self._current()
        nxt = self._peek()
        if ch == "r" and (nxt == '"' or (nxt == "#" and self._peek(2) in ('"', "#"))):
            self._advance()  # r
            self._scan_raw_string(line, col)
            return
        if ch == "b" and nxt == '"':
            self._advance()  # b
            self._scan_string(line, col)
            return
        if ch == "b" and nxt == "'":
            self._advance()  # b
            self._scan_char_or_lifetime(line, col)
            return
        if ch == "b" and nxt == "r" and self._peek(2) in ('"', "#"):
            self._advance()  # b
            self._advance()  # r
            self._scan_raw_string(line, col)
            return

        raw = ch == "r" and nxt == "#"
        if raw:
            self._advance()  # r
            self._advance()  # #
        start = self._pos
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        value = self._source[start : self._pos]
        # A raw identifier is never a keyword: r#type is the identifier "type".
        token_type = TokenType.IDENTIFIER if raw else _KEYWORDS.get(value, TokenType.IDENTIFIER)
        self._tokens.append(Token(token_type, value, line, col))
