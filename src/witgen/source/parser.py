# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for the Rust item subset witgen understands.

Builds a :class:`~witgen.model.syntax.SourceFile` holding the top-level
structs, enums and impl blocks of a module together with their attributes
and signatures. Function bodies, macro invocations and every other kind of
item are skipped by delimiter matching; they are never needed to describe
an interface.
"""

from witgen.errors import WitgenError
from witgen.model.syntax import (
    Attribute,
    EnumItem,
    FieldDef,
    FieldStyle,
    ImplItem,
    MethodDef,
    OpaqueType,
    Param,
    PathType,
    ReceiverParam,
    ReferenceType,
    SourceFile,
    StructItem,
    TupleType,
    TypedParam,
    TypeExpr,
    VariantDef,
)
from witgen.source.lexer import Token, TokenType, tokenize

# ###############
# Public Interface
# ###############


class ParseError(WitgenError):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse(source: str) -> SourceFile:
    """Parse Rust source text into a syntax tree.

    Args:
        source: The full text of a Rust source file.

    Returns:
        A SourceFile with the top-level structs, enums and impl blocks.

    Raises:
        LexerError: If the source contains invalid characters or unterminated literals.
        ParseError: If the source is syntactically invalid.
    """
    tokens = tokenize(source)
    return _Parser(tokens).parse()


# ################
# Implementation
# ################

_OPENERS: dict[TokenType, TokenType] = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
    TokenType.LBRACE: TokenType.RBRACE,
}

_CLOSERS: frozenset[TokenType] = frozenset(_OPENERS.values())

# Keywords that may still appear where a name is expected (e.g. `type = "..."`
# inside an attribute argument list).
_NAME_TOKENS: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.STRUCT,
        TokenType.ENUM,
        TokenType.IMPL,
        TokenType.FN,
        TokenType.PUB,
        TokenType.FOR,
        TokenType.WHERE,
        TokenType.MUT,
        TokenType.REF,
        TokenType.USE,
        TokenType.MOD,
        TokenType.CONST,
        TokenType.STATIC,
        TokenType.TYPE,
        TokenType.TRAIT,
        TokenType.ASYNC,
        TokenType.UNSAFE,
        TokenType.EXTERN,
        TokenType.DYN,
    }
)

_RESTRICTED_VISIBILITY = frozenset({"crate", "self", "super", "in"})


class _Parser:
    """Recursive-descent parser for Rust token streams."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> SourceFile:
        """Parse the full token stream and return a SourceFile."""
        result = SourceFile()
        while not self._at_end():
            self._parse_item(result)
        return result

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._tokens[self._pos]

    def _peek_type(self, offset: int = 0) -> TokenType:
        """Return the token type *offset* tokens ahead of the current one."""
        index = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[index].type

    def _peek_value(self, offset: int = 0) -> str:
        """Return the token text *offset* tokens ahead of the current one."""
        index = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[index].value

    def _at_end(self) -> bool:
        """Return True if the current token is the EOF token."""
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises ParseError if the current token does not match.
        """
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join(repr(t.value) for t in types)
            raise ParseError(
                f"Expected {expected}, got {tok.value!r}",
                tok.line,
                tok.column,
            )
        return self._advance()

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types (without
        consuming).
        """
        return self._peek_type() in types

    def _check_punct(self, value: str) -> bool:
        """Return True if the current token is the generic punctuation *value*."""
        return self._check(TokenType.PUNCT) and self._current().value == value

    def _error(self, message: str) -> ParseError:
        tok = self._current()
        return ParseError(message, tok.line, tok.column)

    # ------------------------------------------------------------------
    # Skipping helpers
    # ------------------------------------------------------------------

    def _skip_group(self) -> None:
        """Consume a delimited group starting at the current opening delimiter."""
        open_tok = self._current()
        if open_tok.type not in _OPENERS:
            raise self._error(f"Expected '(', '[' or '{{', got {open_tok.value!r}")
        stack = [_OPENERS[open_tok.type]]
        self._advance()
        while stack:
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError(
                    f"Unclosed delimiter {open_tok.value!r}",
                    open_tok.line,
                    open_tok.column,
                )
            if tok.type in _OPENERS:
                stack.append(_OPENERS[tok.type])
            elif tok.type in _CLOSERS:
                if tok.type != stack[-1]:
                    raise self._error(f"Mismatched closing delimiter {tok.value!r}")
                stack.pop()
            self._advance()

    def _skip_until_semicolon(self) -> None:
        """Consume tokens through the next ';' that is not nested in a group."""
        while not self._check(TokenType.SEMICOLON):
            if self._at_end():
                raise self._error("Expected ';' before end of file")
            if self._check(*_OPENERS):
                self._skip_group()
            elif self._check(*_CLOSERS):
                raise self._error(f"Unexpected {self._current().value!r}")
            else:
                self._advance()
        self._advance()

    def _skip_item_body(self) -> None:
        """Consume tokens through a terminating ';' or a top-level '{...}' group."""
        while True:
            if self._at_end():
                raise self._error("Unexpected end of file inside item")
            if self._check(TokenType.SEMICOLON):
                self._advance()
                return
            if self._check(TokenType.LBRACE):
                self._skip_group()
                return
            if self._check(*_OPENERS):
                self._skip_group()
            elif self._check(*_CLOSERS):
                raise self._error(f"Unexpected {self._current().value!r}")
            else:
                self._advance()

    def _skip_generics(self) -> None:
        """Consume an optional ``<...>`` generic parameter list."""
        if not self._check(TokenType.LANGLE):
            return
        depth = 0
        while True:
            if self._at_end():
                raise self._error("Unclosed generic parameter list")
            if self._check(TokenType.LANGLE):
                depth += 1
                self._advance()
            elif self._check(TokenType.RANGLE):
                depth -= 1
                self._advance()
                if depth == 0:
                    return
            elif self._check(*_OPENERS):
                self._skip_group()
            else:
                self._advance()

    def _skip_where_clause(self) -> None:
        """Consume an optional ``where`` clause up to the item body or ';'."""
        if not self._check(TokenType.WHERE):
            return
        while not self._check(TokenType.LBRACE, TokenType.SEMICOLON):
            if self._at_end():
                raise self._error("Unexpected end of file in where clause")
            if self._check(TokenType.LPAREN, TokenType.LBRACKET):
                self._skip_group()
            else:
                self._advance()

    def _skip_visibility(self) -> None:
        """Consume ``pub``, ``pub(crate)``, ``pub(in path)`` and friends."""
        if not self._check(TokenType.PUB):
            return
        self._advance()
        if self._check(TokenType.LPAREN) and self._peek_value(1) in _RESTRICTED_VISIBILITY:
            self._skip_group()

    def _skip_macro_invocation(self) -> None:
        """Consume ``path!(...)``, ``path![...]``, ``path!{...}`` or ``macro_rules! name {...}``."""
        self._advance()
        while self._check(TokenType.PATH_SEP):
            self._advance()
            self._expect(TokenType.IDENTIFIER)
        self._expect(TokenType.BANG)
        if self._check(TokenType.IDENTIFIER):
            self._advance()
        self._skip_group()
        if self._check(TokenType.SEMICOLON):
            self._advance()

    def _at_macro_invocation(self) -> bool:
        """Return True if the tokens ahead spell ``ident [:: ident]* !``."""
        offset = 0
        if self._peek_type(offset) != TokenType.IDENTIFIER:
            return False
        offset += 1
        while self._peek_type(offset) == TokenType.PATH_SEP and self._peek_type(offset + 1) == TokenType.IDENTIFIER:
            offset += 2
        return self._peek_type(offset) == TokenType.BANG

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _parse_outer_attributes(self) -> list[Attribute]:
        """Parse ``#[...]`` attributes; inner ``#![...]`` attributes are skipped."""
        attributes: list[Attribute] = []
        while self._check(TokenType.HASH):
            if self._peek_type(1) == TokenType.BANG:
                self._advance()  # #
                self._advance()  # !
                self._skip_group()
                continue
            attributes.append(self._parse_attribute())
        return attributes

    def _parse_attribute(self) -> Attribute:
        """Parse: # [ path [ (args) | = literal ] ]"""
        self._expect(TokenType.HASH)
        self._expect(TokenType.LBRACKET)
        segments: list[str] = []
        if self._check(TokenType.PATH_SEP):
            self._advance()
        segments.append(self._expect(*_NAME_TOKENS).value)
        while self._check(TokenType.PATH_SEP):
            self._advance()
            segments.append(self._expect(*_NAME_TOKENS).value)

        arguments: dict[str, str] = {}
        if self._check(TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE):
            arguments = self._parse_attribute_arguments()
        while not self._check(TokenType.RBRACKET):
            if self._at_end():
                raise self._error("Unterminated attribute")
            if self._check(*_OPENERS):
                self._skip_group()
            else:
                self._advance()
        self._expect(TokenType.RBRACKET)
        return Attribute(path="::".join(segments), arguments=arguments)

    def _parse_attribute_arguments(self) -> dict[str, str]:
        """Collect the top-level ``key = "literal"`` pairs of an attribute argument list."""
        closer = _OPENERS[self._advance().type]
        arguments: dict[str, str] = {}
        entry: list[Token] = []
        while not self._check(closer):
            if self._at_end():
                raise self._error("Unterminated attribute argument list")
            if self._check(TokenType.COMMA):
                self._advance()
                _record_key_value(entry, arguments)
                entry = []
            elif self._check(*_OPENERS):
                # Nested groups never form a key = "literal" pair; mark the entry as complex.
                entry.append(self._current())
                self._skip_group()
            else:
                entry.append(self._advance())
        self._advance()
        _record_key_value(entry, arguments)
        return arguments

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def _parse_item(self, result: SourceFile) -> None:
        """Parse one top-level item, appending structs, enums and impls to *result*."""
        if self._check(TokenType.SEMICOLON):
            self._advance()
            return
        attributes = self._parse_outer_attributes()
        if self._at_end():
            return
        self._skip_visibility()

        tok = self._current()
        if tok.type == TokenType.STRUCT:
            result.items.append(self._parse_struct(attributes))
        elif tok.type == TokenType.ENUM:
            result.items.append(self._parse_enum(attributes))
        elif tok.type == TokenType.IMPL or (tok.type == TokenType.UNSAFE and self._peek_type(1) == TokenType.IMPL):
            result.items.append(self._parse_impl(attributes))
        elif tok.type in (TokenType.USE, TokenType.STATIC, TokenType.TYPE):
            self._skip_until_semicolon()
        elif tok.type == TokenType.CONST and self._peek_type(1) not in (
            TokenType.FN,
            TokenType.ASYNC,
            TokenType.UNSAFE,
            TokenType.EXTERN,
        ):
            self._skip_until_semicolon()
        elif tok.type in (
            TokenType.FN,
            TokenType.CONST,
            TokenType.ASYNC,
            TokenType.UNSAFE,
            TokenType.EXTERN,
            TokenType.MOD,
            TokenType.TRAIT,
        ):
            self._skip_item_body()
        elif self._at_macro_invocation():
            self._skip_macro_invocation()
        elif tok.type == TokenType.IDENTIFIER and tok.value in ("union", "auto", "default"):
            self._skip_item_body()
        else:
            raise ParseError(
                f"Unexpected token {tok.value!r} at top level",
                tok.line,
                tok.column,
            )

    def _parse_struct(self, attributes: list[Attribute]) -> StructItem:
        """Parse: struct <Name> [generics] ( { fields } | ( fields ) ; | ; )"""
        self._expect(TokenType.STRUCT)
        name_tok = self._expect(TokenType.IDENTIFIER)
        self._skip_generics()
        self._skip_where_clause()
        struct = StructItem(name=name_tok.value, attributes=attributes)
        if self._check(TokenType.LBRACE):
            struct.style = FieldStyle.NAMED
            struct.fields = self._parse_named_fields()
        elif self._check(TokenType.LPAREN):
            struct.style = FieldStyle.TUPLE
            struct.fields = self._parse_tuple_fields()
            self._skip_where_clause()
            self._expect(TokenType.SEMICOLON)
        else:
            struct.style = FieldStyle.UNIT
            self._expect(TokenType.SEMICOLON)
        return struct

    def _parse_named_fields(self) -> list[FieldDef]:
        """Parse: { [attrs] [pub] name: Type [, ...] }"""
        self._expect(TokenType.LBRACE)
        fields: list[FieldDef] = []
        while not self._check(TokenType.RBRACE):
            attributes = self._parse_outer_attributes()
            self._skip_visibility()
            name_tok = self._expect(TokenType.IDENTIFIER)
            self._expect(TokenType.COLON)
            field_type = self._parse_type()
            fields.append(FieldDef(name=name_tok.value, type=field_type, attributes=attributes))
            if not self._check(TokenType.RBRACE):
                self._expect(TokenType.COMMA)
        self._expect(TokenType.RBRACE)
        return fields

    def _parse_tuple_fields(self) -> list[FieldDef]:
        """Parse: ( [attrs] [pub] Type [, ...] )"""
        self._expect(TokenType.LPAREN)
        fields: list[FieldDef] = []
        while not self._check(TokenType.RPAREN):
            attributes = self._parse_outer_attributes()
            self._skip_visibility()
            fields.append(FieldDef(type=self._parse_type(), attributes=attributes))
            if not self._check(TokenType.RPAREN):
                self._expect(TokenType.COMMA)
        self._expect(TokenType.RPAREN)
        return fields

    def _parse_enum(self, attributes: list[Attribute]) -> EnumItem:
        """Parse: enum <Name> [generics] { variant [, ...] }"""
        self._expect(TokenType.ENUM)
        name_tok = self._expect(TokenType.IDENTIFIER)
        self._skip_generics()
        self._skip_where_clause()
        enum_item = EnumItem(name=name_tok.value, attributes=attributes)
        self._expect(TokenType.LBRACE)
        while not self._check(TokenType.RBRACE):
            enum_item.variants.append(self._parse_variant())
            if not self._check(TokenType.RBRACE):
                self._expect(TokenType.COMMA)
        self._expect(TokenType.RBRACE)
        return enum_item

    def _parse_variant(self) -> VariantDef:
        """Parse: [attrs] Name [ { fields } | ( fields ) ] [= discriminant]"""
        attributes = self._parse_outer_attributes()
        self._skip_visibility()
        name_tok = self._expect(TokenType.IDENTIFIER)
        variant = VariantDef(name=name_tok.value, attributes=attributes)
        if self._check(TokenType.LBRACE):
            variant.style = FieldStyle.NAMED
            variant.fields = self._parse_named_fields()
        elif self._check(TokenType.LPAREN):
            variant.style = FieldStyle.TUPLE
            variant.fields = self._parse_tuple_fields()
        if self._check(TokenType.EQUALS):
            while not self._check(TokenType.COMMA, TokenType.RBRACE):
                if self._at_end():
                    raise self._error("Unexpected end of file in enum discriminant")
                if self._check(*_OPENERS):
                    self._skip_group()
                else:
                    self._advance()
        return variant

    def _parse_impl(self, attributes: list[Attribute]) -> ImplItem:
        """Parse: [unsafe] impl [generics] [!][Trait for] Type [where] { items }"""
        if self._check(TokenType.UNSAFE):
            self._advance()
        self._expect(TokenType.IMPL)
        self._skip_generics()
        if self._check(TokenType.BANG):
            self._advance()
        first = self._parse_type()
        trait_path: str | None = None
        self_type: TypeExpr = first
        if self._check(TokenType.FOR):
            self._advance()
            trait_path = _describe_type(first)
            self_type = self._parse_type()
        self._skip_where_clause()
        impl_item = ImplItem(self_type=self_type, trait_path=trait_path, attributes=attributes)

        self._expect(TokenType.LBRACE)
        while not self._check(TokenType.RBRACE):
            if self._at_end():
                raise self._error("Unexpected end of file in impl block")
            method = self._parse_impl_member()
            if method is not None:
                impl_item.methods.append(method)
        self._expect(TokenType.RBRACE)
        return impl_item

    def _parse_impl_member(self) -> MethodDef | None:
        """Parse one member of an impl block; only functions are returned."""
        attributes = self._parse_outer_attributes()
        if self._check(TokenType.RBRACE):
            return None
        self._skip_visibility()
        if self._check(TokenType.IDENTIFIER) and self._current().value == "default":
            self._advance()

        if self._check(TokenType.CONST) and self._peek_type(1) not in (
            TokenType.FN,
            TokenType.ASYNC,
            TokenType.UNSAFE,
            TokenType.EXTERN,
        ):
            self._skip_until_semicolon()
            return None
        if self._check(TokenType.TYPE):
            self._skip_until_semicolon()
            return None
        if self._at_macro_invocation():
            self._skip_macro_invocation()
            return None

        while self._check(TokenType.CONST, TokenType.ASYNC, TokenType.UNSAFE, TokenType.EXTERN):
            if self._advance().type == TokenType.EXTERN and self._check(TokenType.STRING):
                self._advance()
        if not self._check(TokenType.FN):
            raise self._error(f"Unexpected token {self._current().value!r} in impl block")
        return self._parse_method(attributes)

    def _parse_method(self, attributes: list[Attribute]) -> MethodDef:
        """Parse: fn name [generics] ( params ) [-> Type] [where] ( { body } | ; )"""
        self._expect(TokenType.FN)
        name_tok = self._expect(TokenType.IDENTIFIER)
        self._skip_generics()
        method = MethodDef(name=name_tok.value, attributes=attributes)

        self._expect(TokenType.LPAREN)
        while not self._check(TokenType.RPAREN):
            if self._at_end():
                raise self._error("Unexpected end of file in parameter list")
            method.params.append(self._parse_param())
            if not self._check(TokenType.RPAREN):
                self._expect(TokenType.COMMA)
        self._expect(TokenType.RPAREN)

        if self._check(TokenType.ARROW):
            self._advance()
            method.output = self._parse_type()
        self._skip_where_clause()
        if self._check(TokenType.SEMICOLON):
            self._advance()
        else:
            if not self._check(TokenType.LBRACE):
                raise self._error(f"Expected function body, got {self._current().value!r}")
            self._skip_group()
        return method

    def _parse_param(self) -> Param:
        """Parse one parameter: a receiver form or ``pattern: Type``."""
        self._parse_outer_attributes()
        receiver = self._try_parse_receiver()
        if receiver is not None:
            return receiver

        pattern: list[Token] = []
        while not self._check(TokenType.COLON):
            if self._at_end() or self._check(TokenType.COMMA, TokenType.RPAREN):
                raise self._error("Expected ':' after parameter pattern")
            if self._check(*_OPENERS):
                pattern.append(self._current())
                self._skip_group()
            else:
                pattern.append(self._advance())
        self._expect(TokenType.COLON)
        return TypedParam(binding=_binding_name(pattern), type=self._parse_type())

    def _try_parse_receiver(self) -> ReceiverParam | None:
        """Parse ``self``, ``mut self``, ``&['a] [mut] self`` or ``self: Type``; else rewind."""
        start = self._pos
        reference = False
        mutable = False
        if self._check(TokenType.AMP):
            self._advance()
            reference = True
            if self._check(TokenType.LIFETIME):
                self._advance()
        if self._check(TokenType.MUT):
            self._advance()
            mutable = True
        if self._check(TokenType.IDENTIFIER) and self._current().value == "self":
            self._advance()
            if self._check(TokenType.COMMA, TokenType.RPAREN):
                return ReceiverParam(reference=reference, mutable=mutable)
            if not reference and self._check(TokenType.COLON):
                self._advance()
                self._parse_type()
                return ReceiverParam(reference=False, mutable=mutable)
        self._pos = start
        return None

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _parse_type(self) -> TypeExpr:
        """Parse one type expression."""
        tok = self._current()
        if tok.type == TokenType.AMP:
            self._advance()
            if self._check(TokenType.LIFETIME):
                self._advance()
            mutable = False
            if self._check(TokenType.MUT):
                self._advance()
                mutable = True
            return ReferenceType(elem=self._parse_type(), mutable=mutable)
        if tok.type == TokenType.STAR:
            self._advance()
            self._expect(TokenType.CONST, TokenType.MUT)
            self._parse_type()
            return OpaqueType(description="raw pointer")
        if tok.type == TokenType.LPAREN:
            return self._parse_tuple_type()
        if tok.type == TokenType.LBRACKET:
            self._advance()
            self._parse_type()
            if self._check(TokenType.SEMICOLON):
                while not self._check(TokenType.RBRACKET):
                    if self._at_end():
                        raise self._error("Unterminated array type")
                    if self._check(*_OPENERS):
                        self._skip_group()
                    else:
                        self._advance()
                self._advance()
                return OpaqueType(description="array")
            self._expect(TokenType.RBRACKET)
            return OpaqueType(description="slice")
        if tok.type == TokenType.BANG:
            self._advance()
            return OpaqueType(description="never")
        if tok.type == TokenType.FOR:
            self._advance()
            self._skip_generics()
            self._parse_type()
            return OpaqueType(description="higher-ranked type")
        if tok.type in (TokenType.FN, TokenType.UNSAFE, TokenType.EXTERN):
            while self._check(TokenType.UNSAFE, TokenType.EXTERN, TokenType.STRING):
                self._advance()
            self._expect(TokenType.FN)
            self._skip_group()
            if self._check(TokenType.ARROW):
                self._advance()
                self._parse_type()
            return OpaqueType(description="function pointer")
        if tok.type in (TokenType.IMPL, TokenType.DYN):
            self._advance()
            self._parse_bounds()
            return OpaqueType(description=f"{tok.value} trait")
        if tok.type == TokenType.LANGLE:
            self._skip_generics()
            while self._check(TokenType.PATH_SEP):
                self._advance()
                self._expect(TokenType.IDENTIFIER)
                if self._check(TokenType.LANGLE):
                    self._parse_generic_args()
            return OpaqueType(description="qualified path")
        if tok.type == TokenType.IDENTIFIER and tok.value == "_":
            self._advance()
            return OpaqueType(description="inferred")
        if tok.type in (TokenType.IDENTIFIER, TokenType.PATH_SEP):
            return self._parse_path_type()
        raise ParseError(f"Expected type, got {tok.value!r}", tok.line, tok.column)

    def _parse_tuple_type(self) -> TypeExpr:
        """Parse ``()``, ``(T,)``, ``(A, B)``; a parenthesized ``(T)`` is opaque."""
        self._expect(TokenType.LPAREN)
        elems: list[TypeExpr] = []
        trailing_comma = False
        while not self._check(TokenType.RPAREN):
            elems.append(self._parse_type())
            trailing_comma = False
            if not self._check(TokenType.RPAREN):
                self._expect(TokenType.COMMA)
                trailing_comma = True
        self._expect(TokenType.RPAREN)
        if len(elems) == 1 and not trailing_comma:
            return OpaqueType(description="parenthesized type")
        return TupleType(elems=elems)

    def _parse_path_type(self) -> PathType:
        """Parse ``[::] Seg [<args>] (:: Seg [<args>])*``; keeps the last segment's type args."""
        if self._check(TokenType.PATH_SEP):
            self._advance()
        segments: list[str] = []
        args: list[TypeExpr] = []
        while True:
            segments.append(self._expect(TokenType.IDENTIFIER).value)
            args = []
            if self._check(TokenType.LANGLE):
                args = self._parse_generic_args()
            elif self._check(TokenType.PATH_SEP) and self._peek_type(1) == TokenType.LANGLE:
                self._advance()
                args = self._parse_generic_args()
            elif self._check(TokenType.LPAREN):
                # Fn(A, B) -> C sugar
                self._skip_group()
                if self._check(TokenType.ARROW):
                    self._advance()
                    self._parse_type()
            if self._check(TokenType.PATH_SEP) and self._peek_type(1) == TokenType.IDENTIFIER:
                self._advance()
                continue
            return PathType(segments=segments, args=args)

    def _parse_generic_args(self) -> list[TypeExpr]:
        """Parse ``<...>`` generic arguments, dropping lifetimes, consts and bindings."""
        self._expect(TokenType.LANGLE)
        args: list[TypeExpr] = []
        while not self._check(TokenType.RANGLE):
            if self._at_end():
                raise self._error("Unclosed generic argument list")
            if self._check(TokenType.LIFETIME, TokenType.INTEGER, TokenType.FLOAT, TokenType.STRING, TokenType.CHAR):
                self._advance()
            elif self._check(TokenType.LBRACE):
                self._skip_group()
            elif self._check(TokenType.IDENTIFIER) and self._peek_type(1) in (TokenType.EQUALS, TokenType.COLON):
                # Associated type binding or constraint: Item = T, Item: Bound
                self._advance()
                if self._advance().type == TokenType.EQUALS:
                    self._parse_type()
                else:
                    self._parse_bounds()
            else:
                args.append(self._parse_type())
            if not self._check(TokenType.RANGLE):
                self._expect(TokenType.COMMA)
        self._expect(TokenType.RANGLE)
        return args

    def _parse_bounds(self) -> None:
        """Parse ``Bound [+ Bound]*`` where a bound is a path, lifetime or ``?Sized``."""
        while True:
            if self._check_punct("?"):
                self._advance()
            if self._check(TokenType.LIFETIME):
                self._advance()
            elif self._check(TokenType.LPAREN):
                self._skip_group()
            else:
                self._parse_path_type()
            if not self._check_punct("+"):
                return
            self._advance()


def _record_key_value(entry: list[Token], arguments: dict[str, str]) -> None:
    """Store *entry* in *arguments* if it has the exact shape ``name = "literal"``."""
    if (
        len(entry) == 3
        and entry[0].type in _NAME_TOKENS
        and entry[1].type == TokenType.EQUALS
        and entry[2].type == TokenType.STRING
    ):
        arguments[entry[0].value] = entry[2].value


def _binding_name(pattern: list[Token]) -> str | None:
    """Return the identifier bound by ``[ref] [mut] name [@ subpattern]``, else None."""
    index = 0
    if index < len(pattern) and pattern[index].type == TokenType.REF:
        index += 1
    if index < len(pattern) and pattern[index].type == TokenType.MUT:
        index += 1
    if index >= len(pattern) or pattern[index].type != TokenType.IDENTIFIER:
        return None
    name = pattern[index]
    rest = pattern[index + 1 :]
    if rest and not (rest[0].type == TokenType.PUNCT and rest[0].value == "@"):
        return None
    if name.value == "_":
        return None
    return name.value


def _describe_type(type_expr: TypeExpr) -> str:
    """Return a short human-readable rendering of a type, used for trait paths."""
    if isinstance(type_expr, PathType):
        return "::".join(type_expr.segments)
    if isinstance(type_expr, OpaqueType):
        return type_expr.description
    return type_expr.kind
