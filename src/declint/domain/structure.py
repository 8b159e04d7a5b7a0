"""Structure model of one source file: syntax tokens and the declaration tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING

from declint.domain.constants import SOURCEKITTEN_DECL_PREFIX, SOURCEKITTEN_SYNTAX_PREFIX
from declint.domain.errors import StructuralParseError

if TYPE_CHECKING:
    from declint.domain.queries import RangeQuery


class TokenKind(Enum):
    """Syntax map token kinds, named after their SourceKitten suffix."""

    ARGUMENT = "argument"
    ATTRIBUTE_BUILTIN = "attribute.builtin"
    ATTRIBUTE_ID = "attribute.id"
    BUILDCONFIG_ID = "buildconfig.id"
    BUILDCONFIG_KEYWORD = "buildconfig.keyword"
    COMMENT = "comment"
    COMMENT_MARK = "comment.mark"
    COMMENT_URL = "comment.url"
    DOC_COMMENT = "doccomment"
    DOC_COMMENT_FIELD = "doccomment.field"
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    NUMBER = "number"
    OBJECT_LITERAL = "objectliteral"
    PARAMETER = "parameter"
    PLACEHOLDER = "placeholder"
    POUND_DIRECTIVE_KEYWORD = "pounddirective.keyword"
    STRING = "string"
    STRING_INTERPOLATION_ANCHOR = "string_interpolation_anchor"
    TYPE_IDENTIFIER = "typeidentifier"
    UNKNOWN = "unknown"

    @classmethod
    def from_sourcekitten(cls, raw: str) -> TokenKind:
        """Map 'source.lang.swift.syntaxtype.keyword' (or bare 'keyword') to a kind."""
        name = raw.removeprefix(SOURCEKITTEN_SYNTAX_PREFIX)
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


class DeclarationKind(Enum):
    """Closed set of Swift declaration kinds reported by SourceKitten."""

    ASSOCIATED_TYPE = "associatedtype"
    CLASS = "class"
    ENUM = "enum"
    ENUM_CASE = "enumcase"
    ENUM_ELEMENT = "enumelement"
    EXTENSION = "extension"
    EXTENSION_CLASS = "extension.class"
    EXTENSION_ENUM = "extension.enum"
    EXTENSION_PROTOCOL = "extension.protocol"
    EXTENSION_STRUCT = "extension.struct"
    FUNCTION_ACCESSOR_ADDRESS = "function.accessor.address"
    FUNCTION_ACCESSOR_DIDSET = "function.accessor.didset"
    FUNCTION_ACCESSOR_GETTER = "function.accessor.getter"
    FUNCTION_ACCESSOR_MODIFY = "function.accessor.modify"
    FUNCTION_ACCESSOR_MUTABLE_ADDRESS = "function.accessor.mutableaddress"
    FUNCTION_ACCESSOR_READ = "function.accessor.read"
    FUNCTION_ACCESSOR_SETTER = "function.accessor.setter"
    FUNCTION_ACCESSOR_WILLSET = "function.accessor.willset"
    FUNCTION_CONSTRUCTOR = "function.constructor"
    FUNCTION_DESTRUCTOR = "function.destructor"
    FUNCTION_FREE = "function.free"
    FUNCTION_METHOD_CLASS = "function.method.class"
    FUNCTION_METHOD_INSTANCE = "function.method.instance"
    FUNCTION_METHOD_STATIC = "function.method.static"
    FUNCTION_OPERATOR = "function.operator"
    FUNCTION_OPERATOR_INFIX = "function.operator.infix"
    FUNCTION_OPERATOR_POSTFIX = "function.operator.postfix"
    FUNCTION_OPERATOR_PREFIX = "function.operator.prefix"
    FUNCTION_SUBSCRIPT = "function.subscript"
    GENERIC_TYPE_PARAM = "generic_type_param"
    MODULE = "module"
    OPAQUE_TYPE = "opaquetype"
    PRECEDENCE_GROUP = "precedencegroup"
    PROTOCOL = "protocol"
    STRUCT = "struct"
    TYPEALIAS = "typealias"
    VAR_CLASS = "var.class"
    VAR_GLOBAL = "var.global"
    VAR_INSTANCE = "var.instance"
    VAR_LOCAL = "var.local"
    VAR_PARAMETER = "var.parameter"
    VAR_STATIC = "var.static"

    @classmethod
    def from_sourcekitten(cls, raw: str | None) -> DeclarationKind | None:
        """Return the declaration kind, or None for statements, expressions and the file root."""
        if not raw or not raw.startswith(SOURCEKITTEN_DECL_PREFIX):
            return None
        try:
            return cls(raw[len(SOURCEKITTEN_DECL_PREFIX):])
        except ValueError:
            return None


@dataclass(frozen=True)
class ByteRange:
    """Half-open byte range [offset, offset + length)."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def contains(self, offset: int) -> bool:
        return self.offset <= offset < self.end

    def intersects(self, other: ByteRange) -> bool:
        return self.offset < other.end and other.offset < self.end


@dataclass(frozen=True)
class Token:
    """One syntax map entry. Offsets and lengths are in UTF-8 bytes."""

    kind: TokenKind
    offset: int
    length: int
    text: str

    @property
    def range(self) -> ByteRange:
        return ByteRange(self.offset, self.length)


@dataclass(frozen=True)
class AttributeOccurrence:
    name: str
    offset: int
    length: int

    @property
    def range(self) -> ByteRange:
        return ByteRange(self.offset, self.length)


@dataclass(frozen=True)
class DeclarationNode:
    """
    A node of the declaration tree.

    kind is None for nodes that are not declarations (the file root,
    statements, expressions); those still carry children.
    """

    kind: DeclarationKind | None
    offset: int
    length: int
    attributes: tuple[AttributeOccurrence, ...] = ()
    children: tuple[DeclarationNode, ...] = ()

    @property
    def range(self) -> ByteRange:
        return ByteRange(self.offset, self.length)


@dataclass(frozen=True)
class StructureModel:
    """
    Parsed representation of one file, produced by a structure provider.

    Immutable; rules only read it, so one model may be shared by rules
    running concurrently.
    """

    path: str | None
    contents: bytes
    tokens: tuple[Token, ...]
    root: DeclarationNode

    @cached_property
    def text(self) -> str:
        """The decoded file contents."""
        try:
            return self.contents.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StructuralParseError(f"contents are not valid UTF-8: {exc}", self.path) from exc

    @cached_property
    def query(self) -> RangeQuery:
        """Range query bound to this file, built once and shared by every rule."""
        from declint.domain.queries import RangeQuery

        return RangeQuery(self)

    @property
    def byte_length(self) -> int:
        return len(self.contents)
