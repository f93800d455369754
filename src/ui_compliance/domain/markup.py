"""
Parser-independent markup AST.

The parser gateway converts a concrete syntax tree into these immutable nodes,
so rules never touch the third-party parser API. Positions are character
based: line is 1-based, column is a 0-based offset into the line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from ui_compliance.domain.entities import CodeLocation, FixRange, SourcePosition


@dataclass(frozen=True)
class Span:
    """Start (inclusive) and end (exclusive) of a node."""
    start: SourcePosition
    end: SourcePosition

    def location(self) -> CodeLocation:
        """1-based location for reporting."""
        return CodeLocation(
            line=self.start.line,
            column=self.start.column + 1,
            end_line=self.end.line,
            end_column=self.end.column + 1,
        )

    def to_range(self) -> FixRange:
        return FixRange(self.start, self.end)


def advance(position: SourcePosition, text: str) -> SourcePosition:
    """Position reached after reading `text` starting at `position`."""
    newlines = text.count("\n")
    if not newlines:
        return SourcePosition(position.line, position.column + len(text))
    return SourcePosition(position.line + newlines, len(text) - text.rfind("\n") - 1)


class ValueKind(Enum):
    """Shape of an attribute value."""
    NONE = "none"              # <input disabled />
    STRING = "string"          # attr="literal"
    EXPRESSION = "expression"  # attr={...}
    ELEMENT = "element"        # attr=<Other />


@dataclass(frozen=True)
class AttributeValue:
    """
    Attribute value as written.

    `literal` holds the string when the value is a quoted string or an
    expression that is a plain string literal; `callee` holds the called
    function name when the expression is a call (t('key') -> "t").
    """

    kind: ValueKind
    raw: str
    span: Span | None = None
    literal: str | None = None
    literal_start: SourcePosition | None = None
    """Position of the first character inside the quotes of `literal`."""
    callee: str | None = None
    object_keys: tuple[str, ...] = ()
    """Property keys when the expression is an object literal (style={{...}})."""
    object_entries: tuple[tuple[str, str], ...] = ()
    """(key, value source text) pairs of an object literal."""
    numeric: float | None = None

    @property
    def text(self) -> str:
        """Best textual view of the value: the literal if there is one, else the raw source."""
        return self.literal if self.literal is not None else self.raw


@dataclass(frozen=True)
class MarkupAttribute:
    name: str
    value: AttributeValue
    span: Span

    @property
    def has_value(self) -> bool:
        return self.value.kind is not ValueKind.NONE


@dataclass(frozen=True)
class MarkupText:
    """A text child. `is_expression` marks a string literal wrapped in braces: {"Hello"}."""
    value: str
    span: Span
    is_expression: bool = False


@dataclass(frozen=True)
class MarkupElement:
    """
    An element: <Tag ...>children</Tag> or <Tag ... />.

    `span` covers the opening (or self-closing) tag; `tag_span` covers the tag
    name inside it and `closing_tag_span` the name inside the closing tag.
    Fragments (<>...</>) have an empty tag.
    """

    tag: str
    attributes: tuple[MarkupAttribute, ...]
    children: tuple["MarkupNode", ...]
    span: Span
    tag_span: Span | None = None
    closing_tag_span: Span | None = None
    self_closing: bool = False

    def attribute(self, name: str) -> MarkupAttribute | None:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def has_attribute(self, name: str) -> bool:
        return self.attribute(name) is not None

    def attribute_text(self, name: str) -> str | None:
        """Literal text (or raw source) of an attribute; None when absent."""
        attr = self.attribute(name)
        if attr is None:
            return None
        return attr.value.text

    @property
    def is_fragment(self) -> bool:
        return not self.tag

    @property
    def is_component(self) -> bool:
        """Capitalized tags are components; lowercase tags are host (HTML) elements."""
        return bool(self.tag) and self.tag[0].isupper()

    def has_text_content(self) -> bool:
        """True if a direct text child carries non-whitespace text."""
        return any(
            isinstance(child, MarkupText) and child.value.strip()
            for child in self.children
        )

    def iter_elements(self) -> Iterator["MarkupElement"]:
        """This element and every descendant element in document order."""
        yield self
        for child in self.children:
            if isinstance(child, MarkupElement):
                yield from child.iter_elements()

    def iter_texts(self) -> Iterator[MarkupText]:
        for child in self.children:
            if isinstance(child, MarkupText):
                yield child
            else:
                yield from child.iter_texts()


MarkupNode = Union[MarkupElement, MarkupText]


@dataclass(frozen=True)
class CallSite:
    """
    A call expression in script code.

    callee is the full callee source ("t", "i18n.t", "price.toFixed");
    method and receiver are split out for member calls.
    """

    callee: str
    span: Span
    method: str | None = None
    receiver: str | None = None
    first_string_argument: str | None = None


class LiteralContext(Enum):
    """Where a string literal appears."""
    JSX_EXPRESSION = "jsx-expression"            # <Text>{"Hello"}</Text>
    TRANSLATION_ARGUMENT = "translation-argument"  # t("key")
    OTHER = "other"


@dataclass(frozen=True)
class StringLiteral:
    value: str
    span: Span
    context: LiteralContext = LiteralContext.OTHER


@dataclass(frozen=True)
class PluralTernary:
    """count === 1 ? "item" : "items" """
    singular: str
    plural: str
    span: Span


@dataclass(frozen=True)
class TemplateLiteral:
    """Static text parts of a template string."""
    parts: tuple[str, ...]
    span: Span


@dataclass(frozen=True)
class MarkupDocument:
    """Root of a parsed file: top-level elements plus script-level sites."""

    elements: tuple[MarkupElement, ...] = ()
    calls: tuple[CallSite, ...] = ()
    strings: tuple[StringLiteral, ...] = ()
    plural_ternaries: tuple[PluralTernary, ...] = ()
    templates: tuple[TemplateLiteral, ...] = ()

    def iter_elements(self) -> Iterator[MarkupElement]:
        """Every element in document order (pre-order)."""
        for element in self.elements:
            yield from element.iter_elements()

    def iter_texts(self) -> Iterator[MarkupText]:
        for element in self.elements:
            yield from element.iter_texts()

    def iter_attributes(self) -> Iterator[tuple[MarkupElement, MarkupAttribute]]:
        for element in self.iter_elements():
            for attr in element.attributes:
                yield element, attr
