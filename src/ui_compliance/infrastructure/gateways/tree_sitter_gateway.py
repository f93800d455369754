"""
Tree-sitter Gateway - markup parser front-end.

Parses TSX/JSX/TS sources with tree-sitter-typescript and converts the
concrete syntax tree into the immutable markup AST of ui_compliance.domain.markup.
Tree-sitter reports byte columns; everything handed to the domain is in
character columns.
"""

import logging
from functools import lru_cache
from pathlib import PurePath

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ui_compliance.domain.constants import is_translation_callee
from ui_compliance.domain.entities import FileKind, SourcePosition
from ui_compliance.domain.errors import ParseError
from ui_compliance.domain.markup import (
    AttributeValue,
    CallSite,
    LiteralContext,
    MarkupAttribute,
    MarkupDocument,
    MarkupElement,
    MarkupNode,
    MarkupText,
    PluralTernary,
    Span,
    StringLiteral,
    TemplateLiteral,
    ValueKind,
)
from ui_compliance.domain.protocols import MarkupParserProtocol

logger = logging.getLogger(__name__)

ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})
# Suffixes parsed with the plain TypeScript grammar (no markup allowed).
TYPESCRIPT_SUFFIXES = frozenset({".ts", ".mts", ".cts"})


@lru_cache(maxsize=None)
def _language(name: str) -> Language:
    if name == "typescript":
        return Language(tree_sitter_typescript.language_typescript())
    return Language(tree_sitter_typescript.language_tsx())


class _SourceText:
    """Source bytes plus byte -> character column conversion."""

    def __init__(self, source: str) -> None:
        self.data = source.encode("utf-8")
        self._lines = self.data.split(b"\n")

    def text(self, node: Node) -> str:
        return self.data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def position(self, point: tuple[int, int]) -> SourcePosition:
        row, byte_column = point[0], point[1]
        line = self._lines[row] if row < len(self._lines) else b""
        prefix = line[:byte_column]
        column = byte_column if prefix.isascii() else len(prefix.decode("utf-8", errors="replace"))
        return SourcePosition(row + 1, column)

    def span(self, node: Node) -> Span:
        return Span(self.position(node.start_point), self.position(node.end_point))


def _code_children(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _first_code_child(node: Node | None) -> Node | None:
    if node is None:
        return None
    children = _code_children(node)
    return children[0] if children else None


def _is_static_template(node: Node) -> bool:
    return node.type == "template_string" and not any(
        child.type == "template_substitution" for child in node.named_children
    )


class _TreeConverter:
    """One-shot conversion of a tree-sitter tree into a MarkupDocument."""

    def __init__(self, source: _SourceText) -> None:
        self._src = source

    # ------------------------------------------------------------------ #
    # Markup
    # ------------------------------------------------------------------ #

    def collect_elements(self, node: Node) -> list[MarkupElement]:
        """Outermost markup elements inside `node`, in document order."""
        found: list[MarkupElement] = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type in ELEMENT_TYPES:
                found.append(self.element(current))
                continue
            stack.extend(reversed(current.children))
        return found

    def element(self, node: Node) -> MarkupElement:
        if node.type == "jsx_self_closing_element":
            opening, closing = node, None
        else:
            opening = node.child_by_field_name("open_tag") or node.children[0]
            closing = node.child_by_field_name("close_tag") or next(
                (c for c in node.children if c.type == "jsx_closing_element"), None
            )

        name_node = opening.child_by_field_name("name")
        attributes: list[MarkupAttribute] = []
        nested: list[MarkupNode] = []
        for child in opening.named_children:
            if child.type == "jsx_attribute":
                attribute, elements = self.attribute(child)
                attributes.append(attribute)
                nested.extend(elements)

        children: list[MarkupNode] = list(nested)
        if closing is not None:
            for child in node.named_children:
                if child.type in ("jsx_opening_element", "jsx_closing_element"):
                    continue
                children.extend(self.child(child))

        closing_name = closing.child_by_field_name("name") if closing is not None else None
        return MarkupElement(
            tag=self._src.text(name_node) if name_node is not None else "",
            attributes=tuple(attributes),
            children=tuple(children),
            span=self._src.span(opening),
            tag_span=self._src.span(name_node) if name_node is not None else None,
            closing_tag_span=self._src.span(closing_name) if closing_name is not None else None,
            self_closing=closing is None,
        )

    def child(self, node: Node) -> list[MarkupNode]:
        if node.type == "jsx_text":
            value = self._src.text(node)
            return [MarkupText(value, self._src.span(node))] if value.strip() else []
        if node.type in ELEMENT_TYPES:
            return [self.element(node)]
        if node.type == "jsx_expression":
            inner = _first_code_child(node)
            if inner is None:
                return []
            if inner.type == "string" or _is_static_template(inner):
                return [MarkupText(self._src.text(inner)[1:-1], self._src.span(inner), is_expression=True)]
            return list(self.collect_elements(inner))
        return []

    def attribute(self, node: Node) -> tuple[MarkupAttribute, list[MarkupElement]]:
        parts = node.named_children
        name = self._src.text(parts[0]) if parts else ""
        value_node = parts[1] if len(parts) > 1 else None
        value, elements = self.attribute_value(value_node)
        return MarkupAttribute(name=name, value=value, span=self._src.span(node)), elements

    def attribute_value(self, node: Node | None) -> tuple[AttributeValue, list[MarkupElement]]:
        if node is None:
            return AttributeValue(kind=ValueKind.NONE, raw=""), []
        raw = self._src.text(node)
        span = self._src.span(node)
        if node.type == "string":
            return AttributeValue(
                kind=ValueKind.STRING,
                raw=raw,
                span=span,
                literal=raw[1:-1],
                literal_start=SourcePosition(span.start.line, span.start.column + 1),
            ), []
        if node.type in ELEMENT_TYPES:
            return AttributeValue(kind=ValueKind.ELEMENT, raw=raw, span=span), [self.element(node)]

        inner = _first_code_child(node) if node.type == "jsx_expression" else node
        if inner is None:
            return AttributeValue(kind=ValueKind.EXPRESSION, raw=raw, span=span), []
        elements = self.collect_elements(inner)
        inner_text = self._src.text(inner)
        fields: dict[str, object] = {}
        if inner.type == "string" or _is_static_template(inner):
            start = self._src.position(inner.start_point)
            fields["literal"] = inner_text[1:-1]
            fields["literal_start"] = SourcePosition(start.line, start.column + 1)
        elif inner.type == "call_expression":
            function = inner.child_by_field_name("function")
            fields["callee"] = self._src.text(function) if function is not None else None
        elif inner.type == "object":
            entries = self.object_entries(inner)
            fields["object_keys"] = tuple(key for key, _ in entries)
            fields["object_entries"] = tuple(entries)
        else:
            fields["numeric"] = _as_number(inner_text)
        return AttributeValue(kind=ValueKind.EXPRESSION, raw=raw, span=span, **fields), elements

    def object_entries(self, node: Node) -> list[tuple[str, str]]:
        entries: list[tuple[str, str]] = []
        for child in node.named_children:
            if child.type == "pair":
                key = child.child_by_field_name("key")
                value = child.child_by_field_name("value")
                if key is None:
                    continue
                entries.append((
                    self._src.text(key).strip("'\"`"),
                    self._src.text(value) if value is not None else "",
                ))
            elif child.type == "shorthand_property_identifier":
                text = self._src.text(child)
                entries.append((text, text))
        return entries

    # ------------------------------------------------------------------ #
    # Script-level sites
    # ------------------------------------------------------------------ #

    def script_sites(self, root: Node) -> dict[str, tuple]:
        calls: list[CallSite] = []
        strings: list[StringLiteral] = []
        ternaries: list[PluralTernary] = []
        templates: list[TemplateLiteral] = []

        stack: list[tuple[Node, Node | None, Node | None]] = [(root, None, None)]
        while stack:
            node, parent, grandparent = stack.pop()
            kind = node.type
            if kind == "call_expression":
                calls.append(self.call_site(node))
            elif kind == "string":
                strings.append(StringLiteral(
                    value=self._src.text(node)[1:-1],
                    span=self._src.span(node),
                    context=self._literal_context(parent, grandparent),
                ))
                continue
            elif kind == "template_string":
                templates.append(TemplateLiteral(self.template_parts(node), self._src.span(node)))
            elif kind == "ternary_expression":
                ternary = self.plural_ternary(node)
                if ternary is not None:
                    ternaries.append(ternary)
            for child in reversed(node.children):
                stack.append((child, node, parent))

        return {
            "calls": tuple(calls),
            "strings": tuple(strings),
            "plural_ternaries": tuple(ternaries),
            "templates": tuple(templates),
        }

    def _literal_context(self, parent: Node | None, grandparent: Node | None) -> LiteralContext:
        if parent is None:
            return LiteralContext.OTHER
        if parent.type == "jsx_expression":
            return LiteralContext.JSX_EXPRESSION
        if parent.type == "arguments" and grandparent is not None and grandparent.type == "call_expression":
            function = grandparent.child_by_field_name("function")
            if function is not None and is_translation_callee(self._src.text(function)):
                return LiteralContext.TRANSLATION_ARGUMENT
        return LiteralContext.OTHER

    def call_site(self, node: Node) -> CallSite:
        function = node.child_by_field_name("function")
        callee = self._src.text(function) if function is not None else ""
        method = receiver = None
        if function is not None and function.type == "member_expression":
            prop = function.child_by_field_name("property")
            obj = function.child_by_field_name("object")
            method = self._src.text(prop) if prop is not None else None
            receiver = self._src.text(obj) if obj is not None else None
        first = _first_code_child(node.child_by_field_name("arguments"))
        argument = None
        if first is not None and (first.type == "string" or _is_static_template(first)):
            argument = self._src.text(first)[1:-1]
        return CallSite(
            callee=callee,
            span=self._src.span(node),
            method=method,
            receiver=receiver,
            first_string_argument=argument,
        )

    def template_parts(self, node: Node) -> tuple[str, ...]:
        """Static text between substitutions."""
        data = self._src.data
        parts: list[str] = []
        cursor = node.start_byte + 1
        for child in node.named_children:
            if child.type == "template_substitution":
                parts.append(data[cursor:child.start_byte].decode("utf-8", errors="replace"))
                cursor = child.end_byte
        parts.append(data[cursor:node.end_byte - 1].decode("utf-8", errors="replace"))
        return tuple(part for part in parts if part)

    def plural_ternary(self, node: Node) -> PluralTernary | None:
        """count === 1 ? "item" : "items" """
        condition = _unwrap(node.child_by_field_name("condition"))
        consequence = _unwrap(node.child_by_field_name("consequence"))
        alternative = _unwrap(node.child_by_field_name("alternative"))
        if condition is None or consequence is None or alternative is None:
            return None
        if condition.type != "binary_expression":
            return None
        operator = condition.child_by_field_name("operator")
        right = condition.child_by_field_name("right")
        if operator is None or right is None or self._src.text(operator) not in ("===", "=="):
            return None
        if right.type != "number" or _as_number(self._src.text(right)) != 1:
            return None
        if consequence.type != "string" or alternative.type != "string":
            return None
        return PluralTernary(
            singular=self._src.text(consequence)[1:-1],
            plural=self._src.text(alternative)[1:-1],
            span=self._src.span(node),
        )


def _unwrap(node: Node | None) -> Node | None:
    while node is not None and node.type == "parenthesized_expression":
        node = _first_code_child(node)
    return node


def _as_number(text: str) -> float | None:
    try:
        return float(text.replace(" ", "").replace("_", ""))
    except ValueError:
        return None


def _first_error(root: Node) -> Node | None:
    """First ERROR or missing node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


class TreeSitterGateway(MarkupParserProtocol):
    """Markup parser gateway backed by tree-sitter-typescript."""

    def parse(self, source: str, file_kind: FileKind, file_path: str | None = None) -> MarkupDocument:
        if not file_kind.is_parseable:
            raise ParseError(f"{file_kind.value} files are not parsed")
        grammar = "tsx"
        if file_path is not None and PurePath(file_path).suffix.lower() in TYPESCRIPT_SUFFIXES:
            grammar = "typescript"

        text = _SourceText(source)
        # Parser instances are not shared between threads.
        tree = Parser(_language(grammar)).parse(text.data)
        root = tree.root_node
        if root.has_error:
            error = _first_error(root) or root
            position = text.position(error.start_point)
            if error.is_missing:
                message = f"Syntax error: missing {error.type}"
            else:
                snippet = text.text(error).strip().splitlines()
                near = snippet[0][:40] if snippet else ""
                message = f"Syntax error: unexpected {near!r}" if near else "Syntax error"
            logger.debug("Parse failed for %s at %s", file_path or "<source>", position)
            raise ParseError(message, line=position.line, column=position.column + 1)

        converter = _TreeConverter(text)
        return MarkupDocument(elements=tuple(converter.collect_elements(root)), **converter.script_sites(root))
