"""Source files: immutable parsed snapshots of one virtual file.

Text is parsed with tree-sitter using the TypeScript grammar (the TSX grammar
for ``.tsx`` files). Top-level statements, their declared names and parse
errors are read off node spans of the resulting tree.

``update_source_file`` applies the edit to a copy of the previous tree and
hands it back to the parser, which reuses every subtree the edit did not
touch. Tree-sitter works in UTF-8 byte offsets; everything exposed here is in
character offsets.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any

import tree_sitter
import tree_sitter_typescript

from tsvfs.compiler.diagnostics import (
    COMMENT_END_EXPECTED,
    DECLARATION_OR_STATEMENT_EXPECTED,
    EXPRESSION_EXPECTED,
    IDENTIFIER_EXPECTED,
    INVALID_CHARACTER,
    TOKEN_EXPECTED,
    UNTERMINATED_STRING_LITERAL,
    UNTERMINATED_TEMPLATE_LITERAL,
    Diagnostic,
    DiagnosticMessage,
)
from tsvfs.config.models import ScriptTarget

_LANGUAGE_FUNCS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}
_languages: dict[str, tree_sitter.Language] = {}
_parser = tree_sitter.Parser()


@dataclass(frozen=True)
class TextSpan:
    """Half-open character range ``[start, start + length)``."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class TextChangeRange:
    """An edit: ``span`` of the old text replaced by ``new_length`` characters."""

    span: TextSpan
    new_length: int


class StatementKind(Enum):
    IMPORT = "import"
    EXPORT = "export"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE_ALIAS = "type"
    ENUM = "enum"
    MODULE = "module"
    VARIABLE = "variable"
    EXPRESSION = "expression"


_NODE_KINDS = {
    "import_statement": StatementKind.IMPORT,
    "import_alias": StatementKind.IMPORT,
    "function_declaration": StatementKind.FUNCTION,
    "generator_function_declaration": StatementKind.FUNCTION,
    "function_signature": StatementKind.FUNCTION,
    "class_declaration": StatementKind.CLASS,
    "abstract_class_declaration": StatementKind.CLASS,
    "interface_declaration": StatementKind.INTERFACE,
    "type_alias_declaration": StatementKind.TYPE_ALIAS,
    "enum_declaration": StatementKind.ENUM,
    "module": StatementKind.MODULE,
    "internal_module": StatementKind.MODULE,
    "lexical_declaration": StatementKind.VARIABLE,
    "variable_declaration": StatementKind.VARIABLE,
    # `export default class Name {}` may surface as an expression value.
    "class": StatementKind.CLASS,
    "function_expression": StatementKind.FUNCTION,
}
# Top-level nodes that are not statements.
_SKIPPED_NODES = frozenset(
    {"comment", "html_comment", "hash_bang_line", "empty_statement", "ERROR"}
)
_NAME_NODES = frozenset({"identifier", "type_identifier"})


@dataclass(frozen=True)
class Statement:
    """A top-level statement node."""

    pos: int
    end: int
    kind: StatementKind
    name: str | None = None
    name_offset: int | None = None  # relative to pos
    exported: bool = False
    block_scoped: bool = False


@dataclass(frozen=True, eq=False)
class SourceFile:
    """Immutable parsed snapshot of one file.

    Equality is identity: two source files are "the same" only if one was
    reused for the other, which is what program reuse checks rely on.
    """

    file_name: str
    text: str
    language_version: ScriptTarget
    tree: Any = field(repr=False)  # tree_sitter.Tree
    statements: tuple[Statement, ...] = field(default=())

    @property
    def is_declaration_file(self) -> bool:
        return self.file_name.endswith(".d.ts")

    @cached_property
    def line_starts(self) -> tuple[int, ...]:
        starts = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                starts.append(index + 1)
        return tuple(starts)

    def get_line_and_character_of_position(self, position: int) -> tuple[int, int]:
        """Zero-based ``(line, character)`` for a character offset."""
        line = bisect.bisect_right(self.line_starts, position) - 1
        return line, position - self.line_starts[line]

    @cached_property
    def parse_diagnostics(self) -> tuple[Diagnostic, ...]:
        """One diagnostic per ERROR or MISSING node, in document order."""
        offsets = _Offsets(self.text)
        diagnostics = []
        stack = [self.tree.root_node]
        while stack:
            node = stack.pop()
            if node.is_missing:
                diagnostics.append(_missing_node_diagnostic(self, node, offsets))
            elif node.type == "ERROR":
                start = offsets.char(node.start_byte)
                end = offsets.char(node.end_byte)
                diagnostics.append(
                    Diagnostic.create(
                        _error_message(self.text[start:end]),
                        file=self,
                        start=start,
                        length=end - start,
                    )
                )
            elif node.has_error:
                stack.extend(reversed(node.children))
        return tuple(diagnostics)

    @property
    def declarations(self) -> tuple[Statement, ...]:
        """Top-level statements that declare a name."""
        return tuple(statement for statement in self.statements if statement.name is not None)


class _Offsets:
    """Converts tree-sitter byte offsets into character offsets of ``text``."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._data = text.encode("utf-8")

    def char(self, byte_offset: int) -> int:
        if len(self._data) == len(self._text):
            return byte_offset
        return len(self._data[:byte_offset].decode("utf-8", errors="replace"))


def _get_language(file_name: str) -> tree_sitter.Language:
    grammar = "tsx" if file_name.endswith(".tsx") else "typescript"
    if grammar not in _languages:
        _languages[grammar] = tree_sitter.Language(_LANGUAGE_FUNCS[grammar]())
    return _languages[grammar]


def _parse(file_name: str, data: bytes, old_tree: Any = None) -> Any:
    _parser.language = _get_language(file_name)
    if old_tree is None:
        return _parser.parse(data)
    return _parser.parse(data, old_tree)


def create_source_file(
    file_name: str,
    text: str,
    language_version: ScriptTarget = ScriptTarget.ES2015,
) -> SourceFile:
    """Parse ``text`` from scratch."""
    tree = _parse(file_name, text.encode("utf-8"))
    return SourceFile(
        file_name=file_name,
        text=text,
        language_version=language_version,
        tree=tree,
        statements=_statements(tree, text),
    )


def update_source_file(
    source_file: SourceFile,
    new_text: str,
    change_range: TextChangeRange,
) -> SourceFile:
    """Incrementally reparse ``source_file`` after one edit.

    ``change_range`` describes the edit in terms of the old text. The old
    tree is copied before it is edited, so ``source_file`` stays valid.
    Statements wholly before the edit keep their identity when unchanged.
    """
    old_text = source_file.text
    span = change_range.span
    new_end = span.start + change_range.new_length

    old_tree = source_file.tree.copy()
    old_tree.edit(
        start_byte=_byte_length(old_text, span.start),
        old_end_byte=_byte_length(old_text, span.end),
        new_end_byte=_byte_length(new_text, new_end),
        start_point=_point(old_text, span.start),
        old_end_point=_point(old_text, span.end),
        new_end_point=_point(new_text, new_end),
    )
    tree = _parse(source_file.file_name, new_text.encode("utf-8"), old_tree)

    previous = {statement.pos: statement for statement in source_file.statements}
    statements = []
    for statement in _statements(tree, new_text):
        if statement.end <= span.start and previous.get(statement.pos) == statement:
            statement = previous[statement.pos]
        statements.append(statement)

    return SourceFile(
        file_name=source_file.file_name,
        text=new_text,
        language_version=source_file.language_version,
        tree=tree,
        statements=tuple(statements),
    )


def _byte_length(text: str, end: int) -> int:
    return len(text[:end].encode("utf-8"))


def _point(text: str, offset: int) -> tuple[int, int]:
    """Tree-sitter ``(row, byte column)`` of a character offset."""
    line_start = text.rfind("\n", 0, offset) + 1
    return text.count("\n", 0, offset), _byte_length(text[line_start:], offset - line_start)


def _statements(tree: Any, text: str) -> tuple[Statement, ...]:
    offsets = _Offsets(text)
    return tuple(
        _statement(node, offsets)
        for node in tree.root_node.named_children
        if node.type not in _SKIPPED_NODES
    )


def _statement(node: Any, offsets: _Offsets) -> Statement:
    pos = offsets.char(node.start_byte)
    end = offsets.char(node.end_byte)

    exported = node.type == "export_statement"
    target = _unwrap(node)
    kind = _NODE_KINDS.get(target.type) if target is not None else None
    if kind is None:
        return Statement(
            pos=pos,
            end=end,
            kind=StatementKind.EXPORT if exported else StatementKind.EXPRESSION,
            exported=exported,
        )

    name_node = _name_node(target)
    return Statement(
        pos=pos,
        end=end,
        kind=kind,
        name=name_node.text.decode("utf-8") if name_node is not None else None,
        name_offset=offsets.char(name_node.start_byte) - pos if name_node is not None else None,
        exported=exported,
        block_scoped=target.type == "lexical_declaration",
    )


def _unwrap(node: Any) -> Any:
    """The declaration node behind ``export``, ``declare`` and ``namespace`` wrappers."""
    if node.type == "export_statement":
        declaration = node.child_by_field_name("declaration")
        if declaration is None:
            declaration = node.child_by_field_name("value")
        if declaration is None:
            return None
        node = declaration
    if node.type == "ambient_declaration" and node.named_children:
        node = node.named_children[0]
    if node.type == "expression_statement" and node.named_child_count == 1:
        inner = node.named_children[0]
        if inner.type == "internal_module":
            node = inner
    return node


def _name_node(node: Any) -> Any:
    if node.type in ("lexical_declaration", "variable_declaration"):
        for declarator in node.named_children:
            if declarator.type == "variable_declarator":
                name = declarator.child_by_field_name("name")
                return name if name is not None and name.type in _NAME_NODES else None
        return None
    name = node.child_by_field_name("name")
    if name is None or name.type not in _NAME_NODES:
        return None
    return name


def _missing_node_diagnostic(source_file: SourceFile, node: Any, offsets: _Offsets) -> Diagnostic:
    parent = node.parent
    message = None
    if parent is not None and parent.type == "string" and node.type in ("'", '"'):
        message = UNTERMINATED_STRING_LITERAL
    elif parent is not None and parent.type == "template_string" and node.type == "`":
        message = UNTERMINATED_TEMPLATE_LITERAL
    if message is not None:
        start = offsets.char(parent.start_byte)
        return Diagnostic.create(
            message,
            file=source_file,
            start=start,
            length=offsets.char(parent.end_byte) - start,
        )

    start = offsets.char(node.start_byte)
    if not node.is_named:
        return Diagnostic.create(TOKEN_EXPECTED, node.type, file=source_file, start=start, length=0)
    message = IDENTIFIER_EXPECTED if node.type.endswith("identifier") else EXPRESSION_EXPECTED
    return Diagnostic.create(message, file=source_file, start=start, length=0)


def _error_message(snippet: str) -> DiagnosticMessage:
    """Pick the diagnostic for an ERROR node from the text it covers."""
    head = snippet.lstrip()
    if head.startswith("/*") and "*/" not in head:
        return COMMENT_END_EXPECTED
    if head[:1] in ("'", '"') and head.count(head[0]) == 1:
        return UNTERMINATED_STRING_LITERAL
    if head.startswith("`") and head.count("`") == 1:
        return UNTERMINATED_TEMPLATE_LITERAL
    if head and not head[0].isascii() and not head[0].isidentifier():
        return INVALID_CHARACTER
    return DECLARATION_OR_STATEMENT_EXPECTED
