"""FileVisitor: reduces one tree-sitter Swift tree to a FileUnit.

The visitor walks the tree once, pre-order with a post-order leave step.
Declarations that open a scope (types and functions) are pushed onto an
explicit stack on entry and popped on exit, so everything found in between
lands in the right Node no matter how deeply it is nested.

Dispatch is table driven: ``_ENTER`` and ``_LEAVE`` map tree-sitter node
types to handler method names.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import tree_sitter

from ..exceptions import NestingError
from ..logging_config import get_logger
from .normalizer import remove_duplicate_line_breaks, strip_pieces
from .syntax import DeclarationTree, FileUnit, ObjectKind, ThrowingStatus
from .trivia import COMMENT_NODE_TYPES, SourcePieces, extract_comments, traverse

logger = get_logger(__name__)

DEFAULT_STATIC_MODIFIERS = ("static", "class")

# Keyword in the declaration_kind field of class_declaration / protocol_declaration
KIND_BY_KEYWORD = {
    "class": ObjectKind.CLASS,
    # actors are reference types, reported alongside classes
    "actor": ObjectKind.CLASS,
    "struct": ObjectKind.STRUCT,
    "enum": ObjectKind.ENUM,
    "extension": ObjectKind.EXTENSION,
    "protocol": ObjectKind.PROTOCOL,
}

TYPE_NODE_TYPES = frozenset({"class_declaration", "protocol_declaration"})
FUNCTION_NODE_TYPES = frozenset({"function_declaration", "protocol_function_declaration"})

THROWING_BY_KEYWORD = {
    "throws": ThrowingStatus.THROWS,
    "rethrows": ThrowingStatus.RETHROWS,
}

# Typed throws, "throws(E)", parses as throws_clause
THROWS_NODE_TYPES = frozenset({"throws", "throws_clause"})

# Patterns nested inside these still bind the names they contain
PATTERN_NODE_TYPES = frozenset({"pattern", "tuple_pattern", "tuple_pattern_item"})
BINDING_KEYWORDS = frozenset({"let", "var"})
# A for-in item binds without a keyword
BINDING_NODE_TYPES = frozenset({"value_binding_pattern", "for_statement"})


def node_text(node: Optional[tree_sitter.Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def declaration_kind(node: tree_sitter.Node) -> Optional[ObjectKind]:
    """ObjectKind of a class_declaration or protocol_declaration node."""
    keyword = node.child_by_field_name("declaration_kind")
    if keyword is not None:
        return KIND_BY_KEYWORD.get(node_text(keyword))
    for child in node.children:
        if not child.is_named and child.type in KIND_BY_KEYWORD:
            return KIND_BY_KEYWORD[child.type]
    return None


def function_modifiers(node: tree_sitter.Node) -> list[str]:
    """Modifier keywords written before ``func``."""
    modifiers: list[str] = []
    for child in node.children:
        if child.type == "func":
            break
        if child.type == "modifiers":
            modifiers.extend(node_text(modifier) for modifier in child.children)
        else:
            modifiers.append(node_text(child))
    return modifiers


def parameter_label(node: tree_sitter.Node) -> str:
    """First (external) name of a parameter, e.g. ``_`` for ``_ value: Int``."""
    head = node_text(node).split(":", 1)[0].split()
    return head[0] if head else ""


def throwing_status(node: tree_sitter.Node) -> ThrowingStatus:
    """Anything but a bare ``throws`` or ``rethrows`` is UNKNOWN."""
    for child in node.children:
        if child.type in THROWS_NODE_TYPES:
            return THROWING_BY_KEYWORD.get(node_text(child).strip(), ThrowingStatus.UNKNOWN)
    return ThrowingStatus.NONE


def _introduces_binding(node: tree_sitter.Node) -> bool:
    if node.type in BINDING_NODE_TYPES:
        return True
    return any(
        child.type == "value_binding_pattern"
        or (not child.is_named and child.type in BINDING_KEYWORDS)
        for child in node.children
    )


def is_binding_pattern(node: tree_sitter.Node) -> bool:
    """True if the pattern ``node`` sits under ``let``, ``var`` or a for-in item.

    ``case someConst:`` matches against an existing value and binds nothing.
    """
    current = node
    while current is not None:
        if _introduces_binding(current):
            return True
        if current.type not in PATTERN_NODE_TYPES:
            return False
        current = current.parent
    return False


def bound_names(node: tree_sitter.Node) -> list[str]:
    """Identifiers bound directly by ``node`` as a pattern."""
    bound = node.children_by_field_name("bound_identifier")
    if bound:
        return [node_text(identifier) for identifier in bound]
    if node.type == "pattern" and node.named_child_count == 1 and is_binding_pattern(node):
        child = node.named_children[0]
        if child.type == "simple_identifier":
            return [node_text(child)]
    return []


class FileVisitor:
    """Builds a FileUnit from one parsed Swift file.

    Usage:
        visitor = FileVisitor(source_bytes)
        unit = visitor.visit(tree.root_node, path)
    """

    _ENTER = {
        "class_declaration": "_enter_type",
        "protocol_declaration": "_enter_type",
        "function_declaration": "_enter_function",
        "protocol_function_declaration": "_enter_function",
        "import_declaration": "_enter_import",
    }

    _LEAVE = {
        "class_declaration": "_leave_type",
        "protocol_declaration": "_leave_type",
        "function_declaration": "_ascend",
        "protocol_function_declaration": "_ascend",
        "enum_entry": "_leave_enum_entry",
    }

    def __init__(
        self, source: bytes, static_modifiers: Iterable[str] = DEFAULT_STATIC_MODIFIERS
    ) -> None:
        self.source = source
        self.static_modifiers = frozenset(static_modifiers)
        self.tree = DeclarationTree()
        self.imports: list[str] = []
        self._pieces: Optional[SourcePieces] = None
        # (syntax node id, arena index); the file root has no syntax node
        self._stack: list[tuple[Optional[int], int]] = [(None, 0)]

    @property
    def current(self) -> int:
        return self._stack[-1][1]

    def visit(self, root: tree_sitter.Node, path: Optional[Path] = None) -> FileUnit:
        """Walk the tree under ``root`` and return the resulting FileUnit."""
        self._pieces = SourcePieces.from_tree(self.source, root)
        traverse(root, self._enter, self._leave)

        if len(self._stack) != 1:
            raise NestingError(root.type, f"{len(self._stack) - 1} scope(s) left open")

        return FileUnit(
            path=path,
            tree=self.tree,
            imports=self.imports,
            comments=extract_comments(self._pieces.file_leading_trivia()),
            body=self.source.decode("utf-8", errors="replace"),
            stripped_body=remove_duplicate_line_breaks(strip_pieces(self._pieces.pieces)),
        )

    # Traversal callbacks

    def _enter(self, node: tree_sitter.Node) -> bool:
        if node.type in COMMENT_NODE_TYPES:
            return False
        if node.is_named:
            names = bound_names(node)
            if names:
                self.tree[self.current].variables.extend(names)
        handler = self._ENTER.get(node.type)
        if handler is not None:
            getattr(self, handler)(node)
        return True

    def _leave(self, node: tree_sitter.Node) -> None:
        handler = self._LEAVE.get(node.type)
        if handler is not None:
            getattr(self, handler)(node)

    # Scope stack

    def _descend(self, node: tree_sitter.Node, index: int) -> None:
        self._stack.append((node.id, index))

    def _ascend(self, node: tree_sitter.Node) -> None:
        if len(self._stack) == 1:
            raise NestingError(node.type, "cannot ascend past the file root")
        node_id, _ = self._stack[-1]
        if node_id != node.id:
            raise NestingError(node.type, "leaving a scope that is not the innermost one")
        self._stack.pop()

    # Handlers

    def _enter_type(self, node: tree_sitter.Node) -> None:
        kind = declaration_kind(node)
        if kind is None:
            logger.debug(f"Skipping {node.type} without a recognised kind at {node.start_point}")
            return

        lo, hi = self._pieces.declaration_span(node)
        type_def = self.tree.add_type(
            self.current,
            name=node_text(node.child_by_field_name("name")).strip(),
            kind=kind,
            inheritance=[
                node_text(child).strip()
                for child in node.children
                if child.type == "inheritance_specifier"
            ],
            comments=extract_comments(self._pieces.leading_trivia(node)),
            body=self._pieces.text(lo, hi).strip(),
            stripped_body=remove_duplicate_line_breaks(strip_pieces(self._pieces[lo:hi])),
        )
        self._descend(node, type_def.index)

    def _leave_type(self, node: tree_sitter.Node) -> None:
        if declaration_kind(node) is not None:
            self._ascend(node)

    def _enter_function(self, node: tree_sitter.Node) -> None:
        modifiers = function_modifiers(node)
        function = self.tree.add_function(
            self.current,
            name=node_text(node.child_by_field_name("name")),
            parameters=[
                parameter_label(child) for child in node.children if child.type == "parameter"
            ],
            is_static=any(modifier in self.static_modifiers for modifier in modifiers),
            throwing_status=throwing_status(node),
            return_type=node_text(node.child_by_field_name("return_type")).strip(),
        )
        self._descend(node, function.index)

    def _enter_import(self, node: tree_sitter.Node) -> None:
        for child in node.named_children:
            if child.type == "identifier":
                self.imports.append(node_text(child))
                return

    def _leave_enum_entry(self, node: tree_sitter.Node) -> None:
        self.tree[self.current].cases.extend(
            node_text(name) for name in node.children_by_field_name("name")
        )
