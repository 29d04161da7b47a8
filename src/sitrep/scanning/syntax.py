"""Declaration models for parsed Swift files.

A file becomes a DeclarationTree: an arena of nodes addressed by integer
index. The root node is the file itself; every TypeDef and FunctionDef is a
node with its own variables, nested types, functions and enum cases.

Children are owned by the lists they sit in. The link back to the enclosing
scope is an arena index (``parent``), used for navigation while the tree is
being built.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from ..exceptions.base import IN_MEMORY


def count_lines(text: str) -> int:
    """Number of line-break separated segments in ``text``.

    An empty string is one (empty) line, and a trailing newline adds a final
    empty segment.
    """
    return text.count("\n") + 1


class ObjectKind(str, Enum):
    """The declaration kinds counted as types."""

    CLASS = "class"
    STRUCT = "struct"
    ENUM = "enum"
    PROTOCOL = "protocol"
    EXTENSION = "extension"


class ThrowingStatus(str, Enum):
    """How a function declares errors.

    UNKNOWN means a throws clause was present but was neither ``throws`` nor
    ``rethrows`` (for example a typed ``throws(MyError)``).
    """

    NONE = "none"
    THROWS = "throws"
    RETHROWS = "rethrows"
    UNKNOWN = "unknown"


class CommentKind(str, Enum):
    REGULAR = "regular"
    DOCUMENTATION = "documentation"


@dataclass(frozen=True)
class Comment:
    """One comment, regular or documentation, including its markers."""

    kind: CommentKind
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "text": self.text}


@dataclass
class Node:
    """A declaration scope.

    Attributes:
        index: Position of this node in its DeclarationTree
        parent: Index of the enclosing scope (None for the file root)
        variables: Names bound directly inside this scope
        types: Types declared directly inside this scope
        functions: Functions declared directly inside this scope
        cases: Enum case names (only meaningful for enums)
    """

    index: int = 0
    parent: Optional[int] = None
    variables: list[str] = field(default_factory=list)
    types: list[TypeDef] = field(default_factory=list)
    functions: list[FunctionDef] = field(default_factory=list)
    cases: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cases": list(self.cases),
            "functions": [function.to_dict() for function in self.functions],
            "types": [child.to_dict() for child in self.types],
            "variables": list(self.variables),
        }


@dataclass
class TypeDef(Node):
    """A class, struct, enum, protocol or extension.

    For extensions ``name`` is the extended type, so an extension's code can
    be attributed to the type it extends.

    Attributes:
        name: Declared (or extended) type name
        kind: Which kind of declaration this is
        inheritance: Inherited types and conformances, as written
        comments: Comments immediately preceding the declaration
        body: Raw declaration text, trimmed of surrounding whitespace
        stripped_body: Declaration text without comments, whitespace or blank lines
    """

    name: str = ""
    kind: ObjectKind = ObjectKind.CLASS
    inheritance: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    body: str = ""
    stripped_body: str = ""

    @property
    def stripped_line_count(self) -> int:
        return count_lines(self.stripped_body)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "name": self.name,
                "type": self.kind.value,
                "inheritance": list(self.inheritance),
                "comments": [comment.to_dict() for comment in self.comments],
                "body": self.body,
                "strippedBody": self.stripped_body,
            }
        )
        return data


@dataclass
class FunctionDef(Node):
    """A function or method.

    Attributes:
        name: Function name
        parameters: External (caller-visible) parameter labels
        is_static: True for static and class functions
        throwing_status: Declared error behaviour
        return_type: Return type as written, or "" when none is declared
    """

    name: str = ""
    parameters: list[str] = field(default_factory=list)
    is_static: bool = False
    throwing_status: ThrowingStatus = ThrowingStatus.NONE
    return_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "name": self.name,
                "parameters": list(self.parameters),
                "isStatic": self.is_static,
                "throwingStatus": self.throwing_status.value,
                "returnType": self.return_type,
            }
        )
        return data


class DeclarationTree:
    """Arena holding every node of one file, root first."""

    def __init__(self) -> None:
        self.nodes: list[Node] = [Node(index=0)]

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def parent_of(self, node: Node) -> Optional[Node]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def add_type(self, parent: int, **fields: Any) -> TypeDef:
        """Create a TypeDef inside the scope at ``parent``."""
        node = TypeDef(index=len(self.nodes), parent=parent, **fields)
        self.nodes.append(node)
        self.nodes[parent].types.append(node)
        return node

    def add_function(self, parent: int, **fields: Any) -> FunctionDef:
        """Create a FunctionDef inside the scope at ``parent``."""
        node = FunctionDef(index=len(self.nodes), parent=parent, **fields)
        self.nodes.append(node)
        self.nodes[parent].functions.append(node)
        return node


@dataclass
class FileUnit:
    """One parsed source file.

    Attributes:
        path: File the unit was read from (None for in-memory source)
        tree: Declarations found in the file
        imports: Imported module paths, in order, with repeats
        comments: Comments before the first token of the file
        body: Full source text
        stripped_body: Source without comments, whitespace or blank lines
    """

    path: Optional[Path]
    tree: DeclarationTree
    imports: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    body: str = ""
    stripped_body: str = ""

    @property
    def root(self) -> Node:
        return self.tree.root

    @property
    def display_name(self) -> str:
        return self.path.name if self.path is not None else IN_MEMORY

    @property
    def line_count(self) -> int:
        return count_lines(self.body)

    @property
    def stripped_line_count(self) -> int:
        return count_lines(self.stripped_body)

    def debug_json(self) -> str:
        """Encode this file's declaration tree as pretty-printed JSON."""
        return json.dumps(self.root.to_dict(), indent=2)
