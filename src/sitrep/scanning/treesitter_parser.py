"""Tree-sitter parser wrapper.

Provides the Swift parser used by the rest of the package.

tree-sitter parsers are not safe to share between threads, so each thread
gets its own ``Parser`` bound to the shared ``Language``.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes)
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_swift

from ..exceptions import ParsingError
from ..logging_config import get_logger

logger = get_logger(__name__)

LANGUAGE_NAME = "swift"

# tree-sitter >= 0.23 returns a PyCapsule; wrap it in Language()
SWIFT_LANGUAGE = tree_sitter.Language(tree_sitter_swift.language())


class TreeSitterParser:
    """Thread-aware wrapper around a tree-sitter Swift parser."""

    def __init__(self) -> None:
        self._local = threading.local()

    def _parser(self) -> tree_sitter.Parser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = tree_sitter.Parser(SWIFT_LANGUAGE)
            self._local.parser = parser
        return parser

    def parse(self, code: bytes, path: Optional[Path] = None) -> tree_sitter.Tree:
        """Parse code and return its syntax tree.

        Args:
            code: Source code as bytes
            path: File the code came from, used in error messages

        Returns:
            Tree object; tree-sitter recovers from syntax errors, so check
            ``tree.root_node.has_error`` to detect malformed input

        Raises:
            ParsingError: If tree-sitter could not produce a tree
        """
        try:
            tree = self._parser().parse(code)
        except (ValueError, RuntimeError) as e:
            raise ParsingError(path, LANGUAGE_NAME, str(e))
        if tree is None:
            raise ParsingError(path, LANGUAGE_NAME, "parser returned no tree")
        return tree
