"""Normalizer: reduces source text to its significant lines.

Stripping happens in two passes over the token/trivia pieces of a file:

    1. strip_pieces: drop comments and whitespace, turn every run of line
       breaks into a single "\\n". Tokens are emitted verbatim, so identifiers
       and string literals are never altered.
    2. remove_duplicate_line_breaks: drop the empty lines left behind.

The line count of the result approximates "meaningful lines of code".
"""

from __future__ import annotations

from typing import Iterable, Optional

from .syntax import count_lines
from .treesitter_parser import TreeSitterParser
from .trivia import Piece, PieceKind, SourcePieces

__all__ = [
    "TextNormalizer",
    "clean_trivia",
    "count_lines",
    "remove_duplicate_line_breaks",
    "strip_pieces",
]


def clean_trivia(piece: Piece) -> str:
    """Return the replacement text for one piece."""
    if piece.kind is PieceKind.NEWLINES:
        return "\n"
    if piece.kind is PieceKind.SPACES or piece.kind.is_comment:
        return ""
    return piece.text


def strip_pieces(pieces: Iterable[Piece]) -> str:
    """Join pieces with comments and whitespace removed."""
    return "".join(clean_trivia(piece) for piece in pieces)


def remove_duplicate_line_breaks(text: str) -> str:
    """Drop empty lines, so no two line breaks are adjacent."""
    return "\n".join(line for line in text.split("\n") if line)


class TextNormalizer:
    """Strips arbitrary in-memory Swift text.

    Usage:
        normalizer = TextNormalizer()
        stripped = normalizer.strip(source)
    """

    def __init__(self, parser: Optional[TreeSitterParser] = None) -> None:
        self._parser = parser or TreeSitterParser()

    def strip(self, text: str) -> str:
        source = text.encode("utf-8")
        tree = self._parser.parse(source)
        pieces = SourcePieces.from_tree(source, tree.root_node)
        return remove_duplicate_line_breaks(strip_pieces(pieces.pieces))
