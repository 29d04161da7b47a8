"""Swift parsing: tree-sitter trees reduced to declaration models."""

from .discovery import detect_files, is_excluded
from .normalizer import (
    TextNormalizer,
    clean_trivia,
    count_lines,
    remove_duplicate_line_breaks,
    strip_pieces,
)
from .syntax import (
    Comment,
    CommentKind,
    DeclarationTree,
    FileUnit,
    FunctionDef,
    Node,
    ObjectKind,
    ThrowingStatus,
    TypeDef,
)
from .syntax_extractor import SyntaxExtractor
from .treesitter_parser import TreeSitterParser
from .trivia import Piece, PieceKind, SourcePieces, extract_comments
from .visitor import FileVisitor

__all__ = [
    # Models
    "Comment",
    "CommentKind",
    "DeclarationTree",
    "FileUnit",
    "FunctionDef",
    "Node",
    "ObjectKind",
    "ThrowingStatus",
    "TypeDef",
    # Trivia and stripping
    "Piece",
    "PieceKind",
    "SourcePieces",
    "TextNormalizer",
    "clean_trivia",
    "count_lines",
    "extract_comments",
    "remove_duplicate_line_breaks",
    "strip_pieces",
    # Parsing
    "FileVisitor",
    "SyntaxExtractor",
    "TreeSitterParser",
    # Discovery
    "detect_files",
    "is_excluded",
]
