"""Token and trivia view of a tree-sitter Swift tree.

tree-sitter keeps comments as *extra* nodes and drops whitespace entirely.
SourcePieces rebuilds the token-plus-trivia view: an ordered, gap-free list
of pieces covering every byte of the file, each either a significant token
or one trivia piece (comment, spaces, newlines, other).

Trivia ownership follows Swift's rule: a token owns the trailing trivia on
its own line, up to but not including the next line break. Everything after
that, up to the next token, is leading trivia of the next token.
"""

from __future__ import annotations

import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

import tree_sitter

from .syntax import Comment, CommentKind


class PieceKind(Enum):
    TOKEN = "token"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    DOC_LINE_COMMENT = "doc_line_comment"
    DOC_BLOCK_COMMENT = "doc_block_comment"
    SPACES = "spaces"
    NEWLINES = "newlines"
    OTHER = "other"

    @property
    def is_comment(self) -> bool:
        return self in _COMMENT_KINDS

    @property
    def is_trivia(self) -> bool:
        return self is not PieceKind.TOKEN


_COMMENT_KINDS = frozenset(
    {
        PieceKind.LINE_COMMENT,
        PieceKind.BLOCK_COMMENT,
        PieceKind.DOC_LINE_COMMENT,
        PieceKind.DOC_BLOCK_COMMENT,
    }
)

# Extras emitted by tree-sitter-swift for // and /* */ comments
COMMENT_NODE_TYPES = frozenset({"comment", "multiline_comment"})

# Literal nodes whose inner structure must never be mistaken for trivia
ATOMIC_NODE_TYPES = frozenset(
    {
        "line_string_literal",
        "multi_line_string_literal",
        "raw_string_literal",
        "regex_literal",
    }
)

_GAP_PATTERN = re.compile(
    r"(?P<newlines>(?:\r\n|\r|\n)+)|(?P<spaces>[ \t]+)|(?P<other>[^ \t\r\n]+)"
)


@dataclass(frozen=True)
class Piece:
    """One token or trivia piece, with its byte range in the source."""

    kind: PieceKind
    start: int
    end: int
    text: str


def classify_comment(text: str) -> PieceKind:
    """Classify comment text by its marker."""
    if text.startswith("///"):
        return PieceKind.DOC_LINE_COMMENT
    if text.startswith("//"):
        return PieceKind.LINE_COMMENT
    if text.startswith("/**") and not text.startswith("/**/"):
        return PieceKind.DOC_BLOCK_COMMENT
    return PieceKind.BLOCK_COMMENT


def extract_comments(pieces: Iterable[Piece]) -> list[Comment]:
    """Keep only comment pieces, in source order, as Comment values."""
    comments: list[Comment] = []
    for piece in pieces:
        if piece.kind in (PieceKind.DOC_LINE_COMMENT, PieceKind.DOC_BLOCK_COMMENT):
            comments.append(Comment(kind=CommentKind.DOCUMENTATION, text=piece.text))
        elif piece.kind in (PieceKind.LINE_COMMENT, PieceKind.BLOCK_COMMENT):
            comments.append(Comment(kind=CommentKind.REGULAR, text=piece.text))
    return comments


def traverse(
    node: tree_sitter.Node,
    enter: Callable[[tree_sitter.Node], bool],
    leave: Callable[[tree_sitter.Node], None],
) -> None:
    """Pre-order walk with a post-order leave step, driven by a TreeCursor.

    ``enter`` returns True to descend into the node's children. ``leave``
    fires for every node once its subtree (if visited) is finished.
    """
    cursor = node.walk()
    while True:
        current = cursor.node
        if enter(current) and cursor.goto_first_child():
            continue
        leave(current)
        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return
            leave(cursor.node)


def _split_gap(source: bytes, start: int, end: int) -> list[Piece]:
    text = source[start:end].decode("utf-8", errors="replace")
    pieces: list[Piece] = []
    # Offsets are in bytes; the gap between tokens is almost always ASCII
    offset = start
    for match in _GAP_PATTERN.finditer(text):
        chunk = match.group(0)
        size = len(chunk.encode("utf-8"))
        if match.lastgroup == "newlines":
            kind = PieceKind.NEWLINES
        elif match.lastgroup == "spaces":
            kind = PieceKind.SPACES
        else:
            kind = PieceKind.OTHER
        pieces.append(Piece(kind, offset, offset + size, chunk))
        offset += size
    return pieces


class SourcePieces:
    """Ordered token and trivia pieces for one source file."""

    def __init__(self, pieces: list[Piece]) -> None:
        self.pieces = pieces
        self._starts = [piece.start for piece in pieces]
        self._ends = [piece.end for piece in pieces]

    @classmethod
    def from_tree(cls, source: bytes, root: tree_sitter.Node) -> SourcePieces:
        pieces: list[Piece] = []
        position = 0

        def enter(node: tree_sitter.Node) -> bool:
            nonlocal position
            if node.child_count and node.type not in ATOMIC_NODE_TYPES:
                return True
            start, end = node.start_byte, node.end_byte
            # Zero-width nodes are implicit or missing tokens
            if end <= start or start < position:
                return False
            if start > position:
                pieces.extend(_split_gap(source, position, start))
            text = source[start:end].decode("utf-8", errors="replace")
            if node.type in COMMENT_NODE_TYPES:
                kind = classify_comment(text)
            else:
                kind = PieceKind.TOKEN
            pieces.append(Piece(kind, start, end, text))
            position = end
            return False

        traverse(root, enter, lambda node: None)
        if position < len(source):
            pieces.extend(_split_gap(source, position, len(source)))
        return cls(pieces)

    def __len__(self) -> int:
        return len(self.pieces)

    def __getitem__(self, index):
        return self.pieces[index]

    def text(self, lo: int, hi: int) -> str:
        return "".join(piece.text for piece in self.pieces[lo:hi])

    def _first_token_index(self, start_byte: int) -> int:
        index = bisect_left(self._starts, start_byte)
        while index < len(self.pieces) and self.pieces[index].kind is not PieceKind.TOKEN:
            index += 1
        return index

    def _leading_start(self, first_token: int) -> int:
        """Index where the leading trivia of the token at ``first_token`` begins."""
        lo = first_token
        while lo > 0 and self.pieces[lo - 1].kind is not PieceKind.TOKEN:
            lo -= 1
        if lo == 0:
            return 0
        # The previous token keeps everything up to the first line break
        for index in range(lo, first_token):
            if self.pieces[index].kind is PieceKind.NEWLINES:
                return index
        return first_token

    def _trailing_end(self, end_byte: int) -> int:
        """Index just past the trailing trivia of the token ending at ``end_byte``."""
        hi = bisect_right(self._ends, end_byte)
        while hi < len(self.pieces) and self.pieces[hi].kind not in (
            PieceKind.TOKEN,
            PieceKind.NEWLINES,
        ):
            hi += 1
        return hi

    def leading_trivia(self, node: tree_sitter.Node) -> list[Piece]:
        first_token = self._first_token_index(node.start_byte)
        return self.pieces[self._leading_start(first_token) : first_token]

    def declaration_span(self, node: tree_sitter.Node) -> tuple[int, int]:
        """Piece range covering ``node`` plus its own leading and trailing trivia."""
        first_token = self._first_token_index(node.start_byte)
        return self._leading_start(first_token), self._trailing_end(node.end_byte)

    def file_leading_trivia(self) -> list[Piece]:
        first_token = self._first_token_index(0)
        return self.pieces[:first_token]
