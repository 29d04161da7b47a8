"""Tests for comment and whitespace stripping."""

from sitrep.scanning.normalizer import (
    TextNormalizer,
    clean_trivia,
    count_lines,
    remove_duplicate_line_breaks,
    strip_pieces,
)
from sitrep.scanning.trivia import Piece, PieceKind


def _piece(kind, text):
    return Piece(kind, 0, len(text), text)


class TestCountLines:
    """Line counting matches splitting on line breaks."""

    def test_empty_string_is_one_line(self):
        """An empty string counts as one line."""
        assert count_lines("") == 1

    def test_trailing_newline_adds_segment(self):
        """A trailing newline adds an empty final segment."""
        assert count_lines("a\nb\n") == 3


class TestCleanTrivia:
    """Per-piece replacement rules."""

    def test_comments_removed(self):
        """Every comment kind becomes empty."""
        for kind in (
            PieceKind.LINE_COMMENT,
            PieceKind.BLOCK_COMMENT,
            PieceKind.DOC_LINE_COMMENT,
            PieceKind.DOC_BLOCK_COMMENT,
        ):
            assert clean_trivia(_piece(kind, "// note")) == ""

    def test_newline_run_collapses(self):
        """A run of line breaks becomes a single one."""
        assert clean_trivia(_piece(PieceKind.NEWLINES, "\n\n\r\n")) == "\n"

    def test_tokens_untouched(self):
        """Token text is kept verbatim, spaces included."""
        literal = '"  spaced  // not a comment "'
        assert clean_trivia(_piece(PieceKind.TOKEN, literal)) == literal

    def test_spaces_removed(self):
        """Spaces and tabs disappear."""
        assert clean_trivia(_piece(PieceKind.SPACES, " \t ")) == ""


class TestStripPieces:
    """Joining cleaned pieces."""

    def test_strip_pieces(self):
        """Comments and whitespace vanish between tokens."""
        pieces = [
            _piece(PieceKind.TOKEN, "let"),
            _piece(PieceKind.SPACES, " "),
            _piece(PieceKind.TOKEN, "x"),
            _piece(PieceKind.SPACES, " "),
            _piece(PieceKind.LINE_COMMENT, "// x"),
            _piece(PieceKind.NEWLINES, "\n\n"),
            _piece(PieceKind.TOKEN, "y"),
        ]
        assert strip_pieces(pieces) == "letx\ny"


class TestRemoveDuplicateLineBreaks:
    """Blank line removal."""

    def test_removes_blank_lines(self):
        """Empty lines are dropped."""
        assert remove_duplicate_line_breaks("\na\n\n\nb\n") == "a\nb"

    def test_idempotent(self):
        """Applying twice equals applying once."""
        text = "a\n\n\nb\n\nc\n"
        once = remove_duplicate_line_breaks(text)
        assert remove_duplicate_line_breaks(once) == once

    def test_never_adds_lines(self):
        """The result never has more lines than the input."""
        text = "\n\nx\n\n"
        assert count_lines(remove_duplicate_line_breaks(text)) <= count_lines(text)


class TestTextNormalizer:
    """Stripping in-memory Swift source."""

    def test_strips_comments_and_spaces(self):
        """Comments, indentation and blank lines are removed."""
        source = "// header\n\nlet a = 1 // trailing\n\n\n    let b = 2\n"
        assert TextNormalizer().strip(source) == "leta=1\nletb=2"

    def test_string_literals_preserved(self):
        """Text inside string literals is never stripped."""
        source = 'let s = "a  // b"\n'
        assert TextNormalizer().strip(source) == 'lets="a  // b"'

    def test_idempotent_and_no_blank_lines(self):
        """Stripping stripped text changes nothing and leaves no blank line."""
        source = "struct A {\n\n    /* doc */\n    let x = 1\n\n}\n"
        normalizer = TextNormalizer()
        once = normalizer.strip(source)
        assert "\n\n" not in once
        assert remove_duplicate_line_breaks(once) == once
        assert count_lines(once) <= count_lines(source)
