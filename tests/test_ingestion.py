"""
Tests for input parsing and validation.

These tests verify:
1. Well-formed input becomes the expected WeightMatrix
2. Every input error kind is raised with its details
3. Errors surface in stream order, before any search
4. Malformed or truncated input is an explicit error
"""

import pytest
import logging
from io import BytesIO, StringIO, TextIOWrapper

from kemeny.domain import Edge, InputError, InputErrorKind, WeightMatrix
from kemeny.ingestion.reader import (
    iter_edges,
    load_weight_matrix,
    parse_text,
    read_source,
    tokenize,
)
from kemeny.validation import (
    PRACTICAL_CANDIDATE_LIMIT,
    build_weight_matrix,
    validate_candidate_index,
    validate_no_bidirectional_edges,
    validate_weight,
)


def assert_input_error(kind: InputErrorKind, text: str) -> InputError:
    """Load ``text`` and check it fails with ``kind``."""
    with pytest.raises(InputError) as exc_info:
        load_weight_matrix(text)
    assert exc_info.value.kind == kind
    return exc_info.value


# =============================================================================
# PARSING
# =============================================================================

class TestParsing:
    """Test the text format."""

    def test_parses_count_and_edges(self):
        """First token is the count; the rest are triples."""
        parsed = parse_text("3\n0 1 5\n1 2 3\n")
        assert parsed.candidate_count == 3
        assert list(parsed.edges) == [Edge(0, 1, 5), Edge(1, 2, 3)]

    def test_line_breaks_not_significant(self):
        """Triples may wrap across lines."""
        parsed = parse_text("3 0 1\n5 1\n2 3")
        assert list(parsed.edges) == [Edge(0, 1, 5), Edge(1, 2, 3)]

    def test_token_positions(self):
        """Tokens carry 1-based positions."""
        tokens = tokenize("  3\n 0 1 ")
        assert [(t.text, t.position) for t in tokens] == [
            ("3", 1), ("0", 2), ("1", 3),
        ]

    def test_count_only(self):
        """No edges means every margin is zero."""
        matrix = load_weight_matrix("4\n")
        assert matrix == WeightMatrix.zeros(4)

    def test_margins_stored_by_preference(self):
        """``a b c`` stores margin(a, b) = c and leaves margin(b, a) at 0."""
        matrix = load_weight_matrix("3\n0 1 5\n1 2 3\n0 2 0\n")
        assert matrix.margin(0, 1) == 5
        assert matrix.margin(1, 0) == 0
        assert matrix.margin(1, 2) == 3
        assert matrix.margin(0, 2) == 0

    def test_later_edge_replaces_earlier(self):
        """A repeated ordered pair keeps the last margin."""
        matrix = load_weight_matrix("2\n0 1 4\n0 1 2\n")
        assert matrix.margin(0, 1) == 2

    def test_zero_self_edge_ignored(self):
        """A self-edge with no margin carries no signal and is accepted."""
        matrix = load_weight_matrix("2\n1 1 0\n")
        assert matrix == WeightMatrix.zeros(2)


# =============================================================================
# MALFORMED INPUT
# =============================================================================

class TestMalformedInput:
    """Test that bad tokens are explicit errors."""

    def test_empty_input(self):
        """No tokens at all is malformed."""
        assert_input_error(InputErrorKind.MALFORMED_INPUT, "   \n")

    def test_non_integer_count(self):
        """The count must be an integer."""
        error = assert_input_error(InputErrorKind.MALFORMED_INPUT, "three\n")
        assert error.details["token"] == "three"
        assert error.details["position"] == 1

    def test_non_integer_token_mid_stream(self):
        """A non-numeric token is reported with its position."""
        error = assert_input_error(
            InputErrorKind.MALFORMED_INPUT, "3\n0 1 5\n1 x 3\n",
        )
        assert error.details["token"] == "x"
        assert error.details["position"] == 6

    def test_trailing_partial_triple(self):
        """Leftover tokens that do not make a full triple are an error."""
        error = assert_input_error(
            InputErrorKind.MALFORMED_INPUT, "3\n0 1 5\n1 2\n",
        )
        assert error.details["position"] == 5
        assert "incomplete edge" in error.message

    def test_trailing_non_integer_names_token(self):
        """A bad token in a short trailing group is reported as a bad token."""
        error = assert_input_error(
            InputErrorKind.MALFORMED_INPUT, "3\n0 1 5 junk\n",
        )
        assert error.details["token"] == "junk"
        assert error.details["position"] == 5
        assert "expected an integer" in error.message

    @pytest.mark.parametrize("token", ["1_0", "٣", "+", "1.0", "0x1"])
    def test_only_plain_ascii_integers(self, token):
        """Digit separators, non-ASCII digits and other forms are rejected."""
        error = assert_input_error(
            InputErrorKind.MALFORMED_INPUT, f"2\n0 1 {token}\n",
        )
        assert error.details["token"] == token

    def test_signed_integers_accepted(self):
        """A leading sign is part of an integer token."""
        parsed = parse_text("+2\n0 1 +3\n")
        assert parsed.candidate_count == 2
        assert list(parsed.edges) == [Edge(0, 1, 3)]

    def test_edges_are_lazy(self):
        """Parsing the stream does not fail until the bad triple is reached."""
        edges = iter_edges(tokenize("3 0 1 5 1"))
        assert next(edges) == Edge(0, 1, 5)
        with pytest.raises(InputError):
            next(edges)


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:
    """Test each validation rule."""

    def test_index_equal_to_count_rejected(self):
        """Candidate index n is out of range."""
        error = assert_input_error(
            InputErrorKind.INVALID_CANDIDATE_INDEX, "3\n3 0 1\n",
        )
        assert error.details["index"] == 3
        assert "out of bounds 3" in error.message

    def test_negative_index_rejected(self):
        """Negative candidate indices are out of range."""
        error = assert_input_error(
            InputErrorKind.INVALID_CANDIDATE_INDEX, "3\n0 -1 1\n",
        )
        assert error.details["index"] == -1

    def test_negative_weight_rejected(self):
        """Margins cannot be negative."""
        error = assert_input_error(
            InputErrorKind.NEGATIVE_WEIGHT, "3\n0 1 -2\n",
        )
        assert error.details["weight"] == -2

    def test_bidirectional_edge_rejected(self):
        """Both directions of one pair cannot carry a margin."""
        error = assert_input_error(
            InputErrorKind.BIDIRECTIONAL_EDGE, "3\n0 1 3\n1 0 2\n",
        )
        assert error.details["candidates"] == (0, 1)
        assert "0 and 1" in error.message

    def test_bidirectional_resolved_by_later_zero(self):
        """Overwriting one direction with zero leaves a consistent matrix."""
        matrix = load_weight_matrix("2\n0 1 3\n1 0 2\n1 0 0\n")
        assert matrix.margin(0, 1) == 3
        assert matrix.margin(1, 0) == 0

    def test_positive_self_edge_rejected(self):
        """A candidate cannot be preferred over itself."""
        error = assert_input_error(InputErrorKind.SELF_EDGE, "3\n2 2 1\n")
        assert error.details["index"] == 2

    def test_zero_candidates_rejected(self):
        """There must be at least one candidate."""
        error = assert_input_error(
            InputErrorKind.INVALID_CANDIDATE_COUNT, "0\n",
        )
        assert error.details["count"] == 0

    def test_errors_reported_in_stream_order(self):
        """A bad index is reported before a later malformed token."""
        assert_input_error(
            InputErrorKind.INVALID_CANDIDATE_INDEX, "2\n0 5 1\nfoo bar baz\n",
        )

    def test_winner_checked_before_loser(self):
        """When both indices are bad, the first one is reported."""
        error = assert_input_error(
            InputErrorKind.INVALID_CANDIDATE_INDEX, "2\n7 9 1\n",
        )
        assert error.details["index"] == 7

    def test_single_value_checks(self):
        """Single-value validators accept good values and reject bad ones."""
        validate_candidate_index(0, 1)
        validate_weight(0)
        with pytest.raises(InputError):
            validate_candidate_index(1, 1)
        with pytest.raises(InputError):
            validate_weight(-1)

    def test_bidirectional_check_on_matrix(self):
        """The matrix-level check sees hand-built inconsistent tables."""
        matrix = WeightMatrix.from_rows([[0, 1, 0], [0, 0, 2], [0, 3, 0]])
        with pytest.raises(InputError) as exc_info:
            validate_no_bidirectional_edges(matrix)
        assert exc_info.value.details["candidates"] == (1, 2)

    def test_large_count_warns(self, caplog):
        """Counts beyond the practical limit log a warning but still build."""
        count = PRACTICAL_CANDIDATE_LIMIT + 1
        with caplog.at_level(logging.WARNING, logger="kemeny.validation"):
            matrix = build_weight_matrix(count, [])
        assert matrix.size == count
        assert "practical limit" in caplog.text


# =============================================================================
# SOURCES
# =============================================================================

class TestSources:
    """Test reading from files and streams."""

    def test_reads_file(self, tmp_path):
        """A named file is read in full."""
        path = tmp_path / "votes.txt"
        path.write_text("2\n0 1 1\n")
        assert read_source(str(path)) == "2\n0 1 1\n"

    def test_reads_stream(self):
        """Without a path the given stream is read."""
        assert read_source(stream=StringIO("1\n")) == "1\n"

    def test_missing_file(self, tmp_path):
        """A missing file is an input error naming the path."""
        path = str(tmp_path / "missing.txt")
        with pytest.raises(InputError) as exc_info:
            read_source(path)
        assert exc_info.value.kind == InputErrorKind.UNREADABLE_SOURCE
        assert exc_info.value.details["path"] == path

    def test_undecodable_file(self, tmp_path):
        """A file that is not UTF-8 is malformed input, not a crash."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"2\n0 1 \xff\n")
        with pytest.raises(InputError) as exc_info:
            read_source(str(path))
        assert exc_info.value.kind == InputErrorKind.MALFORMED_INPUT
        assert exc_info.value.details["position"] == 6
        assert "0xff" in exc_info.value.message

    def test_undecodable_stream(self):
        """Undecodable standard input is malformed input too."""
        stream = TextIOWrapper(BytesIO(b"2\n\xfe\n"), encoding="utf-8")
        with pytest.raises(InputError) as exc_info:
            read_source(stream=stream)
        assert exc_info.value.kind == InputErrorKind.MALFORMED_INPUT
        assert exc_info.value.details["path"] == "<stdin>"
