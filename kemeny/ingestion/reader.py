"""
Preference Margin Ingestion for the Kemeny ranking engine.

Input format (whitespace-separated integers, line breaks not significant):

    <number of candidates>
    a b c
    a b c
    ...

Each triple ``a b c`` says that ``c`` more voters prefer candidate ``a``
to candidate ``b`` than prefer ``b`` to ``a``. Any pair not mentioned
has margin zero.

Design principles:
- Edges are yielded lazily so errors surface in stream order
- Malformed input is an explicit error, never a silent truncation
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from typing import Iterator, Optional, TextIO

from ..domain import Edge, InputError, InputErrorKind, WeightMatrix
from ..validation import build_weight_matrix


logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+\Z")


# =============================================================================
# TOKENIZING
# =============================================================================

@dataclass(frozen=True)
class Token:
    """A whitespace-delimited word and its 1-based position in the input."""
    text: str
    position: int

    def as_int(self) -> int:
        # int() alone would also take "1_0" and non-ASCII digits
        if not INTEGER_PATTERN.match(self.text):
            raise InputError(
                InputErrorKind.MALFORMED_INPUT,
                f"expected an integer at token {self.position}, got {self.text!r}",
                token=self.text,
                position=self.position,
            )
        return int(self.text)


def tokenize(text: str) -> list[Token]:
    return [Token(word, i) for i, word in enumerate(text.split(), start=1)]


# =============================================================================
# PARSING
# =============================================================================

@dataclass
class ParsedInput:
    """
    Raw shape of an input document before validation.

    ``edges`` is a lazy iterator; consuming it may raise InputError.
    """
    candidate_count: int
    edges: Iterator[Edge]


def parse_candidate_count(tokens: list[Token]) -> int:
    if not tokens:
        raise InputError(
            InputErrorKind.MALFORMED_INPUT,
            "input is empty, expected the number of candidates",
            position=1,
        )
    return tokens[0].as_int()


def iter_edges(tokens: list[Token]) -> Iterator[Edge]:
    """
    Yield an Edge for every ``a b c`` triple after the candidate count.

    Raises:
        InputError: On a non-integer token or a trailing partial triple
    """
    body = tokens[1:]
    for start in range(0, len(body), 3):
        triple = body[start:start + 3]
        values = [token.as_int() for token in triple]
        if len(values) < 3:
            raise InputError(
                InputErrorKind.MALFORMED_INPUT,
                f"incomplete edge at token {triple[0].position}: "
                f"expected 3 integers, got {len(triple)}",
                position=triple[0].position,
            )
        a, b, c = values
        yield Edge(winner=a, loser=b, margin=c)


def parse_text(text: str) -> ParsedInput:
    """Split input text into a candidate count and a lazy edge stream."""
    tokens = tokenize(text)
    count = parse_candidate_count(tokens)
    return ParsedInput(candidate_count=count, edges=iter_edges(tokens))


# =============================================================================
# SOURCES
# =============================================================================

def read_source(path: Optional[str] = None, stream: Optional[TextIO] = None) -> str:
    """
    Read raw input text from ``path``, or from ``stream`` (stdin by default).

    Raises:
        InputError: If the named file cannot be opened, or the input is
            not valid UTF-8 text
    """
    if path is None:
        stream = stream if stream is not None else sys.stdin
        logger.info("Reading input from standard input")
        try:
            return stream.read()
        except UnicodeDecodeError as e:
            raise _undecodable(e, "<stdin>") from e

    try:
        with open(path, "r", encoding="utf-8") as fh:
            logger.info("Reading input from %s", path)
            return fh.read()
    except UnicodeDecodeError as e:
        raise _undecodable(e, path) from e
    except OSError as e:
        raise InputError(
            InputErrorKind.UNREADABLE_SOURCE,
            f"input file '{path}' does not exist or cannot be read ({e.strerror})",
            path=path,
        ) from e


def _undecodable(error: UnicodeDecodeError, source: str) -> InputError:
    return InputError(
        InputErrorKind.MALFORMED_INPUT,
        f"input {source} is not valid UTF-8 text "
        f"(byte {error.object[error.start]:#04x} at offset {error.start})",
        path=source,
        position=error.start,
    )


def load_weight_matrix(text: str) -> WeightMatrix:
    """
    Parse and validate input text into a WeightMatrix.

    Raises:
        InputError: On the first malformed token or failing validation check
    """
    parsed = parse_text(text)
    return build_weight_matrix(parsed.candidate_count, parsed.edges)
