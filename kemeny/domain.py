"""
Core Domain Objects for the Kemeny ranking engine.

Domain Objects:
    Edge          - A single pairwise preference margin as read from input
    WeightMatrix  - Immutable n×n table of preference margins
    SearchResult  - An optimal ranking with its penalty score
    InputError    - An explicit, recoverable input failure with a kind
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


Ranking = tuple[int, ...]


# =============================================================================
# ERROR TAXONOMY
# =============================================================================

class InputErrorKind(Enum):
    """
    Input failures detected before any search begins.

    Every one of these is fatal for a command-line run, but they are
    raised as exceptions so callers decide what to do with them.
    """
    INVALID_CANDIDATE_INDEX = "invalid_candidate_index"
    NEGATIVE_WEIGHT = "negative_weight"
    BIDIRECTIONAL_EDGE = "bidirectional_edge"
    SELF_EDGE = "self_edge"
    MALFORMED_INPUT = "malformed_input"
    INVALID_CANDIDATE_COUNT = "invalid_candidate_count"
    UNREADABLE_SOURCE = "unreadable_source"


class InputError(Exception):
    """Raised when input cannot be turned into a well-formed WeightMatrix."""

    def __init__(self, kind: InputErrorKind, message: str, **details):
        self.kind = kind
        self.message = message
        self.details = details
        super().__init__(f"[{kind.value}] {message}")


# =============================================================================
# EDGE
# =============================================================================

@dataclass(frozen=True)
class Edge:
    """
    One line of input: ``margin`` more voters prefer ``winner`` to ``loser``
    than the reverse.

    Edges are stored exactly as read. Range and sign checks happen in
    ``kemeny.validation``.
    """
    winner: int
    loser: int
    margin: int


# =============================================================================
# WEIGHT MATRIX
# =============================================================================

@dataclass(frozen=True)
class WeightMatrix:
    """
    Pairwise preference margins over candidates ``0..size-1``.

    ``margins[a][b]`` is how many more voters prefer ``a`` to ``b``.
    Unspecified pairs and the diagonal are zero. A well-formed matrix
    never has both ``margins[a][b]`` and ``margins[b][a]`` nonzero.

    The matrix is read-only input to the search and is never mutated.
    """
    size: int
    margins: tuple[tuple[int, ...], ...]

    def __post_init__(self):
        if len(self.margins) != self.size:
            raise ValueError(
                f"expected {self.size} rows, got {len(self.margins)}"
            )
        for row in self.margins:
            if len(row) != self.size:
                raise ValueError(
                    f"expected rows of length {self.size}, got {len(row)}"
                )

    @classmethod
    def zeros(cls, size: int) -> WeightMatrix:
        """A matrix with no preference signal at all."""
        return cls(size, tuple((0,) * size for _ in range(size)))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> WeightMatrix:
        margins = tuple(tuple(int(v) for v in row) for row in rows)
        return cls(len(margins), margins)

    @classmethod
    def from_edges(cls, size: int, edges: Iterable[Edge]) -> WeightMatrix:
        """
        Build a matrix from edges without any validation.

        Later edges for the same ordered pair replace earlier ones.
        Use ``kemeny.validation.build_weight_matrix`` for untrusted input.
        """
        table = [[0] * size for _ in range(size)]
        for edge in edges:
            table[edge.winner][edge.loser] = edge.margin
        return cls.from_rows(table)

    def margin(self, winner: int, loser: int) -> int:
        """How many more voters prefer ``winner`` to ``loser``."""
        return self.margins[winner][loser]

    def to_rows(self) -> list[list[int]]:
        return [list(row) for row in self.margins]

    def nonzero_pairs(self) -> list[tuple[int, int]]:
        """Ordered (winner, loser) pairs carrying a nonzero margin."""
        return [
            (a, b)
            for a in range(self.size)
            for b in range(self.size)
            if self.margins[a][b] != 0
        ]


# =============================================================================
# SEARCH RESULT
# =============================================================================

@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of an exhaustive Kemeny search.

    ``ranking`` lists candidates from most to least preferred.
    ``score`` is its penalty. ``permutations_evaluated`` is how many
    permutations were scored to obtain it.
    """
    ranking: Ranking
    score: int
    permutations_evaluated: int = 0

    def sort_key(self) -> tuple[int, Ranking]:
        """Order results by score, then lexicographically by ranking."""
        return (self.score, self.ranking)

    def format_ranking(self) -> str:
        return " ".join(str(c) for c in self.ranking)
