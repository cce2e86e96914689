"""
Input Validation for the Kemeny ranking engine.

Every check here runs before the search starts. The search itself
trusts its WeightMatrix completely, so anything that gets past this
module is assumed well-formed.

Checks (in the order they are applied):
1. Candidate count is at least 1
2. Each edge references candidates inside [0, n)
3. Each edge weight is non-negative
4. No candidate carries a positive preference over itself
5. No unordered pair has nonzero margins in both directions
"""

from __future__ import annotations

import logging
from typing import Iterable

from .domain import Edge, InputError, InputErrorKind, WeightMatrix


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

# Work grows as n! * n^2; beyond this a brute-force run takes minutes or more.
PRACTICAL_CANDIDATE_LIMIT = 10


# =============================================================================
# SINGLE-VALUE CHECKS
# =============================================================================

def validate_candidate_count(count: int) -> None:
    """
    Raises:
        InputError: If there are no candidates to rank
    """
    if count < 1:
        raise InputError(
            InputErrorKind.INVALID_CANDIDATE_COUNT,
            f"number of candidates must be at least 1, got {count}",
            count=count,
        )
    if count > PRACTICAL_CANDIDATE_LIMIT:
        logger.warning(
            "%d candidates exceeds the practical limit of %d; "
            "exhaustive search will evaluate %d! permutations",
            count, PRACTICAL_CANDIDATE_LIMIT, count,
        )


def validate_candidate_index(index: int, count: int) -> None:
    """
    Raises:
        InputError: If index is outside [0, count)
    """
    if index < 0 or index >= count:
        raise InputError(
            InputErrorKind.INVALID_CANDIDATE_INDEX,
            f"candidate index out of bounds {index}",
            index=index,
        )


def validate_weight(weight: int) -> None:
    """
    Raises:
        InputError: If weight is negative
    """
    if weight < 0:
        raise InputError(
            InputErrorKind.NEGATIVE_WEIGHT,
            f"negative edge weight {weight}",
            weight=weight,
        )


def validate_edge(edge: Edge, count: int) -> None:
    """Apply all per-edge checks, winner first, then loser, then weight."""
    validate_candidate_index(edge.winner, count)
    validate_candidate_index(edge.loser, count)
    validate_weight(edge.margin)
    if edge.winner == edge.loser and edge.margin > 0:
        raise InputError(
            InputErrorKind.SELF_EDGE,
            f"candidate {edge.winner} cannot be preferred over itself",
            index=edge.winner,
        )


# =============================================================================
# MATRIX CHECKS
# =============================================================================

def validate_no_bidirectional_edges(matrix: WeightMatrix) -> None:
    """
    Ensure no unordered pair carries a margin in both directions.

    Pairs are scanned in ascending (a, b) order so the reported pair is
    deterministic.

    Raises:
        InputError: If some pair {a, b} has margin(a, b) > 0 and margin(b, a) > 0
    """
    for a in range(matrix.size):
        for b in range(a + 1, matrix.size):
            if matrix.margin(a, b) > 0 and matrix.margin(b, a) > 0:
                raise InputError(
                    InputErrorKind.BIDIRECTIONAL_EDGE,
                    f"candidates {a} and {b} connected bidirectionally",
                    candidates=(a, b),
                )


def build_weight_matrix(count: int, edges: Iterable[Edge]) -> WeightMatrix:
    """
    Validate edges and assemble the WeightMatrix for a run.

    Edges are checked in the order given. Later edges for the same ordered
    pair replace earlier ones; zero-weight self-edges are ignored.

    Raises:
        InputError: On the first failing check
    """
    validate_candidate_count(count)

    accepted = []
    for edge in edges:
        validate_edge(edge, count)
        if edge.winner != edge.loser:
            accepted.append(edge)

    matrix = WeightMatrix.from_edges(count, accepted)
    validate_no_bidirectional_edges(matrix)

    logger.info(
        "Built weight matrix: %d candidates, %d edges, %d nonzero margins",
        count, len(accepted), len(matrix.nonzero_pairs()),
    )
    return matrix
