"""
Exhaustive Kemeny Ranking Search.

Core principle:
    Score every permutation of the candidates. Keep the lowest penalty;
    among equal penalties keep the lexicographically smallest ranking.

The serial driver walks permutations in lexicographic order and only
replaces the best on a strict improvement, so the first optimum found
is the lexicographically smallest one.

The parallel driver splits the permutation index space into disjoint
contiguous ranges, searches each in a worker process, and reduces the
partial results by (score, ranking). Completion order never affects
the answer.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Optional, Sequence

from ..domain import SearchResult, WeightMatrix
from .penalty import ranking_penalty
from .permutations import (
    identity_permutation,
    next_permutation,
    permutation_at,
    permutation_count,
)


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_WORKERS = 1

# Below this many permutations per worker, process start-up dominates.
MIN_PERMUTATIONS_PER_WORKER = 5040


# =============================================================================
# SERIAL SEARCH
# =============================================================================

def search_range(
    matrix: WeightMatrix,
    start: Sequence[int],
    count: Optional[int] = None,
) -> SearchResult:
    """
    Search ``count`` consecutive permutations beginning at ``start``.

    With ``count=None`` the search runs to the last permutation.
    """
    current = list(start)
    best = tuple(current)
    best_score = ranking_penalty(current, matrix)
    evaluated = 0

    while True:
        score = ranking_penalty(current, matrix)
        evaluated += 1
        if score < best_score:
            best_score = score
            best = tuple(current)
        if count is not None and evaluated >= count:
            break
        if not next_permutation(current):
            break

    return SearchResult(ranking=best, score=best_score, permutations_evaluated=evaluated)


def _search_chunk(matrix: WeightMatrix, start_index: int, count: int) -> SearchResult:
    # Worker entry point; must stay module-level to be picklable.
    return search_range(matrix, permutation_at(matrix.size, start_index), count)


# =============================================================================
# PARALLEL SEARCH
# =============================================================================

def plan_chunks(total: int, workers: int) -> list[tuple[int, int]]:
    """
    Split ``[0, total)`` into at most ``workers`` contiguous, non-empty
    (start_index, count) ranges that cover it exactly.
    """
    workers = max(1, min(workers, total))
    bounds = [total * k // workers for k in range(workers + 1)]
    return [
        (bounds[k], bounds[k + 1] - bounds[k])
        for k in range(workers)
        if bounds[k + 1] > bounds[k]
    ]


def reduce_results(results: Sequence[SearchResult]) -> SearchResult:
    """Pick the lexicographically-first optimum across partial results."""
    best = min(results, key=SearchResult.sort_key)
    evaluated = sum(r.permutations_evaluated for r in results)
    return SearchResult(
        ranking=best.ranking,
        score=best.score,
        permutations_evaluated=evaluated,
    )


def _search_parallel(matrix: WeightMatrix, workers: int) -> SearchResult:
    chunks = plan_chunks(permutation_count(matrix.size), workers)
    logger.info(
        "Splitting %d permutations into %d chunks",
        permutation_count(matrix.size), len(chunks),
    )
    with ProcessPoolExecutor(max_workers=len(chunks)) as ex:
        futures = [
            ex.submit(_search_chunk, matrix, start_index, count)
            for start_index, count in chunks
        ]
        results = [f.result() for f in futures]
    return reduce_results(results)


# =============================================================================
# ENTRY POINT
# =============================================================================

def find_kemeny_ranking(
    matrix: WeightMatrix,
    workers: int = DEFAULT_WORKERS,
) -> SearchResult:
    """
    Find the lexicographically-first ranking of minimum penalty.

    The matrix is assumed valid; no checks are made here.

    Args:
        matrix: Pairwise preference margins
        workers: Worker processes to spread the search over. Small
            searches always run serially.

    Returns:
        SearchResult with the optimal ranking and its penalty. With no
        candidates the ranking is empty and the penalty is 0.
    """
    total = permutation_count(matrix.size)
    started = time.time()

    if workers > 1 and total >= MIN_PERMUTATIONS_PER_WORKER * workers:
        result = _search_parallel(matrix, workers)
    else:
        result = search_range(matrix, identity_permutation(matrix.size))

    logger.info(
        "Searched %d permutations of %d candidates in %.3fs: score=%d",
        result.permutations_evaluated, matrix.size,
        time.time() - started, result.score,
    )
    return result
