"""
Pipeline Orchestrator for the Kemeny ranking engine.

Pipeline stages:
    1. Read input text (file or stdin)
    2. Parse and validate into a WeightMatrix
    3. Exhaustive ranking search

Every stage is deterministic. Input errors propagate as InputError
before the search starts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TextIO

from ..domain import SearchResult, WeightMatrix
from ..ingestion.reader import load_weight_matrix, read_source
from ..ranking.penalty import pair_disagreements
from ..ranking.permutations import permutation_index
from ..ranking.search import DEFAULT_WORKERS, find_kemeny_ranking


logger = logging.getLogger(__name__)


# =============================================================================
# PIPELINE RESULT
# =============================================================================

@dataclass
class PipelineResult:
    """
    Complete result of one run.

    Exposes:
    - The validated matrix the search ran on
    - The optimal ranking and its score
    - Which pairs the ranking disagrees with
    - Where the ranking falls in search order
    """
    matrix: WeightMatrix
    search: SearchResult
    source: str = "<stdin>"

    @property
    def ranking(self) -> tuple[int, ...]:
        return self.search.ranking

    @property
    def score(self) -> int:
        return self.search.score

    @property
    def search_position(self) -> int:
        """0-based index of the ranking in lexicographic search order."""
        return permutation_index(self.search.ranking)

    def get_disagreements(self) -> list[tuple[int, int, int]]:
        return pair_disagreements(self.search.ranking, self.matrix)


# =============================================================================
# SAMPLE DATA (For Demo Purposes)
# =============================================================================

# Three candidates in a preference cycle: every ranking disagrees somewhere.
SAMPLE_INPUT = """3
0 1 1
1 2 1
2 0 1
"""


# =============================================================================
# PIPELINE EXECUTION
# =============================================================================

def run_pipeline(
    text: Optional[str] = None,
    workers: int = DEFAULT_WORKERS,
    source: str = "<sample>",
) -> PipelineResult:
    """
    Parse ``text`` and find its Kemeny ranking.

    Args:
        text: Input in the margin format (defaults to SAMPLE_INPUT)
        workers: Worker processes for the search
        source: Label recorded on the result

    Raises:
        InputError: If the input is malformed or inconsistent
    """
    if text is None:
        text = SAMPLE_INPUT

    matrix = load_weight_matrix(text)
    search = find_kemeny_ranking(matrix, workers=workers)
    return PipelineResult(matrix=matrix, search=search, source=source)


def run_pipeline_from_source(
    path: Optional[str] = None,
    stream: Optional[TextIO] = None,
    workers: int = DEFAULT_WORKERS,
) -> PipelineResult:
    """Read from ``path`` (or ``stream``/stdin) and run the pipeline."""
    text = read_source(path, stream)
    return run_pipeline(text, workers=workers, source=path or "<stdin>")


def load_matrix_from_source(
    path: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> WeightMatrix:
    """Read and validate input without searching."""
    return load_weight_matrix(read_source(path, stream))
