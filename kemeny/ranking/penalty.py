"""
Ranking penalty (Kemeny distance to the pairwise margins).

For every pair of positions i < j, the later-ranked candidate's margin
over the earlier-ranked one counts as disagreement with the ranking.
"""

from __future__ import annotations

from typing import Sequence

from ..domain import WeightMatrix


def ranking_penalty(ranking: Sequence[int], matrix: WeightMatrix) -> int:
    """
    Total margin that disagrees with ``ranking``.

    ``penalty = sum(margin(ranking[j], ranking[i]) for i < j)``.
    Pure function, O(n^2).
    """
    margins = matrix.margins
    penalty = 0
    for i, earlier in enumerate(ranking):
        for later in ranking[i + 1:]:
            penalty += margins[later][earlier]
    return penalty


def pair_disagreements(
    ranking: Sequence[int],
    matrix: WeightMatrix,
) -> list[tuple[int, int, int]]:
    """
    Break the penalty down by pair.

    Returns:
        (earlier, later, margin) for every pair where the later-ranked
        candidate is preferred to the earlier one
    """
    margins = matrix.margins
    out = []
    for i, earlier in enumerate(ranking):
        for later in ranking[i + 1:]:
            if margins[later][earlier] > 0:
                out.append((earlier, later, margins[later][earlier]))
    return out
