# Ranking package for the Kemeny ranking engine
"""
Exact Kemeny ranking by exhaustive permutation search.

Every permutation is scored; no heuristics, no pruning.
"""
