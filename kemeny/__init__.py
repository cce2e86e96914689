# Kemeny Ranking Engine
"""
Exact Kemeny consensus ranking from pairwise preference margins.

Given how many more voters prefer each candidate to each other one,
finds the ordering that disagrees with those margins the least.
"""
