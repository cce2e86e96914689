# CLI package for the Kemeny ranking engine
"""
Command-line interface.

Commands:
    kemeny [FILE]                    - Print the Kemeny ranking and its score
    kemeny [FILE] --list-permutations - Print the search order
"""
