# Ingestion package for the Kemeny ranking engine
"""
Input reading modules.

Turns the plain-text margin format into validated WeightMatrix objects.
"""
