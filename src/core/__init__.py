"""
Core primitives independent of the range algebra.

Generic helpers for sorting by chained comparisons and for array reductions
that need explicit control over how None values are ordered.
"""
