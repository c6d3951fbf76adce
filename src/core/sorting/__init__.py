"""
Sorting primitives

Стабильная сортировка по цепочке компараторов и фабрики компараторов.
"""

from src.core.sorting.sorter import (
    Comparison,
    Sorter,
    compare_attributes,
    compare_callback_results,
    compare_items,
    compare_methods,
    compare_values,
    reverse,
    sort,
)

__all__ = [
    # Types
    "Comparison",
    "Sorter",
    # Functions
    "compare_attributes",
    "compare_callback_results",
    "compare_items",
    "compare_methods",
    "compare_values",
    "reverse",
    "sort",
]
