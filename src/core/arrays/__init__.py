"""
Array helpers

min/max с управляемым порядком None и bounded shift/pop.
"""

from src.core.arrays.functions import (
    InvalidArgumentError,
    max_value,
    min_value,
    pop,
    shift,
)

__all__ = [
    # Exceptions
    "InvalidArgumentError",
    # Functions
    "max_value",
    "min_value",
    "pop",
    "shift",
]
