"""Ranges — алгебра интервалов над произвольным упорядоченным доменом.

- Codec: отображение значений домена в ключи порядка
- Range: immutable интервал с опционально открытыми концами
- RangeCollection: отсортированная immutable коллекция диапазонов одного вида
"""

from .codec import (
    DATE_CODEC,
    DATETIME_CODEC,
    INTEGER_CODEC,
    NEG_INF,
    POS_INF,
    Codec,
    OrderKey,
    datetime_codec,
    is_finite_key,
)
from .range import (
    DateRange,
    DatetimeRange,
    IntegerRange,
    Range,
    RangeInvariantViolation,
    RangeTypeMismatch,
)
from .collection import RANGE_SORTER, RangeCollection

__all__ = [
    # Codec
    "Codec",
    "OrderKey",
    "NEG_INF",
    "POS_INF",
    "INTEGER_CODEC",
    "DATE_CODEC",
    "DATETIME_CODEC",
    "datetime_codec",
    "is_finite_key",
    # Range
    "Range",
    "IntegerRange",
    "DateRange",
    "DatetimeRange",
    # Exceptions
    "RangeTypeMismatch",
    "RangeInvariantViolation",
    # Collection
    "RangeCollection",
    "RANGE_SORTER",
]
