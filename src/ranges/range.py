"""
Range — интервал с опционально открытыми концами

Immutable Pydantic модель одномерного интервала над произвольным упорядоченным
доменом. Значения домена переводятся в ключи порядка (OrderKey) через Codec,
привязанный к виду диапазона (IntegerRange, DateRange, DatetimeRange, ...).

Все сравнения и арифметика выполняются на ключах:
- None на месте начала → start_key = -inf (unbounded слева)
- None на месте конца → end_key = +inf (unbounded справа)
- ±inf участвуют в сравнениях, но не в ±1 арифметике (adjacency, вычитание)

Операции:
- Предикаты: equals, intersects, contains, extends_before/after, adjacent*
- Булева алгебра: boolean_and, boolean_or, boolean_xor, boolean_not,
  boolean_slice (результат — Range/None или RangeCollection)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Диапазон никогда не меняется — любая "модификация" создаёт новый экземпляр
2. Равенство определяется ключами, а не исходными значениями
3. start_key <= end_key НЕ проверяется: вырожденный диапазон обрабатывается
   алгеброй механически
4. boolean_slice даёт 1..3 куска; иное — RangeInvariantViolation
"""

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from pydantic import BaseModel, Field, model_validator

from src.ranges.codec import (
    DATE_CODEC,
    DATETIME_CODEC,
    INTEGER_CODEC,
    NEG_INF,
    POS_INF,
    Codec,
    OrderKey,
    is_finite_key,
)

if TYPE_CHECKING:
    from src.ranges.collection import RangeCollection

LOG = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RangeTypeMismatch(TypeError):
    """
    Диапазон несовместимого вида: вставка в коллекцию другого вида или
    комбинирование диапазонов с разными Codec.

    Операция отклоняется целиком, исходные значения не меняются.
    """
    pass


class RangeInvariantViolation(RuntimeError):
    """
    Нарушение внутреннего инварианта алгебры (дефект, не ошибка вызывающего).

    Никогда не перехватывается внутри библиотеки.
    """
    pass


# =============================================================================
# RANGE MODEL
# =============================================================================


class Range(BaseModel):
    """
    Базовый диапазон. Сам по себе не создаётся — конкретный вид задаёт codec.

    Создание: Kind(start, end), где start/end — значения домена или None.
    """

    # Ключи порядка
    start_key: OrderKey = Field(..., description="Ключ начала (-inf для unbounded)")
    end_key: OrderKey = Field(..., description="Ключ конца (+inf для unbounded)")

    # Нормализованные значения домена
    start_value: Any = Field(default=None, description="Начало или None (unbounded)")
    end_value: Any = Field(default=None, description="Конец или None (unbounded)")

    model_config = {"frozen": True}  # Immutable

    codec: ClassVar[Codec]

    def __init__(self, start: Any = None, end: Any = None) -> None:
        codec: Optional[Codec] = getattr(type(self), "codec", None)
        if codec is None:
            raise TypeError(
                f"{type(self).__name__} has no codec, instantiate a concrete range kind"
            )
        super().__init__(
            start_key=NEG_INF if start is None else codec.key_for(start),
            end_key=POS_INF if end is None else codec.key_for(end),
            start_value=None if start is None else codec.normalize(start),
            end_value=None if end is None else codec.normalize(end),
        )

    @model_validator(mode="after")
    def validate_bounds(self) -> "Range":
        """
        Значение None ⟺ бесконечный ключ на соответствующей стороне.
        """
        if (self.start_value is None) != (self.start_key == NEG_INF):
            raise ValueError(
                f"start_value {self.start_value!r} inconsistent with start_key {self.start_key}"
            )
        if (self.end_value is None) != (self.end_key == POS_INF):
            raise ValueError(
                f"end_value {self.end_value!r} inconsistent with end_key {self.end_key}"
            )
        return self

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def start(self) -> Any:
        """Начало (нормализованное значение) или None для unbounded."""
        return self.start_value

    def end(self) -> Any:
        """Конец (нормализованное значение) или None для unbounded."""
        return self.end_value

    def start_as_number(self) -> OrderKey:
        return self.start_key

    def end_as_number(self) -> OrderKey:
        return self.end_key

    def with_start(self, start: Any) -> "Range":
        """Новый диапазон того же вида с другим началом."""
        return type(self)(start, self.end_value)

    def with_end(self, end: Any) -> "Range":
        """Новый диапазон того же вида с другим концом."""
        return type(self)(self.start_value, end)

    def value_before(self, key: OrderKey) -> Any:
        """
        Значение домена на шаг раньше ключа.

        Returns:
            decode(key - 1) или None для бесконечного ключа
        """
        if not is_finite_key(key):
            return None
        return self.codec.decode(key - 1)

    def value_after(self, key: OrderKey) -> Any:
        """
        Значение домена на шаг позже ключа.

        Returns:
            decode(key + 1) или None для бесконечного ключа
        """
        if not is_finite_key(key):
            return None
        return self.codec.decode(key + 1)

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def equals(self, other: "Range") -> bool:
        """Те же start_key и end_key."""
        self._check_kind(other)
        return self.start_key == other.start_key and self.end_key == other.end_key

    def intersects(self, other: "Range") -> bool:
        """Хотя бы одна общая точка."""
        self._check_kind(other)
        if self.start_key > other.end_key:
            return False
        if self.end_key < other.start_key:
            return False
        return True

    def contains(self, other: "Range") -> bool:
        """other целиком внутри self (границы могут совпадать)."""
        self._check_kind(other)
        if self.start_key > other.start_key:
            return False
        if self.end_key < other.end_key:
            return False
        return True

    def extends_before(self, other: "Range") -> bool:
        """self начинается раньше other."""
        self._check_kind(other)
        return self.start_key < other.start_key

    def extends_after(self, other: "Range") -> bool:
        """self заканчивается позже other."""
        self._check_kind(other)
        return self.end_key > other.end_key

    def adjacent_right_of(self, other: "Range") -> bool:
        """
        Начало self следует сразу за концом other (без пересечения).

        Бесконечная граница на проверяемой стороне → False.
        """
        self._check_kind(other)
        if not is_finite_key(self.start_key) or not is_finite_key(other.end_key):
            return False
        return self.start_key == other.end_key + 1

    def adjacent_left_of(self, other: "Range") -> bool:
        """
        Конец self стоит сразу перед началом other (без пересечения).

        Бесконечная граница на проверяемой стороне → False.
        """
        self._check_kind(other)
        if not is_finite_key(self.end_key) or not is_finite_key(other.start_key):
            return False
        return self.end_key + 1 == other.start_key

    def adjacent(self, other: "Range") -> bool:
        return self.adjacent_right_of(other) or self.adjacent_left_of(other)

    # -------------------------------------------------------------------------
    # Boolean algebra
    # -------------------------------------------------------------------------

    def boolean_and(self, other: "Range") -> Optional["Range"]:
        """
        Пересечение: общая часть двух диапазонов.

        Returns:
            [max(start), min(end)] или None, если диапазоны не пересекаются

        Examples:
            >>> str(IntegerRange(10, 20).boolean_and(IntegerRange(15, 25)))
            '[15...20]'
        """
        if not self.intersects(other):
            return None
        return type(self)(
            other.start_value if self.extends_before(other) else self.start_value,
            other.end_value if self.extends_after(other) else self.end_value,
        )

    def boolean_or(self, other: "Range") -> "RangeCollection":
        """
        Объединение: один диапазон, если пересекаются или смежны, иначе оба.

        Examples:
            >>> str(IntegerRange(10, 20).boolean_or(IntegerRange(21, 30)))
            '[10...30]'
        """
        if self.intersects(other) or self.adjacent(other):
            return self._collection(self._span(other))
        return self._collection(self, self._same_kind(other))

    def boolean_xor(self, other: "Range") -> "RangeCollection":
        """
        Симметрическая разность: покрытое ровно одним из диапазонов.

        Смежные диапазоны сливаются (как в boolean_or), непересекающиеся
        возвращаются как есть, пересекающиеся — охватывающий span минус
        пересечение.
        """
        if self.equals(other):
            return self._collection()
        if self.adjacent(other):
            return self.boolean_or(other)
        if not self.intersects(other):
            return self._collection(self, self._same_kind(other))
        intersection = self.boolean_and(other)
        return self._span(other).boolean_not(intersection)

    def boolean_not(self, other: "Range") -> "RangeCollection":
        """
        Вычитание: части self, не покрытые other (0..2 куска).

        Examples:
            >>> str(IntegerRange(10, 20).boolean_not(IntegerRange(12, 18)))
            '[10...11], [19...20]'
        """
        if other.contains(self):
            return self._collection()
        if not self.intersects(other):
            return self._collection(self)

        cls = type(self)
        if self.contains(other):
            pieces = []
            # Куски только с тех сторон, где self выходит за other
            if self.extends_before(other):
                pieces.append(cls(self.start_value, self.value_before(other.start_key)))
            if self.extends_after(other):
                pieces.append(cls(self.value_after(other.end_key), self.end_value))
            return self._collection(*pieces)

        # Частичное перекрытие: self выходит за other ровно с одной стороны
        if self.extends_before(other):
            return self._collection(cls(self.start_value, self.value_before(other.start_key)))
        return self._collection(cls(self.value_after(other.end_key), self.end_value))

    def boolean_slice(self, other: "Range") -> "RangeCollection":
        """
        Разбиение общего протяжения по границам пересечения (1..3 куска).

        - равные диапазоны → 1 кусок
        - непересекающиеся (в т.ч. смежные) → оба диапазона
        - пересечение с общей границей → 2 куска
        - пересечение со свободным местом с обеих сторон → 3 куска

        Raises:
            RangeInvariantViolation: Если вычитание дало не 1 и не 2 куска

        Examples:
            >>> str(IntegerRange(1, 5).boolean_slice(IntegerRange(3, 8)))
            '[1...2], [3...5], [6...8]'
        """
        if self.equals(other):
            return self._collection(self)
        if not self.intersects(other):
            return self._collection(self, self._same_kind(other))

        intersection = self.boolean_and(other)
        pieces = self._span(other).boolean_not(intersection)
        if len(pieces) not in (1, 2):
            LOG.error(
                "slice of %s and %s produced %d pieces outside the intersection %s",
                self, other, len(pieces), intersection,
            )
            raise RangeInvariantViolation(
                f"Slicing {self} by {other} produced {len(pieces)} pieces "
                f"besides the intersection {intersection}, expected 1 or 2"
            )
        return pieces.add(intersection)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_kind(self, other: Any) -> None:
        if not isinstance(other, Range) or other.codec != self.codec:
            raise RangeTypeMismatch(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )

    def _same_kind(self, other: "Range") -> "Range":
        # Совместимый по codec диапазон другого класса приводим к type(self)
        if isinstance(other, type(self)):
            return other
        return type(self)(other.start_value, other.end_value)

    def _span(self, other: "Range") -> "Range":
        """Охватывающий диапазон: от меньшего начала до большего конца."""
        return type(self)(
            other.start_value if other.extends_before(self) else self.start_value,
            other.end_value if other.extends_after(self) else self.end_value,
        )

    def _collection(self, *ranges: "Range") -> "RangeCollection":
        from src.ranges.collection import RangeCollection

        return RangeCollection.create_empty(type(self)).add(*ranges)

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        if other.codec != self.codec:
            return False
        return self.start_key == other.start_key and self.end_key == other.end_key

    def __hash__(self) -> int:
        return hash((self.codec.name, self.start_key, self.end_key))

    def __str__(self) -> str:
        start = "" if self.start_value is None else str(self.start_value)
        end = "" if self.end_value is None else str(self.end_value)
        return f"[{start}...{end}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.start_value!r}, {self.end_value!r})"


# =============================================================================
# CONCRETE RANGE KINDS
# =============================================================================


class IntegerRange(Range):
    """Диапазон целых чисел: ключ равен значению, дроби усекаются."""

    codec: ClassVar[Codec] = INTEGER_CODEC


class DateRange(Range):
    """Диапазон дат с разрешением в день."""

    codec: ClassVar[Codec] = DATE_CODEC


class DatetimeRange(Range):
    """Диапазон naive datetime с разрешением в секунду."""

    codec: ClassVar[Codec] = DATETIME_CODEC
