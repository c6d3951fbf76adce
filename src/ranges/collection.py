"""
RangeCollection — отсортированная immutable последовательность диапазонов

Коллекция диапазонов одного вида (range_type), всегда отсортированная по
(start_key, end_key) по возрастанию. Сортировка стабильная: диапазоны с
одинаковыми ключами сохраняют порядок добавления. -inf идёт первым, +inf —
последним.

Любая операция (add, filter, map, булевы операции, merge) возвращает новую
коллекцию; исходная никогда не меняется.

Merge-операции — однопроходная жадная свёртка (не fixpoint):
- merge_intersecting_ranges: элемент поглощается ПЕРВЫМ пересекающимся
  накопленным диапазоном
- merge_adjacent_ranges: то же для смежных диапазонов
- merge_ranges: intersecting, затем adjacent, по одному разу
"""

import logging
from collections.abc import Sequence
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, Type, Union, overload

from src.core.sorting import Sorter, compare_methods
from src.ranges.codec import OrderKey
from src.ranges.range import Range, RangeTypeMismatch

LOG = logging.getLogger(__name__)

# Результат функции map: диапазон, коллекция (вклеивается) или None (удаление)
MapResult = Union[Range, "RangeCollection", None]


# =============================================================================
# DEFAULT SORTER
# =============================================================================

# Порядок коллекции: start_key, затем end_key; при равенстве исходный порядок
RANGE_SORTER: Sorter = Sorter(
    compare_methods("start_as_number"),
    compare_methods("end_as_number"),
)


# =============================================================================
# RANGE COLLECTION
# =============================================================================


class RangeCollection(Sequence):
    """
    Immutable, type-homogeneous, отсортированная коллекция диапазонов.

    Создание:
        RangeCollection.create(IntegerRange(1, 2), IntegerRange(3, 4))
        RangeCollection.create_empty(IntegerRange)
    """

    def __init__(
        self,
        range_type: Type[Range],
        *ranges: Range,
        sorter: Optional[Sorter] = None,
    ):
        """
        Args:
            range_type: Вид диапазонов коллекции
            ranges: Начальные диапазоны (любой порядок)
            sorter: Порядок сортировки (default: RANGE_SORTER)

        Raises:
            RangeTypeMismatch: Если диапазон не относится к range_type
        """
        self._range_type = range_type
        self._sorter = sorter or RANGE_SORTER
        for range_ in ranges:
            if not isinstance(range_, range_type):
                raise RangeTypeMismatch(
                    f"Ranges must be of type {range_type.__name__}, "
                    f"got {type(range_).__name__}"
                )
        self._ranges: Tuple[Range, ...] = tuple(self._sorter.sorted(ranges))

    @classmethod
    def create(
        cls,
        range_: Range,
        *ranges: Range,
        sorter: Optional[Sorter] = None,
    ) -> "RangeCollection":
        """Коллекция вида первого диапазона."""
        return cls(type(range_), range_, *ranges, sorter=sorter)

    @classmethod
    def create_empty(
        cls,
        range_type: Union[Type[Range], Range],
        sorter: Optional[Sorter] = None,
    ) -> "RangeCollection":
        """Пустая коллекция вида range_type (класс или экземпляр)."""
        if isinstance(range_type, Range):
            range_type = type(range_type)
        return cls(range_type, sorter=sorter)

    @property
    def range_type(self) -> Type[Range]:
        return self._range_type

    @property
    def sorter(self) -> Sorter:
        return self._sorter

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def add(self, *ranges: Range) -> "RangeCollection":
        """
        Новая коллекция с добавленными диапазонами.

        Raises:
            RangeTypeMismatch: Если хотя бы один диапазон другого вида
                (ничего не добавляется)
        """
        return self._derive([*self._ranges, *ranges])

    def filter(self, predicate: Callable[[Range], bool]) -> "RangeCollection":
        """Только диапазоны, для которых predicate истинен (порядок сохраняется)."""
        return self._derive([range_ for range_ in self._ranges if predicate(range_)])

    def map(self, function: Callable[[Range], MapResult]) -> "RangeCollection":
        """
        Применение function к каждому диапазону.

        Результат function:
        - Range → заменяет элемент
        - RangeCollection → элементы вклеиваются на место исходного
        - None → элемент удаляется

        Результат пересортировывается целиком.

        Raises:
            RangeTypeMismatch: Если function вернула диапазон другого вида
        """
        mapped: List[Range] = []
        for range_ in self._ranges:
            result = function(range_)
            if result is None:
                continue
            if isinstance(result, RangeCollection):
                mapped.extend(result)
            else:
                mapped.append(result)
        LOG.debug("mapped %d ranges to %d", len(self._ranges), len(mapped))
        return self._derive(mapped)

    def boolean_and(self, other: Range) -> "RangeCollection":
        """Пересечение каждого элемента с other; непересекающиеся отбрасываются."""
        return self.map(lambda range_: range_.boolean_and(other))

    def boolean_not(self, other: Range) -> "RangeCollection":
        """Вычитание other из каждого элемента; пустые результаты отбрасываются."""
        return self.map(lambda range_: range_.boolean_not(other))

    # -------------------------------------------------------------------------
    # Merge
    # -------------------------------------------------------------------------

    def merge_intersecting_ranges(self) -> "RangeCollection":
        """
        Слияние пересекающихся диапазонов за один проход.

        Examples:
            >>> from src.ranges.range import IntegerRange
            >>> c = RangeCollection.create(
            ...     IntegerRange(1, 3), IntegerRange(3, 4), IntegerRange(2, 4)
            ... )
            >>> str(c.merge_intersecting_ranges())
            '[1...4]'
        """
        return self._merge(Range.intersects)

    def merge_adjacent_ranges(self) -> "RangeCollection":
        """Слияние смежных диапазонов за один проход."""
        return self._merge(Range.adjacent)

    def merge_ranges(self) -> "RangeCollection":
        """
        Минимальный набор диапазонов, покрывающий все элементы:
        merge_intersecting_ranges, затем merge_adjacent_ranges.
        """
        return self.merge_intersecting_ranges().merge_adjacent_ranges()

    def _merge(self, should_merge: Callable[[Range, Range], bool]) -> "RangeCollection":
        merged: List[Range] = []
        for range_ in self._ranges:
            for i, existing in enumerate(merged):
                # first match wins: остальные накопленные не проверяются
                if should_merge(existing, range_):
                    merged[i] = existing.boolean_or(range_)[0]
                    break
            else:
                merged.append(range_)
        LOG.debug("merged %d ranges into %d", len(self._ranges), len(merged))
        return self._derive(merged)

    # -------------------------------------------------------------------------
    # Bounds
    # -------------------------------------------------------------------------

    def start(self) -> Any:
        """Начало первого диапазона (истинный минимум) или None для пустой."""
        return self._ranges[0].start_value if self._ranges else None

    def start_as_number(self) -> Optional[OrderKey]:
        return self._ranges[0].start_key if self._ranges else None

    def end(self) -> Any:
        """
        Конец ПОСЛЕДНЕГО диапазона в порядке сортировки или None для пустой.

        Это не обязательно максимальный конец: [1...10], [2...3] → 3.
        Истинное протяжение даёт span().
        """
        return self._ranges[-1].end_value if self._ranges else None

    def end_as_number(self) -> Optional[OrderKey]:
        return self._ranges[-1].end_key if self._ranges else None

    def span(self) -> Optional[Range]:
        """
        Охватывающий диапазон всех элементов (None для пустой коллекции).

        Границы выбираются по ключам, а не по значениям домена: порядок
        задаёт codec. Unbounded стороны (±inf) побеждают автоматически.
        """
        if not self._ranges:
            return None
        first = min(self._ranges, key=Range.start_as_number)
        last = max(self._ranges, key=Range.end_as_number)
        return self._range_type(first.start_value, last.end_value)

    # -------------------------------------------------------------------------
    # Sequence
    # -------------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self._ranges

    def to_list(self) -> List[Range]:
        return list(self._ranges)

    @overload
    def __getitem__(self, index: int) -> Range: ...

    @overload
    def __getitem__(self, index: slice) -> "RangeCollection": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._derive(self._ranges[index])
        return self._ranges[index]

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[Range]:
        return iter(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeCollection):
            return NotImplemented
        return self._range_type is other._range_type and self._ranges == other._ranges

    def __hash__(self) -> int:
        return hash((self._range_type, self._ranges))

    def __str__(self) -> str:
        return ", ".join(str(range_) for range_ in self._ranges)

    def __repr__(self) -> str:
        return f"RangeCollection[{self._range_type.__name__}]({self})"

    def _derive(self, ranges: Iterable[Range]) -> "RangeCollection":
        return RangeCollection(self._range_type, *ranges, sorter=self._sorter)
