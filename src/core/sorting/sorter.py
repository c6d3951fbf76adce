"""
Sorter — стабильная сортировка по цепочке компараторов

Сортировка последовательностей по нескольким критериям: первый компаратор,
вернувший ненулевой результат, решает порядок пары; при полном равенстве
сохраняется исходный порядок (stable sort).

Компаратор — callable(a, b) -> int:
- < 0: a идёт раньше b
- > 0: b идёт раньше a
- 0: tie, решает следующий компаратор

ИНВАРИАНТЫ:
1. Sorter immutable: список компараторов не меняется после создания
2. Сортировка стабильна (list.sort / sorted)
3. Компараторы вызываются строго в порядке добавления
"""

from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Tuple

Comparison = Callable[[Any, Any], int]


# =============================================================================
# SORTER
# =============================================================================


class Sorter:
    """
    Набор компараторов, применяемых по порядку для разрешения ties.

    Один экземпляр можно переиспользовать для сортировки многих списков.
    """

    def __init__(self, *comparisons: Comparison):
        self._comparisons: Tuple[Comparison, ...] = tuple(comparisons)

    @property
    def comparisons(self) -> Tuple[Comparison, ...]:
        return self._comparisons

    def with_comparisons(self, *comparisons: Comparison) -> "Sorter":
        """
        Новый Sorter с компараторами, добавленными в конец цепочки.

        Args:
            comparisons: Дополнительные компараторы

        Returns:
            Новый экземпляр (исходный не меняется)
        """
        return Sorter(*self._comparisons, *comparisons)

    def sort(self, data: List[Any]) -> "Sorter":
        """
        Сортировка списка in place.

        Args:
            data: Список для сортировки

        Returns:
            self (для chaining)
        """
        data.sort(key=cmp_to_key(self.compare))
        return self

    def sorted(self, data: Iterable[Any]) -> List[Any]:
        """Новый отсортированный список, вход не меняется."""
        return sorted(data, key=cmp_to_key(self.compare))

    def compare(self, a: Any, b: Any) -> int:
        """
        Сравнение пары: результат первого компаратора с ненулевым ответом.
        """
        for comparison in self._comparisons:
            result = int(comparison(a, b))
            if result != 0:
                return result
        return 0


# =============================================================================
# HELPERS
# =============================================================================


def compare_values(a: Any, b: Any) -> int:
    """
    Трёхстороннее сравнение (-1, 0, 1).

    Examples:
        >>> compare_values(1, 2)
        -1
        >>> compare_values("b", "a")
        1
    """
    return (a > b) - (a < b)


def sort(data: List[Any], *comparisons: Comparison) -> None:
    """
    Разовая сортировка списка in place без создания Sorter вручную.

    Examples:
        >>> data = [3, 1, 4, 1, 5, 9]
        >>> sort(data, lambda a, b: a % 2 - b % 2, compare_values)
        >>> data
        [4, 1, 1, 3, 5, 9]
    """
    Sorter(*comparisons).sort(data)


def reverse(comparison: Comparison) -> Comparison:
    """Компаратор с обратным порядком."""

    def reversed_comparison(a: Any, b: Any) -> int:
        return comparison(b, a)

    return reversed_comparison


def compare_methods(method_name: str, *args: Any) -> Comparison:
    """
    Компаратор по результату одноимённого метода двух объектов.

    Args:
        method_name: Имя метода
        args: Аргументы, передаваемые методу

    Raises:
        AttributeError: Если у объекта нет такого метода
    """

    def comparison(a: Any, b: Any) -> int:
        return compare_values(
            getattr(a, method_name)(*args),
            getattr(b, method_name)(*args),
        )

    return comparison


def compare_attributes(attribute_name: str) -> Comparison:
    """Компаратор по значению атрибута (или property)."""

    def comparison(a: Any, b: Any) -> int:
        return compare_values(getattr(a, attribute_name), getattr(b, attribute_name))

    return comparison


def compare_items(key: Any) -> Comparison:
    """Компаратор по значению ключа mapping (или индекса последовательности)."""

    def comparison(a: Any, b: Any) -> int:
        return compare_values(a[key], b[key])

    return comparison


def compare_callback_results(callback: Callable[[Any], Any]) -> Comparison:
    """
    Компаратор по результату callback на каждом элементе.

    Examples:
        >>> data = ["apple", "fig", "banana"]
        >>> sort(data, compare_callback_results(len))
        >>> data
        ['fig', 'apple', 'banana']
    """

    def comparison(a: Any, b: Any) -> int:
        return compare_values(callback(a), callback(b))

    return comparison
