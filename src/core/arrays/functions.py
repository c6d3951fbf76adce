"""
Array Functions — min/max с управляемым порядком None, bounded shift/pop

Модуль дополняет builtins:
- min_value / max_value: None участвует в сравнении и считается либо
  наименьшим (по умолчанию), либо наибольшим значением (null_high=True)
- shift / pop: извлечение до count элементов с начала / конца списка,
  ограниченное длиной списка

Типичное применение — границы диапазонов, где None означает unbounded:
для начала диапазона None наименьший, для конца — наибольший.
"""

from typing import Any, Iterable, List, Optional, TypeVar

T = TypeVar("T")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidArgumentError(ValueError):
    """
    Некорректный аргумент: редукция по пустым данным, отрицательный count.
    """
    pass


# =============================================================================
# MIN / MAX
# =============================================================================


def min_value(data: Iterable[Optional[T]], null_high: bool = False) -> Optional[T]:
    """
    Минимум с учётом None.

    Args:
        data: Значения (None допустим)
        null_high: True → None больше любого значения, False → меньше

    Returns:
        Минимальное значение (None, если None наименьший и встретился)

    Raises:
        InvalidArgumentError: Если data пуст

    Examples:
        >>> min_value([3, None, 1])
        >>> min_value([3, None, 1], null_high=True)
        1
        >>> min_value([None], null_high=True)
    """
    values = []
    seen_null = False
    for value in data:
        if value is None:
            # None наименьший → дальше можно не смотреть
            if not null_high:
                return None
            seen_null = True
            continue
        values.append(value)

    if not values and not seen_null:
        raise InvalidArgumentError("Minimum is undefined if there are no values")
    if not values:
        return None
    return min(values)


def max_value(data: Iterable[Optional[T]], null_high: bool = False) -> Optional[T]:
    """
    Максимум с учётом None.

    Args:
        data: Значения (None допустим)
        null_high: True → None больше любого значения, False → меньше

    Returns:
        Максимальное значение (None, если None наибольший и встретился)

    Raises:
        InvalidArgumentError: Если data пуст

    Examples:
        >>> max_value([3, None, 1])
        3
        >>> max_value([3, None, 1], null_high=True)
    """
    values = []
    seen_null = False
    for value in data:
        if value is None:
            # None наибольший → дальше можно не смотреть
            if null_high:
                return None
            seen_null = True
            continue
        values.append(value)

    if not values and not seen_null:
        raise InvalidArgumentError("Maximum is undefined if there are no values")
    if not values:
        return None
    return max(values)


# =============================================================================
# BOUNDED SHIFT / POP
# =============================================================================


def _validate_count(count: int) -> None:
    if count < 0:
        raise InvalidArgumentError(f"count cannot be negative: {count}")


def shift(data: List[T], count: int = 1) -> List[T]:
    """
    Извлечение до count элементов с начала списка (in place).

    Args:
        data: Список, из которого извлекаются элементы
        count: Сколько элементов извлечь (ограничено длиной списка)

    Returns:
        Извлечённые элементы в исходном порядке

    Raises:
        InvalidArgumentError: Если count отрицательный
    """
    _validate_count(count)
    removed = data[:count]
    del data[:count]
    return removed


def pop(data: List[T], count: int = 1) -> List[T]:
    """
    Извлечение до count элементов с конца списка (in place).

    Args:
        data: Список, из которого извлекаются элементы
        count: Сколько элементов извлечь (ограничено длиной списка)

    Returns:
        Извлечённые элементы в исходном порядке

    Raises:
        InvalidArgumentError: Если count отрицательный
    """
    _validate_count(count)
    if count == 0:
        return []
    removed = data[-count:]
    del data[-count:]
    return removed
