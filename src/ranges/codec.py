"""
Codec — отображение значений домена в OrderKey

Range работает не с самими значениями, а с целочисленными ключами порядка
(OrderKey). Codec связывает домен (int, date, datetime, ...) с ключами:
- encode(value) -> int: строго монотонно относительно порядка домена
- decode(int) -> value: обратное к encode на производимых ключах
- normalize(value) -> value: идемпотентная канонизация (усечение до resolution)

Разрешение кодека определяет смысл adjacency: два диапазона смежны, если
между ними ровно один шаг ключа. Для дат с разрешением в день [1 янв, 3 янв]
и [4 янв, 10 янв] смежны; для datetime с разрешением в секунду — нет.

ИНВАРИАНТЫ:
1. NEG_INF < любой конечный ключ < POS_INF
2. decode никогда не вызывается на бесконечном ключе
3. normalize(normalize(v)) == normalize(v)
"""

import functools
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Callable, Final, Optional, Union

# Ключ порядка: конечное целое или ±inf
OrderKey = Union[int, float]

NEG_INF: Final[float] = -math.inf
POS_INF: Final[float] = math.inf


def is_finite_key(key: OrderKey) -> bool:
    """True для конечного ключа (не ±inf)."""
    # Сравнение, а не math.isinf: int за пределами float вызвал бы OverflowError
    return key != NEG_INF and key != POS_INF


# =============================================================================
# CODEC
# =============================================================================


@dataclass(frozen=True)
class Codec:
    """
    Стратегия кодирования значений домена.

    Immutable: один экземпляр разделяется всеми диапазонами своего вида.
    """

    name: str
    encode: Callable[[Any], int]
    decode: Callable[[int], Any]
    normalize: Callable[[Any], Any]

    def key_for(self, value: Any) -> int:
        """Ключ нормализованного значения: encode(normalize(value))."""
        return self.encode(self.normalize(value))


# =============================================================================
# REFERENCE CODECS
# =============================================================================


# Целые числа: ключ совпадает со значением, normalize усекает (int(2.9) == 2)
INTEGER_CODEC: Final[Codec] = Codec(
    name="integer",
    encode=int,
    decode=int,
    normalize=int,
)


def _date_normalize(value: date) -> date:
    # datetime является подклассом date, отбрасываем время
    if isinstance(value, datetime):
        return value.date()
    return value


# Даты с разрешением в день (proleptic Gregorian ordinal)
DATE_CODEC: Final[Codec] = Codec(
    name="date",
    encode=lambda value: _date_normalize(value).toordinal(),
    decode=date.fromordinal,
    normalize=_date_normalize,
)


@functools.lru_cache(maxsize=None)
def _cached_datetime_codec(resolution: timedelta, tz: Optional[tzinfo]) -> Codec:
    # Один экземпляр на (resolution, tz): замыкания равны только сами себе
    epoch = datetime(1970, 1, 1, tzinfo=tz)

    def encode(value: datetime) -> int:
        return (value - epoch) // resolution

    def decode(key: int) -> datetime:
        return epoch + resolution * key

    def normalize(value: datetime) -> datetime:
        return decode(encode(value))

    name = f"datetime[{resolution}]" if tz is None else f"datetime[{resolution}, {tz}]"
    return Codec(
        name=name,
        encode=encode,
        decode=decode,
        normalize=normalize,
    )


def datetime_codec(
    resolution: timedelta = timedelta(seconds=1),
    tz: Optional[tzinfo] = None,
) -> Codec:
    """
    Codec для datetime: ключ — число целых шагов resolution от Unix epoch.

    Повторный вызов с равными (resolution, tz) возвращает тот же экземпляр,
    поэтому независимо объявленные виды с одинаковым разрешением совместимы.

    Args:
        resolution: Шаг ключа (default: 1 секунда)
        tz: Часовой пояс epoch. None → naive datetime; иначе aware
            datetime, decode возвращает значения в этом поясе

    Returns:
        Codec (normalize усекает значение вниз до resolution)

    Raises:
        ValueError: Если resolution не положительный

    Examples:
        >>> minutes = datetime_codec(timedelta(minutes=1))
        >>> minutes.normalize(datetime(2024, 1, 1, 12, 30, 45))
        datetime.datetime(2024, 1, 1, 12, 30)
        >>> minutes is datetime_codec(timedelta(seconds=60))
        True
    """
    if resolution <= timedelta(0):
        raise ValueError(f"resolution must be positive, got {resolution}")
    return _cached_datetime_codec(resolution, tz)


# Naive datetime с разрешением в секунду
DATETIME_CODEC: Final[Codec] = datetime_codec()
