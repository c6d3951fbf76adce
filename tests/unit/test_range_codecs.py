"""
Тесты для Codec — отображение значений домена в OrderKey

Проверяемые инварианты:
1. encode строго монотонен
2. decode(encode(normalize(v))) == normalize(v)
3. normalize идемпотентен
4. Разрешение кодека определяет adjacency
"""

from datetime import date, datetime, timedelta, timezone
from typing import ClassVar

import pytest

from src.ranges import (
    DATE_CODEC,
    DATETIME_CODEC,
    INTEGER_CODEC,
    NEG_INF,
    POS_INF,
    DateRange,
    DatetimeRange,
    Codec,
    IntegerRange,
    Range,
    RangeTypeMismatch,
    datetime_codec,
    is_finite_key,
)


# =============================================================================
# ТЕСТЫ: Keys
# =============================================================================


class TestOrderKeys:
    """Бесконечные ключи."""

    def test_infinities_bound_everything(self):
        assert NEG_INF < -(10 ** 30) < 0 < 10 ** 30 < POS_INF

    def test_is_finite_key(self):
        assert is_finite_key(0)
        assert is_finite_key(-5)
        assert not is_finite_key(NEG_INF)
        assert not is_finite_key(POS_INF)

    def test_is_finite_key_huge_int(self):
        """Целое за пределами float всё ещё конечный ключ."""
        assert is_finite_key(10 ** 400)


# =============================================================================
# ТЕСТЫ: Integer codec
# =============================================================================


class TestIntegerCodec:
    """Целые числа: identity, усечение дробей."""

    def test_identity(self):
        assert INTEGER_CODEC.encode(42) == 42
        assert INTEGER_CODEC.decode(42) == 42

    def test_normalize_truncates(self):
        assert INTEGER_CODEC.normalize(2.9) == 2
        assert INTEGER_CODEC.normalize(-2.9) == -2

    def test_normalize_idempotent(self):
        value = INTEGER_CODEC.normalize(7.5)
        assert INTEGER_CODEC.normalize(value) == value

    def test_key_for(self):
        assert INTEGER_CODEC.key_for(3.3) == 3


# =============================================================================
# ТЕСТЫ: Date codec
# =============================================================================


class TestDateCodec:
    """Даты с разрешением в день."""

    def test_monotonic(self):
        days = [date(2023, 12, 31), date(2024, 1, 1), date(2024, 2, 29)]
        keys = [DATE_CODEC.encode(d) for d in days]
        assert keys == sorted(keys)
        assert len(set(keys)) == len(keys)

    def test_roundtrip(self):
        d = date(2024, 3, 15)
        assert DATE_CODEC.decode(DATE_CODEC.encode(d)) == d

    def test_datetime_normalized_to_date(self):
        assert DATE_CODEC.normalize(datetime(2024, 3, 15, 18, 30)) == date(2024, 3, 15)

    def test_date_range_adjacency(self):
        """Соседние дни смежны."""
        january_start = DateRange(date(2024, 1, 1), date(2024, 1, 3))
        january_rest = DateRange(date(2024, 1, 4), date(2024, 1, 31))
        assert january_start.adjacent(january_rest)
        assert str(january_start.boolean_or(january_rest)) == "[2024-01-01...2024-01-31]"

    def test_date_range_subtraction(self):
        """Вычитание дня даёт соседние даты."""
        month = DateRange(date(2024, 1, 1), date(2024, 1, 31))
        holiday = DateRange(date(2024, 1, 15), date(2024, 1, 15))
        assert str(month.boolean_not(holiday)) == (
            "[2024-01-01...2024-01-14], [2024-01-16...2024-01-31]"
        )


# =============================================================================
# ТЕСТЫ: Datetime codec
# =============================================================================


class TestDatetimeCodec:
    """datetime с настраиваемым разрешением."""

    def test_default_resolution_is_second(self):
        value = datetime(2024, 1, 1, 12, 0, 0, 750000)
        assert DATETIME_CODEC.normalize(value) == datetime(2024, 1, 1, 12, 0, 0)

    def test_epoch_key(self):
        assert DATETIME_CODEC.encode(datetime(1970, 1, 1)) == 0
        assert DATETIME_CODEC.encode(datetime(1970, 1, 1, 0, 1)) == 60

    def test_before_epoch_floors(self):
        """До epoch усечение идёт вниз, а не к нулю."""
        value = datetime(1969, 12, 31, 23, 59, 59, 500000)
        assert DATETIME_CODEC.encode(value) == -1
        assert DATETIME_CODEC.normalize(value) == datetime(1969, 12, 31, 23, 59, 59)

    def test_minute_resolution(self):
        minutes = datetime_codec(timedelta(minutes=1))
        value = datetime(2024, 1, 1, 12, 30, 45)
        assert minutes.normalize(value) == datetime(2024, 1, 1, 12, 30)
        assert minutes.encode(value) + 1 == minutes.encode(datetime(2024, 1, 1, 12, 31))

    def test_normalize_idempotent(self):
        hours = datetime_codec(timedelta(hours=1))
        value = hours.normalize(datetime(2024, 6, 1, 10, 59))
        assert hours.normalize(value) == value

    def test_aware_epoch(self):
        utc = datetime_codec(tz=timezone.utc)
        value = datetime(1970, 1, 1, 0, 0, 5, tzinfo=timezone.utc)
        assert utc.encode(value) == 5
        assert utc.decode(5) == value

    def test_non_positive_resolution_rejected(self):
        with pytest.raises(ValueError):
            datetime_codec(timedelta(0))
        with pytest.raises(ValueError):
            datetime_codec(timedelta(seconds=-1))

    def test_datetime_range_adjacency_by_second(self):
        """При разрешении в секунду соседние секунды смежны."""
        morning = DatetimeRange(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 11, 59, 59))
        noon = DatetimeRange(datetime(2024, 1, 1, 12), datetime(2024, 1, 1, 13))
        assert morning.adjacent(noon)
        assert morning.boolean_or(noon)[0] == DatetimeRange(
            datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 13)
        )


# =============================================================================
# ТЕСТЫ: Custom kinds
# =============================================================================


class TestCustomRangeKind:
    """Новый вид диапазона задаётся только codec."""

    def test_hourly_range(self):
        class HourRange(Range):
            codec: ClassVar[Codec] = datetime_codec(timedelta(hours=1))

        shift = HourRange(datetime(2024, 1, 1, 8, 45), datetime(2024, 1, 1, 16, 10))
        assert shift.start() == datetime(2024, 1, 1, 8)
        assert shift.end() == datetime(2024, 1, 1, 16)
        assert shift.adjacent(HourRange(datetime(2024, 1, 1, 17), None))

    def test_kinds_with_different_codecs_are_incompatible(self):
        assert IntegerRange(1, 2).codec != DatetimeRange().codec

    def test_same_resolution_kinds_are_compatible(self):
        """Независимо объявленные виды с одинаковым разрешением совместимы."""

        class ShiftRange(Range):
            codec: ClassVar[Codec] = datetime_codec(timedelta(minutes=1))

        class MeetingRange(Range):
            codec: ClassVar[Codec] = datetime_codec(timedelta(seconds=60))

        shift = ShiftRange(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17))
        meeting = MeetingRange(datetime(2024, 1, 1, 12), datetime(2024, 1, 1, 13))
        assert shift.contains(meeting)
        assert shift.boolean_and(meeting) == meeting

    def test_different_resolution_kinds_mismatch(self):
        class MinuteRange(Range):
            codec: ClassVar[Codec] = datetime_codec(timedelta(minutes=1))

        with pytest.raises(RangeTypeMismatch):
            MinuteRange(None, None).intersects(DatetimeRange(None, None))


class TestDatetimeCodecCache:
    """datetime_codec возвращает один экземпляр на (resolution, tz)."""

    def test_equal_parameters_share_instance(self):
        assert datetime_codec(timedelta(minutes=1)) is datetime_codec(timedelta(minutes=1))
        assert datetime_codec(timedelta(minutes=1)) == datetime_codec(timedelta(seconds=60))

    def test_default_is_module_codec(self):
        assert datetime_codec() is DATETIME_CODEC
        assert datetime_codec(timedelta(seconds=1)) is DATETIME_CODEC

    def test_timezone_is_part_of_identity(self):
        utc = datetime_codec(tz=timezone.utc)
        assert utc is not DATETIME_CODEC
        assert utc != DATETIME_CODEC
        assert utc.name != DATETIME_CODEC.name
