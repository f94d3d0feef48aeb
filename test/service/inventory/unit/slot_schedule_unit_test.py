from datetime import date, time

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.service.inventory.domain.slot_schedule import (
    DailyWindow,
    SlotKey,
    default_windows,
    expand_schedule,
    iter_dates,
)


@pytest.mark.unit
class TestIterDates:
    def test_range_is_inclusive(self) -> None:
        dates = list(iter_dates(date(2026, 11, 2), date(2026, 11, 4)))

        assert dates == [date(2026, 11, 2), date(2026, 11, 3), date(2026, 11, 4)]

    def test_mondays_and_holidays_are_skipped(self) -> None:
        # 2026-11-02 and 2026-11-09 are Mondays
        dates = list(
            iter_dates(
                date(2026, 11, 2),
                date(2026, 11, 9),
                skip_mondays=True,
                skip_holidays=[date(2026, 11, 5)],
            )
        )

        assert date(2026, 11, 2) not in dates
        assert date(2026, 11, 9) not in dates
        assert date(2026, 11, 5) not in dates
        assert len(dates) == 5

    def test_reversed_range_is_rejected(self) -> None:
        with pytest.raises(DomainError, match='before start_date'):
            list(iter_dates(date(2026, 11, 5), date(2026, 11, 4)))

    def test_range_longer_than_a_year_is_rejected(self) -> None:
        with pytest.raises(DomainError, match='cannot exceed'):
            list(iter_dates(date(2026, 1, 1), date(2027, 1, 2)))


@pytest.mark.unit
class TestExpandSchedule:
    def test_every_date_gets_every_window(self) -> None:
        exhibition_id = uuid7()
        windows = [
            DailyWindow(time(10, 0), time(11, 0), 30),
            DailyWindow(time(14, 0), time(15, 0), 40),
        ]

        planned = expand_schedule(
            start_date=date(2026, 11, 3),
            end_date=date(2026, 11, 5),
            windows=windows,
            exhibition_id=exhibition_id,
        )

        assert len(planned) == 6
        key, window = planned[0]
        assert key == SlotKey(exhibition_id, None, date(2026, 11, 3), time(10, 0), time(11, 0))
        assert window.capacity == 30

    def test_duplicate_windows_collapse_to_one_key(self) -> None:
        window = DailyWindow(time(10, 0), time(11, 0))

        planned = expand_schedule(
            start_date=date(2026, 11, 3), end_date=date(2026, 11, 3), windows=[window, window]
        )

        assert len(planned) == 1

    def test_empty_windows_are_rejected(self) -> None:
        with pytest.raises(DomainError, match='At least one time window'):
            expand_schedule(start_date=date(2026, 11, 3), end_date=date(2026, 11, 3), windows=[])

    def test_default_windows_are_four_hourly_sessions(self) -> None:
        windows = default_windows(capacity=25)

        assert [w.start_time.hour for w in windows] == [10, 13, 16, 19]
        assert all(w.capacity == 25 for w in windows)
