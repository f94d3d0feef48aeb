"""
Slot schedule expansion

Turns a date range and a list of daily windows into concrete slot specs.
Slots are keyed by (owner, date, start, end). Generation skips keys that
already exist, so re-running it only fills the gaps.
"""

from datetime import date, time, timedelta
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence
from uuid import UUID

import attrs

from src.platform.exception.exceptions import DomainError


MAX_RANGE_DAYS = 366
DEFAULT_GENERATION_DAYS = 60
DEFAULT_CAPACITY = 50
DEFAULT_WINDOWS = (
    (time(10, 0), time(11, 0)),
    (time(13, 0), time(14, 0)),
    (time(16, 0), time(17, 0)),
    (time(19, 0), time(20, 0)),
)


@attrs.define(frozen=True)
class DailyWindow:
    start_time: time
    end_time: time
    capacity: int = DEFAULT_CAPACITY


class SlotKey(NamedTuple):
    exhibition_id: Optional[UUID]
    show_id: Optional[UUID]
    slot_date: date
    start_time: time
    end_time: time


def iter_dates(
    start_date: date,
    end_date: date,
    *,
    skip_mondays: bool = False,
    skip_holidays: Iterable[date] = (),
) -> Iterator[date]:
    if end_date < start_date:
        raise DomainError('end_date cannot be before start_date')
    if (end_date - start_date).days >= MAX_RANGE_DAYS:
        raise DomainError(f'Date range cannot exceed {MAX_RANGE_DAYS} days')

    holidays = set(skip_holidays)
    current = start_date
    while current <= end_date:
        if not (skip_mondays and current.weekday() == 0) and current not in holidays:
            yield current
        current += timedelta(days=1)


def expand_schedule(
    *,
    start_date: date,
    end_date: date,
    windows: Sequence[DailyWindow],
    exhibition_id: Optional[UUID] = None,
    show_id: Optional[UUID] = None,
    skip_mondays: bool = False,
    skip_holidays: Iterable[date] = (),
) -> list[tuple[SlotKey, DailyWindow]]:
    if not windows:
        raise DomainError('At least one time window is required')

    seen: set[SlotKey] = set()
    planned: list[tuple[SlotKey, DailyWindow]] = []
    for slot_date in iter_dates(
        start_date, end_date, skip_mondays=skip_mondays, skip_holidays=skip_holidays
    ):
        for window in windows:
            key = SlotKey(exhibition_id, show_id, slot_date, window.start_time, window.end_time)
            if key in seen:
                continue
            seen.add(key)
            planned.append((key, window))
    return planned


def default_windows(capacity: int = DEFAULT_CAPACITY) -> list[DailyWindow]:
    return [DailyWindow(start, end, capacity) for start, end in DEFAULT_WINDOWS]
