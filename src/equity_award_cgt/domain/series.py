"""Date-indexed value series with exact-or-closest-prior lookup."""

from bisect import bisect_right
from collections.abc import Iterable, Iterator
from datetime import date
from typing import Generic, TypeVar

T = TypeVar("T")


class DatedSeries(Generic[T]):
    """Immutable, date-ordered series of observations.

    Lookups return the value recorded on the requested date, or failing that
    the value on the closest earlier date. Dates before the first observation
    have no value. A later observation for an already-seen date replaces the
    earlier one.
    """

    def __init__(self, observations: Iterable[tuple[date, T]]) -> None:
        by_date: dict[date, T] = {}
        for observed_on, value in observations:
            by_date[observed_on] = value
        self._dates = sorted(by_date)
        self._values = [by_date[d] for d in self._dates]

    def on_or_before(self, as_of: date) -> T | None:
        index = bisect_right(self._dates, as_of)
        if index == 0:
            return None
        return self._values[index - 1]

    @property
    def first_date(self) -> date | None:
        return self._dates[0] if self._dates else None

    @property
    def last_date(self) -> date | None:
        return self._dates[-1] if self._dates else None

    def __len__(self) -> int:
        return len(self._dates)

    def __iter__(self) -> Iterator[tuple[date, T]]:
        return iter(zip(self._dates, self._values))
