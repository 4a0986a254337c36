"""Request metric reporters: a no-op one and an in-process statistics one."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Callable

COUNT_VIEW = "maps.googleapis.com/client/count"
LATENCY_VIEW = "maps.googleapis.com/client/request_latency"
LATENCY_BOUNDS = (
    20.0, 25.2, 31.7, 40.0, 50.4, 63.5, 80.0, 100.8, 127.0, 160.0, 201.6, 254.0,
    320.0, 403.2, 508.0, 640.0, 806.3, 1015.9, 1280.0, 1612.7, 2031.9, 2560.0,
    3225.4, 4063.7,
)


class Reporter(ABC):
    """Creates a request object for every call made to a service."""

    @abstractmethod
    def new_request(self, name: str):
        """Start timing a request called ``name``; return an object with ``end_request``."""


@dataclass(frozen=True)
class NoOpRequest:
    """A request that records nothing."""

    def end_request(self, error: BaseException | None = None, status_code: int | None = None,
                    metro: str = "") -> None:
        return None


class NoOpReporter(Reporter):
    """A reporter that records nothing."""

    def new_request(self, name: str) -> NoOpRequest:
        return NoOpRequest()


@dataclass
class ViewRow:
    """Aggregated data for one combination of tag values in a view.

    ``sum`` and ``bucket_counts`` are filled only for the latency view.
    """

    tags: dict[str, str]
    count: int = 0
    sum: float = 0.0
    bucket_counts: tuple[int, ...] = ()


@dataclass
class StatsRequest:
    """A running request whose latency is recorded when it ends."""

    reporter: StatsReporter
    name: str
    start: int

    def end_request(self, error: BaseException | None = None, status_code: int | None = None,
                    metro: str = "") -> None:
        duration = self.reporter._now_ms() - self.start
        tags = {
            "request_name": self.name,
            "api_status": str(error) if error is not None else "",
            "http_code": str(status_code) if status_code is not None else "",
            "metro_area": metro,
        }
        self.reporter._record(tags, duration)


@dataclass
class StatsReporter(Reporter):
    """Records request counts and latency into views kept in memory."""

    clock: Callable[[], int] = time.monotonic_ns
    _views: dict[str, dict[tuple[tuple[str, str], ...], ViewRow]] = field(
        default_factory=dict, init=False, repr=False
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def register_views(self) -> None:
        """Enable the latency and count views; data is recorded only after this."""
        with self._lock:
            self._views.setdefault(LATENCY_VIEW, {})
            self._views.setdefault(COUNT_VIEW, {})

    def new_request(self, name: str) -> StatsRequest:
        return StatsRequest(reporter=self, name=name, start=self._now_ms())

    def retrieve_data(self, name: str) -> list[ViewRow]:
        """Return a snapshot of the rows of a registered view."""
        with self._lock:
            rows = self._views.get(name)
            if rows is None:
                raise KeyError(f'cannot retrieve data; view "{name}" is not registered')
            return [
                ViewRow(dict(row.tags), row.count, row.sum, row.bucket_counts)
                for row in rows.values()
            ]

    def _now_ms(self) -> int:
        return self.clock() // 1_000_000

    def _record(self, tags: dict[str, str], duration_ms: int) -> None:
        key = tuple(sorted(tags.items()))
        with self._lock:
            count_rows = self._views.get(COUNT_VIEW)
            if count_rows is not None:
                row = count_rows.setdefault(key, ViewRow(dict(tags)))
                row.count += 1
            latency_rows = self._views.get(LATENCY_VIEW)
            if latency_rows is not None:
                row = latency_rows.setdefault(
                    key, ViewRow(dict(tags), bucket_counts=(0,) * (len(LATENCY_BOUNDS) + 1))
                )
                buckets = list(row.bucket_counts)
                buckets[bisect_right(LATENCY_BOUNDS, duration_ms)] += 1
                row.bucket_counts = tuple(buckets)
                row.count += 1
                row.sum += duration_ms