"""Service layer over the series repository and the series search index."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from mangascraper.circuitbreaker import CircuitBreaker, CircuitState
from mangascraper.errors import ErrorCode, ServiceError
from mangascraper.series import (
    CreateInitSeriesParams,
    FindSeriesParams,
    Series,
    SeriesBC,
    UpdateInitSeriesParams,
    UpdateLatestSeriesParams,
)

_OPEN_TIMEOUT = 120.0
_FAILURE_THRESHOLD = 3

_log = logging.getLogger(__name__)


@contextmanager
def _wrapped(code: ErrorCode, message: str) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        raise ServiceError(code, message) from exc


@contextmanager
def _guarded(breaker: CircuitBreaker) -> Iterator[None]:
    if not breaker.ready():
        raise ServiceError(ErrorCode.UNKNOWN, "circuit breaker is open")
    try:
        yield
    except Exception as exc:
        breaker.done(exc)
        raise
    breaker.done(None)


class SeriesService:
    """Keeps series in the repository and in step with the search index.

    Searching and bulk indexing run behind a circuit breaker that opens after
    three consecutive failures and stays open for two minutes. Every failure is
    raised as a :class:`ServiceError` chained to the original exception.
    """

    def __init__(self, repo: Any, search: Any, logger: Any = None) -> None:
        self.repo = repo
        self.search_repo = search
        self.logger = logger if logger is not None else _log
        self._breaker = CircuitBreaker(
            open_timeout=_OPEN_TIMEOUT,
            failure_threshold=_FAILURE_THRESHOLD,
            on_state_change=self._log_state_change,
        )

    def _log_state_change(self, old: CircuitState, new: CircuitState) -> None:
        self.logger.info(
            "SeriesService: circuit breaker state change (%s -> %s)",
            old.value,
            new.value,
            extra={"source": "SeriesService", "old": old.value, "new": new.value},
        )

    def _index_one(self, series: Series) -> None:
        with _wrapped(ErrorCode.UNKNOWN, "search.Index"):
            self.search_repo.index(series)

    def create_init(self, params: CreateInitSeriesParams) -> Series:
        with _wrapped(ErrorCode.INVALID_INPUT, "params.Validate"):
            params.validate()
        with _wrapped(ErrorCode.UNKNOWN, "repo.CreateInit"):
            series = self.repo.create_init(params)
        self._index_one(series)
        return series

    def search(self, q: str) -> list[Series]:
        with _guarded(self._breaker):
            with _wrapped(ErrorCode.UNKNOWN, "search.Search"):
                results = self.search_repo.search(q)
        return results

    def index(self, series: Iterable[Series]) -> None:
        """Index each series in turn, stopping at the first failure."""
        with _guarded(self._breaker):
            for item in series:
                self._index_one(item)

    def find(self, params: FindSeriesParams) -> Series:
        with _wrapped(ErrorCode.UNKNOWN, "repo.Find"):
            return self.repo.find(params)

    def find_bc(self, params: FindSeriesParams) -> SeriesBC:
        with _wrapped(ErrorCode.UNKNOWN, "repo.FindBC"):
            return self.repo.find_bc(params)

    def find_all(self, params: FindSeriesParams) -> list[Series]:
        with _wrapped(ErrorCode.UNKNOWN, "repo.FindAll"):
            return self.repo.find_all(params)

    def find_paginated(self, params: FindSeriesParams) -> list[Series]:
        with _wrapped(ErrorCode.UNKNOWN, "repo.FindPaginated"):
            return self.repo.find_paginated(params)

    def update_init(self, params: UpdateInitSeriesParams) -> Series:
        with _wrapped(ErrorCode.INVALID_INPUT, "params.Validate"):
            params.validate()
        with _wrapped(ErrorCode.UNKNOWN, "repo.UpdateInit"):
            series = self.repo.update_init(params)
        self._index_one(series)
        return series

    def update_latest(self, params: UpdateLatestSeriesParams) -> Series:
        with _wrapped(ErrorCode.INVALID_INPUT, "params.Validate"):
            params.validate()
        with _wrapped(ErrorCode.UNKNOWN, "repo.UpdateLatest"):
            series = self.repo.update_latest(params)
        self._index_one(series)
        return series

    def delete(self, params: FindSeriesParams) -> None:
        with _wrapped(ErrorCode.UNKNOWN, "repo.Delete"):
            self.repo.delete(params)
        with _wrapped(ErrorCode.UNKNOWN, "search.Delete"):
            self.search_repo.delete(params.provider, params.slug)