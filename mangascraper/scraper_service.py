"""Service layer over scrape requests and their message broker."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from mangascraper.chapter_service import _delegate, _wrapped
from mangascraper.circuitbreaker import CircuitBreaker, CircuitState
from mangascraper.errors import ErrorCode, ServiceError
from mangascraper.scrape_requests import (
    CreateScrapeRequestParams,
    FindScrapeRequestParams,
    ScrapeRequest,
    UpdateScrapeRequestParams,
)

_OPEN_TIMEOUT = 120.0
_FAILURE_THRESHOLD = 3

_log = logging.getLogger(__name__)


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


class ScraperService:
    """Records scrape requests and announces new ones to a message broker.

    Creation runs behind a circuit breaker that opens after three consecutive
    failures and stays open for two minutes. Every failure is raised as a
    :class:`ServiceError` chained to the original exception.
    """

    def __init__(self, repo: Any, msg_broker: Any, logger: Any = None) -> None:
        self.repo = repo
        self.msg_broker = msg_broker
        self.logger = logger if logger is not None else _log
        self._breaker = CircuitBreaker(
            open_timeout=_OPEN_TIMEOUT,
            failure_threshold=_FAILURE_THRESHOLD,
            on_state_change=self._log_state_change,
        )

    def _log_state_change(self, old: CircuitState, new: CircuitState) -> None:
        self.logger.info(
            "ScraperService: circuit breaker state change (%s -> %s)",
            old.value,
            new.value,
            extra={"source": "ScraperService", "old": old.value, "new": new.value},
        )

    def create(self, params: CreateScrapeRequestParams) -> ScrapeRequest:
        with _guarded(self._breaker):
            receipt = _delegate(self.repo, "create", "repo.Create", params, validate=True)
            with _wrapped(ErrorCode.UNKNOWN, "msgBroker.Create"):
                self.msg_broker.created(receipt)
        return receipt

    def find(self, request_id: str) -> ScrapeRequest:
        return _delegate(self.repo, "find", "repo.Find", request_id)

    def find_pendings(self, params: FindScrapeRequestParams) -> list[ScrapeRequest]:
        return _delegate(self.repo, "find_pendings", "repo.FindPendings", params)

    def update(self, params: UpdateScrapeRequestParams) -> ScrapeRequest:
        return _delegate(self.repo, "update", "repo.Update", params)

    def delete(self, request_id: str) -> None:
        _delegate(self.repo, "delete", "repo.Delete", request_id)