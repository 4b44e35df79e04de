"""Service layer over the chapter repository."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from mangascraper.errors import ErrorCode, ServiceError


@contextmanager
def _wrapped(code: ErrorCode, message: str) -> Iterator[None]:
    """Re-raise any exception as a :class:`ServiceError` chained to it."""
    try:
        yield
    except Exception as exc:
        raise ServiceError(code, message) from exc


def _delegate(repo: Any, method: str, label: str, arg: Any, *, validate: bool = False) -> Any:
    """Optionally validate ``arg``, then call ``repo.<method>(arg)`` with wrapped errors."""
    if validate:
        with _wrapped(ErrorCode.INVALID_INPUT, "params.Validate"):
            arg.validate()
    with _wrapped(ErrorCode.UNKNOWN, label):
        return getattr(repo, method)(arg)


class ChapterService:
    """Validates chapter parameters and delegates to a repository.

    Every repository failure is raised as a :class:`ServiceError` chained to the
    original exception.
    """

    def __init__(self, repo: Any) -> None:
        self.repo = repo

    def create_init(self, params: Any) -> Any:
        return _delegate(self.repo, "create_init", "repo.CreateInit", params, validate=True)

    def find(self, params: Any) -> Any:
        return _delegate(self.repo, "find", "repo.Find", params)

    def find_bc(self, params: Any) -> Any:
        return _delegate(self.repo, "find_bc", "repo.Find", params)

    def find_latest(self, params: Any) -> Any:
        return _delegate(self.repo, "find_latest", "repo.FindLatest", params)

    def count(self, params: Any) -> int:
        return _delegate(self.repo, "count", "repo.Count", params)

    def find_all(self, params: Any) -> list[Any]:
        return _delegate(self.repo, "find_all", "repo.FindAll", params)

    def find_list_with_rel(self, params: Any) -> Any:
        return _delegate(self.repo, "find_list_with_rel", "repo.FindListWithRel", params)

    def find_paginated(self, params: Any) -> list[Any]:
        return _delegate(self.repo, "find_paginated", "repo.FindPaginated", params)

    def update_init(self, params: Any) -> Any:
        return _delegate(self.repo, "update_init", "repo.UpdateInit", params, validate=True)

    def delete(self, params: Any) -> None:
        _delegate(self.repo, "delete", "repo.Delete", params)