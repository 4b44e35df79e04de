"""Service layer over the provider repository."""

from __future__ import annotations

from typing import Any

from mangascraper.chapter_service import _delegate
from mangascraper.series import SortOrder


class ProviderService:
    """Validates provider parameters and delegates to a repository.

    Every repository failure is raised as a :class:`ServiceError` chained to the
    original exception.
    """

    def __init__(self, repo: Any) -> None:
        self.repo = repo

    def create(self, params: Any) -> Any:
        return _delegate(self.repo, "create", "repo.Create", params, validate=True)

    def find(self, slug: str) -> Any:
        return _delegate(self.repo, "find", "repo.Find", slug)

    def find_bc(self, slug: str) -> Any:
        return _delegate(self.repo, "find_bc", "repo.FindBC", slug)

    def find_all(self, order: SortOrder) -> list[Any]:
        return _delegate(self.repo, "find_all", "repo.FindAll", order)

    def update(self, params: Any) -> Any:
        return _delegate(self.repo, "update", "repo.Update", params, validate=True)

    def delete(self, slug: str) -> None:
        _delegate(self.repo, "delete", "repo.Delete", slug)