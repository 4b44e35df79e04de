"""Series records, sort order and series parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from mangascraper.errors import ErrorCode, ServiceError


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def new_sort_order(s: str) -> SortOrder:
    """Parse a sort order, falling back to ascending."""
    if s == "desc":
        return SortOrder.DESC
    return SortOrder.ASC


_IDENTITY = (("provider", "provider"), ("slug", "slug"))


def _require(obj: Any, checks: Iterable[tuple[str, str]]) -> None:
    """Raise for the first attribute of ``obj`` that is empty or zero."""
    for attr, label in checks:
        if not getattr(obj, attr):
            raise ServiceError(ErrorCode.INVALID_INPUT, f"{label} is required")


@dataclass
class Breadcrumb:
    slug: str = ""
    title: str = ""


@dataclass
class Series:
    provider: str = ""
    slug: str = ""
    title: str = ""
    source_url: str = ""
    cover_url: str = ""
    synopsis: str = ""
    genres: list[str] = field(default_factory=list)
    chapters_count: int = 0
    latest_chapter: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation."""
        return {
            "provider": self.provider,
            "slug": self.slug,
            "title": self.title,
            "sourceURL": self.source_url,
            "coverURL": self.cover_url,
            "synopsis": self.synopsis,
            "genres": list(self.genres),
            "chaptersCount": self.chapters_count,
            "latestChapter": self.latest_chapter,
        }


@dataclass
class SeriesBC:
    provider: Breadcrumb = field(default_factory=Breadcrumb)
    series: Breadcrumb = field(default_factory=Breadcrumb)


@dataclass
class CreateInitSeriesParams:
    provider: str = ""
    slug: str = ""
    title: str = ""
    source_path: str = ""

    def validate(self) -> None:
        """Raise :class:`ServiceError` if a required field is missing."""
        _require(self, (*_IDENTITY, ("title", "title"), ("source_path", "source path")))


@dataclass
class FindSeriesParams:
    provider: str = ""
    slug: str = ""
    order: SortOrder | None = None
    page: int = 0
    size: int = 0
    cursor: str = ""


@dataclass
class UpdateInitSeriesParams:
    provider: str = ""
    slug: str = ""
    thumbnail_url: str = ""
    synopsis: str = ""
    genres: bytes = b""

    def validate(self) -> None:
        """Raise :class:`ServiceError` if a required field is missing."""
        _require(self, (*_IDENTITY, ("thumbnail_url", "thumbnail URL")))


@dataclass
class UpdateLatestSeriesParams:
    provider: str = ""
    slug: str = ""
    add_chapters: int = 0
    latest_chapter: str = ""

    def validate(self) -> None:
        """Raise :class:`ServiceError` if a required field is missing."""
        _require(self, (*_IDENTITY, ("add_chapters", "add chapters"), ("latest_chapter", "latest chapter")))


def create_valid_init_series_params() -> CreateInitSeriesParams:
    """Return creation parameters that pass validation."""
    return CreateInitSeriesParams("provider", "slug", "title", "sourcePath")


def update_valid_init_series_params() -> UpdateInitSeriesParams:
    """Return initial update parameters that pass validation."""
    return UpdateInitSeriesParams("provider", "slug", "thumbnailURL")


def update_valid_latest_series_params() -> UpdateLatestSeriesParams:
    """Return latest-chapter update parameters that pass validation."""
    return UpdateLatestSeriesParams("provider", "slug", 1, "latestChapter")