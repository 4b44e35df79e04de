"""Scrape request records, their parameters and scrape results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mangascraper.errors import ErrorCode, ServiceError
from mangascraper.series import SortOrder


class ScrapeRequestStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class ScrapeRequestType(str, Enum):
    SERIES_LIST = "SERIES_LIST"
    SERIES_DETAIL = "SERIES_DETAIL"
    CHAPTER_LIST = "CHAPTER_LIST"
    CHAPTER_DETAIL = "CHAPTER_DETAIL"


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _invalid(message: str) -> ServiceError:
    return ServiceError(ErrorCode.INVALID_INPUT, message)


@dataclass
class ScrapeRequest:
    id: str = ""
    type: ScrapeRequestType | str = ""
    status: ScrapeRequestStatus | str = ""
    base_url: str = ""
    request_path: str = ""
    provider: str = ""
    series: str = ""
    chapter: str = ""
    retries: int = 0
    total_time: float = 0.0
    error: bool = False
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation, leaving out empty optional fields."""
        data: dict[str, Any] = {
            "id": self.id,
            "type": _plain(self.type),
            "status": _plain(self.status),
            "baseURL": self.base_url,
            "requestPath": self.request_path,
            "provider": self.provider,
        }
        optional = {
            "series": self.series,
            "chapter": self.chapter,
            "retries": self.retries,
            "totalTime": self.total_time,
            "error": self.error,
            "message": self.message,
        }
        data.update((key, value) for key, value in optional.items() if value)
        return data


@dataclass
class CreateScrapeRequestParams:
    type: ScrapeRequestType | str = ""
    status: ScrapeRequestStatus | str = ""
    base_url: str = ""
    request_path: str = ""
    provider: str = ""
    series: str = ""
    chapter: str = ""

    def validate(self) -> None:
        """Raise :class:`ServiceError` if a required field is missing."""
        if not self.type:
            raise _invalid("type is required")
        if not self.base_url:
            raise _invalid("baseURL is required")
        if not self.request_path:
            raise _invalid("requestPath is required")
        if not self.status:
            raise _invalid("status is required")
        if not self.provider:
            raise _invalid("provider is required")

        if self.type == ScrapeRequestType.CHAPTER_DETAIL:
            if not self.series:
                raise _invalid("series is required")
            if not self.chapter:
                raise _invalid("chapter is required")
        elif self.type in (ScrapeRequestType.CHAPTER_LIST, ScrapeRequestType.SERIES_DETAIL):
            if not self.series:
                raise _invalid("series is required")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation, leaving out empty optional fields."""
        data: dict[str, Any] = {
            "type": _plain(self.type),
            "status": _plain(self.status),
            "baseURL": self.base_url,
            "requestPath": self.request_path,
            "provider": self.provider,
        }
        if self.series:
            data["series"] = self.series
        if self.chapter:
            data["chapter"] = self.chapter
        return data


@dataclass
class UpdateScrapeRequestParams:
    id: str = ""
    status: ScrapeRequestStatus | str = ""
    total_time: float = 0.0
    error: bool = False
    message: str = ""

    def validate(self) -> None:
        """Raise :class:`ServiceError` if a required field is missing."""
        if not self.id:
            raise _invalid("id is required")
        if not self.status:
            raise _invalid("status is required")


@dataclass
class FindScrapeRequestParams:
    status: ScrapeRequestStatus | str = ""
    order: SortOrder | None = None
    page: int = 0
    size: int = 0
    cursor: str = ""


@dataclass
class SeriesListResult:
    title: str = ""
    slug: str = ""
    source_path: str = ""


@dataclass
class SeriesDetailResult:
    thumbnail_url: str = ""
    synopsis: str = ""
    genres: bytes = b""


@dataclass
class ChapterListResult:
    short_title: str = ""
    slug: str = ""
    number: float = 0.0
    href: str = ""


@dataclass
class ChapterDetailResult:
    full_title: str = ""
    source_path: str = ""
    content_paths: bytes = b""
    next_path: str = ""
    next_slug: str = ""
    prev_path: str = ""
    prev_slug: str = ""


@dataclass
class TSReaderScript:
    """Reader configuration embedded in a chapter page."""

    prev_url: str = ""
    next_url: str = ""
    sources: list[list[str]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TSReaderScript:
        """Build from the decoded JSON object; each source keeps its image list."""
        sources = [list(source.get("images") or []) for source in data.get("sources") or []]
        return cls(
            prev_url=data.get("prevUrl", ""),
            next_url=data.get("nextUrl", ""),
            sources=sources,
        )


def create_valid_scrape_request_params() -> CreateScrapeRequestParams:
    """Return parameters that pass validation."""
    return CreateScrapeRequestParams(
        type=ScrapeRequestType.SERIES_LIST,
        status=ScrapeRequestStatus.PENDING,
        base_url="validBaseURL",
        request_path="validRequestPath",
        provider="validProvider",
    )