"""Error type raised by the domain objects and services."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Category of a failure."""

    UNKNOWN = "unknown"
    INVALID_INPUT = "invalid_input"


class ServiceError(Exception):
    """An error carrying an :class:`ErrorCode` and a human-readable message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = ErrorCode(code)
        self.message = message

    def __str__(self) -> str:
        if self.__cause__ is not None:
            return f"{self.message}: {self.__cause__}"
        return self.message

    def __repr__(self) -> str:
        return f"ServiceError(code={self.code.name}, message={self.message!r})"