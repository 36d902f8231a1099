"""Categorized failures raised by the remote data ingestors."""

from __future__ import annotations

from enum import Enum


class FetchErrorKind(str, Enum):
    """Top-level failure categories for a single fetch."""

    NETWORK = "network"
    DECODE = "decode"
    EMPTY = "empty"


class FetchError(RuntimeError):
    """Base class for a fetch that produced no usable record."""

    kind: FetchErrorKind

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(FetchError):
    """Transport failure, timeout, or an HTTP error status."""

    kind = FetchErrorKind.NETWORK


class DecodeError(FetchError):
    """The body could not be parsed into the expected top-level shape."""

    kind = FetchErrorKind.DECODE


class EmptyResponseError(FetchError):
    """Well-formed response that holds no observation."""

    kind = FetchErrorKind.EMPTY


__all__ = [
    "DecodeError",
    "EmptyResponseError",
    "FetchError",
    "FetchErrorKind",
    "NetworkError",
]
