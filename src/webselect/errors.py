from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    HTTP_STATUS_ERROR = "HTTP_STATUS_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    SELECTOR_ERROR = "SELECTOR_ERROR"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"


class ScrapeError(Exception):
    """Raised for every expected failure while serving a scrape request.

    Caught by the request handler and turned into a plain-text 500 whose
    body is ``message``. Nothing is cached when one of these is raised.
    """

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(ScrapeError):
    """The upstream request could not be completed (DNS, connect, timeout)."""

    code = ErrorCode.TRANSPORT_ERROR


class HTTPStatusError(ScrapeError):
    """The upstream answered with anything other than 200."""

    code = ErrorCode.HTTP_STATUS_ERROR

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"status code error: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason


class ParseError(ScrapeError):
    code = ErrorCode.PARSE_ERROR


class SelectorError(ScrapeError):
    code = ErrorCode.SELECTOR_ERROR


class SerializationError(ScrapeError):
    code = ErrorCode.SERIALIZATION_ERROR
