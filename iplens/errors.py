"""
Error types raised by IPLens
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Error kinds, one per exception class"""
    TRANSPORT = "HTTP client library error"
    RATE_LIMIT_EXCEEDED = "rate limit exceeded"
    REQUEST = "application error"
    PARSE = "parse error"
    TIMEOUT = "timeout error"
    LIMIT_EXCEEDED = "limit exceeded"
    DATA_INTEGRITY = "data integrity error"
    CONFIGURATION = "configuration error"

    def __str__(self) -> str:
        return self.value


class IPLensError(Exception):
    """
    Base class for every error raised by the library.

    Renders as "<kind>: <description>", or just "<kind>" when no
    description was given.
    """

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, description: Optional[str] = None):
        self.description = description
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.description:
            return f"{self.kind.value}: {self.description}"
        return self.kind.value


class TransportError(IPLensError):
    """Connection failure or non-success HTTP status other than 429"""
    kind = ErrorKind.TRANSPORT

    def __init__(self, description: Optional[str] = None,
                 status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(description)


class RateLimitExceededError(IPLensError):
    """The service answered HTTP 429"""
    kind = ErrorKind.RATE_LIMIT_EXCEEDED


class RequestError(IPLensError):
    """The service answered with an application-level `error` field"""
    kind = ErrorKind.REQUEST


class ParseError(IPLensError):
    """The response body could not be decoded into a record"""
    kind = ErrorKind.PARSE


class LookupTimeoutError(IPLensError):
    """The total deadline of a batch lookup expired"""
    kind = ErrorKind.TIMEOUT


class LimitExceededError(IPLensError):
    """Too many addresses for a single request"""
    kind = ErrorKind.LIMIT_EXCEEDED


class DataIntegrityError(IPLensError):
    """A country code is missing from one of the enrichment tables"""
    kind = ErrorKind.DATA_INTEGRITY

    def __init__(self, description: Optional[str] = None,
                 country_code: Optional[str] = None):
        self.country_code = country_code
        super().__init__(description)


class ConfigurationError(IPLensError):
    """Invalid settings or unusable bundled data at construction time"""
    kind = ErrorKind.CONFIGURATION
