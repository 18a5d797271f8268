"""
Outcome of a single request against a device's control endpoint.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RequestStatus(Enum):
    OK = "ok"
    # The request failed and the failure was swallowed (lenient mode).
    EMPTY_OK = "empty_ok"
    ERROR = "error"


@dataclass(frozen=True)
class RequestResult:
    """Result of one HTTP round trip to a device.

    Attributes:
        status: How the request ended
        url: The URL that was requested
        status_code: HTTP status code, if a response was received
        error: The exception raised by the transport, if any
    """
    status: RequestStatus
    url: str
    status_code: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is RequestStatus.OK

    @classmethod
    def success(cls, url: str, status_code: int) -> "RequestResult":
        return cls(RequestStatus.OK, url, status_code=status_code)

    @classmethod
    def failure(cls, url: str, error: Exception, strict: bool = False,
                status_code: Optional[int] = None) -> "RequestResult":
        status = RequestStatus.ERROR if strict else RequestStatus.EMPTY_OK
        return cls(status, url, status_code=status_code, error=error)
