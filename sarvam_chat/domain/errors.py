from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class FailureKind(str, Enum):
    VALIDATION = 'validation'
    CONFIGURATION = 'configuration'
    UPSTREAM = 'upstream'
    EMPTY_RESPONSE = 'empty_response'
    UNEXPECTED = 'unexpected'


@dataclass(eq=False)
class DomainError(Exception):
    """Base class for all domain-level errors.

    These represent failures that occur within the application's core
    logic, independent of transport concerns. Each carries the HTTP status
    the request handler should surface to the client.
    """

    message: str
    status_code: int = 500

    code: ClassVar[str] = 'domain_error'
    kind: ClassVar[FailureKind] = FailureKind.UNEXPECTED

    def __str__(self) -> str:
        return self.message


class InvalidMessage(DomainError):  # 400
    code = 'invalid_message'
    kind = FailureKind.VALIDATION

    def __init__(self, message: str = 'Message text is required.'):
        super().__init__(message=message, status_code=400)


class ApiError(DomainError):
    """Raised by the upstream adapter. Propagated unchanged to the client."""

    code = 'api_error'


class ConfigError(ApiError):  # 500
    """Raised when the system is misconfigured.

    Use this for a missing API key or other critical configuration values
    that prevent a request from being sent upstream.
    """

    code = 'missing or misconfigured setting'
    kind = FailureKind.CONFIGURATION


class UpstreamError(ApiError):  # upstream status, else 502
    code = 'upstream_error'
    kind = FailureKind.UPSTREAM


class EmptyResponseError(ApiError):  # 500
    code = 'empty_response'
    kind = FailureKind.EMPTY_RESPONSE
