"""Exceptions raised by the Bravia client.

Everything derives from :class:`BraviaError` so callers can catch the
whole family in one place.
"""

from __future__ import annotations

from bravia_api.jsonrpc import BraviaErrorCode


class BraviaError(Exception):
    """Base class for every error the client raises."""


# ── Transport / decoding ─────────────────────────────────────────────


class NetworkError(BraviaError):
    """The HTTP request failed before a response arrived."""


class BadStatusError(BraviaError):
    """The device answered with a non-200 HTTP status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Error status received: {status_code}")


class DecodeError(BraviaError):
    """The response body could not be decoded into the expected shape."""


class InvalidResponseError(BraviaError):
    """The response carried neither ``result`` nor ``error``."""


class MissingValueError(BraviaError):
    """An expected value was missing from the response."""

    def __init__(self, what: str) -> None:
        self.what = what
        super().__init__(f"Value missing from response: {what}")


# ── Device-reported ──────────────────────────────────────────────────


class BraviaApiError(BraviaError):
    """Raised when the device returns an ``error`` pair."""

    def __init__(self, error: BraviaErrorCode) -> None:
        self.error = error
        super().__init__(f"Error returned by Bravia: {error}")

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message


# ── Refused locally ──────────────────────────────────────────────────


class ApiServiceNotFoundError(BraviaError):
    """The device does not expose the requested service."""

    def __init__(self, service: str) -> None:
        self.service = service
        super().__init__(f"API service not found: {service}")


class ApiNotFoundError(BraviaError):
    """The service does not expose the requested API."""

    def __init__(self, service: str, method: str) -> None:
        self.service = service
        self.method = method
        super().__init__(f"API not found: {service}.{method}")


class ApiVersionError(BraviaError):
    """The device does not support the requested API version."""

    def __init__(self, service: str, method: str, version: str) -> None:
        self.service = service
        self.method = method
        self.version = version
        super().__init__(f"API version not supported: {service}.{method} v{version}")


class AuthRequiredError(BraviaError):
    """A pre-shared key is required to call this API."""

    def __init__(self, service: str, method: str) -> None:
        self.service = service
        self.method = method
        super().__init__(f"A pre-shared key is required to call {service}.{method}")
