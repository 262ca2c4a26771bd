"""Bravia wire-format models.

Pure data: no I/O, no business logic.  The client and the emulator both
import these for serialisation only.

Bravia speaks a JSON-RPC dialect rather than JSON-RPC 2.0 proper: there is
no ``jsonrpc`` member, ``params`` is always a list, every request carries a
``version`` string and errors come back as a ``[code, message]`` pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_VERSION = "1.0"

# ── Device error codes (pro-bravia.sony.net error code list) ────────
ANY = 1
TIMEOUT = 2
ILLEGAL_ARGUMENT = 3
ILLEGAL_REQUEST = 5
ILLEGAL_STATE = 7
NO_SUCH_METHOD = 12
UNSUPPORTED_VERSION = 14
UNSUPPORTED_OPERATION = 15
UNAUTHORIZED = 401
FORBIDDEN = 403
NOT_FOUND = 404
REQUEST_ENTITY_TOO_LARGE = 413
REQUEST_URI_TOO_LONG = 414
NOT_IMPLEMENTED = 501
SERVICE_UNAVAILABLE = 503
REQUEST_RETRY = 40000
CLIENT_OVER_MAXIMUM = 40001
ENCRYPTION_FAILED = 40002
REQUEST_DUPLICATED = 40003
MULTIPLE_SETTINGS_FAILED = 40004
DISPLAY_IS_TURNED_OFF = 40005

ERROR_MESSAGES: dict[int, str] = {
    ANY: "Any",
    TIMEOUT: "Timeout",
    ILLEGAL_ARGUMENT: "Illegal Argument",
    ILLEGAL_REQUEST: "Illegal Request",
    ILLEGAL_STATE: "Illegal State",
    NO_SUCH_METHOD: "No Such Method",
    UNSUPPORTED_VERSION: "Unsupported Version",
    UNSUPPORTED_OPERATION: "Unsupported Operation",
    UNAUTHORIZED: "Unauthorized",
    FORBIDDEN: "Forbidden",
    NOT_FOUND: "Not Found",
    REQUEST_ENTITY_TOO_LARGE: "Request Entity Too Large",
    REQUEST_URI_TOO_LONG: "Request URI Too Long",
    NOT_IMPLEMENTED: "Not Implemented",
    SERVICE_UNAVAILABLE: "Service Unavailable",
    REQUEST_RETRY: "Request Retry",
    CLIENT_OVER_MAXIMUM: "Client Over Maximum",
    ENCRYPTION_FAILED: "Encryption Failed",
    REQUEST_DUPLICATED: "Request Duplicated",
    MULTIPLE_SETTINGS_FAILED: "Multiple Settings Failed",
    DISPLAY_IS_TURNED_OFF: "Display Is Turned Off",
}


# ── Models ───────────────────────────────────────────────────────────
@dataclass(slots=True, frozen=True)
class BraviaErrorCode:
    """Error pair reported by the device."""

    code: int
    message: str

    def __str__(self) -> str:
        return f"#{self.code}: {self.message}"

    def to_list(self) -> list[Any]:
        return [self.code, self.message]

    @classmethod
    def from_list(cls, raw: Any) -> "BraviaErrorCode":
        """Parse ``[code, message]``; raises ``ValueError`` on bad input."""
        if not isinstance(raw, list) or len(raw) < 2:
            raise ValueError("error must be a [code, message] list")
        code, message = raw[0], raw[1]
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError("error code must be an integer")
        if not isinstance(message, str):
            raise ValueError("error message must be a string")
        return cls(code=code, message=message)

    @classmethod
    def from_code(cls, code: int) -> "BraviaErrorCode":
        return cls(code=code, message=ERROR_MESSAGES.get(code, "Unknown"))


@dataclass(slots=True)
class BraviaRequest:
    """Outbound request envelope.

    ``params`` is the list that goes on the wire.  Use :meth:`build` to
    wrap a single parameter object the way the services expect.
    """

    method: str
    params: list[Any] = field(default_factory=list)
    id: int = 1
    version: str = DEFAULT_VERSION

    # -- Convenience ---------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "params": list(self.params),
            "id": self.id,
            "version": self.version,
        }

    @classmethod
    def build(
        cls,
        method: str,
        params: Any = None,
        id: int = 1,
        version: str | None = None,
    ) -> "BraviaRequest":
        """Envelope with *params* wrapped in a one-element list.

        ``None`` means the API takes no parameters and yields ``[]``.
        """
        wrapped = [] if params is None else [params]
        return cls(
            method=method,
            params=wrapped,
            id=id,
            version=version or DEFAULT_VERSION,
        )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "BraviaRequest":
        """Parse a raw dict into a request; raises ``ValueError`` on bad input."""
        if not isinstance(raw, dict):
            raise ValueError("request must be a JSON object")
        method = raw.get("method")
        if not isinstance(method, str) or not method:
            raise ValueError("missing or invalid 'method' field")
        params = raw.get("params", [])
        if not isinstance(params, list):
            raise ValueError("'params' must be a JSON array")
        version = raw.get("version", DEFAULT_VERSION)
        if not isinstance(version, str):
            raise ValueError("'version' must be a string")
        req_id = raw.get("id", 0)
        if isinstance(req_id, bool) or not isinstance(req_id, int):
            raise ValueError("'id' must be an integer")
        return cls(method=method, params=params, id=req_id, version=version)


@dataclass(slots=True)
class BraviaResponse:
    """Inbound response envelope: either ``result`` or ``error``."""

    id: int | None = None
    result: list[Any] | None = None
    error: BraviaErrorCode | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error.to_list()
        else:
            d["result"] = self.result if self.result is not None else []
        return d

    @classmethod
    def from_dict(cls, raw: Any) -> "BraviaResponse":
        """Parse a decoded body; raises ``ValueError`` on bad input.

        A body carrying neither member is returned with both unset so the
        caller can decide how to report it.
        """
        if not isinstance(raw, dict):
            raise ValueError("response must be a JSON object")
        req_id = raw.get("id")
        if "result" in raw:
            return cls(id=req_id, result=raw["result"])
        if "error" in raw:
            return cls(id=req_id, error=BraviaErrorCode.from_list(raw["error"]))
        return cls(id=req_id)

    # -- Factories -----------------------------------------------------
    @classmethod
    def success(cls, req_id: int | None, result: list[Any]) -> "BraviaResponse":
        return cls(id=req_id, result=result)

    @classmethod
    def fail(
        cls, req_id: int | None, code: int, message: str | None = None
    ) -> "BraviaResponse":
        error = (
            BraviaErrorCode.from_code(code)
            if message is None
            else BraviaErrorCode(code=code, message=message)
        )
        return cls(id=req_id, error=error)
