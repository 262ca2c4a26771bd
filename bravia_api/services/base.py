"""Shared plumbing for the per-service method groups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, TypeVar

from bravia_api.errors import DecodeError

if TYPE_CHECKING:
    from bravia_api.client import Bravia

T = TypeVar("T")


def decode(parse: Callable[[Any], T], raw: Any) -> T:
    """Run *parse* on a raw payload, turning shape errors into ``DecodeError``."""
    try:
        return parse(raw)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise DecodeError(f"unexpected payload: {exc!r}") from exc


def decode_list(parse: Callable[[Any], T], raw: Any) -> list[T]:
    if not isinstance(raw, list):
        raise DecodeError(f"expected a JSON array, got {type(raw).__name__}")
    return [decode(parse, item) for item in raw]


def decode_as(kind: type[T], raw: Any) -> T:
    """Check that a selected scalar has the expected JSON type."""
    # bool is an int subclass; keep the two apart
    if not isinstance(raw, kind) or (kind is int and isinstance(raw, bool)):
        raise DecodeError(f"expected {kind.__name__}, got {type(raw).__name__}")
    return raw


def drop_none(**params: Any) -> dict[str, Any]:
    """Parameter object without the members left unset."""
    return {k: v for k, v in params.items() if v is not None}


class Service:
    """A service group bound to one client.

    Subclasses set ``endpoint`` and call ``_call`` for APIs that return a
    value and ``_send`` for APIs that don't.
    """

    endpoint: str = ""

    def __init__(self, bravia: "Bravia") -> None:
        self._bravia = bravia

    async def _call(
        self,
        method: str,
        params: Any = None,
        *,
        version: str | None = None,
        protected: bool = False,
        get: int | str = 0,
    ) -> Any:
        return await self._bravia.request(
            self.endpoint,
            method,
            params,
            version=version,
            protected=protected,
            get=get,
        )

    async def _send(
        self,
        method: str,
        params: Any = None,
        *,
        version: str | None = None,
        protected: bool = False,
    ) -> None:
        await self._bravia.request(
            self.endpoint,
            method,
            params,
            version=version,
            protected=protected,
            has_result=False,
        )
