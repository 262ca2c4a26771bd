"""Method dispatch registry for the emulated device.

Handlers register themselves via the ``@registry.handler`` decorator.
The dispatcher maps ``(service, method)`` pairs to async callables and
remembers which of them need the pre-shared key, nothing more.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from bravia_api.jsonrpc import DEFAULT_VERSION, ERROR_MESSAGES, NO_SUCH_METHOD, UNSUPPORTED_VERSION

log = logging.getLogger(__name__)

# Type alias for a device handler: async (params, version) -> result list
HandlerFn = Callable[[list[Any], str], Awaitable[list[Any]]]


class DeviceError(Exception):
    """Raised by handlers to answer with a device ``[code, message]`` pair."""

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown")
        super().__init__(f"#{self.code}: {self.message}")


class MethodNotFoundError(DeviceError):
    """Raised when no handler is registered for the requested method."""

    def __init__(self, service: str, method: str) -> None:
        self.service = service
        self.method = method
        super().__init__(NO_SUCH_METHOD)


@dataclass(slots=True)
class _Entry:
    fn: HandlerFn
    protected: bool
    versions: tuple[str, ...]


class Registry:
    """A simple ``(service, method)`` → handler mapping.

    Usage::

        registry = Registry()

        @registry.handler("system", "getPowerStatus")
        async def power_status(params, version):
            return [{"status": "active"}]

        result = await registry.dispatch("system", "getPowerStatus", [])
    """

    def __init__(self) -> None:
        self._handlers: dict[tuple[str, str], _Entry] = {}

    # -- Registration --------------------------------------------------
    def handler(
        self,
        service: str,
        method: str,
        *,
        protected: bool = False,
        versions: tuple[str, ...] = ("1.0",),
    ) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator that registers *fn* under *service*/*method*."""

        def decorator(fn: HandlerFn) -> HandlerFn:
            key = (service, method)
            if key in self._handlers:
                log.warning("overwriting handler for %s.%s", service, method)
            self._handlers[key] = _Entry(fn=fn, protected=protected, versions=versions)
            log.debug("registered handler %s.%s → %s", service, method, fn.__qualname__)
            return fn

        return decorator

    # -- Dispatch ------------------------------------------------------
    async def dispatch(
        self,
        service: str,
        method: str,
        params: list[Any],
        version: str = DEFAULT_VERSION,
    ) -> list[Any]:
        """Call the handler for *method* and return its result.

        Raises ``MethodNotFoundError`` if the method is not registered and
        ``DeviceError`` if it does not serve *version*.
        """
        entry = self._handlers.get((service, method))
        if entry is None:
            raise MethodNotFoundError(service, method)
        if version not in entry.versions:
            raise DeviceError(UNSUPPORTED_VERSION)
        return await entry.fn(params, version)

    # -- Introspection -------------------------------------------------
    @property
    def services(self) -> list[str]:
        return sorted({service for service, _ in self._handlers})

    def methods(self, service: str) -> dict[str, tuple[str, ...]]:
        """Registered methods of *service* with their versions."""
        return {
            method: entry.versions
            for (svc, method), entry in self._handlers.items()
            if svc == service
        }

    def is_registered(self, service: str, method: str) -> bool:
        return (service, method) in self._handlers

    def is_protected(self, service: str, method: str) -> bool:
        entry = self._handlers.get((service, method))
        return entry is not None and entry.protected
