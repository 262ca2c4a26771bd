"""Guide service: which services and API versions the device offers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bravia_api.errors import MissingValueError
from bravia_api.services.base import Service, decode_list


def version_key(version: str) -> tuple[int, ...]:
    """Sort key for ``"1.10"``-style version strings."""
    parts = []
    for part in version.split("."):
        parts.append(int(part) if part.isdigit() else -1)
    return tuple(parts)


@dataclass(slots=True)
class ApiVersion:
    """One supported version of an API."""

    version: str
    # Transports, when they differ from the owning service's.
    protocols: list[str] | None = None
    auth_level: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ApiVersion":
        return cls(
            version=raw["version"],
            protocols=raw.get("protocols"),
            auth_level=raw.get("authLevel"),
        )


@dataclass(slots=True)
class Api:
    name: str
    versions: list[ApiVersion] = field(default_factory=list)

    def latest_version(self) -> ApiVersion | None:
        if not self.versions:
            return None
        return max(self.versions, key=lambda v: version_key(v.version))

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Api":
        return cls(
            name=raw["name"],
            versions=[ApiVersion.from_dict(v) for v in raw["versions"]],
        )


@dataclass(slots=True)
class ServiceData:
    """APIs, notifications and transports of one service."""

    service: str
    protocols: list[str] = field(default_factory=list)
    apis: list[Api] = field(default_factory=list)
    notifications: list[Api] | None = None

    def find(self, name: str) -> Api | None:
        for api in self.apis:
            if api.name == name:
                return api
        return None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ServiceData":
        notifications = raw.get("notifications")
        return cls(
            service=raw["service"],
            protocols=list(raw.get("protocols", [])),
            apis=[Api.from_dict(a) for a in raw["apis"]],
            notifications=(
                [Api.from_dict(n) for n in notifications] if notifications is not None else None
            ),
        )


class GuideService(Service):
    endpoint = "guide"

    async def get_supported_api_info(self, services: list[str] | None = None) -> list[ServiceData]:
        """Supported services and their APIs.

        *services* limits the answer to the named services; ``None`` asks
        for all of them.

        Authentication level: None.
        """
        params: dict[str, Any] = {}
        if services is not None:
            params["services"] = list(services)
        raw = await self._call("getSupportedApiInfo", params)
        parsed = decode_list(ServiceData.from_dict, raw)
        if not parsed:
            raise MissingValueError("apis")
        return parsed
