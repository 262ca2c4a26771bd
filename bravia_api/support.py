"""Snapshot of the APIs a device supports.

Built once from ``guide.getSupportedApiInfo`` and never mutated, so a
client carrying one can be shared freely between tasks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from bravia_api.errors import ApiNotFoundError, ApiServiceNotFoundError, ApiVersionError
from bravia_api.services.guide import ServiceData

log = logging.getLogger(__name__)

# service → method → supported versions
SupportMap = Mapping[str, Mapping[str, tuple[str, ...]]]


@dataclass(frozen=True, slots=True)
class ApiSupport:
    """Read-only ``service → method → versions`` lookup."""

    apis: SupportMap

    @classmethod
    def from_service_data(cls, services: Iterable[ServiceData]) -> "ApiSupport":
        table: dict[str, Mapping[str, tuple[str, ...]]] = {}
        for service in services:
            methods = {
                api.name: tuple(v.version for v in api.versions) for api in service.apis
            }
            table[service.service] = MappingProxyType(methods)
        log.debug("api support: %s", ", ".join(sorted(table)))
        return cls(apis=MappingProxyType(table))

    @property
    def services(self) -> list[str]:
        return list(self.apis.keys())

    def versions(self, service: str, method: str) -> tuple[str, ...]:
        return self.apis.get(service, {}).get(method, ())

    def check(self, service: str, method: str, version: str) -> None:
        """Raise if *method* at *version* is not available on *service*."""
        methods = self.apis.get(service)
        if methods is None:
            raise ApiServiceNotFoundError(service)
        versions = methods.get(method)
        if versions is None:
            raise ApiNotFoundError(service, method)
        if version not in versions:
            raise ApiVersionError(service, method, version)

    def supports(self, service: str, method: str, version: str = "1.0") -> bool:
        return version in self.versions(service, method)
