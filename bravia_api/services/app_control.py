"""App control service: launching applications and the software keyboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bravia_api.services.base import Service, decode, decode_as, decode_list, drop_none


@dataclass(slots=True)
class Application:
    title: str
    uri: str
    # "" when the application has no icon
    icon: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Application":
        return cls(title=raw["title"], uri=raw["uri"], icon=raw.get("icon", ""))


@dataclass(slots=True)
class ApplicationStatus:
    # textInput, cursorDisplay or webBrowse
    name: str
    # on or off
    status: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ApplicationStatus":
        return cls(name=raw["name"], status=raw["status"])


@dataclass(slots=True)
class WebAppStatus:
    active: bool
    url: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WebAppStatus":
        return cls(active=bool(raw["active"]), url=raw.get("url", ""))


class AppControlService(Service):
    endpoint = "appControl"

    async def get_application_list(self) -> list[Application]:
        """Applications that ``set_active_app`` can launch."""
        raw = await self._call("getApplicationList", protected=True)
        return decode_list(Application.from_dict, raw)

    async def get_application_status_list(self) -> list[ApplicationStatus]:
        raw = await self._call("getApplicationStatusList", protected=True)
        return decode_list(ApplicationStatus.from_dict, raw)

    async def get_text_form(self, enc_key: str | None = None) -> str:
        """Text in the software keyboard field.

        With *enc_key* (the session key encrypted by the device's public
        key) the text comes back encrypted.
        """
        raw = await self._call(
            "getTextForm", drop_none(encKey=enc_key), version="1.1", protected=True, get="text"
        )
        return decode_as(str, raw)

    async def get_web_app_status(self) -> WebAppStatus:
        raw = await self._call("getWebAppStatus", protected=True)
        return decode(WebAppStatus.from_dict, raw)

    async def set_active_app(self, uri: str) -> None:
        """Launch the application at *uri*.

        For the web app runtime use ``localapp://webappruntime?url=<url>``,
        ``?manifest=<url>`` or ``?auid=<id>``.
        """
        await self._send("setActiveApp", {"uri": uri}, protected=True)

    async def set_text_form(
        self, text: str, enc_key: str | None = None, version: str = "1.0"
    ) -> None:
        """Type *text* into the software keyboard field.

        Version 1.0 takes the bare text.  Version 1.1 takes an object and
        accepts *enc_key* for encrypted text.
        """
        params: Any
        if version == "1.1":
            params = drop_none(encKey=enc_key, text=text)
        else:
            params = text
        await self._send("setTextForm", params, version=version, protected=True)

    async def terminate_apps(self) -> None:
        await self._send("terminateApps", protected=True)
