"""AV content service: inputs, sources and the content on them.

To browse content, walk the URIs top down: ``get_scheme_list`` gives the
schemes, ``get_source_list(scheme)`` the source URIs in a scheme, and
``get_content_list(uri)`` the content under a source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bravia_api.services.base import Service, decode, decode_list, drop_none


@dataclass(slots=True)
class Content:
    uri: str
    title: str | None = None
    # Starts at the requested stIdx; -1 means the URI itself was the content.
    index: int = 0

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Content":
        return cls(uri=raw["uri"], title=raw.get("title"), index=int(raw.get("index", 0)))


@dataclass(slots=True)
class ExternalInputStatus:
    """Status of one external input.

    ``icon`` is a ``meta:`` URI hinting at the connector or device type
    (``meta:hdmi``, ``meta:composite``, ``meta:game`` ...).  ``status`` is
    ``"true"``/``"false"`` for signal detection and ``None`` when unknown,
    which is always the case with API version 1.0.
    """

    uri: str
    title: str
    label: str
    icon: str
    connection: bool
    status: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ExternalInputStatus":
        return cls(
            uri=raw["uri"],
            title=raw["title"],
            label=raw.get("label", ""),
            icon=raw.get("icon", ""),
            connection=bool(raw["connection"]),
            status=raw.get("status"),
        )


@dataclass(slots=True)
class PlayingContentInfo:
    source: str
    title: str
    uri: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "PlayingContentInfo":
        return cls(source=raw["source"], title=raw["title"], uri=raw["uri"])


def _single_values(raw: Any) -> list[str]:
    # [{"scheme": "extInput"}, ...] → ["extInput", ...]
    return [value for item in raw for value in item.values()]


class AvContentService(Service):
    endpoint = "avContent"

    async def get_content_count(
        self,
        source: str,
        content_type: str | None = None,
        target: str | None = None,
        version: str = "1.0",
    ) -> int:
        """Number of contents in *source* (e.g. ``extInput:hdmi``).

        *target* is only sent with API version 1.1.
        """
        params = drop_none(source=source, type=content_type)
        if version == "1.1" and target is not None:
            params["target"] = target
        raw = await self._call(
            "getContentCount", params, version=version, protected=True, get="count"
        )
        return decode(int, raw)

    async def get_content_list(
        self,
        uri: str | None = None,
        st_idx: int | None = None,
        cnt: int | None = None,
    ) -> list[Content]:
        """Contents under *uri*, paged with *st_idx* and *cnt*.

        The device caps the page size; page through with ``st_idx`` for
        long lists.
        """
        params = drop_none(uri=uri, stIdx=st_idx, cnt=cnt)
        raw = await self._call("getContentList", params, version="1.5", protected=True)
        return decode_list(Content.from_dict, raw)

    async def get_current_external_inputs_status(
        self, version: str = "1.0"
    ) -> list[ExternalInputStatus]:
        raw = await self._call("getCurrentExternalInputsStatus", version=version)
        return decode_list(ExternalInputStatus.from_dict, raw)

    async def get_scheme_list(self) -> list[str]:
        raw = await self._call("getSchemeList")
        return decode(_single_values, raw)

    async def get_source_list(self, scheme: str) -> list[str]:
        raw = await self._call("getSourceList", {"scheme": scheme})
        return decode(_single_values, raw)

    async def get_playing_content_info(self) -> PlayingContentInfo:
        raw = await self._call("getPlayingContentInfo", protected=True)
        return decode(PlayingContentInfo.from_dict, raw)

    async def set_play_content(self, uri: str) -> None:
        """Show the content at *uri*, as returned by ``get_content_list``."""
        await self._send("setPlayContent", {"uri": uri}, protected=True)
