"""Video service: picture quality settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bravia_api.services.base import Service, decode_list, drop_none


@dataclass(slots=True)
class Candidate:
    """One allowed value, or a numeric range, for a setting.

    ``max``/``min``/``step`` are -1 when the setting is not numeric.
    """

    value: str = ""
    max: float = -1.0
    min: float = -1.0
    step: float = -1.0

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Candidate":
        return cls(
            value=raw.get("value", ""),
            max=float(raw.get("max", -1)),
            min=float(raw.get("min", -1)),
            step=float(raw.get("step", -1)),
        )


@dataclass(slots=True)
class PictureQualitySetting:
    target: str
    current_value: str
    is_available: bool = True
    candidate: list[Candidate] | None = field(default=None)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "PictureQualitySetting":
        candidate = raw.get("candidate")
        return cls(
            target=raw["target"],
            current_value=raw["currentValue"],
            is_available=bool(raw.get("isAvailable", True)),
            candidate=[Candidate.from_dict(c) for c in candidate] if candidate is not None else None,
        )


@dataclass(slots=True)
class PictureQualitySettingUpdate:
    """A picture quality change.

    Use ``get_picture_quality_settings`` to find the available targets.
    """

    target: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"target": self.target, "value": self.value}


class VideoService(Service):
    endpoint = "video"

    async def get_picture_quality_settings(
        self, target: str | None = None
    ) -> list[PictureQualitySetting]:
        """Picture quality settings for *target*, or every target when ``None``.

        Targets include ``brightness``, ``color``, ``contrast``,
        ``sharpness``, ``pictureMode``, ``colorTemperature``, ``hdrMode``
        and ``autoLocalDimming``.
        """
        raw = await self._call("getPictureQualitySettings", drop_none(target=target))
        return decode_list(PictureQualitySetting.from_dict, raw)

    async def set_picture_quality_settings(
        self, settings: list[PictureQualitySettingUpdate]
    ) -> None:
        await self._send(
            "setPictureQualitySettings",
            {"settings": [s.to_dict() for s in settings]},
            protected=True,
        )
