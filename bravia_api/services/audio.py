"""Audio service: volume, mute, sound and speaker settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bravia_api.services.base import Service, decode_list


@dataclass(slots=True)
class SoundSetting:
    """A sound configuration item.

    For ``outputTerminal`` the value is one of ``speaker``,
    ``speaker_hdmi``, ``hdmi`` or ``audioSystem``.
    """

    target: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"target": self.target, "value": self.value}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SoundSetting":
        value = raw["currentValue"] if "currentValue" in raw else raw["value"]
        return cls(target=raw["target"], value=value)


@dataclass(slots=True)
class SpeakerSetting:
    """A speaker configuration item.

    Targets: ``tvPosition`` (``tableTop``/``wallMount``), ``subwooferLevel``,
    ``subwooferFreq``, ``subwooferPhase`` (``normal``/``reverse``) and
    ``subwooferPower`` (``on``/``off``).  Numeric ranges vary per device.
    """

    target: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"target": self.target, "value": self.value}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SpeakerSetting":
        value = raw["currentValue"] if "currentValue" in raw else raw["value"]
        return cls(target=raw["target"], value=value)


@dataclass(slots=True)
class VolumeInformation:
    # "speaker" or "headphone"
    target: str
    volume: int
    mute: bool
    max_volume: int
    min_volume: int

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "VolumeInformation":
        return cls(
            target=raw["target"],
            volume=int(raw["volume"]),
            mute=bool(raw["mute"]),
            max_volume=int(raw["maxVolume"]),
            min_volume=int(raw["minVolume"]),
        )


class AudioService(Service):
    endpoint = "audio"

    async def get_sound_settings(self, target: str | None = None) -> list[SoundSetting]:
        """Sound settings for *target*, or every target when ``None``."""
        raw = await self._call("getSoundSettings", {"target": target or ""}, version="1.1")
        return decode_list(SoundSetting.from_dict, raw)

    async def get_speaker_settings(self, target: str | None = None) -> list[SpeakerSetting]:
        raw = await self._call("getSpeakerSettings", {"target": target or ""})
        return decode_list(SpeakerSetting.from_dict, raw)

    async def get_volume_information(self) -> list[VolumeInformation]:
        raw = await self._call("getVolumeInformation")
        return decode_list(VolumeInformation.from_dict, raw)

    async def set_audio_mute(self, status: bool) -> None:
        await self._send("setAudioMute", {"status": status}, protected=True)

    async def set_audio_volume(
        self,
        volume: str,
        target: str | None = None,
        ui: str | None = None,
        version: str = "1.0",
    ) -> None:
        """Change the volume.

        *volume* is ``"N"`` (absolute), ``"+N"`` or ``"-N"`` (relative).
        *target* is ``speaker``, ``headphone`` or ``None`` for every
        output.  *ui* (``on``/``off``) shows the volume bar and is only
        sent with API version 1.2.
        """
        params: dict[str, Any] = {"target": target or "", "volume": volume}
        if version == "1.2" and ui is not None:
            params["ui"] = ui
        await self._send("setAudioVolume", params, version=version, protected=True)

    async def set_sound_settings(self, settings: list[SoundSetting]) -> None:
        await self._send(
            "setSoundSettings",
            {"settings": [s.to_dict() for s in settings]},
            version="1.1",
            protected=True,
        )

    async def set_speaker_settings(self, settings: list[SpeakerSetting]) -> None:
        await self._send(
            "setSpeakerSettings",
            {"settings": [s.to_dict() for s in settings]},
            protected=True,
        )
