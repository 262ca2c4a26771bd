"""System service: power, time, network settings and LEDs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bravia_api.services.base import Service, decode, decode_as, decode_list, drop_none


@dataclass(slots=True)
class Time:
    """Device clock.  The offsets are only reported from API version 1.1."""

    # ISO8601
    date_time: str
    time_zone_offset_minute: int | None = None
    dst_offset_minute: int | None = None

    @classmethod
    def from_result(cls, raw: Any) -> "Time":
        if isinstance(raw, str):
            return cls(date_time=raw)
        return cls(
            date_time=raw["dateTime"],
            time_zone_offset_minute=raw.get("timeZoneOffsetMinute"),
            dst_offset_minute=raw.get("dstOffsetMinute"),
        )


@dataclass(slots=True)
class InterfaceInfo:
    product_category: str
    product_name: str
    model_name: str
    server_name: str
    # "[X].[Y].[Z]": X distinguishes device groups, Y the API set, Z behaviour changes.
    interface_version: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "InterfaceInfo":
        return cls(
            product_category=raw["productCategory"],
            product_name=raw["productName"],
            model_name=raw["modelName"],
            server_name=raw.get("serverName", ""),
            interface_version=raw["interfaceVersion"],
        )


@dataclass(slots=True)
class LedIndicatorStatus:
    """LED indicator mode.

    ``mode`` is one of ``Demo``, ``AutoBrightnessAdjust``, ``Dark``,
    ``SimpleResponse`` or ``Off``.  ``status`` is ``"true"``/``"false"``;
    ``None`` lets the device decide (on input) or means unknown (on output).
    """

    mode: str
    status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return drop_none(mode=self.mode, status=self.status)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "LedIndicatorStatus":
        return cls(mode=raw["mode"], status=raw.get("status"))


@dataclass(slots=True)
class NetworkSettings:
    netif: str
    hw_addr: str
    ip_addr_v4: str
    ip_addr_v6: str
    netmask: str
    gateway: str
    dns: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "NetworkSettings":
        return cls(
            netif=raw["netif"],
            hw_addr=raw["hwAddr"],
            ip_addr_v4=raw["ipAddrV4"],
            ip_addr_v6=raw["ipAddrV6"],
            netmask=raw["netmask"],
            gateway=raw["gateway"],
            dns=list(raw.get("dns", [])),
        )


@dataclass(slots=True)
class RemoteControllerAction:
    """Remote button name and its IRCC code."""

    name: str
    value: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RemoteControllerAction":
        return cls(name=raw["name"], value=raw["value"])


@dataclass(slots=True)
class RemoteDeviceSettings:
    target: str
    current_value: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RemoteDeviceSettings":
        return cls(target=raw["target"], current_value=raw["currentValue"])


@dataclass(slots=True)
class SystemInformation:
    """General device information.

    ``language``, ``serial``, ``mac_addr`` and ``generation`` are ``""``
    when the device does not report them.
    """

    product: str
    model: str
    name: str
    language: str = ""
    serial: str = ""
    mac_addr: str = ""
    generation: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SystemInformation":
        return cls(
            product=raw["product"],
            model=raw["model"],
            name=raw["name"],
            language=raw.get("language", ""),
            serial=raw.get("serial", ""),
            mac_addr=raw.get("macAddr", ""),
            generation=raw.get("generation", ""),
        )


@dataclass(slots=True)
class SupportedFunction:
    # e.g. option "WOL" with the MAC address as value
    option: str
    value: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SupportedFunction":
        return cls(option=raw["option"], value=raw["value"])


class SystemService(Service):
    endpoint = "system"

    # -- Queries -------------------------------------------------------

    async def get_current_time(self, version: str = "1.0") -> Time:
        """Current time; v1.1 adds timezone and DST offsets."""
        raw = await self._call("getCurrentTime", version=version)
        return decode(Time.from_result, raw)

    async def get_interface_information(self) -> InterfaceInfo:
        raw = await self._call("getInterfaceInformation")
        return decode(InterfaceInfo.from_dict, raw)

    async def get_led_indicator_status(self) -> LedIndicatorStatus:
        raw = await self._call("getLEDIndicatorStatus", protected=True)
        return decode(LedIndicatorStatus.from_dict, raw)

    async def get_network_settings(self, netif: str | None = None) -> list[NetworkSettings]:
        """Network settings of *netif*, or of every interface when ``None``."""
        raw = await self._call("getNetworkSettings", drop_none(netif=netif), protected=True)
        return decode_list(NetworkSettings.from_dict, raw)

    async def get_power_saving_mode(self) -> str:
        """One of ``off``, ``low``, ``high`` or ``pictureOff``."""
        raw = await self._call("getPowerSavingMode", get="mode")
        return decode_as(str, raw)

    async def get_power_status(self) -> str:
        """``active`` or ``standby``.

        Some devices do not answer at all while powered off.
        """
        raw = await self._call("getPowerStatus", get="status")
        return decode_as(str, raw)

    async def get_remote_controller_info(self) -> list[RemoteControllerAction]:
        # result[0] is a bundle descriptor, the codes live in result[1]
        raw = await self._call("getRemoteControllerInfo", get=1)
        return decode_list(RemoteControllerAction.from_dict, raw)

    async def get_remote_device_settings(
        self, target: str | None = None
    ) -> list[RemoteDeviceSettings]:
        raw = await self._call("getRemoteDeviceSettings", drop_none(target=target))
        return decode_list(RemoteDeviceSettings.from_dict, raw)

    async def get_system_information(self) -> SystemInformation:
        raw = await self._call("getSystemInformation", protected=True)
        return decode(SystemInformation.from_dict, raw)

    async def get_system_supported_function(self) -> list[SupportedFunction]:
        raw = await self._call("getSystemSupportedFunction")
        return decode_list(SupportedFunction.from_dict, raw)

    async def get_wol_mode(self) -> bool:
        raw = await self._call("getWolMode", protected=True, get="enabled")
        return decode_as(bool, raw)

    # -- Commands ------------------------------------------------------

    async def request_reboot(self) -> None:
        await self._send("requestReboot", protected=True)

    async def set_led_indicator_status(self, led_status: LedIndicatorStatus) -> None:
        """Change the LED indicator mode.

        The device keeps the new mode after the caller exits; restore the
        previous one when done.
        """
        await self._send(
            "setLEDIndicatorStatus", led_status.to_dict(), version="1.1", protected=True
        )

    async def set_language(self, language: str) -> None:
        """Set the UI language (ISO-639 alpha-3; ``CHS``/``CHT`` for Chinese)."""
        await self._send("setLanguage", {"language": language}, protected=True)

    async def set_power_saving_mode(self, mode: str) -> None:
        await self._send("setPowerSavingMode", {"mode": mode}, protected=True)

    async def set_power_status(self, status: bool) -> None:
        await self._send("setPowerStatus", {"status": status}, protected=True)

    async def set_wol_mode(self, enabled: bool) -> None:
        await self._send("setWolMode", {"enabled": enabled}, protected=True)
