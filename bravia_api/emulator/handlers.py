"""Handlers for an emulated FW-55BZ35F panel.

``build_registry()`` wires every handler onto a fresh ``Registry`` bound to
a fresh ``DeviceState``, so each emulator instance starts from the same
factory settings and setters are visible to later getters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from bravia_api.emulator.dispatcher import DeviceError, Registry
from bravia_api.jsonrpc import DISPLAY_IS_TURNED_OFF, ILLEGAL_ARGUMENT, ILLEGAL_STATE

log = logging.getLogger(__name__)

PUBLIC_KEY = (
    "MIIBIjANBgkqhkiG9w0BAQEFAAOCAQ8AMIIBCgKCAQEAu1VDkB2Hc3oeQ0cR"
    "0D5xLYqZ8kVvY3m3cXK2G1kG7v1w3w0AUz4aH0jK2hVqNq3bYc0QIDAQAB"
)


@dataclass
class DeviceState:
    """Mutable settings of the emulated device."""

    power: bool = True
    volume: dict[str, int] = field(default_factory=lambda: {"speaker": 18, "headphone": 15})
    mute: bool = False
    power_saving_mode: str = "off"
    wol: bool = True
    language: str = "eng"
    led_mode: str = "Demo"
    led_status: str | None = "true"
    text_form: str = ""
    playing_uri: str = "extInput:hdmi?port=2"
    scene: str = "auto"
    active_app: str | None = None
    sound: dict[str, str] = field(default_factory=lambda: {"outputTerminal": "speaker"})
    speaker: dict[str, str] = field(
        default_factory=lambda: {"tvPosition": "tableTop", "subwooferLevel": "17"}
    )
    picture: dict[str, str] = field(
        default_factory=lambda: {"brightness": "20", "pictureMode": "standard"}
    )


INPUTS = [
    {"uri": "extInput:hdmi?port=1", "title": "HDMI 1", "label": "", "icon": "meta:hdmi"},
    {"uri": "extInput:hdmi?port=2", "title": "HDMI 2", "label": "Console", "icon": "meta:game"},
    {"uri": "extInput:composite?port=1", "title": "AV", "label": "", "icon": "meta:composite"},
]

APPS = [
    {
        "title": "Netflix",
        "uri": "com.sony.dtv.com.netflix.ninja.com.netflix.ninja.MainActivity",
        "icon": "http://192.168.1.20/DIAL/icon/com.netflix.ninja.png",
    },
    {
        "title": "YouTube",
        "uri": "com.sony.dtv.com.google.android.youtube.tv.com.google.android.apps.youtube.tv.activity.ShellActivity",
        "icon": "http://192.168.1.20/DIAL/icon/com.google.android.youtube.tv.png",
    },
    {"title": "Settings", "uri": "com.sony.dtv.com.android.tv.settings.MainSettings"},
]

IRCC_CODES = [
    {"name": "PowerOff", "value": "AAAAAQAAAAEAAAAvAw=="},
    {"name": "VolumeUp", "value": "AAAAAQAAAAEAAAASAw=="},
    {"name": "VolumeDown", "value": "AAAAAQAAAAEAAAATAw=="},
    {"name": "Mute", "value": "AAAAAQAAAAEAAAAUAw=="},
]


def _first(params: list[Any]) -> dict[str, Any]:
    """The parameter object, or ``{}`` when none was sent."""
    if not params:
        return {}
    obj = params[0]
    if not isinstance(obj, dict):
        raise DeviceError(ILLEGAL_ARGUMENT)
    return obj


def _require(params: list[Any], key: str) -> Any:
    obj = _first(params)
    if key not in obj:
        raise DeviceError(ILLEGAL_ARGUMENT)
    return obj[key]


def build_registry(state: DeviceState | None = None) -> Registry:
    """Registry with every supported API, backed by *state*."""
    state = state or DeviceState()
    registry = Registry()
    reg = registry.handler

    # ── guide ────────────────────────────────────────────────────────

    @reg("guide", "getSupportedApiInfo")
    async def supported_api_info(params: list[Any], version: str) -> list[Any]:
        wanted = _first(params).get("services") or registry.services
        services = []
        for service in registry.services:
            if service not in wanted:
                continue
            apis = []
            for method, versions in sorted(registry.methods(service).items()):
                auth = "generic" if registry.is_protected(service, method) else "none"
                apis.append(
                    {
                        "name": method,
                        "versions": [{"version": v, "authLevel": auth} for v in versions],
                    }
                )
            services.append({"service": service, "protocols": ["xhrpost:jsonizer"], "apis": apis})
        return [services]

    # ── system ───────────────────────────────────────────────────────

    @reg("system", "getCurrentTime", versions=("1.0", "1.1"))
    async def current_time(params: list[Any], version: str) -> list[Any]:
        if version == "1.0":
            return ["2018-10-03T13:03:04+0100"]
        return [
            {
                "dateTime": "2018-10-03T13:03:59+0100",
                "timeZoneOffsetMinute": 60,
                "dstOffsetMinute": 0,
            }
        ]

    @reg("system", "getInterfaceInformation")
    async def interface_information(params: list[Any], version: str) -> list[Any]:
        return [
            {
                "productCategory": "tv",
                "productName": "BRAVIA",
                "modelName": "FW-55BZ35F",
                "serverName": "",
                "interfaceVersion": "5.0.1",
            }
        ]

    @reg("system", "getLEDIndicatorStatus", protected=True)
    async def led_indicator_status(params: list[Any], version: str) -> list[Any]:
        return [{"mode": state.led_mode, "status": state.led_status}]

    @reg("system", "setLEDIndicatorStatus", protected=True, versions=("1.0", "1.1"))
    async def set_led_indicator_status(params: list[Any], version: str) -> list[Any]:
        state.led_mode = _require(params, "mode")
        state.led_status = _first(params).get("status")
        return []

    @reg("system", "getNetworkSettings", protected=True)
    async def network_settings(params: list[Any], version: str) -> list[Any]:
        interfaces = [
            {
                "netif": "eth0",
                "hwAddr": "FF-FF-FF-FF-FF-FF",
                "ipAddrV4": "192.168.1.20",
                "ipAddrV6": "",
                "netmask": "255.255.255.0",
                "gateway": "192.168.1.1",
                "dns": ["192.168.1.1"],
            },
            {
                "netif": "wlan0",
                "hwAddr": "EE-EE-EE-EE-EE-EE",
                "ipAddrV4": "",
                "ipAddrV6": "",
                "netmask": "",
                "gateway": "",
                "dns": [],
            },
        ]
        netif = _first(params).get("netif")
        if netif:
            interfaces = [i for i in interfaces if i["netif"] == netif]
        return [interfaces]

    @reg("system", "getPowerSavingMode")
    async def power_saving_mode(params: list[Any], version: str) -> list[Any]:
        return [{"mode": state.power_saving_mode}]

    @reg("system", "setPowerSavingMode", protected=True)
    async def set_power_saving_mode(params: list[Any], version: str) -> list[Any]:
        mode = _require(params, "mode")
        if mode not in ("off", "low", "high", "pictureOff"):
            raise DeviceError(ILLEGAL_ARGUMENT)
        state.power_saving_mode = mode
        return []

    @reg("system", "getPowerStatus")
    async def power_status(params: list[Any], version: str) -> list[Any]:
        return [{"status": "active" if state.power else "standby"}]

    @reg("system", "setPowerStatus", protected=True)
    async def set_power_status(params: list[Any], version: str) -> list[Any]:
        status = _require(params, "status")
        if not isinstance(status, bool):
            raise DeviceError(ILLEGAL_ARGUMENT)
        state.power = status
        return []

    @reg("system", "getRemoteControllerInfo")
    async def remote_controller_info(params: list[Any], version: str) -> list[Any]:
        return [{"bundled": True, "type": "IR_REMOTE_BUNDLE_TYPE_AEP_N"}, IRCC_CODES]

    @reg("system", "getRemoteDeviceSettings")
    async def remote_device_settings(params: list[Any], version: str) -> list[Any]:
        return [[{"target": "accessPermission", "currentValue": "on"}]]

    @reg("system", "getSystemInformation", protected=True)
    async def system_information(params: list[Any], version: str) -> list[Any]:
        return [
            {
                "product": "TV",
                "region": "ITA",
                "language": state.language,
                "model": "FW-55BZ35F",
                "serial": "1234567",
                "macAddr": "FF-FF-FF-FF-FF-FF",
                "name": "BRAVIA",
                "generation": "5.0.1",
            }
        ]

    @reg("system", "getSystemSupportedFunction")
    async def system_supported_function(params: list[Any], version: str) -> list[Any]:
        return [[{"option": "WOL", "value": "FF:FF:FF:FF:FF:FF"}]]

    @reg("system", "getWolMode", protected=True)
    async def wol_mode(params: list[Any], version: str) -> list[Any]:
        return [{"enabled": state.wol}]

    @reg("system", "setWolMode", protected=True)
    async def set_wol_mode(params: list[Any], version: str) -> list[Any]:
        state.wol = bool(_require(params, "enabled"))
        return []

    @reg("system", "setLanguage", protected=True)
    async def set_language(params: list[Any], version: str) -> list[Any]:
        state.language = _require(params, "language")
        return []

    @reg("system", "requestReboot", protected=True)
    async def request_reboot(params: list[Any], version: str) -> list[Any]:
        log.info("emulated reboot requested")
        return []

    # ── audio ────────────────────────────────────────────────────────

    @reg("audio", "getVolumeInformation")
    async def volume_information(params: list[Any], version: str) -> list[Any]:
        return [
            [
                {
                    "target": target,
                    "volume": volume,
                    "mute": state.mute,
                    "maxVolume": 100,
                    "minVolume": 0,
                }
                for target, volume in state.volume.items()
            ]
        ]

    @reg("audio", "setAudioVolume", protected=True, versions=("1.0", "1.2"))
    async def set_audio_volume(params: list[Any], version: str) -> list[Any]:
        obj = _first(params)
        raw = _require(params, "volume")
        targets = [obj["target"]] if obj.get("target") else list(state.volume)
        for target in targets:
            if target not in state.volume:
                raise DeviceError(ILLEGAL_ARGUMENT)
            try:
                level = int(raw)
            except ValueError:
                raise DeviceError(ILLEGAL_ARGUMENT) from None
            if raw.startswith(("+", "-")):
                level += state.volume[target]
            state.volume[target] = max(0, min(100, level))
        return [0]

    @reg("audio", "setAudioMute", protected=True)
    async def set_audio_mute(params: list[Any], version: str) -> list[Any]:
        state.mute = bool(_require(params, "status"))
        return [0]

    @reg("audio", "getSoundSettings", versions=("1.1",))
    async def sound_settings(params: list[Any], version: str) -> list[Any]:
        target = _first(params).get("target")
        return [
            [
                {"target": t, "currentValue": v}
                for t, v in state.sound.items()
                if not target or t == target
            ]
        ]

    @reg("audio", "setSoundSettings", protected=True, versions=("1.1",))
    async def set_sound_settings(params: list[Any], version: str) -> list[Any]:
        for item in _require(params, "settings"):
            state.sound[item["target"]] = item["value"]
        return []

    @reg("audio", "getSpeakerSettings")
    async def speaker_settings(params: list[Any], version: str) -> list[Any]:
        target = _first(params).get("target")
        return [
            [
                {"target": t, "currentValue": v}
                for t, v in state.speaker.items()
                if not target or t == target
            ]
        ]

    @reg("audio", "setSpeakerSettings", protected=True)
    async def set_speaker_settings(params: list[Any], version: str) -> list[Any]:
        for item in _require(params, "settings"):
            state.speaker[item["target"]] = item["value"]
        return []

    # ── avContent ────────────────────────────────────────────────────

    @reg("avContent", "getSchemeList")
    async def scheme_list(params: list[Any], version: str) -> list[Any]:
        return [[{"scheme": "extInput"}, {"scheme": "fav"}, {"scheme": "tv"}]]

    @reg("avContent", "getSourceList")
    async def source_list(params: list[Any], version: str) -> list[Any]:
        scheme = _require(params, "scheme")
        sources = {
            "extInput": ["extInput:hdmi", "extInput:composite", "extInput:widi"],
            "tv": ["tv:dvbt", "tv:dvbs"],
        }
        if scheme not in sources:
            raise DeviceError(ILLEGAL_ARGUMENT)
        return [[{"source": s} for s in sources[scheme]]]

    @reg("avContent", "getContentCount", protected=True, versions=("1.0", "1.1"))
    async def content_count(params: list[Any], version: str) -> list[Any]:
        source = _require(params, "source")
        count = sum(1 for i in INPUTS if i["uri"].startswith(source))
        return [{"count": count}]

    @reg("avContent", "getContentList", protected=True, versions=("1.5",))
    async def content_list(params: list[Any], version: str) -> list[Any]:
        obj = _first(params)
        uri = obj.get("uri") or ""
        st_idx = int(obj.get("stIdx", 0))
        cnt = int(obj.get("cnt", 50))
        matching = [i for i in INPUTS if i["uri"].startswith(uri)]
        page = matching[st_idx : st_idx + cnt]
        return [
            [
                {"uri": i["uri"], "title": i["title"], "index": st_idx + n}
                for n, i in enumerate(page)
            ]
        ]

    @reg("avContent", "getCurrentExternalInputsStatus", versions=("1.0", "1.1"))
    async def external_inputs_status(params: list[Any], version: str) -> list[Any]:
        items = []
        for i in INPUTS:
            item = dict(i, connection=i["uri"] != "extInput:composite?port=1")
            if version == "1.1":
                item["status"] = "true" if i["uri"] == state.playing_uri else "false"
            items.append(item)
        return [items]

    @reg("avContent", "getPlayingContentInfo", protected=True)
    async def playing_content_info(params: list[Any], version: str) -> list[Any]:
        if not state.power:
            raise DeviceError(DISPLAY_IS_TURNED_OFF)
        for i in INPUTS:
            if i["uri"] == state.playing_uri:
                return [{"source": "extInput:hdmi", "title": i["title"], "uri": i["uri"]}]
        raise DeviceError(ILLEGAL_STATE)

    @reg("avContent", "setPlayContent", protected=True)
    async def set_play_content(params: list[Any], version: str) -> list[Any]:
        uri = _require(params, "uri")
        if uri not in {i["uri"] for i in INPUTS}:
            raise DeviceError(ILLEGAL_ARGUMENT)
        state.playing_uri = uri
        return []

    # ── appControl ───────────────────────────────────────────────────

    @reg("appControl", "getApplicationList", protected=True)
    async def application_list(params: list[Any], version: str) -> list[Any]:
        return [APPS]

    @reg("appControl", "getApplicationStatusList", protected=True)
    async def application_status_list(params: list[Any], version: str) -> list[Any]:
        text_on = "on" if state.text_form else "off"
        return [
            [
                {"name": "textInput", "status": text_on},
                {"name": "cursorDisplay", "status": "off"},
                {"name": "webBrowse", "status": "off"},
            ]
        ]

    @reg("appControl", "getWebAppStatus", protected=True)
    async def web_app_status(params: list[Any], version: str) -> list[Any]:
        return [{"active": False, "url": ""}]

    @reg("appControl", "setActiveApp", protected=True)
    async def set_active_app(params: list[Any], version: str) -> list[Any]:
        state.active_app = _require(params, "uri")
        return []

    @reg("appControl", "terminateApps", protected=True)
    async def terminate_apps(params: list[Any], version: str) -> list[Any]:
        state.active_app = None
        return []

    @reg("appControl", "getTextForm", protected=True, versions=("1.0", "1.1"))
    async def text_form(params: list[Any], version: str) -> list[Any]:
        return [{"text": state.text_form}]

    @reg("appControl", "setTextForm", protected=True, versions=("1.0", "1.1"))
    async def set_text_form(params: list[Any], version: str) -> list[Any]:
        if version == "1.0":
            if not params or not isinstance(params[0], str):
                raise DeviceError(ILLEGAL_ARGUMENT)
            state.text_form = params[0]
        else:
            state.text_form = _require(params, "text")
        return []

    # ── encryption ───────────────────────────────────────────────────

    @reg("encryption", "getPublicKey")
    async def public_key(params: list[Any], version: str) -> list[Any]:
        return [{"publicKey": PUBLIC_KEY}]

    # ── video ────────────────────────────────────────────────────────

    @reg("video", "getPictureQualitySettings")
    async def picture_quality_settings(params: list[Any], version: str) -> list[Any]:
        target = _first(params).get("target")
        candidates = {
            "brightness": [{"max": 50, "min": 0, "step": 1}],
            "pictureMode": [{"value": "vivid"}, {"value": "standard"}, {"value": "cinema"}],
        }
        return [
            [
                {"target": t, "currentValue": v, "candidate": candidates.get(t)}
                for t, v in state.picture.items()
                if not target or t == target
            ]
        ]

    @reg("video", "setPictureQualitySettings", protected=True)
    async def set_picture_quality_settings(params: list[Any], version: str) -> list[Any]:
        for item in _require(params, "settings"):
            if item.get("target") not in state.picture:
                raise DeviceError(ILLEGAL_ARGUMENT)
            state.picture[item["target"]] = item["value"]
        return []

    # ── videoScreen ──────────────────────────────────────────────────

    @reg("videoScreen", "setSceneSetting", protected=True)
    async def set_scene_setting(params: list[Any], version: str) -> list[Any]:
        value = _require(params, "value")
        if value not in ("auto", "auto24pSync", "general"):
            raise DeviceError(ILLEGAL_ARGUMENT)
        state.scene = value
        return []

    return registry
