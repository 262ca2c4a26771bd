"""Service groups against the emulated device: full HTTP roundtrips."""

import httpx
import pytest
from bravia_api import AuthRequiredError, BadStatusError, Bravia, BraviaApiError
from bravia_api.services.audio import SoundSetting, SpeakerSetting
from bravia_api.services.system import InterfaceInfo, LedIndicatorStatus
from bravia_api.services.video import PictureQualitySettingUpdate


# ── guide ────────────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_supported_api_info(bravia):
    services = await bravia.guide.get_supported_api_info()
    names = {s.service for s in services}
    assert {"system", "audio", "avContent", "appControl", "video"} <= names

    system = next(s for s in services if s.service == "system")
    api = system.find("getCurrentTime")
    assert api is not None
    assert api.latest_version().version == "1.1"
    assert system.find("getWolMode").versions[0].auth_level == "generic"


@pytest.mark.anyio
async def test_supported_api_info_filtered(bravia):
    services = await bravia.guide.get_supported_api_info(["avContent"])
    assert [s.service for s in services] == ["avContent"]


# ── system ───────────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_current_time_versions(bravia):
    t10 = await bravia.system.get_current_time()
    t11 = await bravia.system.get_current_time("1.1")
    assert t10.date_time == "2018-10-03T13:03:04+0100"
    assert t10.time_zone_offset_minute is None
    assert t11.date_time == "2018-10-03T13:03:59+0100"
    assert t11.time_zone_offset_minute == 60


@pytest.mark.anyio
async def test_interface_information(bravia):
    info = await bravia.system.get_interface_information()
    assert info == InterfaceInfo(
        product_category="tv",
        product_name="BRAVIA",
        model_name="FW-55BZ35F",
        server_name="",
        interface_version="5.0.1",
    )


@pytest.mark.anyio
async def test_led_indicator_roundtrip(bravia):
    assert await bravia.system.get_led_indicator_status() == LedIndicatorStatus("Demo", "true")
    await bravia.system.set_led_indicator_status(LedIndicatorStatus(mode="Dark"))
    status = await bravia.system.get_led_indicator_status()
    assert status.mode == "Dark"
    assert status.status is None


@pytest.mark.anyio
async def test_network_settings(bravia):
    everything = await bravia.system.get_network_settings()
    eth0 = await bravia.system.get_network_settings("eth0")
    assert [n.netif for n in everything] == ["eth0", "wlan0"]
    assert len(eth0) == 1
    assert eth0[0].hw_addr == "FF-FF-FF-FF-FF-FF"
    assert eth0[0].dns == ["192.168.1.1"]


@pytest.mark.anyio
async def test_power_roundtrip(bravia, state):
    assert await bravia.system.get_power_status() == "active"
    await bravia.system.set_power_status(False)
    assert state.power is False
    assert await bravia.system.get_power_status() == "standby"


@pytest.mark.anyio
async def test_power_saving_mode(bravia):
    await bravia.system.set_power_saving_mode("high")
    assert await bravia.system.get_power_saving_mode() == "high"


@pytest.mark.anyio
async def test_power_saving_mode_rejected(bravia):
    with pytest.raises(BraviaApiError) as exc_info:
        await bravia.system.set_power_saving_mode("turbo")
    assert exc_info.value.code == 3


@pytest.mark.anyio
async def test_remote_controller_info(bravia):
    codes = await bravia.system.get_remote_controller_info()
    assert codes[0].name == "PowerOff"
    assert codes[0].value == "AAAAAQAAAAEAAAAvAw=="


@pytest.mark.anyio
async def test_remote_device_settings(bravia):
    settings = await bravia.system.get_remote_device_settings("accessPermission")
    assert settings[0].current_value == "on"


@pytest.mark.anyio
async def test_system_information(bravia):
    await bravia.system.set_language("ita")
    info = await bravia.system.get_system_information()
    assert info.model == "FW-55BZ35F"
    assert info.mac_addr == "FF-FF-FF-FF-FF-FF"
    assert info.language == "ita"


@pytest.mark.anyio
async def test_supported_function(bravia):
    functions = await bravia.system.get_system_supported_function()
    assert functions[0].option == "WOL"


@pytest.mark.anyio
async def test_wol_mode(bravia):
    assert await bravia.system.get_wol_mode() is True
    await bravia.system.set_wol_mode(False)
    assert await bravia.system.get_wol_mode() is False


@pytest.mark.anyio
async def test_reboot(bravia):
    assert await bravia.system.request_reboot() is None


# ── audio ────────────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_volume_roundtrip(bravia):
    await bravia.audio.set_audio_volume("25", target="speaker")
    await bravia.audio.set_audio_volume("+5", target="speaker", ui="on", version="1.2")
    await bravia.audio.set_audio_mute(True)
    info = {v.target: v for v in await bravia.audio.get_volume_information()}
    assert info["speaker"].volume == 30
    assert info["speaker"].mute is True
    assert info["headphone"].max_volume == 100


@pytest.mark.anyio
async def test_volume_all_targets(bravia):
    await bravia.audio.set_audio_volume("10")
    volumes = [v.volume for v in await bravia.audio.get_volume_information()]
    assert volumes == [10, 10]


@pytest.mark.anyio
async def test_sound_settings(bravia):
    await bravia.audio.set_sound_settings([SoundSetting("outputTerminal", "hdmi")])
    settings = await bravia.audio.get_sound_settings("outputTerminal")
    assert settings == [SoundSetting(target="outputTerminal", value="hdmi")]


@pytest.mark.anyio
async def test_speaker_settings(bravia):
    await bravia.audio.set_speaker_settings([SpeakerSetting("tvPosition", "wallMount")])
    settings = {s.target: s.value for s in await bravia.audio.get_speaker_settings()}
    assert settings == {"tvPosition": "wallMount", "subwooferLevel": "17"}


# ── avContent ────────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_scheme_and_source_lists(bravia):
    assert await bravia.av_content.get_scheme_list() == ["extInput", "fav", "tv"]
    sources = await bravia.av_content.get_source_list("extInput")
    assert "extInput:hdmi" in sources


@pytest.mark.anyio
async def test_content_count(bravia):
    assert await bravia.av_content.get_content_count("extInput:hdmi") == 2
    assert await bravia.av_content.get_content_count("extInput:hdmi", target="all", version="1.1") == 2


@pytest.mark.anyio
async def test_content_list_paging(bravia):
    page = await bravia.av_content.get_content_list("extInput:hdmi", st_idx=1, cnt=5)
    assert [(c.index, c.title) for c in page] == [(1, "HDMI 2")]


@pytest.mark.anyio
async def test_external_inputs_status(bravia):
    v10 = await bravia.av_content.get_current_external_inputs_status()
    v11 = await bravia.av_content.get_current_external_inputs_status("1.1")
    assert all(i.status is None for i in v10)
    assert [i.status for i in v11] == ["false", "true", "false"]
    assert v11[2].connection is False


@pytest.mark.anyio
async def test_play_content(bravia):
    await bravia.av_content.set_play_content("extInput:hdmi?port=1")
    playing = await bravia.av_content.get_playing_content_info()
    assert playing.uri == "extInput:hdmi?port=1"
    assert playing.title == "HDMI 1"


@pytest.mark.anyio
async def test_playing_content_while_off(bravia):
    await bravia.system.set_power_status(False)
    with pytest.raises(BraviaApiError) as exc_info:
        await bravia.av_content.get_playing_content_info()
    assert exc_info.value.code == 40005


# ── appControl ───────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_application_list(bravia):
    apps = await bravia.app_control.get_application_list()
    assert [a.title for a in apps] == ["Netflix", "YouTube", "Settings"]
    assert apps[2].icon == ""


@pytest.mark.anyio
async def test_active_app(bravia, state):
    await bravia.app_control.set_active_app("localapp://webappruntime?url=http%3A%2F%2Fexample.com%2F")
    assert state.active_app.startswith("localapp://")
    await bravia.app_control.terminate_apps()
    assert state.active_app is None


@pytest.mark.anyio
async def test_text_form_versions(bravia):
    await bravia.app_control.set_text_form("hello")
    assert await bravia.app_control.get_text_form() == "hello"
    await bravia.app_control.set_text_form("world", version="1.1")
    assert await bravia.app_control.get_text_form() == "world"
    statuses = {s.name: s.status for s in await bravia.app_control.get_application_status_list()}
    assert statuses["textInput"] == "on"


@pytest.mark.anyio
async def test_web_app_status(bravia):
    status = await bravia.app_control.get_web_app_status()
    assert status.active is False
    assert status.url == ""


# ── encryption / video / videoScreen ─────────────────────────────────


@pytest.mark.anyio
async def test_public_key(bravia):
    assert (await bravia.encryption.get_public_key()).startswith("MIIB")


@pytest.mark.anyio
async def test_picture_quality(bravia):
    await bravia.video.set_picture_quality_settings([PictureQualitySettingUpdate("brightness", "35")])
    settings = await bravia.video.get_picture_quality_settings("brightness")
    assert len(settings) == 1
    brightness = settings[0]
    assert brightness.current_value == "35"
    assert brightness.is_available is True
    assert brightness.candidate[0].max == 50
    assert brightness.candidate[0].value == ""


@pytest.mark.anyio
async def test_picture_quality_candidates_without_range(bravia):
    settings = await bravia.video.get_picture_quality_settings("pictureMode")
    assert [c.value for c in settings[0].candidate] == ["vivid", "standard", "cinema"]
    assert settings[0].candidate[0].step == -1


@pytest.mark.anyio
async def test_scene_setting(bravia, state):
    await bravia.video_screen.set_scene_setting("general")
    assert state.scene == "general"


# ── Authentication ───────────────────────────────────────────────────


@pytest.mark.anyio
async def test_anonymous_unprotected_call(anonymous):
    assert await anonymous.system.get_power_status() == "active"


@pytest.mark.anyio
async def test_anonymous_protected_call_refused_locally(anonymous):
    with pytest.raises(AuthRequiredError):
        await anonymous.system.get_wol_mode()


@pytest.mark.anyio
async def test_wrong_psk_is_a_bad_status(app):
    transport = httpx.ASGITransport(app=app)  # type: ignore[arg-type]
    async with Bravia("http://tv.test", "wrong", transport=transport) as bravia:
        with pytest.raises(BadStatusError) as exc_info:
            await bravia.system.get_wol_mode()
    assert exc_info.value.status_code == 403
