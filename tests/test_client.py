"""Tests for the dispatch layer.

Uses ``httpx.MockTransport`` to script exact device replies, including
ones a real panel would only send when something is badly wrong.
"""

import json

import httpx
import pytest
from bravia_api import (
    ApiNotFoundError,
    ApiServiceNotFoundError,
    ApiSupport,
    ApiVersionError,
    AuthRequiredError,
    BadStatusError,
    Bravia,
    BraviaApiError,
    DecodeError,
    InvalidResponseError,
    MissingValueError,
    NetworkError,
)
from bravia_api.client import select
from bravia_api.services.guide import Api, ApiVersion, ServiceData


def scripted(handler):
    """Client whose every request is answered by *handler*."""
    return Bravia("http://tv.test", "secret", transport=httpx.MockTransport(handler))


def reply(body, status=200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body)

    return handler


# ── Request shape ────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_request_shape_and_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"result": [], "id": 1})

    async with scripted(handler) as bravia:
        await bravia.request("system", "setPowerStatus", {"status": False}, has_result=False)

    req = seen[0]
    assert req.method == "POST"
    assert str(req.url) == "http://tv.test/sony/system"
    assert req.headers["content-type"] == "application/json"
    assert req.headers["x-auth-psk"] == "secret"
    assert json.loads(req.content) == {
        "method": "setPowerStatus",
        "params": [{"status": False}],
        "id": 1,
        "version": "1.0",
    }


@pytest.mark.anyio
async def test_ids_are_sequential():
    ids = []

    def handler(request: httpx.Request) -> httpx.Response:
        ids.append(json.loads(request.content)["id"])
        return httpx.Response(200, json={"result": [{"status": "active"}]})

    async with scripted(handler) as bravia:
        for _ in range(3):
            await bravia.request("system", "getPowerStatus")

    assert ids == [1, 2, 3]


@pytest.mark.anyio
async def test_no_psk_header_without_credential():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"result": [{"status": "active"}]})

    async with Bravia("tv.test", transport=httpx.MockTransport(handler)) as bravia:
        await bravia.request("system", "getPowerStatus")

    assert "x-auth-psk" not in seen[0].headers
    assert str(seen[0].url) == "http://tv.test/sony/system"


@pytest.mark.anyio
async def test_protected_without_psk_sends_nothing():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"result": []})

    async with Bravia("http://tv.test", transport=httpx.MockTransport(handler)) as bravia:
        with pytest.raises(AuthRequiredError):
            await bravia.request("system", "requestReboot", protected=True, has_result=False)

    assert calls == []


# ── Error mapping ────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_device_error_code():
    async with scripted(reply({"error": [7, "Illegal State"], "id": 1})) as bravia:
        with pytest.raises(BraviaApiError) as exc_info:
            await bravia.request("avContent", "getPlayingContentInfo")
    assert exc_info.value.code == 7
    assert exc_info.value.message == "Illegal State"
    assert "#7: Illegal State" in str(exc_info.value)


@pytest.mark.anyio
async def test_malformed_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"})

    async with scripted(handler) as bravia:
        with pytest.raises(DecodeError):
            await bravia.request("system", "getPowerStatus")


@pytest.mark.anyio
async def test_json_that_is_not_an_object():
    async with scripted(reply(["result"])) as bravia:
        with pytest.raises(DecodeError):
            await bravia.request("system", "getPowerStatus")


@pytest.mark.anyio
async def test_malformed_error_pair():
    async with scripted(reply({"error": {"code": 3}})) as bravia:
        with pytest.raises(DecodeError):
            await bravia.request("system", "getPowerStatus")


@pytest.mark.anyio
async def test_bad_status():
    async with scripted(reply({"error": [403, "Forbidden"]}, status=403)) as bravia:
        with pytest.raises(BadStatusError) as exc_info:
            await bravia.request("system", "getPowerStatus")
    assert exc_info.value.status_code == 403


@pytest.mark.anyio
async def test_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with scripted(handler) as bravia:
        with pytest.raises(NetworkError) as exc_info:
            await bravia.request("system", "getPowerStatus")
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.anyio
async def test_timeout_is_a_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with scripted(handler) as bravia:
        with pytest.raises(NetworkError):
            await bravia.request("system", "getPowerStatus")


@pytest.mark.anyio
async def test_missing_result_and_error():
    async with scripted(reply({"id": 1})) as bravia:
        with pytest.raises(InvalidResponseError, match="Missing result and error"):
            await bravia.request("system", "getPowerStatus")


@pytest.mark.anyio
async def test_null_result():
    async with scripted(reply({"result": None})) as bravia:
        with pytest.raises(DecodeError):
            await bravia.request("system", "getPowerStatus")


@pytest.mark.anyio
async def test_null_result_when_no_result_expected():
    async with scripted(reply({"result": None, "id": 1})) as bravia:
        assert await bravia.system.set_power_status(True) is None


@pytest.mark.anyio
async def test_no_result_expected_returns_none():
    async with scripted(reply({"result": [0]})) as bravia:
        assert await bravia.request("audio", "setAudioMute", {"status": True}, has_result=False) is None


# ── Result selection ─────────────────────────────────────────────────


@pytest.mark.anyio
async def test_select_by_key():
    async with scripted(reply({"result": [{"status": "standby"}]})) as bravia:
        assert await bravia.request("system", "getPowerStatus", get="status") == "standby"


@pytest.mark.anyio
async def test_select_missing_key():
    async with scripted(reply({"result": [{"mode": "off"}]})) as bravia:
        with pytest.raises(MissingValueError):
            await bravia.request("system", "getPowerStatus", get="status")


def test_select_index():
    assert select([{"a": 1}, [1, 2]], 1) == [1, 2]


def test_select_index_out_of_range():
    with pytest.raises(MissingValueError):
        select([], 0)


def test_select_key_on_non_object():
    with pytest.raises(MissingValueError):
        select(["2018-10-03T13:03:04+0100"], "dateTime")


def test_select_non_list():
    with pytest.raises(DecodeError):
        select({"status": "active"}, 0)


# ── API support snapshot ─────────────────────────────────────────────


def _support():
    return ApiSupport.from_service_data(
        [
            ServiceData(
                service="system",
                protocols=["xhrpost:jsonizer"],
                apis=[
                    Api(
                        name="getCurrentTime",
                        versions=[ApiVersion(version="1.0"), ApiVersion(version="1.1")],
                    )
                ],
            )
        ]
    )


@pytest.mark.anyio
@pytest.mark.parametrize(
    "service, method, version, error",
    [
        ("audio", "getVolumeInformation", "1.0", ApiServiceNotFoundError),
        ("system", "getPowerStatus", "1.0", ApiNotFoundError),
        ("system", "getCurrentTime", "1.2", ApiVersionError),
    ],
)
async def test_support_snapshot_refuses(service, method, version, error):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"result": []})

    transport = httpx.MockTransport(handler)
    async with Bravia("http://tv.test", api_support=_support(), transport=transport) as bravia:
        with pytest.raises(error):
            await bravia.request(service, method, version=version)
    assert calls == []


@pytest.mark.anyio
async def test_support_snapshot_allows_known_api():
    transport = httpx.MockTransport(reply({"result": ["2018-10-03T13:03:04+0100"]}))
    async with Bravia("http://tv.test", api_support=_support(), transport=transport) as bravia:
        assert await bravia.request("system", "getCurrentTime") == "2018-10-03T13:03:04+0100"


def test_support_lookup():
    support = _support()
    assert support.services == ["system"]
    assert support.versions("system", "getCurrentTime") == ("1.0", "1.1")
    assert support.supports("system", "getCurrentTime", "1.1")
    assert not support.supports("system", "getPowerStatus")


def test_support_snapshot_is_frozen():
    support = _support()
    assert not hasattr(support, "__dict__")
    with pytest.raises(AttributeError):
        support.apis = {}  # type: ignore[misc]


def test_client_credentials_are_read_only():
    bravia = Bravia("http://tv.test", "secret", api_support=_support())
    with pytest.raises(AttributeError):
        bravia.psk = "other"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        bravia.api_support = None  # type: ignore[misc]
    assert bravia.psk == "secret"
    assert bravia.api_support is not None


# ── Typed scalar getters ─────────────────────────────────────────────


@pytest.mark.anyio
@pytest.mark.parametrize(
    "body, call",
    [
        ({"enabled": "yes"}, lambda b: b.system.get_wol_mode()),
        ({"status": 1}, lambda b: b.system.get_power_status()),
        ({"mode": None}, lambda b: b.system.get_power_saving_mode()),
        ({"text": ["hi"]}, lambda b: b.app_control.get_text_form()),
        ({"publicKey": False}, lambda b: b.encryption.get_public_key()),
    ],
)
async def test_scalar_getter_rejects_wrong_type(body, call):
    async with scripted(reply({"result": [body], "id": 1})) as bravia:
        with pytest.raises(DecodeError):
            await call(bravia)


@pytest.mark.anyio
async def test_scalar_getter_accepts_right_type():
    async with scripted(reply({"result": [{"enabled": False}], "id": 1})) as bravia:
        assert await bravia.system.get_wol_mode() is False


@pytest.mark.anyio
async def test_supported_api_info_sends_empty_service_list():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"result": [[
            {"service": "guide", "protocols": [], "apis": []},
        ]], "id": 1})

    async with scripted(handler) as bravia:
        await bravia.guide.get_supported_api_info([])
        await bravia.guide.get_supported_api_info()

    assert seen[0]["params"] == [{"services": []}]
    assert seen[1]["params"] == [{}]
