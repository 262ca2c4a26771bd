"""Bravia client: thin consumer of the Bravia REST API.

* ``request(service, method, ...)`` → raw result, or a structured error
* ``bravia.<service>.<api>(...)``   → typed wrappers over ``request``
* ``Bravia.connect(address, psk)``  → client with an API-support snapshot

Uses ``httpx.AsyncClient`` with connection pooling.  No retries: every
call is a single request/response cycle and every failure reaches the
caller.

Run directly for a quick demo against a TV (or the emulator)::

    python -m bravia_api.client --address http://192.168.1.20 --psk 0000
"""

from __future__ import annotations

import itertools
import json
import logging
from typing import Any

import httpx

from bravia_api.errors import (
    AuthRequiredError,
    BadStatusError,
    BraviaApiError,
    DecodeError,
    InvalidResponseError,
    MissingValueError,
    NetworkError,
)
from bravia_api.jsonrpc import BraviaRequest, BraviaResponse
from bravia_api.services import (
    AppControlService,
    AudioService,
    AvContentService,
    EncryptionService,
    GuideService,
    SystemService,
    VideoScreenService,
    VideoService,
)
from bravia_api.support import ApiSupport

log = logging.getLogger(__name__)

PSK_HEADER = "X-Auth-PSK"

# The guide API is what builds the support snapshot, so it is never checked.
_UNCHECKED_METHODS = frozenset({"getSupportedApiInfo"})


# ── Result selection ─────────────────────────────────────────────────


def select(result: Any, get: int | str) -> Any:
    """Pick one element out of a ``result`` list.

    An ``int`` selects ``result[get]``; a ``str`` selects ``result[0][get]``.
    """
    if not isinstance(result, list):
        raise DecodeError(f"'result' must be a JSON array, got {type(result).__name__}")
    if isinstance(get, int):
        if get < 0 or get >= len(result):
            raise MissingValueError("result values")
        return result[get]
    if not result or not isinstance(result[0], dict) or get not in result[0]:
        raise MissingValueError("result values")
    return result[0][get]


class Bravia:
    """Async client for one Bravia device.

    Parameters
    ----------
    address : str
        Device origin, e.g. ``http://192.168.1.20``.  ``http://`` is
        assumed when no scheme is given.
    psk : str | None
        Pre-shared key.  Only needed for APIs whose authentication level
        is not *None*.
    timeout : float | None
        Request timeout in seconds; ``None`` keeps the httpx default.
    api_support : ApiSupport | None
        Snapshot of the device's supported APIs.  When set, calls the
        device cannot serve are refused before anything is sent.
    transport : httpx.AsyncBaseTransport | None
        Custom transport, mostly for tests.
    """

    def __init__(
        self,
        address: str,
        psk: str | None = None,
        *,
        timeout: float | None = None,
        api_support: ApiSupport | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if "://" not in address:
            address = f"http://{address}"
        self.base_url = address.rstrip("/")
        self._psk = psk or None
        self._api_support = api_support
        self._ids = itertools.count(1)

        client_kwargs: dict[str, Any] = {"base_url": f"{self.base_url}/sony/"}
        if timeout is not None:
            client_kwargs["timeout"] = httpx.Timeout(timeout)
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

        self.guide = GuideService(self)
        self.system = SystemService(self)
        self.audio = AudioService(self)
        self.av_content = AvContentService(self)
        self.app_control = AppControlService(self)
        self.encryption = EncryptionService(self)
        self.video = VideoService(self)
        self.video_screen = VideoScreenService(self)

    @property
    def psk(self) -> str | None:
        return self._psk

    @property
    def api_support(self) -> ApiSupport | None:
        return self._api_support

    def __repr__(self) -> str:
        auth = "psk" if self.psk else "no auth"
        return f"Bravia({self.base_url!r}, {auth})"

    # -- Construction --------------------------------------------------

    @classmethod
    async def connect(
        cls,
        address: str,
        psk: str | None = None,
        **kwargs: Any,
    ) -> "Bravia":
        """Build a client and attach the device's API-support snapshot.

        The probing client is closed; the returned client owns a fresh
        connection pool.
        """
        kwargs.pop("api_support", None)
        async with cls(address, psk, **kwargs) as probe:
            services = await probe.guide.get_supported_api_info()
        support = ApiSupport.from_service_data(services)
        log.info("connected to %s: %d services", probe.base_url, len(support.services))
        return cls(address, psk, api_support=support, **kwargs)

    # -- Lifecycle -----------------------------------------------------

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Bravia":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # -- Dispatch ------------------------------------------------------

    def _next_id(self) -> int:
        return next(self._ids)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._psk is not None:
            headers[PSK_HEADER] = self._psk
        return headers

    async def request(
        self,
        service: str,
        method: str,
        params: Any = None,
        *,
        version: str | None = None,
        protected: bool = False,
        has_result: bool = True,
        get: int | str = 0,
    ) -> Any:
        """Send one request to ``/sony/<service>`` and return its result.

        *params* is wrapped into the one-element ``params`` list; ``None``
        sends ``[]``.  When *has_result* is false the result is discarded
        and ``None`` is returned.  *get* selects the part of ``result`` to
        return (see :func:`select`).

        Raises a :class:`~bravia_api.errors.BraviaError` subclass on any
        failure.
        """
        req = BraviaRequest.build(method, params, id=self._next_id(), version=version)

        if self._api_support is not None and method not in _UNCHECKED_METHODS:
            self._api_support.check(service, method, req.version)
        if protected and self._psk is None:
            raise AuthRequiredError(service, method)

        log.debug("rpc → %s.%s(id=%s, v%s)", service, method, req.id, req.version)

        try:
            resp = await self._client.post(
                service,
                content=json.dumps(req.to_dict()),
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            raise NetworkError(f"NetworkError: {exc}") from exc

        if resp.status_code != httpx.codes.OK:
            log.debug("rpc ← %s.%s status %s", service, method, resp.status_code)
            raise BadStatusError(resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(f"JSON deserialize error: {exc}") from exc

        try:
            parsed = BraviaResponse.from_dict(data)
        except ValueError as exc:
            raise DecodeError(f"JSON deserialize error: {exc}") from exc

        if parsed.error is not None:
            log.warning("%s.%s failed: %s", service, method, parsed.error)
            raise BraviaApiError(parsed.error)
        if parsed.result is None and "result" not in data:
            raise InvalidResponseError("Missing result and error fields.")

        log.debug("rpc ← %s.%s(id=%s)", service, method, parsed.id)

        if not has_result:
            return None
        if parsed.result is None:
            raise DecodeError("'result' must be a JSON array, got null")
        return select(parsed.result, get)


# ── Demo entrypoint ──────────────────────────────────────────────────


async def _demo(address: str, psk: str | None, timeout: float | None) -> None:
    async with await Bravia.connect(address, psk, timeout=timeout) as bravia:
        print("── interface ──")
        info = await bravia.system.get_interface_information()
        print(f"  {info.product_name} {info.model_name} (interface {info.interface_version})")

        print("── power ──")
        print(f"  status: {await bravia.system.get_power_status()}")

        print("── volume ──")
        for vol in await bravia.audio.get_volume_information():
            print(f"  {vol.target}: {vol.volume}/{vol.max_volume} mute={vol.mute}")

        if bravia.psk:
            print("── apps ──")
            for app in await bravia.app_control.get_application_list():
                print(f"  {app.title}")

        print("── done ──")


def main(argv: list[str] | None = None) -> None:
    import argparse

    import anyio

    from bravia_api.config import BraviaConfig

    config = BraviaConfig.from_env(require_address=False)

    parser = argparse.ArgumentParser(description="Bravia REST API demo")
    parser.add_argument(
        "--address",
        type=str,
        default=config.address,
        required=config.address is None,
        help="Device address, e.g. http://192.168.1.20",
    )
    parser.add_argument("--psk", type=str, default=config.psk, help="Pre-shared key")
    parser.add_argument(
        "--timeout", type=float, default=config.timeout, help="Request timeout in seconds"
    )
    parser.add_argument("--log-level", type=str, default=config.log_level, help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    anyio.run(_demo, args.address, args.psk, args.timeout)


if __name__ == "__main__":
    main()
