"""Emulated Bravia device: Starlette ASGI server.

Single ``/sony/{service}`` POST endpoint, answering the way a panel does:
device errors come back as HTTP 200 with an ``error`` pair, while a bad
or missing pre-shared key on a protected API is an HTTP 403.

Run directly::

    python -m bravia_api.emulator.server --psk 0000
"""

from __future__ import annotations

import json
import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from bravia_api.client import PSK_HEADER
from bravia_api.emulator.dispatcher import DeviceError, Registry
from bravia_api.emulator.handlers import build_registry
from bravia_api.jsonrpc import ANY, FORBIDDEN, ILLEGAL_REQUEST, BraviaRequest, BraviaResponse

log = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────


def _error_response(
    req_id: int | None, code: int, msg: str | None = None, status: int = 200
) -> JSONResponse:
    """Build a device error response."""
    resp = BraviaResponse.fail(req_id, code, msg)
    return JSONResponse(resp.to_dict(), status_code=status)


# ── App factory ──────────────────────────────────────────────────────


def create_app(psk: str | None = None, registry: Registry | None = None) -> Starlette:
    """Emulator app; every call to this builds an independent device."""
    registry = registry or build_registry()

    async def sony_endpoint(request: Request) -> JSONResponse:
        """Handle a POST to ``/sony/{service}``."""
        service = request.path_params["service"]

        try:
            body = await request.body()
            raw = json.loads(body)
            rpc_req = BraviaRequest.from_dict(raw)
        except ValueError:
            return _error_response(None, ILLEGAL_REQUEST)

        log.info("rpc ← %s.%s(id=%s, v%s)", service, rpc_req.method, rpc_req.id, rpc_req.version)

        if psk is not None and registry.is_protected(service, rpc_req.method):
            if request.headers.get(PSK_HEADER) != psk:
                return _error_response(rpc_req.id, FORBIDDEN, status=403)

        try:
            result = await registry.dispatch(
                service, rpc_req.method, rpc_req.params, rpc_req.version
            )
        except DeviceError as exc:
            return _error_response(rpc_req.id, exc.code, exc.message)
        except Exception as exc:
            log.exception("handler error for %s.%s", service, rpc_req.method)
            return _error_response(rpc_req.id, ANY, f"Internal error: {exc}")

        return JSONResponse(BraviaResponse.success(rpc_req.id, result).to_dict())

    return Starlette(
        debug=False,
        routes=[Route("/sony/{service}", sony_endpoint, methods=["POST"])],
    )


# ── Runnable entrypoint ──────────────────────────────────────────────

if __name__ == "__main__":
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="Emulated Bravia device")
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8100)
    parser.add_argument("--psk", type=str, default=None, help="Pre-shared key to require")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(create_app(psk=args.psk), host=args.host, port=args.port, log_level="info")
