"""bravia_api: async client for the Sony Bravia REST API.

Unofficial; not affiliated with Sony.

Usage::

    async with Bravia("http://192.168.1.20", psk="0000") as bravia:
        print(await bravia.system.get_power_status())
"""

from bravia_api.client import Bravia
from bravia_api.config import BraviaConfig
from bravia_api.errors import (
    ApiNotFoundError,
    ApiServiceNotFoundError,
    ApiVersionError,
    AuthRequiredError,
    BadStatusError,
    BraviaApiError,
    BraviaError,
    DecodeError,
    InvalidResponseError,
    MissingValueError,
    NetworkError,
)
from bravia_api.jsonrpc import BraviaErrorCode, BraviaRequest, BraviaResponse
from bravia_api.support import ApiSupport

__all__ = [
    "Bravia",
    "BraviaConfig",
    "ApiSupport",
    "BraviaRequest",
    "BraviaResponse",
    "BraviaErrorCode",
    "BraviaError",
    "NetworkError",
    "BadStatusError",
    "DecodeError",
    "InvalidResponseError",
    "MissingValueError",
    "BraviaApiError",
    "ApiServiceNotFoundError",
    "ApiNotFoundError",
    "ApiVersionError",
    "AuthRequiredError",
]
