"""emulator: an in-process fake Bravia device for tests and demos."""

from bravia_api.emulator.dispatcher import DeviceError, MethodNotFoundError, Registry
from bravia_api.emulator.handlers import DeviceState, build_registry
from bravia_api.emulator.server import create_app

__all__ = [
    "create_app",
    "build_registry",
    "DeviceState",
    "Registry",
    "DeviceError",
    "MethodNotFoundError",
]
