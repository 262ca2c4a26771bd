"""Environment-driven configuration.

Values come from the process environment, after loading a ``.env`` file
from the working directory if one exists:

* ``BRAVIA_ADDRESS``: device origin, e.g. ``http://192.168.1.20``
* ``BRAVIA_PSK``: pre-shared key (optional)
* ``BRAVIA_TIMEOUT``: request timeout in seconds (optional)
* ``LOG_LEVEL``: logging level for the demo entrypoints
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


@dataclass(slots=True, frozen=True)
class BraviaConfig:
    address: str | None
    psk: str | None = None
    timeout: float | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        env_file: str | os.PathLike[str] | None = None,
        *,
        require_address: bool = True,
    ) -> "BraviaConfig":
        """Read the configuration; raises ``ValueError`` on bad input."""
        load_dotenv(env_file or os.path.join(Path.cwd(), ".env"))

        address = os.getenv("BRAVIA_ADDRESS") or None
        if address is None and require_address:
            raise ValueError("BRAVIA_ADDRESS is not set")

        raw_timeout = os.getenv("BRAVIA_TIMEOUT")
        timeout: float | None = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"BRAVIA_TIMEOUT must be a number, got {raw_timeout!r}") from None

        return cls(
            address=address,
            psk=os.getenv("BRAVIA_PSK") or None,
            timeout=timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :class:`bravia_api.Bravia`."""
        return {"address": self.address, "psk": self.psk, "timeout": self.timeout}
