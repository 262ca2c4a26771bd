"""Encryption service."""

from __future__ import annotations

from bravia_api.services.base import Service, decode_as


class EncryptionService(Service):
    endpoint = "encryption"

    async def get_public_key(self) -> str:
        """RSA public key the device uses for encrypted payloads."""
        raw = await self._call("getPublicKey", get="publicKey")
        return decode_as(str, raw)
