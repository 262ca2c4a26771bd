"""Video screen service.

Values apply to the current state of the device, e.g. to the input
source showing when the call is made.
"""

from __future__ import annotations

from bravia_api.services.base import Service


class VideoScreenService(Service):
    endpoint = "videoScreen"

    async def set_scene_setting(self, value: str) -> None:
        """Set the scene of the current input: ``auto``, ``auto24pSync`` or ``general``."""
        await self._send("setSceneSetting", {"value": value}, protected=True)
