"""Per-service method groups."""

from bravia_api.services.app_control import AppControlService
from bravia_api.services.audio import AudioService
from bravia_api.services.av_content import AvContentService
from bravia_api.services.base import Service
from bravia_api.services.encryption import EncryptionService
from bravia_api.services.guide import GuideService
from bravia_api.services.system import SystemService
from bravia_api.services.video import VideoService
from bravia_api.services.video_screen import VideoScreenService

__all__ = [
    "Service",
    "GuideService",
    "SystemService",
    "AudioService",
    "AvContentService",
    "AppControlService",
    "EncryptionService",
    "VideoService",
    "VideoScreenService",
]
