# map_resolver/services/materialization.py
"""
Decides, per request, whether a room's WAM file is reused, created or
re-pointed, and keeps the room's cached wam_url in step with the current
map-storage base address.

The stored wam_url is never served directly: the URL is recomputed from the
current configuration on every request and written back when it drifted.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from map_resolver.config import MapStorageConfig
from map_resolver.models.room import Room
from map_resolver.services.map_storage import (
    MapStorageClient,
    MapStorageCreateError,
    MapStorageProbeError,
    compute_wam_url,
)
from map_resolver.services.play_uri import ParsedPlayUri
from map_resolver.services.room_service import RoomService

logger = logging.getLogger(__name__)


class MaterializationState(str, enum.Enum):
    NO_SOURCE_MAP = "no_source_map"
    STORAGE_UNCONFIGURED = "storage_unconfigured"
    PROBE_FAILED = "probe_failed"
    CREATED = "created"
    CREATE_FAILED = "create_failed"
    EXISTS_REMOTE = "exists_remote"


@dataclass(frozen=True)
class MaterializationOutcome:
    """Result of materializing one room for one request"""
    state: MaterializationState
    wam_url: Optional[str] = None
    cache_updated: bool = False


class MaterializationCoordinator:
    """Coordinates WAM existence checks, creation and cache repair for rooms"""

    def __init__(self, config: MapStorageConfig, storage: MapStorageClient, room_service: RoomService):
        self.config = config
        self.storage = storage
        self.room_service = room_service

    def materialize(self, room: Room, location: ParsedPlayUri) -> MaterializationOutcome:
        """
        Make sure the room's WAM file exists and return the URL to serve.

        Args:
            room: The resolved room
            location: The parsed play URI addressing the room

        Returns:
            The outcome; ``wam_url`` is set only when a WAM file is known to exist.
        """
        if not room.map_url:
            return MaterializationOutcome(MaterializationState.NO_SOURCE_MAP)

        if not self.config.is_configured:
            return MaterializationOutcome(MaterializationState.STORAGE_UNCONFIGURED)

        wam_path = self.storage.compute_path(location.domain, location.universe, location.world, location.room)
        wam_url = compute_wam_url(wam_path, self.config.base_url)

        try:
            exists = self.storage.exists(wam_path)
        except MapStorageProbeError as e:
            # Creating on an inconclusive probe could duplicate a live file
            logger.warning(f"Could not check WAM at {wam_path}, serving mapUrl: {str(e)}")
            return MaterializationOutcome(MaterializationState.PROBE_FAILED)

        if exists:
            cache_updated = False
            if room.wam_url != wam_url:
                logger.info(f"Repairing cached wam_url for room {room.id}: {room.wam_url!r} -> {wam_url!r}")
                cache_updated = self.room_service.update_wam_url(room, wam_url)
            return MaterializationOutcome(MaterializationState.EXISTS_REMOTE, wam_url, cache_updated)

        try:
            self.storage.create(wam_path, room.map_url)
        except MapStorageCreateError as e:
            logger.error(f"Failed to create WAM file, using mapUrl as fallback: {str(e)}")
            return MaterializationOutcome(MaterializationState.CREATE_FAILED)

        cache_updated = self.room_service.update_wam_url(room, wam_url)
        return MaterializationOutcome(MaterializationState.CREATED, wam_url, cache_updated)
