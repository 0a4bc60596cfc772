# map_resolver/services/map_storage.py
"""
Map storage integration.

The map-storage service hosts WAM files: small JSON documents that wrap an
externally hosted TMJ map. This module computes where a room's WAM lives and
talks to the service to check for it or create it.
"""
from abc import ABC, abstractmethod
import logging
import requests
from typing import Any, Dict, List, Optional, Set

from map_resolver.config import MapStorageConfig

logger = logging.getLogger(__name__)

WAM_FILE_NAME = "map.wam"
WAM_VERSION = "1.0.0"
ENTITY_COLLECTIONS = ["FurnitureCollection.json", "OfficeCollection.json"]

class MapStorageError(Exception):
    """Base exception for map-storage failures"""

class MapStorageProbeError(MapStorageError):
    """The existence check could not reach a verdict"""

class MapStorageCreateError(MapStorageError):
    """The map-storage service did not accept a new WAM file"""

def compute_wam_path(domain: str, universe: str, world: str, room: str) -> str:
    """
    Path of a room's WAM file inside map storage.
    Format: {domain}/{universe}/{world}/{room}/map.wam
    """
    return f"{domain}/{universe}/{world}/{room}/{WAM_FILE_NAME}"

def compute_wam_url(wam_path: str, public_map_storage_url: str) -> str:
    """Public URL of a WAM file under the given storage base address"""
    base_url = public_map_storage_url.rstrip("/")
    return f"{base_url}/{wam_path}"

def build_wam_file(map_url: str, play_url: str) -> Dict[str, Any]:
    """WAM document that points at an external TMJ map"""
    play_base = play_url.rstrip("/")
    return {
        "version": WAM_VERSION,
        "mapUrl": map_url,
        "entities": {},
        "areas": [],
        "entityCollections": [
            {"url": f"{play_base}/collections/{name}", "type": "file"}
            for name in ENTITY_COLLECTIONS
        ],
        "metadata": {},
    }

class MapStorageClient(ABC):
    """Abstract interface to the map-storage service"""

    def __init__(self, config: MapStorageConfig):
        self.config = config

    def compute_path(self, domain: str, universe: str, world: str, room: str) -> str:
        return compute_wam_path(domain, universe, world, room)

    def compute_url(self, wam_path: str) -> str:
        return compute_wam_url(wam_path, self.config.base_url)

    @abstractmethod
    def exists(self, wam_path: str) -> bool:
        """
        Check whether a WAM file exists.

        Returns:
            True if present, False if confirmed absent.

        Raises:
            MapStorageProbeError: if the service could not be asked.
        """

    @abstractmethod
    def create(self, wam_path: str, map_url: str) -> None:
        """
        Create a WAM file wrapping the given source map.

        Raises:
            MapStorageCreateError: if the file was not created.
        """


class HttpMapStorageClient(MapStorageClient):
    """Map-storage client speaking to the real service over HTTP"""

    def __init__(self, config: MapStorageConfig, session: Optional[requests.Session] = None):
        super().__init__(config)
        self.session = session or requests.Session()

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.map_storage_api_token}",
            "Content-Type": "application/json",
        }

    def exists(self, wam_path: str) -> bool:
        # GET /maps returns the maps cache, keyed by WAM path
        url = f"{self.config.base_url}/maps"
        try:
            response = self.session.get(url, headers=self._get_headers(), timeout=self.config.request_timeout)
        except requests.RequestException as e:
            raise MapStorageProbeError(f"Request to {url} failed: {str(e)}") from e

        if not response.ok:
            raise MapStorageProbeError(
                f"Failed to check WAM existence: {response.status_code} {response.reason}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MapStorageProbeError(f"Invalid maps cache response: {str(e)}") from e

        maps = data.get("maps") if isinstance(data, dict) else None
        if not isinstance(maps, dict):
            raise MapStorageProbeError("Maps cache response has no 'maps' object")

        return wam_path in maps

    def create(self, wam_path: str, map_url: str) -> None:
        url = f"{self.config.base_url}/{wam_path}"
        wam_file = build_wam_file(map_url, self.config.play_url or "")
        try:
            response = self.session.put(
                url,
                headers=self._get_headers(),
                json=wam_file,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            raise MapStorageCreateError(f"Failed to create WAM file: {str(e)}") from e

        if not response.ok:
            raise MapStorageCreateError(
                f"Failed to create WAM file: {response.status_code} {response.reason} - {response.text}"
            )

        logger.info(f"Created WAM file at {wam_path}")

class InMemoryMapStorageClient(MapStorageClient):
    """
    Map-storage stand-in that keeps WAM files in a dict.

    ``fail_probe`` and ``fail_create`` simulate an unreachable service.
    """

    def __init__(
        self,
        config: MapStorageConfig,
        existing: Optional[Set[str]] = None,
        fail_probe: bool = False,
        fail_create: bool = False,
    ):
        super().__init__(config)
        self.files: Dict[str, Dict[str, Any]] = {path: {} for path in (existing or set())}
        self.fail_probe = fail_probe
        self.fail_create = fail_create
        self.probes: List[str] = []
        self.creates: List[Dict[str, str]] = []

    def exists(self, wam_path: str) -> bool:
        self.probes.append(wam_path)
        if self.fail_probe:
            raise MapStorageProbeError("Map storage unreachable")
        return wam_path in self.files

    def create(self, wam_path: str, map_url: str) -> None:
        self.creates.append({"path": wam_path, "map_url": map_url})
        if self.fail_create:
            raise MapStorageCreateError("Map storage rejected the WAM file")
        # Re-creating an existing path overwrites it, like the real service
        self.files[wam_path] = build_wam_file(map_url, self.config.play_url or "")
