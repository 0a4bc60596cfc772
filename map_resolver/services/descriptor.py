# map_resolver/services/descriptor.py
from typing import List, Optional

from map_resolver.config import MapStorageConfig, Settings
from map_resolver.models.room import Room
from map_resolver.schemas.maps import FavIcon, ManifestIcon, MapDetailsData, MapMetadata, Metatags
from map_resolver.services.materialization import MaterializationOutcome
from map_resolver.services.room_service import get_owner

UNKNOWN_AUTHOR = "Unknown author"


def is_authenticated_token(token: Optional[str]) -> bool:
    """A client counts as authenticated when it sent a non-empty token"""
    return bool(token and token.strip())


class DescriptorBuilder:
    """Builds the map descriptors returned to the play client"""

    def __init__(
        self,
        storage_config: MapStorageConfig,
        start_room_url: str,
        authenticated_modules: List[str],
        static_assets_url: Optional[str] = None,
        app_name: str = "Map Resolver",
        short_app_name: str = "Maps",
        theme_color: str = "#1b2a41",
    ):
        self.storage_config = storage_config
        self.start_room_url = start_room_url
        self.authenticated_modules = list(authenticated_modules)
        self.static_assets_url = static_assets_url.rstrip("/") if static_assets_url else None
        self.app_name = app_name
        self.short_app_name = short_app_name
        self.theme_color = theme_color

    @classmethod
    def from_settings(cls, settings: Settings, storage_config: Optional[MapStorageConfig] = None):
        return cls(
            storage_config=storage_config or settings.map_storage_config(),
            start_room_url=settings.START_ROOM_URL,
            authenticated_modules=settings.AUTHENTICATED_MODULES,
            static_assets_url=settings.STATIC_ASSETS_URL,
            app_name=settings.APP_NAME,
            short_app_name=settings.SHORT_APP_NAME,
            theme_color=settings.THEME_COLOR,
        )

    def _modules(self, is_authenticated: bool) -> dict:
        if not is_authenticated:
            return {"modules": []}
        return {
            "modules": list(self.authenticated_modules),
            "metadata": MapMetadata(modules=list(self.authenticated_modules)),
        }

    def _is_managed(self, wam_url: Optional[str]) -> bool:
        if not wam_url or not self.storage_config.is_configured:
            return False
        return wam_url.startswith(f"{self.storage_config.base_url}/")

    def _author(self, room: Room) -> str:
        owner = get_owner(room)
        if owner is None:
            return UNKNOWN_AUTHOR
        return owner.display_name or owner.email or UNKNOWN_AUTHOR

    def _metatags(self, room: Room) -> Optional[Metatags]:
        if not self.static_assets_url:
            return None

        assets = self.static_assets_url
        world = room.world
        universe = world.universe if world is not None else None
        where = " / ".join(part.name for part in (universe, world) if part is not None)
        return Metatags(
            title=room.name,
            description=f"{room.name} in {where}" if where else room.name,
            author=self._author(room),
            provider=self.app_name,
            card_image=f"{assets}/card-image.png",
            fav_icons=[
                FavIcon(rel="icon", sizes="32x32", src=f"{assets}/favicon-32x32.png"),
                FavIcon(rel="apple-touch-icon", sizes="180x180", src=f"{assets}/apple-touch-icon.png"),
            ],
            manifest_icons=[
                ManifestIcon(src=f"{assets}/icon-192x192.png", sizes="192x192", type="image/png", purpose="any"),
                ManifestIcon(src=f"{assets}/icon-512x512.png", sizes="512x512", type="image/png", purpose="maskable"),
            ],
            app_name=self.app_name,
            short_app_name=self.short_app_name,
            theme_color=self.theme_color,
        )

    def build(self, room: Room, outcome: MaterializationOutcome, is_authenticated: bool) -> MapDetailsData:
        """
        Build the descriptor for a resolved room.

        The materialized WAM URL wins over the room's source map; the source
        map is only included when no WAM URL is available.
        """
        fields = {}
        if outcome.wam_url:
            fields["wam_url"] = outcome.wam_url
        else:
            fields["map_url"] = room.map_url

        metatags = self._metatags(room)
        if metatags is not None:
            fields["metatags"] = metatags

        return MapDetailsData(
            **fields,
            editable=self._is_managed(outcome.wam_url),
            authentication_mandatory=bool(room.authentication_mandatory),
            room_name=room.name,
            group=f"{room.world.universe.slug}/{room.world.slug}",
            policy="public" if room.is_public else "private",
            **self._modules(is_authenticated),
        )

    def fallback(self, is_authenticated: bool) -> MapDetailsData:
        """Descriptor for the default start map"""
        return MapDetailsData(
            map_url=self.start_room_url,
            group=None,
            editable=False,
            authentication_mandatory=False,
            policy="public",
            **self._modules(is_authenticated),
        )
