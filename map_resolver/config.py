# map_resolver/config.py
from typing import List, Optional
from pydantic import BaseModel
from pydantic_settings import BaseSettings
from functools import lru_cache
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class MapStorageConfig(BaseModel):
    """Immutable snapshot of the map-storage settings for one service instance"""
    public_map_storage_url: Optional[str] = None
    map_storage_api_token: Optional[str] = None
    play_url: Optional[str] = None
    request_timeout: float = 10.0

    class Config:
        frozen = True

    @property
    def is_configured(self) -> bool:
        """Storage is only usable when base address, token and play URL are all set"""
        return bool(self.public_map_storage_url and self.map_storage_api_token and self.play_url)

    @property
    def base_url(self) -> str:
        return (self.public_map_storage_url or "").rstrip("/")


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./map_resolver.db"
    SEED_DATABASE: bool = False

    # API configuration
    API_PREFIX: str = "/api"
    ADMIN_API_TOKEN: str = ""

    # Start map used for fallbacks and root path redirects
    START_ROOM_URL: str = "https://rveiio.github.io/BAWES-virtual/office.tmj"
    START_ROOM_REDIRECT: str = "/@/default/default/lobby"

    # Map storage
    PUBLIC_MAP_STORAGE_URL: Optional[str] = None
    MAP_STORAGE_API_TOKEN: Optional[str] = None
    PLAY_URL: Optional[str] = None
    MAP_STORAGE_TIMEOUT: float = 10.0

    # Modules loaded by authenticated clients
    AUTHENTICATED_MODULES: List[str] = ["admin-api"]

    # Branding
    STATIC_ASSETS_URL: Optional[str] = None
    APP_NAME: str = "Map Resolver"
    SHORT_APP_NAME: str = "Maps"
    THEME_COLOR: str = "#1b2a41"

    class Config:
        env_file = ".env"

    def map_storage_config(self) -> MapStorageConfig:
        return MapStorageConfig(
            public_map_storage_url=self.PUBLIC_MAP_STORAGE_URL,
            map_storage_api_token=self.MAP_STORAGE_API_TOKEN,
            play_url=self.PLAY_URL,
            request_timeout=self.MAP_STORAGE_TIMEOUT,
        )


@lru_cache()
def get_settings():
    return Settings()
