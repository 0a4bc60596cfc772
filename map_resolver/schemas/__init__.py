"""
Schema definitions for the application.
This module exports all schemas for easy importing throughout the app.
"""

# Import from maps
from map_resolver.schemas.maps import (
    FavIcon, ManifestIcon, Metatags, MapMetadata, MapDetailsData,
    MapRedirectData, ErrorApiData
)

# Import from rooms
from map_resolver.schemas.rooms import (
    UniverseSummary, WorldSummary, RoomResponse, ShortMapDescription,
    RoomInfoResponse
)
