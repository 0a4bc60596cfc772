from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


class FavIcon(BaseModel):
    rel: str
    sizes: str
    src: str


class ManifestIcon(BaseModel):
    src: str
    sizes: str
    type: str
    purpose: str


class Metatags(BaseModel):
    """Branding shown by the client while the map loads"""
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    provider: Optional[str] = None
    card_image: Optional[str] = Field(None, alias="cardImage")
    fav_icons: Optional[List[FavIcon]] = Field(None, alias="favIcons")
    manifest_icons: Optional[List[ManifestIcon]] = Field(None, alias="manifestIcons")
    app_name: Optional[str] = Field(None, alias="appName")
    short_app_name: Optional[str] = Field(None, alias="shortAppName")
    theme_color: Optional[str] = Field(None, alias="themeColor")

    class Config:
        populate_by_name = True


class MapMetadata(BaseModel):
    """Passed to the client's extension modules on init"""
    modules: List[str]


class MapDetailsData(BaseModel):
    """Map descriptor returned for a play URI"""
    map_url: Optional[str] = Field(None, alias="mapUrl")
    wam_url: Optional[str] = Field(None, alias="wamUrl")
    editable: Optional[bool] = None
    authentication_mandatory: bool = Field(False, alias="authenticationMandatory")
    policy: str = "public"
    room_name: Optional[str] = Field(None, alias="roomName")
    # "{universe}/{world}", null for the start map
    group: Optional[str] = None
    modules: Optional[List[str]] = None
    metadata: Optional[MapMetadata] = None
    metatags: Optional[Metatags] = None

    class Config:
        populate_by_name = True

    def to_response(self) -> Dict[str, Any]:
        """Serialize only the fields that were explicitly set"""
        return self.model_dump(by_alias=True, exclude_unset=True)


class MapRedirectData(BaseModel):
    redirect_url: str = Field(..., alias="redirectUrl")

    class Config:
        populate_by_name = True


class ErrorApiData(BaseModel):
    """Structured error body understood by the play client"""
    status: str = "error"
    type: str = "error"
    title: str
    subtitle: str
    code: str
    details: str
