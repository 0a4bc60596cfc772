from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime


class UniverseSummary(BaseModel):
    id: str
    name: str
    slug: str

    class Config:
        from_attributes = True


class WorldSummary(BaseModel):
    id: str
    name: str
    slug: str
    universe: UniverseSummary

    class Config:
        from_attributes = True


class RoomResponse(BaseModel):
    """Room record resolved from a play URI"""
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    map_url: Optional[str] = None
    wam_url: Optional[str] = None
    is_public: bool
    authentication_mandatory: bool
    world_id: str
    world: WorldSummary
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ShortMapDescription(BaseModel):
    name: str
    room_url: str = Field(..., alias="roomUrl")
    wam_url: str = Field(..., alias="wamUrl")

    class Config:
        populate_by_name = True


class RoomInfoResponse(BaseModel):
    room_name: str = Field(..., alias="roomName")
    world_name: str = Field(..., alias="worldName")
    universe_name: str = Field(..., alias="universeName")

    class Config:
        populate_by_name = True
