from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional

from map_resolver.api.auth import require_admin_token
from map_resolver.api.dependencies import get_service
from map_resolver.schemas.rooms import RoomInfoResponse, RoomResponse, ShortMapDescription
from map_resolver.services.play_uri import ParsedPlayUri, build_play_uri, parse_play_uri
from map_resolver.services.room_service import RoomService

router = APIRouter()
admin_router = APIRouter()


def _require_room_uri(value: Optional[str], name: str) -> ParsedPlayUri:
    if not value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing {name} parameter"
        )

    parsed = parse_play_uri(value)
    if not isinstance(parsed, ParsedPlayUri):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {name} format"
        )
    return parsed


@admin_router.get("/from-play-uri", response_model=RoomResponse)
def get_room_from_play_uri(
    play_uri: Optional[str] = Query(None, alias="playUri"),
    _: str = Depends(require_admin_token),
    room_service: RoomService = Depends(get_service(RoomService))
):
    """
    Resolve a play URI to its room record.

    Unlike the map endpoint, a missing world or room is a 404.
    """
    parsed = _require_room_uri(play_uri, "playUri")

    world = room_service.get_world_by_slugs(parsed.universe, parsed.world)
    if not world:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="World not found for provided playUri"
        )

    room = room_service.get_room_in_world(world.id, parsed.room)
    if not room:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Room not found for provided playUri"
        )

    return room


@router.get("/sameWorld", response_model=List[ShortMapDescription], response_model_by_alias=True)
def list_same_world_rooms(
    room_url: Optional[str] = Query(None, alias="roomUrl"),
    _: str = Depends(require_admin_token),
    room_service: RoomService = Depends(get_service(RoomService))
):
    """List the public rooms in the same world as the given room"""
    parsed = _require_room_uri(room_url, "roomUrl")

    world = room_service.get_world_by_slugs(parsed.universe, parsed.world)
    if not world:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="World not found"
        )

    rooms = []
    for room in room_service.list_public_rooms(world.id):
        play_uri = build_play_uri(room_url, parsed.universe, parsed.world, room.slug)
        rooms.append(ShortMapDescription(name=room.name, room_url=play_uri, wam_url=play_uri))
    return rooms


@router.get("/info", response_model=RoomInfoResponse, response_model_by_alias=True)
def get_room_info(
    slug: Optional[str] = Query(None),
    room_service: RoomService = Depends(get_service(RoomService))
):
    """
    Get the room, world and universe names for a "universe/world/room" slug.
    Public endpoint.
    """
    if not slug:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="slug parameter is required"
        )

    parts = [part for part in slug.split("/") if part]
    if len(parts) != 3:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid slug format. Expected: universe/world/room"
        )

    room = room_service.get_room_by_slugs(*parts)
    if not room:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Room not found"
        )

    return RoomInfoResponse(
        room_name=room.name,
        world_name=room.world.name,
        universe_name=room.world.universe.name,
    )
