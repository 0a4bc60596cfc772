# map_resolver/services/room_service.py
import logging
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional

from map_resolver.models.room import Room
from map_resolver.models.world import World
from map_resolver.models.universe import Universe
from map_resolver.models.user import User

logger = logging.getLogger(__name__)


class RoomService:
    """Service for looking up rooms through the universe/world/room slug chain"""

    def __init__(self, db: Session):
        self.db = db

    def _room_query(self):
        return (
            self.db.query(Room)
            .join(World, Room.world_id == World.id)
            .join(Universe, World.universe_id == Universe.id)
            .options(
                joinedload(Room.world)
                .joinedload(World.universe)
                .joinedload(Universe.owner)
            )
        )

    def get_room_by_slugs(self, universe_slug: str, world_slug: str, room_slug: str) -> Optional[Room]:
        """Get a room by its full slug path, regardless of its map configuration"""
        return (
            self._room_query()
            .filter(
                Universe.slug == universe_slug,
                World.slug == world_slug,
                Room.slug == room_slug,
            )
            .first()
        )

    def resolve_room(self, universe_slug: str, world_slug: str, room_slug: str) -> Optional[Room]:
        """
        Resolve the room a play URI addresses.

        Args:
            universe_slug: Slug of the universe
            world_slug: Slug of the world within the universe
            room_slug: Slug of the room within the world

        Returns:
            The room, or None if any level is missing or the room has no source map.
        """
        room = self.get_room_by_slugs(universe_slug, world_slug, room_slug)
        if not room or not room.map_url:
            return None
        return room

    def get_world_by_slugs(self, universe_slug: str, world_slug: str) -> Optional[World]:
        """Get a world by its universe and world slugs"""
        return (
            self.db.query(World)
            .join(Universe, World.universe_id == Universe.id)
            .options(joinedload(World.universe))
            .filter(Universe.slug == universe_slug, World.slug == world_slug)
            .first()
        )

    def get_room_in_world(self, world_id: str, room_slug: str) -> Optional[Room]:
        """Get a room by slug within a known world"""
        return (
            self.db.query(Room)
            .options(joinedload(Room.world).joinedload(World.universe))
            .filter(Room.world_id == world_id, Room.slug == room_slug)
            .first()
        )

    def list_public_rooms(self, world_id: str) -> List[Room]:
        """List the public rooms of a world ordered by name"""
        return (
            self.db.query(Room)
            .filter(Room.world_id == world_id, Room.is_public.is_(True))
            .order_by(Room.name)
            .all()
        )

    def update_wam_url(self, room: Room, wam_url: str) -> bool:
        """
        Persist the room's cached artifact pointer.

        Last writer wins; concurrent writers compute the same value from the
        same configuration.

        Returns:
            True if the value was written, False if the write failed.
        """
        try:
            room.wam_url = wam_url
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update wam_url for room {room.id}: {str(e)}")
            return False


def get_owner(room: Room) -> Optional[User]:
    """Owner of the universe a room lives in"""
    if room.world is None or room.world.universe is None:
        return None
    return room.world.universe.owner
