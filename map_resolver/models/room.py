# map_resolver/models/room.py
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from map_resolver.database import Base
from map_resolver.models.mixins import TimestampMixin, generate_uuid

class Room(Base, TimestampMixin):
    __tablename__ = "rooms"
    __table_args__ = (UniqueConstraint("world_id", "slug", name="uq_rooms_world_slug"),)

    id = Column(String(36), primary_key=True, default=generate_uuid, index=True)
    slug = Column(String(100), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    # Authoritative source map
    map_url = Column(Text, nullable=True)
    # Cached pointer to the materialized artifact in map storage
    wam_url = Column(Text, nullable=True)

    is_public = Column(Boolean, default=True, nullable=False)
    authentication_mandatory = Column(Boolean, default=False, nullable=False)

    world_id = Column(String(36), ForeignKey("worlds.id"), nullable=False, index=True)

    # Relationships
    world = relationship("World", back_populates="rooms")

    def __repr__(self):
        return f"<Room {self.id} - {self.slug} (World: {self.world_id})>"
