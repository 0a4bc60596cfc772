# map_resolver/models/world.py
from sqlalchemy import Column, String, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from map_resolver.database import Base
from map_resolver.models.mixins import TimestampMixin, generate_uuid

class World(Base, TimestampMixin):
    __tablename__ = "worlds"
    __table_args__ = (UniqueConstraint("universe_id", "slug", name="uq_worlds_universe_slug"),)

    id = Column(String(36), primary_key=True, default=generate_uuid, index=True)
    slug = Column(String(100), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    map_url = Column(Text, nullable=True)
    wam_url = Column(Text, nullable=True)

    universe_id = Column(String(36), ForeignKey("universes.id"), nullable=False, index=True)

    # Relationships
    universe = relationship("Universe", back_populates="worlds")
    rooms = relationship("Room", back_populates="world", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<World {self.id} - {self.slug} (Universe: {self.universe_id})>"
