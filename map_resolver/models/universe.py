# map_resolver/models/universe.py
from sqlalchemy import Column, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from map_resolver.database import Base
from map_resolver.models.mixins import TimestampMixin, generate_uuid

class Universe(Base, TimestampMixin):
    __tablename__ = "universes"

    id = Column(String(36), primary_key=True, default=generate_uuid, index=True)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    is_public = Column(Boolean, default=True, nullable=False)

    owner_id = Column(String(36), ForeignKey("users.id"), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="universes")
    worlds = relationship("World", back_populates="universe", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Universe {self.id} - {self.slug}>"
