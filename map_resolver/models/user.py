# map_resolver/models/user.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from map_resolver.database import Base
from map_resolver.models.mixins import TimestampMixin, generate_uuid


class User(Base, TimestampMixin):
    """
    Owner of universes.
    Accounts are managed by the admin surface; this service only reads them
    for author attribution.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid, index=True)
    name = Column(String(100), nullable=True)
    email = Column(String(100), unique=True, index=True, nullable=True)

    # Relationships
    universes = relationship("Universe", back_populates="owner")

    @property
    def display_name(self):
        if self.name and self.name.strip():
            return self.name.strip()
        return None

    def __repr__(self):
        return f"<User {self.id} - {self.email}>"
