# map_resolver/database_seeder.py
import logging
from sqlalchemy.orm import Session
from typing import List, Optional

from map_resolver.database import SessionLocal, engine, Base
from map_resolver.models.user import User
from map_resolver.models.universe import Universe
from map_resolver.models.world import World
from map_resolver.models.room import Room
from map_resolver.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

DEMO_UNIVERSE_SLUG = "default"
DEMO_WORLD_SLUG = "default"


def seed_owner(db: Session) -> User:
    """Create the demo owner if one doesn't exist."""
    owner = db.query(User).filter_by(email="admin@example.com").first()
    if owner:
        logger.info("Demo owner already exists")
        return owner

    owner = User(name="Admin User", email="admin@example.com")
    db.add(owner)
    db.commit()
    db.refresh(owner)

    logger.info("Created demo owner")
    return owner


def seed_universe(db: Session) -> Universe:
    """Create the default universe and world."""
    universe = db.query(Universe).filter_by(slug=DEMO_UNIVERSE_SLUG).first()
    if universe:
        logger.info(f"Universe '{DEMO_UNIVERSE_SLUG}' already exists")
        return universe

    owner = seed_owner(db)

    universe = Universe(
        slug=DEMO_UNIVERSE_SLUG,
        name="Default Universe",
        description="Universe created by the database seeder",
        owner_id=owner.id,
        is_public=True
    )
    universe.worlds.append(World(slug=DEMO_WORLD_SLUG, name="Default World"))

    db.add(universe)
    db.commit()
    db.refresh(universe)

    logger.info(f"Created universe: {universe.name}")
    return universe


def seed_rooms(db: Session, map_url: Optional[str] = None) -> List[Room]:
    """Create the lobby and a room without a map in the default world."""
    universe = seed_universe(db)
    world = next((w for w in universe.worlds if w.slug == DEMO_WORLD_SLUG), None)
    if world is None:
        logger.error("Default world not found, cannot create rooms")
        return []

    if world.rooms:
        logger.info(f"Found {len(world.rooms)} existing rooms")
        return world.rooms

    rooms = [
        Room(slug="lobby", name="Lobby", map_url=map_url or settings.START_ROOM_URL, is_public=True),
        Room(slug="workshop", name="Workshop", map_url=None, is_public=True),
    ]
    world.rooms.extend(rooms)
    db.commit()

    logger.info(f"Created {len(rooms)} rooms")
    return rooms


def seed_database():
    """Seed the database with demo data in a logical order."""
    logger.info("Starting database seeding...")
    db = SessionLocal()
    try:
        Base.metadata.create_all(bind=engine)

        seed_rooms(db)

        logger.info("Database seeding completed successfully")
    except Exception as e:
        logger.error(f"Error seeding database: {str(e)}")
        db.rollback()
    finally:
        db.close()

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    seed_database()
