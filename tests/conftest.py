"""Shared fixtures: an in-memory database, test settings and a fake map storage."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from map_resolver.api.dependencies import get_map_storage_client
from map_resolver.config import Settings, get_settings
from map_resolver.database import Base, get_db
from map_resolver.main import app
from map_resolver.models.room import Room
from map_resolver.models.universe import Universe
from map_resolver.models.user import User
from map_resolver.models.world import World
from map_resolver.services.map_storage import InMemoryMapStorageClient

ADMIN_TOKEN = "test-admin-token"
STORAGE_URL = "http://map-storage.test"
STORAGE_TOKEN = "storage-token"
PLAY_URL = "http://play.test"
START_ROOM_URL = "https://maps.example/start.tmj"
START_ROOM_REDIRECT = "/@/default/default/lobby"


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "ADMIN_API_TOKEN": ADMIN_TOKEN,
        "START_ROOM_URL": START_ROOM_URL,
        "START_ROOM_REDIRECT": START_ROOM_REDIRECT,
        "PUBLIC_MAP_STORAGE_URL": None,
        "MAP_STORAGE_API_TOKEN": None,
        "PLAY_URL": None,
        "AUTHENTICATED_MODULES": ["admin-api"],
        "STATIC_ASSETS_URL": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_storage_settings(storage_url: str = STORAGE_URL, **overrides) -> Settings:
    values = {
        "PUBLIC_MAP_STORAGE_URL": storage_url,
        "MAP_STORAGE_API_TOKEN": STORAGE_TOKEN,
        "PLAY_URL": PLAY_URL,
    }
    values.update(overrides)
    return make_settings(**values)


def create_room(
    db,
    universe_slug: str = "spaceco",
    world_slug: str = "hq",
    room_slug: str = "lobby",
    map_url="https://cdn.example/lobby.tmj",
    wam_url=None,
    is_public: bool = True,
    authentication_mandatory: bool = False,
    owner=None,
) -> Room:
    """Create a room, reusing the universe and world if they already exist"""
    universe = db.query(Universe).filter_by(slug=universe_slug).first()
    if universe is None:
        universe = Universe(slug=universe_slug, name=universe_slug.title(), owner=owner)
        db.add(universe)

    world = next((w for w in universe.worlds if w.slug == world_slug), None)
    if world is None:
        world = World(slug=world_slug, name=world_slug.upper())
        universe.worlds.append(world)

    room = Room(
        slug=room_slug,
        name=room_slug.title(),
        map_url=map_url,
        wam_url=wam_url,
        is_public=is_public,
        authentication_mandatory=authentication_mandatory,
    )
    world.rooms.append(room)
    db.commit()
    db.refresh(room)
    return room


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def owner(db) -> User:
    user = User(name="Ada Lovelace", email="ada@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def storage() -> InMemoryMapStorageClient:
    return InMemoryMapStorageClient(make_storage_settings().map_storage_config())


@pytest.fixture
def client(db, settings, storage):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_map_storage_client] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


def use_settings(settings: Settings) -> None:
    """Swap the settings served to the app for the rest of a test"""
    app.dependency_overrides[get_settings] = lambda: settings
