# map_resolver/api/dependencies.py
from typing import Callable, Iterator, Type
from fastapi import Depends
from sqlalchemy.orm import Session

from map_resolver.config import MapStorageConfig, Settings, get_settings
from map_resolver.database import get_db
from map_resolver.services.descriptor import DescriptorBuilder
from map_resolver.services.map_service import MapService
from map_resolver.services.map_storage import HttpMapStorageClient, MapStorageClient
from map_resolver.services.materialization import MaterializationCoordinator
from map_resolver.services.room_service import RoomService


def get_service(service_class: Type) -> Callable:
    """Factory function to create service dependencies with DB injection"""
    def _get_service(db: Session = Depends(get_db)):
        return service_class(db)
    return _get_service


def get_map_storage_config(settings: Settings = Depends(get_settings)) -> MapStorageConfig:
    return settings.map_storage_config()


def get_map_storage_client(
    config: MapStorageConfig = Depends(get_map_storage_config)
) -> Iterator[MapStorageClient]:
    """HTTP map-storage client for the lifetime of one request"""
    client = HttpMapStorageClient(config)
    try:
        yield client
    finally:
        client.session.close()


def get_map_service(
    settings: Settings = Depends(get_settings),
    config: MapStorageConfig = Depends(get_map_storage_config),
    storage: MapStorageClient = Depends(get_map_storage_client),
    room_service: RoomService = Depends(get_service(RoomService))
) -> MapService:
    """Wire the map resolution pipeline for one request"""
    return MapService(
        room_service=room_service,
        coordinator=MaterializationCoordinator(config, storage, room_service),
        builder=DescriptorBuilder.from_settings(settings, config),
        start_room_redirect=settings.START_ROOM_REDIRECT,
    )
