# map_resolver/api/v1/router.py
from fastapi import APIRouter
from map_resolver.api.v1 import maps, rooms

# Create the main router
api_router = APIRouter()

# Include all the sub-routers
api_router.include_router(maps.router, prefix="/map", tags=["maps"])
api_router.include_router(rooms.router, prefix="/room", tags=["rooms"])
api_router.include_router(rooms.admin_router, prefix="/admin/rooms", tags=["admin"])
