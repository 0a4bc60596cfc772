# map_resolver/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from map_resolver.api.v1.router import api_router
from map_resolver.api.auth import UnauthorizedError
from map_resolver.database import engine, Base
from map_resolver.config import get_settings
from map_resolver.database_seeder import seed_database

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Get settings
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables in the database
    Base.metadata.create_all(bind=engine)

    # Seed the database with demo data if requested
    if settings.SEED_DATABASE:
        seed_database()

    yield


# Initialize app
app = FastAPI(
    title="Map Resolver API",
    description="Resolves play URIs to room maps and materializes WAM files in map storage",
    version="0.1.0",
    lifespan=lifespan
)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Replace with specific origins in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Health check and welcome message"""
    return {
        "message": "Welcome to the Map Resolver API",
        "status": "online",
        "version": "0.1.0"
    }


@app.exception_handler(UnauthorizedError)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedError):
    return JSONResponse(exc.error.model_dump(), status_code=status.HTTP_401_UNAUTHORIZED)


# Error handler for global exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {str(exc)}")
    return JSONResponse(
        {"error": "Internal server error", "detail": str(exc)},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("map_resolver.main:app", host="0.0.0.0", port=8000, reload=True)
