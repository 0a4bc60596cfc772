# map_resolver/services/map_service.py
import logging
from dataclasses import dataclass
from typing import Optional, Union
from sqlalchemy.exc import SQLAlchemyError

from map_resolver.schemas.maps import ErrorApiData, MapDetailsData
from map_resolver.services.descriptor import DescriptorBuilder, is_authenticated_token
from map_resolver.services.materialization import MaterializationCoordinator, MaterializationOutcome
from map_resolver.services.play_uri import (
    InvalidPlayUri,
    MalformedPlayUri,
    RootPath,
    parse_play_uri,
    resolve_redirect_url,
)
from map_resolver.services.room_service import RoomService

logger = logging.getLogger(__name__)

MISSING_PLAY_URI = "MISSING_PLAY_URI"
INVALID_PLAY_URI = "INVALID_PLAY_URI"


@dataclass(frozen=True)
class Resolved:
    descriptor: MapDetailsData
    outcome: MaterializationOutcome


@dataclass(frozen=True)
class Fallback:
    descriptor: MapDetailsData
    reason: str


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass(frozen=True)
class ClientError:
    error: ErrorApiData
    status_code: int = 400


MapResult = Union[Resolved, Fallback, Redirect, ClientError]


class MapService:
    """Resolves a play URI into the map the client should load"""

    def __init__(
        self,
        room_service: RoomService,
        coordinator: MaterializationCoordinator,
        builder: DescriptorBuilder,
        start_room_redirect: str,
    ):
        self.room_service = room_service
        self.coordinator = coordinator
        self.builder = builder
        self.start_room_redirect = start_room_redirect

    def resolve(self, play_uri: Optional[str], auth_token: Optional[str] = None) -> MapResult:
        """
        Resolve a play URI.

        Args:
            play_uri: The playUri query parameter, if any
            auth_token: The client's authToken/accessToken, if any

        Returns:
            Resolved for a known room, Redirect for the root path, ClientError
            for a missing or unparseable playUri, and Fallback (the start map)
            for everything else.
        """
        if not play_uri:
            return ClientError(ErrorApiData(
                title="Missing parameter",
                subtitle="playUri is required",
                code=MISSING_PLAY_URI,
                details="The playUri query parameter is required.",
            ))

        is_authenticated = is_authenticated_token(auth_token)
        parsed = parse_play_uri(play_uri)

        if isinstance(parsed, InvalidPlayUri):
            return ClientError(ErrorApiData(
                title="Invalid playUri",
                subtitle="The playUri format is invalid",
                code=INVALID_PLAY_URI,
                details=parsed.reason,
            ))

        if isinstance(parsed, RootPath):
            return Redirect(resolve_redirect_url(parsed.origin, self.start_room_redirect))

        if isinstance(parsed, MalformedPlayUri):
            return Fallback(self.builder.fallback(is_authenticated), parsed.reason)

        try:
            room = self.room_service.resolve_room(parsed.universe, parsed.world, parsed.room)
            if room is None:
                return Fallback(
                    self.builder.fallback(is_authenticated),
                    f"No room with a map at {parsed.universe}/{parsed.world}/{parsed.room}",
                )

            outcome = self.coordinator.materialize(room, parsed)
            return Resolved(self.builder.build(room, outcome, is_authenticated), outcome)
        except Exception as e:
            logger.exception(f"Error resolving map for {play_uri}: {str(e)}")
            self._rollback()
            return Fallback(self.builder.fallback(is_authenticated), f"Unexpected error: {str(e)}")

    def _rollback(self) -> None:
        try:
            self.room_service.db.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback after map resolution error failed: {str(e)}")
