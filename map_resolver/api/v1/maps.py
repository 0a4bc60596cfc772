from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from map_resolver.api.auth import require_admin_token
from map_resolver.api.dependencies import get_map_service
from map_resolver.schemas.maps import MapRedirectData
from map_resolver.services.map_service import ClientError, Fallback, MapService, Redirect, Resolved

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def get_map(
    play_uri: Optional[str] = Query(None, alias="playUri"),
    auth_token: Optional[str] = Query(None, alias="authToken"),
    access_token: Optional[str] = Query(None, alias="accessToken"),
    _: str = Depends(require_admin_token),
    map_service: MapService = Depends(get_map_service)
):
    """
    Get the map a play URI should load.

    Returns the room's map descriptor, a redirect for the root path, or the
    start map whenever the room cannot be resolved.
    """
    result = map_service.resolve(play_uri, auth_token or access_token)

    if isinstance(result, ClientError):
        return JSONResponse(result.error.model_dump(), status_code=result.status_code)

    if isinstance(result, Redirect):
        return MapRedirectData(redirect_url=result.url).model_dump(by_alias=True)

    if isinstance(result, Fallback):
        logger.info(f"Serving start map for {play_uri}: {result.reason}")
        return result.descriptor.to_response()

    if isinstance(result, Resolved):
        return result.descriptor.to_response()

    raise TypeError(f"Unexpected map result: {result!r}")
