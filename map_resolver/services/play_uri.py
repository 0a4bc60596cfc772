# map_resolver/services/play_uri.py
from dataclasses import dataclass
from typing import Union
from urllib.parse import urlsplit

# Marker segment that introduces the universe/world/room slugs in a play URI path
ROOM_PATH_MARKER = "@"


@dataclass(frozen=True)
class ParsedPlayUri:
    """A play URI that addresses a specific room"""
    domain: str
    universe: str
    world: str
    room: str

    @property
    def group(self) -> str:
        return f"{self.universe}/{self.world}"


@dataclass(frozen=True)
class RootPath:
    """A play URI whose path addresses no room yet"""
    origin: str


@dataclass(frozen=True)
class MalformedPlayUri:
    """A valid URL whose path does not encode a room"""
    reason: str


@dataclass(frozen=True)
class InvalidPlayUri:
    """A value that cannot be tokenized as an absolute URL at all"""
    reason: str


PlayUriParseResult = Union[ParsedPlayUri, RootPath, MalformedPlayUri, InvalidPlayUri]


def _origin(scheme: str, netloc: str) -> str:
    return f"{scheme}://{netloc}"


def parse_play_uri(play_uri: str) -> PlayUriParseResult:
    """
    Parse a play URI of the form ``https://host/@/universe/world/room``.

    Args:
        play_uri: The raw playUri value supplied by the caller

    Returns:
        ParsedPlayUri when a room is addressed, RootPath for an empty or ``/``
        path, MalformedPlayUri when the URL path does not hold the room slugs,
        and InvalidPlayUri when the value is not an absolute URL.
    """
    try:
        parts = urlsplit(play_uri.strip())
        hostname = parts.hostname
    except ValueError as e:
        return InvalidPlayUri(reason=f"Invalid URL: {e}")

    if not parts.scheme or not parts.netloc or not hostname:
        return InvalidPlayUri(reason=f"Invalid URL: {play_uri!r} is not an absolute URL")

    if parts.path in ("", "/"):
        return RootPath(origin=_origin(parts.scheme, parts.netloc))

    segments = [segment for segment in parts.path.split("/") if segment]
    if len(segments) >= 4 and segments[0] == ROOM_PATH_MARKER:
        return ParsedPlayUri(
            domain=hostname,
            universe=segments[1],
            world=segments[2],
            room=segments[3],
        )

    return MalformedPlayUri(
        reason="Invalid playUri format: expected /@/universe/world/room"
    )


def resolve_redirect_url(origin: str, start_location: str) -> str:
    """
    Resolve the configured start location against the caller's origin.

    Absolute URLs are used as-is, a path starting with ``/`` (usually another
    play URI path such as ``/@/u/w/r``) replaces the caller's path, and a bare
    relative path is appended to the caller's origin.
    """
    location = start_location.strip()
    parts = urlsplit(location)
    if parts.scheme and parts.netloc:
        return location

    base = origin.rstrip("/")
    if location.startswith("/"):
        return f"{base}{location}"
    return f"{base}/{location}"


def build_play_uri(base_url: str, universe: str, world: str, room: str) -> str:
    """Build a play URI from a base URL and the room's slugs"""
    parts = urlsplit(base_url)
    return f"{_origin(parts.scheme, parts.netloc)}/{ROOM_PATH_MARKER}/{universe}/{world}/{room}"
