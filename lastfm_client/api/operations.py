"""
The remote procedures this client speaks, with their transport and response shape.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel

from lastfm_client.models.responses import (
    GetSessionResponse,
    GetTopArtistsResponse,
    GetTopTracksResponse,
    ScrobbleResponse,
    UpdateNowPlayingResponse,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class Operation(Generic[SchemaT]):
    """
    A single Last.fm API method.

    Attributes:
        name: The canonical remote procedure name, sent as ``method``.
        http_method: GET for reads, POST for writes.
        response_schema: The model every successful response must validate against.
        requires_session: Whether the request must be signed with a user's session key.
    """

    name: str
    http_method: HttpMethod
    response_schema: type[SchemaT]
    requires_session: bool = False


GET_SESSION = Operation("auth.getSession", HttpMethod.GET, GetSessionResponse)
SCROBBLE = Operation(
    "track.scrobble", HttpMethod.POST, ScrobbleResponse, requires_session=True
)
UPDATE_NOW_PLAYING = Operation(
    "track.updateNowPlaying",
    HttpMethod.POST,
    UpdateNowPlayingResponse,
    requires_session=True,
)
GET_TOP_ARTISTS = Operation(
    "user.gettopartists", HttpMethod.GET, GetTopArtistsResponse
)
GET_TOP_TRACKS = Operation("user.gettoptracks", HttpMethod.GET, GetTopTracksResponse)

OPERATIONS = {
    op.name: op
    for op in (
        GET_SESSION,
        SCROBBLE,
        UPDATE_NOW_PLAYING,
        GET_TOP_ARTISTS,
        GET_TOP_TRACKS,
    )
}
