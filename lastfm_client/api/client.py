"""
Async client for the Last.fm REST API (2.0).
"""

import json
import logging
import time
from datetime import datetime
from typing import Any, AsyncGenerator, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel

from lastfm_client.exceptions import TransportError
from lastfm_client.models.config import ClientConfig
from lastfm_client.models.requests import (
    GetTopArtistsRequest,
    GetTopTracksRequest,
    Period,
    ScrobbleRequest,
    UpdateNowPlayingRequest,
)
from lastfm_client.models.responses import (
    GetSessionResponse,
    GetTopArtistsResponse,
    GetTopTracksResponse,
    ScrobbleResponse,
    UpdateNowPlayingResponse,
)

from .auth import LastFmAuthenticator
from .operations import (
    GET_TOP_ARTISTS,
    GET_TOP_TRACKS,
    SCROBBLE,
    UPDATE_NOW_PLAYING,
    Operation,
)
from .request_builder import build_request
from .transport import AiohttpTransport, Transport, TransportResponse
from .validator import (
    extract_error_envelope,
    parse_payload,
    raise_for_error_envelope,
    validate,
)

log = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class LastFmClient:
    """
    Async client for the Last.fm JSON API.

    Every operation performs exactly one HTTP request and surfaces every failure
    to the caller: transport errors, service error envelopes, and responses that
    do not match the operation's schema. Nothing is retried or cached.

    Usage:
        async with LastFmClient(config) as client:
            top = await client.get_top_artists("alice", period="6month", limit=5)
    """

    def __init__(self, config: ClientConfig, transport: Optional[Transport] = None):
        """
        Initializes the API client.

        Args:
            config: API key, shared secret, and base URL.
            transport: The HTTP transport; defaults to an aiohttp-backed one.
        """
        self.config = config
        self._transport: Transport = transport or AiohttpTransport()
        self._authenticator = LastFmAuthenticator(self)

    @property
    def authenticator(self) -> LastFmAuthenticator:
        """Provides access to the authentication helper."""
        return self._authenticator

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "LastFmClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def api_call(
        self,
        operation: Operation[SchemaT],
        params: Mapping[str, str],
        session_key: Optional[str] = None,
    ) -> SchemaT:
        """
        Signs, sends, and decodes a single API call.

        Raises:
            TransportError: On network failure or a non-2xx status.
            LastFmApiError: If the service answered with its error envelope.
            DecodeError: If the response does not match the operation's schema.
        """
        request = build_request(self.config, operation, params, session_key)

        start_time = time.monotonic()
        response = await self._transport.send(request)
        duration_ms = (time.monotonic() - start_time) * 1000
        log.debug(
            f"{operation.name} answered {response.status} in {duration_ms:.0f} ms"
        )

        if not response.ok:
            raise self._status_error(operation, response)

        data = parse_payload(response.body)
        raise_for_error_envelope(data)
        return validate(operation.response_schema, data)

    @staticmethod
    def _status_error(
        operation: Operation, response: TransportResponse
    ) -> TransportError:
        """Builds the TransportError for a non-2xx response."""
        try:
            envelope = extract_error_envelope(json.loads(response.body))
        except json.JSONDecodeError:
            envelope = None

        message = f"HTTP error for {operation.name}! status: {response.status}"
        error_code = error_message = None
        if envelope is not None:
            error_code, error_message = envelope
            message += f" (Last.fm error {error_code}: {error_message})"

        log.debug(message)
        return TransportError(
            message,
            status=response.status,
            body=response.body,
            error_code=error_code,
            error_message=error_message,
        )

    # Public API Methods
    async def get_session(self, token: str) -> GetSessionResponse:
        return await self._authenticator.get_session(token)

    async def scrobble(
        self,
        artist: str,
        track: str,
        timestamp: datetime,
        session_key: str,
        album: Optional[str] = None,
    ) -> ScrobbleResponse:
        """
        Adds a track play to the user's profile.

        Args:
            artist: The artist name.
            track: The track name.
            timestamp: When the track started playing.
            session_key: The user's session key.
            album: The album name, sent only when given.
        """
        request = ScrobbleRequest(
            artist=artist,
            track=track,
            timestamp=timestamp,
            album=album,
            session_key=session_key,
        )
        return await self.api_call(SCROBBLE, request.to_params(), request.session_key)

    async def update_now_playing(
        self,
        artist: str,
        track: str,
        session_key: str,
        album: Optional[str] = None,
    ) -> UpdateNowPlayingResponse:
        """Notifies Last.fm that the user has started listening to a track."""
        request = UpdateNowPlayingRequest(
            artist=artist, track=track, album=album, session_key=session_key
        )
        return await self.api_call(
            UPDATE_NOW_PLAYING, request.to_params(), request.session_key
        )

    async def get_top_artists(
        self,
        user: str,
        period: Optional[Union[Period, str]] = None,
        limit: Optional[int] = None,
        page: Optional[int] = None,
    ) -> GetTopArtistsResponse:
        """Gets the artists a user listened to most over ``period``."""
        request = GetTopArtistsRequest(user=user, period=period, limit=limit, page=page)
        return await self.api_call(GET_TOP_ARTISTS, request.to_params())

    async def get_top_tracks(
        self,
        user: str,
        period: Optional[Union[Period, str]] = None,
        limit: Optional[int] = None,
        page: Optional[int] = None,
    ) -> GetTopTracksResponse:
        """Gets the tracks a user listened to most over ``period``."""
        request = GetTopTracksRequest(user=user, period=period, limit=limit, page=page)
        return await self.api_call(GET_TOP_TRACKS, request.to_params())

    async def iter_top_artists(
        self, user: str, **kwargs: Any
    ) -> AsyncGenerator[GetTopArtistsResponse, None]:
        """Yields successive pages of top artists, starting at ``page`` (default 1)."""
        page = kwargs.pop("page", None) or 1
        while True:
            response = await self.get_top_artists(user, page=page, **kwargs)
            yield response
            if page >= response.topartists.page_info.total_pages:
                break
            page += 1

    async def iter_top_tracks(
        self, user: str, **kwargs: Any
    ) -> AsyncGenerator[GetTopTracksResponse, None]:
        """Yields successive pages of top tracks, starting at ``page`` (default 1)."""
        page = kwargs.pop("page", None) or 1
        while True:
            response = await self.get_top_tracks(user, page=page, **kwargs)
            yield response
            if page >= response.toptracks.page_info.total_pages:
                break
            page += 1
