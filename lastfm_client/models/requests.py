"""
Pydantic models for the inputs of each API operation.

Each model knows how to turn itself into the operation-specific part of the
parameter set; the request builder adds the common parameters and the signature.
"""

from abc import abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .params import ParameterSet, collect_params


class Period(str, Enum):
    """Time ranges accepted by the user statistics queries."""

    OVERALL = "overall"
    SEVEN_DAYS = "7day"
    ONE_MONTH = "1month"
    THREE_MONTHS = "3month"
    SIX_MONTHS = "6month"
    TWELVE_MONTHS = "12month"


class _RequestModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def to_params(self) -> ParameterSet:
        """Renders the operation-specific parameters."""


class GetSessionRequest(_RequestModel):
    """Exchanges an authorized token for a session key."""

    token: str = Field(min_length=1)

    def to_params(self) -> ParameterSet:
        return collect_params(token=self.token)


class _TrackRequest(_RequestModel):
    artist: str
    track: str
    album: Optional[str] = None
    session_key: str = Field(min_length=1, repr=False)


class ScrobbleRequest(_TrackRequest):
    """A play of ``track`` by ``artist`` that happened at ``timestamp``."""

    timestamp: datetime

    def to_params(self) -> ParameterSet:
        return collect_params(
            artist=self.artist,
            track=self.track,
            timestamp=self.timestamp,
            album=self.album,
        )


class UpdateNowPlayingRequest(_TrackRequest):
    """Announces that ``track`` by ``artist`` is playing right now."""

    def to_params(self) -> ParameterSet:
        return collect_params(artist=self.artist, track=self.track, album=self.album)


class TopItemsRequest(_RequestModel):
    """Paginated query for a user's most played artists or tracks."""

    user: str = Field(min_length=1)
    period: Optional[Period] = None
    limit: Optional[int] = Field(default=None, ge=1, le=1000)
    page: Optional[int] = Field(default=None, ge=1)

    def to_params(self) -> ParameterSet:
        return collect_params(
            user=self.user,
            period=self.period,
            page=self.page,
            limit=self.limit,
            extended=True,
        )


class GetTopArtistsRequest(TopItemsRequest):
    pass


class GetTopTracksRequest(TopItemsRequest):
    pass
