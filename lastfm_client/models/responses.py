"""
Pydantic models describing the JSON returned by each API operation.

Field names follow Python conventions and carry the wire name as alias, so a
validated model dumped with ``by_alias=True`` and ``exclude_unset=True`` reproduces
the service's payload; defaults such as an omitted ``#text`` are not written back.
Numbers the service encodes as strings are declared as ``NumericString``: they
validate into ``int`` and serialize back into their string form.
"""

from typing import Annotated, Any, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    StrictInt,
)


def _parse_numeric_string(value: Any) -> int:
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise ValueError("expected a string of decimal digits")
    return int(value)


def _to_decimal_string(value: int) -> str:
    return str(value)


def _check_web_url(value: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError("expected an http(s) URL")
    return value


NumericString = Annotated[
    int,
    BeforeValidator(_parse_numeric_string),
    PlainSerializer(_to_decimal_string, return_type=str),
]
WebUrl = Annotated[str, AfterValidator(_check_web_url)]


class _Schema(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# Shared building blocks


class CorrectedText(_Schema):
    """A submitted value as echoed back by the service, flagged if it was corrected."""

    # The service omits "#text" when the submitted value was empty.
    text: str = Field(default="", alias="#text")
    corrected: str

    @property
    def was_corrected(self) -> bool:
        return self.corrected == "1"


class IgnoredMessage(_Schema):
    text: str = Field(default="", alias="#text")
    code: str

    @property
    def is_ignored(self) -> bool:
        return self.code != "0"


class PageInfo(_Schema):
    """Pagination metadata of the user statistics queries."""

    user: str
    total_pages: NumericString = Field(alias="totalPages")
    page: NumericString
    per_page: NumericString = Field(alias="perPage")
    total: NumericString

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages


class ArtistRef(_Schema):
    name: str
    url: WebUrl
    mbid: str


# auth.getSession


class Session(_Schema):
    name: str
    key: str
    subscriber: StrictInt


class GetSessionResponse(_Schema):
    session: Session


# track.scrobble


class ScrobbleCounts(_Schema):
    accepted: StrictInt
    ignored: StrictInt


class ScrobbleResult(_Schema):
    artist: CorrectedText
    album_artist: CorrectedText = Field(alias="albumArtist")
    track: CorrectedText
    album: CorrectedText
    ignored_message: IgnoredMessage = Field(alias="ignoredMessage")
    timestamp: NumericString


class Scrobbles(_Schema):
    counts: ScrobbleCounts = Field(alias="@attr")
    scrobble: ScrobbleResult


class ScrobbleResponse(_Schema):
    scrobbles: Scrobbles


# track.updateNowPlaying


class NowPlaying(_Schema):
    artist: CorrectedText
    album_artist: CorrectedText = Field(alias="albumArtist")
    track: CorrectedText
    album: CorrectedText
    ignored_message: IgnoredMessage = Field(alias="ignoredMessage")


class UpdateNowPlayingResponse(_Schema):
    nowplaying: NowPlaying


# user.getTopArtists


class TopArtists(_Schema):
    artists: list[ArtistRef] = Field(alias="artist")
    page_info: PageInfo = Field(alias="@attr")


class GetTopArtistsResponse(_Schema):
    topartists: TopArtists


# user.getTopTracks


class Image(_Schema):
    url: WebUrl = Field(alias="#text")
    size: Literal["small", "medium", "large", "extralarge"]


class TrackRank(_Schema):
    rank: NumericString


class Streamable(_Schema):
    text: str = Field(alias="#text")
    fulltrack: str


class TopTrack(_Schema):
    name: str
    playcount: NumericString
    mbid: Optional[str] = None
    url: WebUrl
    duration: NumericString
    artist: ArtistRef
    image: list[Image]
    rank: TrackRank = Field(alias="@attr")
    streamable: Streamable


class TopTracks(_Schema):
    tracks: list[TopTrack] = Field(alias="track")
    page_info: PageInfo = Field(alias="@attr")


class GetTopTracksResponse(_Schema):
    toptracks: TopTracks
