"""Shared fixtures: a client configuration, a scripted transport, and sample payloads."""

import json

import pytest

from lastfm_client.api.transport import TransportResponse
from lastfm_client.models.config import ClientConfig


class FakeTransport:
    """Records requests and answers them with scripted responses, in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.closed = False

    async def send(self, request):
        self.requests.append(request)
        return self.responses.pop(0)

    async def close(self):
        self.closed = True


def json_response(payload, status=200):
    return TransportResponse(status=status, body=json.dumps(payload))


@pytest.fixture
def config():
    return ClientConfig(
        api_key="k1", shared_secret="s1", base_url="https://lastfm.test/2.0"
    )


@pytest.fixture
def session_payload():
    return {"session": {"name": "alice", "key": "SESSION-KEY", "subscriber": 0}}


def _corrected(text, corrected="0"):
    return {"#text": text, "corrected": corrected}


@pytest.fixture
def scrobble_payload():
    return {
        "scrobbles": {
            "@attr": {"accepted": 1, "ignored": 0},
            "scrobble": {
                "artist": _corrected("Radiohead"),
                "albumArtist": {"corrected": "0"},
                "track": _corrected("Creep"),
                "album": _corrected("Pablo Honey"),
                "ignoredMessage": {"#text": "", "code": "0"},
                "timestamp": "1700000000",
            },
        }
    }


@pytest.fixture
def now_playing_payload():
    return {
        "nowplaying": {
            "artist": _corrected("Paramore"),
            "albumArtist": {"corrected": "0"},
            "track": _corrected("Misery Business", corrected="1"),
            "album": {"corrected": "0"},
            "ignoredMessage": {"#text": "", "code": "0"},
        }
    }


def page_attr(user="alice", page="1", total_pages="1", per_page="5", total="2"):
    return {
        "user": user,
        "totalPages": total_pages,
        "page": page,
        "perPage": per_page,
        "total": total,
    }


def artist_entry(name):
    return {
        "name": name,
        "url": f"https://www.last.fm/music/{name}",
        "mbid": "",
    }


@pytest.fixture
def top_artists_payload():
    return {
        "topartists": {
            "artist": [artist_entry("Radiohead"), artist_entry("Portishead")],
            "@attr": page_attr(total="42"),
        }
    }


def track_entry(name, rank, playcount="12"):
    return {
        "name": name,
        "playcount": playcount,
        "mbid": "",
        "url": f"https://www.last.fm/music/Radiohead/_/{name}",
        "duration": "238",
        "artist": artist_entry("Radiohead"),
        "image": [
            {"#text": "https://lastfm.freetls.fastly.net/i/u/34s/x.png", "size": "small"},
            {"#text": "https://lastfm.freetls.fastly.net/i/u/64s/x.png", "size": "medium"},
        ],
        "@attr": {"rank": str(rank)},
        "streamable": {"#text": "0", "fulltrack": "0"},
    }


@pytest.fixture
def top_tracks_payload():
    return {
        "toptracks": {
            "track": [track_entry("Creep", 1, "40"), track_entry("Nude", 2)],
            "@attr": page_attr(),
        }
    }
