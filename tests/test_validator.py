"""Tests for decoding responses into the typed models."""

import copy
import json

import pytest
from pydantic import ValidationError

from lastfm_client.api.validator import (
    extract_error_envelope,
    parse_payload,
    raise_for_error_envelope,
    validate,
)
from lastfm_client.exceptions import DecodeError, LastFmApiError
from lastfm_client.models.responses import (
    GetSessionResponse,
    GetTopArtistsResponse,
    GetTopTracksResponse,
    ScrobbleResponse,
    UpdateNowPlayingResponse,
)


class TestValidSchemas:
    def test_session(self, session_payload):
        response = validate(GetSessionResponse, session_payload)

        assert response.session.key == "SESSION-KEY"
        assert response.session.name == "alice"
        assert response.session.subscriber == 0

    def test_scrobble(self, scrobble_payload):
        response = validate(ScrobbleResponse, scrobble_payload)

        assert response.scrobbles.counts.accepted == 1
        assert response.scrobbles.counts.ignored == 0
        result = response.scrobbles.scrobble
        assert result.artist.text == "Radiohead"
        assert result.album_artist.text == ""
        assert result.timestamp == 1700000000
        assert not result.ignored_message.is_ignored

    def test_now_playing(self, now_playing_payload):
        response = validate(UpdateNowPlayingResponse, now_playing_payload)

        assert response.nowplaying.track.was_corrected
        assert not response.nowplaying.artist.was_corrected

    def test_top_artists(self, top_artists_payload):
        response = validate(GetTopArtistsResponse, top_artists_payload)

        top = response.topartists
        assert [a.name for a in top.artists] == ["Radiohead", "Portishead"]
        assert top.page_info.total == 42
        assert top.page_info.page == 1
        assert top.page_info.per_page == 5
        assert not top.page_info.has_next_page

    def test_top_tracks(self, top_tracks_payload):
        response = validate(GetTopTracksResponse, top_tracks_payload)

        first = response.toptracks.tracks[0]
        assert first.playcount == 40
        assert first.duration == 238
        assert first.rank.rank == 1
        assert first.artist.name == "Radiohead"
        assert first.image[1].size == "medium"

    def test_optional_mbid_may_be_absent(self, top_tracks_payload):
        del top_tracks_payload["toptracks"]["track"][0]["mbid"]

        response = validate(GetTopTracksResponse, top_tracks_payload)

        assert response.toptracks.tracks[0].mbid is None

    def test_accepts_raw_json_text(self, session_payload):
        response = validate(GetSessionResponse, json.dumps(session_payload))

        assert response.session.key == "SESSION-KEY"

    def test_unknown_fields_are_dropped(self, session_payload):
        session_payload["session"]["extra"] = {"nested": True}

        response = validate(GetSessionResponse, session_payload)

        assert "extra" not in response.session.model_dump()

    def test_models_are_frozen(self, session_payload):
        response = validate(GetSessionResponse, session_payload)

        with pytest.raises(ValidationError):
            response.session.key = "other"


class TestRoundTrip:
    def test_numeric_strings_reencode_as_strings(self, top_artists_payload):
        response = validate(GetTopArtistsResponse, top_artists_payload)

        dumped = response.model_dump(mode="json", by_alias=True)

        assert response.topartists.page_info.total == 42
        assert dumped["topartists"]["@attr"]["total"] == "42"
        assert dumped == top_artists_payload

    def test_top_tracks_reproduce_payload(self, top_tracks_payload):
        response = validate(GetTopTracksResponse, top_tracks_payload)

        dumped = response.model_dump(mode="json", by_alias=True)

        assert dumped == top_tracks_payload

    def test_scrobble_reproduces_payload_without_defaults(self, scrobble_payload):
        response = validate(ScrobbleResponse, scrobble_payload)

        dumped = response.model_dump(mode="json", by_alias=True, exclude_unset=True)

        assert response.scrobbles.scrobble.album_artist.text == ""
        assert "#text" not in dumped["scrobbles"]["scrobble"]["albumArtist"]
        assert dumped == scrobble_payload

    def test_defaults_are_written_without_exclude_unset(self, now_playing_payload):
        response = validate(UpdateNowPlayingResponse, now_playing_payload)

        dumped = response.model_dump(mode="json", by_alias=True)

        assert dumped["nowplaying"]["album"] == {"#text": "", "corrected": "0"}
        assert response.model_dump(
            mode="json", by_alias=True, exclude_unset=True
        ) == now_playing_payload


class TestDecodeErrors:
    def test_missing_nested_field_reports_path(self, scrobble_payload):
        del scrobble_payload["scrobbles"]["@attr"]["accepted"]

        with pytest.raises(DecodeError) as exc_info:
            validate(ScrobbleResponse, scrobble_payload)

        assert exc_info.value.path == "scrobbles.@attr.accepted"
        assert "required" in exc_info.value.expectation.lower()

    def test_wrong_type(self, session_payload):
        session_payload["session"]["key"] = 123

        with pytest.raises(DecodeError) as exc_info:
            validate(GetSessionResponse, session_payload)

        assert exc_info.value.path == "session.key"

    @pytest.mark.parametrize("bad_value", ["abc", "-1", "4.2", 42, None])
    def test_failed_coercion(self, top_artists_payload, bad_value):
        top_artists_payload["topartists"]["@attr"]["total"] = bad_value

        with pytest.raises(DecodeError) as exc_info:
            validate(GetTopArtistsResponse, top_artists_payload)

        assert exc_info.value.path == "topartists.@attr.total"

    @pytest.mark.parametrize("bad_value", ["0", True, 1.5])
    def test_subscriber_must_be_a_json_integer(self, session_payload, bad_value):
        session_payload["session"]["subscriber"] = bad_value

        with pytest.raises(DecodeError) as exc_info:
            validate(GetSessionResponse, session_payload)

        assert exc_info.value.path == "session.subscriber"

    @pytest.mark.parametrize("bad_value", ["1", True])
    def test_scrobble_counts_must_be_json_integers(self, scrobble_payload, bad_value):
        scrobble_payload["scrobbles"]["@attr"]["accepted"] = bad_value

        with pytest.raises(DecodeError) as exc_info:
            validate(ScrobbleResponse, scrobble_payload)

        assert exc_info.value.path == "scrobbles.@attr.accepted"

    def test_string_count_in_json_text(self, scrobble_payload):
        scrobble_payload["scrobbles"]["@attr"]["ignored"] = "0"

        with pytest.raises(DecodeError) as exc_info:
            validate(ScrobbleResponse, json.dumps(scrobble_payload))

        assert exc_info.value.path == "scrobbles.@attr.ignored"

    def test_list_index_in_path(self, top_tracks_payload):
        top_tracks_payload["toptracks"]["track"][1]["image"][0]["size"] = "huge"

        with pytest.raises(DecodeError) as exc_info:
            validate(GetTopTracksResponse, top_tracks_payload)

        assert exc_info.value.path == "toptracks.track.1.image.0.size"

    def test_invalid_url(self, top_artists_payload):
        top_artists_payload["topartists"]["artist"][0]["url"] = "not-a-url"

        with pytest.raises(DecodeError) as exc_info:
            validate(GetTopArtistsResponse, top_artists_payload)

        assert exc_info.value.path == "topartists.artist.0.url"

    def test_all_violations_are_collected(self, scrobble_payload):
        broken = copy.deepcopy(scrobble_payload)
        del broken["scrobbles"]["@attr"]["accepted"]
        del broken["scrobbles"]["scrobble"]["timestamp"]

        with pytest.raises(DecodeError) as exc_info:
            validate(ScrobbleResponse, broken)

        assert set(exc_info.value.paths) == {
            "scrobbles.@attr.accepted",
            "scrobbles.scrobble.timestamp",
        }

    def test_wrong_root_type(self):
        with pytest.raises(DecodeError) as exc_info:
            validate(GetSessionResponse, ["not", "an", "object"])

        assert exc_info.value.path == "<root>"

    def test_invalid_json_text(self):
        with pytest.raises(DecodeError) as exc_info:
            validate(GetSessionResponse, "{not json")

        assert exc_info.value.path == "<root>"


class TestPayloadHelpers:
    def test_parse_payload(self):
        assert parse_payload('{"a": 1}') == {"a": 1}

    def test_parse_payload_rejects_html(self):
        with pytest.raises(DecodeError) as exc_info:
            parse_payload("<html>Bad Gateway</html>")

        assert exc_info.value.path == "<root>"

    def test_error_envelope(self):
        payload = {"error": 9, "message": "Invalid session key"}

        assert extract_error_envelope(payload) == (9, "Invalid session key")
        with pytest.raises(LastFmApiError) as exc_info:
            raise_for_error_envelope(payload)
        assert exc_info.value.code == 9
        assert exc_info.value.message == "Invalid session key"

    def test_regular_payload_is_not_an_envelope(self, session_payload):
        assert extract_error_envelope(session_payload) is None
        raise_for_error_envelope(session_payload)
