"""
Tests for the YouTube search client.
"""
from unittest.mock import MagicMock, patch

import httpx
import pytest

from mood_tube.agents.errors import (
    RelatedTracksError,
    TrackDetailsError,
    TrackSearchError,
    VideoNotFoundError,
)
from mood_tube.agents.youtube import (
    extract_artist_from_title,
    get_related_tracks,
    get_track_details,
    parse_duration,
    search_music_tracks,
)


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status = MagicMock()
    return resp


def _search_item(video_id="test123", title="Test Artist - Test Song"):
    return {
        "id": {"videoId": video_id},
        "snippet": {
            "title": title,
            "thumbnails": {"high": {"url": f"https://img.youtube.com/vi/{video_id}/hq.jpg"}},
        },
    }


class TestExtractArtist:
    def test_hyphen_shorter_side(self):
        assert extract_artist_from_title("Adele - Hello") == "Adele"
        assert extract_artist_from_title("Bohemian Rhapsody (Remastered) - Queen") == "Queen"

    def test_colon(self):
        assert extract_artist_from_title("Muse: Uprising") == "Muse"

    def test_en_dash(self):
        assert extract_artist_from_title("Daft Punk – Around the World") == "Daft Punk"

    def test_no_separator_uses_first_three_words(self):
        assert extract_artist_from_title("A Song With No Separator Words Here") == "A Song With"

    def test_short_title(self):
        assert extract_artist_from_title("Hello") == "Hello"


class TestParseDuration:
    def test_parse_duration(self):
        assert parse_duration("PT3M30S") == 210
        assert parse_duration("PT1H2M3S") == 3723
        assert parse_duration("PT45S") == 45
        assert parse_duration("PT1H") == 3600

    def test_zero_and_invalid(self):
        assert parse_duration("PT0S") == 0
        assert parse_duration("garbage") == 0
        assert parse_duration("") == 0
        assert parse_duration(None) == 0


class TestSearchMusicTracks:
    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_search_success(self, MockClient):
        mock_client = MockClient.return_value
        mock_client.get.return_value = _response({"items": [_search_item()]})

        tracks = search_music_tracks("test query", 10)

        assert len(tracks) == 1
        track = tracks[0]
        assert track.id == "test123"
        assert track.youtube_id == "test123"
        assert track.title == "Test Artist - Test Song"
        assert track.artist == "Test Song"
        assert track.duration == 0
        assert track.genre == []
        assert track.mood == []
        assert track.thumbnail == "https://img.youtube.com/vi/test123/hq.jpg"
        assert 0 <= track.popularity < 100

        params = mock_client.get.call_args.kwargs["params"]
        assert params["q"] == "test query"
        assert params["videoCategoryId"] == "10"
        assert params["order"] == "relevance"
        assert params["type"] == "video"
        assert params["maxResults"] == 10
        mock_client.close.assert_called_once()

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_items_without_id_or_snippet_are_skipped(self, MockClient):
        mock_client = MockClient.return_value
        mock_client.get.return_value = _response(
            {
                "items": [
                    {"id": {"channelId": "UC123"}, "snippet": {"title": "A channel"}},
                    {"id": {"videoId": "nosnippet"}},
                    _search_item("ok1", "Song"),
                ]
            }
        )

        tracks = search_music_tracks("test", 5)

        assert [t.id for t in tracks] == ["ok1"]
        assert tracks[0].thumbnail == "https://img.youtube.com/vi/ok1/hq.jpg"

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_empty_results(self, MockClient):
        MockClient.return_value.get.return_value = _response({"items": []})
        assert search_music_tracks("nothing", 10) == []

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_transport_error_raises(self, MockClient):
        MockClient.return_value.get.side_effect = httpx.ConnectError("boom")

        with pytest.raises(TrackSearchError, match="Failed to search music tracks"):
            search_music_tracks("test", 10)

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_failed_search_is_not_retried(self, MockClient):
        mock_client = MockClient.return_value
        mock_client.get.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(TrackSearchError):
            search_music_tracks("test", 10)

        assert mock_client.get.call_count == 1

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_status_error_raises(self, MockClient):
        request = httpx.Request("GET", "https://www.googleapis.com/youtube/v3/search")
        resp = MagicMock()
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "quota", request=request, response=httpx.Response(403, request=request)
        )
        MockClient.return_value.get.return_value = resp

        with pytest.raises(TrackSearchError):
            search_music_tracks("test", 10)


class TestTrackDetails:
    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_get_track_details(self, MockClient):
        MockClient.return_value.get.return_value = _response(
            {
                "items": [
                    {
                        "contentDetails": {"duration": "PT4M13S"},
                        "statistics": {"viewCount": "1000000"},
                    }
                ]
            }
        )

        details = get_track_details("test123")

        assert details.duration == 253
        assert details.popularity == 1000000

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_missing_fields_default_to_zero(self, MockClient):
        MockClient.return_value.get.return_value = _response({"items": [{}]})

        details = get_track_details("test123")

        assert details.duration == 0
        assert details.popularity == 0

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_video_not_found(self, MockClient):
        MockClient.return_value.get.return_value = _response({"items": []})

        with pytest.raises(VideoNotFoundError, match="Video not found"):
            get_track_details("nonexistent")

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_transport_error_is_not_not_found(self, MockClient):
        MockClient.return_value.get.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(TrackDetailsError) as exc_info:
            get_track_details("test123")

        assert not isinstance(exc_info.value, VideoNotFoundError)


class TestRelatedTracks:
    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_get_related_tracks(self, MockClient):
        mock_client = MockClient.return_value
        mock_client.get.return_value = _response({"items": [_search_item("related123")]})

        tracks = get_related_tracks("test123", 5)

        assert len(tracks) == 1
        assert tracks[0].id == "related123"
        params = mock_client.get.call_args.kwargs["params"]
        assert params["relatedToVideoId"] == "test123"
        assert params["videoCategoryId"] == "10"

    @patch("mood_tube.agents.youtube.httpx.Client")
    def test_related_error(self, MockClient):
        MockClient.return_value.get.side_effect = httpx.ConnectError("boom")

        with pytest.raises(RelatedTracksError):
            get_related_tracks("test123")
