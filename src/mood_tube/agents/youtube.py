"""
Search YouTube's music category and look up per-video details.

Search results only carry snippet data, so tracks built from them have a
zero duration and a placeholder popularity until get_track_details is used.
"""
import logging
import random
import re
from typing import Optional

import httpx

from .config import MUSIC_CATEGORY_ID, YOUTUBE_API_KEY, YOUTUBE_API_URL, YOUTUBE_TIMEOUT
from .errors import RelatedTracksError, TrackDetailsError, TrackSearchError, VideoNotFoundError
from .models import Track, TrackDetails

logger = logging.getLogger(__name__)

# "Artist - Song", "Artist: Song", "Artist – Song"
_ARTIST_PATTERNS = [
    re.compile(r"^(.+?)\s*[-–]\s*(.+)$"),
    re.compile(r"^(.+?)\s*:\s*(.+)$"),
    re.compile(r"^(.+?)\s*–\s*(.+)$"),
]

_DURATION = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def extract_artist_from_title(title: str) -> str:
    """Best-effort artist name from a video title.

    The shorter side of the first matching separator is taken as the artist,
    the left side on a tie. Titles without a separator fall back to their
    first three words.
    """
    for pattern in _ARTIST_PATTERNS:
        match = pattern.match(title)
        if match:
            left, right = match.group(1), match.group(2)
            return left.strip() if len(left) <= len(right) else right.strip()

    return " ".join(title.split(" ")[:3])


def parse_duration(duration_str: Optional[str]) -> int:
    """Parse ISO 8601 duration (PT1H2M3S) to seconds."""
    match = _DURATION.match(duration_str or "")
    if not match:
        return 0
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def _item_to_track(item: dict) -> Optional[Track]:
    """Convert a search.list item to a Track, or None if it is not a video."""
    video_id = (item.get("id") or {}).get("videoId")
    snippet = item.get("snippet")
    if not video_id or not snippet:
        return None

    title = snippet.get("title") or ""
    thumbnails = snippet.get("thumbnails") or {}
    return Track(
        id=video_id,
        title=title,
        artist=extract_artist_from_title(title),
        duration=0,
        youtube_id=video_id,
        thumbnail=(thumbnails.get("high") or {}).get("url", ""),
        genre=[],
        mood=[],
        popularity=random.randrange(100),
    )


def _search(params: dict) -> list[Track]:
    client = httpx.Client(timeout=YOUTUBE_TIMEOUT)
    try:
        resp = client.get(
            f"{YOUTUBE_API_URL}/search",
            params={
                "part": "snippet",
                "type": "video",
                "videoCategoryId": MUSIC_CATEGORY_ID,
                "key": YOUTUBE_API_KEY,
                **params,
            },
        )
        resp.raise_for_status()
        items = resp.json().get("items") or []
    finally:
        client.close()

    tracks = []
    for item in items:
        track = _item_to_track(item)
        if track is not None:
            tracks.append(track)
    return tracks


def _log_api_error(e: Exception, context: str) -> None:
    if isinstance(e, httpx.HTTPStatusError) and e.response.status_code == 403:
        logger.error("YouTube API quota exceeded (%s)", context)
    else:
        logger.error("YouTube API error (%s): %s", context, e)


def search_music_tracks(query: str, max_results: int = 10) -> list[Track]:
    """Search the music category for videos matching a query.

    Args:
        query: Search query string.
        max_results: Max number of results to request (1-50).

    Returns:
        Tracks in relevance order. Items without a video id or snippet are skipped.

    Raises:
        TrackSearchError: on any transport or API failure.
    """
    try:
        tracks = _search(
            {
                "q": query,
                "maxResults": max(1, min(max_results, 50)),
                "order": "relevance",
            }
        )
    except (httpx.HTTPError, ValueError) as e:
        _log_api_error(e, f"search {query!r}")
        raise TrackSearchError() from e

    logger.info("Found %d tracks for query: %s", len(tracks), query)
    return tracks


def get_related_tracks(video_id: str, max_results: int = 5) -> list[Track]:
    """Music videos related to the given video."""
    try:
        return _search(
            {
                "relatedToVideoId": video_id,
                "maxResults": max(1, min(max_results, 50)),
            }
        )
    except (httpx.HTTPError, ValueError) as e:
        _log_api_error(e, f"related to {video_id}")
        raise RelatedTracksError() from e


def get_track_details(video_id: str) -> TrackDetails:
    """Fetch duration and view count for one video.

    Raises:
        VideoNotFoundError: the id does not resolve to a video.
        TrackDetailsError: on any transport or API failure.
    """
    client = httpx.Client(timeout=YOUTUBE_TIMEOUT)
    try:
        resp = client.get(
            f"{YOUTUBE_API_URL}/videos",
            params={
                "part": "contentDetails,statistics",
                "id": video_id,
                "key": YOUTUBE_API_KEY,
            },
        )
        resp.raise_for_status()
        items = resp.json().get("items") or []
    except (httpx.HTTPError, ValueError) as e:
        _log_api_error(e, f"details for {video_id}")
        raise TrackDetailsError() from e
    finally:
        client.close()

    if not items:
        logger.warning("Video not found: %s", video_id)
        raise VideoNotFoundError()

    video = items[0]
    content = video.get("contentDetails") or {}
    stats = video.get("statistics") or {}
    return TrackDetails(
        duration=parse_duration(content.get("duration") or "PT0S"),
        popularity=int(stats.get("viewCount") or 0),
    )
