# src/mood_tube/agents/aggregator.py
import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Optional

from .config import SEARCH_MAX_WORKERS
from .models import Track
from .youtube import search_music_tracks

logger = logging.getLogger(__name__)

SearchFn = Callable[[str, int], list[Track]]


def merge_unique(result_lists: list[list[Track]], limit: int) -> list[Track]:
    """
    Concatenates per-keyword results in order, keeps the first track seen for
    each id and truncates to ``limit``.
    """
    unique: dict[str, Track] = {}
    for tracks in result_lists:
        for track in tracks:
            if track.id not in unique:
                unique[track.id] = track
    return list(unique.values())[:limit]


def search_and_merge(
    keywords: list[str],
    limit: int,
    search: Optional[SearchFn] = None,
    max_workers: Optional[int] = None,
) -> list[Track]:
    """
    Runs one search per keyword and merges the results.

    Each keyword asks for ceil(limit / len(keywords)) tracks. Searches run on a
    thread pool, but results are re-assembled in keyword order before
    deduplication, so completion order never affects the output. A keyword
    whose search fails contributes nothing; the others still count.

    Args:
        keywords: Search keywords, in priority order.
        limit: Maximum number of tracks to return.
        search: Single-keyword search function, defaults to the YouTube search.
        max_workers: Thread pool size, defaults to SEARCH_MAX_WORKERS.

    Returns:
        At most ``limit`` tracks with distinct ids.
    """
    if not keywords or limit <= 0:
        return []

    search = search or search_music_tracks
    per_keyword = math.ceil(limit / len(keywords))
    results: list[list[Track]] = [[] for _ in keywords]
    workers = max(1, min(max_workers or SEARCH_MAX_WORKERS, len(keywords)))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(search, keyword, per_keyword): index
            for index, keyword in enumerate(keywords)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                logger.warning("Failed to search for keyword %r: %s", keywords[index], e)

    merged = merge_unique(results, limit)
    logger.info(
        "Merged %d unique tracks from %d keywords (limit=%d)",
        len(merged),
        len(keywords),
        limit,
    )
    return merged
