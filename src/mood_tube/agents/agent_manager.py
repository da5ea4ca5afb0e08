# src/mood_tube/agents/agent_manager.py
import logging
from datetime import datetime, timezone
from typing import Optional

from openai import OpenAI

from . import config
from .aggregator import search_and_merge
from .errors import TrackDetailsError
from .keyword_generator import generate_keywords
from .models import RecommendationRequest, RecommendationResult, Track
from .youtube import get_track_details, search_music_tracks

logger = logging.getLogger(__name__)


def enrich_with_details(tracks: list[Track]) -> list[Track]:
    """
    Replaces placeholder duration and popularity with per-video details.
    Tracks whose lookup fails are kept unchanged.
    """
    enriched = []
    for track in tracks:
        try:
            details = get_track_details(track.id)
        except TrackDetailsError as e:
            logger.warning("Keeping placeholder data for %s: %s", track.id, e)
            enriched.append(track)
            continue
        enriched.append(
            track.model_copy(
                update={"duration": details.duration, "popularity": details.popularity}
            )
        )
    return enriched


def run_recommendation_flow(
    request: RecommendationRequest,
    client: Optional[OpenAI] = None,
    enrich: Optional[bool] = None,
) -> RecommendationResult:
    """
    Runs the recommendation pipeline for one request.

    The language model turns the prompt into search keywords, each keyword
    is searched in the music category, and the merged, deduplicated tracks
    are returned with the model's reasoning, tags and search type.
    """
    plan = generate_keywords(request, client=client)
    logger.info(
        "Generated %d keywords for user %s: %s",
        len(plan.keywords),
        request.user_id,
        plan.keywords,
    )

    tracks = search_and_merge(plan.keywords, request.limit)

    if enrich is None:
        enrich = config.ENRICH_TRACK_DETAILS
    if enrich:
        tracks = enrich_with_details(tracks)

    return RecommendationResult(
        tracks=tracks,
        reasoning=plan.reasoning,
        keywords=plan.keywords,
        tags=plan.tags,
        search_type=plan.search_type,
        prompt=request.prompt,
        timestamp=datetime.now(timezone.utc),
    )


def search_tracks(query: str, limit: int = config.DEFAULT_LIMIT) -> list[Track]:
    """Plain keyword search without the language model."""
    return search_music_tracks(query, max_results=limit)
