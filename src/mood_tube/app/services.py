from ..agents import agent_manager, youtube
from ..agents.config import DEFAULT_LIMIT
from ..agents.models import RecommendationRequest, Track
from .schemas import (
    RecommendationRequest as RecommendationPayload,
    RecommendationResponse,
    SearchRequest,
    SearchResponse,
    TrackDetailsResponse,
    TrackResponse,
)


def _to_response(tracks: list[Track]) -> list[TrackResponse]:
    return [TrackResponse(**track.model_dump()) for track in tracks]


def get_song_recommendations(payload: RecommendationPayload) -> RecommendationResponse:
    """
    Service layer function to get recommendations.
    """
    request = RecommendationRequest(
        prompt=payload.prompt,
        user_id=payload.user_id or "demo-user",
        limit=payload.limit or DEFAULT_LIMIT,
        include_genres=payload.include_genres,
        exclude_genres=payload.exclude_genres,
        mood=payload.mood,
    )
    result = agent_manager.run_recommendation_flow(request)

    return RecommendationResponse(
        tracks=_to_response(result.tracks),
        reasoning=result.reasoning,
        keywords=result.keywords,
        tags=result.tags,
        search_type=result.search_type,
        prompt=result.prompt,
        timestamp=result.timestamp,
    )


def search_tracks(payload: SearchRequest) -> SearchResponse:
    tracks = agent_manager.search_tracks(payload.query, payload.limit or DEFAULT_LIMIT)
    return SearchResponse(tracks=_to_response(tracks))


def get_track_details(video_id: str) -> TrackDetailsResponse:
    details = youtube.get_track_details(video_id)
    return TrackDetailsResponse(duration=details.duration, popularity=details.popularity)


def get_related_tracks(video_id: str, limit: int) -> SearchResponse:
    return SearchResponse(tracks=_to_response(youtube.get_related_tracks(video_id, limit)))
