from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits the camelCase keys the browser client uses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecommendationRequest(CamelModel):
    prompt: StrictStr
    user_id: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1)
    include_genres: Optional[list[str]] = None
    exclude_genres: Optional[list[str]] = None
    mood: Optional[str] = None

    @field_validator("prompt")
    def prompt_must_not_be_blank(cls, v: str):
        if not v.strip():
            raise ValueError("prompt must be a non-empty string")
        return v


class SearchRequest(CamelModel):
    query: StrictStr
    limit: Optional[int] = Field(None, ge=1, le=50)

    @field_validator("query")
    def query_must_not_be_blank(cls, v: str):
        if not v.strip():
            raise ValueError("query must be a non-empty string")
        return v


class TrackResponse(CamelModel):
    id: str
    title: str
    artist: str
    album: Optional[str] = None
    duration: int
    youtube_id: str
    thumbnail: str
    genre: list[str]
    mood: list[str]
    popularity: int


class RecommendationResponse(CamelModel):
    tracks: list[TrackResponse]
    reasoning: str
    keywords: list[str]
    tags: list[str]
    search_type: str
    prompt: str
    timestamp: datetime


class SearchResponse(CamelModel):
    tracks: list[TrackResponse]


class TrackDetailsResponse(CamelModel):
    duration: int
    popularity: int
