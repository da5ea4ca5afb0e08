from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SEARCH_TYPES = ("artist", "song", "genre", "mood")


class Track(BaseModel):
    """A playable search result. Identity is the ``id`` field."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    artist: str
    duration: int = 0
    youtube_id: str
    thumbnail: str = ""
    genre: List[str] = Field(default_factory=list)
    mood: List[str] = Field(default_factory=list)
    popularity: int = 0
    album: Optional[str] = None


class TrackDetails(BaseModel):
    duration: int
    popularity: int


class RecommendationRequest(BaseModel):
    prompt: str
    user_id: str = "demo-user"
    limit: int = Field(10, ge=1)
    include_genres: Optional[List[str]] = None
    exclude_genres: Optional[List[str]] = None
    mood: Optional[str] = None

    @field_validator("prompt")
    def prompt_must_not_be_blank(cls, v: str):
        if not v or not v.strip():
            raise ValueError("prompt must be a non-empty string")
        return v


class KeywordPlan(BaseModel):
    """Search plan produced by the language model for one request."""

    keywords: List[str] = Field(default_factory=list)
    reasoning: str = ""
    tags: List[str] = Field(default_factory=list)
    search_type: str = "song"


class RecommendationResult(BaseModel):
    tracks: List[Track]
    reasoning: str = ""
    keywords: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    search_type: str = "song"
    prompt: str
    timestamp: datetime
