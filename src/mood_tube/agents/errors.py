# src/mood_tube/agents/errors.py
"""Failures raised by the recommendation pipeline.

Only ``InvalidPromptError`` and ``QuotaExceededError`` carry messages meant
for end users; everything else is reported to callers as a generic failure.
"""


class MoodTubeError(Exception):
    """Base class for all pipeline failures."""

    default_message = "Mood Tube request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class InvalidPromptError(MoodTubeError):
    default_message = "Invalid recommendation prompt"


class KeywordGenerationError(MoodTubeError):
    default_message = "Failed to generate music recommendations"


class QuotaExceededError(KeywordGenerationError):
    default_message = "Insufficient LLM API balance. Please top up to use this feature."


class ResponseParseError(MoodTubeError):
    default_message = "Failed to parse AI response JSON"


class TrackSearchError(MoodTubeError):
    default_message = "Failed to search music tracks"


class TrackDetailsError(MoodTubeError):
    default_message = "Failed to get track details"


class VideoNotFoundError(TrackDetailsError):
    default_message = "Video not found"


class RelatedTracksError(MoodTubeError):
    default_message = "Failed to get related tracks"
