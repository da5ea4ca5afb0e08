import logging

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..agents.config import configure_logging_from_env
from ..agents.errors import QuotaExceededError, VideoNotFoundError
from . import schemas, services

configure_logging_from_env()
logger = logging.getLogger(__name__)

app = FastAPI(title="Mood Tube API")

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "origin-when-cross-origin",
    "X-XSS-Protection": "1; mode=block",
    "Content-Security-Policy": (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-eval' 'unsafe-inline' https://www.youtube.com https://www.gstatic.com; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:; "
        "media-src 'self' https://www.youtube.com; "
        "connect-src 'self' https://api.deepseek.com https://api.openai.com https://www.googleapis.com;"
    ),
}


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    if request.url.path.startswith("/api/"):
        response.headers["Cache-Control"] = "no-store, max-age=0"
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies as 400 with the message the client expects."""
    path = request.url.path
    if path == "/api/recommend":
        errors = exc.errors()
        locs = [tuple(err.get("loc", ())) for err in errors]
        # An unreadable body has no prompt either.
        if any(err.get("type") == "json_invalid" for err in errors) or any(
            loc[:2] == ("body", "prompt") or loc == ("body",) for loc in locs
        ):
            message = "Invalid recommendation prompt"
        else:
            message = "Invalid recommendation request"
    elif path == "/api/search":
        message = "Invalid search query"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/health")
def health_check():
    """Health check endpoint for Docker containers."""
    return {"status": "healthy", "service": "mood-tube"}


@app.post("/api/recommend", response_model=schemas.RecommendationResponse)
def create_recommendations(request: schemas.RecommendationRequest):
    """
    Endpoint to get music recommendations based on a natural language prompt.
    """
    try:
        return services.get_song_recommendations(request)
    except QuotaExceededError as e:
        logger.error("Recommendation rejected by LLM provider: %s", e)
        return JSONResponse(
            status_code=500,
            content={"error": "Recommendation failed", "detail": str(e)},
        )
    except Exception:
        logger.exception("Recommendation API error")
        return JSONResponse(status_code=500, content={"error": "Recommendation failed"})


@app.post("/api/search", response_model=schemas.SearchResponse)
def search_tracks(request: schemas.SearchRequest):
    try:
        return services.search_tracks(request)
    except Exception:
        logger.exception("Search API error")
        return JSONResponse(status_code=500, content={"error": "Search failed"})


@app.get("/api/tracks/{video_id}", response_model=schemas.TrackDetailsResponse)
def get_track_details(video_id: str):
    try:
        return services.get_track_details(video_id)
    except VideoNotFoundError:
        return JSONResponse(status_code=404, content={"error": "Video not found"})
    except Exception:
        logger.exception("Track details API error")
        return JSONResponse(status_code=500, content={"error": "Failed to get track details"})


@app.get("/api/tracks/{video_id}/related", response_model=schemas.SearchResponse)
def get_related_tracks(video_id: str, limit: int = Query(5, ge=1, le=50)):
    try:
        return services.get_related_tracks(video_id, limit)
    except Exception:
        logger.exception("Related tracks API error")
        return JSONResponse(status_code=500, content={"error": "Failed to get related tracks"})
