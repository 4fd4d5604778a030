"""
REST API for Semantic Matcher.
Wraps a SemanticMatcher in a small set of JSON endpoints.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.config import VERSION, Settings, get_settings
from ..core.matcher import SemanticMatcher
from ..core.quality import distance_guide_as_dict
from ..util.logging import logger
from .schemas import (
    ErrorResponse,
    HealthResponse,
    NotFoundResponse,
    ResetResponse,
    SearchResponseModel,
    StatsResponse,
)

AVAILABLE_ENDPOINTS = [
    "GET /",
    "POST /api/search",
    "GET /api/stats",
    "GET /api/health",
    "POST /api/reset",
]

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=error, message=message).model_dump())


def get_matcher(request: Request) -> SemanticMatcher:
    return request.app.state.matcher


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_search_payload(payload: Any, settings: Settings):
    """
    Validate a search request body.

    Returns:
        (query, top_k) on success, or a 400 JSONResponse describing the problem
    """
    if not isinstance(payload, dict):
        return _error(400, "Invalid request body", "Request body must be a JSON object")

    query = payload.get("query")
    if query is None or query == "":
        return _error(400, "Missing required field: query",
                      'Request body must include a "query" field with search text')

    if not isinstance(query, str) or not query.strip():
        return _error(400, "Invalid query format", "Query must be a non-empty string")

    top_k = payload.get("topK")
    if top_k is None:
        top_k = settings.default_top_k
    elif isinstance(top_k, bool) or not isinstance(top_k, int) or not 1 <= top_k <= settings.max_top_k:
        return _error(400, "Invalid topK value", f"topK must be a number between 1 and {settings.max_top_k}")

    return query, top_k


@router.post("/api/search", response_model=SearchResponseModel)
def search_endpoint(
    payload: Any = Body(default=None),
    matcher: SemanticMatcher = Depends(get_matcher),
    settings: Settings = Depends(get_app_settings),
):
    """Semantic search. Body: {"query": "search text", "topK": 5}."""
    parsed = parse_search_payload(payload, settings)
    if isinstance(parsed, JSONResponse):
        return parsed
    query, top_k = parsed

    logger.info("Search request received", {"query": query, "top_k": top_k})

    try:
        results = matcher.search(query, top_k)
    except Exception as e:
        logger.error("Search endpoint error", {"error": str(e)})
        return _error(500, "Search failed", str(e))

    logger.info("Search completed successfully", {"query": query, "result_count": results.result_count})
    return results.to_dict()


@router.get("/api/stats", response_model=StatsResponse)
def stats_endpoint(matcher: SemanticMatcher = Depends(get_matcher)):
    """Collection statistics."""
    try:
        return matcher.get_stats()
    except Exception as e:
        logger.error("Stats endpoint error", {"error": str(e)})
        return _error(500, "Failed to retrieve stats", str(e))


@router.get("/api/health", response_model=HealthResponse, response_model_exclude_none=True)
def health_endpoint(matcher: SemanticMatcher = Depends(get_matcher)):
    """Check ChromaDB connectivity."""
    try:
        is_healthy = matcher.health_check()
    except Exception as e:
        logger.error("Health check error", {"error": str(e)})
        return JSONResponse(status_code=503, content=HealthResponse(
            status="unhealthy", message="Health check failed", error=str(e), timestamp=_now(),
        ).model_dump())

    if is_healthy:
        return HealthResponse(status="healthy", message="Semantic matcher is operational", timestamp=_now())

    return JSONResponse(status_code=503, content=HealthResponse(
        status="unhealthy", message="ChromaDB connection failed", timestamp=_now(),
    ).model_dump(exclude_none=True))


@router.post("/api/reset", response_model=ResetResponse)
def reset_endpoint(
    matcher: SemanticMatcher = Depends(get_matcher),
    settings: Settings = Depends(get_app_settings),
):
    """Recreate and reload the collection (development only)."""
    if not settings.is_development:
        return _error(403, "Reset endpoint disabled", "Collection reset is only available in development mode")

    try:
        logger.info("Collection reset requested")
        matcher.reset()
        logger.info("Collection reset completed")
    except Exception as e:
        logger.error("Reset endpoint error", {"error": str(e)})
        return _error(500, "Reset failed", str(e))

    return ResetResponse(message="Collection reset successfully", timestamp=_now())


@router.get("/")
def api_description(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """API documentation."""
    return {
        "name": "Semantic Matcher API",
        "version": VERSION,
        "description": "Semantic matching service using ChromaDB",
        "endpoints": {
            "search": {
                "method": "POST",
                "path": "/api/search",
                "description": "Perform semantic search",
                "body": {
                    "query": "string (required) - Search text",
                    "topK": f"number (optional) - Number of results (1-{settings.max_top_k}, default: {settings.default_top_k})",
                },
            },
            "stats": {"method": "GET", "path": "/api/stats", "description": "Get collection statistics"},
            "health": {"method": "GET", "path": "/api/health", "description": "Check service health"},
            "reset": {"method": "POST", "path": "/api/reset", "description": "Reset collection (development only)"},
        },
        "distanceGuide": {
            "description": "Semantic similarity interpretation",
            "ranges": distance_guide_as_dict(),
        },
        "examples": {
            "search": {
                "url": "/api/search",
                "body": {"query": "JavaScript developer with React experience", "topK": 3},
            }
        },
        "config": {
            "environment": settings.environment,
            "defaultTopK": settings.default_top_k,
            "maxTopK": settings.max_top_k,
        },
    }


def create_app(
    settings: Optional[Settings] = None,
    matcher: Optional[SemanticMatcher] = None,
    initialize_on_startup: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    The matcher is initialized in the lifespan handler; a failure there
    aborts startup.
    """
    settings = settings or (matcher.settings if matcher is not None else get_settings())
    logger.configure(settings.log_level)
    matcher = matcher or SemanticMatcher(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if initialize_on_startup:
            logger.info("Starting Semantic Matcher API server")
            try:
                await run_in_threadpool(matcher.initialize)
            except Exception as e:
                logger.error("Failed to start server", {"error": str(e)})
                raise
            logger.info("API server started successfully", {
                "port": settings.port,
                "environment": settings.environment,
            })
        yield
        logger.info("HTTP server closed")

    app = FastAPI(
        title="Semantic Matcher API",
        version=VERSION,
        description="Semantic matching service using ChromaDB",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.matcher = matcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.debug("HTTP Request", {
            "method": request.method,
            "url": str(request.url.path),
            "user_agent": request.headers.get("user-agent"),
        })
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request body", "Request body must be valid JSON")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            content = NotFoundResponse(
                error="Endpoint not found",
                message=f"{request.method} {request.url.path} is not a valid endpoint",
                available_endpoints=AVAILABLE_ENDPOINTS,
            ).model_dump(by_alias=True)
            return JSONResponse(status_code=404, content=content)
        return _error(exc.status_code, "Request failed", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled application error", {
            "error": str(exc),
            "url": str(request.url.path),
            "method": request.method,
        })
        return _error(500, "Internal server error", "An unexpected error occurred")

    app.include_router(router)
    return app


def run(settings: Optional[Settings] = None) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = settings or get_settings()
    app = create_app(settings)

    print("\nTest the API with:")
    print(f"curl -X POST http://{settings.host}:{settings.port}/api/search \\")
    print('  -H "Content-Type: application/json" \\')
    print('  -d \'{"query": "React developer", "topK": 2}\'\n')

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.replace("warn", "warning"))


if __name__ == "__main__":
    run()
