"""FastAPI application exposing the developer listing and developer details."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from github_dev_aggregator.aggregation.models import AccountDetail, EnrichedAccount
from github_dev_aggregator.aggregation.service import AggregationService
from github_dev_aggregator.configuration.models import AggregatorConfig, AuthenticationMode
from github_dev_aggregator.github.exceptions import RateLimitedError, UpstreamError
from github_dev_aggregator.utils.constants import SANITIZED_ERROR_MESSAGE

logger = structlog.get_logger(__name__)


def upstream_error_body(error: UpstreamError) -> dict[str, Any]:
    """Render an upstream error as the JSON body sent to clients."""
    body: dict[str, Any] = {"error": error.error_tag, "message": error.message}
    if isinstance(error, RateLimitedError):
        if error.reset_at is not None:
            body["reset_time"] = error.reset_at.isoformat()
        if error.remaining is not None:
            body["remaining_calls"] = error.remaining
    return body


def create_app(config: AggregatorConfig, service: AggregationService | None = None) -> FastAPI:
    """Create and configure the FastAPI app."""
    aggregation_service = service or AggregationService.create(config)

    app = FastAPI(title="github-dev-aggregator API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
    )
    app.state.config = config
    app.state.service = aggregation_service

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
        """Render a classified GitHub failure with its status code and error tag."""
        logger.warning(
            "Request failed with upstream error",
            path=request.url.path,
            error_tag=exc.error_tag,
            error=exc.message,
        )
        headers: dict[str, str] = {}
        if isinstance(exc, RateLimitedError) and exc.reset_at is not None:
            headers["X-RateLimit-Reset"] = str(int(exc.reset_at.timestamp()))
        return JSONResponse(status_code=exc.status_code, content=upstream_error_body(exc), headers=headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        """Log an unclassified failure and return a sanitized 500."""
        logger.exception("Unhandled error while serving request", path=request.url.path, error_type=type(exc).__name__)
        return JSONResponse(status_code=500, content={"error": "unexpected", "message": SANITIZED_ERROR_MESSAGE})

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Report liveness and whether GitHub calls are authenticated."""
        return {
            "status": "ok",
            "authenticated": config.authentication_mode == AuthenticationMode.TOKEN,
        }

    @app.get("/developers", response_model=list[EnrichedAccount])
    async def list_developers() -> list[EnrichedAccount]:
        """Return the enriched developer listing."""
        return await aggregation_service.list_developers()

    @app.get("/user/{username}", response_model=AccountDetail)
    async def get_developer(username: str) -> AccountDetail:
        """Return one developer's profile, statistics, languages and repositories."""
        return await aggregation_service.get_developer(username)

    return app
