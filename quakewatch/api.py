"""Earthquake API - FastAPI service for the PHIVOLCS earthquake feed.

Serves the scraped record set, the latest event, and summary statistics.
Every data endpoint reads through the shared FetchOrchestrator, so all of
them are served from the same cache.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quakewatch import __version__
from quakewatch.core.config import Config, validate_config
from quakewatch.core.record import record_to_dict, records_to_dicts
from quakewatch.core.stats import latest, stats_to_dict, summarize
from quakewatch.orchestrator import FetchOrchestrator, UpstreamUnavailableError
from quakewatch.shell.config_loader import load_config, load_config_from_env


logger = logging.getLogger(__name__)


# ===== Response Models =====

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    cacheAgeSeconds: float | None = None


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None
    timestamp: str | None = None


# ===== Helper Functions =====

def _iso(moment: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _error_response(status_code: int, error: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
    )


def _get_config() -> Config:
    """Load configuration from file or environment."""
    if os.environ.get("CONFIG_PATH"):
        return load_config(os.environ["CONFIG_PATH"])
    return load_config_from_env()


def _check_config(config: Config) -> None:
    """Log config warnings and reject invalid configuration.

    Raises:
        ValueError: If the configuration has critical errors
    """
    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config warning: %s: %s", warning.field, warning.message)

    if not result.valid:
        details = "; ".join(f"{e.field}: {e.message}" for e in result.critical_errors)
        raise ValueError(f"Invalid configuration: {details}")


def get_orchestrator(request: Request) -> FetchOrchestrator:
    """Dependency returning the app's shared orchestrator."""
    return request.app.state.orchestrator


# ===== Application Factory =====

def create_app(
    config: Config | None = None,
    orchestrator: FetchOrchestrator | None = None,
) -> FastAPI:
    """Build the API application.

    Args:
        config: Application configuration (loaded from file/env if omitted)
        orchestrator: Shared orchestrator (created from config if omitted)

    Returns:
        Configured FastAPI app
    """
    if config is None:
        config = orchestrator.config if orchestrator is not None else _get_config()

    _check_config(config)

    app = FastAPI(
        title="PHIVOLCS Earthquake Monitor API",
        description="Serves recent Philippine earthquake data scraped from PHIVOLCS",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.orchestrator = orchestrator or FetchOrchestrator(config)

    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    """Attach the API endpoints to an app."""

    @app.get("/api/health", response_model=HealthResponse)
    def health_check(orchestrator: FetchOrchestrator = Depends(get_orchestrator)):
        """Liveness probe with cache age."""
        now = _now()
        return HealthResponse(
            status="OK",
            timestamp=_iso(now),
            cacheAgeSeconds=orchestrator.cache.age_seconds(now),
        )

    @app.get("/api/earthquakes")
    def get_earthquakes(orchestrator: FetchOrchestrator = Depends(get_orchestrator)):
        """Get the full record set, newest first."""
        try:
            record_set = orchestrator.get_record_set()
        except UpstreamUnavailableError as e:
            return _error_response(500, ErrorResponse(
                error="Failed to scrape earthquake data",
                message=str(e),
                timestamp=_iso(_now()),
            ))

        body: dict[str, Any] = {
            "data": records_to_dicts(record_set.records),
            "cached": record_set.cached,
            "lastUpdate": _iso(record_set.last_update),
        }
        if record_set.error:
            body["error"] = record_set.error
        if not record_set.cached:
            body["count"] = record_set.count

        return body

    @app.get("/api/earthquakes/latest")
    def get_latest_earthquake(orchestrator: FetchOrchestrator = Depends(get_orchestrator)):
        """Get the most recent earthquake."""
        try:
            record_set = orchestrator.get_record_set()
        except UpstreamUnavailableError as e:
            logger.error("Error getting latest earthquake: %s", e)
            return _error_response(500, ErrorResponse(
                error="Failed to get latest earthquake data",
                message=str(e),
            ))

        record = latest(record_set.records)
        if record is None:
            return _error_response(404, ErrorResponse(error="No earthquake data available"))

        return {
            "data": record_to_dict(record),
            "lastUpdate": _iso(record_set.last_update),
        }

    @app.get("/api/earthquakes/stats")
    def get_statistics(orchestrator: FetchOrchestrator = Depends(get_orchestrator)):
        """Get summary statistics for the current record set."""
        try:
            record_set = orchestrator.get_record_set()
        except UpstreamUnavailableError as e:
            logger.error("Error calculating statistics: %s", e)
            return _error_response(500, ErrorResponse(
                error="Failed to calculate statistics",
                message=str(e),
            ))

        stats = summarize(record_set.records)
        if stats is None:
            return {"error": "No data available for statistics"}

        return {
            "data": stats_to_dict(stats),
            "lastUpdate": _iso(record_set.last_update),
        }
