"""MCP tool handlers for worker clock-in and clock-out."""

import logging
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from api.client import TIME_TRACKING_CURRENT_PATH, FieldOpsApiClient, api_session
from config import get_config
from models.errors import ToolError, create_internal_error
from schemas.entities import GeoPoint, TimeEntry
from schemas.job_reports import ClockRequest
from utils.notifications import build_error_response, build_success_response
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.query_cache import QueryCache, invalidate_after_mutation

logger = logging.getLogger(__name__)


def _default_location() -> GeoPoint:
    config = get_config()
    return GeoPoint(lat=config.default_lat, lng=config.default_lng)


def _clock(
    name: str,
    args: Optional[Dict[str, Any]],
    client: Optional[FieldOpsApiClient],
    cache: Optional[QueryCache],
    call: Callable[[FieldOpsApiClient, GeoPoint], TimeEntry],
    success_title: str,
    failure_title: str,
) -> Dict[str, Any]:
    try:
        try:
            request = ClockRequest.model_validate(args or {})
        except ValidationError as e:
            raise map_pydantic_validation_error(e)

        location = request.location or _default_location()

        with api_session(client) as api:
            entry = call(api, location)

        invalidated = invalidate_after_mutation(cache, (TIME_TRACKING_CURRENT_PATH,))
        logger.info("%s: time entry %s for worker %s", name, entry.id, entry.worker_id)

        return build_success_response(success_title, invalidated, entry=entry.to_wire())

    except ToolError as e:
        return build_error_response(e, failure_title)

    except Exception as e:
        logger.exception("Unexpected error in %s", name)
        return build_error_response(create_internal_error(str(e), original_error=e), failure_title)


def clock_in(
    args: Optional[Dict[str, Any]] = None,
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """
    Open a time entry for the authenticated worker.

    ``location`` ({lat, lng}) is optional and defaults to the configured
    coordinates.
    """
    return _clock(
        "clock_in",
        args,
        client,
        cache,
        lambda api, location: api.clock_in(location),
        "Clocked in successfully",
        "Failed to clock in",
    )


def clock_out(
    args: Optional[Dict[str, Any]] = None,
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """Close the authenticated worker's open time entry."""
    return _clock(
        "clock_out",
        args,
        client,
        cache,
        lambda api, location: api.clock_out(location),
        "Clocked out successfully",
        "Failed to clock out",
    )
