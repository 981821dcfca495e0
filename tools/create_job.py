"""
MCP tool handler for create_job.

Validates the job form locally, assembles the creation payload, posts it to
the backend and reports the outcome as a toast plus the cache paths that went
stale.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from api.client import (
    DASHBOARD_METRICS_PATH,
    JOBS_PATH,
    MY_JOBS_PATH,
    FieldOpsApiClient,
    api_session,
)
from models.errors import ToolError, create_internal_error, create_validation_error
from schemas.jobs import CreateJobRequest
from utils.geocoding import Geocoder
from utils.job_form import build_create_job_payload, empty_job_form
from utils.notifications import build_error_response, build_success_response
from utils.permissions import can_create_jobs
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.query_cache import QueryCache, invalidate_after_mutation

logger = logging.getLogger(__name__)

SUCCESS_TITLE = "Job created successfully"
FAILURE_TITLE = "Failed to create job"
INVALIDATED_PATHS = (JOBS_PATH, DASHBOARD_METRICS_PATH)


def invalidated_paths(payload) -> tuple:
    """Jobs created with a worker also show up in that worker's list."""
    if payload.assigned_to:
        return INVALIDATED_PATHS + (MY_JOBS_PATH,)
    return INVALIDATED_PATHS


def create_job(
    args: Dict[str, Any],
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
    geocoder: Optional[Geocoder] = None,
) -> Dict[str, Any]:
    """
    Create a job from the job form.

    Flow:
    1. Validate request shape (``form`` mapping, optional ``current_user``)
    2. If a current user is given, require admin or HR role
    3. Validate required fields and assemble the payload (no network call
       happens if this fails)
    4. POST /api/jobs
    5. Invalidate the jobs list and dashboard metrics (and my jobs when a
       worker was assigned)
    6. Return the created job and the reset form state

    Args:
        args: Dictionary containing parameters:
            - form (dict): Job form fields (title, type, priority, description,
              location, customer_name, customer_phone, estimated_duration,
              assigned_to)
            - current_user (dict, optional): Acting user record
        client: Optional API client (default: configured client)
        cache: Optional read cache to invalidate
        geocoder: Optional address resolver (default: fixed coordinates)

    Returns:
        Dictionary with structure (success case):
        {
            "success": true,
            "toast": {"title": "Job created successfully", "variant": "default"},
            "invalidated": ["/api/jobs", "/api/dashboard/metrics"],
            "job": {...},          # Created job as returned by the backend
            "payload": {...},      # Request body that was sent
            "form": {...}          # Empty form state
        }

        On failure:
        {
            "success": false,
            "toast": {"title": str, "description": str, "variant": "destructive"},
            "invalidated": [],
            "error": {"code": str, "message": str, "retryable": bool}
        }
    """
    try:
        try:
            request = CreateJobRequest.model_validate(args)
        except ValidationError as e:
            raise map_pydantic_validation_error(e)

        if request.current_user is not None and not can_create_jobs(request.current_user):
            raise create_validation_error("You do not have permission to create jobs")

        payload = build_create_job_payload(request.form, geocoder=geocoder)

        with api_session(client) as api:
            job = api.create_job(payload)

        invalidated = invalidate_after_mutation(cache, invalidated_paths(payload))
        logger.info("Created job %s (%s, %s)", job.id, job.type.value, job.priority.value)

        return build_success_response(
            SUCCESS_TITLE,
            invalidated,
            job=job.to_wire(),
            payload=payload.to_wire(),
            form=empty_job_form().model_dump(),
        )

    except ToolError as e:
        return build_error_response(e, FAILURE_TITLE)

    except Exception as e:
        logger.exception("Unexpected error in create_job")
        return build_error_response(create_internal_error(str(e), original_error=e), FAILURE_TITLE)
