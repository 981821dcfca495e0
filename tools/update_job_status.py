"""
MCP tool handler for update_job_status.

Used by workers to start and complete their jobs (and by staff to cancel).
When the caller supplies the job's current status, the lifecycle policy is
checked before anything is sent.
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
from models.status import JobStatus
from schemas.jobs import UpdateJobStatusRequest
from utils.job_lifecycle import check_transition_or_raise
from utils.notifications import build_error_response, build_success_response
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.query_cache import QueryCache, invalidate_after_mutation

logger = logging.getLogger(__name__)

SUCCESS_TITLE = "Job status updated successfully"
FAILURE_TITLE = "Failed to update job status"
INVALIDATED_PATHS = (JOBS_PATH, MY_JOBS_PATH, DASHBOARD_METRICS_PATH)

ASSIGNED_STATUS_MESSAGE = "Use assign_job to assign a worker to a job"


def update_job_status(
    args: Dict[str, Any],
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """
    Move a job to a new lifecycle status.

    Args:
        args: Dictionary containing parameters:
            - job_id (int): Job to update (positive integer)
            - status (str): Target status; ``assigned`` is refused, use
              assign_job instead
            - current_status (str, optional): Known current status; enables
              the transition policy check
            - force (bool, optional): Allow a policy-violating transition
              with a warning (default: False)
        client: Optional API client (default: configured client)
        cache: Optional read cache to invalidate

    Returns:
        Success envelope with ``job``, ``previous_status``, ``status`` and
        ``warnings``; failure envelope with the structured error.
    """
    try:
        try:
            request = UpdateJobStatusRequest.model_validate(args)
        except ValidationError as e:
            raise map_pydantic_validation_error(e)

        # assigned requires assignedTo, which this PATCH never carries
        if request.status == JobStatus.ASSIGNED:
            raise create_validation_error(ASSIGNED_STATUS_MESSAGE)

        warnings = []
        if request.current_status is not None:
            result = check_transition_or_raise(request.current_status, request.status, request.force)
            warnings = result.warnings
            for warning in warnings:
                logger.warning("Job %s: %s", request.job_id, warning)

        with api_session(client) as api:
            job = api.update_job(request.job_id, {"status": request.status.value})

        invalidated = invalidate_after_mutation(cache, INVALIDATED_PATHS)
        logger.info("Job %s moved to %s", request.job_id, request.status.value)

        return build_success_response(
            SUCCESS_TITLE,
            invalidated,
            job=job.to_wire(),
            previous_status=request.current_status.value if request.current_status else None,
            status=request.status.value,
            warnings=warnings,
        )

    except ToolError as e:
        return build_error_response(e, FAILURE_TITLE)

    except Exception as e:
        logger.exception("Unexpected error in update_job_status")
        return build_error_response(create_internal_error(str(e), original_error=e), FAILURE_TITLE)
