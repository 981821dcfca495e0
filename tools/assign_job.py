"""
MCP tool handlers for select_worker and assign_job.

The pending picks (job id -> worker id) are owned by the caller: each call
receives the current mapping and returns the mapping to keep.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from api.client import (
    DASHBOARD_METRICS_PATH,
    JOBS_PATH,
    MY_JOBS_PATH,
    WORKERS_PATH,
    FieldOpsApiClient,
    api_session,
)
from models.errors import ToolError, create_internal_error, create_validation_error
from schemas.jobs import AssignJobToolRequest, SelectWorkerRequest
from utils.assignments import clear_assignments, handle_assign_job, handle_worker_select
from utils.notifications import build_error_response, build_success_response
from utils.permissions import can_assign_jobs
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.query_cache import QueryCache, invalidate_after_mutation

logger = logging.getLogger(__name__)

SUCCESS_TITLE = "Job assigned successfully"
FAILURE_TITLE = "Failed to assign job"
INVALIDATED_PATHS = (JOBS_PATH, MY_JOBS_PATH, DASHBOARD_METRICS_PATH, WORKERS_PATH)


def select_worker(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Record a worker pick for a job.

    Args:
        args: Dictionary containing parameters:
            - job_id (int): Job the pick applies to
            - worker (str): ``"none"`` or a worker id
            - assignments (dict, optional): Current picks

    Returns:
        {"assignments": {job_id: worker_id, ...}, "can_assign": bool}
        or the structured error block on invalid input
    """
    try:
        try:
            request = SelectWorkerRequest.model_validate(args)
        except ValidationError as e:
            raise map_pydantic_validation_error(e)

        updated = handle_worker_select(request.assignments, request.job_id, request.worker)
        return {"assignments": updated, "can_assign": bool(updated[request.job_id])}

    except ToolError as e:
        return e.to_dict()


def assign_job(
    args: Dict[str, Any],
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """
    Assign the picked worker to a job.

    Flow:
    1. Validate request shape and, if given, that the current user may assign
    2. Require a non-zero pick for the job ("Please select a worker")
    3. PATCH /api/jobs/{jobId} with ``{assignedTo, status: "assigned"}``
    4. On success, invalidate jobs, my jobs, metrics and workers and clear every pick

    Args:
        args: Dictionary containing parameters:
            - job_id (int): Job to assign
            - assignments (dict): Current picks, job id -> worker id
            - current_user (dict, optional): Acting user record
        client: Optional API client (default: configured client)
        cache: Optional read cache to invalidate

    Returns:
        Success envelope with ``request`` ({jobId, workerId}), ``job`` and
        ``assignments`` (empty). Failure envelope keeps ``assignments``
        unchanged so the caller can retry.
    """
    assignments = args.get("assignments") if isinstance(args, dict) else None
    try:
        try:
            request = AssignJobToolRequest.model_validate(args)
        except ValidationError as e:
            raise map_pydantic_validation_error(e)
        assignments = request.assignments

        if request.current_user is not None and not can_assign_jobs(request.current_user):
            raise create_validation_error("You do not have permission to assign jobs")

        assignment = handle_assign_job(request.assignments, request.job_id)

        with api_session(client) as api:
            job = api.update_job(assignment.job_id, assignment.to_patch())

        invalidated = invalidate_after_mutation(cache, INVALIDATED_PATHS)
        logger.info("Assigned job %s to worker %s", assignment.job_id, assignment.worker_id)

        return build_success_response(
            SUCCESS_TITLE,
            invalidated,
            request=assignment.to_wire(),
            job=job.to_wire(),
            assignments=clear_assignments(),
        )

    except ToolError as e:
        return build_error_response(e, FAILURE_TITLE, assignments=assignments or {})

    except Exception as e:
        logger.exception("Unexpected error in assign_job")
        return build_error_response(
            create_internal_error(str(e), original_error=e),
            FAILURE_TITLE,
            assignments=assignments or {},
        )
