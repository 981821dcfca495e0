"""
MCP tool handlers for the job report workflow.

Workers submit a report once a job's work is done; HR reviews it. Approval
completes the job, rejection sends the report back with a reason.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from api.client import (
    DASHBOARD_METRICS_PATH,
    JOB_REPORTS_PATH,
    JOBS_PATH,
    MY_JOBS_PATH,
    FieldOpsApiClient,
    api_session,
)
from models.errors import ToolError, create_internal_error, create_validation_error
from models.status import JobStatus, ReportStatus
from schemas.job_reports import (
    ApproveJobReportRequest,
    RejectJobReportRequest,
    SubmitJobReportRequest,
)
from utils.notifications import build_error_response, build_success_response
from utils.permissions import can_review_reports
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.query_cache import QueryCache, invalidate_after_mutation
from utils.report_form import build_job_report_payload, empty_report_form, validate_rejection_reason

logger = logging.getLogger(__name__)

SUBMIT_SUCCESS_TITLE = "Job report submitted successfully"
SUBMIT_FAILURE_TITLE = "Failed to submit job report"
APPROVE_SUCCESS_TITLE = "Job approved and marked as complete"
APPROVE_FAILURE_TITLE = "Failed to approve job"
REJECT_SUCCESS_TITLE = "Job report rejected"
REJECT_FAILURE_TITLE = "Failed to reject job"

REVIEW_PERMISSION_MESSAGE = "You do not have permission to review job reports"

SUBMIT_INVALIDATED_PATHS = (MY_JOBS_PATH, JOB_REPORTS_PATH)
APPROVE_INVALIDATED_PATHS = (JOBS_PATH, MY_JOBS_PATH, JOB_REPORTS_PATH, DASHBOARD_METRICS_PATH)
REJECT_INVALIDATED_PATHS = (JOB_REPORTS_PATH,)


def _handle_unexpected(name: str, e: Exception, failure_title: str) -> Dict[str, Any]:
    logger.exception("Unexpected error in %s", name)
    return build_error_response(create_internal_error(str(e), original_error=e), failure_title)


def submit_job_report(
    args: Dict[str, Any],
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """
    Submit a worker's report for a job.

    Args:
        args: Dictionary containing parameters:
            - job_id (int): Job the report covers
            - form (dict): description (required), time_spent (hours as
              entered; blank or invalid counts as 0), photos
        client: Optional API client (default: configured client)
        cache: Optional read cache to invalidate

    Returns:
        Success envelope with ``report``, ``payload`` and the reset ``form``.
    """
    try:
        try:
            request = SubmitJobReportRequest.model_validate(args)
        except ValidationError as e:
            raise map_pydantic_validation_error(e)

        payload = build_job_report_payload(request.job_id, request.form)

        with api_session(client) as api:
            report = api.submit_job_report(payload)

        invalidated = invalidate_after_mutation(cache, SUBMIT_INVALIDATED_PATHS)
        logger.info("Report %s submitted for job %s", report.id, request.job_id)

        return build_success_response(
            SUBMIT_SUCCESS_TITLE,
            invalidated,
            report=report.to_wire(),
            payload=payload.to_wire(),
            form=empty_report_form().model_dump(),
        )

    except ToolError as e:
        return build_error_response(e, SUBMIT_FAILURE_TITLE)

    except Exception as e:
        return _handle_unexpected("submit_job_report", e, SUBMIT_FAILURE_TITLE)


def approve_job_report(
    args: Dict[str, Any],
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """
    Approve a submitted report and complete its job.

    The job is marked completed first; the report is only flagged approved
    once that succeeds, so a failed completion leaves the report reviewable.

    Args:
        args: Dictionary containing parameters:
            - job_id (int): Job to complete
            - report_id (int): Report being approved
            - current_user (dict, optional): Acting user; must be admin or HR
        client: Optional API client (default: configured client)
        cache: Optional read cache to invalidate

    Returns:
        Success envelope with the updated ``job`` and ``report``.
    """
    try:
        try:
            request = ApproveJobReportRequest.model_validate(args)
        except ValidationError as e:
            raise map_pydantic_validation_error(e)

        if request.current_user is not None and not can_review_reports(request.current_user):
            raise create_validation_error(REVIEW_PERMISSION_MESSAGE)

        with api_session(client) as api:
            job = api.update_job(request.job_id, {"status": JobStatus.COMPLETED.value})
            report = api.update_job_report(request.report_id, {"status": ReportStatus.APPROVED.value})

        invalidated = invalidate_after_mutation(cache, APPROVE_INVALIDATED_PATHS)
        logger.info("Report %s approved; job %s completed", request.report_id, request.job_id)

        return build_success_response(
            APPROVE_SUCCESS_TITLE,
            invalidated,
            job=job.to_wire(),
            report=report.to_wire(),
        )

    except ToolError as e:
        return build_error_response(e, APPROVE_FAILURE_TITLE)

    except Exception as e:
        return _handle_unexpected("approve_job_report", e, APPROVE_FAILURE_TITLE)


def reject_job_report(
    args: Dict[str, Any],
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """
    Reject a submitted report with a reason.

    Args:
        args: Dictionary containing parameters:
            - report_id (int): Report being rejected
            - reason (str): Non-blank rejection reason
            - current_user (dict, optional): Acting user; must be admin or HR
        client: Optional API client (default: configured client)
        cache: Optional read cache to invalidate

    Returns:
        Success envelope with the updated ``report``.
    """
    try:
        try:
            request = RejectJobReportRequest.model_validate(args)
        except ValidationError as e:
            raise map_pydantic_validation_error(e)

        if request.current_user is not None and not can_review_reports(request.current_user):
            raise create_validation_error(REVIEW_PERMISSION_MESSAGE)

        reason = validate_rejection_reason(request.reason)

        with api_session(client) as api:
            report = api.update_job_report(
                request.report_id,
                {"status": ReportStatus.REJECTED.value, "rejectionReason": reason},
            )

        invalidated = invalidate_after_mutation(cache, REJECT_INVALIDATED_PATHS)
        logger.info("Report %s rejected", request.report_id)

        return build_success_response(REJECT_SUCCESS_TITLE, invalidated, report=report.to_wire())

    except ToolError as e:
        return build_error_response(e, REJECT_FAILURE_TITLE)

    except Exception as e:
        return _handle_unexpected("reject_job_report", e, REJECT_FAILURE_TITLE)
