#!/usr/bin/env python3
"""
MCP Server entry point for the FieldOps job lifecycle tools.

This server exposes job creation, worker assignment, status updates, job
reports, time tracking and the HR and worker dashboards over the Model
Context Protocol. Every tool talks to the FieldOps REST backend configured by
FIELDOPS_API_BASE_URL.

Usage:
    python server.py

The server runs in stdio mode by default, which is the standard transport
for MCP servers that are invoked by LLM agents.
"""

import logging

from mcp.server.fastmcp import FastMCP

from config import get_config
from tools.assign_job import assign_job, select_worker
from tools.create_job import create_job
from tools.dashboard import get_hr_overview, get_worker_overview
from tools.job_reports import approve_job_report, reject_job_report, submit_job_report
from tools.time_tracking import clock_in, clock_out
from tools.update_job_status import update_job_status
from utils.query_cache import QueryCache

# Create FastMCP server instance
config = get_config()
mcp = FastMCP(
    name=config.server_name,
    instructions=(
        "This server provides tools for FieldOps field-service job management. "
        "\n\n"
        "JOB LIFECYCLE:\n"
        "Jobs move pending -> assigned -> in_progress -> completed; any non-terminal job may be cancelled. "
        "Use create_job to create a job from the job form (HR/admin). "
        "Use select_worker to record a worker pick for a pending job, then assign_job to commit it. "
        "Use update_job_status for workers starting or finishing work. "
        "\n\n"
        "REPORTS AND TIME:\n"
        "Use submit_job_report when a worker has finished a job; approve_job_report completes the job, "
        "reject_job_report returns the report with a reason. "
        "Use clock_in / clock_out for worker time tracking. "
        "\n\n"
        "DASHBOARDS:\n"
        "Use get_hr_overview and get_worker_overview for read-only summaries. "
        "Mutation tools report the resource paths they invalidated; dashboard reads refetch them."
    ),
)

# Reads shared across tool calls; mutations invalidate by path
query_cache = QueryCache()


@mcp.tool(
    name="create_job",
    description=(
        "Create a field-service job from the job form. Title, type and location are required; "
        "priority defaults to normal and estimated duration to 2 hours. "
        "Returns a toast, the created job and the invalidated resource paths."
    ),
)
def create_job_tool(
    form: dict,
    current_user: dict | None = None,
) -> dict:
    """
    Create a job from the job form.

    Args:
        form: Job form fields: title, type (electrical, plumbing, hvac,
            drilling), priority (normal, high, urgent), description,
            location (street address), customer_name, customer_phone,
            estimated_duration (hours), assigned_to ("none" or worker id).
        current_user: Optional acting user; only admin and hr may create jobs.

    Returns:
        Success envelope with job, payload and the reset form, or a failure
        envelope whose toast carries "Please fill in all required fields" or
        the backend error.
    """
    args = {"form": form}
    if current_user is not None:
        args["current_user"] = current_user
    return create_job(args, cache=query_cache)


@mcp.tool(
    name="select_worker",
    description=(
        "Record a worker pick for a pending job. Pass the current picks and get the updated picks back; "
        "'none' clears the pick. No backend call is made."
    ),
)
def select_worker_tool(
    job_id: int,
    worker: str,
    assignments: dict | None = None,
) -> dict:
    """
    Record a worker pick for a job.

    Args:
        job_id: Pending job the pick applies to.
        worker: Worker id as a string, or "none".
        assignments: Current picks, job id -> worker id.

    Returns:
        {"assignments": {...}, "can_assign": bool}
    """
    args = {"job_id": job_id, "worker": worker}
    if assignments is not None:
        args["assignments"] = assignments
    return select_worker(args)


@mcp.tool(
    name="assign_job",
    description=(
        "Assign the picked worker to a pending job (status becomes 'assigned'). "
        "Fails with 'Please select a worker' when no pick exists. Clears all picks on success."
    ),
)
def assign_job_tool(
    job_id: int,
    assignments: dict | None = None,
    current_user: dict | None = None,
) -> dict:
    """
    Assign a job to the worker picked for it.

    Args:
        job_id: Job to assign.
        assignments: Current picks, job id -> worker id.
        current_user: Optional acting user; only admin and hr may assign.

    Returns:
        Success envelope with request ({jobId, workerId}), job and empty
        assignments; failure envelope with the picks unchanged.
    """
    args = {"job_id": job_id, "assignments": assignments or {}}
    if current_user is not None:
        args["current_user"] = current_user
    return assign_job(args, cache=query_cache)


@mcp.tool(
    name="update_job_status",
    description=(
        "Update a job's lifecycle status. When current_status is given, the transition is checked "
        "against the lifecycle policy (force=true allows an out-of-order move with a warning). "
        "Assigning a worker goes through assign_job, not this tool."
    ),
)
def update_job_status_tool(
    job_id: int,
    status: str,
    current_status: str | None = None,
    force: bool = False,
) -> dict:
    """
    Move a job to a new status.

    Args:
        job_id: Job to update.
        status: Target status (pending, in_progress, completed, cancelled); use
            assign_job to move a job to assigned.
        current_status: Optional known current status; enables the policy check.
        force: Allow a policy-violating transition with a warning.
    """
    args = {"job_id": job_id, "status": status, "force": force}
    if current_status is not None:
        args["current_status"] = current_status
    return update_job_status(args, cache=query_cache)


@mcp.tool(
    name="submit_job_report",
    description="Submit a worker's report (description, hours spent, photos) for a job.",
)
def submit_job_report_tool(job_id: int, form: dict) -> dict:
    """
    Submit a job report.

    Args:
        job_id: Job the report covers.
        form: description (required), time_spent (hours), photos (list of URLs).
    """
    return submit_job_report({"job_id": job_id, "form": form}, cache=query_cache)


@mcp.tool(
    name="approve_job_report",
    description="Approve a submitted job report and mark its job completed.",
)
def approve_job_report_tool(
    job_id: int,
    report_id: int,
    current_user: dict | None = None,
) -> dict:
    """Approve a report and complete its job."""
    args = {"job_id": job_id, "report_id": report_id}
    if current_user is not None:
        args["current_user"] = current_user
    return approve_job_report(args, cache=query_cache)


@mcp.tool(
    name="reject_job_report",
    description="Reject a submitted job report. A non-empty reason is required.",
)
def reject_job_report_tool(
    report_id: int,
    reason: str | None = None,
    current_user: dict | None = None,
) -> dict:
    """Reject a report with a reason."""
    args = {"report_id": report_id, "reason": reason}
    if current_user is not None:
        args["current_user"] = current_user
    return reject_job_report(args, cache=query_cache)


@mcp.tool(
    name="clock_in",
    description="Clock the authenticated worker in at the given (or default) location.",
)
def clock_in_tool(location: dict | None = None) -> dict:
    """Open a time entry."""
    args = {}
    if location is not None:
        args["location"] = location
    return clock_in(args, cache=query_cache)


@mcp.tool(
    name="clock_out",
    description="Clock the authenticated worker out at the given (or default) location.",
)
def clock_out_tool(location: dict | None = None) -> dict:
    """Close the open time entry."""
    args = {}
    if location is not None:
        args["location"] = location
    return clock_out(args, cache=query_cache)


@mcp.tool(
    name="get_hr_overview",
    description=(
        "Read the HR dashboard: metrics, unassigned jobs, available workers, "
        "reports awaiting review, recent activity and the monthly completion chart."
    ),
)
def get_hr_overview_tool() -> dict:
    """Read the HR dashboard."""
    return get_hr_overview({}, cache=query_cache)


@mcp.tool(
    name="get_worker_overview",
    description=(
        "Read the worker dashboard: today's jobs, pending jobs, jobs completed this week "
        "and the current clock-in state."
    ),
)
def get_worker_overview_tool() -> dict:
    """Read the worker dashboard."""
    return get_worker_overview({}, cache=query_cache)


def main():
    """
    Main entry point for the MCP server.

    Runs the server in stdio mode, which is the standard transport
    for MCP servers that are invoked by LLM agents.
    """
    # Setup logging
    config.setup_logging()

    # Log startup information
    logger = logging.getLogger(__name__)
    logger.info("Starting FieldOps MCP Server")
    logger.info(f"Server name: {config.server_name}")
    logger.info(f"API base URL: {config.api_base_url}")

    # Validate configuration and log warnings
    warnings = config.validate()
    for warning in warnings:
        logger.warning(warning)

    # Start the server
    logger.info("Server starting in stdio mode")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
