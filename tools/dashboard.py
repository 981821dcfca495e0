"""
MCP tool handlers for the HR and worker dashboard reads.

Both are read-only. Backend reads go through the shared ``QueryCache`` when
one is supplied, so a mutation tool's invalidation is what forces a refetch.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from api.client import (
    ACTIVITIES_PATH,
    DASHBOARD_METRICS_PATH,
    JOB_COMPLETION_CHART_PATH,
    JOB_REPORTS_PATH,
    JOBS_PATH,
    MY_JOBS_PATH,
    TIME_TRACKING_CURRENT_PATH,
    WORKERS_PATH,
    FieldOpsApiClient,
    api_session,
)
from models.errors import ToolError, create_internal_error
from models.status import JobStatus
from schemas.entities import Job, Worker
from utils.dashboard import (
    available_workers,
    badge_classes,
    completed_this_week,
    get_priority_color,
    pending_jobs,
    reports_pending_review,
    today_jobs,
)
from utils.query_cache import QueryCache
from utils.record_joins import filter_jobs_by_status, jobs_with_worker_details
from utils.status_colors import get_status_color

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 10


def _read(cache: Optional[QueryCache], path: str, loader, params: Optional[Dict[str, Any]] = None):
    if cache is None:
        return loader()
    return cache.fetch(path, loader, params)


def _decorate_job(job: Job) -> Dict[str, Any]:
    """Wire form of a job plus its status and priority badge styling."""
    status_color = get_status_color(job.status)
    priority_color = get_priority_color(job.priority)
    data = job.to_wire()
    data["statusColor"] = status_color.value
    data["statusBadge"] = badge_classes(status_color)
    data["priorityColor"] = priority_color.value
    data["priorityBadge"] = badge_classes(priority_color)
    return data


def _decorate_worker(worker: Worker) -> Dict[str, Any]:
    color = get_status_color(worker.status)
    data = worker.to_wire()
    data["statusColor"] = color.value
    data["statusBadge"] = badge_classes(color)
    return data


def get_hr_overview(
    args: Optional[Dict[str, Any]] = None,
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
) -> Dict[str, Any]:
    """
    Assemble the HR dashboard.

    Returns:
        {
            "metrics": {...},                # Headline counters
            "pending_jobs": [...],           # Unassigned jobs with worker/creator joined
            "available_workers": [...],      # Workers that can take a job
            "reports_pending_review": [...], # Submitted, unreviewed reports
            "recent_activities": [...],      # Newest first, at most 10
            "completion_chart": {"labels": [...], "data": [...]}
        }
        or the structured error block on failure.
    """
    try:
        with api_session(client) as api:
            metrics = _read(cache, DASHBOARD_METRICS_PATH, api.dashboard_metrics)
            jobs = _read(cache, JOBS_PATH, api.list_jobs)
            workers = _read(cache, WORKERS_PATH, api.list_workers)
            reports = _read(cache, JOB_REPORTS_PATH, api.list_job_reports)
            activities = _read(cache, ACTIVITIES_PATH, api.list_activities)
            chart = _read(cache, JOB_COMPLETION_CHART_PATH, api.job_completion_chart)

        # Users are only known through the worker records; creators outside
        # that set join as None
        users = [worker.user for worker in workers if worker.user is not None]
        unassigned = jobs_with_worker_details(
            filter_jobs_by_status(jobs, JobStatus.PENDING), workers, users
        )
        recent = sorted(activities, key=lambda a: a.created_at, reverse=True)

        return {
            "metrics": metrics.to_wire(),
            "pending_jobs": [_decorate_job(job) for job in unassigned],
            "available_workers": [_decorate_worker(w) for w in available_workers(workers)],
            "reports_pending_review": [r.to_wire() for r in reports_pending_review(reports)],
            "recent_activities": [a.to_wire() for a in recent[:RECENT_ACTIVITY_LIMIT]],
            "completion_chart": chart,
        }

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        logger.exception("Unexpected error in get_hr_overview")
        return create_internal_error(str(e), original_error=e).to_dict()


def get_worker_overview(
    args: Optional[Dict[str, Any]] = None,
    client: Optional[FieldOpsApiClient] = None,
    cache: Optional[QueryCache] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Assemble the worker dashboard for the authenticated worker.

    Returns:
        {
            "today_jobs": [...],             # Scheduled (or created) today
            "pending_jobs": [...],           # Assigned or in progress
            "completed_this_week": int,      # Completed in the last 7 days
            "clocked_in": bool,
            "current_entry": {...} | None
        }
        or the structured error block on failure.
    """
    try:
        with api_session(client) as api:
            my_jobs: List[Job] = _read(cache, MY_JOBS_PATH, api.list_my_jobs)
            entry = _read(cache, TIME_TRACKING_CURRENT_PATH, api.current_time_entry)

        return {
            "today_jobs": [_decorate_job(job) for job in today_jobs(my_jobs, now)],
            "pending_jobs": [_decorate_job(job) for job in pending_jobs(my_jobs)],
            "completed_this_week": completed_this_week(my_jobs, now),
            "clocked_in": entry is not None and entry.clock_out_time is None,
            "current_entry": entry.to_wire() if entry is not None else None,
        }

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        logger.exception("Unexpected error in get_worker_overview")
        return create_internal_error(str(e), original_error=e).to_dict()
