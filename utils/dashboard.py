"""
Dashboard views over jobs, workers and reports.

Pure functions behind the HR and worker dashboards: headline metrics, the
worker's today/pending/completed lists, and badge styling.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional

from models.status import (
    ASSIGNED_STATUSES,
    JobPriority,
    JobStatus,
    ReportStatus,
    UserRole,
    WorkerStatus,
    enum_value,
)
from schemas.entities import DashboardMetrics, Job, JobReport, User, Worker
from utils.status_colors import StatusColor

COMPLETED_WINDOW = timedelta(days=7)


def get_priority_color(priority: Any) -> StatusColor:
    """Priority badge color: urgent red, high orange, anything else blue."""
    value = enum_value(priority)
    if value == JobPriority.URGENT.value:
        return StatusColor.RED
    if value == JobPriority.HIGH.value:
        return StatusColor.ORANGE
    return StatusColor.BLUE


def badge_classes(color: StatusColor) -> str:
    """Tailwind classes for a badge in ``color`` (light and dark themes)."""
    tone = StatusColor(color).value
    return f"bg-{tone}-100 text-{tone}-800 dark:bg-{tone}-900/20 dark:text-{tone}-400"


def _align(moment: datetime, reference: datetime) -> datetime:
    # Naive timestamps from the backend are UTC
    if moment.tzinfo is None and reference.tzinfo is not None:
        return moment.replace(tzinfo=timezone.utc)
    if moment.tzinfo is not None and reference.tzinfo is None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def today_jobs(jobs: Iterable[Job], now: Optional[datetime] = None) -> List[Job]:
    """Jobs scheduled (or, if unscheduled, created) on today's date."""
    current = _now(now)
    result = []
    for job in jobs:
        moment = _align(job.scheduled_at or job.created_at, current)
        if moment.date() == current.date():
            result.append(job)
    return result


def pending_jobs(jobs: Iterable[Job]) -> List[Job]:
    """Jobs a worker still has to do: assigned or in progress."""
    return [job for job in jobs if job.status in ASSIGNED_STATUSES]


def completed_this_week(jobs: Iterable[Job], now: Optional[datetime] = None) -> int:
    """Count jobs completed within the last seven days."""
    current = _now(now)
    cutoff = current - COMPLETED_WINDOW
    count = 0
    for job in jobs:
        if job.status != JobStatus.COMPLETED or job.completed_at is None:
            continue
        if _align(job.completed_at, current) > cutoff:
            count += 1
    return count


def available_workers(workers: Iterable[Worker]) -> List[Worker]:
    """Workers that can take a new job."""
    return [worker for worker in workers if worker.status == WorkerStatus.AVAILABLE]


def reports_pending_review(reports: Iterable[JobReport]) -> List[JobReport]:
    """Reports submitted by workers and not yet approved or rejected."""
    return [report for report in reports if report.status == ReportStatus.SUBMITTED]


def compute_dashboard_metrics(
    users: Iterable[User],
    workers: Iterable[Worker],
    jobs: Iterable[Job],
    now: Optional[datetime] = None,
) -> DashboardMetrics:
    """
    Compute the HR dashboard counters from flat collections.

    ``jobs_assigned`` counts assigned and in-progress jobs; ``active_jobs``
    counts only in-progress ones. ``jobs_pending`` and ``pending_assignment``
    both count jobs still waiting for a worker.
    """
    current = _now(now)
    job_list = list(jobs)
    worker_list = list(workers)

    pending = sum(1 for job in job_list if job.status == JobStatus.PENDING)
    completed_today = sum(
        1
        for job in job_list
        if job.status == JobStatus.COMPLETED
        and job.completed_at is not None
        and _align(job.completed_at, current).date() == current.date()
    )

    return DashboardMetrics(
        total_hrs=sum(1 for user in users if user.role == UserRole.HR),
        total_workers=len(worker_list),
        jobs_assigned=sum(1 for job in job_list if job.status in ASSIGNED_STATUSES),
        jobs_pending=pending,
        active_jobs=sum(1 for job in job_list if job.status == JobStatus.IN_PROGRESS),
        completed_today=completed_today,
        available_workers=len(available_workers(worker_list)),
        pending_assignment=pending,
    )
