"""Pydantic schemas for the records exchanged with the FieldOps backend."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from models.status import (
    JobPriority,
    JobStatus,
    JobType,
    ReportStatus,
    UserRole,
    WorkerStatus,
)
from schemas.common import CamelRecord


class GeoPoint(CamelRecord):
    """A latitude/longitude pair."""

    lat: float
    lng: float


class JobLocation(CamelRecord):
    """Street address plus the coordinates it was geocoded to."""

    address: str
    lat: float
    lng: float


class User(CamelRecord):
    """Application user. Password hashes never leave the backend."""

    id: int
    username: str
    role: UserRole
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime


class Worker(CamelRecord):
    """Field worker profile; ``user_id`` references the owning User."""

    id: int
    user_id: int
    specialty: JobType
    status: WorkerStatus
    location: GeoPoint
    completed_jobs: int = Field(default=0, ge=0)
    rating: str = "0.0"
    is_active: bool = True


class Job(CamelRecord):
    """A unit of field work."""

    id: int
    title: str
    description: str = ""
    type: JobType
    priority: JobPriority = JobPriority.NORMAL
    status: JobStatus = JobStatus.PENDING
    location: JobLocation
    assigned_to: Optional[int] = None
    created_by: int
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    estimated_duration: Optional[int] = None
    actual_duration: Optional[int] = None
    scheduled_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime


class Activity(CamelRecord):
    """Write-only audit record."""

    id: int
    type: str
    description: str
    user_id: int
    entity_id: Optional[int] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class JobReport(CamelRecord):
    """Completion report a worker submits for HR review."""

    id: int
    job_id: int
    worker_id: Optional[int] = None
    description: str
    time_spent: float = Field(default=0, ge=0)
    status: ReportStatus = ReportStatus.SUBMITTED
    photos: list[str] = Field(default_factory=list)
    rejection_reason: Optional[str] = None
    submitted_at: Optional[datetime] = None


class TimeEntry(CamelRecord):
    """One clock-in/clock-out span."""

    id: int
    worker_id: int
    clock_in_time: datetime
    clock_out_time: Optional[datetime] = None
    location: Optional[GeoPoint] = None


class DashboardMetrics(CamelRecord):
    """Headline counters shown on the HR dashboard."""

    total_hrs: int = Field(default=0, ge=0, alias="totalHRs")
    total_workers: int = Field(default=0, ge=0)
    jobs_assigned: int = Field(default=0, ge=0)
    jobs_pending: int = Field(default=0, ge=0)
    active_jobs: int = Field(default=0, ge=0)
    completed_today: int = Field(default=0, ge=0)
    available_workers: int = Field(default=0, ge=0)
    pending_assignment: int = Field(default=0, ge=0)


class JobWithDetails(Job):
    """Job joined with its assigned worker and creating user."""

    worker: Optional[Worker] = None
    creator: Optional[User] = None


class WorkerWithUser(Worker):
    """Worker joined with its owning user."""

    user: Optional[User] = None
