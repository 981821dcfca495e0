"""Pydantic schemas for job creation, assignment and status tools."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from models.status import JobPriority, JobStatus, JobType
from schemas.common import CamelRecord, StrictIgnoreRequest
from schemas.entities import JobLocation


class JobForm(StrictIgnoreRequest):
    """Raw job-creation form state.

    Every field is the string the form holds; empty string means "not
    filled in". ``assigned_to`` is ``"none"`` or a worker id string.
    """

    title: str = ""
    type: str = ""
    priority: str = ""
    description: str = ""
    location: str = ""
    customer_name: str = ""
    customer_phone: str = ""
    estimated_duration: str = ""
    assigned_to: Optional[str] = "none"

    @field_validator("estimated_duration", mode="before")
    @classmethod
    def coerce_duration(cls, value: Any) -> Any:
        """Accept numeric durations as their string form."""
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("assigned_to", mode="before")
    @classmethod
    def coerce_worker_selection(cls, value: Any) -> Any:
        """Accept a bare integer worker id."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class CreateJobPayload(CamelRecord):
    """Request body for ``POST /api/jobs``."""

    title: str
    type: JobType
    priority: JobPriority = JobPriority.NORMAL
    description: str = ""
    location: JobLocation
    customer_name: str = ""
    customer_phone: str = ""
    estimated_duration: int = Field(default=2, ge=1)
    assigned_to: Optional[int] = None


class AssignJobRequest(CamelRecord):
    """Assignment mutation arguments: ``{jobId, workerId}``."""

    job_id: int
    worker_id: int

    def to_patch(self) -> dict[str, Any]:
        """Body for ``PATCH /api/jobs/{jobId}``."""
        return {"assignedTo": self.worker_id, "status": JobStatus.ASSIGNED.value}


class CreateJobRequest(StrictIgnoreRequest):
    """Request schema for the create_job tool."""

    model_config = ConfigDict(extra="ignore", strict=False)

    form: JobForm
    current_user: Optional[dict[str, Any]] = None


class SelectWorkerRequest(StrictIgnoreRequest):
    """Request schema for the select_worker tool."""

    model_config = ConfigDict(extra="ignore", strict=False)

    job_id: int
    worker: str
    assignments: dict[int, int] = Field(default_factory=dict)

    @field_validator("worker", mode="before")
    @classmethod
    def coerce_worker(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class AssignJobToolRequest(StrictIgnoreRequest):
    """Request schema for the assign_job tool."""

    model_config = ConfigDict(extra="ignore", strict=False)

    job_id: int
    assignments: dict[int, int] = Field(default_factory=dict)
    current_user: Optional[dict[str, Any]] = None


class UpdateJobStatusRequest(StrictIgnoreRequest):
    """Request schema for the update_job_status tool."""

    model_config = ConfigDict(extra="ignore", strict=False)

    job_id: int = Field(ge=1)
    status: JobStatus
    current_status: Optional[JobStatus] = None
    force: bool = False
