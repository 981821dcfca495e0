"""Pydantic schemas for job report and time-tracking tools."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from models.status import ReportStatus
from schemas.common import CamelRecord, StrictIgnoreRequest
from schemas.entities import GeoPoint


class ReportForm(StrictIgnoreRequest):
    """Raw report form state as entered by the worker."""

    model_config = ConfigDict(extra="ignore", strict=False)

    description: str = ""
    time_spent: str = ""
    status: ReportStatus = ReportStatus.SUBMITTED
    photos: list[str] = Field(default_factory=list)

    @field_validator("time_spent", mode="before")
    @classmethod
    def coerce_time_spent(cls, value: Any) -> Any:
        """Accept numeric hours as their string form."""
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class JobReportPayload(CamelRecord):
    """Request body for ``POST /api/job-reports``."""

    job_id: int
    description: str
    time_spent: float = Field(default=0, ge=0)
    status: ReportStatus = ReportStatus.SUBMITTED
    photos: list[str] = Field(default_factory=list)


class SubmitJobReportRequest(StrictIgnoreRequest):
    """Request schema for the submit_job_report tool."""

    model_config = ConfigDict(extra="ignore", strict=False)

    job_id: int = Field(ge=1)
    form: ReportForm = Field(default_factory=ReportForm)


class ApproveJobReportRequest(StrictIgnoreRequest):
    """Request schema for the approve_job_report tool."""

    model_config = ConfigDict(extra="ignore", strict=False)

    job_id: int = Field(ge=1)
    report_id: int = Field(ge=1)
    current_user: Optional[dict[str, Any]] = None


class RejectJobReportRequest(StrictIgnoreRequest):
    """Request schema for the reject_job_report tool."""

    model_config = ConfigDict(extra="ignore", strict=False)

    report_id: int = Field(ge=1)
    reason: Optional[str] = None
    current_user: Optional[dict[str, Any]] = None


class ClockRequest(StrictIgnoreRequest):
    """Request schema for the clock_in and clock_out tools."""

    model_config = ConfigDict(extra="ignore", strict=False)

    location: Optional[GeoPoint] = None
