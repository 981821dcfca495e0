"""
Job report form validation and payload assembly.
"""

import math
from typing import Any, Mapping, Optional, Union

from models.errors import create_validation_error
from schemas.job_reports import JobReportPayload, ReportForm

DESCRIPTION_REQUIRED_MESSAGE = "Please provide a work description"
REJECTION_REASON_REQUIRED_MESSAGE = "Please provide a reason for rejection"


def empty_report_form() -> ReportForm:
    """Form state after a successful submission."""
    return ReportForm()


def parse_time_spent(raw: str) -> float:
    """Hours spent; blank, unparseable or negative input counts as 0."""
    try:
        hours = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(hours) or math.isinf(hours) or hours < 0:
        return 0.0
    return hours


def build_job_report_payload(
    job_id: int, form: Union[ReportForm, Mapping[str, Any]]
) -> JobReportPayload:
    """
    Validate a report form and assemble the ``POST /api/job-reports`` body.

    Raises:
        ToolError: VALIDATION_ERROR when the work description is blank
    """
    report_form = form if isinstance(form, ReportForm) else ReportForm.model_validate(dict(form))

    if not report_form.description.strip():
        raise create_validation_error(DESCRIPTION_REQUIRED_MESSAGE)

    return JobReportPayload(
        job_id=job_id,
        description=report_form.description,
        time_spent=parse_time_spent(report_form.time_spent),
        status=report_form.status,
        photos=list(report_form.photos),
    )


def validate_rejection_reason(reason: Optional[str]) -> str:
    """A rejection needs a non-blank reason."""
    if reason is None or not reason.strip():
        raise create_validation_error(REJECTION_REASON_REQUIRED_MESSAGE)
    return reason
