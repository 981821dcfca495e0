"""
Job-creation form validation and payload assembly.

Turns the raw string state of the job form into the request body for
``POST /api/jobs``. Validation runs entirely locally: nothing here touches the
network, and a failure means no payload is produced.
"""

from typing import Any, Mapping, Optional, Union

from config import get_config
from models.errors import create_validation_error
from models.status import JobPriority, JobType
from schemas.entities import JobLocation
from schemas.jobs import CreateJobPayload, JobForm
from utils.geocoding import FixedGeocoder, Geocoder

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"

# Worker-selection sentinel meaning "leave the job unassigned"
NO_WORKER_SELECTION = "none"


def empty_job_form() -> JobForm:
    """Form state after a reset."""
    return JobForm()


def coerce_job_form(form: Union[JobForm, Mapping[str, Any]]) -> JobForm:
    """Accept either a ``JobForm`` or a raw mapping of form fields."""
    if isinstance(form, JobForm):
        return form
    return JobForm.model_validate(dict(form))


def has_required_fields(form: JobForm) -> bool:
    """Title, type and location address must all be filled in."""
    return bool(form.title.strip() and form.type.strip() and form.location.strip())


def parse_worker_selection(selection: Optional[str]) -> Optional[int]:
    """
    Convert the worker-selection value into the ``assignedTo`` payload value.

    Args:
        selection: ``"none"``, a numeric worker id string, or None

    Returns:
        Worker id, or None when no worker was selected

    Raises:
        ToolError: If the selection is neither the sentinel nor a positive id
    """
    if selection is None:
        return None

    text = str(selection).strip()
    if not text or text == NO_WORKER_SELECTION:
        return None

    try:
        worker_id = int(text)
    except ValueError:
        raise create_validation_error(f"Invalid worker selection: '{selection}'")

    if worker_id < 1:
        raise create_validation_error(
            f"Invalid worker selection: {worker_id} must be a positive integer (>= 1)"
        )

    return worker_id


def parse_job_type(raw: str) -> JobType:
    """Validate the job type against the closed specialty set."""
    try:
        return JobType(raw)
    except ValueError:
        allowed = ", ".join(sorted(t.value for t in JobType))
        raise create_validation_error(
            f"Invalid job type: '{raw}'. Allowed values are: {allowed}"
        )


def parse_priority(raw: str) -> JobPriority:
    """Validate the priority; an unselected priority means ``normal``."""
    if not raw.strip():
        return JobPriority.NORMAL
    try:
        return JobPriority(raw)
    except ValueError:
        allowed = ", ".join(sorted(p.value for p in JobPriority))
        raise create_validation_error(
            f"Invalid priority: '{raw}'. Allowed values are: {allowed}"
        )


def parse_estimated_duration(raw: str, default: int) -> int:
    """Parse the estimated duration in whole hours, falling back to ``default``."""
    text = raw.strip()
    if not text:
        return default

    try:
        hours = int(text)
    except ValueError:
        raise create_validation_error(
            f"Invalid estimated duration: '{raw}' is not a whole number of hours"
        )

    if hours < 1:
        raise create_validation_error(
            f"Invalid estimated duration: {hours} must be at least 1 hour"
        )

    return hours


def build_create_job_payload(
    form: Union[JobForm, Mapping[str, Any]],
    geocoder: Optional[Geocoder] = None,
    default_duration: Optional[int] = None,
) -> CreateJobPayload:
    """
    Validate the job form and assemble the creation payload.

    Required fields are checked first so an empty form always reports the
    single "fill in all required fields" message, whatever else is wrong.

    Args:
        form: Job form state (``JobForm`` or raw mapping)
        geocoder: Address resolver (default: ``FixedGeocoder``)
        default_duration: Hours used when no duration was entered
            (default: configured ``default_estimated_duration``)

    Returns:
        CreateJobPayload ready for ``to_wire()``

    Raises:
        ToolError: VALIDATION_ERROR on any invalid or missing field

    Examples:
        >>> payload = build_create_job_payload(
        ...     {"title": "Test Job", "type": "plumbing", "location": "123 Test St"}
        ... )
        >>> payload.to_wire()["assignedTo"] is None
        True
    """
    job_form = coerce_job_form(form)

    if not has_required_fields(job_form):
        raise create_validation_error(REQUIRED_FIELDS_MESSAGE)

    job_type = parse_job_type(job_form.type)
    priority = parse_priority(job_form.priority)
    assigned_to = parse_worker_selection(job_form.assigned_to)

    if default_duration is None:
        default_duration = get_config().default_estimated_duration
    estimated_duration = parse_estimated_duration(job_form.estimated_duration, default_duration)

    resolver = geocoder or FixedGeocoder()
    lat, lng = resolver.geocode(job_form.location)

    return CreateJobPayload(
        title=job_form.title,
        type=job_type,
        priority=priority,
        description=job_form.description,
        location=JobLocation(address=job_form.location, lat=lat, lng=lng),
        customer_name=job_form.customer_name,
        customer_phone=job_form.customer_phone,
        estimated_duration=estimated_duration,
        assigned_to=assigned_to,
    )
