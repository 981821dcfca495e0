"""
Centralized, type-safe enumerations for the FieldOps job and worker model.

This module is the single source of truth for every closed value set used
across the application:

- ``UserRole``: who a user is (admin, HR staff, field worker).
- ``JobType``: trade category shared by jobs and worker specialties.
- ``JobPriority``: job urgency tier.
- ``JobStatus``: job lifecycle stage.
- ``WorkerStatus``: worker availability.
- ``ReportStatus``: review state of a job completion report.

All Enums inherit from ``(str, Enum)`` so that members compare equal to plain
strings and serialize naturally to JSON at API boundaries.
"""

from enum import Enum
from typing import Any, Optional


class UserRole(str, Enum):
    """Enum for user roles."""

    ADMIN = "admin"
    HR = "hr"
    WORKER = "worker"


class JobType(str, Enum):
    """Enum for job types (also used as worker specialty)."""

    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    DRILLING = "drilling"
    HVAC = "hvac"


class JobPriority(str, Enum):
    """Enum for job priorities."""

    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class JobStatus(str, Enum):
    """Enum for job lifecycle statuses.

    Canonical transitions:
        pending  ->  assigned      (a worker is bound)
        assigned  ->  in_progress  (the worker starts)
        in_progress  ->  completed
        any non-terminal  ->  cancelled
    """

    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WorkerStatus(str, Enum):
    """Enum for worker availability."""

    AVAILABLE = "available"
    WORKING = "working"
    OFFLINE = "offline"


class ReportStatus(str, Enum):
    """Enum for job report review states."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


# Job statuses that require a bound worker
ASSIGNED_STATUSES = frozenset({JobStatus.ASSIGNED, JobStatus.IN_PROGRESS})

# Job statuses that end the lifecycle
TERMINAL_JOB_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.CANCELLED})


def enum_value(value: Any) -> Optional[Any]:
    """Return the plain value of an Enum member, or the input unchanged.

    Normalizes enum members and plain strings to one comparable form, so
    tables and messages only ever see the raw value.
    """
    if isinstance(value, Enum):
        return value.value
    return value
