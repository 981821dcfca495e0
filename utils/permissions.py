"""
Role and permission predicates.

Every predicate accepts a ``User`` record, a raw mapping with a ``role`` key
(as decoded from the backend), or ``None`` for an anonymous caller. None of
them raise: anything that is not a recognised role is simply not that role.
"""

from typing import Any, Mapping, Optional

from models.status import UserRole, enum_value


def _role_of(user: Optional[Any]) -> Optional[str]:
    if user is None:
        return None
    if isinstance(user, Mapping):
        role = user.get("role")
    else:
        role = getattr(user, "role", None)
    return enum_value(role)


def is_admin(user: Optional[Any]) -> bool:
    """Check if user has the admin role."""
    return _role_of(user) == UserRole.ADMIN.value


def is_hr(user: Optional[Any]) -> bool:
    """Check if user has the HR role."""
    return _role_of(user) == UserRole.HR.value


def is_worker(user: Optional[Any]) -> bool:
    """Check if user has the worker role."""
    return _role_of(user) == UserRole.WORKER.value


def can_create_jobs(user: Optional[Any]) -> bool:
    """Admins and HR staff may create jobs."""
    return is_admin(user) or is_hr(user)


def can_assign_jobs(user: Optional[Any]) -> bool:
    """Admins and HR staff may assign jobs to workers."""
    return is_admin(user) or is_hr(user)


def can_review_reports(user: Optional[Any]) -> bool:
    """Admins and HR staff approve or reject completion reports."""
    return is_admin(user) or is_hr(user)
