"""
Job lifecycle transition policy.

The backend accepts any status patch, so the lifecycle is maintained by the
callers. This module gives them one place to check a move before sending it:

- Noop when target equals current status
- Forward transitions (pending -> assigned -> in_progress -> completed)
- Cancellation allowed from any non-terminal status
- Force bypass with warning for policy violations
"""

from typing import Any, Dict, List, Optional

from models.errors import create_validation_error
from models.status import ASSIGNED_STATUSES, TERMINAL_JOB_STATUSES, JobStatus, enum_value

# Forward transitions: current_status -> allowed_next_status
FORWARD_TRANSITIONS = {
    JobStatus.PENDING: JobStatus.ASSIGNED,
    JobStatus.ASSIGNED: JobStatus.IN_PROGRESS,
    JobStatus.IN_PROGRESS: JobStatus.COMPLETED,
}


class TransitionResult:
    """Result of a transition policy check."""

    def __init__(
        self,
        allowed: bool,
        is_noop: bool = False,
        error_message: Optional[str] = None,
        warnings: Optional[List[str]] = None,
    ):
        self.allowed = allowed
        self.is_noop = is_noop
        self.error_message = error_message
        self.warnings = warnings or []

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary format."""
        result = {"allowed": self.allowed, "is_noop": self.is_noop}
        if self.error_message:
            result["error_message"] = self.error_message
        if self.warnings:
            result["warnings"] = self.warnings
        return result


def _as_status(value: Any) -> JobStatus:
    try:
        return JobStatus(enum_value(value))
    except ValueError:
        allowed = ", ".join(sorted(s.value for s in JobStatus))
        raise create_validation_error(
            f"Invalid status value: '{value}'. Allowed values are: {allowed}"
        )


def allowed_targets(current_status: Any) -> List[JobStatus]:
    """Statuses reachable from ``current_status`` without force."""
    current = _as_status(current_status)
    if current in TERMINAL_JOB_STATUSES:
        return []
    return [FORWARD_TRANSITIONS[current], JobStatus.CANCELLED]


def validate_transition(current_status: Any, target_status: Any, force: bool = False) -> TransitionResult:
    """
    Validate a job status transition according to lifecycle rules.

    Policy rules:
    1. If target_status == current_status, return success with is_noop=True
    2. Forward transitions are allowed:
       pending -> assigned, assigned -> in_progress, in_progress -> completed
    3. cancelled is allowed from any non-terminal status
    4. Other transitions (including leaving completed/cancelled) are
       violations: blocked unless force=True, which allows them with a warning

    Args:
        current_status: The job's current status
        target_status: The desired status
        force: Whether to bypass policy violations with warning

    Returns:
        TransitionResult

    Raises:
        ToolError: If either status is not a job status

    Examples:
        >>> validate_transition("pending", "assigned").allowed
        True
        >>> validate_transition("completed", "pending").allowed
        False
        >>> validate_transition("completed", "pending", force=True).warnings != []
        True
    """
    current = _as_status(current_status)
    target = _as_status(target_status)

    if target == current:
        return TransitionResult(allowed=True, is_noop=True)

    targets = allowed_targets(current)
    if target in targets:
        return TransitionResult(allowed=True)

    if force:
        warning = (
            f"Force bypass: Transition from '{current.value}' to '{target.value}' "
            f"violates policy but was allowed due to force=true"
        )
        return TransitionResult(allowed=True, warnings=[warning])

    if targets:
        allowed_text = ", ".join(f"'{s.value}'" for s in sorted(targets, key=lambda s: s.value))
    else:
        allowed_text = "none (terminal status)"
    error_msg = (
        f"Transition from '{current.value}' to '{target.value}' violates policy. "
        f"Allowed transitions from '{current.value}': {allowed_text}"
    )
    return TransitionResult(allowed=False, error_message=error_msg)


def check_transition_or_raise(current_status: Any, target_status: Any, force: bool = False) -> TransitionResult:
    """
    Validate transition and raise ToolError if blocked.

    Raises:
        ToolError: With VALIDATION_ERROR code if transition is blocked
    """
    result = validate_transition(current_status, target_status, force)

    if not result.allowed:
        raise create_validation_error(result.error_message)

    return result


def check_assignment_consistency(status: Any, assigned_to: Optional[int]) -> Optional[str]:
    """
    Check that a job carries a worker exactly when its status needs one.

    Returns:
        None when consistent, otherwise a description of the mismatch
    """
    job_status = _as_status(status)
    needs_worker = job_status in ASSIGNED_STATUSES

    if needs_worker and assigned_to is None:
        return f"Job in status '{job_status.value}' must have an assigned worker"
    if not needs_worker and assigned_to is not None:
        return f"Job in status '{job_status.value}' must not have an assigned worker"
    return None
