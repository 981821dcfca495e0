"""
Pending worker-assignment selection.

The HR dashboard lets staff pick a worker for each unassigned job before
pressing "Assign". The picks live in a caller-owned mapping of job id to
worker id; these helpers never mutate it and never keep state of their own.

``0`` in the mapping means "nothing selected". It is distinct from ``None``,
which is what an unassigned job carries on the wire.
"""

from typing import Dict, Mapping, Optional

from models.errors import create_validation_error
from schemas.jobs import AssignJobRequest
from utils.job_form import NO_WORKER_SELECTION

NO_SELECTION = 0

SELECT_WORKER_MESSAGE = "Please select a worker"


def handle_worker_select(
    assignments: Mapping[int, int], job_id: int, selection: Optional[str]
) -> Dict[int, int]:
    """
    Record a worker pick for one job.

    Args:
        assignments: Current job id -> worker id picks
        job_id: Job the pick applies to
        selection: ``"none"`` or a worker id string

    Returns:
        New mapping with the pick applied; ``"none"`` and unparseable
        selections are stored as ``NO_SELECTION``
    """
    updated = dict(assignments)
    updated[job_id] = _selection_to_worker_id(selection)
    return updated


def _selection_to_worker_id(selection: Optional[str]) -> int:
    if selection is None:
        return NO_SELECTION
    text = str(selection).strip()
    if text == NO_WORKER_SELECTION:
        return NO_SELECTION
    try:
        return int(text)
    except ValueError:
        return NO_SELECTION


def handle_assign_job(assignments: Mapping[int, int], job_id: int) -> AssignJobRequest:
    """
    Build the assignment mutation for a job from the pending picks.

    Raises:
        ToolError: VALIDATION_ERROR "Please select a worker" when the job has
            no pick or the pick is ``NO_SELECTION``
    """
    worker_id = assignments.get(job_id, NO_SELECTION)
    if not worker_id:
        raise create_validation_error(SELECT_WORKER_MESSAGE)
    return AssignJobRequest(job_id=job_id, worker_id=worker_id)


def clear_assignments() -> Dict[int, int]:
    """Picks after a successful assignment: all of them are dropped."""
    return {}
