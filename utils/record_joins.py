"""
Record lookup, filter and join helpers.

Jobs, workers and users reference each other by id only. These functions
build the display-ready joined shapes from the flat collections. They return
new objects and never modify their inputs, so applying them twice to the same
collections gives equal results.
"""

from typing import Iterable, List, Optional, Sequence, TypeVar

from models.status import enum_value
from schemas.entities import Job, JobWithDetails, User, Worker, WorkerWithUser

RecordT = TypeVar("RecordT", User, Worker, Job)


def _find_by_id(records: Iterable[RecordT], record_id: Optional[int]) -> Optional[RecordT]:
    if record_id is None:
        return None
    for record in records:
        if record.id == record_id:
            return record
    return None


def find_user_by_id(users: Iterable[User], user_id: Optional[int]) -> Optional[User]:
    """Return the user with ``user_id``, or None."""
    return _find_by_id(users, user_id)


def find_worker_by_id(workers: Iterable[Worker], worker_id: Optional[int]) -> Optional[Worker]:
    """Return the worker with ``worker_id``, or None."""
    return _find_by_id(workers, worker_id)


def find_job_by_id(jobs: Iterable[Job], job_id: Optional[int]) -> Optional[Job]:
    """Return the job with ``job_id``, or None."""
    return _find_by_id(jobs, job_id)


def filter_jobs_by_status(jobs: Iterable[Job], status: object) -> List[Job]:
    """Jobs whose status equals ``status``; unknown statuses give ``[]``."""
    wanted = enum_value(status)
    return [job for job in jobs if job.status.value == wanted]


def filter_workers_by_status(workers: Iterable[Worker], status: object) -> List[Worker]:
    """Workers whose status equals ``status``; unknown statuses give ``[]``."""
    wanted = enum_value(status)
    return [worker for worker in workers if worker.status.value == wanted]


def filter_jobs_by_statuses(jobs: Iterable[Job], statuses: Iterable[object]) -> List[Job]:
    """Jobs whose status is any of ``statuses`` (e.g. assigned and in_progress)."""
    wanted = {enum_value(status) for status in statuses}
    return [job for job in jobs if job.status.value in wanted]


def job_with_worker_details(
    job: Job, workers: Sequence[Worker], users: Sequence[User]
) -> JobWithDetails:
    """Attach the assigned worker (or None) and the creating user to a job."""
    worker = find_worker_by_id(workers, job.assigned_to) if job.assigned_to else None
    creator = find_user_by_id(users, job.created_by)
    return JobWithDetails.model_validate({**dict(job), "worker": worker, "creator": creator})


def jobs_with_worker_details(
    jobs: Iterable[Job], workers: Sequence[Worker], users: Sequence[User]
) -> List[JobWithDetails]:
    """Join every job with its worker and creator."""
    return [job_with_worker_details(job, workers, users) for job in jobs]


def worker_with_user_details(worker: Worker, users: Sequence[User]) -> WorkerWithUser:
    """Attach the owning user to a worker."""
    user = find_user_by_id(users, worker.user_id)
    return WorkerWithUser.model_validate({**dict(worker), "user": user})


def workers_with_user_details(
    workers: Iterable[Worker], users: Sequence[User]
) -> List[WorkerWithUser]:
    """Join every worker with its user."""
    return [worker_with_user_details(worker, users) for worker in workers]
