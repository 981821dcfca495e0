"""
HTTP client for the FieldOps REST backend.

Wraps every backend resource the tools use behind one context-managed
``httpx.Client``. Responses are parsed into the entity schemas; any failure
(transport error, non-2xx status, malformed body) surfaces as a REMOTE_ERROR
``ToolError`` whose message is the backend's own text.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from config import get_config
from models.errors import create_remote_error
from models.status import enum_value
from schemas.entities import (
    Activity,
    DashboardMetrics,
    GeoPoint,
    Job,
    JobReport,
    TimeEntry,
    WorkerWithUser,
)
from schemas.job_reports import JobReportPayload
from schemas.jobs import CreateJobPayload

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Resource paths, also used as cache invalidation keys
JOBS_PATH = "/api/jobs"
MY_JOBS_PATH = "/api/jobs/my"
WORKERS_PATH = "/api/workers"
ACTIVITIES_PATH = "/api/activities"
JOB_REPORTS_PATH = "/api/job-reports"
TIME_TRACKING_CURRENT_PATH = "/api/time-tracking/current"
CLOCK_IN_PATH = "/api/time-tracking/clock-in"
CLOCK_OUT_PATH = "/api/time-tracking/clock-out"
DASHBOARD_METRICS_PATH = "/api/dashboard/metrics"
JOB_COMPLETION_CHART_PATH = "/api/dashboard/job-completion-chart"


def job_path(job_id: int) -> str:
    return f"{JOBS_PATH}/{job_id}"


def job_report_path(report_id: int) -> str:
    return f"{JOB_REPORTS_PATH}/{report_id}"


def _error_text(response: httpx.Response) -> str:
    """Extract the backend's error text, preferring a JSON ``message`` field."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or response.reason_phrase


class FieldOpsApiClient:
    """
    Context manager around the backend REST API.

    Usage:
        with FieldOpsApiClient() as api:
            jobs = api.list_jobs(status="pending")
            api.update_job(jobs[0].id, {"status": "cancelled"})
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend root URL (default: FIELDOPS_API_BASE_URL)
            token: Bearer token (default: FIELDOPS_API_TOKEN)
            timeout: Request timeout in seconds (default: FIELDOPS_API_TIMEOUT_SECONDS)
            transport: Optional httpx transport override (used by tests)
        """
        config = get_config()
        self.base_url = (base_url or config.api_base_url).rstrip("/")
        token = token if token is not None else config.api_token

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout if timeout is not None else config.api_timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "FieldOpsApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body (None when empty).

        Raises:
            ToolError: REMOTE_ERROR for transport failures, non-2xx responses
                (message ``"<status>: <text>"``) and undecodable bodies
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise create_remote_error(str(e) or type(e).__name__, original_error=e)

        if response.is_error:
            message = f"{response.status_code}: {_error_text(response)}"
            logger.warning("%s %s rejected: %s", method, path, message)
            raise create_remote_error(message)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise create_remote_error(f"Invalid JSON response from {path}", original_error=e)

    def _parse(self, model: Type[ModelT], data: Any, path: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise create_remote_error(
                f"Unexpected response shape from {path}: {e.error_count()} invalid field(s)",
                original_error=e,
            )

    def _parse_list(self, model: Type[ModelT], data: Any, path: str) -> List[ModelT]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise create_remote_error(f"Unexpected response shape from {path}: expected a list")
        return [self._parse(model, item, path) for item in data]

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def list_jobs(self, status: Optional[Union[str, Iterable[str]]] = None) -> List[Job]:
        """List jobs, optionally filtered by one or more statuses."""
        params = None
        if status is not None:
            if isinstance(status, str):
                statuses = [status]
            else:
                statuses = [str(enum_value(s)) for s in status]
            params = {"status": ",".join(statuses)}
        data = self.request("GET", JOBS_PATH, params=params)
        return self._parse_list(Job, data, JOBS_PATH)

    def list_my_jobs(self) -> List[Job]:
        """Jobs assigned to the authenticated worker."""
        data = self.request("GET", MY_JOBS_PATH)
        return self._parse_list(Job, data, MY_JOBS_PATH)

    def create_job(self, payload: CreateJobPayload) -> Job:
        data = self.request("POST", JOBS_PATH, json=payload.to_wire())
        return self._parse(Job, data, JOBS_PATH)

    def update_job(self, job_id: int, changes: Dict[str, Any]) -> Job:
        """Partially update a job (``PATCH /api/jobs/{id}``)."""
        path = job_path(job_id)
        data = self.request("PATCH", path, json=changes)
        return self._parse(Job, data, path)

    # ------------------------------------------------------------------
    # Workers and activity
    # ------------------------------------------------------------------

    def list_workers(self) -> List[WorkerWithUser]:
        data = self.request("GET", WORKERS_PATH)
        return self._parse_list(WorkerWithUser, data, WORKERS_PATH)

    def list_activities(self) -> List[Activity]:
        data = self.request("GET", ACTIVITIES_PATH)
        return self._parse_list(Activity, data, ACTIVITIES_PATH)

    # ------------------------------------------------------------------
    # Job reports
    # ------------------------------------------------------------------

    def list_job_reports(self) -> List[JobReport]:
        data = self.request("GET", JOB_REPORTS_PATH)
        return self._parse_list(JobReport, data, JOB_REPORTS_PATH)

    def submit_job_report(self, payload: JobReportPayload) -> JobReport:
        data = self.request("POST", JOB_REPORTS_PATH, json=payload.to_wire())
        return self._parse(JobReport, data, JOB_REPORTS_PATH)

    def update_job_report(self, report_id: int, changes: Dict[str, Any]) -> JobReport:
        path = job_report_path(report_id)
        data = self.request("PATCH", path, json=changes)
        return self._parse(JobReport, data, path)

    # ------------------------------------------------------------------
    # Time tracking
    # ------------------------------------------------------------------

    def current_time_entry(self) -> Optional[TimeEntry]:
        """The open time entry, or None when clocked out."""
        data = self.request("GET", TIME_TRACKING_CURRENT_PATH)
        if not data:
            return None
        return self._parse(TimeEntry, data, TIME_TRACKING_CURRENT_PATH)

    def clock_in(self, location: GeoPoint) -> TimeEntry:
        data = self.request("POST", CLOCK_IN_PATH, json={"location": location.to_wire()})
        return self._parse(TimeEntry, data, CLOCK_IN_PATH)

    def clock_out(self, location: GeoPoint) -> TimeEntry:
        data = self.request("POST", CLOCK_OUT_PATH, json={"location": location.to_wire()})
        return self._parse(TimeEntry, data, CLOCK_OUT_PATH)

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def dashboard_metrics(self) -> DashboardMetrics:
        data = self.request("GET", DASHBOARD_METRICS_PATH)
        return self._parse(DashboardMetrics, data or {}, DASHBOARD_METRICS_PATH)

    def job_completion_chart(self) -> Dict[str, list]:
        """Monthly completion counts: ``{"labels": [...], "data": [...]}``."""
        data = self.request("GET", JOB_COMPLETION_CHART_PATH) or {}
        return {"labels": list(data.get("labels", [])), "data": list(data.get("data", []))}


@contextmanager
def api_session(client: Optional[FieldOpsApiClient] = None) -> Iterator[FieldOpsApiClient]:
    """
    Yield ``client`` as-is, or a fresh configured client that is closed on exit.

    Tools accept an injected client so callers (and tests) can share one
    connection pool; without one they open their own for the call.
    """
    if client is not None:
        yield client
        return
    with FieldOpsApiClient() as owned:
        yield owned
