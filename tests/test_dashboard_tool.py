"""
Integration tests for the dashboard read tools.
"""

from tools.assign_job import assign_job
from tools.dashboard import get_hr_overview, get_worker_overview
from tools.job_reports import approve_job_report, submit_job_report
from tools.update_job_status import update_job_status


def _wire(records):
    return [record.to_wire() for record in records]


def _workers_with_users(workers, users):
    by_id = {user.id: user.to_wire() for user in users}
    return [{**worker.to_wire(), "user": by_id[worker.user_id]} for worker in workers]


class TestHrOverview:
    """Tests for get_hr_overview."""

    def _route(self, backend, users, workers, jobs, activities):
        backend.add("GET", "/api/dashboard/metrics", {"totalHRs": 1, "totalWorkers": 3, "jobsPending": 2})
        backend.add("GET", "/api/jobs", _wire(jobs))
        backend.add("GET", "/api/workers", _workers_with_users(workers, users))
        backend.add(
            "GET",
            "/api/job-reports",
            [
                {"id": 1, "jobId": 2, "description": "Panel swapped", "status": "submitted"},
                {"id": 2, "jobId": 1, "description": "Old", "status": "approved"},
            ],
        )
        backend.add("GET", "/api/activities", _wire(activities))
        backend.add(
            "GET",
            "/api/dashboard/job-completion-chart",
            {"labels": ["Jan", "Feb"], "data": [25, 30]},
        )

    def test_overview(self, api, backend, users, workers, jobs, activities):
        self._route(backend, users, workers, jobs, activities)

        result = get_hr_overview({}, client=api)

        assert result["metrics"]["totalHRs"] == 1
        assert [job["id"] for job in result["pending_jobs"]] == [3, 4]
        drilling = result["pending_jobs"][1]
        assert drilling["priorityColor"] == "orange"
        assert drilling["statusColor"] == "orange"
        assert drilling["statusBadge"].startswith("bg-orange-100")
        assert drilling["worker"] is None
        # HR users are not among the worker records
        assert drilling["creator"] is None
        assert [w["id"] for w in result["available_workers"]] == [1, 3]
        assert result["available_workers"][0]["statusColor"] == "green"
        assert [r["id"] for r in result["reports_pending_review"]] == [1]
        assert [a["id"] for a in result["recent_activities"]] == [1, 2, 5, 4, 3]
        assert result["completion_chart"] == {"labels": ["Jan", "Feb"], "data": [25, 30]}

    def test_reads_are_cached_until_invalidated(self, api, backend, cache, users, workers, jobs, activities):
        self._route(backend, users, workers, jobs, activities)

        get_hr_overview({}, client=api, cache=cache)
        first = len(backend.requests)
        get_hr_overview({}, client=api, cache=cache)
        assert len(backend.requests) == first

        cache.invalidate("/api/jobs")
        get_hr_overview({}, client=api, cache=cache)
        assert [r["path"] for r in backend.requests[first:]] == ["/api/jobs"]

    def test_backend_failure(self, api, backend):
        backend.add("GET", "/api/dashboard/metrics", "Server exploded", status=500)
        result = get_hr_overview({}, client=api)
        assert result["error"]["code"] == "REMOTE_ERROR"
        assert result["error"]["message"] == "500: Server exploded"


class TestWorkerOverview:
    """Tests for get_worker_overview."""

    def test_overview(self, api, backend, jobs, now):
        backend.add("GET", "/api/jobs/my", _wire(jobs[:2]))
        backend.add(
            "GET",
            "/api/time-tracking/current",
            {"id": 4, "workerId": 1, "clockInTime": "2024-06-12T08:00:00Z"},
        )

        result = get_worker_overview({}, client=api, now=now)

        assert [job["id"] for job in result["today_jobs"]] == [1, 2]
        assert [job["id"] for job in result["pending_jobs"]] == [1, 2]
        assert result["pending_jobs"][0]["priorityColor"] == "red"
        assert result["pending_jobs"][1]["statusColor"] == "yellow"
        assert result["completed_this_week"] == 0
        assert result["clocked_in"] is True
        assert result["current_entry"]["id"] == 4

    def test_clocked_out(self, api, backend, now):
        backend.add("GET", "/api/jobs/my", [])
        backend.add("GET", "/api/time-tracking/current", None)

        result = get_worker_overview({}, client=api, now=now)

        assert result["clocked_in"] is False
        assert result["current_entry"] is None
        assert result["today_jobs"] == []


class TestOverviewsAfterMutations:
    """A mutation from one view refreshes the other view's cached reads."""

    def _route_hr(self, backend, users, workers, jobs, activities, reports=()):
        backend.add("GET", "/api/dashboard/metrics", {"totalHRs": 1, "totalWorkers": 3})
        backend.add("GET", "/api/jobs", _wire(jobs))
        backend.add("GET", "/api/workers", _workers_with_users(workers, users))
        backend.add("GET", "/api/job-reports", list(reports))
        backend.add("GET", "/api/activities", _wire(activities))
        backend.add("GET", "/api/dashboard/job-completion-chart", {"labels": [], "data": []})

    def _route_worker(self, backend, my_jobs):
        backend.add("GET", "/api/jobs/my", my_jobs)
        backend.add("GET", "/api/time-tracking/current", None)

    def test_submitted_report_reaches_hr_review(self, api, backend, cache, users, workers, jobs, activities):
        self._route_hr(backend, users, workers, jobs, activities)
        before = get_hr_overview({}, client=api, cache=cache)
        assert before["reports_pending_review"] == []

        report = {"id": 9, "jobId": 1, "description": "done", "status": "submitted"}
        backend.add("POST", "/api/job-reports", report, status=201)
        backend.add("GET", "/api/job-reports", [report])
        submit_job_report({"job_id": 1, "form": {"description": "done"}}, client=api, cache=cache)

        after = get_hr_overview({}, client=api, cache=cache)
        assert [r["id"] for r in after["reports_pending_review"]] == [9]

    def test_worker_cancel_reaches_hr_jobs(self, api, backend, cache, users, workers, jobs, activities):
        self._route_hr(backend, users, workers, jobs, activities)
        before = get_hr_overview({}, client=api, cache=cache)
        assert [job["id"] for job in before["pending_jobs"]] == [3, 4]

        updated = _wire(jobs)
        updated[2]["status"] = "cancelled"
        backend.add("PATCH", "/api/jobs/3", updated[2])
        backend.add("GET", "/api/jobs", updated)
        result = update_job_status({"job_id": 3, "status": "cancelled"}, client=api, cache=cache)
        assert result["success"] is True

        after = get_hr_overview({}, client=api, cache=cache)
        assert [job["id"] for job in after["pending_jobs"]] == [4]

    def test_hr_assign_reaches_worker_jobs(self, api, backend, cache, jobs, now):
        self._route_worker(backend, [])
        assert get_worker_overview({}, client=api, cache=cache, now=now)["pending_jobs"] == []

        assigned = {**jobs[2].to_wire(), "status": "assigned", "assignedTo": 1}
        backend.add("PATCH", "/api/jobs/3", assigned)
        backend.add("GET", "/api/jobs/my", [assigned])
        assign_job({"job_id": 3, "assignments": {3: 1}}, client=api, cache=cache)

        after = get_worker_overview({}, client=api, cache=cache, now=now)
        assert [job["id"] for job in after["pending_jobs"]] == [3]

    def test_hr_approval_reaches_worker_jobs(self, api, backend, cache, jobs, now):
        in_progress = jobs[1].to_wire()
        self._route_worker(backend, [in_progress])
        before = get_worker_overview({}, client=api, cache=cache, now=now)
        assert before["completed_this_week"] == 0

        completed = {**in_progress, "status": "completed", "completedAt": "2024-06-12T14:30:00Z"}
        backend.add("PATCH", "/api/jobs/2", completed)
        backend.add("PATCH", "/api/job-reports/5", {"id": 5, "jobId": 2, "description": "ok", "status": "approved"})
        backend.add("GET", "/api/jobs/my", [completed])
        approve_job_report({"job_id": 2, "report_id": 5}, client=api, cache=cache)

        after = get_worker_overview({}, client=api, cache=cache, now=now)
        assert after["pending_jobs"] == []
        assert after["completed_this_week"] == 1
