"""
Shared fixtures: a small, consistent field-service data set.

Five users (admin, HR, three workers), three workers, four jobs covering the
pending/assigned/in_progress states, and five activity entries. Job times are
anchored to ``NOW`` so date-sensitive views are deterministic.
"""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from api.client import FieldOpsApiClient
from schemas.entities import Activity, Job, User, Worker
from utils.query_cache import QueryCache

NOW = datetime(2024, 6, 12, 15, 0, tzinfo=timezone.utc)


def _users():
    raw = [
        (1, "admin", "admin", "Admin User", "admin@company.com", "(555) 123-4567", 1),
        (2, "hr.manager", "hr", "HR Manager", "hr@company.com", "(555) 234-5678", 2),
        (3, "john.doe", "worker", "John Doe", "john@company.com", "(555) 345-6789", 3),
        (4, "mike.smith", "worker", "Mike Smith", "mike@company.com", "(555) 456-7890", 4),
        (5, "sarah.wilson", "worker", "Sarah Wilson", "sarah@company.com", "(555) 567-8901", 5),
    ]
    return [
        User(
            id=user_id,
            username=username,
            role=role,
            name=name,
            email=email,
            phone=phone,
            created_at=datetime(2024, 1, day, tzinfo=timezone.utc),
        )
        for user_id, username, role, name, email, phone, day in raw
    ]


def _workers():
    return [
        Worker(id=1, user_id=3, specialty="plumbing", status="available",
               location={"lat": 40.7128, "lng": -74.0060}, completed_jobs=25, rating="4.8"),
        Worker(id=2, user_id=4, specialty="electrical", status="working",
               location={"lat": 40.7589, "lng": -73.9851}, completed_jobs=18, rating="4.6"),
        Worker(id=3, user_id=5, specialty="hvac", status="available",
               location={"lat": 40.7505, "lng": -73.9934}, completed_jobs=32, rating="4.9"),
    ]


def _jobs():
    return [
        Job(
            id=1,
            title="Emergency Pipe Repair",
            description="Kitchen sink is leaking, customer reports water damage.",
            type="plumbing",
            priority="urgent",
            status="assigned",
            location={"address": "123 Main St, Downtown", "lat": 40.7128, "lng": -74.0060},
            assigned_to=1,
            created_by=2,
            customer_name="Mrs. Johnson",
            customer_phone="(555) 123-4567",
            estimated_duration=2,
            scheduled_at=NOW + timedelta(hours=2),
            created_at=NOW - timedelta(hours=2),
        ),
        Job(
            id=2,
            title="Electrical Panel Upgrade",
            description="Replace old electrical panel with modern circuit breakers.",
            type="electrical",
            priority="normal",
            status="in_progress",
            location={"address": "456 Oak Ave, Uptown", "lat": 40.7589, "lng": -73.9851},
            assigned_to=2,
            created_by=2,
            customer_name="Mr. Williams",
            customer_phone="(555) 234-5678",
            estimated_duration=4,
            started_at=NOW - timedelta(hours=1),
            created_at=NOW - timedelta(hours=4),
        ),
        Job(
            id=3,
            title="HVAC System Maintenance",
            description="Regular maintenance check for office building HVAC system.",
            type="hvac",
            priority="normal",
            status="pending",
            location={"address": "789 Business Blvd, Business District", "lat": 40.7505, "lng": -73.9934},
            created_by=2,
            customer_name="ABC Corporation",
            customer_phone="(555) 345-6789",
            estimated_duration=3,
            scheduled_at=NOW + timedelta(hours=24),
            created_at=NOW - timedelta(minutes=30),
        ),
        Job(
            id=4,
            title="Drilling for New Foundation",
            description="Drill holes for new building foundation in downtown area.",
            type="drilling",
            priority="high",
            status="pending",
            location={"address": "321 Construction Ave, Downtown", "lat": 40.72, "lng": -74.01},
            created_by=2,
            customer_name="Construction Corp",
            customer_phone="(555) 456-7890",
            estimated_duration=6,
            scheduled_at=NOW + timedelta(hours=48),
            created_at=NOW - timedelta(hours=1),
        ),
    ]


def _activities():
    raw = [
        (1, "job_assigned", "HR Manager assigned plumbing job to John Doe", 2, 1, timedelta(minutes=30)),
        (2, "job_started", "Mike Smith started electrical work", 4, 2, timedelta(minutes=45)),
        (3, "worker_clocked_in", "John Doe clocked in", 3, 1, timedelta(hours=3)),
        (4, "job_completed", "Sarah Wilson completed HVAC maintenance", 5, 3, timedelta(hours=2)),
        (5, "job_created", "New drilling job created for downtown location", 2, 4, timedelta(hours=1)),
    ]
    return [
        Activity(id=a_id, type=kind, description=text, user_id=user_id, entity_id=entity_id,
                 created_at=NOW - ago)
        for a_id, kind, text, user_id, entity_id, ago in raw
    ]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def users():
    return _users()


@pytest.fixture
def workers():
    return _workers()


@pytest.fixture
def jobs():
    return _jobs()


@pytest.fixture
def activities():
    return _activities()


@pytest.fixture
def hr_user():
    return {"id": 2, "username": "hr.manager", "role": "hr", "name": "HR Manager"}


@pytest.fixture
def worker_user():
    return {"id": 3, "username": "john.doe", "role": "worker", "name": "John Doe"}


@pytest.fixture
def cache():
    return QueryCache()


class RecordingBackend:
    """
    Fake REST backend for ``httpx.MockTransport``.

    Routes are registered as ``(method, path) -> (status, body)``; every
    request is recorded with its decoded JSON body.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, body=None, status=200):
        self.routes[(method, path)] = (status, body)
        return self

    def calls(self, method=None):
        return [r for r in self.requests if method is None or r["method"] == method]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "params": dict(request.url.params),
                "json": body,
                "headers": dict(request.headers),
            }
        )
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": f"No route for {request.url.path}"})
        status, payload = self.routes[key]
        if payload is None:
            return httpx.Response(status)
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, json=payload)


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def api(backend):
    client = FieldOpsApiClient(
        base_url="http://backend.test",
        token="test-token",
        timeout=5,
        transport=httpx.MockTransport(backend),
    )
    yield client
    client.close()
