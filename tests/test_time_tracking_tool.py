"""
Integration tests for clock_in and clock_out tools.
"""

from config import get_config
from tools.time_tracking import clock_in, clock_out

OPEN_ENTRY = {"id": 4, "workerId": 1, "clockInTime": "2024-06-12T08:00:00Z"}


class TestClockIn:
    def test_uses_default_location(self, api, backend, cache):
        backend.add("POST", "/api/time-tracking/clock-in", OPEN_ENTRY)
        cache.set("/api/time-tracking/current", None)

        result = clock_in({}, client=api, cache=cache)

        config = get_config()
        assert result["success"] is True
        assert result["toast"]["title"] == "Clocked in successfully"
        assert result["entry"]["id"] == 4
        assert result["invalidated"] == ["/api/time-tracking/current"]
        assert backend.requests[0]["json"] == {
            "location": {"lat": config.default_lat, "lng": config.default_lng}
        }
        assert not cache.contains("/api/time-tracking/current")

    def test_explicit_location(self, api, backend):
        backend.add("POST", "/api/time-tracking/clock-in", OPEN_ENTRY)
        clock_in({"location": {"lat": 51.5, "lng": -0.12}}, client=api)
        assert backend.requests[0]["json"] == {"location": {"lat": 51.5, "lng": -0.12}}

    def test_already_clocked_in(self, api, backend):
        backend.add("POST", "/api/time-tracking/clock-in", {"message": "Already clocked in"}, status=409)
        result = clock_in(client=api)

        assert result["success"] is False
        assert result["toast"] == {
            "title": "Failed to clock in",
            "description": "409: Already clocked in",
            "variant": "destructive",
        }

    def test_invalid_location(self, api, backend):
        result = clock_in({"location": {"lat": "north"}}, client=api)
        assert result["error"]["code"] == "VALIDATION_ERROR"
        assert backend.requests == []


class TestClockOut:
    def test_success(self, api, backend):
        backend.add(
            "POST",
            "/api/time-tracking/clock-out",
            {**OPEN_ENTRY, "clockOutTime": "2024-06-12T16:00:00Z"},
        )
        result = clock_out(client=api)

        assert result["success"] is True
        assert result["toast"]["title"] == "Clocked out successfully"
        assert result["entry"]["clockOutTime"].startswith("2024-06-12T16:00:00")
