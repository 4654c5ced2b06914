"""Tests for X-Request-ID middleware.

Tests cover:
- Request ID generation when missing
- Request ID preservation when valid
- Request ID normalization (UUID lowercase)
- Request ID replacement when invalid
- Request ID presence on auth failures and in error bodies
"""

from uuid import UUID

import pytest

from filmroom.middleware.request_id import REQUEST_ID_HEADER, is_valid_request_id


class TestRequestIdMiddleware:
    """Tests for X-Request-ID middleware."""

    def test_request_id_generated_when_missing(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        UUID(response.headers[REQUEST_ID_HEADER])

    def test_valid_request_id_preserved(self, client):
        response = client.get("/api/health", headers={REQUEST_ID_HEADER: "trace-abc_123.x"})

        assert response.headers[REQUEST_ID_HEADER] == "trace-abc_123.x"

    def test_uuid_is_lowercased(self, client):
        value = "3F2504E0-4F89-11D3-9A0C-0305E82C3301"

        response = client.get("/api/health", headers={REQUEST_ID_HEADER: value})

        assert response.headers[REQUEST_ID_HEADER] == value.lower()

    def test_invalid_request_id_replaced(self, client):
        response = client.get("/api/health", headers={REQUEST_ID_HEADER: "bad id with spaces"})

        returned = response.headers[REQUEST_ID_HEADER]
        assert returned != "bad id with spaces"
        UUID(returned)

    def test_auth_failure_carries_request_id(self, client):
        response = client.get("/api/auth/me", headers={REQUEST_ID_HEADER: "req-401"})

        assert response.status_code == 401
        assert response.headers[REQUEST_ID_HEADER] == "req-401"
        assert response.json()["request_id"] == "req-401"


class TestIsValidRequestId:
    @pytest.mark.parametrize("value", ["abc", "a.b-c_d", "3f2504e0-4f89-11d3-9a0c-0305e82c3301"])
    def test_valid(self, value):
        assert is_valid_request_id(value)

    @pytest.mark.parametrize("value", ["", "has space", "x" * 129, "semi;colon"])
    def test_invalid(self, value):
        assert not is_valid_request_id(value)
