"""
Error translation: storage failures, connection acquisition failures and
framework-level errors
"""

import asyncio
import uuid

import asyncpg
import pytest


class TestStorageFailures:

    @pytest.mark.asyncio
    async def test_list_failure_reports_driver_message(self, client, user_pool):
        user_pool.fail_next = asyncpg.exceptions.UndefinedTableError('relation "users" does not exist')

        response = await client.get("/get")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "HTTP 500"
        assert body["message"] == 'Database error: relation "users" does not exist'
        assert body["trace_id"]
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_connection_is_released_after_failure(self, client, user_pool, ada):
        user_pool.fail_next = asyncpg.exceptions.UndefinedTableError('relation "users" does not exist')

        await client.post("/add", json=ada)

        assert user_pool.acquired == 1
        assert user_pool.in_use == 0

    @pytest.mark.asyncio
    async def test_lost_connection_is_a_storage_failure(self, client, user_pool):
        user_pool.fail_next = asyncpg.exceptions.ConnectionDoesNotExistError("connection was closed in the middle of operation")

        response = await client.get(f"/delete/{uuid.uuid4()}")

        assert response.status_code == 500
        assert response.json()["message"].startswith("Database error: connection was closed")

    @pytest.mark.asyncio
    async def test_nothing_is_retried(self, client, user_pool):
        user_pool.fail_next = asyncpg.exceptions.UndefinedTableError('relation "users" does not exist')

        await client.get("/get")

        assert len(user_pool.statements) == 1


class TestDispatchFailures:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method,path,body,message", [
        ("GET", "/get", None, "Error fetching users"),
        ("POST", "/add", {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}, "Error adding user"),
        ("POST", f"/update/{uuid.uuid4()}", {"email": "x@example.com"}, "Error updating user"),
        ("GET", f"/delete/{uuid.uuid4()}", None, "Error deleting user"),
    ])
    async def test_acquire_timeout_aborts_request(self, client, user_pool, method, path, body, message):
        user_pool.acquire_error = asyncio.TimeoutError()

        response = await client.request(method, path, json=body)

        assert response.status_code == 500
        assert response.json()["message"] == message
        assert user_pool.statements == []

    @pytest.mark.asyncio
    async def test_database_unreachable(self, client, user_pool):
        user_pool.acquire_error = ConnectionRefusedError(111, "Connect call failed")

        response = await client.get("/get")

        assert response.status_code == 500
        assert response.json()["message"] == "Error fetching users"

    @pytest.mark.asyncio
    async def test_closed_pool(self, client, user_pool):
        user_pool.acquire_error = asyncpg.InterfaceError("pool is closing")

        response = await client.get("/get")

        assert response.status_code == 500
        assert response.json()["message"] == "Error fetching users"


class TestResponseShape:

    @pytest.mark.asyncio
    async def test_trace_id_header_on_every_response(self, client):
        ok = await client.get("/")
        missing = await client.get("/get/not-a-uuid")

        assert len(ok.headers["X-Trace-ID"]) == 8
        assert len(missing.headers["X-Trace-ID"]) == 8

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP 404"

    @pytest.mark.asyncio
    async def test_wrong_method(self, client):
        response = await client.post("/get")

        assert response.status_code == 405

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, client):
        response = await client.post(
            "/add",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Request validation failed"
