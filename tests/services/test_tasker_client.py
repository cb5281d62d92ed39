"""Tests for the Tasker HTTP client"""

import json

import httpx
import pytest

from tasker_mcp.config import Settings
from tasker_mcp.errors import BackendError
from tasker_mcp.services.tasker_client import TaskerClient


class TestTaskerClient:
    @pytest.mark.asyncio
    async def test_success_passthrough(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="42"))

        assert await client.run_task("MCP Answer", {}) == "42"

    @pytest.mark.asyncio
    async def test_body_not_trimmed_or_parsed(self, make_client):
        body = '  {"result": [1, 2]}\n'
        client = make_client(lambda request: httpx.Response(200, text=body))

        assert await client.run_task("MCP Answer", {}) == body

    @pytest.mark.asyncio
    async def test_request_shape(self, make_client, recorded_requests):
        client = make_client(lambda request: httpx.Response(200, text="ok"))

        await client.run_task("MCP Search", {"q": "cats", "limit": 3})

        (request,) = recorded_requests
        assert request.method == "POST"
        assert str(request.url) == "http://tasker.local:1821/run_task"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "MCP Search", "arguments": {"q": "cats", "limit": 3}}

    @pytest.mark.asyncio
    async def test_no_auth_header_without_api_key(self, make_client, recorded_requests):
        client = make_client(lambda request: httpx.Response(200, text="ok"))

        await client.run_task("MCP Search", {})

        assert "Authorization" not in recorded_requests[0].headers

    @pytest.mark.asyncio
    async def test_bearer_auth_with_api_key(self, make_client, recorded_requests):
        client = make_client(lambda request: httpx.Response(200, text="ok"), api_key="secret")

        await client.run_task("MCP Search", {})

        assert recorded_requests[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_error_status(self, make_client):
        client = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(BackendError) as exc_info:
            await client.run_task("MCP Search", {})

        error = exc_info.value
        assert "500" in str(error)
        assert "boom" in str(error)
        assert error.status_code == 500
        assert error.body == "boom"
        assert error.error_code == "BACKEND_ERROR"

    @pytest.mark.asyncio
    async def test_non_200_success_codes_fail(self, make_client):
        client = make_client(lambda request: httpx.Response(201, text="created"))

        with pytest.raises(BackendError) as exc_info:
            await client.run_task("MCP Search", {})

        assert exc_info.value.status_code == 201

    @pytest.mark.asyncio
    async def test_network_error(self, make_client):
        def respond(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(respond)

        with pytest.raises(BackendError) as exc_info:
            await client.run_task("MCP Search", {})

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self, make_client):
        def respond(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(respond)

        with pytest.raises(BackendError):
            await client.run_task("MCP Search", {})

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, make_client):
        async with make_client(lambda request: httpx.Response(200, text="ok")) as client:
            assert await client.run_task("MCP Search", {}) == "ok"

        assert client._client.is_closed

    def test_from_settings(self):
        settings = Settings(tasker_host="10.0.0.2", tasker_port=1999, tasker_api_key="k", request_timeout=5)

        client = TaskerClient.from_settings(settings)

        assert client.base_url == "http://10.0.0.2:1999"
        assert client.api_key == "k"
        assert client.timeout == 5
