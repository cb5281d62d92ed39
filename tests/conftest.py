"""
Test configuration and shared fixtures for Tasker MCP tests.

The Tasker backend is replaced by ``httpx.MockTransport`` so the real
``TaskerClient`` code path runs without a network.
"""

import json
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from tasker_mcp.models.tool import ToolDefinition
from tasker_mcp.services.tasker_client import TaskerClient


@pytest.fixture
def raw_definitions() -> List[Dict[str, Any]]:
    """Tool definitions as they appear in the definitions file"""
    return [
        {
            "tasker_name": "MCP Search",
            "name": "tasker_search",
            "description": "Search the phone",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "q": {"type": "string", "description": "query"},
                    "limit": {"type": "number", "description": "Maximum results"},
                },
                "required": ["q"],
            },
        },
        {
            "tasker_name": "MCP Flashlight",
            "name": "tasker_flashlight",
            "description": "Toggle the flashlight",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "state": {"type": "string", "enum": ["on", "off"], "description": "Desired state"},
                },
                "required": ["state"],
            },
        },
        {
            "tasker_name": "MCP Battery",
            "name": "tasker_battery",
            "description": "Read the battery level",
            "inputSchema": {"type": "object", "properties": {}},
        },
    ]


@pytest.fixture
def sample_definitions(raw_definitions) -> List[ToolDefinition]:
    return [ToolDefinition.model_validate(entry) for entry in raw_definitions]


@pytest.fixture
def tools_file(tmp_path, raw_definitions):
    """Definitions written to a temporary JSON file"""
    path = tmp_path / "tools.json"
    path.write_text(json.dumps(raw_definitions), encoding="utf-8")
    return path


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(recorded_requests) -> Callable[..., TaskerClient]:
    """Factory for a TaskerClient whose backend is a plain function.

    ``respond(request)`` returns an ``httpx.Response``; every request is
    recorded in ``recorded_requests``.
    """

    def factory(respond: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> TaskerClient:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return respond(request)

        kwargs.setdefault("host", "tasker.local")
        kwargs.setdefault("port", 1821)
        return TaskerClient(transport=httpx.MockTransport(handler), **kwargs)

    return factory


@pytest.fixture
def echo_client(make_client) -> TaskerClient:
    """Tasker backend that answers with the arguments it received"""

    def respond(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        return httpx.Response(200, text=json.dumps({"task": payload["name"], "arguments": payload["arguments"]}))

    return make_client(respond)


@pytest.fixture
def mock_client():
    """Mock Tasker client"""
    client = Mock(spec=TaskerClient)
    client.run_task = AsyncMock(return_value="ok")
    client.aclose = AsyncMock()
    return client
