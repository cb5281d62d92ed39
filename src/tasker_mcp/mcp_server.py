"""
MCP server adapter for the tool registry

Exposes the registered Tasker tools through the MCP SDK's low-level server,
over stdio or as SSE routes on the FastAPI app.
"""

import logging
from typing import Any, Dict, List, Optional

import mcp.types as types
from fastapi import FastAPI
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from starlette.requests import Request
from starlette.responses import Response

from .errors import ArgumentError, ToolNotFoundError
from .models.tool import ToolDescriptor
from .services.schema_translator import to_json_schema
from .services.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "tasker-mcp-server"
SERVER_VERSION = "1.0.0"


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=to_json_schema(descriptor.properties),
    )


def _pass_missing_arguments(server: Server, registry: ToolRegistry) -> None:
    """Route ``tools/call`` requests without arguments straight to the registry.

    The SDK's ``call_tool`` decorator replaces missing arguments with ``{}``,
    which would forward the call to Tasker instead of failing it.
    """
    sdk_handler = server.request_handlers[types.CallToolRequest]

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        if req.params.arguments is not None:
            return await sdk_handler(req)
        try:
            result = await registry.call(req.params.name, None)
            text, is_error = result.text, result.is_error
        except ToolNotFoundError as e:
            text, is_error = str(e), True
        return types.ServerResult(
            types.CallToolResult(content=[types.TextContent(type="text", text=text)], isError=is_error)
        )

    server.request_handlers[types.CallToolRequest] = handle_call_tool


def create_mcp_server(registry: ToolRegistry) -> Server:
    """Create an MCP server whose tools are the registry's tools."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)
    tools = [to_mcp_tool(descriptor) for descriptor in registry.list_descriptors()]

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        result = await registry.call(name, arguments)
        if result.is_error:
            # The low-level server reports raised errors as isError results
            raise ArgumentError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    _pass_missing_arguments(server, registry)
    return server


async def run_stdio(server: Server) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    logger.info("Starting MCP server on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def mount_sse(app: FastAPI, server: Server, messages_path: str = "/messages/") -> SseServerTransport:
    """Add ``GET /sse`` and ``POST {messages_path}`` to ``app``."""
    sse = SseServerTransport(messages_path)

    async def handle_sse(request: Request) -> Response:
        async with sse.connect_sse(request.scope, request.receive, request._send) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        return Response()

    app.add_route("/sse", handle_sse, methods=["GET"])
    app.mount(messages_path, app=sse.handle_post_message)
    return sse
