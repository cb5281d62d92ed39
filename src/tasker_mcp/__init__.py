# Tasker MCP server
# Main module initialization and CLI entry point

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings, load_settings
from .errors import ConfigurationError, TransportError
from .services.definition_loader import load_tool_definitions
from .services.tasker_client import TaskerClient
from .services.tool_registry import ToolRegistry
from .services.xml_converter import convert_tasker_xml, dump_definitions

__version__ = "1.0.0"

TRANSPORT_MODES = ("stdio", "sse")

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; in stdio mode stdout carries the protocol."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


def build_registry(settings: Settings) -> ToolRegistry:
    """Load definitions and bind every tool to a shared Tasker client."""
    if not settings.tools_path:
        raise ConfigurationError(
            "Please provide the --tools flag with the path to the JSON file containing tool definitions",
            kind=ConfigurationError.NOT_FOUND,
        )

    definitions = load_tool_definitions(settings.tools_path)
    return ToolRegistry.from_definitions(definitions, TaskerClient.from_settings(settings))


def serve(settings: Settings) -> None:
    """Build the registry and serve it on the configured transport."""
    if settings.mode not in TRANSPORT_MODES:
        raise TransportError(settings.mode)

    registry = build_registry(settings)

    if settings.mode == "stdio":
        import anyio
        from .mcp_server import create_mcp_server, run_stdio

        async def _run() -> None:
            try:
                await run_stdio(create_mcp_server(registry))
            finally:
                await registry.aclose()

        anyio.run(_run)
    else:
        import uvicorn
        from .main import create_app

        logger.info(f"Starting SSE server on {settings.host}:{settings.port}...")
        uvicorn.run(create_app(settings, registry), host=settings.host, port=settings.port)


def convert(xml_path: str, output: Optional[str] = None) -> None:
    """Write tool definitions converted from a Tasker XML export."""
    content = dump_definitions(convert_tasker_xml(Path(xml_path)))
    if output:
        Path(output).write_text(content + "\n", encoding="utf-8")
        logger.info(f"Wrote tool definitions to {output}")
    else:
        sys.stdout.write(content + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasker-mcp", description="Expose Tasker tasks as MCP tools")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Serve tool definitions over MCP")
    serve_parser.add_argument("--tools", dest="tools_path", help="Path to JSON file with Tasker tool definitions")
    serve_parser.add_argument("--mode", help="Transport mode: sse, or stdio (default: stdio)")
    serve_parser.add_argument("--host", help="Host address to listen on for SSE server (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, help="Port to listen on for SSE server (default: 8000)")
    serve_parser.add_argument("--tasker-host", help="Tasker server host (default: 0.0.0.0)")
    serve_parser.add_argument("--tasker-port", type=int, help="Tasker server port (default: 1821)")
    serve_parser.add_argument("--tasker-api-key", help="Tasker API Key")
    serve_parser.add_argument("--timeout", dest="request_timeout", type=float, help="Tasker request timeout in seconds (default: 30)")
    serve_parser.add_argument("--log-level", help="Logging level (default: INFO)")

    convert_parser = subparsers.add_parser("convert", help="Convert a Tasker XML export into tool definitions")
    convert_parser.add_argument("xml", help="Path to the Tasker XML export")
    convert_parser.add_argument("-o", "--output", help="Write to this file instead of stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "convert":
        configure_logging()
        try:
            convert(args.xml, args.output)
        except ConfigurationError as e:
            logger.error(f"Failed to convert Tasker export: {e}")
            return 1
        return 0

    if args.command != "serve":
        parser.print_help(sys.stderr)
        return 2

    settings = load_settings(
        tools_path=args.tools_path,
        mode=args.mode,
        host=args.host,
        port=args.port,
        tasker_host=args.tasker_host,
        tasker_port=args.tasker_port,
        tasker_api_key=args.tasker_api_key,
        request_timeout=args.request_timeout,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)

    try:
        serve(settings)
    except ConfigurationError as e:
        logger.error(f"Failed to load tools: {e}")
        return 1
    except TransportError as e:
        logger.error(str(e))
        return 1
    return 0
