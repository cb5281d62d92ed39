"""Per-tool call handlers that forward invocations to Tasker."""

import logging

from ..models.tool import CallRequest, CallResult, ToolDefinition
from .tasker_client import TaskerClient

logger = logging.getLogger(__name__)

MISSING_ARGUMENTS_MESSAGE = "Arguments must be provided"


class ToolHandler:
    """Handles calls for exactly one tool.

    The handler keeps its own copy of the definition, so the backend task
    it targets can never change after construction.
    """

    def __init__(self, definition: ToolDefinition, client: TaskerClient):
        self._definition = definition.model_copy(deep=True)
        self._client = client

    @property
    def definition(self) -> ToolDefinition:
        return self._definition

    @property
    def tool_name(self) -> str:
        return self._definition.name

    @property
    def tasker_name(self) -> str:
        return self._definition.tasker_name

    async def __call__(self, request: CallRequest) -> CallResult:
        """Validate, log and forward one call.

        Missing arguments produce a failure result without contacting
        Tasker. ``BackendError`` from the client propagates to the caller.
        """
        arguments = request.arguments
        if arguments is None:
            logger.warning(f"Tool {self.tool_name} called without arguments")
            return CallResult.failure(MISSING_ARGUMENTS_MESSAGE)

        # Must never fail the call, so leave formatting to the logging module.
        logger.info("Tool called: %s with args: %s", self.tool_name, arguments)

        result = await self._client.run_task(self.tasker_name, arguments)
        return CallResult.success(result)

    def __repr__(self) -> str:
        return f"ToolHandler(name={self.tool_name!r}, tasker_name={self.tasker_name!r})"


def build_handler(definition: ToolDefinition, client: TaskerClient) -> ToolHandler:
    return ToolHandler(definition, client)
