"""Registry of translated tools and their handlers."""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..errors import ConfigurationError, DuplicateToolError, ToolNotFoundError
from ..models.tool import CallRequest, CallResult, ToolDefinition, ToolDescriptor
from .dispatcher import ToolHandler, build_handler
from .schema_translator import build_descriptor
from .tasker_client import TaskerClient

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Read-only lookup of tools by external name.

    Built once before serving; nothing is added or removed afterwards, so
    concurrent readers need no locking.
    """

    def __init__(
        self,
        entries: Iterable[Tuple[ToolDescriptor, ToolHandler]],
        client: Optional[TaskerClient] = None,
    ):
        self._tools: Dict[str, Tuple[ToolDescriptor, ToolHandler]] = {}
        for descriptor, handler in entries:
            if descriptor.name in self._tools:
                raise DuplicateToolError(descriptor.name)
            self._tools[descriptor.name] = (descriptor, handler)

        if not self._tools:
            raise ConfigurationError("No tools defined", kind=ConfigurationError.EMPTY)

        self.client = client

    @classmethod
    def from_definitions(
        cls, definitions: Iterable[ToolDefinition], client: TaskerClient
    ) -> "ToolRegistry":
        """Translate each definition and bind its handler.

        Raises:
            DuplicateToolError: If two definitions share an external name
            ConfigurationError: If there are no definitions at all
        """
        entries = [
            (build_descriptor(definition), build_handler(definition, client))
            for definition in definitions
        ]
        registry = cls(entries, client=client)
        for descriptor, handler in entries:
            logger.info(
                f"Registered tool {descriptor.name} -> Tasker task {handler.tasker_name} "
                f"({len(descriptor.properties)} properties)"
            )
        return registry

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self.list_descriptors())

    def names(self) -> List[str]:
        return list(self._tools)

    def list_descriptors(self) -> List[ToolDescriptor]:
        return [descriptor for descriptor, _ in self._tools.values()]

    def get(self, name: str) -> Tuple[ToolDescriptor, ToolHandler]:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name) from None

    def get_descriptor(self, name: str) -> ToolDescriptor:
        return self.get(name)[0]

    def get_handler(self, name: str) -> ToolHandler:
        return self.get(name)[1]

    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallResult:
        """Dispatch a call to the named tool's handler."""
        handler = self.get_handler(name)
        return await handler(CallRequest(tool_name=name, arguments=arguments))

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()
