"""HTTP client for the Tasker task execution endpoint."""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Settings
from ..errors import BackendError

logger = logging.getLogger(__name__)


class TaskerClient:
    """Runs Tasker tasks over HTTP.

    A single instance is shared by every tool handler. The underlying
    ``httpx.AsyncClient`` is safe for concurrent use and no per-call state
    is kept on the instance.
    """

    def __init__(
        self,
        host: str = "0.0.0.0",
        port: int = 1821,
        api_key: Optional[str] = None,
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = f"http://{host}:{port}"
        self.api_key = api_key
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "TaskerClient":
        return cls(
            host=settings.tasker_host,
            port=settings.tasker_port,
            api_key=settings.tasker_api_key,
            timeout=settings.request_timeout,
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def run_task(self, tasker_name: str, arguments: Dict[str, Any]) -> str:
        """Execute a Tasker task and return the response body verbatim.

        Args:
            tasker_name: Name of the task inside Tasker
            arguments: Task arguments, sent as JSON

        Returns:
            The raw response text of a 200 response

        Raises:
            BackendError: On network failure, timeout or any non-200 status
        """
        payload = {"name": tasker_name, "arguments": arguments}
        try:
            response = await self._client.post("/run_task", json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Tasker request for {tasker_name} failed: {e}")
            raise BackendError(
                f"Tasker request failed: {e}",
                details={"tasker_name": tasker_name, "url": f"{self.base_url}/run_task"},
            ) from e

        if response.status_code != 200:
            logger.error(f"Tasker returned HTTP {response.status_code} for {tasker_name}")
            raise BackendError.from_response(response.status_code, response.text)

        return response.text

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TaskerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
