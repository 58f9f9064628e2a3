"""
Agents API Client Module

Async client for the You.com Agents API, the research service behind every
report section.

The API always answers with server-sent events, even when streaming is not
requested, so the body is buffered and handed to the stream parser.
"""

from typing import Any, Dict, Optional

import httpx

from ..schemas import AgentResult
from ..utils.config import settings
from ..utils.logger import agent_logger as logger
from .stream_parser import parse_agent_stream


class AgentAPIError(Exception):
    """Raised when the Agents API answers with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Agents API {status_code}: {body}")


class AgentClient:
    """
    Client for the Agents API.

    Use as an async context manager so the HTTP client is opened once and
    shared by all calls of an evaluation.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Agents API key. Defaults to settings.YOU_API_KEY
            base_url: Agent runs endpoint. Defaults to settings.AGENTS_URL
            timeout: HTTP timeout in seconds. Defaults to settings.AGENT_TIMEOUT_SECONDS
            transport: Optional httpx transport, used by tests

        Raises:
            ValueError: If no API key is configured
        """
        self.api_key = api_key if api_key is not None else settings.YOU_API_KEY
        if not self.api_key:
            logger.error("No Agents API key found. Please set YOU_API_KEY in your .env file.")
            raise ValueError("Agents API key is required but not provided")

        self.url = base_url or settings.AGENTS_URL
        self.timeout = timeout or settings.AGENT_TIMEOUT_SECONDS
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Set up the HTTP client when entering context."""
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        """Close the HTTP client when exiting context."""
        if self.client:
            await self.client.aclose()
            self.client = None

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        """Request body for one agent run."""
        return {
            "agent": settings.AGENT_NAME,
            "input": prompt,
            "tools": [{"type": "research"}],
            "verbosity": settings.AGENT_VERBOSITY,
            "workflow_config": {"max_workflow_steps": settings.AGENT_MAX_WORKFLOW_STEPS},
        }

    async def run(self, prompt: str) -> AgentResult:
        """
        Run the research agent on a prompt.

        Args:
            prompt: Research instructions for the agent

        Returns:
            AgentResult with the answer text and citations

        Raises:
            AgentAPIError: If the API answers with a non-success status
            httpx.HTTPError: For transport failures
        """
        if not self.client:
            raise RuntimeError("HTTP client not initialized. Use with 'async with' context.")

        logger.info(f"Running agent: {prompt[:80]!r}")
        response = await self.client.post(
            self.url,
            json=self.build_payload(prompt),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )

        if not response.is_success:
            logger.error(f"Agents API returned {response.status_code}")
            raise AgentAPIError(response.status_code, response.text)

        result = parse_agent_stream(response.text)
        logger.info(
            f"Agent run completed: {len(result.text)} chars, {len(result.citations)} citations"
        )
        return result
