"""
Evaluation Service Module

Runs the five research calls of a startup evaluation concurrently and
assembles the EvaluationResult.

Each call gets its own deadline. The first failure cancels the calls still
running and is re-raised, so an evaluation either completes with all five
sections or fails as a whole.
"""

import asyncio
import time
from typing import Awaitable, Callable, Dict, Optional

from ..schemas import AgentResult, EvaluationRequest, EvaluationResult
from ..utils.config import settings
from ..utils.logger import evaluator_logger as logger
from . import prompts
from .agent_client import AgentClient


class AgentTimeoutError(Exception):
    """Raised when a section's agent call exceeds its deadline."""

    def __init__(self, section: str, timeout: float):
        self.section = section
        self.timeout = timeout
        super().__init__(f"Agent call for {section} exceeded the {timeout:g}s deadline")


class Evaluator:
    """Builds the section prompts and fans them out to the Agents API."""

    def __init__(
        self,
        client_factory: Optional[Callable[[], AgentClient]] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            client_factory: Returns a fresh AgentClient per evaluation
            timeout: Per-call deadline in seconds. Defaults to settings.AGENT_TIMEOUT_SECONDS
        """
        self.client_factory = client_factory or AgentClient
        self.timeout = timeout or settings.AGENT_TIMEOUT_SECONDS

    async def _with_deadline(self, section: str, call: Awaitable[AgentResult]) -> AgentResult:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError:
            raise AgentTimeoutError(section, self.timeout) from None

    async def _gather(self, calls: Dict[str, Awaitable[AgentResult]]) -> Dict[str, AgentResult]:
        """Await all calls; on the first error cancel the rest and re-raise."""
        tasks = {
            section: asyncio.ensure_future(self._with_deadline(section, call))
            for section, call in calls.items()
        }
        try:
            results = await asyncio.gather(*tasks.values())
        except BaseException:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)
            raise
        return dict(zip(tasks.keys(), results))

    async def evaluate(self, intake: EvaluationRequest) -> EvaluationResult:
        """
        Evaluate a startup intake.

        Args:
            intake: Startup intake fields

        Returns:
            EvaluationResult with the five report sections

        Raises:
            AgentAPIError: If any agent call is rejected by the API
            AgentTimeoutError: If any agent call exceeds its deadline
        """
        started = time.time()
        logger.info(f"Starting evaluation for {intake.startup_name!r}")

        async with self.client_factory() as client:
            calls: Dict[str, Awaitable[AgentResult]] = {
                "industry_news": client.run(prompts.industry_news_prompt(intake)),
                "synthesis": client.run(prompts.synthesis_prompt(intake)),
                "tam_data": client.run(prompts.tam_prompt(intake)),
                "risk_score": client.run(prompts.risk_prompt(intake)),
            }
            if intake.known_competitors:
                calls["competitor_links"] = client.run(prompts.competitor_links_prompt(intake))

            results = await self._gather(calls)

        if "competitor_links" not in results:
            results["competitor_links"] = AgentResult(text=prompts.NO_COMPETITORS_TEXT)

        logger.info(
            f"Evaluation for {intake.startup_name!r} completed in {time.time() - started:.1f}s"
        )
        return EvaluationResult(**results)
