"""
Unit tests for the evaluation service.
"""
import asyncio

import pytest

from venturescope.schemas import AgentResult, EvaluationRequest
from venturescope.services.agent_client import AgentAPIError
from venturescope.services.evaluator import AgentTimeoutError, Evaluator

SECTION_MARKERS = {
    "industry_news": "most recent and relevant news articles",
    "competitor_links": "official website and pricing page",
    "synthesis": "AI Research Synthesis",
    "tam_data": "TAM (Total Addressable Market)",
    "risk_score": "venture risk analyst",
}


def section_for(prompt):
    return next(section for section, marker in SECTION_MARKERS.items() if marker in prompt)


class FakeAgentClient:
    """Stands in for AgentClient; answers each section from a behaviour table."""

    def __init__(self, behaviours=None):
        self.behaviours = behaviours or {}
        self.prompts = {}
        self.cancelled = []
        self.entered = False
        self.exited = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.exited = True

    async def run(self, prompt):
        section = section_for(prompt)
        self.prompts[section] = prompt
        behaviour = self.behaviours.get(section)
        try:
            if behaviour == "hang":
                await asyncio.sleep(30)
            elif isinstance(behaviour, Exception):
                await asyncio.sleep(0)
                raise behaviour
        except asyncio.CancelledError:
            self.cancelled.append(section)
            raise
        return AgentResult(text=f"{section} report")


@pytest.fixture
def intake(intake_payload):
    return EvaluationRequest.model_validate(intake_payload)


@pytest.mark.asyncio
async def test_evaluate_runs_all_five_sections(intake):
    """Test that every section gets its own prompt and result."""
    client = FakeAgentClient()
    result = await Evaluator(client_factory=lambda: client).evaluate(intake)

    assert set(client.prompts) == set(SECTION_MARKERS)
    assert result.industry_news.text == "industry_news report"
    assert result.competitor_links.text == "competitor_links report"
    assert result.synthesis.text == "synthesis report"
    assert result.tam_data.text == "tam_data report"
    assert result.risk_score.text == "risk_score report"
    assert client.entered and client.exited


@pytest.mark.asyncio
async def test_prompts_are_built_from_intake(intake):
    client = FakeAgentClient()
    await Evaluator(client_factory=lambda: client).evaluate(intake)

    assert "Covariant, RightHand Robotics" in client.prompts["competitor_links"]
    assert "ONLY for the Europe region" in client.prompts["tam_data"]
    assert "MRR: $120,000" in client.prompts["risk_score"]
    assert "at the Seed stage" in client.prompts["risk_score"]


@pytest.mark.asyncio
async def test_no_competitors_skips_competitor_call(intake):
    intake.known_competitors = []
    client = FakeAgentClient()

    result = await Evaluator(client_factory=lambda: client).evaluate(intake)

    assert "competitor_links" not in client.prompts
    assert result.competitor_links.text == "No competitors listed."
    assert result.competitor_links.citations == []


@pytest.mark.asyncio
async def test_failure_cancels_remaining_calls(intake):
    """The first error propagates and the calls still running are cancelled."""
    client = FakeAgentClient({
        "tam_data": AgentAPIError(500, "boom"),
        "industry_news": "hang",
        "risk_score": "hang",
    })

    with pytest.raises(AgentAPIError, match="Agents API 500: boom"):
        await Evaluator(client_factory=lambda: client).evaluate(intake)

    assert sorted(client.cancelled) == ["industry_news", "risk_score"]
    assert client.exited


@pytest.mark.asyncio
async def test_call_exceeding_deadline_fails_evaluation(intake):
    client = FakeAgentClient({"synthesis": "hang"})

    with pytest.raises(AgentTimeoutError) as exc_info:
        await Evaluator(client_factory=lambda: client, timeout=0.05).evaluate(intake)

    assert exc_info.value.section == "synthesis"
    assert "synthesis" in str(exc_info.value)
