"""
Prompts for startup evaluation.

This module contains the five research prompts sent to the Agents API for
each evaluation, one per report section.
"""

from ..schemas import EvaluationRequest

NO_COMPETITORS_TEXT = "No competitors listed."

INDUSTRY_NEWS_PROMPT = """Find the 5 most recent and relevant news articles about startups or companies in the {industry} industry, specifically related to this problem: "{problem}".

For each article provide:
- Title
- Source URL
- One-sentence summary

Focus on 2025–2026 news. Cite your sources."""

COMPETITOR_LINKS_PROMPT = """Find the official website and pricing page for each of these companies: {competitors}.

For each company return:
- Company name
- Homepage URL
- Pricing page URL (if publicly available)

Cite your sources."""

SYNTHESIS_PROMPT = """You are a senior venture analyst writing an AI Research Synthesis report section.

Startup: {startup_name} ({industry})
Problem: {problem}
Solution: {solution}
Ideal Customer Profile (ICP): {icp}

Write 3 concise paragraphs:
1. Problem clarity and market pain severity
2. Solution uniqueness and feasibility
3. ICP fit and go-to-market alignment

Be direct, analytical, and grounded in evidence. Cite sources where possible."""

TAM_PROMPT = """You are a market research analyst specializing in regional market sizing.

Startup: {startup_name}
Industry: {industry}
Problem: {problem}
Target Region: {region}

Provide a concise TAM (Total Addressable Market) estimate ONLY for the {region} region. Include:
- Estimated market size in USD
- Key growth drivers in this region
- Any region-specific risks or regulatory considerations

Cite real data sources where available."""

RISK_PROMPT = """You are a venture risk analyst evaluating startup business model viability.

Startup: {startup_name}
Industry: {industry}
Stage: {stage}
Revenue Model: {revenue_model}
Business Model: {business_model}
Competitive Differentiators: {differentiators}
{traction}
Return a structured evaluation with:
1. Risk Level: Low / Medium / High, with a one-sentence justification
2. Confidence Score: 0–100%, based on model clarity, market fit, and differentiation strength
3. Benchmark: How does this model compare to typical {industry} companies at the {benchmark_stage} stage?

Be concise and direct."""


def industry_news_prompt(intake: EvaluationRequest) -> str:
    return INDUSTRY_NEWS_PROMPT.format(
        industry=intake.industry,
        problem=intake.core_problem_statement,
    )


def competitor_links_prompt(intake: EvaluationRequest) -> str:
    return COMPETITOR_LINKS_PROMPT.format(competitors=", ".join(intake.known_competitors))


def synthesis_prompt(intake: EvaluationRequest) -> str:
    return SYNTHESIS_PROMPT.format(
        startup_name=intake.startup_name,
        industry=intake.industry,
        problem=intake.core_problem_statement,
        solution=intake.proposed_solution_overview,
        icp=intake.target_customer_profile,
    )


def tam_prompt(intake: EvaluationRequest) -> str:
    return TAM_PROMPT.format(
        startup_name=intake.startup_name,
        industry=intake.industry,
        problem=intake.core_problem_statement,
        region=intake.primary_geography,
    )


def risk_prompt(intake: EvaluationRequest) -> str:
    """Risk & confidence prompt; traction lines are included only when provided."""
    traction = [
        f"{label}: {value}"
        for label, value in (
            ("MRR", intake.monthly_recurring_revenue),
            ("Active Customers", intake.active_customer_count),
            ("MoM Growth", intake.month_over_month_growth),
        )
        if value
    ]
    return RISK_PROMPT.format(
        startup_name=intake.startup_name,
        industry=intake.industry,
        stage=intake.funding_stage or "Unknown",
        revenue_model=intake.revenue_model_structure,
        business_model=intake.business_model_explanation,
        differentiators=intake.competitive_differentiators,
        traction="".join(f"{line}\n" for line in traction),
        benchmark_stage=intake.funding_stage or "current",
    )
