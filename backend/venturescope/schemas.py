"""
Schemas Module

This module defines Pydantic models for request/response validation and serialization.
Wire names are camelCase (the browser client's convention); Python attributes are snake_case.

Key Features:
- Intake validation for the evaluation form
- Agent result and evaluation result payloads
- Session records for client-side persistence
- Report extraction results for the results memo
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

RiskLevel = Literal["Low", "Medium", "High"]

INDUSTRIES = [
    "AI/Machine Learning",
    "Fintech",
    "HealthTech/BioTech",
    "Climate/Energy",
    "Enterprise Saas/B2B Tools",
    "Consumer/Marketplace",
    "Other",
]

FUNDING_STAGES = ["Idea", "Pre-Seed", "Seed"]

GEOGRAPHIES = [
    "North America",
    "Latin America",
    "Europe",
    "Middle East & Africa",
    "South Asia",
    "East Asia",
    "Southeast Asia",
    "Oceania",
    "Global",
    "Other",
]

REVENUE_MODELS = [
    "SaaS / Subscription",
    "Marketplace / Transaction Fee",
    "Freemium",
    "License",
    "Usage-Based / Pay-per-use",
    "E-commerce / Direct Sales",
    "Consulting / Services",
    "Advertising",
    "Other",
]


class CamelModel(BaseModel):
    """Base model serializing to camelCase while accepting either spelling."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Agent results
class Citation(CamelModel):
    """A source cited by the agent while producing a section."""
    title: str = ""
    url: str = ""
    snippet: str = ""


class AgentResult(CamelModel):
    """Concatenated text of one agent run plus its citations in stream order."""
    text: str = ""
    citations: List[Citation] = Field(default_factory=list)


class EvaluationResult(CamelModel):
    """The five report sections returned by the evaluate endpoint."""
    industry_news: AgentResult
    competitor_links: AgentResult
    synthesis: AgentResult
    tam_data: AgentResult
    risk_score: AgentResult


# Intake
class EvaluationRequest(CamelModel):
    """
    Intake fields accepted by the evaluate endpoint.

    Everything is optional here: the endpoint builds prompts from whatever it
    receives. Field-level rules live on IntakeForm, which the client validates
    before submitting.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    startup_name: str = ""
    industry: str = ""
    funding_stage: Optional[str] = None
    primary_geography: str = ""
    target_customer_profile: str = ""
    core_problem_statement: str = ""
    proposed_solution_overview: str = ""
    revenue_model_structure: str = ""
    business_model_explanation: str = ""
    known_competitors: List[str] = Field(default_factory=list)
    competitive_differentiators: str = ""
    monthly_recurring_revenue: Optional[str] = None
    active_customer_count: Optional[str] = None
    month_over_month_growth: Optional[str] = None


class IntakeForm(EvaluationRequest):
    """Intake as collected by the multi-step form, with the form's validation rules."""
    model_config = ConfigDict(validate_default=True)

    evaluation_terms: bool = False

    @field_validator("startup_name", "industry", "primary_geography", "revenue_model_structure")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Validate that a required field is not blank."""
        if not v or not v.strip():
            raise ValueError("This field is required")
        return v.strip()

    @field_validator("funding_stage")
    @classmethod
    def validate_funding_stage(cls, v: Optional[str]) -> str:
        """Validate that a funding stage was chosen."""
        if not v or not v.strip():
            raise ValueError("Funding stage is required")
        return v.strip()

    @field_validator(
        "target_customer_profile",
        "core_problem_statement",
        "proposed_solution_overview",
        "business_model_explanation",
        "competitive_differentiators",
    )
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Validate that free-text descriptions carry at least a sentence."""
        if len(v.strip()) < 10:
            raise ValueError("Please provide at least 10 characters")
        return v.strip()

    @field_validator("known_competitors")
    @classmethod
    def validate_competitors(cls, v: List[str]) -> List[str]:
        """Trim competitor names, dropping blanks and duplicates."""
        cleaned: List[str] = []
        for name in v:
            name = name.strip()
            if name and name not in cleaned:
                cleaned.append(name)
        return cleaned

    @field_validator("evaluation_terms")
    @classmethod
    def validate_terms(cls, v: bool) -> bool:
        """The evaluation terms must be accepted before submitting."""
        if v is not True:
            raise ValueError("You must accept the evaluation terms to proceed")
        return v

    @property
    def is_seed_stage(self) -> bool:
        """Traction metrics are only collected for seed-stage startups."""
        return self.funding_stage == "Seed"


# Sessions
class Session(CamelModel):
    """One persisted evaluation run."""
    id: str
    created_at: datetime
    intake: EvaluationRequest
    result: EvaluationResult
    confidence: int
    risk_level: RiskLevel


# Report extraction
class RiskAssessment(CamelModel):
    """Fields mined from the risk & confidence section."""
    confidence: int = 75
    risk_level: RiskLevel = "Medium"
    justification: str = ""
    rationale: str = ""


class TamStats(CamelModel):
    """Headline market-size figures; None when the text has no match."""
    tam: Optional[str] = None
    cagr: Optional[str] = None
    year: Optional[str] = None


class RiskItem(CamelModel):
    """A '- **Title**: body' bullet from the region-risk section."""
    title: str
    body: str = ""


class NewsArticle(CamelModel):
    """A numbered news sub-section from the industry news report."""
    number: int
    title: str
    source_url: str = ""
    source_domain: str = ""
    summary: str = ""


class ReportSummary(CamelModel):
    """Everything the results memo shows beyond the raw markdown."""
    risk: RiskAssessment
    tam_main: str = ""
    tam_risks: str = ""
    tam_stats: TamStats
    region_risks: List[RiskItem] = Field(default_factory=list)
    news: List[NewsArticle] = Field(default_factory=list)
