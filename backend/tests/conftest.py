"""
Root conftest file for pytest.

This file is automatically loaded by pytest and contains setup
for making imports work correctly in tests.
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add the backend directory to the Python path for imports
backend_dir = str(Path(__file__).parent.parent)
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

# Keep test runs away from the real data directory and API key
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="venturescope-test-"))
os.environ["YOU_API_KEY"] = "test-you-key"


@pytest.fixture
def intake_payload():
    """A complete seed-stage intake as the browser client sends it."""
    return {
        "startupName": "Acme Robotics",
        "industry": "AI/Machine Learning",
        "fundingStage": "Seed",
        "primaryGeography": "Europe",
        "targetCustomerProfile": "Mid-size warehouse operators in the EU",
        "coreProblemStatement": "Manual picking is slow and error prone",
        "proposedSolutionOverview": "Vision-guided picking arms leased per month",
        "revenueModelStructure": "SaaS / Subscription",
        "businessModelExplanation": "Monthly robot-as-a-service subscription per arm",
        "knownCompetitors": ["Covariant", "RightHand Robotics"],
        "competitiveDifferentiators": "Works with existing shelving, no retrofit",
        "monthlyRecurringRevenue": "$120,000",
        "activeCustomerCount": "42",
        "monthOverMonthGrowth": "18%",
        "evaluationTerms": True,
    }


RISK_TEXT = """## Business Model Risk Evaluation

### 1. Risk Level: **Low**
**Justification:** Recurring *subscription* revenue with proven demand.

### 2. Confidence Score: **82%**
**Rationale:**
- Clear pricing model
- Strong differentiation
---
### 3. Benchmark
In line with peers.
"""


@pytest.fixture
def risk_text():
    return RISK_TEXT


@pytest.fixture
def evaluation_payload():
    """An evaluate response body as the backend returns it."""
    return {
        "industryNews": {"text": "### 1. **Acme Raises Seed**\nSource URL: [link](https://example.com/a)\n**Summary:** grew fast", "citations": []},
        "competitorLinks": {"text": "Covariant: https://covariant.ai", "citations": [{"title": "Covariant", "url": "https://covariant.ai", "snippet": ""}]},
        "synthesis": {"text": "Strong problem clarity.", "citations": []},
        "tamData": {"text": "The European market is $4.2–5.1 billion growing at 12% CAGR through 2030.", "citations": []},
        "riskScore": {"text": RISK_TEXT, "citations": []},
    }
