import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from venturescope.client import (
    PROGRESS_TICK_SECONDS,
    EvaluationClient,
    EvaluationFailed,
    advance_progress,
)
from venturescope.schemas import (
    FUNDING_STAGES,
    GEOGRAPHIES,
    INDUSTRIES,
    REVENUE_MODELS,
    IntakeForm,
    Session,
)
from venturescope.services.report_extractor import summarize_report
from venturescope.services.session_manager import SessionManager
from venturescope.services.session_store import create_store
from venturescope.utils.config import settings
from venturescope.utils.logger import frontend_logger as logger

RISK_BADGES = {
    "Low": "🟢 Low Risk",
    "Medium": "🟠 Medium Risk",
    "High": "🔴 High Risk",
}

PAGES = ["Home", "New Evaluation", "Review & Submit", "Results"]


@st.cache_resource
def get_session_manager() -> SessionManager:
    return SessionManager(create_store())


st.set_page_config(page_title="VentureScope", layout="wide")

# --- Settings ---
st.sidebar.header("VentureScope")
api_base_url = st.sidebar.text_input("API Base URL", value=settings.API_BASE_URL)

if "page" not in st.session_state:
    st.session_state.page = "Home"
# Page switches requested by buttons are applied before the radio renders
if "page_request" in st.session_state:
    st.session_state.page = st.session_state.pop("page_request")
page = st.sidebar.radio("Navigate", PAGES, key="page")

manager = get_session_manager()


def go_to(target: str, session_id: Optional[str] = None) -> None:
    st.session_state.page_request = target
    if session_id:
        st.session_state.session_id = session_id
    st.rerun()


def render_home() -> None:
    st.title("Research Sessions")
    st.markdown("Every evaluation you run is listed here, newest first.")

    if st.button("➕ New Project"):
        go_to("New Evaluation")

    sessions = manager.list_sessions()
    if not sessions:
        st.info('No research yet. Click "New Project" to get started.')
        return

    df = pd.DataFrame([
        {
            "Startup Name": s.intake.startup_name,
            "Industry": s.intake.industry,
            "Stage": s.intake.funding_stage,
            "Confidence": f"{s.confidence}%",
            "Risk Level": RISK_BADGES.get(s.risk_level, s.risk_level),
            "Date": s.created_at.strftime("%b %d, %Y"),
        }
        for s in sessions
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)

    labels = {s.id: f"{s.intake.startup_name} ({s.created_at:%Y-%m-%d %H:%M})" for s in sessions}
    selected = st.selectbox("Open session", list(labels), format_func=labels.get)
    col1, col2 = st.columns([1, 1])
    with col1:
        if st.button("View"):
            go_to("Results", selected)
    with col2:
        if st.button("🗑️ Clear all sessions"):
            manager.clear_sessions()
            st.rerun()


def render_intake() -> None:
    st.title("New Evaluation")
    st.markdown("Tell us about the startup. All fields except traction metrics are required.")

    draft = manager.load_draft() or {}
    competitors = st.session_state.setdefault("competitors", list(draft.get("knownCompetitors", [])))

    # Competitors are edited outside the form so they can be added one at a time
    st.subheader("Known Competitors")
    new_competitor = st.text_input("Add a competitor", key="competitor_input")
    if st.button("Add competitor"):
        name = new_competitor.strip()
        if name and name not in competitors:
            competitors.append(name)
    for name in list(competitors):
        col1, col2 = st.columns([4, 1])
        col1.write(f"• {name}")
        if col2.button("Remove", key=f"remove_{name}"):
            competitors.remove(name)
            st.rerun()

    def option_index(options, value):
        return options.index(value) if value in options else None

    with st.form("intake_form"):
        st.subheader("1. Startup Profile")
        startup_name = st.text_input("Startup name", value=draft.get("startupName", ""))
        industry = st.selectbox("Industry", INDUSTRIES, index=option_index(INDUSTRIES, draft.get("industry")))
        funding_stage = st.selectbox(
            "Funding stage", FUNDING_STAGES, index=option_index(FUNDING_STAGES, draft.get("fundingStage"))
        )
        primary_geography = st.selectbox(
            "Primary geography", GEOGRAPHIES, index=option_index(GEOGRAPHIES, draft.get("primaryGeography"))
        )
        target_customer_profile = st.text_area(
            "Target customer profile (ICP)", value=draft.get("targetCustomerProfile", "")
        )

        st.subheader("2. Problem & Solution")
        core_problem_statement = st.text_area("Core problem statement", value=draft.get("coreProblemStatement", ""))
        proposed_solution_overview = st.text_area(
            "Proposed solution overview", value=draft.get("proposedSolutionOverview", "")
        )

        st.subheader("3. Business Model & Competition")
        revenue_model_structure = st.selectbox(
            "Revenue model", REVENUE_MODELS, index=option_index(REVENUE_MODELS, draft.get("revenueModelStructure"))
        )
        business_model_explanation = st.text_area(
            "Business model explanation", value=draft.get("businessModelExplanation", "")
        )
        competitive_differentiators = st.text_area(
            "Competitive differentiators", value=draft.get("competitiveDifferentiators", "")
        )

        st.subheader("4. Traction (Seed stage only)")
        monthly_recurring_revenue = st.text_input(
            "Monthly recurring revenue", value=draft.get("monthlyRecurringRevenue") or "", placeholder="e.g. $120,000"
        )
        active_customer_count = st.text_input(
            "Active customers", value=draft.get("activeCustomerCount") or "", placeholder="e.g. 42"
        )
        month_over_month_growth = st.text_input(
            "Month-over-month growth", value=draft.get("monthOverMonthGrowth") or "", placeholder="e.g. 18%"
        )

        evaluation_terms = st.checkbox("I accept the evaluation terms", value=bool(draft.get("evaluationTerms")))
        submitted = st.form_submit_button("Continue to Review")

    if not submitted:
        return

    is_seed = funding_stage == "Seed"
    values = {
        "startupName": startup_name,
        "industry": industry or "",
        "fundingStage": funding_stage or "",
        "primaryGeography": primary_geography or "",
        "targetCustomerProfile": target_customer_profile,
        "coreProblemStatement": core_problem_statement,
        "proposedSolutionOverview": proposed_solution_overview,
        "revenueModelStructure": revenue_model_structure or "",
        "businessModelExplanation": business_model_explanation,
        "knownCompetitors": list(competitors),
        "competitiveDifferentiators": competitive_differentiators,
        "monthlyRecurringRevenue": monthly_recurring_revenue if is_seed else "",
        "activeCustomerCount": active_customer_count if is_seed else "",
        "monthOverMonthGrowth": month_over_month_growth if is_seed else "",
        "evaluationTerms": evaluation_terms,
    }
    manager.save_draft(values)

    try:
        IntakeForm.model_validate(values)
    except ValidationError as e:
        for error in e.errors():
            st.error(f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        return

    go_to("Review & Submit")


def run_evaluation(intake: IntakeForm) -> Optional[Session]:
    """Submit the intake while animating the progress bar, then record the session."""
    client = EvaluationClient(base_url=api_base_url)
    progress_bar = st.progress(0, text="Researching…")
    progress = 0.0

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(client.evaluate, intake)
        while not future.done():
            time.sleep(PROGRESS_TICK_SECONDS)
            progress = advance_progress(progress)
            progress_bar.progress(int(progress), text="Researching…")

        try:
            result = future.result()
        except EvaluationFailed as e:
            progress_bar.empty()
            st.error(f"Evaluation failed: {e}")
            return None

    progress_bar.progress(100, text="Done")
    session = manager.create_session(intake, result)
    time.sleep(0.7)
    return session


def render_review() -> None:
    st.title("Review & Submit")

    draft = manager.load_draft()
    if not draft:
        st.info("No review data found. Please complete the intake form first.")
        return

    try:
        intake = IntakeForm.model_validate(draft)
    except ValidationError:
        st.warning("The saved intake is incomplete. Please finish the form first.")
        if st.button("Edit intake"):
            go_to("New Evaluation")
        return

    st.subheader("Startup Profile")
    st.markdown(
        f"**Name:** {intake.startup_name}  \n"
        f"**Industry:** {intake.industry}  \n"
        f"**Stage:** {intake.funding_stage}  \n"
        f"**Geography:** {intake.primary_geography}"
    )
    st.markdown(f"**Ideal customer profile:** {intake.target_customer_profile}")

    st.subheader("Problem & Solution")
    st.markdown(f"**Problem:** {intake.core_problem_statement}")
    st.markdown(f"**Solution:** {intake.proposed_solution_overview}")

    st.subheader("Business Model & Competition")
    st.markdown(f"**Revenue model:** {intake.revenue_model_structure}")
    st.markdown(f"**Business model:** {intake.business_model_explanation}")
    st.markdown(f"**Differentiators:** {intake.competitive_differentiators}")
    st.markdown(f"**Competitors:** {', '.join(intake.known_competitors) or 'None listed'}")

    if intake.is_seed_stage:
        st.subheader("Traction")
        st.markdown(
            f"**MRR:** {intake.monthly_recurring_revenue or 'n/a'}  \n"
            f"**Active customers:** {intake.active_customer_count or 'n/a'}  \n"
            f"**MoM growth:** {intake.month_over_month_growth or 'n/a'}"
        )

    col1, col2, col3 = st.columns([1, 1, 1])
    with col1:
        if st.button("✏️ Edit"):
            st.session_state.competitors = list(intake.known_competitors)
            go_to("New Evaluation")
    with col2:
        if st.button("💾 Save & Exit"):
            go_to("Home")
    with col3:
        submit = st.button("🚀 Run Evaluation", type="primary")

    if submit:
        session = run_evaluation(intake)
        if session:
            go_to("Results", session.id)


def render_results() -> None:
    session = manager.get_session(st.session_state.get("session_id"))
    if not session:
        st.info("No results found. Please complete the evaluation first.")
        return

    result = session.result
    report = summarize_report(result)
    intake = session.intake

    st.title(f"Validation Memo: {intake.startup_name}")
    st.caption(f"{intake.industry} · {intake.funding_stage} · Last Updated: {session.created_at:%Y-%m-%d %H:%M}")

    st.header("Startup Overview")
    col1, col2, col3 = st.columns(3)
    col1.markdown(f"**Name**  \n{intake.startup_name}")
    col2.markdown(f"**Industry**  \n{intake.industry}")
    col3.markdown(f"**Geography**  \n{intake.primary_geography}")

    st.header("Risk & Confidence")
    col1, col2 = st.columns(2)
    col1.metric("Confidence Score", f"{report.risk.confidence}%")
    col2.metric("Risk Level", RISK_BADGES.get(report.risk.risk_level, report.risk.risk_level))
    st.progress(min(max(report.risk.confidence, 0), 100))
    if report.risk.justification:
        st.markdown(f"**Justification:** {report.risk.justification}")
    if report.risk.rationale:
        st.markdown(f"**Rationale:** {report.risk.rationale}")
    with st.expander("Full risk analysis"):
        st.markdown(result.risk_score.text)

    st.header("AI Research Synthesis")
    st.markdown(result.synthesis.text)

    st.header("Market Size")
    stats = report.tam_stats
    col1, col2, col3 = st.columns(3)
    col1.metric("TAM", stats.tam or "n/a")
    col2.metric("CAGR", stats.cagr or "n/a")
    col3.metric("Horizon", stats.year or "n/a")
    st.markdown(report.tam_main)
    if report.region_risks:
        st.subheader("Region-Specific Risks")
        for item in report.region_risks:
            st.markdown(f"- **{item.title}:** {item.body}")
    elif report.tam_risks:
        st.markdown(report.tam_risks)

    st.header("Industry News")
    if report.news:
        st.dataframe(
            pd.DataFrame([
                {
                    "#": article.number,
                    "Title": article.title,
                    "Source": article.source_domain,
                    "Link": article.source_url or None,
                    "Summary": article.summary,
                }
                for article in report.news
            ]),
            column_config={"Link": st.column_config.LinkColumn("Link", display_text="Open")},
            use_container_width=True,
            hide_index=True,
        )
    else:
        st.markdown(result.industry_news.text)

    st.header("Competitor Links")
    st.markdown(result.competitor_links.text)

    st.header("Sources")
    for name, section in [
        ("Industry News", result.industry_news),
        ("Competitors", result.competitor_links),
        ("Synthesis", result.synthesis),
        ("Market Size", result.tam_data),
        ("Risk", result.risk_score),
    ]:
        if not section.citations:
            continue
        with st.expander(f"{name} ({len(section.citations)})"):
            for citation in section.citations:
                st.markdown(f"- [{citation.title or citation.url}]({citation.url})  \n  {citation.snippet}")


logger.debug(f"Rendering page {page}")
if page == "Home":
    render_home()
elif page == "New Evaluation":
    render_intake()
elif page == "Review & Submit":
    render_review()
elif page == "Results":
    render_results()

st.sidebar.markdown("---")
st.sidebar.caption("Run the API with `uvicorn venturescope.main:app` and this app with `streamlit run frontend/app.py`.")
