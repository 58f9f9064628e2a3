"""
Report Extractor Module

Best-effort extraction of structured fields from the markdown the agent
writes for each report section. The agent's formatting drifts between runs,
so every field has a fallback and a miss is never treated as an error.

All functions are pure: the same text always yields the same result.

Key Features:
- Confidence score and risk level from the risk section
- Justification and rationale text
- TAM figure, CAGR and horizon year from the market section
- Region-risk bullet items
- Numbered news articles with source domain
"""

import re
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from ..schemas import (
    EvaluationResult,
    NewsArticle,
    ReportSummary,
    RiskAssessment,
    RiskItem,
    TamStats,
)
from ..utils.logger import extractor_logger as logger

DEFAULT_CONFIDENCE = 75
DEFAULT_RISK_LEVEL = "Medium"

CONFIDENCE_RE = re.compile(r"Confidence Score[^:*]*[:*]+\s*\*?\*?(\d+)%", re.IGNORECASE)
RISK_LEVEL_RE = re.compile(r"Risk Level[^:*]*[:*]+\s*\*?\*?(Low|Medium|High)", re.IGNORECASE)
JUSTIFICATION_RE = re.compile(r"[Jj]ustification[:*\s]+([^\n]+)")
RATIONALE_RE = re.compile(r"[Rr]ationale[:*\s]+([\s\S]+?)(?=\n---|\n###)")

REGION_RISK_HEADING_RE = re.compile(r"###\s+\d*\.?\s*[Rr]egion.{0,20}[Rr]isk")
TAM_RANGE_RE = re.compile(r"\$(\d+\.?\d*)[–\-](\d+\.?\d*)\s*(?:billion\b|B\b)", re.IGNORECASE)
TAM_SINGLE_RE = re.compile(r"\$(\d+\.?\d*)\s*(?:billion\b|B\b)", re.IGNORECASE)
CAGR_RE = re.compile(r"(\d+\.?\d*)%\s*CAGR", re.IGNORECASE)
YEAR_THROUGH_RE = re.compile(r"\bthrough\s+(\d{4})", re.IGNORECASE)
YEAR_BY_RE = re.compile(r"\bby\s+(\d{4})", re.IGNORECASE)

RISK_ITEM_RE = re.compile(r"^-\s+\*\*([^*]+)\*\*[:\t ]*(.*)", re.MULTILINE)

NEWS_HEADING_RE = re.compile(r"###\s+(\d+)\.\s+\*\*([^*\n]+)\*\*")
SOURCE_URL_RE = re.compile(r"Source URL[^\[]*\[([^\]]+)\]\(([^)\s#]+)")
SUMMARY_RE = re.compile(r"\*\*Summary[:*]+\s*([^\n\[]+)")


def extract_confidence(text: str) -> int:
    match = CONFIDENCE_RE.search(text or "")
    return int(match.group(1)) if match else DEFAULT_CONFIDENCE


def extract_risk_level(text: str) -> str:
    match = RISK_LEVEL_RE.search(text or "")
    return match.group(1).capitalize() if match else DEFAULT_RISK_LEVEL


def parse_risk_score(text: str) -> RiskAssessment:
    """
    Parse the risk & confidence section.

    Args:
        text: Markdown of the riskScore section

    Returns:
        RiskAssessment; confidence falls back to 75 and risk level to Medium
    """
    text = text or ""

    justification = ""
    match = JUSTIFICATION_RE.search(text)
    if match:
        justification = match.group(1).replace("*", "").strip()

    rationale = ""
    match = RATIONALE_RE.search(text)
    if match:
        rationale = re.sub(r"[-*]", "", match.group(1))
        rationale = re.sub(r"\s+", " ", rationale).strip()

    return RiskAssessment(
        confidence=extract_confidence(text),
        risk_level=extract_risk_level(text),
        justification=justification,
        rationale=rationale,
    )


def split_tam_data(text: str) -> Tuple[str, str]:
    """Split the TAM section into the market body and the region-risk body."""
    text = text or ""
    match = REGION_RISK_HEADING_RE.search(text)
    if not match:
        return text, ""
    return text[:match.start()].strip(), text[match.start():].strip()


def parse_tam_stats(text: str) -> TamStats:
    """Pull the headline TAM figure, growth rate and horizon year."""
    text = text or ""

    tam: Optional[str] = None
    range_match = TAM_RANGE_RE.search(text)
    if range_match:
        tam = f"${range_match.group(1)}–{range_match.group(2)}B"
    else:
        single_match = TAM_SINGLE_RE.search(text)
        if single_match:
            tam = f"${single_match.group(1)}B"

    cagr_match = CAGR_RE.search(text)
    cagr = f"{cagr_match.group(1)}%" if cagr_match else None

    year_match = YEAR_THROUGH_RE.search(text) or YEAR_BY_RE.search(text)
    year = year_match.group(1) if year_match else None

    return TamStats(tam=tam, cagr=cagr, year=year)


def parse_risk_items(text: str) -> List[RiskItem]:
    """Collect '- **Title**: body' bullets."""
    return [
        RiskItem(title=m.group(1).strip().rstrip(":").strip(), body=m.group(2).strip())
        for m in RISK_ITEM_RE.finditer(text or "")
    ]


def source_domain(url: str) -> str:
    """Host name without scheme or leading 'www.'; the raw value when it cannot be parsed."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return url
    if not host:
        return url
    return host[4:] if host.startswith("www.") else host


def parse_news_articles(text: str) -> List[NewsArticle]:
    """
    Parse numbered news sub-sections.

    Each '### N. **Title**' heading starts an article that runs until the next
    heading. The source link and summary are looked up inside that span.
    """
    text = text or ""
    headings = list(NEWS_HEADING_RE.finditer(text))
    articles: List[NewsArticle] = []

    for i, heading in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(text)
        body = text[heading.start():end]

        url_match = SOURCE_URL_RE.search(body)
        summary_match = SUMMARY_RE.search(body)
        raw_url = url_match.group(2).strip() if url_match else ""

        articles.append(NewsArticle(
            number=int(heading.group(1)),
            title=heading.group(2).strip(),
            source_url=raw_url,
            source_domain=source_domain(raw_url),
            summary=summary_match.group(1).strip() if summary_match else "",
        ))

    return articles


def summarize_report(result: EvaluationResult) -> ReportSummary:
    """Run every extractor over an evaluation result for the results memo."""
    tam_main, tam_risks = split_tam_data(result.tam_data.text)
    summary = ReportSummary(
        risk=parse_risk_score(result.risk_score.text),
        tam_main=tam_main,
        tam_risks=tam_risks,
        tam_stats=parse_tam_stats(result.tam_data.text),
        region_risks=parse_risk_items(tam_risks),
        news=parse_news_articles(result.industry_news.text),
    )
    logger.debug(
        f"Extracted {len(summary.news)} news articles and {len(summary.region_risks)} region risks"
    )
    return summary
