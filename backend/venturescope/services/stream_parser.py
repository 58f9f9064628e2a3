"""
Agent Stream Parser Module

The Agents API answers with server-sent events even when streaming is not
requested. The whole body is buffered by the caller and reduced here to the
stitched-together answer text and the citations seen along the way.

Malformed or partial events are expected and skipped without error.
"""

import json
from typing import Any, Dict, List, Optional

from ..schemas import AgentResult, Citation
from ..utils.logger import agent_logger as logger

DATA_PREFIX = "data: "
TEXT_DELTA_EVENT = "response.output_text.delta"


def _first_present(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _find_citations(event: Dict[str, Any]) -> List[Any]:
    """
    Locate the citation array of an event.

    Depending on the API version citations appear at the top level, under
    response.citations or under response.search_results. The first location
    present is used; locations are never merged.
    """
    response = event.get("response")
    if not isinstance(response, dict):
        response = {}

    found = _first_present(
        event.get("citations"),
        response.get("citations"),
        response.get("search_results"),
    )
    return found if isinstance(found, list) else []


def normalize_citation(raw: Dict[str, Any]) -> Citation:
    """Map the API's varying citation keys onto title/url/snippet."""
    return Citation(
        title=_as_text(_first_present(raw.get("title"), raw.get("name"))),
        url=_as_text(_first_present(raw.get("url"), raw.get("link"))),
        snippet=_as_text(_first_present(raw.get("snippet"), raw.get("description"))),
    )


def _parse_event(line: str) -> Optional[Dict[str, Any]]:
    try:
        event = json.loads(line[len(DATA_PREFIX):])
    except ValueError:
        return None
    return event if isinstance(event, dict) else None


def parse_agent_stream(raw: Optional[str]) -> AgentResult:
    """
    Reduce a buffered SSE body to an AgentResult.

    Args:
        raw: Full response body of an agent run

    Returns:
        AgentResult with the concatenated text deltas and all citations in
        stream order
    """
    text_parts: List[str] = []
    citations: List[Citation] = []
    skipped = 0

    # Only "\n" ends an event line; JSON strings may carry other line separators raw
    for line in (raw or "").split("\n"):
        if not line.startswith(DATA_PREFIX):
            continue

        event = _parse_event(line)
        if event is None:
            skipped += 1
            continue

        if event.get("type") == TEXT_DELTA_EVENT:
            response = event.get("response")
            delta = response.get("delta") if isinstance(response, dict) else None
            text_parts.append(_as_text(delta))

        for raw_citation in _find_citations(event):
            if isinstance(raw_citation, dict):
                citations.append(normalize_citation(raw_citation))

    if skipped:
        logger.debug(f"Skipped {skipped} malformed stream events")

    return AgentResult(text="".join(text_parts), citations=citations)
