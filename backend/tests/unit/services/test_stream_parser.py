"""
Unit tests for the agent stream parser.
"""
import json

import pytest

from venturescope.services.stream_parser import normalize_citation, parse_agent_stream


def sse(*events):
    return "\n".join(f"data: {event}" for event in events) + "\n"


def delta(text):
    return json.dumps({"type": "response.output_text.delta", "response": {"delta": text}})


@pytest.mark.parametrize("raw", [
    None,
    "",
    "event: ping\n: keep-alive\n\n",
    "data: not json\ndata: {broken\n",
    "data: [1, 2, 3]\ndata: 42\n",
])
def test_no_valid_events_yields_empty_result(raw):
    """Input without a usable data line yields empty text and no citations."""
    result = parse_agent_stream(raw)
    assert result.text == ""
    assert result.citations == []


def test_deltas_are_concatenated_in_order_around_malformed_lines():
    """Malformed lines are skipped without disturbing the text order."""
    chunks = ["The market ", "is large", " and ", "growing."]
    raw = "\n".join([
        "event: response.created",
        f"data: {delta(chunks[0])}",
        "data: {\"type\": \"response.output_text.delta\", \"response\": {\"delta\": ",
        f"data: {delta(chunks[1])}",
        "data: garbage",
        f"data: {delta(chunks[2])}",
        "",
        f"data: {delta(chunks[3])}",
        "data: [DONE]",
    ])

    result = parse_agent_stream(raw)

    assert result.text == "".join(chunks)


def test_crlf_line_endings():
    raw = f"data: {delta('a')}\r\ndata: {delta('b')}\r\n"
    assert parse_agent_stream(raw).text == "ab"


def test_other_event_types_do_not_add_text():
    raw = sse(
        json.dumps({"type": "response.created", "response": {"delta": "ignored"}}),
        delta("kept"),
    )
    assert parse_agent_stream(raw).text == "kept"


def test_missing_delta_defaults_to_empty():
    raw = sse(
        json.dumps({"type": "response.output_text.delta", "response": {}}),
        json.dumps({"type": "response.output_text.delta"}),
        delta("x"),
    )
    assert parse_agent_stream(raw).text == "x"


def test_citations_prefer_top_level_location():
    """The first present location wins; the others are not merged in."""
    event = {
        "type": "response.done",
        "citations": [{"title": "Top", "url": "https://top.example"}],
        "response": {
            "citations": [{"title": "Nested"}],
            "search_results": [{"title": "Search"}],
        },
    }
    result = parse_agent_stream(sse(json.dumps(event)))

    assert [c.title for c in result.citations] == ["Top"]


def test_citations_fall_back_to_response_then_search_results():
    nested = {"response": {"citations": [{"title": "Nested"}], "search_results": [{"title": "Search"}]}}
    search = {"response": {"search_results": [{"name": "Search", "link": "https://s.example"}]}}

    result = parse_agent_stream(sse(json.dumps(nested), json.dumps(search)))

    assert [c.title for c in result.citations] == ["Nested", "Search"]
    assert result.citations[1].url == "https://s.example"


def test_empty_citation_array_blocks_later_locations():
    """An empty list is present, so later locations are not consulted."""
    event = {"citations": [], "response": {"search_results": [{"title": "Search"}]}}
    assert parse_agent_stream(sse(json.dumps(event))).citations == []


def test_null_citations_fall_through():
    event = {"citations": None, "response": {"citations": [{"title": "Nested"}]}}
    result = parse_agent_stream(sse(json.dumps(event)))
    assert [c.title for c in result.citations] == ["Nested"]


def test_citations_keep_stream_order_and_duplicates():
    first = {"citations": [{"title": "A", "url": "https://a"}]}
    second = {"citations": [{"title": "B", "url": "https://b"}, {"title": "A", "url": "https://a"}]}

    result = parse_agent_stream(sse(json.dumps(first), json.dumps(second)))

    assert [c.title for c in result.citations] == ["A", "B", "A"]


def test_text_and_citations_from_same_event():
    event = {
        "type": "response.output_text.delta",
        "response": {"delta": "hello", "citations": [{"title": "Src"}]},
    }
    result = parse_agent_stream(sse(json.dumps(event)))
    assert result.text == "hello"
    assert result.citations[0].title == "Src"


def test_normalize_citation_first_match_wins():
    citation = normalize_citation({
        "title": "Title", "name": "Name",
        "link": "https://link.example",
        "description": "Desc",
    })
    assert citation.title == "Title"
    assert citation.url == "https://link.example"
    assert citation.snippet == "Desc"


def test_normalize_citation_defaults_missing_fields():
    citation = normalize_citation({})
    assert (citation.title, citation.url, citation.snippet) == ("", "", "")


def test_empty_string_title_is_kept():
    citation = normalize_citation({"title": "", "name": "Name"})
    assert citation.title == ""


def test_non_object_citation_entries_are_ignored():
    event = {"citations": ["just a string", None, {"title": "Real"}]}
    result = parse_agent_stream(sse(json.dumps(event)))
    assert [c.title for c in result.citations] == ["Real"]


def test_unicode_line_separators_inside_deltas_are_kept():
    """Only newline ends an event line; U+2028 and NEL inside a delta stay in the text."""
    chunks = ["a", "x\u2028y", "b", "p\x85q", "form\x0cfeed"]
    raw = sse(*(
        json.dumps({"type": "response.output_text.delta", "response": {"delta": chunk}}, ensure_ascii=False)
        for chunk in chunks
    ))

    assert "\u2028" in raw and "\x85" in raw
    assert parse_agent_stream(raw).text == "".join(chunks)
