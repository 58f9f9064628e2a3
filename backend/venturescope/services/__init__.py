"""
Services package for VentureScope.
Contains the research, extraction and persistence modules.
"""

from .agent_client import AgentAPIError, AgentClient
from .evaluator import AgentTimeoutError, Evaluator
from .report_extractor import summarize_report
from .session_manager import SessionManager
from .session_store import FileKeyValueStore, KeyValueStore, RedisKeyValueStore, create_store
from .stream_parser import parse_agent_stream

__all__ = [
    'AgentClient',          # Agents API calls
    'AgentAPIError',        # Non-success Agents API responses
    'Evaluator',            # Five-section evaluation fan-out
    'AgentTimeoutError',    # Per-call deadline exceeded
    'parse_agent_stream',   # SSE body to text and citations
    'summarize_report',     # Markdown sections to memo fields
    'SessionManager',       # Draft and session persistence
    'KeyValueStore',        # Persistence interface
    'FileKeyValueStore',    # JSON file backend
    'RedisKeyValueStore',   # Redis backend
    'create_store',         # Backend selection from settings
]
