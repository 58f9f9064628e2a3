"""
Session Manager Module

Keeps the intake draft and the list of evaluation sessions for the client.
Sessions are written once at submission time and never mutated; the only
way to remove them is to clear the whole list.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from ..schemas import EvaluationRequest, EvaluationResult, Session
from ..utils.logger import sessions_logger as logger
from .report_extractor import extract_confidence, extract_risk_level
from .session_store import KeyValueStore

INTAKE_KEY = "ventureScope_intake"
SESSIONS_KEY = "ventureScope_sessions"


class SessionManager:
    """Session and draft persistence on top of an injected KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    # Intake draft

    def save_draft(self, intake: dict) -> None:
        """Persist the form values as entered, validated or not."""
        self.store.set(INTAKE_KEY, json.dumps(intake))

    def load_draft(self) -> Optional[dict]:
        raw = self.store.get(INTAKE_KEY)
        if not raw:
            return None
        try:
            draft = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable intake draft")
            return None
        return draft if isinstance(draft, dict) else None

    def clear_draft(self) -> None:
        self.store.delete(INTAKE_KEY)

    # Sessions

    def _load_raw_sessions(self) -> list:
        raw = self.store.get(SESSIONS_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored session list is not valid JSON, treating as empty")
            return []
        return data if isinstance(data, list) else []

    def list_sessions(self) -> List[Session]:
        """All readable sessions, newest first."""
        sessions = []
        for item in self._load_raw_sessions():
            try:
                sessions.append(Session.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable session record: {e.error_count()} errors")
        return sessions

    def get_session(self, session_id: Optional[str] = None) -> Optional[Session]:
        """Session with the given id, or the latest one when no id is given."""
        sessions = self.list_sessions()
        if session_id is None:
            return sessions[0] if sessions else None
        return next((s for s in sessions if s.id == session_id), None)

    def create_session(self, intake: EvaluationRequest, result: EvaluationResult) -> Session:
        """
        Record a finished evaluation.

        Confidence and risk level are derived from the risk section so the
        sessions table can show them without re-parsing.
        """
        session = Session(
            id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            intake=intake,
            result=result,
            confidence=extract_confidence(result.risk_score.text),
            risk_level=extract_risk_level(result.risk_score.text),
        )
        existing = self._load_raw_sessions()
        record = session.model_dump(mode="json", by_alias=True)
        self.store.set(SESSIONS_KEY, json.dumps([record] + existing))
        logger.info(f"Created session {session.id} for {intake.startup_name!r}")
        return session

    def clear_sessions(self) -> None:
        self.store.delete(SESSIONS_KEY)
        logger.info("Cleared all sessions")
