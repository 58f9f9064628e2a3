"""
Evaluation API client used by the Streamlit frontend.
"""

from typing import Optional

import requests
from pydantic import ValidationError

from .schemas import EvaluationRequest, EvaluationResult
from .utils.config import settings
from .utils.logger import frontend_logger as logger

# Progress bar animation while the evaluation request is in flight
PROGRESS_TICK_SECONDS = 0.35
PROGRESS_HOLD = 90.0


class EvaluationFailed(Exception):
    """The backend could not produce an evaluation."""


def advance_progress(prev: float) -> float:
    """
    Next value of the cosmetic progress bar.

    Moves fast at first and slows down, then holds at 90 until the request
    returns. It has no relation to actual server progress.
    """
    if prev >= PROGRESS_HOLD:
        return prev
    speed = 2.5 if prev < 40 else 1.5 if prev < 70 else 0.8
    return min(prev + speed, PROGRESS_HOLD)


class EvaluationClient:
    """Calls the backend's evaluate endpoint."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.http = session or requests.Session()
        # The backend's own per-call deadline bounds the request; leave headroom for the fan-out
        self.timeout = timeout or settings.AGENT_TIMEOUT_SECONDS + 30

    def evaluate(self, intake: EvaluationRequest) -> EvaluationResult:
        """
        Submit an intake for evaluation.

        Raises:
            EvaluationFailed: With the backend's error message on failure
        """
        payload = intake.model_dump(mode="json", by_alias=True)
        try:
            response = self.http.post(f"{self.base_url}/api/evaluate", json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Evaluation request failed: {e}")
            raise EvaluationFailed(f"Request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            message = body.get("error") if isinstance(body, dict) else None
            logger.error(f"Evaluation failed with status {response.status_code}: {message}")
            raise EvaluationFailed(str(message) if message else "Evaluation failed")

        try:
            return EvaluationResult.model_validate(body)
        except ValidationError as e:
            logger.error(f"Unexpected evaluation response: {e.error_count()} validation errors")
            raise EvaluationFailed("Unexpected response from the evaluation service") from e
