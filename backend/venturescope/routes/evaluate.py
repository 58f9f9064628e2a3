"""
Evaluation Routes Module

This module handles the startup evaluation endpoint.

Key Features:
- Concurrent research across five report sections
- Single error boundary mapping any failure to a 500 with the error message
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..schemas import EvaluationRequest, EvaluationResult
from ..services.evaluator import Evaluator
from ..utils.logger import api_logger as logger

router = APIRouter(tags=["Evaluation"])


def get_evaluator() -> Evaluator:
    """Evaluator dependency; overridden in tests."""
    return Evaluator()


@router.post("/evaluate", response_model=EvaluationResult)
async def evaluate_startup(
    intake: EvaluationRequest,
    evaluator: Evaluator = Depends(get_evaluator),
):
    """
    Evaluate a startup intake.

    Args:
        intake: Startup intake fields
        evaluator: Evaluation service

    Returns:
        EvaluationResult with industryNews, competitorLinks, synthesis,
        tamData and riskScore sections

    Errors:
        500 with {"error": message} if any research call fails
    """
    try:
        return await evaluator.evaluate(intake)
    except Exception as e:
        logger.error(f"Evaluation failed for {intake.startup_name!r}: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e) or type(e).__name__})
