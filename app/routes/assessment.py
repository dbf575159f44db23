"""Assessment routes - generate an MCQ test, then score the user's answers"""

from fastapi import APIRouter, Depends, HTTPException, Request

from app.dependencies import get_model_client, get_model_selector, limiter
from app.schemas.assessment import AssessmentQuestionsRequest, AssessmentScore, ScoreAssessmentRequest
from app.services import assessment_service
from app.services.dispatcher import ModelSelector
from app.services.model_client import ModelClient
from app.utils.logger import get_logger

router = APIRouter(prefix="/api/assessment", tags=["Assessment"])
logger = get_logger()


@router.post("/questions")
@limiter.limit("20/hour")
async def generate_questions(
    request: Request,
    body: AssessmentQuestionsRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    logger.info(f"[Assessment] {body.number_of_questions} questions, level={body.level}")
    return await assessment_service.generate_assessment_questions(body, client, selector)


@router.post("/score", response_model=AssessmentScore)
async def score(body: ScoreAssessmentRequest):
    """Score answers locally; the percentage is the testScore for the recommendation flows."""
    try:
        return assessment_service.score_assessment(body.questions, body.answers)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
