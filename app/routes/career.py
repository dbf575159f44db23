"""Career advice routes - suggestions, progression map, professional roadmap, chatbot"""

from fastapi import APIRouter, Depends, Request

from app.dependencies import get_model_client, get_model_selector, limiter, model_error_to_http
from app.schemas.career import (
    CareerChatRequest,
    CareerProgressionRequest,
    CareerSuggestionsRequest,
    ProfessionalAdviceRequest,
)
from app.services import career_advisor_service
from app.services.dispatcher import ModelSelector
from app.services.errors import ModelInvocationError
from app.services.model_client import ModelClient
from app.utils.logger import get_logger

router = APIRouter(prefix="/api/career", tags=["Career Advice"])
logger = get_logger()


@router.post("/suggestions")
@limiter.limit("30/hour")
async def suggest_careers(
    request: Request,
    body: CareerSuggestionsRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    logger.info(f"[Career] Suggestions for stage={body.academic_stage}")
    return await career_advisor_service.suggest_careers(body, client, selector)


@router.post("/progression")
@limiter.limit("30/hour")
async def map_career_progression(
    request: Request,
    body: CareerProgressionRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    logger.info(f"[Career] Progression map for role={body.current_role}")
    return await career_advisor_service.map_career_progression(body, client, selector)


@router.post("/professional")
@limiter.limit("20/hour")
async def get_professional_advice(
    request: Request,
    body: ProfessionalAdviceRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    """Next roles, certifications and career switches for a working professional."""
    logger.info(f"[Career] Professional roadmap, industry={body.current_industry}, jobs={len(body.work_experience)}")
    try:
        return await career_advisor_service.get_professional_advice(body, client, selector)
    except ModelInvocationError as e:
        raise model_error_to_http("professional_advice", e)


@router.post("/chat")
@limiter.limit("60/hour")
async def chat(
    request: Request,
    body: CareerChatRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    return await career_advisor_service.chat(body, client, selector)
