"""Resume AI routes - enhancement for the resume builder and ATS review"""

from fastapi import APIRouter, Depends, Request

from app.dependencies import get_model_client, get_model_selector, limiter, model_error_to_http
from app.schemas.resume import ResumeDetailsRequest, ReviewResumeRequest
from app.services import resume_ai_service
from app.services.dispatcher import ModelSelector
from app.services.errors import ModelInvocationError
from app.services.model_client import ModelClient
from app.utils.logger import get_logger

router = APIRouter(prefix="/api/resume", tags=["Resume AI"])
logger = get_logger()


@router.post("/enhance")
@limiter.limit("20/hour")
async def enhance_resume(
    request: Request,
    body: ResumeDetailsRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    """Polish and complete resume details; returns the same shape that was sent."""
    logger.info(f"[Resume] Enhancing resume, title={body.professional_title}")
    try:
        return await resume_ai_service.enhance_resume(body, client, selector)
    except ModelInvocationError as e:
        raise model_error_to_http("resume_enhancement", e)


@router.post("/review")
@limiter.limit("20/hour")
async def review_resume(
    request: Request,
    body: ReviewResumeRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    logger.info(f"[Resume] Reviewing resume text ({len(body.resume_text)} chars)")
    return await resume_ai_service.review_resume(body, client, selector)
