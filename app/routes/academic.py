"""Academic guidance routes - 10th grade stream, 12th grade degree courses, undergraduate options"""

from fastapi import APIRouter, Depends, Request

from app.dependencies import get_model_client, get_model_selector, limiter, model_error_to_http
from app.schemas.academic import (
    RecommendDegreeCoursesRequest,
    RecommendStreamRequest,
    UndergraduateOptionsRequest,
)
from app.services import academic_advisor_service
from app.services.dispatcher import ModelSelector
from app.services.errors import ModelInvocationError
from app.services.model_client import ModelClient
from app.utils.logger import get_logger

router = APIRouter(prefix="/api/academic", tags=["Academic Guidance"])
logger = get_logger()


@router.post("/stream")
@limiter.limit("30/hour")
async def recommend_stream(
    request: Request,
    body: RecommendStreamRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    """Recommend Science, Commerce or Arts. Failures come back as {"error": true, "message": ...}."""
    logger.info(f"[Academic] Stream recommendation (test score: {body.test_score is not None})")
    return await academic_advisor_service.recommend_stream(body, client, selector)


@router.post("/degree-courses")
@limiter.limit("30/hour")
async def recommend_degree_courses(
    request: Request,
    body: RecommendDegreeCoursesRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    """Recommend 3-5 degree courses from 12th grade marks."""
    logger.info(f"[Academic] Degree courses for stream={body.twelfth_stream}")
    try:
        return await academic_advisor_service.recommend_degree_courses(body, client, selector)
    except ModelInvocationError as e:
        raise model_error_to_http("recommend_degree_courses", e)


@router.post("/undergraduate")
@limiter.limit("30/hour")
async def recommend_undergraduate_options(
    request: Request,
    body: UndergraduateOptionsRequest,
    client: ModelClient = Depends(get_model_client),
    selector: ModelSelector = Depends(get_model_selector),
):
    logger.info(f"[Academic] Undergraduate options for degree={body.academics.degree_name}")
    return await academic_advisor_service.recommend_undergraduate_options(body, client, selector)
