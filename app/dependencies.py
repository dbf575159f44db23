"""
Request-scoped dependencies shared by the flow routes
"""
from fastapi import HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings
from app.services.dispatcher import BUSY_MESSAGE, Classification, ModelSelector, classify_error
from app.services.errors import ModelInvocationError, TerminalModelError
from app.services.model_client import ModelClient
from app.utils.logger import get_logger

logger = get_logger()

limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)


def get_model_client(request: Request) -> ModelClient:
    return request.app.state.model_client


def get_model_selector(request: Request) -> ModelSelector:
    return request.app.state.model_selector


def model_error_to_http(flow: str, exc: ModelInvocationError) -> HTTPException:
    """Map a raised model failure to a client-safe HTTP error; details stay in the log."""
    if isinstance(exc, TerminalModelError):
        transient = exc.transient_cause
    else:
        transient = classify_error(exc) is Classification.TRANSIENT

    logger.error(
        f"[{flow}] model invocation failed",
        extra={"flow": flow, "model": exc.model, "error": exc.message[:200], "error_type": type(exc).__name__},
    )
    if transient:
        return HTTPException(status_code=503, detail=BUSY_MESSAGE)
    return HTTPException(
        status_code=502,
        detail="There was a problem communicating with the AI. Please try again.",
    )
