"""
Per-request correlation id.

The id comes from the client's X-Correlation-ID header when it is usable,
otherwise a fresh UUID4. It lives in a contextvar for the duration of the
request so invoker and dispatcher log lines carry it, and is echoed back on
the response.
"""
import contextvars
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Correlation-ID"
MAX_ID_LENGTH = 128

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    return correlation_id_var.get("")


def resolve_correlation_id(request: Request) -> str:
    supplied = (request.headers.get(HEADER) or "").strip()
    if supplied and len(supplied) <= MAX_ID_LENGTH and supplied.isprintable():
        return supplied
    return str(uuid.uuid4())


def _elapsed_ms(started: float) -> int:
    return round((time.monotonic() - started) * 1000)


class CorrelationMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next) -> Response:
        from app.utils.logger import logger

        cid = resolve_correlation_id(request)
        token = correlation_id_var.set(cid)
        started = time.monotonic()
        fields = {"method": request.method, "path": request.url.path}

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request.failed",
                extra={**fields, "duration_ms": _elapsed_ms(started), "error": str(exc),
                       "error_type": type(exc).__name__},
            )
            raise
        finally:
            correlation_id_var.reset(token)

        fields.update(status=response.status_code, duration_ms=_elapsed_ms(started), correlation_id=cid)
        if response.status_code >= 400:
            logger.warning("request.completed", extra=fields)
        else:
            logger.info("request.completed", extra=fields)

        response.headers[HEADER] = cid
        return response
