from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from app.config import build_model_selector, get_settings
from app.dependencies import limiter
from app.middleware.correlation import CorrelationMiddleware
from app.routes import academic, assessment, career, resume
from app.services.model_client import GeminiModelClient
from app.utils.logger import logger
from app.utils.metrics import get_snapshot

settings = get_settings()

app = FastAPI(title=settings.app_name, version=settings.app_version)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Model tiers are fixed for the life of the process
app.state.model_selector = build_model_selector(settings)
app.state.model_client = None

allowed_origins = [origin.strip() for origin in settings.allowed_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Correlation-ID"],
)
app.add_middleware(CorrelationMiddleware)


@app.on_event("startup")
async def startup_event():
    logger.info("Starting Career Advisor AI backend...")
    if app.state.model_client is None:
        app.state.model_client = GeminiModelClient(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            timeout_seconds=settings.llm_timeout_seconds,
            temperature=settings.llm_temperature,
        )
    logger.info(f"Model tiers: {' -> '.join(app.state.model_selector.models)}")
    logger.info(f"Backend ready at http://{settings.backend_host}:{settings.backend_port}")


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.get("/metrics")
async def metrics():
    return get_snapshot()


app.include_router(academic.router)
app.include_router(career.router)
app.include_router(assessment.router)
app.include_router(resume.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug
    )
