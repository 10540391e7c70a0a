"""
MealVibe Web - FastAPI application.

Service endpoints (recommendations, scan-fridge, auth) plus the wizard
session surface, all under /api.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mealvibe import __version__
from mealvibe.config import settings
from mealvibe.web.service_routes import router as service_router
from mealvibe.web.wizard_routes import router as wizard_router

logger = logging.getLogger(__name__)

app = FastAPI(title="MealVibe", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Log configuration on startup."""
    from mealvibe.llm.prompt_logger import enable_prompt_logging

    if settings.mealvibe_log_prompts:
        enable_prompt_logging(True)
    logger.info("MealVibe starting up...")
    logger.info(f"  Auth backend: {settings.auth_backend}")
    logger.info(f"  Recommendation model: {settings.recommendation_model}")
    logger.info(f"  Prompt file logging: {settings.mealvibe_log_prompts}")


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["POST", "GET", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(service_router, prefix="/api")
app.include_router(wizard_router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
