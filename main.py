from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from symptom_intake.config.settings import settings
from symptom_intake.api.intake import router as intake_router
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting Symptom Intake Service...")
    logger.info(f"Environment: {settings.environment}")
    if settings.llm_configured:
        logger.info(f"LLM analysis enabled with model {settings.model_name}")
    else:
        logger.info("LLM analysis disabled, using local diagnostic engine")

    yield

    logger.info("Shutting down Symptom Intake Service...")


# Initialize FastAPI app
app = FastAPI(
    title="Symptom Intake - Diagnostic Assistant",
    description="Symptom intake wizard for remote health workers: preliminary analysis, follow-up questions, refined diagnosis and report.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(intake_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": "1.0.0",
        "dependencies": {
            "github_models": (
                "configured" if settings.llm_configured else "not configured"
            ),
            "local_engine": "available",
        },
    }


@app.get("/")
async def root():
    return {
        "message": "Symptom Intake - Diagnostic Assistant",
        "description": "Symptom intake and preliminary diagnosis for remote health workers",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.symptom_intake_port,
        reload=settings.environment == "development",
    )
