"""
FastAPI application entry point for Idea Studio
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from idea_studio.config import Settings, get_settings
from idea_studio.database import DatabaseManager
from idea_studio.dependencies import get_app_settings, get_database
from idea_studio.errors import IdeaStudioError
from idea_studio.logging_config import setup_logging
from idea_studio.routes import generate, ideas
from idea_studio.services.auth_service import AuthService
from idea_studio.services.generation_client import GenerationClient
from idea_studio.services.prompt_builder import PromptBuilder


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one settings object"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        # Startup
        setup_logging(settings)
        logger = logging.getLogger(__name__)
        logger.info("Idea Studio starting up")

        app.state.settings = settings
        app.state.db = DatabaseManager(settings)
        app.state.auth = AuthService(settings)
        app.state.generation_client = GenerationClient(settings)
        app.state.prompt_builder = PromptBuilder(settings.prompt_template_path)

        try:
            await app.state.db.initialize()
        except Exception as e:
            # Generation works without a database; storage routes retry on demand
            logger.error(f"Database unavailable at startup: {str(e)}")

        yield

        # Shutdown
        await app.state.db.close()
        logger.info("Idea Studio shutting down")

    app = FastAPI(
        title="Idea Studio",
        description="Generate personalised startup ideas from a founder profile",
        version="1.0.0",
        lifespan=lifespan
    )

    @app.exception_handler(IdeaStudioError)
    async def idea_studio_error_handler(request: Request, exc: IdeaStudioError):
        level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
        logging.getLogger(__name__).log(level, f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        details = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in exc.errors()
        }
        return JSONResponse(status_code=422, content={"error": "Invalid request", "details": details})

    app.include_router(generate.router)
    app.include_router(ideas.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring"""
        return {"status": "healthy", "service": "idea-studio"}

    @app.get("/system-check")
    async def system_check(
        request: Request,
        app_settings: Settings = Depends(get_app_settings),
        db: DatabaseManager = Depends(get_database),
    ):
        """Report which collaborators are configured, never their values"""
        return {
            "database": {
                "configured": bool(app_settings.database_url),
                "connected": await db.health_check(),
            },
            "auth": {"configured": request.app.state.auth.is_configured},
            "generation": {
                "configured": bool(app_settings.openai_api_key),
                "model": app_settings.openai_model,
            },
            "environment": app_settings.environment,
        }

    return app


app = create_app()
