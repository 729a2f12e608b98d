"""
API route for idea generation
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from idea_studio.config import Settings
from idea_studio.database import DatabaseManager
from idea_studio.dependencies import get_app_settings, get_current_user, get_database, get_generation_service
from idea_studio.errors import IdeaStudioError
from idea_studio.logging_config import logger
from idea_studio.services.auth_service import AuthUser
from idea_studio.services.idea_service import IdeaGenerationService

router = APIRouter(tags=["generate"])


@router.post("/generate")
async def generate_idea(
    payload: Dict[str, Any] = Body(...),
    service: IdeaGenerationService = Depends(get_generation_service),
    user: Optional[AuthUser] = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    db: DatabaseManager = Depends(get_database),
):
    """Generate a startup idea from a profile"""
    try:
        outcome = await service.generate(payload, user=user)
    except IdeaStudioError as e:
        logger.error(f"Idea generation failed ({type(e).__name__}): {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_response())
    except Exception as e:
        logger.error(f"Unexpected error generating idea: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Idea generation failed", "details": str(e)}
        )

    body = outcome.to_response()
    if settings.save_on_generate:
        saved_id = await service.save_best_effort(db, user, outcome.profile, outcome.idea)
        if saved_id is not None:
            body["id"] = str(saved_id)

    return body
