"""
API routes for saved ideas
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from idea_studio.dependencies import get_current_user, get_db, require_user
from idea_studio.errors import AccessDenied, IdeaNotFound
from idea_studio.logging_config import logger
from idea_studio.services.auth_service import AuthUser
from idea_studio.services.idea_repository import IdeaRepository
from idea_studio.services.idea_service import resolve_tier
from idea_studio.services.request_normalizer import normalize_profile, parse_generated_idea

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.post("/save")
async def save_idea(
    payload: Dict[str, Any] = Body(...),
    user: Optional[AuthUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Save a generated idea for the caller, or for a new guest owner"""
    profile = normalize_profile(payload)
    idea = parse_generated_idea(payload)
    tier = resolve_tier(profile.tier, user)
    if tier != profile.tier:
        logger.info(f"Saved idea tier {profile.tier.value} downgraded to {tier.value}")
        profile = profile.model_copy(update={"tier": tier})

    repository = IdeaRepository(db)
    owner = await repository.resolve_owner(user)
    idea_id = await repository.create_idea(owner.id, profile, idea)

    return {"success": True, "id": str(idea_id)}


@router.get("/community")
async def get_community_ideas(
    limit: int = Query(20, ge=1, le=100),
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
):
    """Get paginated public ideas with masked authors"""
    rows = await IdeaRepository(db).list_public(limit=limit, page=page)
    ideas = [idea.to_summary(author.author_name) for idea, author in rows]

    return {"success": True, "ideas": ideas, "page": page, "limit": limit}


@router.get("/personal")
async def get_personal_ideas(
    user: AuthUser = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the caller's own ideas"""
    ideas = await IdeaRepository(db).list_for_user(user.id)
    return {"success": True, "ideas": [idea.to_response() for idea in ideas]}


@router.patch("/{idea_id}/publish")
async def toggle_publish(
    idea_id: str,
    user: AuthUser = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    """Toggle community visibility of an owned idea"""
    repository = IdeaRepository(db)
    idea = await repository.get_by_id(idea_id)

    if not idea:
        raise IdeaNotFound(idea_id)
    if idea.user_id != user.id:
        logger.warning(f"User {user.id} tried to publish idea {idea_id} they do not own")
        raise AccessDenied(f"User {user.id} does not own idea {idea_id}")

    idea = await repository.toggle_publish(idea)
    message = "Published to the community" if idea.is_public else "Removed from the community"

    return {"success": True, "isPublic": idea.is_public, "message": message}


@router.get("/{idea_id}")
async def get_idea(
    idea_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a stored idea, counting the view"""
    repository = IdeaRepository(db)
    idea = await repository.get_by_id(idea_id)

    if not idea:
        raise IdeaNotFound(idea_id)

    idea = await repository.record_view(idea)
    return {"success": True, **idea.to_response()}
