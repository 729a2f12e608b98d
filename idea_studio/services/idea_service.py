"""
Idea generation pipeline
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional
from uuid import UUID

from idea_studio.database import DatabaseManager
from idea_studio.logging_config import logger
from idea_studio.schemas import GeneratedIdea, Profile, Tier
from idea_studio.services.auth_service import AuthUser
from idea_studio.services.generation_client import GenerationClient
from idea_studio.services.idea_repository import IdeaRepository
from idea_studio.services.prompt_builder import PromptBuilder
from idea_studio.services.request_normalizer import normalize_profile
from idea_studio.services.response_normalizer import normalize_idea, parse_response_text


def resolve_tier(requested: Tier, user: Optional[AuthUser]) -> Tier:
    """
    Effective tier for a request

    PRO needs both a PRO request and a PRO subscription; signing in
    alone does not grant it.
    """
    if requested == Tier.PRO and user is not None and user.tier == Tier.PRO:
        return Tier.PRO
    return Tier.FREE


@dataclass
class GenerationOutcome:
    profile: Profile
    idea: GeneratedIdea
    raw: Dict[str, Any]
    model: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            **self.idea.to_response(),
            "raw": self.raw,
            "metadata": {
                "model": self.model,
                "timestamp": self.timestamp.isoformat(),
                "tier": self.profile.tier.value,
            },
        }


class IdeaGenerationService:
    """Runs a profile through prompt building, generation and normalization"""

    def __init__(self, client: GenerationClient, prompt_builder: PromptBuilder):
        self.client = client
        self.prompt_builder = prompt_builder

    async def generate(self, payload: Mapping[str, Any], user: Optional[AuthUser] = None) -> GenerationOutcome:
        """
        Generate a startup idea for a raw profile payload

        Args:
            payload: Decoded request body
            user: Authenticated caller, if any

        Returns:
            GenerationOutcome with the normalized idea and the raw provider object

        Raises:
            ProfileValidationError: If the profile is invalid
            ProviderRateLimited: If the provider kept rate limiting
            ProviderError: For other provider failures
            ResponseParseError: If the provider output is unusable
        """
        profile = normalize_profile(payload)
        tier = resolve_tier(profile.tier, user)
        if tier != profile.tier:
            logger.info(f"Requested tier {profile.tier.value} downgraded to {tier.value}")
            profile = profile.model_copy(update={"tier": tier})

        prompt = self.prompt_builder.build(profile)
        result = await self.client.generate(prompt)

        raw = parse_response_text(result.text)
        idea = normalize_idea(raw)
        logger.info(f"Generated idea '{idea.title}' ({tier.value}) with {result.model}")

        return GenerationOutcome(profile=profile, idea=idea, raw=raw, model=result.model)

    @staticmethod
    async def save_best_effort(
        db: DatabaseManager,
        owner: Optional[AuthUser],
        profile: Profile,
        idea: GeneratedIdea,
    ) -> Optional[UUID]:
        """
        Persist a generated idea without failing the caller

        Any storage failure, including an unreachable database, is logged
        and swallowed.

        Returns:
            The new idea id, or None when the store failed
        """
        try:
            async with db.get_session() as session:
                repository = IdeaRepository(session)
                user = await repository.resolve_owner(owner)
                return await repository.create_idea(user.id, profile, idea)
        except Exception as e:
            logger.warning(f"Database save failed (non-fatal): {str(e)}")
            return None
