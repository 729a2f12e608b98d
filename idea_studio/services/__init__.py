# Business logic services package
from .auth_service import AuthService, AuthUser
from .generation_client import GenerationClient, GenerationResult
from .idea_repository import IdeaRepository
from .idea_service import IdeaGenerationService, GenerationOutcome
from .prompt_builder import PromptBuilder

__all__ = [
    "AuthService",
    "AuthUser",
    "GenerationClient",
    "GenerationResult",
    "IdeaRepository",
    "IdeaGenerationService",
    "GenerationOutcome",
    "PromptBuilder"
]
