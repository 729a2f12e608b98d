"""
Supabase Auth integration for resolving the calling user
"""
import asyncio
from dataclasses import dataclass
from typing import Optional

from supabase import Client, create_client

from idea_studio.config import Settings
from idea_studio.logging_config import logger
from idea_studio.schemas import Tier


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: Optional[str] = None
    # Subscription tier, set by billing in Supabase app_metadata
    tier: Tier = Tier.FREE


class AuthService:
    """Verifies Supabase access tokens"""

    def __init__(self, settings: Settings, client: Optional[Client] = None):
        self.client = client
        if self.client is None and settings.supabase_url and settings.supabase_key:
            self.client = create_client(settings.supabase_url, settings.supabase_key)

        if self.client is None:
            logger.warning("Supabase is not configured, all requests are treated as anonymous")

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def get_user(self, access_token: Optional[str]) -> Optional[AuthUser]:
        """
        Resolve the user owning an access token

        Args:
            access_token: Bearer token from the request

        Returns:
            AuthUser, or None for anonymous callers and rejected tokens
        """
        if not access_token or self.client is None:
            return None

        try:
            # supabase-py is synchronous
            response = await asyncio.to_thread(self.client.auth.get_user, access_token)
        except Exception as e:
            logger.warning(f"Rejected access token: {str(e)}")
            return None

        user = response.user if response else None
        if user is None:
            return None

        metadata = user.app_metadata or {}
        tier = Tier.PRO if str(metadata.get("tier", "")).upper() == Tier.PRO.value else Tier.FREE
        return AuthUser(id=user.id, email=user.email, tier=tier)
