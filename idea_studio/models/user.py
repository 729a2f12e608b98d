from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    __tablename__ = "users"

    # Supabase user id for members, a generated UUID for anonymous guests
    id: str = Field(primary_key=True, max_length=64)
    email: Optional[str] = Field(default=None, max_length=320)
    tier: str = Field(default="FREE", max_length=10)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def author_name(self) -> str:
        """Public display name with the email mostly masked"""
        if not self.email:
            return "Anonymous founder"
        return self.email.split("@")[0][:3] + "***"
