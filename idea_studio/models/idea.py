from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4
from sqlalchemy import Text
from sqlmodel import Field, SQLModel, Column, JSON


class Idea(SQLModel, table=True):
    __tablename__ = "ideas"

    id: Optional[UUID] = Field(default_factory=uuid4, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)

    # Profile
    location: str = Field(default="")
    age_group: str = Field(default="")
    mbti: str = Field(default="", max_length=4)
    occupation: str = Field(default="")
    budget: int = Field(default=0, ge=0)
    time_commitment: str = Field(default="")
    interests: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    continent: str = Field(default="Global")
    growth_speed: str = Field(default="Moderate")
    market_size: str = Field(default="Medium")
    tier: str = Field(default="FREE", max_length=10)

    # Generated content
    title: str = Field(nullable=False)
    description: str = Field(default="N/A", sa_column=Column(Text))
    market_data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    why_you: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    roadmap: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    products: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))

    view_count: int = Field(default=0)
    like_count: int = Field(default=0)
    is_public: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)

    def to_response(self) -> Dict[str, Any]:
        """Stored idea in the camelCase shape clients render"""
        return {
            "id": str(self.id),
            "userId": self.user_id,
            "location": self.location,
            "ageGroup": self.age_group,
            "mbti": self.mbti,
            "occupation": self.occupation,
            "budget": self.budget,
            "timeCommitment": self.time_commitment,
            "interests": self.interests or [],
            "continent": self.continent,
            "growthSpeed": self.growth_speed,
            "marketSize": self.market_size,
            "tier": self.tier,
            "title": self.title,
            "description": self.description,
            "market": self.market_data or {},
            "whyYou": self.why_you or [],
            "roadmap": self.roadmap or [],
            "products": self.products or [],
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "isPublic": self.is_public,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def to_summary(self, author_name: str) -> Dict[str, Any]:
        """Community card fields"""
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "continent": self.continent,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "authorName": author_name,
        }
