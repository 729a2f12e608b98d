"""
Request and response schemas for idea generation
"""
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


MBTI_TYPES = (
    "ISTJ", "ISFJ", "INFJ", "INTJ",
    "ISTP", "ISFP", "INFP", "INTP",
    "ESTP", "ESFP", "ENFP", "ENTP",
    "ESTJ", "ESFJ", "ENFJ", "ENTJ",
)

MAX_INTERESTS = 3


class Tier(str, Enum):
    FREE = "FREE"
    PRO = "PRO"


class CamelModel(BaseModel):
    """Base model exchanged with clients as camelCase JSON"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Profile(CamelModel):
    """Who is asking for a startup idea"""

    location: str = Field(min_length=1)
    age_group: str = Field(
        min_length=1,
        validation_alias=AliasChoices("ageGroup", "age", "age_group")
    )
    mbti: str
    occupation: str = ""
    budget: int = Field(default=0, ge=0)
    time_commitment: str = Field(
        default="",
        validation_alias=AliasChoices("timeCommitment", "timeCommit", "time", "time_commitment")
    )
    interests: List[str] = Field(default_factory=list, max_length=MAX_INTERESTS)
    continent: str = "Global"
    growth_speed: str = "Moderate"
    market_size: str = "Medium"
    tier: Tier = Tier.FREE

    @field_validator("location", "age_group", "occupation", "time_commitment", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("mbti", mode="before")
    @classmethod
    def _check_mbti(cls, value):
        code = str(value or "").strip().upper()
        if code not in MBTI_TYPES:
            raise ValueError(f"must be one of the 16 MBTI codes, got {value!r}")
        return code

    @field_validator("budget", mode="before")
    @classmethod
    def _coerce_budget(cls, value):
        if value is None or value == "":
            return 0
        if isinstance(value, str):
            try:
                return int(float(value.replace(",", "").strip()))
            except ValueError:
                return 0
        return value

    @field_validator("interests", mode="before")
    @classmethod
    def _dedupe_interests(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        seen = []
        for item in value:
            item = str(item).strip()
            if item and item not in seen:
                seen.append(item)
        return seen

    @field_validator("continent", "growth_speed", "market_size", mode="before")
    @classmethod
    def _default_when_blank(cls, value, info: ValidationInfo):
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value.strip() if isinstance(value, str) else value

    @field_validator("tier", mode="before")
    @classmethod
    def _upper_tier(cls, value):
        if value is None or value == "":
            return Tier.FREE
        if isinstance(value, str):
            return value.strip().upper()
        return value


class MarketInfo(CamelModel):
    size: str = "N/A"
    growth: str = "N/A"
    competition: str = "N/A"
    direction: Optional[str] = None
    value: Optional[str] = None


class RoadmapStep(CamelModel):
    week: str
    task: str

    @field_validator("week", mode="before")
    @classmethod
    def _week_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Product(CamelModel):
    name: str
    price: str = "N/A"
    link: str

    @field_validator("price", mode="before")
    @classmethod
    def _price_text(cls, value):
        if value is None:
            return "N/A"
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class GeneratedIdea(CamelModel):
    """Stable output contract of the generation pipeline"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = Field(min_length=1)
    description: str = "N/A"
    market: MarketInfo = Field(default_factory=MarketInfo)
    why_you: List[str] = Field(default_factory=list)
    roadmap: List[RoadmapStep] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)

    def to_response(self) -> dict:
        """camelCase dict with absent optional market fields left out"""
        return self.model_dump(by_alias=True, exclude_none=True)
