"""
Persistence adapter for ideas and their owners
"""
from typing import List, Optional, Tuple, Union
from uuid import UUID, uuid4

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from idea_studio.errors import PersistenceError
from idea_studio.logging_config import logger
from idea_studio.models import Idea, User
from idea_studio.schemas import GeneratedIdea, Profile
from idea_studio.services.auth_service import AuthUser


def _as_uuid(idea_id: Union[str, UUID]) -> Optional[UUID]:
    if isinstance(idea_id, UUID):
        return idea_id
    try:
        return UUID(str(idea_id))
    except ValueError:
        return None


class IdeaRepository:
    """Idea and owner storage over an async session"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def resolve_owner(self, auth_user: Optional[AuthUser]) -> User:
        """
        Find or create the user record that will own a saved idea

        Args:
            auth_user: Authenticated caller, or None for a guest

        Returns:
            The upserted member, or a new anonymous guest record
        """
        try:
            if auth_user is None:
                user = User(id=str(uuid4()))
            else:
                user = await self.session.get(User, auth_user.id)
                if user is None:
                    user = User(id=auth_user.id)
                user.email = auth_user.email
                user.tier = auth_user.tier.value
            self.session.add(user)
            await self.session.flush()
            return user
        except SQLAlchemyError as e:
            logger.error(f"Error resolving idea owner: {str(e)}")
            raise PersistenceError(f"Could not resolve idea owner: {str(e)}") from e

    async def create_idea(self, owner_id: str, profile: Profile, idea: GeneratedIdea) -> UUID:
        """
        Store a generated idea

        Args:
            owner_id: Owning user id
            profile: Profile the idea was generated from
            idea: Normalized generated idea

        Returns:
            Id of the new idea
        """
        record = Idea(
            user_id=owner_id,
            location=profile.location,
            age_group=profile.age_group,
            mbti=profile.mbti,
            occupation=profile.occupation,
            budget=profile.budget,
            time_commitment=profile.time_commitment,
            interests=list(profile.interests),
            continent=profile.continent,
            growth_speed=profile.growth_speed,
            market_size=profile.market_size,
            tier=profile.tier.value,
            title=idea.title,
            description=idea.description,
            market_data=idea.market.model_dump(by_alias=True, exclude_none=True),
            why_you=list(idea.why_you),
            roadmap=[step.model_dump(by_alias=True) for step in idea.roadmap],
            products=[product.model_dump(by_alias=True) for product in idea.products],
            is_public=False,
        )
        try:
            self.session.add(record)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error saving idea: {str(e)}")
            raise PersistenceError(f"Could not save idea: {str(e)}") from e

        logger.info(f"Saved idea {record.id} for user {owner_id}")
        return record.id

    async def get_by_id(self, idea_id: Union[str, UUID]) -> Optional[Idea]:
        key = _as_uuid(idea_id)
        if key is None:
            return None
        try:
            return await self.session.get(Idea, key)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not load idea {idea_id}: {str(e)}") from e

    async def record_view(self, idea: Idea) -> Idea:
        """Increment the view counter of a stored idea"""
        # Increment in SQL so concurrent readers never overwrite each other
        statement = (
            update(Idea)
            .where(Idea.id == idea.id)
            .values(view_count=Idea.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            await self.session.execute(statement)
            await self.session.commit()
            await self.session.refresh(idea)
            return idea
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error counting view for idea {idea.id}: {str(e)}")
            raise PersistenceError(f"Could not update idea: {str(e)}") from e

    async def toggle_publish(self, idea: Idea) -> Idea:
        idea.is_public = not idea.is_public
        return await self._save(idea)

    async def _save(self, idea: Idea) -> Idea:
        try:
            self.session.add(idea)
            await self.session.commit()
            await self.session.refresh(idea)
            return idea
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating idea {idea.id}: {str(e)}")
            raise PersistenceError(f"Could not update idea: {str(e)}") from e

    async def list_public(self, limit: int = 20, page: int = 1) -> List[Tuple[Idea, User]]:
        """Public ideas with their authors, newest first"""
        offset = (page - 1) * limit
        query = (
            select(Idea, User)
            .join(User, Idea.user_id == User.id)
            .where(Idea.is_public == True)  # noqa: E712
            .order_by(Idea.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        try:
            result = await self.session.execute(query)
            return [(idea, user) for idea, user in result.all()]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not list public ideas: {str(e)}") from e

    async def list_for_user(self, user_id: str) -> List[Idea]:
        query = select(Idea).where(Idea.user_id == user_id).order_by(Idea.created_at.desc())
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not list ideas for user: {str(e)}") from e
