"""
Reader category preferences
"""

from typing import List
import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from newsfeed.models import Category, UserPreference
from newsfeed.pipeline.exceptions import InvalidCategoryError

logger = logging.getLogger(__name__)


class PreferenceService:
    """Category selection that drives the personalized feed"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_preferences(self, user_id: int) -> List[int]:
        """Selected category ids in ascending order"""
        result = await self.db.execute(
            select(UserPreference.category_id)
            .where(UserPreference.user_id == user_id)
            .order_by(UserPreference.category_id)
        )
        return list(result.scalars().all())

    async def update_preferences(self, user_id: int, category_ids: List[int]) -> List[int]:
        """
        Replace the reader's categories with the given set

        Args:
            user_id: Reader id
            category_ids: New selection, at least one existing category id

        Returns:
            List[int]: The stored selection

        Raises:
            InvalidCategoryError: Empty selection or unknown category ids
        """
        wanted = sorted(set(category_ids))
        if not wanted:
            raise InvalidCategoryError([])

        result = await self.db.execute(select(Category.id).where(Category.id.in_(wanted)))
        known = set(result.scalars().all())
        unknown = [category_id for category_id in wanted if category_id not in known]
        if unknown:
            raise InvalidCategoryError(unknown)

        try:
            await self.db.execute(delete(UserPreference).where(UserPreference.user_id == user_id))
            self.db.add_all(
                [UserPreference(user_id=user_id, category_id=category_id) for category_id in wanted]
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"User {user_id} preferences updated: {wanted}")
        return wanted
