"""
Reference data seeding
"""

from typing import Dict, List
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from newsfeed.models import Category, User

logger = logging.getLogger(__name__)

CATEGORY_SEED: List[Dict] = [
    {
        "name": "Technology",
        "slug": "technology",
        "description": "Latest tech news, software, AI, and digital innovations",
        "icon": "💻",
        "is_active": True,
    },
    {
        "name": "Business",
        "slug": "business",
        "description": "Business news, finance, markets, and economic trends",
        "icon": "💼",
        "is_active": True,
    },
    {
        "name": "Sports",
        "slug": "sports",
        "description": "Sports news, scores, and athlete updates",
        "icon": "⚽",
        "is_active": True,
    },
    {
        "name": "Health",
        "slug": "health",
        "description": "Health news, medical research, and wellness tips",
        "icon": "❤️",
        "is_active": True,
    },
    {
        "name": "Science",
        "slug": "science",
        "description": "Scientific discoveries and research breakthroughs",
        "icon": "🔬",
        "is_active": True,
    },
    {
        "name": "Entertainment",
        "slug": "entertainment",
        "description": "Movies, music, celebrities, and pop culture",
        "icon": "🎬",
        "is_active": True,
    },
]

DEMO_USER = {"name": "Test User", "email": "test@example.com"}


async def seed_categories(db: AsyncSession) -> List[Category]:
    """Insert the reference categories that do not exist yet, keyed by slug"""
    categories = []
    for data in CATEGORY_SEED:
        result = await db.execute(select(Category).where(Category.slug == data["slug"]))
        category = result.scalars().first()
        if category is None:
            category = Category(**data)
            db.add(category)
            logger.info(f"Seeded category: {data['slug']}")
        categories.append(category)

    await db.commit()
    return categories


async def seed_demo_user(db: AsyncSession) -> User:
    """Create the demo reader if missing"""
    result = await db.execute(select(User).where(User.email == DEMO_USER["email"]))
    user = result.scalars().first()
    if user is None:
        user = User(**DEMO_USER)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info(f"Seeded demo user: {user.email}")
    return user
