from typing import List

from fastapi import APIRouter

from newsfeed.api.deps import SessionDep
from newsfeed.schemas.article import CategoryResponse
from newsfeed.services.article_store import ArticleStore

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: SessionDep) -> List[CategoryResponse]:
    """Active categories in seed order"""
    categories = await ArticleStore(db).get_active_categories()
    return [CategoryResponse.model_validate(category) for category in categories]
