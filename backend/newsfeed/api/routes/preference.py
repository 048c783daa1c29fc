"""
Preference routes
"""

import logging

from fastapi import APIRouter, HTTPException

from newsfeed.api.deps import CurrentUser, SessionDep
from newsfeed.pipeline.exceptions import InvalidCategoryError
from newsfeed.schemas.article import CategoryResponse
from newsfeed.schemas.preference import PreferencesResponse, PreferencesUpdate
from newsfeed.services.article_store import ArticleStore
from newsfeed.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)
router = APIRouter()


async def _preferences_response(db, user_id: int) -> PreferencesResponse:
    categories = await ArticleStore(db).get_active_categories()
    return PreferencesResponse(
        categories=[CategoryResponse.model_validate(category) for category in categories],
        selected=await PreferenceService(db).get_preferences(user_id),
    )


@router.get("", response_model=PreferencesResponse)
async def get_preferences(user: CurrentUser, db: SessionDep) -> PreferencesResponse:
    """Active categories and the reader's current selection"""
    return await _preferences_response(db, user.id)


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    body: PreferencesUpdate,
    user: CurrentUser,
    db: SessionDep,
) -> PreferencesResponse:
    """
    Replace the reader's categories

    Args:
        body: New category selection, at least one id

    Returns:
        PreferencesResponse: Categories and the stored selection
    """
    try:
        await PreferenceService(db).update_preferences(user.id, body.categories)
    except InvalidCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await _preferences_response(db, user.id)
