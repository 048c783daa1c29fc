from fastapi import APIRouter

from newsfeed.api.routes import article, category, feed, pipeline, preference

api_router = APIRouter()
api_router.include_router(feed.router, prefix="/feed", tags=["feed"])
api_router.include_router(article.router, prefix="/articles", tags=["articles"])
api_router.include_router(preference.router, prefix="/preferences", tags=["preferences"])
api_router.include_router(pipeline.router, prefix="/pipeline", tags=["pipeline"])
api_router.include_router(category.router, prefix="/categories", tags=["categories"])
