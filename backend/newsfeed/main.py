from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from newsfeed.api.main import api_router
from newsfeed.core.config import settings
from newsfeed.core.job_config import JobConfig
from newsfeed.core.log_config import LogConfig
from newsfeed.db.seed import seed_categories, seed_demo_user
from newsfeed.db.session import async_session, close_db, init_db
from newsfeed.pipeline.ingestion import IngestionPipeline
from newsfeed.scrapers.scheduler import IngestionScheduler
from newsfeed.services.queue import JobQueueService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    LogConfig().configure()

    await init_db()
    async with async_session() as db:
        await seed_categories(db)
        if settings.ENVIRONMENT == "local":
            await seed_demo_user(db)

    job_queue = JobQueueService.from_config(JobConfig())
    await job_queue.start()

    app.state.settings = settings
    app.state.session_factory = async_session
    app.state.job_queue = job_queue

    scheduler = IngestionScheduler(
        lambda: IngestionPipeline.from_settings(settings, async_session, job_queue)
    )
    if settings.INGESTION_INTERVAL_SECONDS > 0:
        await scheduler.start(settings.INGESTION_INTERVAL_SECONDS, settings.DEFAULT_FETCH_LIMIT)

    logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")
    try:
        yield
    finally:
        if scheduler.is_running:
            await scheduler.stop()
        await job_queue.stop()
        await close_db()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

app.include_router(api_router, prefix=settings.API_V1_STR)
