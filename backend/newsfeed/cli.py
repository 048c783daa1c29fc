"""CLI for the news feed backend."""

import argparse
import asyncio
import logging
from typing import List, Optional

import uvicorn

from newsfeed.core.config import settings
from newsfeed.core.job_config import JobConfig
from newsfeed.core.log_config import LogConfig
from newsfeed.db.seed import seed_categories, seed_demo_user
from newsfeed.db.session import async_session, close_db, init_db
from newsfeed.pipeline.exceptions import NewsFetchError
from newsfeed.pipeline.ingestion import IngestionPipeline
from newsfeed.services.queue import JobQueueService

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="newsfeed", description="Personalized news feed backend")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create tables and seed reference data")

    fetch = subparsers.add_parser("fetch", help="Ingest one batch of news and summarize it")
    fetch.add_argument(
        "--limit",
        type=int,
        default=settings.DEFAULT_FETCH_LIMIT,
        help="Target number of articles to fetch",
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    if getattr(args, "limit", 1) < 1:
        parser.error("--limit must be a positive integer")
    return args


async def run_init_db() -> None:
    await init_db()
    async with async_session() as db:
        categories = await seed_categories(db)
        user = await seed_demo_user(db)
    logger.info(f"Database ready: {len(categories)} categories, demo user id {user.id}")


async def run_fetch(limit: int) -> int:
    """Ingest a batch and wait for every summarization job to finish"""
    await init_db()
    async with async_session() as db:
        await seed_categories(db)

    job_queue = JobQueueService.from_config(JobConfig())
    pipeline = IngestionPipeline.from_settings(settings, async_session, job_queue)

    try:
        result = await pipeline.run(limit=limit)
    except NewsFetchError as e:
        logger.error(f"Fetch failed: {str(e)}")
        return 1

    await job_queue.drain()
    metrics = job_queue.get_metrics()
    logger.info(
        f"Stored {result.stored}, skipped {result.skipped}; summaries: "
        f"{metrics['jobs_succeeded']} processed, {metrics['jobs_soft_failed']} partial, "
        f"{metrics['jobs_failed']} failed"
    )
    return 0


async def _run(coro) -> int:
    try:
        return await coro or 0
    finally:
        await close_db()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    LogConfig().configure()

    if args.command == "serve":
        uvicorn.run("newsfeed.main:app", host=args.host, port=args.port)
        return 0

    if args.command == "init-db":
        return asyncio.run(_run(run_init_db()))

    return asyncio.run(_run(run_fetch(args.limit)))


if __name__ == "__main__":
    raise SystemExit(main())
