"""Tests for the HTTP API."""

import httpx
import pytest

from newsfeed.core.config import Settings
from newsfeed.main import app
from newsfeed.models import ArticleStatus
from newsfeed.services.queue import JobQueueService

API = "/api/v1"


@pytest.fixture
async def client(session_factory, categories):
    app.state.settings = Settings(USE_MOCK_SERVICES=True, FEED_PAGE_SIZE=20)
    app.state.session_factory = session_factory
    app.state.job_queue = JobQueueService(max_workers=2)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def headers(user):
    return {"X-User-Id": str(user.id)}


class TestCurrentUser:
    """Tests for reader resolution from the X-User-Id header."""

    async def test_missing_header_is_unauthorized(self, client) -> None:
        response = await client.get(f"{API}/preferences")

        assert response.status_code == 401

    async def test_unknown_user_is_not_found(self, client) -> None:
        response = await client.get(f"{API}/preferences", headers={"X-User-Id": "999"})

        assert response.status_code == 404


class TestCategoryRoutes:
    async def test_lists_active_categories(self, client) -> None:
        response = await client.get(f"{API}/categories")

        assert response.status_code == 200
        assert [c["slug"] for c in response.json()] == [
            "technology", "business", "sports", "health", "science", "entertainment",
        ]


class TestPreferenceRoutes:
    """Tests for /preferences."""

    async def test_update_then_read(self, client, headers, categories) -> None:
        ids = [categories[0].id, categories[2].id]

        response = await client.put(f"{API}/preferences", json={"categories": ids}, headers=headers)

        assert response.status_code == 200
        assert response.json()["selected"] == ids
        response = await client.get(f"{API}/preferences", headers=headers)
        assert response.json()["selected"] == ids
        assert len(response.json()["categories"]) == 6

    async def test_empty_selection_is_rejected(self, client, headers) -> None:
        response = await client.put(f"{API}/preferences", json={"categories": []}, headers=headers)

        assert response.status_code == 422

    async def test_unknown_category_is_rejected(self, client, headers) -> None:
        response = await client.put(f"{API}/preferences", json={"categories": [999]}, headers=headers)

        assert response.status_code == 400


class TestFeedRoutes:
    """Tests for /feed."""

    async def test_feed_without_preferences_is_bad_request(self, client, headers) -> None:
        response = await client.get(f"{API}/feed", headers=headers)

        assert response.status_code == 400

    async def test_feed_lists_unread_processed_articles(
        self, client, headers, categories, add_article
    ) -> None:
        article = await add_article("technology", title="Visible")
        await add_article("technology", status=ArticleStatus.PENDING)
        await client.put(f"{API}/preferences", json={"categories": [categories[0].id]}, headers=headers)

        response = await client.get(f"{API}/feed", headers=headers)

        body = response.json()
        assert response.status_code == 200
        assert [item["id"] for item in body["items"]] == [article.id]
        assert body["items"][0]["category"]["slug"] == "technology"
        assert (body["total"], body["page"], body["per_page"], body["pages"]) == (1, 1, 20, 1)

    async def test_category_feed(self, client, categories, add_article) -> None:
        article = await add_article("sports")

        response = await client.get(f"{API}/feed/category/{categories[2].id}")

        assert [item["id"] for item in response.json()["items"]] == [article.id]

    async def test_unknown_category_feed_is_not_found(self, client) -> None:
        response = await client.get(f"{API}/feed/category/999")

        assert response.status_code == 404

    async def test_saved_and_trending(self, client, headers, add_article) -> None:
        article = await add_article()
        await client.post(f"{API}/articles/{article.id}/save", headers=headers)

        saved = await client.get(f"{API}/feed/saved", headers=headers)
        trending = await client.get(f"{API}/feed/trending")

        assert [item["id"] for item in saved.json()["items"]] == [article.id]
        assert [item["id"] for item in trending.json()] == [article.id]


class TestArticleRoutes:
    """Tests for /articles."""

    async def test_detail_reflects_reader_state(self, client, headers, add_article) -> None:
        article = await add_article("science", content="Body")
        sibling = await add_article("science")

        await client.post(f"{API}/articles/{article.id}/read", json={"time_spent": 30}, headers=headers)
        save = await client.post(f"{API}/articles/{article.id}/save", headers=headers)
        response = await client.get(f"{API}/articles/{article.id}", headers=headers)

        body = response.json()
        assert save.json() == {"saved": True}
        assert body["is_read"] is True
        assert body["is_saved"] is True
        assert body["content"] == "Body"
        assert [item["id"] for item in body["related"]] == [sibling.id]

    async def test_read_rejects_negative_time(self, client, headers, add_article) -> None:
        article = await add_article()

        response = await client.post(
            f"{API}/articles/{article.id}/read", json={"time_spent": -1}, headers=headers
        )

        assert response.status_code == 422

    async def test_unknown_article(self, client, headers) -> None:
        assert (await client.get(f"{API}/articles/999", headers=headers)).status_code == 404
        assert (await client.post(f"{API}/articles/999/save", headers=headers)).status_code == 404
        assert (await client.post(f"{API}/articles/999/read", json={}, headers=headers)).status_code == 404


class TestPipelineRoutes:
    """Tests for /pipeline."""

    async def test_fetch_stores_articles_and_queues_jobs(self, client) -> None:
        response = await client.post(f"{API}/pipeline/fetch", params={"limit": 6})

        assert response.status_code == 200
        assert response.json()["stored"] == 6
        metrics = (await client.get(f"{API}/pipeline/queue")).json()
        assert metrics["queued"] == 6
        assert metrics["status"] == "stopped"

    async def test_manual_summarize(self, client, add_article) -> None:
        article = await add_article(status=ArticleStatus.FAILED)

        response = await client.post(f"{API}/pipeline/articles/{article.id}/summarize")

        assert response.json() == {"article_id": article.id, "queued": True}
        assert app.state.job_queue.task_queue.qsize() == 1

    async def test_manual_summarize_unknown_article(self, client) -> None:
        response = await client.post(f"{API}/pipeline/articles/999/summarize")

        assert response.status_code == 404
