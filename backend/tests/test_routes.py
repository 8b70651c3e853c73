"""HTTP surface: health, source routes, aggregated content and favorites."""

import pytest

from devportal.api.dependencies import get_craft_source, get_github_source, get_notion_source
from devportal.sources import CraftSource, GitHubSource, NotionSource

from tests.factories import (
    CraftDocumentPayloadFactory,
    GitHubRepoPayloadFactory,
    NotionPagePayloadFactory,
)

API = "/api/v1"


@pytest.fixture
async def sources(app, upstream):
    """Route every adapter to the fake upstream."""
    github = GitHubSource(upstream.config())
    notion = NotionSource(upstream.config(), token="secret_abc", database_id="db1")
    craft = CraftSource(upstream.config())
    app.dependency_overrides[get_github_source] = lambda: github
    app.dependency_overrides[get_notion_source] = lambda: notion
    app.dependency_overrides[get_craft_source] = lambda: craft
    yield upstream
    for source in (github, notion, craft):
        await source.close()


def favorite_body(content_id: str = "github-42", **overrides) -> dict:
    body = {
        "content_id": content_id,
        "content_type": "github",
        "content_title": "Hello-World",
        "content_url": f"https://github.com/octocat/{content_id}",
        "tags": ["demo"],
    }
    body.update(overrides)
    return body


class TestApplicationSurface:
    async def test_root(self, async_client):
        response = await async_client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    async def test_health(self, async_client):
        response = await async_client.get("/health")
        assert response.json()["status"] == "healthy"

    async def test_ready(self, async_client):
        response = await async_client.get("/ready")
        assert response.status_code == 200
        assert response.json() == {"ready": True}


class TestGitHubRoutes:
    async def test_repositories_envelope(self, async_client, sources):
        sources.respond("GET", "/users/octocat/repos", GitHubRepoPayloadFactory.create_batch(3))

        response = await async_client.get(f"{API}/github/repositories", params={"username": "octocat"})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["count"] == 3
        assert {"id", "name", "url", "stars", "language", "topics"} <= set(body["data"][0])

    async def test_upstream_failure_is_soft(self, async_client, sources):
        response = await async_client.get(f"{API}/github/repositories", params={"username": "ghost"})

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "data": [],
            "count": 0,
            "error": "GitHub API error: Not Found",
        }

    async def test_unreadable_upstream_body_is_soft(self, async_client, sources):
        sources.respond_text("GET", "/users/octocat/repos", "<html>Service Unavailable</html>")
        sources.respond("GET", "/search/repositories", {"total_count": 1, "items": [{"id": 1, "name": "x"}]})

        listing = await async_client.get(f"{API}/github/repositories", params={"username": "octocat"})
        search = await async_client.get(f"{API}/github/search", params={"query": "x"})

        assert listing.status_code == 200
        assert listing.json()["success"] is False
        assert listing.json()["error"] == "GitHub API returned an invalid response"
        assert search.status_code == 200
        assert search.json()["success"] is False

    async def test_user_not_found(self, async_client, sources):
        response = await async_client.get(f"{API}/github/users/ghost")
        assert response.json()["success"] is False
        assert response.json()["data"] is None

    async def test_search_count_is_total(self, async_client, sources):
        sources.respond(
            "GET",
            "/search/repositories",
            {"total_count": 99, "items": GitHubRepoPayloadFactory.create_batch(2)},
        )
        response = await async_client.get(f"{API}/github/search", params={"query": "fastapi", "sort": "updated"})
        assert response.json()["count"] == 99
        assert sources.requests[0]["query"]["sort"] == "updated"

    async def test_stored_key_used_for_signed_in_caller(self, async_client, sources, auth_headers):
        created = await async_client.post(
            f"{API}/api-keys",
            json={"provider": "github", "key_name": "personal", "secret": "ghp_storedsecret"},
            headers=auth_headers,
        )
        assert created.status_code == 201
        sources.respond("GET", "/users/octocat/repos", [])

        await async_client.get(
            f"{API}/github/repositories",
            params={"username": "octocat"},
            headers=auth_headers,
        )

        assert sources.requests[-1]["headers"]["Authorization"] == "token ghp_storedsecret"

    async def test_missing_username_is_validation_error(self, async_client):
        response = await async_client.get(f"{API}/github/repositories")
        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"


class TestNotionRoutes:
    async def test_pages(self, async_client, sources):
        sources.respond("POST", "/databases/db1/query", {"results": [NotionPagePayloadFactory(title="Runbook")]})
        response = await async_client.get(f"{API}/notion/pages")
        assert [page["title"] for page in response.json()] == ["Runbook"]

    async def test_missing_credentials_degrade_to_empty(self, app, async_client, upstream):
        unconfigured = NotionSource(upstream.config())
        app.dependency_overrides[get_notion_source] = lambda: unconfigured

        pages = await async_client.get(f"{API}/notion/pages")
        database = await async_client.get(f"{API}/notion/database")

        assert pages.status_code == 200
        assert pages.json() == []
        assert database.json() is None
        await unconfigured.close()


class TestCraftRoutes:
    async def test_documents_keep_craft_field_names(self, async_client, sources):
        sources.respond("GET", "/documents", {"items": [CraftDocumentPayloadFactory(id="D1", title="Wiki")]})
        response = await async_client.get(f"{API}/craft/documents")
        assert response.json() == [{"id": "D1", "title": "Wiki", "isDeleted": False}]

    async def test_rendered_document(self, async_client, sources):
        sources.respond(
            "GET",
            "/blocks",
            {"id": "D1", "markdown": "# Deployment Guide", "content": [{"id": "b1", "markdown": "Run it"}]},
        )
        response = await async_client.get(f"{API}/craft/documents/D1/rendered")
        assert response.json() == {"id": "D1", "category": "guide", "markdown": "# Deployment Guide\n  Run it"}

    async def test_rendered_missing_document(self, async_client, sources):
        response = await async_client.get(f"{API}/craft/documents/nope/rendered")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    async def test_categories(self, async_client):
        response = await async_client.get(f"{API}/craft/categories")
        categories = [item["category"] for item in response.json()]
        assert categories[0] == "dashboard"
        assert categories[-1] == "other"


class TestContentRoutes:
    async def test_aggregated_listing(self, async_client, sources):
        sources.respond(
            "GET",
            "/users/octocat/repos",
            [GitHubRepoPayloadFactory(id=1, stargazers_count=500), GitHubRepoPayloadFactory(id=2, stargazers_count=3)],
        )
        sources.respond("POST", "/databases/db1/query", {"results": [NotionPagePayloadFactory(id="p1")]})
        sources.respond("GET", "/documents", {"items": []})

        response = await async_client.get(f"{API}/content", params={"github_username": "octocat"})

        body = response.json()
        assert [card["id"] for card in body["featured"]] == ["github-1"]
        assert [card["id"] for card in body["regular"]] == ["github-2", "notion-p1"]
        assert body["total"] == 3
        assert all(status["success"] for status in body["sources"])

    async def test_failed_source_reported(self, async_client, sources):
        sources.respond("GET", "/documents", {"items": [CraftDocumentPayloadFactory(id="D1")]})

        response = await async_client.get(f"{API}/content", params={"filters": ["craft"]})

        body = response.json()
        assert body["total"] == 1
        notion_status = next(s for s in body["sources"] if s["source"] == "notion")
        assert notion_status["success"] is False

    async def test_favorite_filter_and_card_order(self, async_client, sources, auth_headers):
        sources.respond("POST", "/databases/db1/query", {"results": []})
        sources.respond(
            "GET",
            "/documents",
            {"items": [CraftDocumentPayloadFactory(id=doc_id) for doc_id in ("A", "B", "C")]},
        )
        await async_client.post(
            f"{API}/favorites",
            json=favorite_body("craft-B", content_type="other"),
            headers=auth_headers,
        )
        await async_client.patch(
            f"{API}/preferences",
            json={"card_order": ["craft-C"]},
            headers=auth_headers,
        )

        ordered = await async_client.get(f"{API}/content", headers=auth_headers)
        favorites = await async_client.get(f"{API}/content", params={"filters": ["favorite"]}, headers=auth_headers)

        assert [card["id"] for card in ordered.json()["regular"]] == ["craft-C", "craft-A", "craft-B"]
        assert [card["id"] for card in favorites.json()["regular"]] == ["craft-B"]

    async def test_post_merges_local_items(self, async_client, sources):
        sources.respond("POST", "/databases/db1/query", {"results": []})
        sources.respond("GET", "/documents", {"items": []})
        local = {
            "id": "local-1",
            "title": "Edited card",
            "description": "Kept by the client",
            "source": "gitbook",
            "url": "https://docs.example.com/start",
        }

        response = await async_client.post(
            f"{API}/content",
            json={"search_query": "edited", "local_items": [local]},
        )

        assert [card["id"] for card in response.json()["regular"]] == ["local-1"]

    async def test_card_filters(self, async_client, sources):
        sources.respond("POST", "/databases/db1/query", {"results": []})
        sources.respond("GET", "/documents", {"items": []})
        local = [
            {"id": "local-1", "title": "Python guide", "description": "Tips", "source": "gitbook",
             "url": "https://docs.example.com/py", "tags": ["python"]},
            {"id": "local-2", "title": "Go guide", "description": "Tips", "source": "gitbook",
             "url": "https://docs.example.com/go", "tags": ["go"], "featured": True},
        ]

        by_tag = await async_client.post(
            f"{API}/content",
            json={"local_items": local, "card_filter": {"tags": ["go"]}},
        )
        not_featured = await async_client.post(
            f"{API}/content",
            json={"local_items": local, "card_filter": {"featured": False}},
        )

        assert [card["id"] for card in by_tag.json()["featured"]] == ["local-2"]
        assert by_tag.json()["total"] == 1
        assert [card["id"] for card in not_featured.json()["regular"]] == ["local-1"]

    async def test_blank_search_is_not_trimmed(self, async_client, sources):
        sources.respond("POST", "/databases/db1/query", {"results": []})
        sources.respond("GET", "/documents", {"items": []})
        local = [
            {"id": "local-1", "title": "single", "description": "word", "source": "gitbook",
             "url": "https://docs.example.com/a"},
            {"id": "local-2", "title": "two words", "description": "here", "source": "gitbook",
             "url": "https://docs.example.com/b"},
        ]

        response = await async_client.post(f"{API}/content", json={"search_query": " ", "local_items": local})

        assert [card["id"] for card in response.json()["regular"]] == ["local-2"]

    async def test_favorite_content_requires_login(self, async_client):
        response = await async_client.get(f"{API}/content/favorites")
        assert response.status_code == 401


class TestFavoriteRoutes:
    async def test_requires_authentication(self, async_client):
        response = await async_client.get(f"{API}/favorites/count")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_add_list_count_remove(self, async_client, auth_headers):
        added = await async_client.post(f"{API}/favorites", json=favorite_body(), headers=auth_headers)
        duplicate = await async_client.post(f"{API}/favorites", json=favorite_body(), headers=auth_headers)

        assert added.json()["success"] is True
        assert duplicate.json() == {"success": False, "message": None, "error": "Already added to favorites"}

        listing = await async_client.get(f"{API}/favorites", headers=auth_headers)
        assert listing.json()["count"] == 1
        assert listing.json()["data"][0]["tags"] == ["demo"]

        status = await async_client.get(f"{API}/favorites/github-42/status", headers=auth_headers)
        assert status.json() == {"success": True, "is_favorited": True}

        removed = await async_client.delete(f"{API}/favorites/github-42", headers=auth_headers)
        assert removed.json()["success"] is True
        count = await async_client.get(f"{API}/favorites/count", headers=auth_headers)
        assert count.json() == {"success": True, "count": 0}

    async def test_delete_by_body(self, async_client, auth_headers):
        await async_client.post(f"{API}/favorites", json=favorite_body(), headers=auth_headers)

        deleted = await async_client.post(
            f"{API}/favorites/delete",
            json={"content_id": "github-42"},
            headers=auth_headers,
        )
        empty = await async_client.post(f"{API}/favorites/delete", json={"content_id": ""}, headers=auth_headers)

        assert deleted.json() == {"success": True, "message": "Deleted from favorites", "error": None}
        assert empty.status_code == 422
        count = await async_client.get(f"{API}/favorites/count", headers=auth_headers)
        assert count.json()["count"] == 0

    async def test_users_are_isolated(self, async_client, auth_headers, other_headers):
        await async_client.post(f"{API}/favorites", json=favorite_body("github-1"), headers=auth_headers)
        await async_client.post(f"{API}/favorites", json=favorite_body("github-2"), headers=auth_headers)

        mine = await async_client.get(f"{API}/favorites/count", headers=auth_headers)
        theirs = await async_client.get(f"{API}/favorites/count", headers=other_headers)

        assert mine.json()["count"] == 2
        assert theirs.json()["count"] == 0

    async def test_toggle(self, async_client, auth_headers):
        first = await async_client.post(f"{API}/favorites/toggle", json=favorite_body(), headers=auth_headers)
        second = await async_client.post(f"{API}/favorites/toggle", json=favorite_body(), headers=auth_headers)

        assert first.json()["is_favorited"] is True
        assert second.json()["is_favorited"] is False

    @pytest.mark.parametrize("params", [{"limit": 1000}, {"offset": -1}])
    async def test_listing_bounds(self, async_client, auth_headers, params):
        response = await async_client.get(f"{API}/favorites", params=params, headers=auth_headers)
        assert response.status_code == 422

    async def test_invalid_url_rejected(self, async_client, auth_headers):
        response = await async_client.post(
            f"{API}/favorites",
            json=favorite_body(content_url="not-a-url"),
            headers=auth_headers,
        )
        assert response.status_code == 422
        fields = [error["field"] for error in response.json()["details"]["validation_errors"]]
        assert "body.content_url" in fields
