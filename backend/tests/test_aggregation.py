"""Filtering, ordering and concurrent collection of dashboard content."""

import pytest

from devportal.models.enums import ContentSource
from devportal.schemas.content import ContentCardFilter
from devportal.schemas.sources import CraftDocument, GitHubRepo, NotionPage
from devportal.services.aggregation import (
    ContentAggregator,
    apply_card_filter,
    apply_card_order,
    filter_content,
    move_item,
    partition_featured,
)
from devportal.sources import ExternalAPIError, SourceConfigurationError

from tests.factories import ContentCardFactory, GitHubRepoPayloadFactory


@pytest.fixture
def cards():
    return [
        ContentCardFactory(id="github-1", source=ContentSource.GITHUB, title="FastAPI starter",
                           description="Template service", featured=True),
        ContentCardFactory(id="notion-1", source=ContentSource.NOTION, title="Onboarding",
                           description="First week checklist"),
        ContentCardFactory(id="craft-1", source=ContentSource.CRAFT, title="Architecture",
                           description="Service map for the FastAPI backend"),
        ContentCardFactory(id="github-2", source=ContentSource.GITHUB, title="cli-tools",
                           description="Small scripts"),
    ]


def ids(items):
    return [item.id for item in items]


class TestFilterContent:
    def test_no_query_no_filters_returns_everything(self, cards):
        assert ids(filter_content(cards)) == ids(cards)

    def test_search_matches_title_or_description_case_insensitively(self, cards):
        assert ids(filter_content(cards, "fastapi")) == ["github-1", "craft-1"]
        assert ids(filter_content(cards, "CHECKLIST")) == ["notion-1"]

    def test_search_text_is_not_trimmed(self):
        cards = [
            ContentCardFactory(id="alpha", title="alpha", description="single"),
            ContentCardFactory(id="beta", title="beta gamma", description="pair"),
        ]
        assert ids(filter_content(cards, " ")) == ["beta"]
        assert ids(filter_content(cards, "")) == ["alpha", "beta"]

    def test_source_filters_are_ored(self, cards):
        assert ids(filter_content(cards, selected_filters=["notion", "craft"])) == ["notion-1", "craft-1"]

    def test_favorite_filter(self, cards):
        result = filter_content(cards, selected_filters=["favorite"], favorited_ids={"github-2"})
        assert ids(result) == ["github-2"]

    def test_favorite_or_source(self, cards):
        result = filter_content(
            cards,
            selected_filters=["favorite", "notion"],
            favorited_ids={"craft-1"},
        )
        assert ids(result) == ["notion-1", "craft-1"]

    def test_search_and_filters_combine(self, cards):
        assert ids(filter_content(cards, "fastapi", ["github"])) == ["github-1"]


class TestApplyCardFilter:
    def test_none_keeps_everything(self, cards):
        assert ids(apply_card_filter(cards, None)) == ids(cards)

    def test_fields_are_combined(self, cards):
        cards[0] = cards[0].model_copy(update={"tags": ["python", "api"]})
        cards[3] = cards[3].model_copy(update={"tags": ["python"]})

        by_tag = apply_card_filter(cards, ContentCardFilter(tags=["python"]))
        by_tag_and_featured = apply_card_filter(cards, ContentCardFilter(tags=["python"], featured=False))
        by_source = apply_card_filter(cards, ContentCardFilter(source=ContentSource.CRAFT))

        assert ids(by_tag) == ["github-1", "github-2"]
        assert ids(by_tag_and_featured) == ["github-2"]
        assert ids(by_source) == ["craft-1"]

    def test_search_query(self, cards):
        result = apply_card_filter(cards, ContentCardFilter(search_query="fastapi"))
        assert ids(result) == ["github-1", "craft-1"]


def test_partition_featured_keeps_order(cards):
    cards[3] = cards[3].model_copy(update={"featured": True})
    featured, regular = partition_featured(cards)
    assert ids(featured) == ["github-1", "github-2"]
    assert ids(regular) == ["notion-1", "craft-1"]


class TestMoveItem:
    def test_moves_forward_and_back(self, cards):
        assert ids(move_item(cards, 0, 2)) == ["notion-1", "craft-1", "github-1", "github-2"]
        assert ids(move_item(cards, 3, 0)) == ["github-2", "github-1", "notion-1", "craft-1"]

    def test_does_not_mutate_input(self, cards):
        before = ids(cards)
        move_item(cards, 0, 3)
        assert ids(cards) == before

    def test_target_is_clamped(self, cards):
        assert ids(move_item(cards, 0, 99))[-1] == "github-1"
        assert ids(move_item(cards, 2, -5))[0] == "craft-1"

    def test_bad_source_index(self, cards):
        with pytest.raises(IndexError):
            move_item(cards, 4, 0)


def test_apply_card_order(cards):
    ordered = apply_card_order(cards, ["craft-1", "unknown", "github-2", "craft-1"])
    assert ids(ordered) == ["craft-1", "github-2", "github-1", "notion-1"]
    assert ids(apply_card_order(cards, [])) == ids(cards)


class StubGitHub:
    def __init__(self, repos=None, error=None):
        self.repos = repos or []
        self.error = error
        self.calls = []

    async def get_repositories(self, username, token=None):
        self.calls.append((username, token))
        if self.error:
            raise self.error
        return self.repos


class StubNotion:
    def __init__(self, pages=None, error=None):
        self.pages = pages or []
        self.error = error

    async def get_pages(self):
        if self.error:
            raise self.error
        return self.pages


class StubCraft:
    def __init__(self, documents=None, error=None):
        self.documents = documents or []
        self.error = error

    async def fetch_documents(self):
        if self.error:
            raise self.error
        return self.documents


def notion_page(page_id: str, archived: bool = False) -> NotionPage:
    return NotionPage(id=page_id, title=f"Page {page_id}", url=f"https://www.notion.so/{page_id}",
                      archived=archived)


class TestContentAggregator:
    async def test_collects_all_sources(self):
        github = StubGitHub([GitHubRepo.from_api(GitHubRepoPayloadFactory(id=7))])
        aggregator = ContentAggregator(
            github,
            StubNotion([notion_page("a"), notion_page("b", archived=True)]),
            StubCraft([CraftDocument(id="D1", title="Team Wiki")]),
        )

        items, statuses = await aggregator.collect(github_username="octocat", github_token="ghp_x")

        assert ids(items) == ["github-7", "notion-a", "craft-D1"]
        assert github.calls == [("octocat", "ghp_x")]
        assert {status.source: status.count for status in statuses} == {
            ContentSource.GITHUB: 1,
            ContentSource.NOTION: 1,
            ContentSource.CRAFT: 1,
        }
        assert all(status.success for status in statuses)

    async def test_github_skipped_without_username(self):
        github = StubGitHub()
        aggregator = ContentAggregator(github, StubNotion(), StubCraft())

        _, statuses = await aggregator.collect()

        assert github.calls == []
        assert [status.source for status in statuses] == [ContentSource.NOTION, ContentSource.CRAFT]

    async def test_failing_source_does_not_hide_others(self):
        aggregator = ContentAggregator(
            StubGitHub(error=ExternalAPIError("GitHub API error: Not Found", ContentSource.GITHUB, 404)),
            StubNotion(error=SourceConfigurationError("Notion token not configured", ContentSource.NOTION)),
            StubCraft([CraftDocument(id="D1", title="Guide")]),
        )

        items, statuses = await aggregator.collect(github_username="ghost")

        assert ids(items) == ["craft-D1"]
        by_source = {status.source: status for status in statuses}
        assert by_source[ContentSource.GITHUB].success is False
        assert by_source[ContentSource.GITHUB].error == "GitHub API error: Not Found"
        assert by_source[ContentSource.NOTION].error == "Notion token not configured"
        assert by_source[ContentSource.CRAFT].success is True

    async def test_unexpected_error_is_reported(self):
        aggregator = ContentAggregator(StubGitHub(), StubNotion(error=RuntimeError("boom")), StubCraft())
        items, statuses = await aggregator.collect(include=[ContentSource.NOTION])

        assert items == []
        assert statuses[0].success is False
        assert statuses[0].error == "boom"

    async def test_include_limits_sources(self):
        aggregator = ContentAggregator(StubGitHub(), StubNotion([notion_page("a")]), StubCraft())
        items, statuses = await aggregator.collect(include=[ContentSource.CRAFT])

        assert items == []
        assert [status.source for status in statuses] == [ContentSource.CRAFT]

    async def test_local_items_are_merged_and_deduplicated(self):
        aggregator = ContentAggregator(StubGitHub(), StubNotion([notion_page("a")]), StubCraft())
        local = [
            ContentCardFactory(id="notion-a", source=ContentSource.NOTION, title="Edited copy"),
            ContentCardFactory(id="local-1"),
        ]

        items, _ = await aggregator.collect(local_items=local)

        assert ids(items) == ["notion-a", "local-1"]
        assert items[0].title == "Page a"
