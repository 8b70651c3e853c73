"""Favorites store: per-user isolation, duplicate handling, toggling."""

from sqlalchemy import func, select

from devportal.models import ContentSource, FavoriteContentType, UserFavorite
from devportal.schemas.favorites import GetUserFavorites
from devportal.services.favorites import ALREADY_FAVORITED, FavoritesStore, favorite_from_card

from tests.factories import ContentCardFactory, FavoritePayloadFactory


async def test_add_then_remove_round_trip(db_session, test_user):
    store = FavoritesStore(db_session)
    favorite = FavoritePayloadFactory()

    added = await store.add_favorite(test_user.id, favorite)
    assert added.success is True
    assert added.message == "Added to favorites"
    assert (await store.is_favorited(test_user.id, favorite.content_id)).is_favorited is True

    removed = await store.remove_favorite(test_user.id, favorite.content_id)
    assert removed.success is True
    assert (await store.is_favorited(test_user.id, favorite.content_id)).is_favorited is False


async def test_duplicate_add_reports_already_favorited(db_session, test_user):
    store = FavoritesStore(db_session)
    favorite = FavoritePayloadFactory()

    assert (await store.add_favorite(test_user.id, favorite)).success is True
    second = await store.add_favorite(test_user.id, favorite)

    assert second.success is False
    assert second.error == ALREADY_FAVORITED
    assert (await store.count_favorites(test_user.id)).count == 1


async def test_duplicate_add_keeps_original_snapshot(db_session, test_user):
    store = FavoritesStore(db_session)
    original = FavoritePayloadFactory(content_title="First title")
    await store.add_favorite(test_user.id, original)
    await store.add_favorite(
        test_user.id,
        FavoritePayloadFactory(content_id=original.content_id, content_title="Second title"),
    )

    listing = await store.list_favorites(test_user.id)
    assert [item.content_title for item in listing.data] == ["First title"]


async def test_remove_missing_favorite_succeeds(db_session, test_user):
    result = await FavoritesStore(db_session).remove_favorite(test_user.id, "github-404")
    assert result.success is True


async def test_delete_favorite_message(db_session, test_user):
    store = FavoritesStore(db_session)
    favorite = FavoritePayloadFactory()
    await store.add_favorite(test_user.id, favorite)

    result = await store.delete_favorite(test_user.id, favorite.content_id)
    assert result.message == "Deleted from favorites"
    assert (await store.count_favorites(test_user.id)).count == 0


async def test_double_toggle_restores_state(db_session, test_user):
    store = FavoritesStore(db_session)
    favorite = FavoritePayloadFactory()

    first = await store.toggle_favorite(test_user.id, favorite)
    assert first.success is True
    assert first.is_favorited is True

    second = await store.toggle_favorite(test_user.id, favorite)
    assert second.success is True
    assert second.is_favorited is False
    assert (await store.is_favorited(test_user.id, favorite.content_id)).is_favorited is False


async def test_counts_are_isolated_per_user(db_session, test_user, other_user):
    store = FavoritesStore(db_session)
    await store.add_favorite(test_user.id, FavoritePayloadFactory())
    await store.add_favorite(test_user.id, FavoritePayloadFactory())

    assert (await store.count_favorites(test_user.id)).count == 2
    assert (await store.count_favorites(other_user.id)).count == 0
    assert (await store.list_favorites(other_user.id)).data == []


async def test_same_content_for_two_users(db_session, test_user, other_user):
    store = FavoritesStore(db_session)
    favorite = FavoritePayloadFactory()

    assert (await store.add_favorite(test_user.id, favorite)).success is True
    assert (await store.add_favorite(other_user.id, favorite)).success is True

    await store.remove_favorite(test_user.id, favorite.content_id)
    assert (await store.is_favorited(other_user.id, favorite.content_id)).is_favorited is True


async def test_list_filters_and_pages(db_session, test_user):
    store = FavoritesStore(db_session)
    for _ in range(3):
        await store.add_favorite(test_user.id, FavoritePayloadFactory())
    notion = FavoritePayloadFactory(
        content_id="notion-abc",
        content_type=FavoriteContentType.NOTION,
        content_url="https://www.notion.so/abc",
    )
    await store.add_favorite(test_user.id, notion)

    only_notion = await store.list_favorites(
        test_user.id, GetUserFavorites(content_type=FavoriteContentType.NOTION)
    )
    assert [item.content_id for item in only_notion.data] == ["notion-abc"]

    everything = await store.list_favorites(test_user.id)
    page = await store.list_favorites(test_user.id, GetUserFavorites(limit=2, offset=1))
    assert everything.count == 4
    assert page.count == 2
    assert [item.content_id for item in page.data] == [
        item.content_id for item in everything.data[1:3]
    ]
    # count ignores filters and paging
    assert (await store.count_favorites(test_user.id)).count == 4


async def test_favorited_ids(db_session, test_user):
    store = FavoritesStore(db_session)
    first, second = FavoritePayloadFactory(), FavoritePayloadFactory()
    await store.add_favorite(test_user.id, first)
    await store.add_favorite(test_user.id, second)

    assert await store.favorited_ids(test_user.id) == {first.content_id, second.content_id}


async def test_favorites_cascade_with_user(db_session, test_user):
    store = FavoritesStore(db_session)
    await store.add_favorite(test_user.id, FavoritePayloadFactory())

    await db_session.delete(test_user)
    await db_session.commit()

    remaining = await db_session.scalar(select(func.count(UserFavorite.id)))
    assert remaining == 0


def test_favorite_from_card_maps_source():
    github = favorite_from_card(ContentCardFactory(source=ContentSource.GITHUB, tags=["go"]))
    craft = favorite_from_card(ContentCardFactory(source=ContentSource.CRAFT, tags=[]))

    assert github.content_type is FavoriteContentType.GITHUB
    assert github.tags == ["go"]
    assert craft.content_type is FavoriteContentType.OTHER
    assert craft.tags is None
