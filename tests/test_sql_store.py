"""Article operations against PostgreSQL, including the tsvector search."""
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ArticleValidationError, NotFoundError
from app.models.category import Category
from app.models.user import ROLE_AUTHOR, ROLE_USER, User
from app.schemas.article import ArticleCreate, ArticleUpdate
from app.schemas.auth import CurrentUser
from app.services.article import ArticleService
from app.store.sql import SQLArticleStore


@pytest.fixture
async def world(db_session: AsyncSession) -> SimpleNamespace:
    technology = Category(name="technology", color="bg-purple-500")
    sports = Category(name="sports", color="bg-orange-500")
    writer = User(username="sarah", name="Sarah Chen", hashed_password="x", role=ROLE_AUTHOR)
    reader = User(username="reader", name="Reader", hashed_password="x", role=ROLE_USER)
    db_session.add_all([technology, sports, writer, reader])
    await db_session.commit()

    store = SQLArticleStore(db_session)
    return SimpleNamespace(
        store=store,
        service=ArticleService(store),
        technology=technology,
        sports=sports,
        writer=CurrentUser(id=writer.id, role=writer.role),
        reader=CurrentUser(id=reader.id, role=reader.role),
    )


async def _publish(world, **overrides):
    fields = {
        "title": "The Future of AI",
        "excerpt": "Exploring the latest developments.",
        "content": "Artificial intelligence keeps evolving.",
        "category": world.technology.id,
        "image": "https://images.example.com/ai.jpg",
    }
    fields.update(overrides)
    return await world.service.create_article(ArticleCreate(**fields), author_id=world.writer.id)


@pytest.mark.asyncio
async def test_insert_and_get(world):
    article = await _publish(world, featured=True)

    stored = await world.store.get(article.id)
    assert stored.title == "The Future of AI"
    assert stored.category == world.technology.id
    assert stored.author == world.writer.id
    assert stored.featured is True
    assert stored.views == 0
    assert stored.likes == [] and stored.comments == []
    assert await world.store.get(uuid4()) is None


@pytest.mark.asyncio
async def test_category_lookup(world):
    assert await world.store.category_exists(world.sports.id)
    assert not await world.store.category_exists(uuid4())

    with pytest.raises(ArticleValidationError) as excinfo:
        await _publish(world, category=uuid4())
    assert list(excinfo.value.errors) == ["category"]
    assert await world.store.count() == 0


@pytest.mark.asyncio
async def test_title_match_ranks_above_content_match(world):
    in_content = await _publish(world, title="Markets rally", content="Stocks rose on quantum hopes.")
    in_title = await _publish(world, title="Quantum Computing Milestone Achieved")
    await _publish(world, title="Olympic preparations")

    result = await world.service.list_articles(search="quantum")
    assert [a.id for a in result.news] == [in_title.id, in_content.id]
    assert result.total_news == 2


@pytest.mark.asyncio
async def test_search_stems_and_ors_terms(world):
    computing = await _publish(world, title="Quantum Computing Milestone Achieved")
    olympics = await _publish(world, title="Olympic preparations", category=world.sports.id)

    result = await world.service.list_articles(search="computers")
    assert [a.id for a in result.news] == [computing.id]

    result = await world.service.list_articles(search="computers olympic")
    assert {a.id for a in result.news} == {computing.id, olympics.id}

    result = await world.service.list_articles(search="computers olympic", category=world.sports.id)
    assert [a.id for a in result.news] == [olympics.id]

    result = await world.service.list_articles(search="?!")
    assert result.total_news == 0


@pytest.mark.asyncio
async def test_edited_text_is_searchable(world):
    article = await _publish(world)
    await world.service.update_article(
        article.id, ArticleUpdate(title="Volcano erupts"), caller=world.writer
    )

    result = await world.service.list_articles(search="volcano")
    assert [a.id for a in result.news] == [article.id]


@pytest.mark.asyncio
async def test_pages_newest_first(world):
    for i in range(5):
        await _publish(world, title=f"Story {i}", featured=i % 2 == 0)

    first = await world.service.list_articles(page=1, limit=2)
    last = await world.service.list_articles(page=3, limit=2)
    assert [a.title for a in first.news] == ["Story 4", "Story 3"]
    assert [a.title for a in last.news] == ["Story 0"]
    assert (first.total_pages, first.total_news) == (3, 5)

    featured = await world.service.get_featured(limit=2)
    assert [a.title for a in featured] == ["Story 4", "Story 2"]


@pytest.mark.asyncio
async def test_huge_page_is_empty(world):
    await _publish(world)
    result = await world.service.list_articles(page=10 ** 20, limit=10)
    assert result.news == []
    assert result.total_news == 1


@pytest.mark.asyncio
async def test_views_are_monotonic(world):
    article = await _publish(world)
    seen = [(await world.service.get_article(article.id)).views for _ in range(3)]
    assert seen == [1, 2, 3]
    assert await world.service.increment_views(article.id) == 4
    assert await world.store.increment_views(uuid4()) is None


@pytest.mark.asyncio
async def test_save_leaves_views_alone(world):
    article = await _publish(world)
    stale = await world.store.get(article.id)
    await world.store.increment_views(article.id)
    await world.store.increment_views(article.id)

    saved = await world.store.save(stale.model_copy(update={"title": "Edited"}))
    assert saved.title == "Edited"
    assert saved.views == 2


@pytest.mark.asyncio
async def test_toggle_like_round_trip(world):
    article = await _publish(world)

    assert await world.service.toggle_like(article.id, world.reader.id) == [world.reader.id]
    assert await world.service.toggle_like(article.id, world.writer.id) == [world.reader.id, world.writer.id]
    assert await world.service.toggle_like(article.id, world.reader.id) == [world.writer.id]
    assert (await world.store.get(article.id)).likes == [world.writer.id]


@pytest.mark.asyncio
async def test_detail_is_populated(world):
    article = await _publish(world)
    await world.service.add_comment(article.id, world.reader.id, "Great read")
    await world.service.add_comment(article.id, uuid4(), "Drive-by")

    detail = await world.service.get_article(article.id)
    assert detail.category.name == "technology"
    assert detail.author.name == "Sarah Chen"
    assert [c.text for c in detail.comments] == ["Great read", "Drive-by"]
    assert detail.comments[0].user.name == "Reader"
    assert detail.comments[1].user is None


@pytest.mark.asyncio
async def test_delete(world):
    article = await _publish(world)
    kept = await _publish(world, title="Kept")

    assert await world.store.delete(article.id) is True
    assert await world.store.delete(article.id) is False
    with pytest.raises(NotFoundError):
        await world.service.delete_article(article.id, caller=world.writer)
    assert (await world.store.get(kept.id)).title == "Kept"
