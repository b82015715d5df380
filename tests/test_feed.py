"""
Тесты сборки ленты: фильтры, ранжирование, пагинация, подборка Keşfet
"""
import datetime
import random

import pytest

from ballab.feed.dates import format_localized_date
from ballab.feed.feed import (
    DISCOVERY_SIZE, FeedAssembler, filter_articles, next_visible_count, rank_articles, score
)
from ballab.models.models import Article

TODAY = datetime.date(2025, 3, 20)


def make_article(article_id, views=0, days=0, categories=None, date=None):
    return Article(
        id=article_id,
        title=f"Makale {article_id}",
        categories=categories or ["Futbol"],
        date=date if date is not None else format_localized_date(TODAY - datetime.timedelta(days=days)),
        views=views,
    )


@pytest.fixture
def assembler():
    return FeedAssembler(rng=random.Random(7), today=lambda: TODAY)


@pytest.mark.unit
def test_fresh_article_outranks_older_popular_one(assembler):
    """A: 100 просмотров 10 дней назад, B: 20 просмотров сегодня"""
    a = make_article(1, views=100, days=10)
    b = make_article(2, views=20, days=0)

    assert score(a, TODAY) == pytest.approx(100 / 11)
    assert score(b, TODAY) == 20

    page = assembler.assemble([a, b])
    assert [x.id for x in page.articles] == [2, 1]


@pytest.mark.unit
def test_newer_article_scores_at_least_as_high_with_equal_views():
    for views in (0, 1, 50):
        newer = make_article(1, views=views, days=2)
        older = make_article(2, views=views, days=30)
        assert score(newer, TODAY) >= score(older, TODAY)


@pytest.mark.unit
def test_future_date_counts_as_zero_days():
    article = make_article(1, views=10, days=-5)
    assert score(article, TODAY) == 10


@pytest.mark.unit
def test_unparseable_date_sorts_to_bottom(assembler):
    broken = make_article(1, views=1000, date="geçen yıl")
    normal = make_article(2, views=5, days=3)

    page = assembler.assemble([broken, normal])

    assert [x.id for x in page.articles] == [2, 1]


@pytest.mark.unit
def test_equal_scores_keep_input_order():
    articles = [make_article(i, views=0, days=i) for i in range(1, 5)]
    assert [a.id for a in rank_articles(articles, TODAY)] == [1, 2, 3, 4]


@pytest.mark.unit
def test_category_filter_is_exact_match():
    articles = [
        make_article(1, categories=["Futbol"]),
        make_article(2, categories=["Futbol Tarihi"]),
        make_article(3, categories=["Basketbol", "Futbol"]),
    ]

    assert [a.id for a in filter_articles(articles, category="Futbol")] == [1, 3]


@pytest.mark.unit
def test_year_filter_is_substring_of_date():
    articles = [
        make_article(1, date="5 Ekim 2023"),
        make_article(2, date="1 Ocak 2024"),
        make_article(3, date="tarih 2023 civarı"),
    ]

    assert [a.id for a in filter_articles(articles, year="2023")] == [1, 3]


@pytest.mark.unit
def test_category_filter_wins_over_year(assembler):
    articles = [
        make_article(1, categories=["Futbol"], date="5 Ekim 2023"),
        make_article(2, categories=["Basketbol"], date="5 Ekim 2023"),
    ]

    page = assembler.assemble(articles, category="Basketbol", year="2023")

    assert page.title == "Kategori: Basketbol"
    assert [a.id for a in page.articles] == [2]


@pytest.mark.unit
def test_page_titles(assembler):
    assert assembler.assemble([]).title == "Popüler İçerikler"
    assert assembler.assemble([], year="2024").title == "Arşiv: 2024"


@pytest.mark.unit
@pytest.mark.parametrize("total, visible", [(1, 5), (5, 5), (6, 5), (12, 8), (3, 0)])
def test_pagination_never_exceeds_cursor(assembler, total, visible):
    articles = [make_article(i, views=i) for i in range(total)]

    page = assembler.assemble(articles, visible_count=visible)

    assert len(page.articles) <= visible
    assert page.has_more == (total > visible)
    assert page.total == total


@pytest.mark.unit
def test_load_more_step():
    assert next_visible_count(5) == 8


@pytest.mark.unit
def test_empty_collection(assembler):
    page = assembler.assemble([])

    assert page.articles == []
    assert page.discovery == []
    assert page.has_more is False


@pytest.mark.unit
def test_discovery_ignores_filter_and_is_seedable():
    articles = [make_article(i, categories=["Futbol" if i % 2 else "Basketbol"]) for i in range(10)]

    first = FeedAssembler(rng=random.Random(3), today=lambda: TODAY).assemble(articles, category="Futbol")
    second = FeedAssembler(rng=random.Random(3), today=lambda: TODAY).assemble(articles, category="Futbol")

    assert len(first.discovery) == DISCOVERY_SIZE
    assert [a.id for a in first.discovery] == [a.id for a in second.discovery]
    assert {a.id for a in first.discovery} <= {a.id for a in articles}

    unmatched = FeedAssembler(rng=random.Random(3), today=lambda: TODAY).assemble(articles, category="Tenis")
    assert unmatched.articles == []
    assert len(unmatched.discovery) == DISCOVERY_SIZE


@pytest.mark.unit
def test_discovery_smaller_than_sample_size(assembler):
    articles = [make_article(i) for i in range(3)]

    page = assembler.assemble(articles)

    assert sorted(a.id for a in page.discovery) == [0, 1, 2]
