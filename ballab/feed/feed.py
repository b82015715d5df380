"""
Сборка главной ленты: фильтр по категории или году, ранжирование по
"свежести" просмотров, пагинация и случайная подборка "Keşfet"
"""
import datetime
import random
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel

from ballab.feed.dates import days_since, published_on
from ballab.models.models import Article

DEFAULT_VISIBLE_COUNT = 5
LOAD_MORE_STEP = 3
DISCOVERY_SIZE = 5


class FeedPage(BaseModel):
    """Результат сборки ленты"""
    title: str
    articles: List[Article]
    has_more: bool
    total: int
    visible_count: int
    discovery: List[Article]


def score(article: Article, today: datetime.date) -> float:
    """Score = Views / (DaysSincePublished + 1)"""
    days = days_since(published_on(article.date), today)
    return article.views / (days + 1)


def filter_articles(articles: Sequence[Article], category: Optional[str] = None,
                    year: Optional[str] = None) -> List[Article]:
    """Фильтр по точному имени категории, иначе по подстроке года в дате"""
    if category:
        return [a for a in articles if category in a.categories]
    if year:
        return [a for a in articles if year in a.date]
    return list(articles)


def rank_articles(articles: Sequence[Article], today: datetime.date) -> List[Article]:
    # sorted() стабилен: при равном score сохраняется исходный порядок
    scores = {id(a): score(a, today) for a in articles}
    return sorted(articles, key=lambda a: scores[id(a)], reverse=True)


def next_visible_count(visible_count: int) -> int:
    """Кнопка 'Daha Fazla Göster'"""
    return visible_count + LOAD_MORE_STEP


class FeedAssembler:
    """Сборщик ленты; источник случайности и часы внедряются для тестов"""

    def __init__(self, rng: Optional[random.Random] = None,
                 today: Optional[Callable[[], datetime.date]] = None):
        self.rng = rng or random.Random()
        self.today = today or datetime.date.today

    def discovery_sample(self, articles: Sequence[Article], size: int = DISCOVERY_SIZE) -> List[Article]:
        return self.rng.sample(list(articles), min(size, len(articles)))

    def assemble(self, articles: Sequence[Article], category: Optional[str] = None,
                 year: Optional[str] = None, visible_count: int = DEFAULT_VISIBLE_COUNT) -> FeedPage:
        if category:
            title = f"Kategori: {category}"
        elif year:
            title = f"Arşiv: {year}"
        else:
            title = "Popüler İçerikler"

        filtered = filter_articles(articles, category=category, year=year)
        ranked = rank_articles(filtered, self.today())
        visible_count = max(0, visible_count)

        return FeedPage(
            title=title,
            articles=ranked[:visible_count],
            has_more=visible_count < len(ranked),
            total=len(ranked),
            visible_count=visible_count,
            discovery=self.discovery_sample(articles),
        )
