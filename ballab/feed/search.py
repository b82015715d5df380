"""
Поиск статей по подстроке в заголовке, анонсе, авторе и категориях
"""
from typing import List, Optional, Sequence

from pydantic import BaseModel

from ballab.models.models import Article

# Порог проверяет вызывающая сторона (форма поиска / API), а не сам поиск
MIN_QUERY_LENGTH = 3


class SearchResult(BaseModel):
    query: Optional[str] = None
    articles: List[Article] = []

    @property
    def has_query(self) -> bool:
        return bool(self.query)

    @property
    def count(self) -> int:
        return len(self.articles)


def check_query_length(query: Optional[str]) -> bool:
    return bool(query) and len(query) >= MIN_QUERY_LENGTH


def _matches(article: Article, needle: str) -> bool:
    fields = [article.title, article.excerpt, article.author]
    if any(needle in (value or "").lower() for value in fields):
        return True
    return any(needle in category.lower() for category in article.categories)


def search_articles(query: Optional[str], articles: Sequence[Article]) -> SearchResult:
    """Регистронезависимый поиск; порядок статей сохраняется"""
    if not query:
        return SearchResult(query=None, articles=[])

    needle = query.lower()
    return SearchResult(query=query, articles=[a for a in articles if _matches(a, needle)])
