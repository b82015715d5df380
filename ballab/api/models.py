"""
Pydantic модели для FastAPI endpoints
"""
from typing import Dict, List, Optional

from pydantic import BaseModel

from ballab.models.models import Article, Category


class SaveResponse(BaseModel):
    """Ответ на сохранение документа"""
    success: bool = True
    message: str
    pages: int


class ViewResponse(BaseModel):
    success: bool = True
    views: int


class UploadResponse(BaseModel):
    success: bool = True
    url: str
    filename: str


class SearchResponse(BaseModel):
    """Результат поиска; has_query=False означает, что запроса не было"""
    query: Optional[str] = None
    has_query: bool
    count: int
    articles: List[Article]


class AnnouncementResponse(BaseModel):
    visible: bool
    text: Optional[str] = None


class CategoriesResponse(BaseModel):
    """Категории, сгруппированные для бокового меню"""
    main: List[Category]
    sub: List[Category]
    year: List[Category]

    @classmethod
    def group(cls, categories: List[Category]) -> "CategoriesResponse":
        groups: Dict[str, List[Category]] = {"main": [], "sub": [], "year": []}
        for category in categories:
            groups[category.type].append(category)
        return cls(**groups)


class ErrorResponse(BaseModel):
    """Модель ошибки"""
    error: str
    detail: Optional[str] = None
