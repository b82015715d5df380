"""
API маршруты: документ, счетчик просмотров, загрузка файлов, лента и поиск
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from loguru import logger

from ballab.api.models import (
    AnnouncementResponse, CategoriesResponse, SaveResponse,
    SearchResponse, UploadResponse, ViewResponse
)
from ballab.db.database import DocumentStore
from ballab.db.resources import ResourceStorage
from ballab.exceptions import (
    ArticleNotFoundError, DocumentReadError, DocumentSaveError, PageGenerationError
)
from ballab.feed.feed import DEFAULT_VISIBLE_COUNT, FeedAssembler, FeedPage
from ballab.feed.search import MIN_QUERY_LENGTH, check_query_length, search_articles
from ballab.models.models import Document
from ballab.publisher.publisher import PagePublisher

# Роутеры для группировки endpoints
data_router = APIRouter(prefix="/api", tags=["Data"])
public_router = APIRouter(prefix="/api", tags=["Public"])


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_publisher(request: Request) -> PagePublisher:
    return request.app.state.publisher


def get_resources(request: Request) -> ResourceStorage:
    return request.app.state.resources


def get_feed_assembler(request: Request) -> FeedAssembler:
    return request.app.state.feed


# DATA ENDPOINTS
# Доменные исключения с публичным текстом превращает в JSON обработчик BallabError в app.py

@data_router.get("/data")
async def get_data(store: DocumentStore = Depends(get_store)):
    """Весь документ; при ошибке чтения - пустой документ"""
    return store.load().to_json_dict()


@data_router.post("/data", response_model=SaveResponse)
async def save_data(
    document: Document,
    publisher: PagePublisher = Depends(get_publisher)
):
    """Заменяет документ и пересоздает HTML страницы статей"""
    try:
        pages = publisher.publish(document)
    except DocumentSaveError as e:
        raise DocumentSaveError("Veri kaydedilemedi", payload=e.payload) from e
    except PageGenerationError as e:
        raise PageGenerationError("HTML sayfaları oluşturulurken hata.", payload=e.payload) from e

    return SaveResponse(
        message="Veriler kaydedildi ve sayfalar oluşturuldu.",
        pages=pages
    )


@data_router.post("/view/{article_id}", response_model=ViewResponse)
async def increment_view(
    article_id: int,
    store: DocumentStore = Depends(get_store)
):
    """Увеличить счетчик просмотров статьи"""
    try:
        views = store.increment_views(article_id)
    except ArticleNotFoundError as e:
        raise ArticleNotFoundError(article_id, message="Not found") from e
    except DocumentReadError as e:
        raise DocumentReadError("Read error", payload=e.payload) from e
    except DocumentSaveError as e:
        raise DocumentSaveError("Write error", payload=e.payload) from e

    return ViewResponse(views=views)


@data_router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    resources: ResourceStorage = Depends(get_resources)
):
    """Загрузка одного файла в resources"""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="Dosya yüklenemedi")

    try:
        stored = resources.save(file.filename, file.file)
    finally:
        await file.close()

    return UploadResponse(url=stored.url, filename=stored.filename)


# PUBLIC ENDPOINTS

@public_router.get("/feed", response_model=FeedPage)
async def get_feed(
    category: Optional[str] = Query(None, description="Фильтр по имени категории"),
    year: Optional[str] = Query(None, description="Фильтр по году в дате"),
    visible: int = Query(DEFAULT_VISIBLE_COUNT, ge=0, description="Сколько статей показать"),
    store: DocumentStore = Depends(get_store),
    assembler: FeedAssembler = Depends(get_feed_assembler)
):
    """Лента главной страницы"""
    document = store.load()
    return assembler.assemble(document.articles, category=category, year=year, visible_count=visible)


@public_router.get("/search", response_model=SearchResponse)
async def search(
    q: Optional[str] = Query(None, description="Поисковый запрос"),
    store: DocumentStore = Depends(get_store)
):
    """Поиск по заголовку, анонсу, автору и категориям"""
    if q and not check_query_length(q):
        raise HTTPException(
            status_code=400,
            detail=f"Arama yapmak için en az {MIN_QUERY_LENGTH} karakter girmelisiniz."
        )

    result = search_articles(q, store.load().articles)
    logger.debug(f"🔍 Поиск {q!r}: {result.count} результатов")
    return SearchResponse(
        query=result.query,
        has_query=result.has_query,
        count=result.count,
        articles=result.articles
    )


@public_router.get("/categories", response_model=CategoriesResponse)
async def get_categories(store: DocumentStore = Depends(get_store)):
    return CategoriesResponse.group(store.load().categories)


@public_router.get("/announcement", response_model=AnnouncementResponse)
async def get_announcement(store: DocumentStore = Depends(get_store)):
    announcement = store.load().announcement
    if not announcement.is_visible:
        return AnnouncementResponse(visible=False)
    return AnnouncementResponse(visible=True, text=announcement.text)
