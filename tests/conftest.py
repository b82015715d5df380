"""
Конфигурация тестов и общие фикстуры
"""
import datetime
import random
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from ballab.api.app import create_app, init_storage
from ballab.config import Settings
from ballab.db.database import DocumentStore
from ballab.feed.dates import format_localized_date
from ballab.models.models import Announcement, Article, Category, Document, UploadedFile

TODAY = datetime.date(2025, 3, 20)


def days_ago(days: int, today: datetime.date = TODAY) -> str:
    return format_localized_date(today - datetime.timedelta(days=days))


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Настройки с путями во временном каталоге"""
    return Settings(
        data_file=tmp_path / "data.json",
        resources_dir=tmp_path / "resources",
        articles_dir=tmp_path / "articles",
        site_dir=tmp_path / "public",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def store(test_settings) -> DocumentStore:
    document_store = DocumentStore(test_settings.data_file)
    document_store.init()
    return document_store


@pytest.fixture
def sample_articles():
    """Тестовые статьи с датами относительно TODAY"""
    return [
        Article(
            id=1700000000001,
            title="Futbolda Taktik Devrimi",
            author="Ayşe Yılmaz",
            categories=["Futbol", "Analiz"],
            image_url="/resources/taktik-1700000000000.jpg",
            content="<p>Modern futbolda <b>pres</b> her şeydir.</p>",
            excerpt="Modern futbolda pres her şeydir....",
            date=days_ago(10),
            views=100,
        ),
        Article(
            id=1700000000002,
            title="Basketbol Sezon Özeti",
            author="Mehmet Demir",
            categories=["Basketbol"],
            content="<p>Sezonun en iyi maçları.</p>",
            excerpt="Sezonun en iyi maçları....",
            date=days_ago(0),
            views=20,
        ),
        Article(
            id=1700000000003,
            title="Eski Bir Röportaj",
            author="Ayşe Yılmaz",
            categories=["Röportaj"],
            content="<p>Arşivden.</p>",
            excerpt="Arşivden....",
            date="tarih yok",
            views=500,
        ),
    ]


@pytest.fixture
def sample_document(sample_articles) -> Document:
    return Document(
        articles=sample_articles,
        categories=[
            Category(id=1, name="Futbol", type="main"),
            Category(id=2, name="Basketbol", type="main"),
            Category(id=3, name="Analiz", type="sub"),
            Category(id=4, name="2025", type="year"),
        ],
        announcement=Announcement(text="Yeni sezon başladı!", active=True),
        files=[UploadedFile(id=10, name="Kapak", url="/resources/kapak-1700000000000.jpg")],
    )


@pytest.fixture
def seeded_store(store, sample_document) -> DocumentStore:
    store.save(sample_document)
    return store


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def api_app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(api_app):
    """Синхронный клиент; lifespan создает каталоги и пустой документ"""
    with TestClient(api_app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def async_client(api_app, test_settings) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Асинхронный клиент без lifespan, поэтому хранилище готовим вручную"""
    init_storage(test_settings)
    transport = httpx.ASGITransport(app=api_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
