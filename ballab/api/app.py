"""
Основное FastAPI приложение блога BALLAB
"""
import random
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from ballab.api.models import ErrorResponse
from ballab.api.routes import data_router, public_router
from ballab.config import Settings, get_settings
from ballab.db.database import DocumentStore
from ballab.db.resources import ResourceStorage
from ballab.exceptions import BallabError
from ballab.feed.feed import FeedAssembler
from ballab.publisher.publisher import PagePublisher


def init_storage(settings: Settings) -> None:
    """Создает каталоги и пустой документ"""
    for directory in (settings.resources_dir, settings.articles_dir, settings.site_dir):
        directory.mkdir(parents=True, exist_ok=True)
    DocumentStore(settings.data_file).init()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Управление жизненным циклом приложения"""
        logger.info("🚀 Запуск FastAPI приложения...")
        try:
            logger.info("📂 Подготовка хранилища...")
            init_storage(settings)
            logger.info(f"✅ Хранилище готово: {settings.data_file}")
            yield
        except Exception as e:
            logger.error(f"❌ Ошибка инициализации: {e}")
            raise
        finally:
            logger.info("✅ FastAPI приложение остановлено")

    app = FastAPI(
        title="BALLAB Blog API",
        description="""
        REST API блога BALLAB

        ## Возможности

        * **Данные** - чтение и сохранение документа, генерация страниц статей
        * **Просмотры** - счетчик просмотров статьи
        * **Файлы** - загрузка изображений в resources
        * **Лента** - популярные статьи, поиск, категории и объявление
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    store = DocumentStore(settings.data_file)
    app.state.settings = settings
    app.state.store = store
    app.state.publisher = PagePublisher(store, settings.articles_dir)
    app.state.resources = ResourceStorage(settings.resources_dir, url_prefix="/resources")
    app.state.feed = FeedAssembler(rng=random.Random())

    # Настройка CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API до статики
    app.include_router(data_router)
    app.include_router(public_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Проверка здоровья сервиса"""
        return {"status": "healthy", "data_file": str(settings.data_file)}

    # Доменные ошибки: статус и тело из исключения
    @app.exception_handler(BallabError)
    async def ballab_exception_handler(_request, exc: BallabError):
        logger.warning(f"⚠️ {type(exc).__name__} ({exc.code}): {exc.message}")

        content = exc.to_dict()
        if settings.debug and exc.__cause__ is not None:
            content['detail'] = str(exc.__cause__)
        return JSONResponse(status_code=exc.code, content=content)

    # Глобальная обработка ошибок
    @app.exception_handler(Exception)
    async def global_exception_handler(_request, exc):
        """Глобальная обработка неожиданных ошибок"""
        logger.error(f"Неожиданная ошибка: {exc}")

        # Показываем детали ошибки только в режиме отладки
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Внутренняя ошибка сервера",
                detail=str(exc) if settings.debug else None
            ).model_dump()
        )

    # Middleware для логирования запросов
    @app.middleware("http")
    async def log_requests(request, call_next):
        """Логирование HTTP запросов"""
        start_time = time.time()
        logger.info(f"🌐 {request.method} {request.url}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"✅ {request.method} {request.url} - {response.status_code} ({process_time:.3f}s)"
        )

        return response

    # Сначала специальные каталоги, затем корень сайта
    app.mount("/resources", StaticFiles(directory=settings.resources_dir, check_dir=False), name="resources")
    app.mount("/articles", StaticFiles(directory=settings.articles_dir, check_dir=False), name="articles")
    app.mount("/", StaticFiles(directory=settings.site_dir, html=True, check_dir=False), name="site")

    return app
