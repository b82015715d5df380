"""
Публикация: сохранение документа и генерация статической HTML страницы для каждой статьи
"""
import datetime
from pathlib import Path
from typing import Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger

from ballab.db.database import DocumentStore
from ballab.exceptions import PageGenerationError
from ballab.models.models import Article, Document

TEMPLATES_DIR = Path(__file__).parent / "templates"
SITE_NAME = "BALLAB"


class PagePublisher:
    """Сохраняет документ и пересоздает articles/<id>.html"""

    def __init__(self, store: DocumentStore, articles_dir: Union[str, Path]):
        self.store = store
        self.articles_dir = Path(articles_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
        )
        self.template = self.env.get_template("article.html")

    def page_path(self, article: Article) -> Path:
        return self.articles_dir / f"{article.id}.html"

    def render_article(self, article: Article) -> str:
        return self.template.render(
            article=article,
            site_name=SITE_NAME,
            year=datetime.date.today().year,
        )

    def generate_pages(self, document: Document) -> int:
        """Генерирует страницы; первая ошибка прерывает оставшиеся"""
        # Страницы удаленных статей не удаляются
        try:
            self.articles_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PageGenerationError(f"Каталог {self.articles_dir} недоступен: {e}") from e

        generated = 0
        for article in document.articles:
            try:
                self.page_path(article).write_text(self.render_article(article), encoding="utf-8")
            except Exception as e:
                logger.error(f"❌ Ошибка генерации HTML для статьи {article.id}: {e}")
                raise PageGenerationError(
                    f"Ошибка генерации страницы статьи {article.id}: {e}",
                    payload={'id': article.id, 'generated': generated},
                ) from e
            generated += 1

        return generated

    def publish(self, document: Document) -> int:
        """Сначала документ (DocumentSaveError), затем страницы (PageGenerationError)"""
        self.store.save(document)
        generated = self.generate_pages(document)
        logger.info(f"🎉 Документ сохранен, создано {generated} страниц")
        return generated
