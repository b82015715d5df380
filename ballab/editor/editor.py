"""
Редактор администратора: CRUD над копией документа в памяти.

Все изменения живут в EditorSession до явного сохранения через save().
Сессия принадлежит одному пользователю и ничего не знает о других
сессиях: две сессии, сохранившие документ по очереди, перезапишут друг друга.
"""
import datetime
import time
from typing import Callable, List, Optional

from bs4 import BeautifulSoup
from loguru import logger
from pydantic import BaseModel, Field

from ballab.exceptions import ArticleNotFoundError, EditorValidationError
from ballab.feed.dates import format_localized_date
from ballab.models.models import Announcement, Article, Category, CategoryType, Document, UploadedFile

EXCERPT_LENGTH = 100


class ArticleForm(BaseModel):
    """Данные формы статьи"""
    title: str = ""
    author: str = ""
    content: str = ""
    image_url: str = ""
    categories: List[str] = Field(default_factory=list)
    date_input: Optional[str] = None  # YYYY-MM-DD из <input type="date">


def make_excerpt(content: str) -> str:
    """Текст без разметки, первые 100 символов и многоточие"""
    text = BeautifulSoup(content or "", "html.parser").get_text()
    return text[:EXCERPT_LENGTH] + "..."


def _now_ms() -> int:
    return int(time.time() * 1000)


def validate_form(form: ArticleForm) -> None:
    for field in ("title", "author", "content"):
        if not getattr(form, field).strip():
            raise EditorValidationError(f"Поле '{field}' обязательно", payload={'field': field})
    if not form.categories:
        raise EditorValidationError("Lütfen en az bir kategori seçiniz.", payload={'field': 'categories'})


class EditorSession:
    """Контекст редактирования одного администратора"""

    def __init__(self, document: Document, clock: Optional[Callable[[], int]] = None,
                 today: Optional[Callable[[], datetime.date]] = None):
        self.document = document.model_copy(deep=True)
        self.editing_id: Optional[int] = None
        self._clock = clock or _now_ms
        self._today = today or datetime.date.today

    # ARTICLES

    def _new_id(self, existing: List[int]) -> int:
        new_id = self._clock()
        if existing and new_id <= max(existing):
            new_id = max(existing) + 1
        return new_id

    def _resolve_date(self, form: ArticleForm, previous: Optional[Article]) -> str:
        if form.date_input:
            try:
                value = datetime.date.fromisoformat(form.date_input)
            except ValueError as e:
                raise EditorValidationError(f"Некорректная дата: {form.date_input}",
                                            payload={'field': 'date_input'}) from e
            return format_localized_date(value)
        if previous is not None and previous.date:
            return previous.date
        return format_localized_date(self._today())

    def _index_of(self, article_id: int) -> int:
        for index, article in enumerate(self.document.articles):
            if article.id == article_id:
                return index
        raise ArticleNotFoundError(article_id)

    def create_article(self, form: ArticleForm) -> List[Article]:
        validate_form(form)
        date = self._resolve_date(form, None)

        article = Article(
            id=self._new_id([a.id for a in self.document.articles]),
            title=form.title,
            author=form.author,
            categories=list(form.categories),
            image_url=form.image_url,
            content=form.content,
            excerpt=make_excerpt(form.content),
            date=date,
            views=0,
        )
        # Новые статьи в начало списка
        self.document.articles.insert(0, article)
        logger.info(f"📝 Статья добавлена: {article.id} {article.title[:50]}")
        return self.document.articles

    def update_article(self, article_id: int, form: ArticleForm) -> List[Article]:
        index = self._index_of(article_id)
        validate_form(form)
        previous = self.document.articles[index]
        date = self._resolve_date(form, previous)

        self.document.articles[index] = previous.model_copy(update={
            'title': form.title,
            'author': form.author,
            'categories': list(form.categories),
            'image_url': form.image_url,
            'content': form.content,
            'excerpt': make_excerpt(form.content),
            'date': date,
        })
        logger.info(f"✏️ Статья обновлена: {article_id}")
        return self.document.articles

    def begin_edit(self, article_id: int) -> Article:
        article = self.document.articles[self._index_of(article_id)]
        self.editing_id = article_id
        return article

    def cancel_edit(self) -> None:
        self.editing_id = None

    def submit_article(self, form: ArticleForm) -> List[Article]:
        """Кнопка формы: обновление в режиме редактирования, иначе создание"""
        if self.editing_id is None:
            return self.create_article(form)

        articles = self.update_article(self.editing_id, form)
        self.editing_id = None
        return articles

    def delete_article(self, article_id: int) -> List[Article]:
        self.document.articles = [a for a in self.document.articles if a.id != article_id]
        if self.editing_id == article_id:
            self.editing_id = None
        logger.info(f"🗑️ Статья удалена: {article_id}")
        return self.document.articles

    # CATEGORIES

    def add_category(self, name: str, category_type: CategoryType = "main") -> List[Category]:
        if not name or not name.strip():
            raise EditorValidationError("Имя категории обязательно", payload={'field': 'name'})

        category = Category(
            id=self._new_id([c.id for c in self.document.categories]),
            name=name,
            type=category_type,
        )
        self.document.categories.append(category)
        return self.document.categories

    def delete_category(self, category_id: int) -> List[Category]:
        # Статьи, ссылающиеся на категорию по имени, не изменяются
        self.document.categories = [c for c in self.document.categories if c.id != category_id]
        return self.document.categories

    # ANNOUNCEMENT

    def update_announcement(self, text: str) -> Announcement:
        self.document.announcement.text = text
        return self.document.announcement

    def toggle_announcement(self) -> bool:
        announcement = self.document.announcement
        announcement.active = not announcement.active
        return announcement.active

    # FILES

    def register_file(self, name: str, url: str) -> List[UploadedFile]:
        uploaded = UploadedFile(
            id=self._new_id([f.id for f in self.document.files]),
            name=name,
            url=url,
        )
        self.document.files.append(uploaded)
        return self.document.files

    def remove_file(self, file_id: int) -> List[UploadedFile]:
        # Сам файл в resources остается на диске
        self.document.files = [f for f in self.document.files if f.id != file_id]
        return self.document.files

    # SAVE

    def export_document(self) -> Document:
        return self.document.model_copy(deep=True)

    def save(self, publisher) -> int:
        """Сохраняет документ и пересоздает страницы; при ошибке правки остаются в сессии"""
        return publisher.publish(self.export_document())
