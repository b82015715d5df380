"""
Модели документа блога.
Весь сайт хранится в одном JSON документе: статьи, категории, объявление и загруженные файлы.
Имена полей в JSON совпадают с форматом data.json (camelCase), поэтому используются алиасы.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

CategoryType = Literal["main", "sub", "year"]


class Article(BaseModel):
    """Статья блога"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    title: str = ""
    author: str = ""
    categories: List[str] = Field(default_factory=list)  # Имена категорий, не ID
    image_url: str = Field("", alias="imageUrl")
    content: str = ""  # Доверенный HTML
    excerpt: str = ""
    date: str = ""  # Локализованная строка, например "12 Ekim 2023"
    views: int = Field(0, ge=0)


class Category(BaseModel):
    """Категория: основная, подкатегория или год архива"""
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    type: CategoryType = "main"


class Announcement(BaseModel):
    """Объявление в шапке сайта (всегда ровно одно)"""
    model_config = ConfigDict(extra="allow")

    text: str = ""
    active: bool = False

    @property
    def is_visible(self) -> bool:
        return self.active and bool(self.text)


class UploadedFile(BaseModel):
    """Ссылка на загруженный файл; сам файл лежит в каталоге resources"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str
    url: str = Field(alias="data")


class Document(BaseModel):
    """Корневой документ data.json"""
    model_config = ConfigDict(extra="allow")

    articles: List[Article] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)
    announcement: Announcement = Field(default_factory=Announcement)
    files: List[UploadedFile] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "Document":
        return cls()

    def to_json_dict(self) -> dict:
        """Словарь в формате data.json"""
        return self.model_dump(by_alias=True, mode="json")

    def find_article(self, article_id: int):
        for article in self.articles:
            if article.id == article_id:
                return article
        return None
