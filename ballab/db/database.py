"""
Хранилище документа блога: один JSON файл на диске.
Документ читается и заменяется целиком. Блокировок нет: два одновременных
цикла чтение-изменение-запись могут потерять обновление (побеждает последняя запись).
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Union

from loguru import logger
from pydantic import ValidationError

from ballab.exceptions import ArticleNotFoundError, DocumentReadError, DocumentSaveError
from ballab.models.models import Document


class DocumentStore:
    """Чтение и запись data.json"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def init(self) -> None:
        """Создает каталог и пустой документ, если файла еще нет"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.save(Document.empty())
            logger.info(f"📄 Создан пустой документ: {self.path}")

    def read(self) -> Document:
        """Строгое чтение документа"""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(f"Не удалось прочитать {self.path}: {e}") from e

        try:
            return Document.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            raise DocumentReadError(f"Некорректный документ {self.path}: {e}") from e

    def load(self) -> Document:
        """Чтение документа; при любой ошибке возвращает пустой документ"""
        try:
            return self.read()
        except DocumentReadError as e:
            logger.error(f"❌ Ошибка чтения данных: {e.message}")
            return Document.empty()

    def save(self, document: Document) -> None:
        """Полная замена документа на диске"""
        payload = json.dumps(document.to_json_dict(), ensure_ascii=False, indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent, suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"❌ Ошибка сохранения данных: {e}")
            raise DocumentSaveError(f"Не удалось сохранить {self.path}: {e}") from e

        logger.debug(f"💾 Документ сохранен: {len(document.articles)} статей")

    def increment_views(self, article_id: int) -> int:
        """Увеличивает счетчик просмотров статьи на единицу и сохраняет документ"""
        document = self.read()
        article = document.find_article(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)

        article.views += 1
        self.save(document)
        logger.debug(f"👁️ Статья {article_id}: {article.views} просмотров")
        return article.views
