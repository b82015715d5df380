"""
Исключения предметной области блога BALLAB
"""
from typing import Optional


class BallabError(Exception):
    """Базовое исключение приложения"""

    def __init__(self, message: str, code: int = 500, payload: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self) -> dict:
        rv = dict(self.payload or ())
        rv['error'] = self.message
        rv['code'] = self.code
        rv['success'] = False
        return rv


class DateParseError(BallabError):
    """Строка даты не соответствует формату '12 Ekim 2023'"""

    def __init__(self, message: str = "Не удалось распознать дату", payload: Optional[dict] = None):
        super().__init__(message, code=400, payload=payload)


class EditorValidationError(BallabError):
    """Ошибка валидации формы редактора"""

    def __init__(self, message: str = "Некорректные данные", payload: Optional[dict] = None):
        super().__init__(message, code=400, payload=payload)


class ArticleNotFoundError(BallabError):
    """Статья с указанным ID отсутствует в документе"""

    def __init__(self, article_id: int, message: Optional[str] = None):
        super().__init__(message or f"Статья {article_id} не найдена", code=404, payload={'id': article_id})
        self.article_id = article_id


class DocumentReadError(BallabError):
    """Документ не удалось прочитать или разобрать"""

    def __init__(self, message: str = "Не удалось прочитать документ", payload: Optional[dict] = None):
        super().__init__(message, code=500, payload=payload)


class DocumentSaveError(BallabError):
    """Документ не удалось записать на диск"""

    def __init__(self, message: str = "Не удалось сохранить документ", payload: Optional[dict] = None):
        super().__init__(message, code=500, payload=payload)


class PageGenerationError(BallabError):
    """Ошибка генерации статической HTML страницы статьи"""

    def __init__(self, message: str = "Ошибка генерации HTML страниц", payload: Optional[dict] = None):
        super().__init__(message, code=500, payload=payload)
