"""
Хранение загруженных файлов (изображений) в каталоге resources
"""

import re
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Callable, NamedTuple, Optional, Union

from loguru import logger

MAX_STEM_LENGTH = 20


class StoredResource(NamedTuple):
    filename: str
    url: str


def sanitize_filename(original: str, token: Union[int, str]) -> str:
    """Имя файла без спецсимволов и пробелов: 'Kapak Resmi.jpg' -> 'KapakResmi-<token>.jpg'"""
    path = Path(original or "")
    ext = path.suffix
    stem = re.sub(r"[^a-zA-Z0-9]", "", path.stem)[:MAX_STEM_LENGTH] or "file"
    return f"{stem}-{token}{ext}"


def _now_ms() -> int:
    return int(time.time() * 1000)


class ResourceStorage:
    """Сохраняет бинарные файлы; удаление ссылки в документе файл не удаляет"""

    def __init__(self, directory: Union[str, Path], url_prefix: str = "/resources",
                 clock: Optional[Callable[[], int]] = None):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self._clock = clock or _now_ms

    def init(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _free_name(self, original: str) -> str:
        token = self._clock()
        filename = sanitize_filename(original, token)
        while (self.directory / filename).exists():
            token += 1
            filename = sanitize_filename(original, token)
        return filename

    def save(self, original: str, stream: BinaryIO) -> StoredResource:
        self.init()
        filename = self._free_name(original)
        with open(self.directory / filename, "wb") as target:
            shutil.copyfileobj(stream, target)

        logger.info(f"📎 Файл загружен: {original} -> {filename}")
        return StoredResource(filename=filename, url=f"{self.url_prefix}/{filename}")
