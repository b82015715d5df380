"""
Настройки приложения из переменных окружения (.env загружается в точке входа)
"""
import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel


class Settings(BaseModel):
    """Пути хранилища и параметры сервера"""
    data_file: Path = Path("data.json")
    resources_dir: Path = Path("resources")
    articles_dir: Path = Path("articles")
    site_dir: Path = Path("public")
    log_dir: Path = Path("logs")
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_file=os.getenv("DATA_FILE", "data.json"),
            resources_dir=os.getenv("RESOURCES_DIR", "resources"),
            articles_dir=os.getenv("ARTICLES_DIR", "articles"),
            site_dir=os.getenv("SITE_DIR", "public"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
