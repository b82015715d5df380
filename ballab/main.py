"""
Главный модуль блога BALLAB: логирование и запуск FastAPI сервера
"""
import uvicorn
from dotenv import load_dotenv
from loguru import logger

from ballab.config import get_settings


def setup_logging(settings) -> None:
    # Создаем директорию для логов если её нет
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        str(settings.log_dir / "ballab.log"),
        rotation="100 MB",
        retention="30 days",
        level="INFO",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"
    )


def main():
    """Главная функция запуска приложения"""
    # Загрузка переменных окружения
    load_dotenv()
    settings = get_settings()
    setup_logging(settings)

    from ballab.api.app import create_app

    logger.info(f"🌐 Запуск сервера BALLAB на порту {settings.port}...")
    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level="info",
            access_log=True
        )
    except KeyboardInterrupt:
        logger.info("⏹️ Получен сигнал остановки...")
    finally:
        logger.info("✅ Приложение завершено")


if __name__ == "__main__":
    main()
