#!/usr/bin/env python3
"""
Быстрый запуск FastAPI сервера для разработки
"""
import uvicorn
from dotenv import load_dotenv

if __name__ == "__main__":
    load_dotenv()
    uvicorn.run(
        "ballab.api.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,  # Автоперезагрузка при изменении файлов
        log_level="info"
    )
