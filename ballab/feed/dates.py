"""
Разбор и форматирование дат публикации в турецкой локали ("12 Ekim 2023")
"""
import datetime

from loguru import logger

from ballab.exceptions import DateParseError

MONTHS = (
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
)

_MONTH_NUMBERS = {name.lower(): number for number, name in enumerate(MONTHS, start=1)}

# Статьи с нераспознанной датой получают огромный возраст и оказываются внизу ленты
EPOCH_FALLBACK = datetime.date(1970, 1, 1)


def _turkish_lower(text: str) -> str:
    return text.replace("I", "ı").replace("İ", "i").lower()


def parse_localized_date(text: str) -> datetime.date:
    """Разбирает дату вида '12 Ekim 2023'"""
    if not text or not text.strip():
        raise DateParseError("Пустая строка даты")

    parts = _turkish_lower(text).split()
    if len(parts) != 3:
        raise DateParseError(f"Ожидалось 3 части даты: {text!r}")

    day_part, month_part, year_part = parts
    month = _MONTH_NUMBERS.get(month_part)
    if month is None:
        raise DateParseError(f"Неизвестный месяц: {month_part!r}")

    try:
        return datetime.date(int(year_part), month, int(day_part))
    except ValueError as e:
        raise DateParseError(f"Некорректная дата {text!r}: {e}") from e


def published_on(text: str) -> datetime.date:
    """Дата публикации для ранжирования; нераспознанная дата заменяется на EPOCH_FALLBACK"""
    try:
        return parse_localized_date(text)
    except DateParseError as e:
        logger.debug(f"⚠️ {e.message}, используется {EPOCH_FALLBACK.isoformat()}")
        return EPOCH_FALLBACK


def format_localized_date(value: datetime.date) -> str:
    return f"{value.day} {MONTHS[value.month - 1]} {value.year}"


def days_since(published: datetime.date, today: datetime.date) -> int:
    """Полных дней с публикации; будущие даты дают 0"""
    return max(0, (today - published).days)
