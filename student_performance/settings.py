from dataclasses import dataclass
import logging
import os
from dotenv import load_dotenv


load_dotenv()


def log_level_or_default(value: str, default: str = "INFO") -> str:
    """Upper-cased level name, or the default when logging doesn't know it."""
    name = value.strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return default


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    page_title: str = os.getenv("PERFORMANCE_PAGE_TITLE", "Student Performance Prediction")
    layout: str = os.getenv("PERFORMANCE_LAYOUT", "centered")
    log_level: str = log_level_or_default(os.getenv("PERFORMANCE_LOG_LEVEL", "INFO"))
    show_faq: bool = _flag(os.getenv("PERFORMANCE_SHOW_FAQ", "1"))


settings = Settings()
