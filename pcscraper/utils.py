"""
Utility functions for text processing, price parsing, and logging.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Optional


def init_logger(
    name: str = "pcscraper",
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_file: Optional[str] = "pcscraper.log"
) -> logging.Logger:
    """Initialize logger with console and optional file handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    console_level_num = getattr(logging, console_level.upper(), logging.INFO)
    ch = logging.StreamHandler()
    ch.setLevel(console_level_num)

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:  # Create file handler only if log_file is provided
        file_level_num = getattr(logging, file_level.upper(), logging.DEBUG)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level_num)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def get_logger(logger: Optional[logging.Logger] = None) -> logging.Logger:
    return logger or logging.getLogger("pcscraper")


def now_stamp() -> str:
    """UTC timestamp usable as a directory name, e.g. 2024-05-01T12-30-05."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")


def strip_price(price_text: str) -> str:
    """Keep only digits and decimal points: "$1,299.99 CAD" -> "1299.99"."""
    if not price_text:
        return ""
    return re.sub(r"[^0-9.]", "", price_text)


def to_float(text: str) -> Optional[float]:
    """Safely convert text to float."""
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_price(price_text: str) -> Optional[float]:
    """
    Numeric value of a free-form price string, or None when it has none.

    Only the leading number of the stripped text counts, so
    "$250. OBO. Was $300." reads as 250.
    """
    m = re.match(r"\d+\.?\d*|\.\d+", strip_price(price_text))
    return to_float(m.group(0)) if m else None


def env_flag(value: Optional[str], default: bool) -> bool:
    """Interpret "1"/"true"/"yes"/"on" style environment values."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
