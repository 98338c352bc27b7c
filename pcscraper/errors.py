"""
Error taxonomy for the scraping pipeline.
"""
import json
from enum import Enum
from typing import Any, Optional

import openai
from playwright.async_api import Error as PlaywrightError


class ErrorKind(str, Enum):
    CONFIG = "config"
    INPUT = "input"
    NAVIGATION = "navigation"
    EXTRACTION = "extraction"
    UNEXPECTED = "unexpected"


class ScrapeError(Exception):
    """Base error carrying a kind and a plain message."""

    kind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class ConfigError(ScrapeError):
    """Missing or invalid configuration; fatal before any browser work."""
    kind = ErrorKind.CONFIG


class NavigationError(ScrapeError):
    kind = ErrorKind.NAVIGATION


class ExtractionError(ScrapeError):
    kind = ErrorKind.EXTRACTION


def error_message(error: Any) -> str:
    """Collapse strings, exceptions and message-bearing objects into one message."""
    if isinstance(error, str):
        return error or "Unknown error"
    if isinstance(error, ScrapeError):
        return error.message or "Unknown error"
    if isinstance(error, BaseException):
        text = str(error)
        if text:
            return text
    message = getattr(error, "message", None)
    if message:
        return str(message)
    return "Unknown error"


def classify(error: BaseException) -> ErrorKind:
    """Map any exception caught at a pipeline boundary to an ErrorKind."""
    if isinstance(error, ScrapeError):
        return error.kind
    if isinstance(error, PlaywrightError):
        return ErrorKind.NAVIGATION
    if isinstance(error, (openai.OpenAIError, json.JSONDecodeError)):
        return ErrorKind.EXTRACTION
    if isinstance(error, OSError):
        return ErrorKind.INPUT
    return ErrorKind.UNEXPECTED
