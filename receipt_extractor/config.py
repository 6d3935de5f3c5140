"""
Runtime configuration for the extraction engine.

Settings come from environment variables (optionally via a .env file):

- RECEIPT_LOG_LEVEL: logger level name (default INFO)
- RECEIPT_LEXICON_OVERRIDES_PATH: JSON file for merchant-name corrections
- RECEIPT_CATEGORY_OVERRIDES_PATH: JSON file for category corrections

Unset override paths keep corrections in memory only.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from .storage import InMemoryOverrideStore, JsonFileOverrideStore, OverrideStore
from .utils.logging_config import logger


class Settings(BaseModel):
    """Validated engine settings."""
    log_level: str = "INFO"
    lexicon_overrides_path: Optional[Path] = None
    category_overrides_path: Optional[Path] = None

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Unknown level names fall back to INFO instead of failing startup."""
        name = (v or "").strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            logger.warning(f"Unknown RECEIPT_LOG_LEVEL '{v}', using INFO")
            return "INFO"
        return name

    def lexicon_store(self) -> OverrideStore:
        if self.lexicon_overrides_path:
            return JsonFileOverrideStore(self.lexicon_overrides_path)
        return InMemoryOverrideStore()

    def category_store(self) -> OverrideStore:
        if self.category_overrides_path:
            return JsonFileOverrideStore(self.category_overrides_path)
        return InMemoryOverrideStore()


def load_settings(dotenv: bool = True) -> Settings:
    """Builds Settings from the environment, loading a .env file first when asked."""
    if dotenv:
        load_dotenv()

    return Settings(
        log_level=os.getenv("RECEIPT_LOG_LEVEL", "INFO"),
        lexicon_overrides_path=os.getenv("RECEIPT_LEXICON_OVERRIDES_PATH") or None,
        category_overrides_path=os.getenv("RECEIPT_CATEGORY_OVERRIDES_PATH") or None,
    )
