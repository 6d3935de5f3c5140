"""
Data models for receipt extraction and categorization.

This module defines the core data structures used throughout the system,
ensuring type safety and validation via Pydantic.
"""

import re
import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

AMOUNT_FORMAT = re.compile(r'^\d+\.\d{2}$')


class ExpenseCategory(str, Enum):
    """
    Closed set of expense categories.

    Declaration order is significant: scoring iterates categories in this
    order and exact score ties resolve to the earliest member.
    """
    GROCERIES = "groceries"
    COFFEE = "coffee"
    DINING = "dining"
    TRANSPORT = "transport"
    FUEL = "fuel"
    SHOPPING = "shopping"
    UTILITIES = "utilities"
    HOUSING = "housing"
    ENTERTAINMENT = "entertainment"
    TRAVEL = "travel"
    PERSONAL = "personal"
    INCOME = "income"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        """Human-facing title, e.g. 'Groceries'."""
        return self.value.capitalize()


class CategorySuggestion(BaseModel):
    """
    A single classification outcome.

    Confidence is a rough 0-10 score: >=7 strong, 4-6 medium, <4 low.
    """
    model_config = ConfigDict(frozen=True)

    category: ExpenseCategory
    confidence: int = Field(ge=0, le=10)

    @property
    def strength(self) -> str:
        if self.confidence >= 7:
            return "strong"
        if self.confidence >= 4:
            return "medium"
        return "low"


class MerchantCorrection(BaseModel):
    """Canonical display name proposed by the merchant lexicon."""
    model_config = ConfigDict(frozen=True)

    name: str
    confidence: int = Field(ge=0, le=10)


class ExtractionResult(BaseModel):
    """
    The structured transaction derived from one receipt's OCR text.
    Constructed once per receipt and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    merchant: Optional[str] = None
    amount: Optional[str] = None
    date: Optional[datetime.date] = None
    category: ExpenseCategory = ExpenseCategory.OTHER
    category_confidence: int = Field(default=0, ge=0, le=10)
    raw_text: str

    @field_validator('amount')
    @classmethod
    def validate_amount_format(cls, v):
        """Amounts are plain decimal strings with exactly two fraction digits."""
        if v is not None and not AMOUNT_FORMAT.match(v):
            raise ValueError(f'Amount must have exactly two fraction digits, got {v!r}')
        return v
