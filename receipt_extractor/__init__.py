"""
Receipt field extraction and expense categorization.

Turns ordered OCR text lines from a photographed receipt into a merchant,
amount, date and expense category with a confidence score.
"""

from .categorization import Categorizer
from .config import Settings, load_settings
from .exceptions import EmptyInputError, ExtractionError, OverrideStoreError
from .lexicon import MerchantLexicon
from .models import CategorySuggestion, ExpenseCategory, ExtractionResult, MerchantCorrection
from .pipeline import ExtractionPipeline
from .storage import InMemoryOverrideStore, JsonFileOverrideStore, OverrideStore

__version__ = "0.1.0"

__all__ = [
    "Categorizer",
    "CategorySuggestion",
    "EmptyInputError",
    "ExpenseCategory",
    "ExtractionError",
    "ExtractionPipeline",
    "ExtractionResult",
    "InMemoryOverrideStore",
    "JsonFileOverrideStore",
    "MerchantCorrection",
    "MerchantLexicon",
    "OverrideStore",
    "OverrideStoreError",
    "Settings",
    "load_settings",
]
