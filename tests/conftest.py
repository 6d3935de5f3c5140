import sys
import os

import pytest

# Ensure the project root is importable when the package is not installed
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from receipt_extractor.categorization import Categorizer
from receipt_extractor.lexicon import MerchantLexicon
from receipt_extractor.pipeline import ExtractionPipeline
from receipt_extractor.storage import InMemoryOverrideStore


@pytest.fixture
def lexicon_store():
    return InMemoryOverrideStore()


@pytest.fixture
def category_store():
    return InMemoryOverrideStore()


@pytest.fixture
def lexicon(lexicon_store):
    """Lexicon over the compiled-in seeds with an empty in-memory override map."""
    return MerchantLexicon(store=lexicon_store)


@pytest.fixture
def categorizer(category_store, lexicon):
    return Categorizer(store=category_store, merchant_seeds=lexicon.category_keys)


@pytest.fixture
def pipeline(lexicon, categorizer):
    return ExtractionPipeline(lexicon=lexicon, categorizer=categorizer)


@pytest.fixture
def starbucks_lines():
    """A short coffee receipt as OCR returns it, top to bottom."""
    return ["STARBUCKS STORE 4521", "123 MAIN ST", "LATTE 4.50", "TAX 0.40", "TOTAL 4.90"]
