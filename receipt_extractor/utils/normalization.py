"""
Centralized normalization utilities for merchant comparison keys.
"""

import re
import unicodedata

DISALLOWED_CHARS = re.compile(r'[^a-z0-9&+ ]')
STORE_ID_PATTERN = re.compile(r'(?:^|\s)(?:store|unit|no\.?|#)\s*\d+\b')
TRAILING_NUMBER_PATTERN = re.compile(r'\b\d{3,6}\b$')
MULTI_SPACE_PATTERN = re.compile(r'\s{2,}')


def strip_diacritics(text: str) -> str:
    """Folds accented characters onto their base letters ('caffè' -> 'caffe')."""
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def _strip_identifiers(norm: str) -> str:
    # Removing one identifier can expose another one at the end of the key,
    # so the trailing-ID rules run until the key is stable.
    while True:
        stripped = STORE_ID_PATTERN.sub('', norm)
        stripped = TRAILING_NUMBER_PATTERN.sub('', stripped.rstrip())
        stripped = MULTI_SPACE_PATTERN.sub(' ', stripped).strip()
        if stripped == norm:
            return stripped
        norm = stripped


def normalize_merchant_name(name) -> str:
    """
    Builds the canonical comparison key for merchant-like text.

    Transformation pipeline:
    1. Force lowercase
    2. Strip diacritics
    3. Replace everything outside [a-z0-9&+ ] with a space
    4. Drop store/unit identifiers ('store 123', 'unit 45', 'no 7', '#99')
    5. Drop a trailing 3-6 digit register/transaction number
    6. Collapse whitespace and trim

    Never raises; anything that is not a string normalizes to ''.
    """
    if not name or not isinstance(name, str):
        return ""

    norm = strip_diacritics(name.lower())
    norm = DISALLOWED_CHARS.sub(' ', norm)
    norm = MULTI_SPACE_PATTERN.sub(' ', norm).strip()
    return _strip_identifiers(norm)


normalize = normalize_merchant_name
