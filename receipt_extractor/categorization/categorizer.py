"""
Multi-signal expense categorizer.

Each category accumulates points from independent signals:
merchant identity, merchant cue words, receipt keywords, receipt format cues
and a few precedence tie-breakers. The best category wins when it reaches the
confidence threshold; otherwise the receipt is filed under OTHER.
"""

import threading
from typing import Dict, FrozenSet, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from ..lexicon import MerchantLexicon
from ..models import CategorySuggestion, ExpenseCategory
from ..storage import InMemoryOverrideStore, OverrideStore
from ..utils.logging_config import logger
from ..utils.normalization import normalize_merchant_name
from ..utils.similarity import fuzzy_match
from . import rules

_OVERRIDES_ADAPTER = TypeAdapter(Dict[str, ExpenseCategory])

Scores = Dict[ExpenseCategory, int]


class Categorizer:
    """
    Assigns one ExpenseCategory plus a 0-10 confidence to a receipt.

    Scoring pipeline (see `suggest_category`):
    1. User override for the merchant short-circuits everything
    2. Merchant scoring: exact seed (+10), fuzzy seed (+7), cue word (+4)
    3. Keyword scoring over the raw text (+2 per hit, capped at 8)
    4. Format cues: tips, fuel units, billing, travel, weights/SKUs
    5. Tie-breakers: coffee drinks, fuel vs transport, travel brands

    Categories are always scored in ExpenseCategory declaration order, and an
    exact tie goes to the earliest category, so results are reproducible.
    """

    def __init__(
        self,
        store: Optional[OverrideStore] = None,
        merchant_seeds: Optional[Mapping[ExpenseCategory, FrozenSet[str]]] = None,
    ):
        """
        Args:
            store: Persistence for per-merchant category corrections.
            merchant_seeds: Normalized merchant keys per category, normally
                `MerchantLexicon.category_keys`. Built from the compiled-in
                seed table when omitted.
        """
        if merchant_seeds is None:
            merchant_seeds = MerchantLexicon().category_keys

        self._merchant_seeds = {
            category: frozenset(merchant_seeds.get(category, frozenset()))
            for category in ExpenseCategory
        }
        self._store = store or InMemoryOverrideStore()
        self._lock = threading.Lock()
        self._overrides: Dict[str, ExpenseCategory] = self._load_overrides()

    # --- Public API ---

    @property
    def overrides(self) -> Dict[str, ExpenseCategory]:
        return dict(self._overrides)

    def suggest_category(self, merchant: Optional[str], raw_text: str) -> CategorySuggestion:
        """Classifies a receipt from its (corrected) merchant name and full OCR text."""
        key = normalize_merchant_name(merchant or "")

        if key:
            override = self._overrides.get(key)
            if override is not None:
                return CategorySuggestion(category=override, confidence=rules.MAX_CONFIDENCE)

        scores: Scores = {category: 0 for category in ExpenseCategory}
        lower = (raw_text or "").lower()

        if key:
            self._add_merchant_scores(key, scores)
        self._add_keyword_scores(lower, scores)
        self._add_format_cue_scores(lower, scores)
        self._apply_tie_breakers(lower, key, scores)

        # Strict comparison keeps the earliest category on exact ties
        best_category, best_score = ExpenseCategory.OTHER, -1
        for category, score in scores.items():
            if score > best_score:
                best_category, best_score = category, score

        nonzero = {c.value: s for c, s in scores.items() if s}
        logger.debug(f"Category scores for '{key}': {nonzero}")

        if best_score < rules.CONFIDENCE_THRESHOLD:
            return CategorySuggestion(
                category=ExpenseCategory.OTHER,
                confidence=max(0, min(rules.LOW_CONFIDENCE_CAP, best_score)),
            )
        return CategorySuggestion(category=best_category, confidence=min(rules.MAX_CONFIDENCE, best_score))

    def remember(self, merchant: str, category: Union[ExpenseCategory, str]) -> None:
        """Permanently files the normalized `merchant` under `category`."""
        key = normalize_merchant_name(merchant)
        if not key:
            return
        category = ExpenseCategory(category)

        with self._lock:
            updated = dict(self._overrides)
            updated[key] = category
            self._overrides = updated
            self._store.save({k: v.value for k, v in updated.items()})
        logger.info(f"Remembered category correction '{key}' -> {category.value}")

    # --- Merchant scoring ---

    def _add_merchant_scores(self, key: str, scores: Scores) -> None:
        for category, names in self._merchant_seeds.items():
            if key in names:
                scores[category] += rules.EXACT_MERCHANT_POINTS

        # Fuzzy hits tolerate small OCR errors; at most one per category
        for category, names in self._merchant_seeds.items():
            if any(fuzzy_match(key, name) for name in names if name != key):
                scores[category] += rules.FUZZY_MERCHANT_POINTS

        for category, cues in rules.MERCHANT_CUES.items():
            if any(cue in key for cue in cues):
                scores[category] += rules.MERCHANT_CUE_POINTS

    # --- Keyword scoring ---

    def _add_keyword_scores(self, lower: str, scores: Scores) -> None:
        for category, tokens in rules.TEXT_KEYWORDS.items():
            hits = sum(1 for token in tokens if token in lower)
            if hits:
                scores[category] += min(rules.KEYWORD_POINTS_CAP, hits * rules.KEYWORD_POINTS_PER_HIT)

    # --- Format cues ---

    def _add_format_cue_scores(self, lower: str, scores: Scores) -> None:
        if any(word in lower for word in rules.TIP_WORDS):
            scores[ExpenseCategory.DINING] += rules.FORMAT_CUE_POINTS

        if rules.FUEL_UNIT_PATTERN.search(lower):
            scores[ExpenseCategory.FUEL] += rules.FORMAT_CUE_POINTS

        if any(p in lower for p in rules.BILLING_PHRASES) or rules.USAGE_UNIT_PATTERN.search(lower):
            scores[ExpenseCategory.UTILITIES] += rules.FORMAT_CUE_POINTS

        if any(p in lower for p in rules.TRAVEL_PHRASES):
            scores[ExpenseCategory.TRAVEL] += rules.FORMAT_CUE_POINTS

        sku_lines = sum(1 for line in lower.splitlines() if rules.WEIGHT_SKU_PATTERN.search(line))
        if sku_lines >= rules.GROCERY_SKU_MIN_LINES:
            scores[ExpenseCategory.GROCERIES] += rules.GROCERY_SKU_POINTS

    # --- Tie breakers / precedence ---

    def _apply_tie_breakers(self, lower: str, key: str, scores: Scores) -> None:
        if any(drink in lower for drink in rules.COFFEE_DRINKS):
            scores[ExpenseCategory.COFFEE] += rules.COFFEE_TIEBREAK_POINTS

        if rules.FUEL_UNIT_PATTERN.search(lower):
            scores[ExpenseCategory.FUEL] += rules.FUEL_TIEBREAK_POINTS
        elif rules.RIDE_PATTERN.search(lower):
            scores[ExpenseCategory.TRANSPORT] += rules.TRANSPORT_TIEBREAK_POINTS

        if key and any(brand in key for brand in rules.TRAVEL_STRONG_MERCHANTS):
            scores[ExpenseCategory.TRAVEL] += rules.TRAVEL_BRAND_POINTS

    # --- Overrides persistence ---

    def _load_overrides(self) -> Dict[str, ExpenseCategory]:
        raw = self._store.load()
        try:
            return _OVERRIDES_ADAPTER.validate_python(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed category overrides: {e.error_count()} invalid entries")
            return {}
