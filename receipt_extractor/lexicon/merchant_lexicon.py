"""
Merchant Lexicon - single source of truth for merchant seeds and fuzzy autocorrection.

The lexicon turns noisy OCR merchant lines into canonical brand names:

- "STARBUCKS STORE 4521" -> "Starbucks" (exact after normalization)
- "Starbuks Coffee"      -> "Starbucks" (fuzzy, if similar enough)
- "mcdonalds #4412"      -> "McDonald's" (user correction)

User corrections live in an injected OverrideStore and always beat seed data.
"""

import math
import threading
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ..models import ExpenseCategory, MerchantCorrection
from ..storage import InMemoryOverrideStore, OverrideStore
from ..utils.logging_config import logger
from ..utils.normalization import normalize_merchant_name
from ..utils.similarity import similarity
from .seeds import MERCHANT_SEEDS

ACCEPT_THRESHOLD = 0.82
MIN_LENGTH_RATIO = 0.5
MAX_CONFIDENCE = 10

_OVERRIDES_ADAPTER = TypeAdapter(Dict[str, str])


class MerchantLexicon:
    """
    Normalized seed lookup with fuzzy autocorrection and persisted user overrides.

    Lookup order in `autocorrect_display_name`:
    1. User override for the normalized key (confidence 10)
    2. Exact normalized seed (confidence 10)
    3. Best fuzzy seed among prefiltered candidates, accepted at similarity >= 0.82
    """

    def __init__(
        self,
        store: Optional[OverrideStore] = None,
        seeds: Optional[Mapping[ExpenseCategory, Sequence[str]]] = None,
    ):
        """
        Builds the normalized lexicon once and loads the user overrides.

        Args:
            store: Persistence for user corrections. Defaults to an in-memory store.
            seeds: Category -> display names. Defaults to the compiled-in table.
        """
        self._store = store or InMemoryOverrideStore()
        self._lock = threading.Lock()

        canonical: Dict[str, str] = {}
        by_category: Dict[ExpenseCategory, FrozenSet[str]] = {}
        for category in ExpenseCategory:
            keys = []
            for display in (seeds if seeds is not None else MERCHANT_SEEDS).get(category, ()):
                key = normalize_merchant_name(display)
                if not key:
                    continue
                keys.append(key)
                # First seed wins; later display forms never replace it.
                canonical.setdefault(key, display)
            by_category[category] = frozenset(keys)

        self._canonical_by_key: Mapping[str, str] = MappingProxyType(canonical)
        self._keys_by_category: Mapping[ExpenseCategory, FrozenSet[str]] = MappingProxyType(by_category)
        self._seed_keys: List[str] = list(canonical)
        self._seed_tokens = {key: frozenset(key.split()) for key in self._seed_keys}

        self._overrides: Dict[str, str] = self._load_overrides()
        logger.debug(
            f"MerchantLexicon ready: {len(self._seed_keys)} seeds, {len(self._overrides)} overrides"
        )

    # --- Public API ---

    @property
    def category_keys(self) -> Mapping[ExpenseCategory, FrozenSet[str]]:
        """Normalized seed keys grouped by category."""
        return self._keys_by_category

    @property
    def overrides(self) -> Dict[str, str]:
        return dict(self._overrides)

    def canonical_name(self, key: str) -> Optional[str]:
        """Display name for an already-normalized seed key."""
        return self._canonical_by_key.get(key)

    def autocorrect_display_name(self, raw: str) -> Optional[MerchantCorrection]:
        """
        Returns a canonical display name and 0-10 confidence when `raw` can be
        confidently fixed, otherwise None.
        """
        key = normalize_merchant_name(raw)
        if not key:
            return None

        fixed = self._overrides.get(key)
        if fixed is not None:
            return MerchantCorrection(name=fixed, confidence=MAX_CONFIDENCE)

        exact = self._canonical_by_key.get(key)
        if exact is not None:
            return MerchantCorrection(name=exact, confidence=MAX_CONFIDENCE)

        candidates = self._prefilter_candidates(key)
        if not candidates:
            return None

        best_key = None
        best_score = 0.0
        for seed in candidates:
            score = similarity(key, seed)
            if score > best_score:
                best_score = score
                best_key = seed

        if best_key is None or best_score < ACCEPT_THRESHOLD:
            logger.debug(f"No lexicon match for '{key}' (best score {best_score:.3f})")
            return None

        confidence = min(MAX_CONFIDENCE, math.floor(best_score * 10 + 0.5))
        logger.debug(f"Lexicon fuzzy match: '{key}' -> '{best_key}' (score: {best_score:.3f})")
        return MerchantCorrection(name=self._canonical_by_key[best_key], confidence=confidence)

    def remember(self, raw_input: str, as_display: str) -> None:
        """Permanently maps the normalized `raw_input` onto the display name `as_display`."""
        key = normalize_merchant_name(raw_input)
        value = (as_display or "").strip()
        if not key or not value:
            return

        with self._lock:
            updated = dict(self._overrides)
            updated[key] = value
            self._overrides = updated
            self._store.save(updated)
        logger.info(f"Remembered merchant correction '{key}' -> '{value}'")

    # --- Internals ---

    def _prefilter_candidates(self, key: str) -> List[str]:
        """Seeds sharing at least one token with `key` and of comparable length."""
        tokens = set(key.split())
        if not tokens:
            return []

        candidates = []
        for seed in self._seed_keys:
            if not tokens & self._seed_tokens[seed]:
                continue
            longer = max(len(key), len(seed))
            shorter = min(len(key), len(seed))
            if shorter / longer >= MIN_LENGTH_RATIO:
                candidates.append(seed)
        return candidates

    def _load_overrides(self) -> Dict[str, str]:
        raw = self._store.load()
        try:
            return _OVERRIDES_ADAPTER.validate_python(raw, strict=True)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed merchant overrides: {e.error_count()} invalid entries")
            return {}
