from .logging_config import logger, setup_logging
from .normalization import normalize, normalize_merchant_name
from .similarity import fuzzy_match, jaccard, levenshtein, similarity

__all__ = [
    "logger", "setup_logging",
    "normalize", "normalize_merchant_name",
    "fuzzy_match", "jaccard", "levenshtein", "similarity",
]
