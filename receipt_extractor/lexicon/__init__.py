from .merchant_lexicon import ACCEPT_THRESHOLD, MerchantLexicon
from .seeds import MERCHANT_SEEDS

__all__ = ["ACCEPT_THRESHOLD", "MERCHANT_SEEDS", "MerchantLexicon"]
