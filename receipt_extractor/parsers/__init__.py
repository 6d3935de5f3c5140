from .amount_parser import AmountCandidate, AmountParser, format_amount
from .date_parser import DateParser
from .merchant_parser import MerchantParser

__all__ = ["AmountCandidate", "AmountParser", "DateParser", "MerchantParser", "format_amount"]
