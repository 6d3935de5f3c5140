"""
Data models for receipt extraction.
"""

from .receipt import CategorySuggestion, ExpenseCategory, ExtractionResult, MerchantCorrection

__all__ = ["CategorySuggestion", "ExpenseCategory", "ExtractionResult", "MerchantCorrection"]
