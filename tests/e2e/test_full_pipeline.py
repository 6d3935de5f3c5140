"""
End-to-end tests for the extraction pipeline.
Tests the complete flow: OCR lines -> fields -> merchant autocorrect -> category.
"""
from datetime import date

import pytest

from receipt_extractor.config import Settings
from receipt_extractor.exceptions import EmptyInputError
from receipt_extractor.lexicon import MerchantLexicon
from receipt_extractor.models import ExpenseCategory, ExtractionResult
from receipt_extractor.pipeline import ExtractionPipeline
from receipt_extractor.storage import InMemoryOverrideStore


class TestFullPipeline:
    """Realistic receipts through the in-memory pipeline."""

    def test_coffee_receipt(self, pipeline, starbucks_lines):
        result = pipeline.extract(starbucks_lines)

        assert isinstance(result, ExtractionResult)
        assert result.merchant == "Starbucks"
        assert result.amount == "4.90"
        assert result.date is None
        assert result.category == ExpenseCategory.COFFEE
        assert result.category_confidence >= 7
        assert result.raw_text == "\n".join(starbucks_lines)

    def test_grocery_receipt(self, pipeline):
        lines = [
            "WHOLE FOODS MARKET",
            "BANANAS 1.2 kg 2.39",
            "APPLES 0.8 kg 3.10",
            "SUBTOTAL 5.49",
            "TAX 0.00",
            "TOTAL 5.49",
            "01/15/2024",
        ]
        result = pipeline.extract(lines)

        # Too far from 'Whole Foods' to autocorrect; the raw line is kept
        assert result.merchant == "WHOLE FOODS MARKET"
        assert result.amount == "5.49"
        assert result.date == date(2024, 1, 15)
        assert result.category == ExpenseCategory.GROCERIES
        assert result.category_confidence == 10

    def test_fuel_receipt(self, pipeline):
        lines = ["Shell", "Pump 4", "Unleaded 38.5 L", "Price/L 1.65", "Total $63.53", "Visa", "Mar 3, 2024"]
        result = pipeline.extract(lines)

        assert result.merchant == "Shell"
        assert result.amount == "63.53"
        assert result.date == date(2024, 3, 3)
        assert result.category == ExpenseCategory.FUEL

    def test_blank_lines_are_dropped(self, pipeline):
        result = pipeline.extract(["", "  Starbucks  ", "   ", "Total 3.25"])
        assert result.raw_text == "Starbucks\nTotal 3.25"
        assert result.merchant == "Starbucks"
        assert result.amount == "3.25"

    def test_extract_text(self, pipeline, starbucks_lines):
        assert pipeline.extract_text("\n".join(starbucks_lines)) == pipeline.extract(starbucks_lines)

    @pytest.mark.parametrize("lines", [[], [""], ["   ", "\t"]])
    def test_empty_input_raises(self, pipeline, lines):
        with pytest.raises(EmptyInputError):
            pipeline.extract(lines)

    def test_missing_fields_are_not_errors(self, pipeline):
        result = pipeline.extract(["Thank you for visiting"])
        assert result.amount is None
        assert result.date is None
        assert result.category == ExpenseCategory.OTHER


class TestUserCorrections:
    """Corrections feed back into later extractions."""

    LINES = ["MCDONALDS #4412", "BIG MAC 5.99", "TOTAL 6.59"]

    def test_merchant_correction(self, pipeline, lexicon_store):
        assert pipeline.extract(self.LINES).merchant == "MCDONALDS #4412"

        pipeline.remember_merchant("mcdonalds #4412", "McDonald's")

        result = pipeline.extract(self.LINES)
        assert result.merchant == "McDonald's"
        # The corrected name is an exact dining seed
        assert result.category == ExpenseCategory.DINING
        assert result.category_confidence == 10
        assert lexicon_store.save_count == 1

    def test_category_correction(self, pipeline, category_store):
        pipeline.remember_category("Starbucks", "personal")

        result = pipeline.extract(["STARBUCKS", "LATTE 4.50", "TOTAL 4.90"])
        assert result.category == ExpenseCategory.PERSONAL
        assert result.category_confidence == 10
        assert category_store.load() == {"starbucks": "personal"}

    def test_corrections_persist_across_pipelines(self, tmp_path):
        settings = Settings(
            lexicon_overrides_path=tmp_path / "lexicon.json",
            category_overrides_path=tmp_path / "categories.json",
        )
        first = ExtractionPipeline.from_settings(settings)
        first.remember_merchant("mcdonalds #4412", "McDonald's")
        first.remember_category("McDonald's", ExpenseCategory.INCOME)

        second = ExtractionPipeline.from_settings(settings)
        result = second.extract(self.LINES)
        assert result.merchant == "McDonald's"
        assert result.category == ExpenseCategory.INCOME
        assert (tmp_path / "lexicon.json").exists()
        assert (tmp_path / "categories.json").exists()


class TestMalformedOverrides:
    """Bad override data never stops extraction."""

    def test_non_string_lexicon_overrides(self, starbucks_lines):
        lexicon = MerchantLexicon(store=InMemoryOverrideStore({"starbucks": 42}))
        result = ExtractionPipeline(lexicon=lexicon).extract(starbucks_lines)
        assert result.merchant == "Starbucks"
        assert result.category == ExpenseCategory.COFFEE
