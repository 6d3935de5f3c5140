"""
Orchestrator for receipt field extraction and categorization.
"""

from typing import Optional, Sequence, Union

from ..categorization import Categorizer
from ..config import Settings, load_settings
from ..exceptions import EmptyInputError
from ..lexicon import MerchantLexicon
from ..models import ExpenseCategory, ExtractionResult
from ..parsers import AmountParser, DateParser, MerchantParser
from ..utils.logging_config import logger, setup_logging


class ExtractionPipeline:
    """
    Turns OCR text lines into a structured transaction.

    Responsibilities:
    1. Field Extraction: amount, date and merchant line straight from the lines.
    2. Merchant Autocorrection: maps the raw merchant line onto a canonical brand.
    3. Categorization: scores the corrected merchant and full text into a category.
    4. Corrections: routes user fixes to the lexicon and categorizer override maps.
    """

    def __init__(
        self,
        lexicon: Optional[MerchantLexicon] = None,
        categorizer: Optional[Categorizer] = None,
        amount_parser: Optional[AmountParser] = None,
        date_parser: Optional[DateParser] = None,
        merchant_parser: Optional[MerchantParser] = None,
    ):
        """Initializes the pipeline with its components; missing ones use in-memory defaults."""
        self.lexicon = lexicon or MerchantLexicon()
        self.categorizer = categorizer or Categorizer(merchant_seeds=self.lexicon.category_keys)
        self.amount_parser = amount_parser or AmountParser()
        self.date_parser = date_parser or DateParser()
        self.merchant_parser = merchant_parser or MerchantParser()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ExtractionPipeline":
        """Builds a pipeline whose override maps persist where the settings say."""
        settings = settings or load_settings()
        setup_logging(level=settings.log_level)

        lexicon = MerchantLexicon(store=settings.lexicon_store())
        categorizer = Categorizer(store=settings.category_store(), merchant_seeds=lexicon.category_keys)
        logger.info(
            f"ExtractionPipeline configured (lexicon overrides: {settings.lexicon_overrides_path or 'memory'}, "
            f"category overrides: {settings.category_overrides_path or 'memory'})"
        )
        return cls(lexicon=lexicon, categorizer=categorizer)

    def extract(self, ocr_lines: Sequence[str]) -> ExtractionResult:
        """
        Executes the full extraction for one receipt.

        Raises:
            EmptyInputError: the OCR step produced no non-empty lines.
        """
        lines = [line.strip() for line in ocr_lines if line and line.strip()]
        if not lines:
            raise EmptyInputError()

        raw_text = "\n".join(lines)

        # 1. Independent field extractors
        amount = self.amount_parser.extract_amount(raw_text.split("\n"))
        found_date = self.date_parser.extract_date(raw_text)
        merchant_raw = self.merchant_parser.extract_merchant(lines)

        # 2. Canonical brand name when the lexicon is confident
        merchant = merchant_raw
        if merchant_raw:
            correction = self.lexicon.autocorrect_display_name(merchant_raw)
            if correction:
                merchant = correction.name

        # 3. Category from the corrected merchant and the full text
        suggestion = self.categorizer.suggest_category(merchant, raw_text)

        logger.info(
            f"Extracted receipt: merchant={merchant!r} amount={amount} date={found_date} "
            f"category={suggestion.category.value} ({suggestion.confidence}/10)"
        )
        return ExtractionResult(
            merchant=merchant,
            amount=amount,
            date=found_date,
            category=suggestion.category,
            category_confidence=suggestion.confidence,
            raw_text=raw_text,
        )

    def extract_text(self, raw_text: str) -> ExtractionResult:
        """Convenience entry point for a newline-joined OCR blob."""
        return self.extract((raw_text or "").splitlines())

    def remember_merchant(self, raw_input: str, display_name: str) -> None:
        """Records a user's merchant-name correction."""
        self.lexicon.remember(raw_input, display_name)

    def remember_category(self, merchant: str, category: Union[ExpenseCategory, str]) -> None:
        """Records a user's category correction for a merchant."""
        self.categorizer.remember(merchant, category)
