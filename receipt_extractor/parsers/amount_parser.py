"""
Receipt total extraction from line-ordered OCR text.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Sequence, Union

from ..utils.logging_config import logger

TWO_PLACES = Decimal('0.01')


@dataclass(frozen=True)
class AmountCandidate:
    """A money token found on a receipt line, with its heuristic score."""
    value: Decimal
    score: int
    line_index: int
    raw_text: str


def format_amount(value: Decimal) -> str:
    """Renders a Decimal with exactly two fraction digits ('4.9' -> '4.90')."""
    return str(value.quantize(TWO_PLACES))


class AmountParser:
    """
    Picks the transaction total out of noisy receipt lines.

    Strategy, in priority order:
    1. Total-anchored window: the largest amount on the last "total"-like line
       or within the 6 lines that follow it (card slips often repeat the total
       below the label).
    2. Global scoring: every amount is scored by proximity to total keywords,
       position on the receipt and parenthesized (negative) notation.
    3. Last resort: the largest non-negative amount anywhere.
    """

    MONEY_PATTERN = r'\$?\s*\d{1,3}(?:,\d{3})*(?:\.\d{2})'

    # Checked in this order; "total" also covers "subtotal" lines.
    TOTAL_KEYWORDS = ["total cad", "grand total", "amount due", "balance", "total"]
    REFUND_KEYWORDS = ["refund", "return"]

    WINDOW_LINES = 6
    OWN_LINE_POINTS = 8
    NEIGHBOR_LINE_POINTS = 5
    NEGATIVE_PENALTY = 10
    LATE_LINE_STEP = 5
    LATE_LINE_CAP = 6

    def __init__(self):
        self.money_re = re.compile(self.MONEY_PATTERN)

    def extract_amount(self, lines: Union[str, Sequence[str]]) -> Optional[str]:
        """
        Returns the receipt total as a two-decimal string, or None when the
        text holds no money tokens at all.
        """
        if isinstance(lines, str):
            lines = lines.split('\n')
        lines = list(lines)

        windowed = self._total_window_amount(lines)
        if windowed is not None:
            logger.debug(f"Amount from total window: {windowed}")
            return format_amount(windowed)

        candidates = self.score_candidates(lines)
        if candidates:
            best = max(candidates, key=lambda c: (c.score, c.value))
            logger.debug(f"Amount from scored candidates: {best.value} (score {best.score})")
            return format_amount(best.value)

        positives = [v for v in self._all_values('\n'.join(lines)) if v >= 0]
        if positives:
            return format_amount(max(positives))
        return None

    def score_candidates(self, lines: Sequence[str]) -> List[AmountCandidate]:
        """Scores every money token on every line."""
        lowered = [line.lower() for line in lines]
        has_keyword = [self._has_total_keyword(line) for line in lowered]
        text = '\n'.join(lowered)
        is_refund = any(word in text for word in self.REFUND_KEYWORDS)

        candidates = []
        for i, line in enumerate(lines):
            for match in self.money_re.finditer(line):
                token = match.group(0)
                value = self._parse_money(token)
                if value is None:
                    continue

                score = 0
                if has_keyword[i]:
                    score += self.OWN_LINE_POINTS
                if i > 0 and has_keyword[i - 1]:
                    score += self.NEIGHBOR_LINE_POINTS
                if i + 1 < len(lines) and has_keyword[i + 1]:
                    score += self.NEIGHBOR_LINE_POINTS
                if self._is_parenthesized(line, token) and not is_refund:
                    score -= self.NEGATIVE_PENALTY
                score += min(i // self.LATE_LINE_STEP, self.LATE_LINE_CAP)

                candidates.append(AmountCandidate(value=value, score=score, line_index=i, raw_text=token))
        return candidates

    def _total_window_amount(self, lines: List[str]) -> Optional[Decimal]:
        last_total = None
        for idx in range(len(lines) - 1, -1, -1):
            if self._has_total_keyword(lines[idx].lower()):
                last_total = idx
                break
        if last_total is None:
            return None

        end = min(len(lines), last_total + self.WINDOW_LINES + 1)
        values = [v for line in lines[last_total:end] for v in self._all_values(line)]
        return max(values) if values else None

    def _all_values(self, text: str) -> List[Decimal]:
        values = []
        for match in self.money_re.finditer(text):
            value = self._parse_money(match.group(0))
            if value is not None:
                values.append(value)
        return values

    def _has_total_keyword(self, lowered_line: str) -> bool:
        return any(kw in lowered_line for kw in self.TOTAL_KEYWORDS)

    @staticmethod
    def _is_parenthesized(line: str, token: str) -> bool:
        """Accounting-style negatives: '(5.00)' or '($5.00)'."""
        token = token.strip()
        bare = token.replace('$', '').strip()
        return f"({token})" in line or f"({bare})" in line

    @staticmethod
    def _parse_money(token: str) -> Optional[Decimal]:
        cleaned = token.replace('$', '').replace(',', '').replace(' ', '').strip()
        try:
            return Decimal(cleaned)
        except InvalidOperation:
            return None
