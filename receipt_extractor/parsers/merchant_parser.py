"""
Merchant line detection for receipt headers.
"""

import re
from typing import List, Optional, Sequence, Tuple

from ..utils.logging_config import logger


class MerchantParser:
    """
    Scores the first receipt lines and returns the most merchant-like one.

    Lines are rejected outright when they carry payment/total vocabulary
    (matched at the start of a word, plus common merged forms like "GRANDTOTAL"),
    camera UI noise, an address, a phone number, an email or a URL. Survivors
    are scored on position, word count, letter density, title casing and
    digit count.
    """

    MAX_LINES = 25

    BANNED_KEYWORDS = [
        'total', 'subtotal', 'tax', 'gst', 'pst', 'hst', 'visa', 'mastercard',
        'debit', 'credit', 'change', 'cash', 'approval', 'auth', 'receipt',
        'transaction', 'account', 'card', 'thank', 'order', 'item', 'qty',
        'register', 'cashier', 'salesperson', 'invoice', 'terminal',
        'merchant #', 'auth #', 'ref #', 'resp', 'iso',
        # OCR often drops the space inside these
        'grandtotal', 'salestax', 'amountdue',
    ]

    # Text picked up from the camera overlay rather than the receipt
    NOISE_PHRASES = [
        'control option', 'menu', 'cancel', 'photo', 'video', 'camera',
        'hdr', 'portrait', 'live',
    ]

    ADDRESS_PATTERN = (
        r'^\s*\d{1,5}[a-z]?\s+(?:[\w.\'-]+\s+){0,4}'
        r'(?:street|st|avenue|ave|road|rd|boulevard|blvd|drive|dr|lane|ln|way|court|ct'
        r'|place|pl|highway|hwy|parkway|pkwy|crescent|cres|terrace|square|sq)\b\.?'
    )
    CITY_STATE_ZIP_PATTERN = r'[A-Za-z\s]+,\s*[A-Z]{2}\s+\d{5}(?:-\d{4})?\b'
    POSTAL_CODE_PATTERN = r'\b[A-Z]\d[A-Z]\s?\d[A-Z]\d\b'
    PHONE_PATTERN = r'\(?\d{3}\)?[-.\s]\d{3}[-.\s]\d{4}'
    URL_PATTERN = r'https?://|www\.'

    def __init__(self):
        self.banned_re = self._word_start_regex(self.BANNED_KEYWORDS)
        self.noise_re = self._word_start_regex(self.NOISE_PHRASES)
        self.address_re = re.compile(self.ADDRESS_PATTERN, re.IGNORECASE)
        self.city_state_zip_re = re.compile(self.CITY_STATE_ZIP_PATTERN)
        self.postal_code_re = re.compile(self.POSTAL_CODE_PATTERN, re.IGNORECASE)
        self.phone_re = re.compile(self.PHONE_PATTERN)
        self.url_re = re.compile(self.URL_PATTERN, re.IGNORECASE)

    @staticmethod
    def _word_start_regex(phrases: Sequence[str]) -> re.Pattern:
        alternatives = '|'.join(re.escape(p) for p in sorted(phrases, key=len, reverse=True))
        return re.compile(r'(?<![a-z])(?:' + alternatives + r')')

    def extract_merchant(self, lines: Sequence[str]) -> Optional[str]:
        """
        Returns the best merchant line, the first line when every candidate is
        filtered out, or None when there are no lines.
        """
        lines = [line.strip() for line in lines if line and line.strip()]
        if not lines:
            return None

        candidates: List[Tuple[str, int]] = []
        for i, line in enumerate(lines[:self.MAX_LINES]):
            if self.is_rejected(line):
                continue
            candidates.append((line, self.score_line(line, i)))

        if candidates:
            best_line, best_score = max(candidates, key=lambda c: c[1])
            logger.debug(f"Merchant line '{best_line}' (score {best_score})")
            return best_line

        logger.debug("No merchant candidates survived filtering; using first line")
        return lines[0]

    def is_rejected(self, line: str) -> bool:
        lower = line.lower()
        if self.noise_re.search(lower) or self.banned_re.search(lower):
            return True
        return (
            self.looks_like_address(line)
            or bool(self.phone_re.search(line))
            or '@' in line
            or bool(self.url_re.search(line))
        )

    def looks_like_address(self, line: str) -> bool:
        return bool(
            self.address_re.search(line)
            or self.city_state_zip_re.search(line)
            or self.postal_code_re.search(line)
        )

    def score_line(self, line: str, index: int) -> int:
        score = max(0, 8 - index)

        words = line.split()
        if 1 <= len(words) <= 4:
            score += 3

        letters = sum(1 for ch in line if ch.isalpha())
        if letters >= 3 and letters / max(1, len(line)) > 0.6:
            score += 3

        if words:
            capped = sum(1 for w in words if w[0] == w[0].upper())
            if capped / len(words) >= 0.6:
                score += 2

        digits = sum(1 for ch in line if ch.isdigit())
        if digits == 0:
            score += 2
        elif digits > 4:
            score -= 3

        return score
