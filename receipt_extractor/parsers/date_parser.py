"""
Transaction date extraction from receipt text.
"""

import re
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Tuple

from dateutil import parser as date_parser

from ..utils.logging_config import logger

MONTH_NAME = (
    r'(Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?'
    r'|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)'
)
YEAR4 = r'((?:19|20)\d{2})'

# Fixed default so phrases never borrow today's date.
PHRASE_DEFAULT = datetime(2000, 1, 1)


class ReceiptParserInfo(date_parser.parserinfo):
    """dateutil settings where a bare two-digit year is always 20YY."""

    def convertyear(self, year, century_specified=False):
        if year < 100 and not century_specified:
            return 2000 + year
        return super().convertyear(year, century_specified)


class DateParser:
    """
    Tries date pattern families in strict priority order and returns the
    first date that actually parses:

    1. Four-digit-year numerics: 12/25/2023, 12-25-2023, 12.25.2023, 2023-12-25, 2023.12.25
    2. Month names: "Dec 25, 2023", "25 Dec 2023"
    3. Two-digit-year numerics with day/month disambiguation: 13/02/24, 02/13/24
    4. Free-form date phrases: "Tuesday, March 5th 2024", "5th of September 2024",
       "05-Mar-2024", "5-Mar-24"
    """

    MONTHS = {
        'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
        'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
    }

    # (pattern, group order) - order names which group holds month/day/year
    FOUR_DIGIT_PATTERNS = [
        (r'\b(\d{1,2})[/-](\d{1,2})[/-]' + YEAR4 + r'\b', 'mdy'),
        (r'\b(\d{1,2})\.(\d{1,2})\.' + YEAR4 + r'\b', 'mdy'),
        (r'\b' + YEAR4 + r'[/-](\d{1,2})[/-](\d{1,2})\b', 'ymd'),
        (r'\b' + YEAR4 + r'\.(\d{1,2})\.(\d{1,2})\b', 'ymd'),
    ]

    MONTH_NAME_PATTERNS = [
        (r'\b' + MONTH_NAME + r'\.?\s+(\d{1,2}),\s+' + YEAR4 + r'\b', 'mdy'),
        (r'\b(\d{1,2})\s+' + MONTH_NAME + r'\.?\s+' + YEAR4 + r'\b', 'dmy'),
    ]

    TWO_DIGIT_PATTERNS = [
        (r'\b(\d{1,2})[/-](\d{1,2})[/-](\d{2})\b', 'ambiguous'),
        (r'\b(\d{2})[/-](\d{1,2})[/-](\d{1,2})\b', 'ymd'),
    ]

    PHRASE_PATTERN = (
        r'\b(?:(?:mon|tues?|wed(?:nes)?|thu(?:rs)?|fri|sat(?:ur)?|sun)(?:day)?\.?,?\s+)?'
        r'(?:'
        r'\d{1,2}(?:st|nd|rd|th)?\s+(?:of\s+)?' + MONTH_NAME + r'\.?,?\s+(?:19|20)\d{2}'
        r'|' + MONTH_NAME + r'\.?\s+\d{1,2}(?:st|nd|rd|th)?,?\s+(?:19|20)\d{2}'
        r'|(?:19|20)\d{2}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2})?'
        r'|\d{1,2}[-\s]' + MONTH_NAME + r'\.?[-\s](?:(?:19|20)\d{2}|\d{2})'
        r')\b'
    )

    def __init__(self):
        self.four_digit_res = [(re.compile(p, re.ASCII), order) for p, order in self.FOUR_DIGIT_PATTERNS]
        self.month_name_res = [(re.compile(p, re.IGNORECASE | re.ASCII), order) for p, order in self.MONTH_NAME_PATTERNS]
        self.two_digit_res = [(re.compile(p, re.ASCII), order) for p, order in self.TWO_DIGIT_PATTERNS]
        self.phrase_re = re.compile(self.PHRASE_PATTERN, re.IGNORECASE | re.ASCII)

    def extract_date(self, text: str) -> Optional[date]:
        """Returns the first parseable receipt date, or None."""
        if not text:
            return None

        families: List[Tuple[str, Callable[[str], Optional[date]]]] = [
            ('four-digit year', self._match_four_digit),
            ('month name', self._match_month_name),
            ('two-digit year', self._match_two_digit),
            ('date phrase', self._match_phrase),
        ]
        for family, matcher in families:
            found = matcher(text)
            if found is not None:
                logger.debug(f"Date {found.isoformat()} matched as {family}")
                return found
        return None

    # --- Pattern families ---

    def _match_four_digit(self, text: str) -> Optional[date]:
        for regex, order in self.four_digit_res:
            for m in regex.finditer(text):
                if order == 'ymd':
                    found = _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
                else:
                    month, day, year = int(m.group(1)), int(m.group(2)), int(m.group(3))
                    # Month-first; day-first only when that is the sole valid reading.
                    found = _safe_date(year, month, day) or _safe_date(year, day, month)
                if found:
                    return found
        return None

    def _match_month_name(self, text: str) -> Optional[date]:
        for regex, order in self.month_name_res:
            for m in regex.finditer(text):
                if order == 'mdy':
                    name, day, year = m.group(1), m.group(2), m.group(3)
                else:
                    day, name, year = m.group(1), m.group(2), m.group(3)
                found = _safe_date(int(year), self.MONTHS[name[:3].lower()], int(day))
                if found:
                    return found
        return None

    def _match_two_digit(self, text: str) -> Optional[date]:
        for regex, order in self.two_digit_res:
            for m in regex.finditer(text):
                a, b, c = (int(g) for g in m.groups())
                found = _first_valid(self._two_digit_readings(a, b, c, order))
                if found:
                    return found
        return None

    @staticmethod
    def _two_digit_readings(a: int, b: int, c: int, order: str) -> Iterable[Tuple[int, int, int]]:
        """Candidate (year, month, day) readings, most likely first."""
        if order == 'ymd':
            return [(_expand_year(a), b, c)]
        if a > 12:
            return [(_expand_year(c), b, a)]
        if b > 12:
            return [(_expand_year(c), a, b)]
        return [
            (_expand_year(c), a, b),  # MM/DD/YY
            (_expand_year(c), b, a),  # DD/MM/YY
            (_expand_year(a), b, c),  # YY/MM/DD
        ]

    def _match_phrase(self, text: str) -> Optional[date]:
        for m in self.phrase_re.finditer(text):
            try:
                return date_parser.parse(
                    m.group(0), parserinfo=ReceiptParserInfo(), fuzzy=True, default=PHRASE_DEFAULT
                ).date()
            except (ValueError, OverflowError) as e:
                logger.debug(f"Unparseable date phrase '{m.group(0)}': {e}")
        return None


def _expand_year(year: int) -> int:
    """Two-digit years always land in the 2000s."""
    return 2000 + year % 100 if year < 2000 else year


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _first_valid(readings: Iterable[Tuple[int, int, int]]) -> Optional[date]:
    for year, month, day in readings:
        found = _safe_date(year, month, day)
        if found:
            return found
    return None
