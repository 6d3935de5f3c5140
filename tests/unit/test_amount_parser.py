import pytest
from decimal import Decimal

from receipt_extractor.parsers import AmountParser, format_amount


@pytest.fixture
def parser():
    return AmountParser()


def test_total_line_wins(parser):
    text = "Subtotal 10.00\nTax 1.00\nTotal 11.00"
    assert parser.extract_amount(text) == "11.00"


def test_window_after_bare_total_label(parser):
    """Card slips often print the total a line or two below the label."""
    lines = ["TOTAL", "VISA 24.50", "CHANGE 0.00"]
    assert parser.extract_amount(lines) == "24.50"


def test_thousands_separator_and_dollar_sign(parser):
    assert parser.extract_amount(["Grand Total $1,234.56"]) == "1234.56"


def test_amount_due_keyword(parser):
    lines = ["Service fee 12.00", "Amount Due 14.70", "Thank you"]
    assert parser.extract_amount(lines) == "14.70"


def test_parenthesized_amounts_are_penalized_without_total(parser):
    assert parser.extract_amount(["Coupon (5.00)", "Paid 3.00"]) == "3.00"


def test_refund_receipts_keep_parenthesized_amounts(parser):
    assert parser.extract_amount(["Refund (5.00)", "Fee 3.00"]) == "5.00"


def test_later_lines_score_higher(parser):
    lines = ["Paid 9.00"] + ["-"] * 9 + ["Paid 2.00"]
    assert parser.extract_amount(lines) == "2.00"


def test_score_candidates(parser):
    candidates = parser.score_candidates(["Total (5.00)", "Total 5.00"])
    assert [c.score for c in candidates] == [3, 13]
    assert [c.line_index for c in candidates] == [0, 1]
    assert candidates[1].value == Decimal("5.00")


def test_neighbor_keyword_points(parser):
    candidates = parser.score_candidates(["Total", "12.00"])
    assert len(candidates) == 1
    assert candidates[0].score == 5


@pytest.mark.parametrize("lines", [["Hello", "World"], [""], "", ["Total 4.5"]])
def test_no_money_tokens(parser, lines):
    assert parser.extract_amount(lines) is None


def test_format_amount():
    assert format_amount(Decimal("4.9")) == "4.90"
    assert format_amount(Decimal("1234.5")) == "1234.50"
