import pytest

from receipt_extractor.categorization import Categorizer
from receipt_extractor.models import ExpenseCategory
from receipt_extractor.storage import InMemoryOverrideStore


def test_exact_merchant_with_drink_keywords(categorizer):
    suggestion = categorizer.suggest_category("Starbucks", "LATTE 4.50")
    assert suggestion.category == ExpenseCategory.COFFEE
    assert suggestion.confidence == 10
    assert suggestion.strength == "strong"


def test_fuzzy_merchant_scores_seven(categorizer):
    suggestion = categorizer.suggest_category("Chevrom", "")
    assert suggestion.category == ExpenseCategory.FUEL
    assert suggestion.confidence == 7


def test_cue_word_alone_reaches_threshold(categorizer):
    """A single merchant cue scores exactly the threshold of 4."""
    suggestion = categorizer.suggest_category("Bistro", "")
    assert suggestion.category == ExpenseCategory.DINING
    assert suggestion.confidence == 4
    assert suggestion.strength == "medium"


def test_below_threshold_falls_back_to_other(categorizer):
    # Two weighed lines give groceries 3 points, one short of the threshold
    suggestion = categorizer.suggest_category(None, "apples 1 kg\npears 2 kg")
    assert suggestion.category == ExpenseCategory.OTHER
    assert suggestion.confidence == 3
    assert suggestion.strength == "low"


def test_nothing_matches(categorizer):
    suggestion = categorizer.suggest_category("", "")
    assert suggestion.category == ExpenseCategory.OTHER
    assert suggestion.confidence == 0


def test_exact_tie_goes_to_earlier_category(categorizer):
    # dining: tip keyword + tip cue = 6, travel: boarding keyword + cue = 6
    for text in ("tip boarding", "boarding tip"):
        assert categorizer.suggest_category(None, text).category == ExpenseCategory.DINING


def test_travel_brand_bonus(categorizer):
    suggestion = categorizer.suggest_category("Air Canada", "")
    assert suggestion.category == ExpenseCategory.TRAVEL
    assert suggestion.confidence == 10


def test_fuel_units_beat_ride_words(categorizer):
    text = "Pump 4\nUnleaded 38.5 litre\nTrip meter reset"
    suggestion = categorizer.suggest_category(None, text)
    assert suggestion.category == ExpenseCategory.FUEL


def test_billing_statement_is_utilities(categorizer):
    text = "Statement\nBilling period: Jan 1 - Jan 31\nUsage 450 kwh"
    assert categorizer.suggest_category(None, text).category == ExpenseCategory.UTILITIES


def test_override_short_circuits_scoring(categorizer, category_store):
    categorizer.remember("Starbucks", ExpenseCategory.PERSONAL)

    suggestion = categorizer.suggest_category("STARBUCKS STORE 4521", "LATTE 4.50")
    assert suggestion.category == ExpenseCategory.PERSONAL
    assert suggestion.confidence == 10
    assert category_store.load() == {"starbucks": "personal"}


def test_remember_accepts_string_tags(categorizer):
    categorizer.remember("Joe's Diner", "dining")
    assert categorizer.overrides == {"joe s diner": ExpenseCategory.DINING}
    assert categorizer.suggest_category("JOE'S DINER", "").category == ExpenseCategory.DINING


def test_remember_rejects_unknown_tag(categorizer, category_store):
    with pytest.raises(ValueError):
        categorizer.remember("Joe's Diner", "snacks")
    assert category_store.save_count == 0


def test_remember_ignores_empty_merchant(categorizer, category_store):
    categorizer.remember("   ", ExpenseCategory.DINING)
    assert category_store.save_count == 0


def test_malformed_overrides_are_ignored():
    store = InMemoryOverrideStore({"starbucks": "snacks"})
    categorizer = Categorizer(store=store)
    assert categorizer.overrides == {}
    assert categorizer.suggest_category("Starbucks", "").category == ExpenseCategory.COFFEE


def test_loaded_overrides_are_enum_values():
    store = InMemoryOverrideStore({"corner shop": "groceries"})
    categorizer = Categorizer(store=store)
    assert categorizer.suggest_category("Corner Shop", "").category == ExpenseCategory.GROCERIES


def test_custom_merchant_seeds():
    categorizer = Categorizer(merchant_seeds={ExpenseCategory.HOUSING: frozenset({"acme rentals"})})
    suggestion = categorizer.suggest_category("ACME RENTALS", "")
    assert suggestion.category == ExpenseCategory.HOUSING
    assert suggestion.confidence == 10


def test_category_display_names():
    assert ExpenseCategory.GROCERIES.display_name == "Groceries"
    assert [c.value for c in ExpenseCategory][:3] == ["groceries", "coffee", "dining"]
