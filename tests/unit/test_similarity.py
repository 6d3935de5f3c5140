import pytest

from receipt_extractor.utils.similarity import fuzzy_match, jaccard, levenshtein, similarity


def test_levenshtein_known_distances():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("abc", "") == 3
    assert levenshtein("starbucks", "starbucks") == 0


def test_levenshtein_is_symmetric():
    assert levenshtein("chevron", "chevrom") == levenshtein("chevrom", "chevron") == 1


def test_jaccard():
    assert jaccard({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)
    assert jaccard(set(), set()) == 0.0


def test_similarity_identical_strings():
    assert similarity("tim hortons", "tim hortons") == 1.0


def test_similarity_combines_tokens_edits_and_prefix_bonus():
    # jaccard 2/3, edit distance 7 over 18 chars, shared "who" prefix
    expected = 0.6 * (2 / 3) + 0.4 * (1 - 7 / 18) + 0.03
    assert similarity("whole foods market", "whole foods") == pytest.approx(expected)


def test_similarity_without_prefix_bonus():
    expected = 0.4 * (1 - levenshtein("lyft", "uber") / 4)
    assert similarity("lyft", "uber") == pytest.approx(expected)


def test_similarity_is_capped_at_one():
    assert 0.0 <= similarity("bc hydro bc", "bc hydro") <= 1.0


def test_fuzzy_match():
    assert fuzzy_match("starbucks", "starbucks")
    assert fuzzy_match("starbucks coffee", "starbucks")
    assert fuzzy_match("chevrom", "chevron")
    assert not fuzzy_match("uber", "lyft")


def test_fuzzy_match_tolerance_scales_with_length():
    # 18 chars -> up to 3 edits allowed
    assert fuzzy_match("real canadian supr", "real canadian sxyz")
    # 7 chars -> only 1 edit allowed
    assert not fuzzy_match("chevron", "chebrom")
