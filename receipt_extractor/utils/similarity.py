"""
String similarity primitives shared by the merchant lexicon and the categorizer.
"""

from typing import AbstractSet, Set

PREFIX_BONUS = 0.03
JACCARD_WEIGHT = 0.6
EDIT_WEIGHT = 0.4


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance using two rolling rows of length len(b) + 1."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    curr = [0] * (len(b) + 1)
    for i, ca in enumerate(a, start=1):
        curr[0] = i
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            curr[j] = min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost)
        prev, curr = curr, prev
    return prev[len(b)]


def tokenize(text: str) -> Set[str]:
    return set(text.split())


def jaccard(a_tokens: AbstractSet[str], b_tokens: AbstractSet[str]) -> float:
    union = a_tokens | b_tokens
    if not union:
        return 0.0
    return len(a_tokens & b_tokens) / len(union)


def similarity(a: str, b: str) -> float:
    """
    Combined token-overlap and edit-distance similarity in [0, 1].

    0.6 * token Jaccard + 0.4 * normalized edit similarity, plus a small
    bonus when the first tokens share a 3-character prefix.
    """
    if a == b:
        return 1.0

    token_score = jaccard(tokenize(a), tokenize(b))
    distance = levenshtein(a, b)
    edit_score = 1.0 - distance / max(1, max(len(a), len(b)))

    score = JACCARD_WEIGHT * token_score + EDIT_WEIGHT * edit_score

    a_words, b_words = a.split(), b.split()
    if a_words and b_words and a_words[0][:3] == b_words[0][:3]:
        score += PREFIX_BONUS
    return min(score, 1.0)


def fuzzy_match(a: str, b: str) -> bool:
    """Cheap fuzzy equality: substring containment or a length-scaled edit budget (max 3)."""
    if a == b:
        return True
    if a in b or b in a:
        return True
    limit = max(1, min(3, max(len(a), len(b)) // 6))
    return levenshtein(a, b) <= limit
