"""Fuzzy string scoring for typo-tolerant component lookup.

Scores are integers in 0..100:
    100  exact (case-insensitive)
     90  candidate starts with query
     80  candidate contains query
  60/50  whole-string edit distance 1/2 (longer string > 3 chars)
  0..65  word-level matches, 20/15/10 per exact/dist-1/dist-2 word pair
"""

from __future__ import annotations

EXACT_SCORE = 100
PREFIX_SCORE = 90
SUBSTRING_SCORE = 80
WORD_SCORE_CAP = 65

# Scores at or above this count as a match in ranked search
ACCEPT_FLOOR = 40
# Scores at or above this are worth offering as "did you mean"
SUGGEST_FLOOR = 30


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute costs.

    Full O(len(a) * len(b)) table, kept as two rolling rows.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current[j] = min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous = current
    return previous[-1]


def fuzzy_score(query: str, candidate: str) -> int:
    """Score how well candidate matches query (not symmetric)."""
    q = query.lower()
    c = candidate.lower()

    if q == c:
        return EXACT_SCORE
    if c.startswith(q):
        return PREFIX_SCORE
    if q in c:
        return SUBSTRING_SCORE

    distance = levenshtein(q, c)
    if distance <= 2 and max(len(q), len(c)) > 3:
        return 70 - distance * 10

    total = 0
    for q_word in q.split():
        for c_word in c.split():
            d = levenshtein(q_word, c_word)
            if d == 0:
                total += 20
            elif d == 1 and len(q_word) > 3:
                total += 15
            elif d == 2 and len(q_word) > 5:
                total += 10
    return min(total, WORD_SCORE_CAP)
