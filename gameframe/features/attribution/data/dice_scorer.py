# File: gameframe/features/attribution/data/dice_scorer.py
from collections import Counter

from ..domain.interfaces import ISimilarityScorer


def _bigrams(s: str) -> Counter:
    return Counter(s[i:i + 2] for i in range(len(s) - 1))


def similarity(a: str, b: str) -> float:
    """
    Dice coefficient over the multisets of character bigrams:
    2 * |bigrams(a) & bigrams(b)| / (|bigrams(a)| + |bigrams(b)|)

    Strings shorter than two characters only score on exact equality.
    Empty strings never match.
    """
    if not a or not b:
        return 0.0
    if len(a) < 2 or len(b) < 2:
        return 1.0 if a == b else 0.0

    grams_a = _bigrams(a)
    grams_b = _bigrams(b)
    overlap = sum((grams_a & grams_b).values())
    total = sum(grams_a.values()) + sum(grams_b.values())
    return 2.0 * overlap / total


class DiceBigramScorer(ISimilarityScorer):
    """Offline, deterministic scorer. The default for the attribution matcher."""

    def similarity(self, a: str, b: str) -> float:
        return similarity(a, b)
