# File: gameframe/features/attribution/data/grams.py
import re
from typing import List

from .normalizer import normalize

# Whitespace, punctuation and underscores all separate tokens
_SEPARATORS = re.compile(r"[\W_]+", re.UNICODE)


def tokenize(text: str) -> List[str]:
    """Normalizes text and splits it into non-empty tokens."""
    return [tok for tok in _SEPARATORS.split(normalize(text)) if tok]


def ngrams(tokens: List[str], max_n: int) -> List[str]:
    """
    Sliding-window phrases of 1..max_n tokens.

    Ordered by window length, then start offset:
    ["a", "b", "c"], 3 -> ["a", "b", "c", "a b", "b c", "a b c"]
    """
    grams: List[str] = []
    for n in range(1, max_n + 1):
        if n > len(tokens):
            break
        for start in range(len(tokens) - n + 1):
            grams.append(" ".join(tokens[start:start + n]))
    return grams


def normalize_name(name: str) -> str:
    """
    Brings a roster name into gram form so "O'Brien" compares against "o brien".
    """
    return " ".join(tokenize(name))
