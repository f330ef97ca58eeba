# File: gameframe/features/attribution/data/normalizer.py
import unicodedata


def normalize(s: str) -> str:
    """
    Folds diacritics and lower-cases: "Zoë  " -> "zoe".
    Applied identically to roster names and transcript text.
    """
    if not s:
        return ""
    decomposed = unicodedata.normalize("NFKD", s)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return folded.casefold().strip()
