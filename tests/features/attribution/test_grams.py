from gameframe.features.attribution.data.grams import tokenize, ngrams


def test_tokenize_splits_on_whitespace_and_punctuation():
    assert tokenize("Great shot, Alice!") == ["great", "shot", "alice"]
    assert tokenize("someone-else\tnow\n") == ["someone", "else", "now"]


def test_tokenize_drops_empty_tokens():
    assert tokenize("") == []
    assert tokenize("  ... !!  ") == []


def test_ngrams_exact_order():
    """Window length first, then start offset."""
    assert ngrams(["a", "b", "c"], 3) == ["a", "b", "c", "a b", "b c", "a b c"]


def test_ngrams_window_longer_than_tokens():
    assert ngrams(["a", "b"], 3) == ["a", "b", "a b"]


def test_ngrams_empty_tokens():
    assert ngrams([], 3) == []


def test_ngrams_is_deterministic():
    tokens = tokenize("nice pass to bob on the wing")
    assert ngrams(tokens, 3) == ngrams(tokens, 3)
    # 7 unigrams + 6 bigrams + 5 trigrams
    assert len(ngrams(tokens, 3)) == 18
