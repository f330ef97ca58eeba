from gameframe.features.attribution.data.normalizer import normalize
from gameframe.features.attribution.data.grams import normalize_name


def test_normalize_folds_case_and_diacritics():
    assert normalize("Zoë") == "zoe"
    assert normalize("JOSÉ") == "jose"
    assert normalize("  Çelik ") == "celik"


def test_normalize_is_symmetric_for_names_and_speech():
    """A roster spelling and a plain transcription end up identical."""
    assert normalize("Renée") == normalize("renee")


def test_normalize_empty():
    assert normalize("") == ""
    assert normalize(None) == ""


def test_normalize_name_splits_punctuation():
    assert normalize_name("O'Brien") == "o brien"
    assert normalize_name("Jean-Luc") == "jean luc"
    assert normalize_name("   ") == ""
