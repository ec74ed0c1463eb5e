"""
Tests for the string similarity scorer.
"""
import pytest

from storefront.search.similarity import score


def test_equal_after_lowercase_and_trim():
    assert score("Nivea", "  nivea ") == 1.0
    assert score("", "") == 1.0


def test_substring_in_either_direction():
    assert score("Lissage Brésilien", "lissage") == 0.8
    assert score("lissage", "Lissage Brésilien") == 0.8


def test_no_normalization_of_punctuation():
    assert score("l'oreal paris", "loreal") == 0.0


def test_no_normalization_of_accents():
    assert score("crème", "creme") == 0.0


def test_common_words_ratio_uses_longest_word_list():
    # "visage" is shared; 1 common word out of max(3, 2)
    assert score("creme hydratante visage", "visage nuit") == pytest.approx(0.3 + (1 / 3) * 0.4)


def test_common_words_match_by_containment():
    # "shampooing" contains "shampoo"
    assert score("shampooing doux", "shampoo sec") == pytest.approx(0.5)


def test_common_words_score_is_capped():
    assert score("huile argan bio", "bio argan huile") == pytest.approx(0.7)


def test_unrelated_strings_score_zero():
    assert score("masque cheveux", "parfum") == 0.0


def test_none_is_treated_as_empty():
    assert score(None, "") == 1.0
