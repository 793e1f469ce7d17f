"""Tests for the pure scorers: Jaccard, character n-gram and Levenshtein."""

import math

import pytest

from docsim.similarity import (
    char_ngrams,
    jaccard_similarity,
    levenshtein_distance,
    levenshtein_similarity,
    ngram_similarity,
)


PAIRS = [
    ("hello world", "hello there world"),
    ("The Quick brown fox", "the quick BROWN dog"),
    ("abc", ""),
    ("", ""),
    ("kitten", "sitting"),
    ("a  b\tc", "c b a"),
    ("日本語のテキスト", "日本語テキスト"),
]


class TestJaccard:
    def test_partial_overlap(self):
        # {hello, world} vs {hello, there, world}: 2 / 3
        assert jaccard_similarity("hello world", "hello there world") == pytest.approx(200 / 3)

    def test_case_insensitive(self):
        assert jaccard_similarity("Hello World", "hello world") == 100.0

    def test_token_order_and_repeats_ignored(self):
        assert jaccard_similarity("a b c", "c b a a a") == 100.0

    def test_no_tokens_scores_zero(self):
        assert jaccard_similarity("", "") == 0.0
        assert jaccard_similarity("   \n\t", "  ") == 0.0

    def test_one_side_empty(self):
        assert jaccard_similarity("hello", "") == 0.0

    def test_disjoint(self):
        assert jaccard_similarity("apple banana", "cherry grape") == 0.0


class TestNgram:
    def test_shingles(self):
        assert char_ngrams("abcd", 3) == {"abc", "bcd"}

    def test_whitespace_and_case_normalized(self):
        assert char_ngrams("A  b\tC", 3) == char_ngrams("a b c", 3)
        assert ngram_similarity("a  b\tc", "A B C") == 100.0

    def test_text_shorter_than_window_is_one_shingle(self):
        assert char_ngrams("ab", 3) == {"ab"}
        assert ngram_similarity("ab", "ab") == 100.0
        assert ngram_similarity("ab", "abc") == 0.0

    def test_empty_is_one_shingle(self):
        assert char_ngrams("", 3) == {""}
        assert char_ngrams("   ", 3) == {""}
        assert ngram_similarity("", "") == 100.0
        assert ngram_similarity("", "abc") == 0.0

    def test_partial_overlap(self):
        # {abc, bcd} vs {abc, bce}
        assert ngram_similarity("abcd", "abce") == pytest.approx(100 / 3)

    def test_custom_size(self):
        # {ab, bc} vs {ab, bd}
        assert ngram_similarity("abc", "abd", n=2) == pytest.approx(100 / 3)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            char_ngrams("abc", 0)


class TestLevenshteinDistance:
    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("kitten", "sitting", 3),
            ("saturday", "sunday", 3),
            ("", "abc", 3),
            ("abc", "", 3),
            ("abc", "abc", 0),
            ("", "", 0),
            ("café", "cafe", 1),
            ("日本語", "日本", 1),
        ],
    )
    def test_known_distances(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected
        assert levenshtein_distance(b, a) == expected

    def test_early_termination_returns_bound_plus_one(self):
        assert levenshtein_distance("abcdef", "ghijkl") == 6
        assert levenshtein_distance("abcdef", "ghijkl", max_distance=3) == 4

    def test_within_bound_returns_exact_distance(self):
        assert levenshtein_distance("abc", "abd", max_distance=2) == 1
        assert levenshtein_distance("kitten", "sitting", max_distance=3) == 3

    def test_long_against_short(self):
        long_text = "x" * 500 + "abc"
        assert levenshtein_distance("abc", long_text) == 500
        assert levenshtein_distance(long_text, "abc") == 500


class TestLevenshteinSimilarity:
    def test_one_edit_in_five(self):
        assert levenshtein_similarity("hello", "hallo") == pytest.approx(80.0)

    def test_completely_different(self):
        assert levenshtein_similarity("aaaa", "zzzz") == 0.0

    def test_both_empty_is_identical(self):
        assert levenshtein_similarity("", "") == 100.0

    def test_one_empty(self):
        assert levenshtein_similarity("abc", "") == 0.0

    def test_threshold_reachable_keeps_exact_score(self):
        # distance 3 of 6 -> 50%
        assert levenshtein_similarity("abcdef", "abcxyz", threshold=50.0) == pytest.approx(50.0)

    def test_threshold_out_of_reach_reports_zero(self):
        assert levenshtein_similarity("abcdef", "abcxyz") == pytest.approx(50.0)
        assert levenshtein_similarity("abcdef", "abcxyz", threshold=51.0) == 0.0

    @pytest.mark.parametrize("threshold", [0.0, 10.0, 30.0, 70.0, 90.0])
    def test_bound_never_hides_a_qualifying_score(self, threshold):
        pairs = [("kitten", "sitting"), ("hello", "hallo"), ("abcdefghij", "abcdefgxyz")]
        for a, b in pairs:
            exact = levenshtein_similarity(a, b)
            bounded = levenshtein_similarity(a, b, threshold=threshold)
            if exact >= threshold:
                assert bounded == pytest.approx(exact)
            else:
                assert bounded < threshold


class TestScorerProperties:
    @pytest.mark.parametrize("a, b", PAIRS)
    def test_symmetry(self, a, b):
        assert jaccard_similarity(a, b) == jaccard_similarity(b, a)
        assert ngram_similarity(a, b) == ngram_similarity(b, a)
        assert levenshtein_similarity(a, b) == levenshtein_similarity(b, a)

    @pytest.mark.parametrize("text", ["the quick brown fox", "a", "日本語", "x y z " * 50])
    def test_identity(self, text):
        assert jaccard_similarity(text, text) == 100.0
        assert ngram_similarity(text, text) == 100.0
        assert levenshtein_similarity(text, text) == 100.0

    def test_identity_empty(self):
        assert ngram_similarity("", "") == 100.0
        assert levenshtein_similarity("", "") == 100.0
        # word sets of empty texts are empty, which scores 0
        assert jaccard_similarity("", "") == 0.0

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_range(self, a, b):
        for score in (jaccard_similarity(a, b), ngram_similarity(a, b), levenshtein_similarity(a, b)):
            assert not math.isnan(score)
            assert 0.0 <= score <= 100.0
