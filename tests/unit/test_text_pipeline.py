"""
Unit tests for normalization, stopwords, vocabulary and the text analyzer.
"""

import pytest

from issue_similarity.cache.token_cache import BoundedCache
from issue_similarity.text.analyzer import TextAnalyzer
from issue_similarity.text.normalizer import normalize
from issue_similarity.text.stemmer import stem_word
from issue_similarity.text.stopwords import STOPWORDS, filter_stopwords
from issue_similarity.text.vocabulary import Vocabulary
from issue_similarity.version import NORMALIZER_VERSION, STEMMER_VERSION, STOPLIST_VERSION


# ============================================================================
# Test Class: Normalize
# ============================================================================


@pytest.mark.unit
class TestNormalize:
    """Tests for normalize function."""

    def test_lowercase_and_tokenize(self):
        assert normalize("Login button not responding") == [
            "login", "button", "not", "unresponsive"
        ]

    def test_punctuation_becomes_separator(self):
        assert normalize("Sign-in failed!!") == ["login", "failure"]

    def test_short_tokens_dropped(self):
        assert normalize("a an the UI") == ["the"]

    def test_numbers_kept(self):
        assert normalize("HTTP 500 on v2 api") == ["http", "500", "api"]

    @pytest.mark.parametrize("variant,canonical", [
        ("signin", "login"),
        ("auth", "login"),
        ("sign", "login"),
        ("fail", "failure"),
        ("fails", "failure"),
        ("failed", "failure"),
        ("bug", "failure"),
        ("glitch", "failure"),
        ("crash", "failure"),
        ("latency", "performance"),
        ("lag", "performance"),
        ("slow", "performance"),
        ("screen", "ui"),
        ("view", "ui"),
        ("modal", "ui"),
    ])
    def test_synonyms(self, variant, canonical):
        assert normalize(variant) == [canonical]

    def test_unmapped_tokens_pass_through(self):
        assert normalize("dashboard widgets") == ["dashboard", "widgets"]

    def test_custom_synonyms(self):
        assert normalize("kaput widget", synonyms={"kaput": "broken"}) == ["broken", "widget"]

    def test_empty_and_none(self):
        assert normalize("") == []
        assert normalize(None) == []

    def test_only_punctuation(self):
        assert normalize("!!! ??? ...") == []

    def test_non_ascii_stripped(self):
        assert normalize("café crème") == ["caf"]


# ============================================================================
# Test Class: Stopwords
# ============================================================================


@pytest.mark.unit
class TestStopwords:
    """Tests for the stopword list and filter."""

    def test_list_is_large_enough(self):
        assert len(STOPWORDS) >= 100

    @pytest.mark.parametrize("word", ["issue", "bug", "error", "page", "button", "the", "with"])
    def test_domain_noise_and_function_words_present(self, word):
        assert word in STOPWORDS

    def test_filter_preserves_order(self):
        tokens = ["login", "button", "respond", "the", "api"]
        assert filter_stopwords(tokens, STOPWORDS) == ["login", "respond", "api"]

    def test_filter_empty(self):
        assert filter_stopwords([], STOPWORDS) == []


# ============================================================================
# Test Class: Vocabulary
# ============================================================================


@pytest.mark.unit
class TestVocabulary:
    """Tests for the immutable lexical tables."""

    @pytest.fixture
    def vocabulary(self):
        return Vocabulary.build(stem_word)

    def test_stemmed_stopwords_include_stems(self, vocabulary):
        assert "issu" in vocabulary.stemmed_stopwords
        assert "issue" in vocabulary.stemmed_stopwords
        assert "doe" in vocabulary.stemmed_stopwords

    def test_action_verbs_are_canonical_stems(self, vocabulary):
        # fail and crash both canonicalize to "failure"
        assert "failur" in vocabulary.stemmed_action_verbs
        assert "timeout" in vocabulary.stemmed_action_verbs
        assert "unrespons" in vocabulary.stemmed_action_verbs

    def test_object_terms_keyed_by_stem(self, vocabulary):
        assert vocabulary.stemmed_objects["login"] == "login"
        assert vocabulary.stemmed_objects["upload"] == "upload"
        assert vocabulary.stemmed_objects["invoic"] == "invoice"

    def test_tables_are_read_only(self, vocabulary):
        with pytest.raises(TypeError):
            vocabulary.synonyms["new"] = "old"

    def test_frozen(self, vocabulary):
        with pytest.raises(AttributeError):
            vocabulary.stopwords = frozenset()


# ============================================================================
# Test Class: TextAnalyzer
# ============================================================================


@pytest.mark.unit
class TestTextAnalyzer:
    """Tests for the normalize → stem → filter pipeline."""

    def test_token_sequence(self, analyzer):
        assert analyzer.tokens("Login button not responding") == ("login", "unrespons")

    def test_canonicalized_phrasing_matches(self, analyzer):
        assert analyzer.tokens("Sign in button unresponsive") == ("login", "unrespons")

    def test_versions(self, analyzer):
        assert analyzer.versions == {
            "normalizer": NORMALIZER_VERSION,
            "stemmer": STEMMER_VERSION,
            "stoplist": STOPLIST_VERSION,
        }

    def test_stems_keep_stopwords(self, analyzer):
        analyzed = analyzer.analyze("Login button not responding")
        assert analyzed.stems == ("login", "button", "not", "unrespons")

    def test_display_uses_normalized_word(self, analyzer):
        analyzed = analyzer.analyze("Uploads failing")
        assert analyzed.display("upload") == "uploads"
        assert analyzed.display("unknown") == "unknown"

    def test_empty_text(self, analyzer):
        analyzed = analyzer.analyze(None)
        assert analyzed.tokens == ()
        assert analyzed.stems == ()

    def test_result_cached_per_text(self, analyzer):
        first = analyzer.analyze("Payment page times out")
        second = analyzer.analyze("Payment page times out")
        assert first is second

    def test_clear_cache_recomputes_equal(self, analyzer):
        first = analyzer.analyze("Payment page times out")
        analyzer.clear_cache()
        second = analyzer.analyze("Payment page times out")
        assert first is not second
        assert first == second

    def test_bounded_sequence_cache(self, stemmer):
        analyzer = TextAnalyzer(stemmer=stemmer, cache=BoundedCache(max_size=2))
        for text in ["one login", "two logins", "three uploads"]:
            analyzer.analyze(text)
        assert len(analyzer.cache) == 2
