"""
Tests for keyword density ranking
"""
from keyword_density import KeywordDensity, STOP_WORDS


class TestKeywordDensity:
    """Tests for KeywordDensity class"""

    def test_rank_orders_by_frequency(self):
        ranked = KeywordDensity().rank("seo tools seo guide seo tools")
        assert ranked == [("seo", 3), ("tools", 2), ("guide", 1)]

    def test_ties_keep_first_appearance_order(self):
        ranked = KeywordDensity().rank("zebra apple zebra apple")
        assert ranked == [("zebra", 2), ("apple", 2)]

    def test_words_are_lowercased(self):
        assert KeywordDensity().rank("Python PYTHON python") == [("python", 3)]

    def test_stop_words_are_dropped(self):
        ranked = KeywordDensity().rank("the cat and the hat")
        assert "the" in STOP_WORDS
        assert [word for word, _ in ranked] == ["cat", "hat"]

    def test_short_words_and_numbers_are_dropped(self):
        ranked = KeywordDensity().rank("x 2024 y seo")
        assert ranked == [("seo", 1)]

    def test_hyphenated_words_stay_together(self):
        ranked = KeywordDensity().rank("on-page on-page seo")
        assert ranked[0] == ("on-page", 2)

    def test_limit(self):
        ranked = KeywordDensity().rank("alpha beta gamma delta", limit=2)
        assert len(ranked) == 2

    def test_empty_text(self):
        assert KeywordDensity().rank("") == []

    def test_custom_stop_words(self):
        density = KeywordDensity(stop_words=["seo"])
        assert density.rank("seo audit") == [("audit", 1)]
