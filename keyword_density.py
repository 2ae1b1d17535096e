"""
Keyword density ranking for page text
"""
import re
import logging
from collections import Counter
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"[^\W\d_]+(?:['\-][^\W\d_]+)*")

STOP_WORDS = frozenset("""
a about above after again against all am an and any are as at be because been
before being below between both but by can could did do does doing down during
each few for from further had has have having he her here hers herself him
himself his how i if in into is it its itself just me more most my myself no nor
not now of off on once only or other our ours ourselves out over own same she
should so some such than that the their theirs them themselves then there these
they this those through to too under until up very was we were what when where
which while who whom why will with would you your yours yourself yourselves
""".split())


class KeywordDensity:
    """Ranks the words of a text by how often they occur"""

    def __init__(self, stop_words: Optional[Iterable[str]] = None, min_length: int = 2):
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS
        self.min_length = min_length

    def tokenize(self, text: str) -> List[str]:
        words = WORD_PATTERN.findall(text.lower())
        return [
            word for word in words
            if len(word) >= self.min_length and word not in self.stop_words
        ]

    def rank(self, text: str, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """
        Rank words by descending frequency.

        Ties keep the order in which the words first appear in the text.
        """
        if not text:
            return []
        counts = Counter(self.tokenize(text))
        ranked = counts.most_common(limit)
        logger.debug(f"Ranked {len(counts)} distinct words")
        return ranked
