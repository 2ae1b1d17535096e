"""
Extracts on-page SEO signals from a parsed HTML document
"""
import logging
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from keyword_density import KeywordDensity
from models import KeywordEntry, PageSignals
from utils import (
    SignalExtractionError, clean_heading, local_host, safe_extract_attribute, safe_extract_text,
)

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 70
MAX_DESCRIPTION_LENGTH = 155
STUFFING_THRESHOLD = 3
KEYWORD_LIMIT = 10

ANALYTICS_SCRIPTS = ("ga.js", "gtm.js", "analytics.js", "dc.js", "gas.js")


def is_stuffed(text: str, cutoff: int = STUFFING_THRESHOLD) -> bool:
    """True when any word of the text occurs at least `cutoff` times"""
    frequencies = {}
    for word in clean_heading(text).split():
        frequencies[word] = frequencies.get(word, 0) + 1
        if frequencies[word] >= cutoff:
            return True
    return False


def check_headings(soup: BeautifulSoup, tag: str) -> Tuple[bool, bool]:
    """
    Return (stuffing, no_tags) for one heading level.

    Stops at the first stuffed heading; later headings are not inspected.
    """
    no_tags = True
    for heading in soup.find_all(tag):
        no_tags = False
        if is_stuffed(heading.get_text()):
            return True, no_tags
    return False, no_tags


def classify_links(soup: BeautifulSoup, source_url: str) -> Tuple[int, int]:
    """Count unique internal and external link targets"""
    host = local_host(source_url)
    internal = set()
    external = set()

    for anchor in soup.find_all('a'):
        href = safe_extract_attribute(anchor, 'href')
        if href is None:
            continue
        if href.endswith('/'):
            href = href[:-1]

        if host in href or href == '/':
            if 'http' in href:
                internal.add(href)
        elif href.startswith('#'):
            continue
        elif href:
            external.add(href)

    return len(internal), len(external)


def count_images(soup: BeautifulSoup) -> Tuple[int, int]:
    """Return (total, with non-empty alt) image counts"""
    total = 0
    accessible = 0
    for img in soup.find_all('img'):
        total += 1
        if img.get('alt'):
            accessible += 1
    return total, accessible


def has_analytics(soup: BeautifulSoup) -> bool:
    enabled = False
    for script in soup.find_all('script', src=True):
        src = safe_extract_attribute(script, 'src', '')
        for fragment in ANALYTICS_SCRIPTS:
            if fragment in src:
                logger.debug(f"Analytics script found: {src}")
                enabled = True
    return enabled


def has_open_graph(soup: BeautifulSoup) -> bool:
    for meta in soup.find_all('meta', attrs={'property': True}):
        if 'og:' in safe_extract_attribute(meta, 'property', ''):
            return True
    return False


class SignalExtractor:
    """Builds a PageSignals record from a parsed document"""

    def __init__(self, density: Optional[KeywordDensity] = None,
                 keyword_limit: int = KEYWORD_LIMIT):
        self.density = density or KeywordDensity()
        self.keyword_limit = keyword_limit

    def extract(self, soup: BeautifulSoup, source_url: str) -> PageSignals:
        title = self._extract_title(soup)
        description = self._extract_meta(soup, 'description')

        h1_stuffing, no_h1_tags = check_headings(soup, 'h1')
        h2_stuffing, no_h2_tags = check_headings(soup, 'h2')

        total_images, accessible_images = count_images(soup)
        internal_links, external_links = classify_links(soup, source_url)

        keyword_density = self._keyword_density(soup, title, description, source_url)

        return PageSignals(
            title=title,
            excessive_title=len(title) > MAX_TITLE_LENGTH if title is not None else None,
            description=description,
            excessive_desc=(
                len(description) > MAX_DESCRIPTION_LENGTH if description is not None else None
            ),
            author=self._extract_meta(soup, 'author'),
            keywords=self._extract_meta(soup, 'keywords'),
            h1_stuffing=h1_stuffing,
            no_h1_tags=no_h1_tags,
            h2_stuffing=h2_stuffing,
            no_h2_tags=no_h2_tags,
            alt_tags_present=accessible_images == total_images,
            internal_links=internal_links,
            external_links=external_links,
            analytics_enabled=has_analytics(soup),
            keyword_density=tuple(keyword_density),
            og_tags_present=has_open_graph(soup),
        )

    def extract_html(self, body: str, source_url: str) -> PageSignals:
        """Parse an HTML body and extract its signals"""
        return self.extract(BeautifulSoup(body, 'html.parser'), source_url)

    def _extract_title(self, soup) -> Optional[str]:
        title = ''.join(safe_extract_text(element) for element in soup.find_all('title'))
        return title or None

    def _extract_meta(self, soup, name: str) -> Optional[str]:
        meta = soup.find('meta', attrs={'name': name})
        return safe_extract_attribute(meta, 'content') or None

    def _keyword_density(self, soup, title: Optional[str], description: Optional[str],
                         source_url: str) -> List[KeywordEntry]:
        ranked = self.density.rank(soup.get_text(' '))[:self.keyword_limit]
        if not ranked:
            return []

        if title is None:
            raise SignalExtractionError("Cannot annotate keyword density without a title", source_url)
        if description is None:
            raise SignalExtractionError(
                "Cannot annotate keyword density without a meta description", source_url
            )

        return [
            KeywordEntry(
                word=word,
                frequency=frequency,
                in_title=word in title,
                in_desc=word in description,
            )
            for word, frequency in ranked
        ]
