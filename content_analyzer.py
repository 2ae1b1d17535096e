"""
Single page analysis: fetch one URL and extract its SEO signals
"""
import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from config import config
from models import PageSignals
from signal_extractor import SignalExtractor
from utils import ensure_scheme

logger = logging.getLogger(__name__)


class ContentAnalyzer:
    """Loads single pages and runs the signal extractor over them"""

    def __init__(self, extractor: SignalExtractor = None, timeout: float = None,
                 user_agent: str = None):
        self.extractor = extractor or SignalExtractor()
        self.timeout = timeout or config.timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent or config.user_agent
        })

    def load(self, url: str) -> Optional[str]:
        """
        Load the HTML of a single URL.

        The URL gets an http:// prefix when it has no scheme and is lower-cased
        before the request. Returns the response body, or None when the request
        fails or the status is not 200.
        """
        url = ensure_scheme(url).lower()
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error(f"Timeout error for {url}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            return None

        if response.status_code != 200:
            logger.warning(f"HTTP {response.status_code} for {url}")
            return None

        logger.debug(f"Successfully fetched {url}")
        return response.text

    def meta(self, url: str, body: str) -> PageSignals:
        """Extract the SEO signals of an already loaded page"""
        soup = BeautifulSoup(body, 'html.parser')
        return self.extractor.extract(soup, url)

    def analyze_url(self, url: str) -> Optional[PageSignals]:
        """Load a URL and extract its signals, None if the page could not be loaded"""
        logger.info(f"Analyzing content: {url}")
        body = self.load(url)
        if body is None:
            return None

        signals = self.meta(url, body)
        logger.info(
            f"Analyzed {url}: {signals.internal_links} internal links, "
            f"{signals.external_links} external links"
        )
        return signals

    def close(self):
        self.session.close()
