"""
Utility functions for error handling, URL handling and common text operations
"""
import re
import time
import logging
from typing import Optional
from urllib.parse import urldefrag, urlparse

logger = logging.getLogger(__name__)

# Characters removed from heading text before counting words
HEADING_PUNCTUATION = re.compile(r"[.,\-/#!$%^&*;:{}=_`~()]")


class SEOScraperError(Exception):
    """Base class for errors raised by the scraper"""


class ConfigurationError(SEOScraperError, ValueError):
    """Raised when a configuration value is out of range"""


class SignalExtractionError(SEOScraperError, ValueError):
    """Raised when a document lacks data a signal depends on"""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(f"{message} ({url})" if url else message)


def ensure_scheme(url: str) -> str:
    """Prefix http:// when the URL has no http(s) scheme"""
    if "http://" not in url and "https://" not in url:
        return "http://" + url
    return url


def local_host(url: str) -> str:
    """Everything after '://', or the whole URL when there is no scheme"""
    if "://" in url:
        return url.split("://", 1)[1]
    return url


def validate_url(url: str) -> bool:
    """Validate if a URL is properly formatted"""
    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except ValueError:
        return False


def strip_fragment(url: str) -> str:
    return urldefrag(url)[0]


def safe_extract_text(element, default: str = "") -> str:
    """Safely extract text from BeautifulSoup element"""
    if element is None:
        return default
    return element.get_text()


def safe_extract_attribute(element, attribute: str, default: Optional[str] = None) -> Optional[str]:
    """Safely extract a string attribute from BeautifulSoup element"""
    if element is None:
        return default
    value = element.get(attribute)
    if value is None:
        return default
    # bs4 returns multi-valued attributes (class, rel) as lists
    if isinstance(value, list):
        return " ".join(value)
    return value


def clean_heading(text: str) -> str:
    """Remove the punctuation ignored by the stuffing check"""
    return HEADING_PUNCTUATION.sub("", text)


class PerformanceMonitor:
    """Monitor and log performance metrics"""

    def __init__(self):
        self.metrics = {}

    def start_timer(self, operation: str):
        """Start timing an operation"""
        self.metrics[operation] = {'start': time.monotonic()}

    def end_timer(self, operation: str) -> float:
        """End timing and log results"""
        if operation not in self.metrics:
            return 0.0
        duration = time.monotonic() - self.metrics[operation]['start']
        self.metrics[operation]['duration'] = duration
        logger.info(f"Operation '{operation}' completed in {duration:.2f} seconds")
        return duration

    def get_metrics(self) -> dict:
        """Get all recorded metrics"""
        return {name: dict(values) for name, values in self.metrics.items()}
