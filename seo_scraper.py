"""
Main SEO Scraper - single page analysis and site crawls behind one interface
"""
import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional

from async_scraper import SiteCrawler
from config import CrawlConfig, config
from content_analyzer import ContentAnalyzer
from models import CrawlResult, PageSignals
from signal_extractor import SignalExtractor

logger = logging.getLogger(__name__)


class SEOScraper:
    """Entry point for analyzing one page or crawling a site"""

    def __init__(self, extractor: SignalExtractor = None):
        self.extractor = extractor or SignalExtractor()
        self.content_analyzer = ContentAnalyzer(self.extractor, timeout=config.timeout,
                                                user_agent=config.user_agent)
        logger.info("SEO Scraper initialized successfully")

    def load(self, url: str) -> Optional[str]:
        return self.content_analyzer.load(url)

    def analyze_html(self, url: str, body: str) -> PageSignals:
        return self.content_analyzer.meta(url, body)

    def analyze_url(self, url: str) -> Optional[PageSignals]:
        return self.content_analyzer.analyze_url(url)

    async def crawl_site_async(self, url: str, options: Mapping[str, Any] = None,
                               callback: Callable[[List[CrawlResult]], None] = None,
                               client=None) -> Optional[List[CrawlResult]]:
        """Crawl a site; options may be a CrawlConfig or a mapping of crawl options"""
        crawl_config = options if isinstance(options, CrawlConfig) else CrawlConfig.from_options(options)
        crawler = SiteCrawler(crawl_config, client=client, extractor=self.extractor)
        return await crawler.crawl(url, callback)

    def crawl_site(self, url: str, options: Mapping[str, Any] = None,
                   callback: Callable[[List[CrawlResult]], None] = None) -> Optional[List[CrawlResult]]:
        """Blocking wrapper around crawl_site_async"""
        return asyncio.run(self.crawl_site_async(url, options, callback))

    def close(self):
        self.content_analyzer.close()
