"""
Async fetching and bounded site crawling
"""
import re
import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Set, Tuple
from urllib.parse import ParseResult, urljoin, urlparse

import aiohttp
from bs4 import BeautifulSoup

from config import CrawlConfig
from models import CrawlResult, CrawlState
from monitoring import CrawlMetrics
from signal_extractor import SignalExtractor
from utils import (
    ConfigurationError, SEOScraperError, SignalExtractionError, ensure_scheme, strip_fragment,
)

logger = logging.getLogger(__name__)

NON_HTML_PATH = re.compile(r"\.(jpg|jpeg|png|gif|js|txt|css|pdf)$", re.IGNORECASE)

FetchCondition = Callable[[ParseResult], bool]


def html_only_condition(parsed_url: ParseResult) -> bool:
    """Reject paths that point at images, scripts, stylesheets and documents"""
    return not NON_HTML_PATH.search(parsed_url.path)


def is_supported_content_type(content_type: str) -> bool:
    """Content types whose bodies can be parsed for links"""
    content_type = (content_type or "").lower()
    return content_type.startswith("text/") or "html" in content_type or "xml" in content_type


class AsyncHTTPClient:
    """Async HTTP client returning page bodies, or None for any failure"""

    def __init__(self, crawl_config: CrawlConfig = None):
        self.crawl_config = crawl_config or CrawlConfig()
        self.session = None

    async def __aenter__(self):
        connector = aiohttp.TCPConnector(limit=self.crawl_config.max_concurrency)
        timeout = aiohttp.ClientTimeout(total=self.crawl_config.timeout_seconds)

        self.session = aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers={
                'User-Agent': self.crawl_config.user_agent,
                'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            }
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def fetch(self, url: str) -> Optional[str]:
        """GET a URL, returning the body only for a 200 response"""
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    logger.debug(f"HTTP {response.status} for {url}")
                    return None
                if (not self.crawl_config.download_unsupported
                        and not is_supported_content_type(response.content_type)):
                    logger.debug(f"Skipping unsupported content type {response.content_type} for {url}")
                    return None
                return await response.text(errors='replace')
        except asyncio.TimeoutError:
            logger.debug(f"Timeout for {url}")
            return None
        except aiohttp.ClientError as e:
            logger.debug(f"Request error for {url}: {e}")
            return None


@dataclass(frozen=True)
class FetchCompletion:
    """Outcome of one fetch; body is None when the fetch failed"""
    url: str
    depth: int
    body: Optional[str]


class CrawlControl:
    """
    Accept/stop decision handed to every completion handler.

    Holds the accepted pages in completion order and never accepts more
    than max_pages of them.
    """

    def __init__(self, max_pages: int):
        self.max_pages = max_pages
        self.pages: List[Tuple[str, str]] = []
        self.stopped = False

    @property
    def accepted(self) -> int:
        return len(self.pages)

    @property
    def is_full(self) -> bool:
        return len(self.pages) >= self.max_pages

    def accept(self, url: str, body: str) -> bool:
        if self.stopped or self.is_full:
            return False
        self.pages.append((url, body))
        if self.is_full:
            self.stop()
        return True

    def stop(self):
        self.stopped = True


class SiteCrawler:
    """Breadth-first crawl of one site that extracts SEO signals from the first pages fetched"""

    def __init__(self, crawl_config: CrawlConfig = None, client=None,
                 extractor: SignalExtractor = None):
        self.config = crawl_config or CrawlConfig()
        self.client = client
        self.extractor = extractor or SignalExtractor()
        self.metrics = CrawlMetrics()
        self.state = CrawlState.IDLE

        self._fetch_conditions: Dict[int, FetchCondition] = {}
        self._next_condition_id = 0
        self._control: Optional[CrawlControl] = None
        self._seen: Set[str] = set()
        self._host = ""

        if self.config.html_only:
            self.add_fetch_condition(html_only_condition)

    def add_fetch_condition(self, condition: FetchCondition) -> int:
        """Register a predicate every discovered URL must pass; returns its id"""
        condition_id = self._next_condition_id
        self._next_condition_id += 1
        self._fetch_conditions[condition_id] = condition
        return condition_id

    def remove_fetch_condition(self, condition_id: int) -> bool:
        return self._fetch_conditions.pop(condition_id, None) is not None

    def stop(self):
        """Halt dispatch; fetches still in flight are discarded"""
        if self._control is not None:
            self._control.stop()

    async def crawl(self, start_url: str,
                    callback: Callable[[List[CrawlResult]], None] = None) -> Optional[List[CrawlResult]]:
        """
        Crawl from start_url until max_pages pages have been fetched.

        The results are passed to callback and returned. When the site runs out
        of pages first, or the crawl is stopped early, nothing is delivered and
        None is returned.
        """
        if self.state is not CrawlState.IDLE:
            raise SEOScraperError("A SiteCrawler instance can only run one crawl")

        start_url = ensure_scheme(start_url).lower()
        self._host = urlparse(start_url).netloc
        if not self._host:
            raise ConfigurationError(f"Start URL has no host: {start_url}")

        logger.info(f"Starting crawl of {start_url} (max {self.config.max_pages} pages)")
        self.state = CrawlState.RUNNING
        self.metrics.start()
        try:
            if self.client is not None:
                control = await self._run(self.client, start_url)
            else:
                async with AsyncHTTPClient(self.config) as client:
                    control = await self._run(client, start_url)
        finally:
            self.state = CrawlState.STOPPED
            self.metrics.finish()
            self.metrics.log_summary()

        if not control.is_full:
            logger.warning(
                f"Crawl of {start_url} ended with {control.accepted} of "
                f"{self.config.max_pages} pages, no results delivered"
            )
            return None

        results = self._extract_all(control.pages)
        if callback is not None:
            callback(results)
        return results

    async def _run(self, client, start_url: str) -> CrawlControl:
        control = CrawlControl(self.config.max_pages)
        self._control = control
        self._seen = {start_url}
        queue: Deque[Tuple[str, int]] = deque([(start_url, 1)])
        in_flight: Set[asyncio.Task] = set()
        loop = asyncio.get_running_loop()
        last_dispatch = None

        try:
            while not control.stopped and (queue or in_flight):
                wait_timeout = None
                while queue and len(in_flight) < self.config.max_concurrency:
                    now = loop.time()
                    if last_dispatch is not None and now - last_dispatch < self.config.interval_seconds:
                        wait_timeout = self.config.interval_seconds - (now - last_dispatch)
                        break
                    url, depth = queue.popleft()
                    in_flight.add(asyncio.ensure_future(self._fetch(client, url, depth)))
                    last_dispatch = now
                    self.metrics.record_dispatch()

                if not in_flight:
                    await asyncio.sleep(wait_timeout or 0)
                    continue

                done, _ = await asyncio.wait(
                    in_flight, timeout=wait_timeout, return_when=asyncio.FIRST_COMPLETED
                )
                for task in done:
                    in_flight.discard(task)
                    self._handle_completion(task.result(), control, queue)
        finally:
            for task in in_flight:
                task.cancel()
            # results of cancelled fetches are never looked at
            await asyncio.gather(*in_flight, return_exceptions=True)

        return control

    async def _fetch(self, client, url: str, depth: int) -> FetchCompletion:
        body = await client.fetch(url)
        return FetchCompletion(url=url, depth=depth, body=body)

    def _handle_completion(self, completion: FetchCompletion, control: CrawlControl,
                           queue: Deque[Tuple[str, int]]):
        if completion.body is None:
            self.metrics.record_failure()
            return

        self.metrics.record_success()
        if not control.accept(completion.url, completion.body):
            logger.debug(f"Discarding {completion.url}, crawl already stopped")
            self.metrics.record_discard()
            return

        logger.debug(f"[{control.accepted}/{control.max_pages}] Fetched {completion.url}")
        if control.stopped:
            return

        self._discover_links(completion, queue)

    def _discover_links(self, completion: FetchCompletion, queue: Deque[Tuple[str, int]]):
        if self.config.max_depth and completion.depth >= self.config.max_depth:
            return

        soup = BeautifulSoup(completion.body, 'html.parser')
        for anchor in soup.find_all('a', href=True):
            href = anchor['href']
            try:
                url = strip_fragment(urljoin(completion.url, href))
                if url in self._seen or not self._should_fetch(url):
                    continue
            except ValueError as e:
                logger.debug(f"Skipping malformed link {href!r} on {completion.url}: {e}")
                continue
            self._seen.add(url)
            queue.append((url, completion.depth + 1))

    def _should_fetch(self, url: str) -> bool:
        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https'):
            return False
        if parsed.netloc.lower() != self._host:
            return False
        return all(condition(parsed) for condition in self._fetch_conditions.values())

    def _extract_all(self, pages: List[Tuple[str, str]]) -> List[CrawlResult]:
        results = []
        for url, body in pages:
            try:
                signals = self.extractor.extract_html(body, url)
            except SignalExtractionError as e:
                logger.warning(f"Skipping {url}: {e}")
                self.metrics.record_skip()
                continue
            results.append(CrawlResult(url=url, signals=signals))

        logger.info(f"Extracted signals for {len(results)} of {len(pages)} crawled pages")
        return results
