"""
Pytest configuration and shared fixtures
"""
import pytest
import os
import asyncio
from unittest.mock import Mock

# Add project root to path
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from bs4 import BeautifulSoup

from signal_extractor import SignalExtractor


SAMPLE_HTML = """
<html>
    <head>
        <title>Python Web Scraping Guide</title>
        <meta name="description" content="Learn python web scraping with practical examples">
        <meta name="author" content="Jane Doe">
        <meta name="keywords" content="python, scraping, seo">
        <meta property="og:title" content="Python Web Scraping Guide">
        <script src="https://www.google-analytics.com/analytics.js"></script>
    </head>
    <body>
        <h1>Python Scraping</h1>
        <h2>Getting started</h2>
        <h2>Parsing pages</h2>
        <p>Python makes scraping simple. Python scraping tools parse pages quickly.</p>
        <a href="http://example.com/about/">About</a>
        <a href="http://example.com/about">About again</a>
        <a href="/contact">Contact</a>
        <a href="#top">Top</a>
        <a href="http://other.com">Other</a>
        <a href="https://another.org/page">Another</a>
        <img src="logo.png" alt="Logo">
    </body>
</html>
"""


def page_html(title=None, description=None, body=""):
    """Build a small HTML page for tests"""
    head = ""
    if title is not None:
        head += f"<title>{title}</title>"
    if description is not None:
        head += f'<meta name="description" content="{description}">'
    return f"<html><head>{head}</head><body>{body}</body></html>"


def site_page(index, links=()):
    """A crawlable page with a title, description and links"""
    anchors = "".join(f'<a href="{link}">link</a>' for link in links)
    return page_html(
        title=f"Page {index}",
        description=f"Description of page {index}",
        body=f"<h1>Page {index}</h1><p>Content for page {index}</p>{anchors}",
    )


class FakeFetchClient:
    """In-memory fetch client; pages maps URL to body, missing URLs fail"""

    def __init__(self, pages, delays=None, on_fetch=None):
        self.pages = pages
        self.delays = delays or {}
        self.on_fetch = on_fetch
        self.started = []
        self.completed = []
        self.start_times = []

    async def fetch(self, url):
        loop = asyncio.get_running_loop()
        self.started.append(url)
        self.start_times.append(loop.time())
        await asyncio.sleep(self.delays.get(url, 0))
        body = self.pages.get(url)
        self.completed.append(url)
        if self.on_fetch is not None:
            self.on_fetch(url)
        return body


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def sample_soup():
    return BeautifulSoup(SAMPLE_HTML, 'html.parser')


@pytest.fixture
def extractor():
    return SignalExtractor()


@pytest.fixture
def fifteen_page_site():
    """Start page linking to fourteen pages, fifteen pages in total"""
    base = "http://example.com"
    children = [f"{base}/page{i}" for i in range(1, 15)]
    pages = {base: site_page(0, children)}
    for i, url in enumerate(children, start=1):
        pages[url] = site_page(i, [base])
    return base, pages


@pytest.fixture
def mock_response():
    """Mock HTTP response"""
    mock = Mock()
    mock.status_code = 200
    mock.text = SAMPLE_HTML
    return mock
