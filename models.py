"""
Data models for SEO Signal Scraper
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class CrawlState(Enum):
    """Lifecycle of a site crawl"""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class KeywordEntry:
    """One ranked word of the keyword density list"""
    word: str
    frequency: int
    in_title: bool
    in_desc: bool


@dataclass(frozen=True)
class PageSignals:
    """SEO signals extracted from a single page"""
    title: Optional[str]
    excessive_title: Optional[bool]
    description: Optional[str]
    excessive_desc: Optional[bool]
    author: Optional[str]
    keywords: Optional[str]
    h1_stuffing: bool
    no_h1_tags: bool
    h2_stuffing: bool
    no_h2_tags: bool
    alt_tags_present: bool
    internal_links: int
    external_links: int
    analytics_enabled: bool
    keyword_density: Tuple[KeywordEntry, ...]
    og_tags_present: bool

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["keyword_density"] = [asdict(entry) for entry in self.keyword_density]
        return data


@dataclass(frozen=True)
class CrawlResult:
    """A crawled page and its signals"""
    url: str
    signals: PageSignals

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "signals": self.signals.to_dict()}
