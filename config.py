"""
Configuration file for SEO Signal Scraper
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from utils import ConfigurationError

DEFAULT_USER_AGENT = "SEO Signal Scraper v1 (+python-requests)"

# Defaults for a site crawl. Interval and timeout are milliseconds.
CRAWL_DEFAULTS: Dict[str, Any] = {
    "max_pages": 10,
    "interval": 250,
    "max_depth": 2,
    "max_concurrency": 2,
    "timeout": 1000,
    "download_unsupported": False,
    "user_agent": DEFAULT_USER_AGENT,
    "html_only": False,
}

# Short option names accepted by CrawlConfig.from_options
OPTION_ALIASES = {
    "maxPages": "max_pages",
    "depth": "max_depth",
    "maxDepth": "max_depth",
    "concurrency": "max_concurrency",
    "maxConcurrency": "max_concurrency",
    "unsupported": "download_unsupported",
    "downloadUnsupported": "download_unsupported",
    "useragent": "user_agent",
    "userAgent": "user_agent",
    "htmlOnly": "html_only",
}

INTEGER_FIELDS = ("max_pages", "interval", "max_depth", "max_concurrency", "timeout")
FLAG_FIELDS = ("download_unsupported", "html_only")


@dataclass
class ScraperConfig:
    """Configuration settings for the SEO scraper"""

    # HTTP settings
    timeout: int = 15
    user_agent: str = DEFAULT_USER_AGENT

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(levelname)s - %(message)s"
    log_dir: Optional[str] = None


@dataclass(frozen=True)
class CrawlConfig:
    """Settings for a single site crawl, read once when the crawl starts"""

    max_pages: int = CRAWL_DEFAULTS["max_pages"]
    interval: int = CRAWL_DEFAULTS["interval"]
    max_depth: int = CRAWL_DEFAULTS["max_depth"]
    max_concurrency: int = CRAWL_DEFAULTS["max_concurrency"]
    timeout: int = CRAWL_DEFAULTS["timeout"]
    download_unsupported: bool = CRAWL_DEFAULTS["download_unsupported"]
    user_agent: str = CRAWL_DEFAULTS["user_agent"]
    html_only: bool = CRAWL_DEFAULTS["html_only"]

    def __post_init__(self):
        for name in INTEGER_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass but never a valid count
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        for name in FLAG_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"{name} must be true or false, got {value!r}")
        if not isinstance(self.user_agent, str):
            raise ConfigurationError(f"user_agent must be a string, got {self.user_agent!r}")

        if self.max_pages <= 0:
            raise ConfigurationError(f"max_pages must be positive, got {self.max_pages}")
        if self.max_concurrency <= 0:
            raise ConfigurationError(
                f"max_concurrency must be positive, got {self.max_concurrency}"
            )
        if self.interval < 0:
            raise ConfigurationError(f"interval cannot be negative, got {self.interval}")
        if self.max_depth < 0:
            raise ConfigurationError(f"max_depth cannot be negative, got {self.max_depth}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if not self.user_agent:
            raise ConfigurationError("user_agent cannot be empty")

    @property
    def interval_seconds(self) -> float:
        return self.interval / 1000.0

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "CrawlConfig":
        """
        Build a config from a loose options mapping.

        Accepts the field names as well as the short aliases in OPTION_ALIASES.
        Keys set to None fall back to the defaults; unknown keys are rejected.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in (options or {}).items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown crawl option: {key}")
            if value is not None:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Default configuration instance
config = ScraperConfig()
