"""
Logging setup and crawl metrics for SEO Signal Scraper
"""
import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from utils import PerformanceMonitor

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None,
                  log_format: str = '%(asctime)s - %(levelname)s - %(message)s'):
    """Setup console logging and, when log_dir is given, log files"""

    # Create formatters
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    simple_formatter = logging.Formatter(log_format)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # File handler for all logs
        file_handler = logging.FileHandler(
            os.path.join(log_dir, 'scraper.log'),
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        # Error log handler
        error_handler = logging.FileHandler(
            os.path.join(log_dir, 'errors.log'),
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(error_handler)

    return root_logger


@dataclass
class CrawlMetrics:
    """Counters for a single site crawl"""
    dispatched: int = 0
    succeeded: int = 0
    failed: int = 0
    discarded: int = 0
    skipped: int = 0
    performance: PerformanceMonitor = field(default_factory=PerformanceMonitor, repr=False)

    def start(self):
        self.performance.start_timer("crawl")

    def finish(self) -> float:
        return self.performance.end_timer("crawl")

    def record_dispatch(self):
        self.dispatched += 1

    def record_success(self):
        self.succeeded += 1

    def record_failure(self):
        self.failed += 1

    def record_discard(self):
        self.discarded += 1

    def record_skip(self):
        """A fetched page whose signals could not be extracted"""
        self.skipped += 1

    @property
    def success_rate(self) -> float:
        completed = self.succeeded + self.failed
        return self.succeeded / completed if completed else 0.0

    def summary(self) -> Dict[str, Any]:
        return {
            "dispatched": self.dispatched,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "discarded": self.discarded,
            "skipped": self.skipped,
            "success_rate": round(self.success_rate, 2),
            "duration": self.performance.get_metrics().get("crawl", {}).get("duration"),
        }

    def log_summary(self):
        logger.info(
            f"Crawl metrics: {self.dispatched} dispatched, {self.succeeded} succeeded, "
            f"{self.failed} failed, {self.discarded} discarded, {self.skipped} skipped"
        )
