"""
Command line entry point for SEO Signal Scraper
"""
import argparse
import json
import logging
import sys

from config import config
from monitoring import setup_logging
from seo_scraper import SEOScraper
from utils import SEOScraperError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SEO Signal Scraper - on-page SEO signals for pages and sites")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    parser.add_argument("--log-dir", default=config.log_dir, help="Directory for log files")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Single page
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a single URL")
    analyze_parser.add_argument("url", help="URL to analyze")

    # Site crawl
    crawl_parser = subparsers.add_parser("crawl", help="Crawl a site and analyze its pages")
    crawl_parser.add_argument("url", help="URL to start the crawl from")
    crawl_parser.add_argument("--max-pages", type=int, help="Number of pages to analyze")
    crawl_parser.add_argument("--max-depth", type=int, help="Link depth to follow (0 for no limit)")
    crawl_parser.add_argument("--concurrency", type=int, help="Simultaneous requests")
    crawl_parser.add_argument("--interval", type=int, help="Milliseconds between new requests")
    crawl_parser.add_argument("--timeout", type=int, help="Per-request timeout in milliseconds")
    crawl_parser.add_argument("--user-agent", help="User agent string to send")
    crawl_parser.add_argument("--html-only", action="store_true", default=None,
                              help="Skip images, scripts, stylesheets and documents")
    crawl_parser.add_argument("--download-unsupported", action="store_true", default=None,
                              help="Keep responses that are not HTML or text")

    # Server mode
    server_parser = subparsers.add_parser("server", help="Run the HTTP API")
    server_parser.add_argument("--host", default="0.0.0.0", help="Server host")
    server_parser.add_argument("--port", type=int, default=8000, help="Server port")

    return parser


def crawl_options(args) -> dict:
    return {
        "max_pages": args.max_pages,
        "max_depth": args.max_depth,
        "max_concurrency": args.concurrency,
        "interval": args.interval,
        "timeout": args.timeout,
        "user_agent": args.user_agent,
        "html_only": args.html_only,
        "download_unsupported": args.download_unsupported,
    }


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_level, args.log_dir, config.log_format)

    if args.command == "server":
        from api import run
        run(args.host, args.port)
        return 0

    scraper = SEOScraper()
    try:
        if args.command == "analyze":
            signals = scraper.analyze_url(args.url)
            if signals is None:
                logger.error(f"Could not load {args.url}")
                return 1
            print(json.dumps(signals.to_dict(), indent=2))

        elif args.command == "crawl":
            results = scraper.crawl_site(args.url, crawl_options(args))
            if results is None:
                logger.error(f"Crawl of {args.url} did not reach the requested number of pages")
                return 1
            print(json.dumps([result.to_dict() for result in results], indent=2))

    except SEOScraperError as e:
        logger.error(f"Error: {e}")
        return 2
    finally:
        scraper.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
