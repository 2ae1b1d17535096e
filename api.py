"""
FastAPI web application for SEO Signal Scraper
"""
from fastapi import FastAPI, HTTPException, Depends
from pydantic import BaseModel, field_validator
from typing import List, Dict, Any, Optional
import logging
from datetime import datetime
import uvicorn

from config import config
from seo_scraper import SEOScraper
from utils import SEOScraperError, validate_url, ensure_scheme

logger = logging.getLogger(__name__)


# Pydantic models for API requests
class URLAnalysisRequest(BaseModel):
    url: str

    @field_validator('url')
    @classmethod
    def url_must_be_http(cls, v):
        if not validate_url(v if "://" in v else ensure_scheme(v)):
            raise ValueError('URL must be an http(s) URL with a host')
        return v


class HTMLAnalysisRequest(URLAnalysisRequest):
    html: str


class CrawlRequest(URLAnalysisRequest):
    options: Optional[Dict[str, Any]] = None


# Response models
class APIResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    timestamp: datetime


class CrawlResponse(BaseModel):
    success: bool
    message: str
    data: List[Dict[str, Any]]
    timestamp: datetime


# Initialize FastAPI app
app = FastAPI(
    title="SEO Signal Scraper API",
    description="On-page SEO signal extraction for single pages and site crawls",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Global scraper instance
scraper = None


def get_scraper() -> SEOScraper:
    """Dependency to get the scraper instance"""
    global scraper
    if scraper is None:
        scraper = SEOScraper()
    return scraper


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up on shutdown"""
    if scraper is not None:
        scraper.close()
        logger.info("SEO Signal Scraper API shut down successfully")


# API Endpoints

@app.get("/", response_model=Dict[str, str])
async def root():
    """Root endpoint"""
    return {
        "message": "SEO Signal Scraper API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.post("/analyze/url", response_model=APIResponse)
def analyze_url(request: URLAnalysisRequest, seo: SEOScraper = Depends(get_scraper)):
    """Fetch a single URL and extract its signals"""
    logger.info(f"Analyzing URL: {request.url}")
    body = seo.load(request.url)
    if body is None:
        raise HTTPException(status_code=502, detail=f"Could not load {request.url}")

    try:
        signals = seo.analyze_html(request.url, body)
    except SEOScraperError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return APIResponse(
        success=True,
        message="URL analysis completed",
        data=signals.to_dict(),
        timestamp=datetime.now()
    )


@app.post("/analyze/html", response_model=APIResponse)
def analyze_html(request: HTMLAnalysisRequest, seo: SEOScraper = Depends(get_scraper)):
    """Extract signals from HTML supplied by the caller"""
    try:
        signals = seo.analyze_html(request.url, request.html)
    except SEOScraperError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return APIResponse(
        success=True,
        message="HTML analysis completed",
        data=signals.to_dict(),
        timestamp=datetime.now()
    )


@app.post("/crawl", response_model=CrawlResponse)
async def crawl(request: CrawlRequest, seo: SEOScraper = Depends(get_scraper)):
    """Crawl a site and return the signals of the first pages fetched"""
    logger.info(f"Starting crawl for {request.url}")
    try:
        results = await seo.crawl_site_async(request.url, request.options)
    except SEOScraperError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if results is None:
        raise HTTPException(
            status_code=404,
            detail=f"Crawl of {request.url} did not reach the requested number of pages"
        )

    return CrawlResponse(
        success=True,
        message=f"Crawl completed: {len(results)} pages analyzed",
        data=[result.to_dict() for result in results],
        timestamp=datetime.now()
    )


def run(host: str = "0.0.0.0", port: int = 8000):
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())


if __name__ == "__main__":
    run()
