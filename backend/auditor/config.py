"""
Application configuration using environment variables.
"""
import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


@dataclass
class Settings:
    """Application settings."""
    APP_NAME: str = "Site Readiness Auditor"
    APP_VERSION: str = "1.0.0"

    # HTTP client settings
    USER_AGENT: str = os.getenv("USER_AGENT", "Mozilla/5.0 (compatible; SiteReadinessBot/1.0)")
    HTTP_MAX_REDIRECTS: int = int(os.getenv("HTTP_MAX_REDIRECTS", "5"))
    PAGE_TIMEOUT_MS: int = int(os.getenv("PAGE_TIMEOUT_MS", "6000"))

    # Crawl budget
    MAX_PAGES: int = int(os.getenv("MAX_PAGES", "20"))
    MAX_DEPTH: int = int(os.getenv("MAX_DEPTH", "2"))
    TOTAL_CRAWL_BUDGET_MS: int = int(os.getenv("TOTAL_CRAWL_BUDGET_MS", "20000"))
    CRAWL_CONCURRENCY: int = int(os.getenv("CRAWL_CONCURRENCY", "4"))
    MAX_TEXT_CHARS: int = int(os.getenv("MAX_TEXT_CHARS", "20000"))

    # Result cache
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", str(24 * 60 * 60)))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS
    CORS_ORIGINS: List[str] = field(default_factory=lambda: [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if origin.strip()
    ])


@dataclass(frozen=True)
class CrawlBudget:
    """Limits applied to a single site crawl."""
    max_pages: int = 20
    max_depth: int = 2
    page_timeout_ms: int = 6000
    total_budget_ms: int = 20000
    concurrency: int = 4

    @classmethod
    def from_settings(cls, s: "Settings") -> "CrawlBudget":
        return cls(
            max_pages=s.MAX_PAGES,
            max_depth=s.MAX_DEPTH,
            page_timeout_ms=s.PAGE_TIMEOUT_MS,
            total_budget_ms=s.TOTAL_CRAWL_BUDGET_MS,
            concurrency=max(1, s.CRAWL_CONCURRENCY),
        )


settings = Settings()
