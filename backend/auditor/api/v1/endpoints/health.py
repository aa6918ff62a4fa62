"""
Health check endpoint.
"""

from dataclasses import asdict

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "ok"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with cache status and crawl budget."""
    runner = request.app.state.runner

    return {
        "status": "ok",
        "cache": runner.cache.stats(),
        "crawl_budget": asdict(runner.budget)
    }
