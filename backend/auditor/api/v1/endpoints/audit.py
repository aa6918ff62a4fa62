"""
Audit API endpoints.
"""
from fastapi import APIRouter, HTTPException, Query, Request

from auditor.errors import InvalidSiteUrlError
from auditor.logger import logger
from auditor.schemas.audit_request import AuditRequest
from auditor.schemas.audit_result import AuditResult
from auditor.services.audit_runner import SiteAuditRunner
from auditor.services.page_fetcher import get_origin, normalize_site_url

router = APIRouter(tags=["Audit"])


def _runner(request: Request) -> SiteAuditRunner:
    return request.app.state.runner


@router.post("", response_model=AuditResult, response_model_by_alias=True)
async def run_audit(body: AuditRequest, request: Request):
    """Audit a site (served from cache within the TTL)."""
    try:
        result = await _runner(request).audit_site(body.url, force_refresh=body.force_refresh)
    except InvalidSiteUrlError as e:
        logger.warning(f"Rejected audit request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return result


@router.get("/cached", response_model=AuditResult, response_model_by_alias=True)
async def get_cached_audit(request: Request, url: str = Query(..., description="Bare domain or URL")):
    """Return the cached result for a site without crawling."""
    try:
        origin = get_origin(normalize_site_url(url))
    except InvalidSiteUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = _runner(request).cache.get(origin)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No cached audit for {origin}")
    return result
