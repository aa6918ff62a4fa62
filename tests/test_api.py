"""HTTP surface tests using FastAPI's TestClient."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from auditor.main import create_app
from auditor.services.audit_runner import SiteAuditRunner
from auditor.services.result_cache import ResultCache

from sitefixtures import ORIGIN, rich_page, serve_site, sitemap_xml


@pytest.fixture()
def runner() -> SiteAuditRunner:
    return SiteAuditRunner(cache=ResultCache(ttl_seconds=3600))


@pytest.fixture()
def client(runner):
    with TestClient(create_app(runner)) as test_client:
        yield test_client


@pytest.fixture()
def site(mock_http):
    urls = [f"{ORIGIN}/", f"{ORIGIN}/pricing"]
    serve_site(mock_http, pages={url: rich_page() for url in urls}, sitemap=sitemap_xml(urls))
    return mock_http


def test_root(client) -> None:
    body = client.get("/").json()
    assert body["app"] == "Site Readiness Auditor"
    assert body["docs"] == "/docs"


def test_health(client) -> None:
    assert client.get("/api/v1/health").json() == {"status": "ok"}


def test_detailed_health_reports_cache_and_budget(client) -> None:
    body = client.get("/api/v1/health/detailed").json()

    assert body["cache"]["entries"] == 0
    assert body["crawl_budget"]["max_pages"] >= 1


def test_post_audit_returns_camel_case_result(client, site) -> None:
    response = client.post("/api/v1/audit", json={"url": "example.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["url"] == ORIGIN
    assert body["scope"]["scannedPages"] == 2
    assert body["scope"]["usedSitemap"] is True
    assert body["scores"]["aiReadiness"] == 100
    assert body["tier"] == "Gold"
    assert "perCategory" in body["explanations"]


@pytest.mark.parametrize("url", ["ftp://example.com", "xn--a.com"])
def test_post_audit_rejects_invalid_url(client, mock_http, url: str) -> None:
    response = client.post("/api/v1/audit", json={"url": url})

    assert response.status_code == 400
    assert "Invalid site URL" in response.json()["detail"]
    assert mock_http.calls.call_count == 0


def test_cached_audit_lifecycle(client, site) -> None:
    assert client.get("/api/v1/audit/cached", params={"url": "example.com"}).status_code == 404

    client.post("/api/v1/audit", json={"url": "example.com"})
    calls = site.calls.call_count

    response = client.get("/api/v1/audit/cached", params={"url": "https://example.com/pricing"})
    assert response.status_code == 200
    assert response.json()["url"] == ORIGIN
    assert site.calls.call_count == calls


def test_cached_audit_rejects_invalid_url(client) -> None:
    assert client.get("/api/v1/audit/cached", params={"url": " "}).status_code == 400


def test_force_refresh_recrawls(client, site, runner) -> None:
    client.post("/api/v1/audit", json={"url": "example.com"})
    client.post("/api/v1/audit", json={"url": "example.com", "force_refresh": True})

    sitemap_calls = [c for c in site.calls if c.request.url.path == "/sitemap.xml"]
    assert len(sitemap_calls) == 2
