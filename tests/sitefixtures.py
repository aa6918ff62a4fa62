"""Shared HTML builders and a respx-backed fake website for the test suite."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Union

import httpx
import respx

ORIGIN = "https://example.com"

RICH_COPY = (
    "We help product teams ship faster. Our platform is built for teams and for businesses. "
    "How it works: connect your data and get started in minutes. "
    "Trusted by 500 companies, with SOC 2 security and privacy controls. "
)
FILLER = "lorem ipsum dolor sit amet " * 260  # ~7000 characters


def page_html(
    title: str = "Example Page",
    h1: int = 1,
    h2: int = 0,
    meta: bool = True,
    canonical: bool = True,
    json_ld: bool = True,
    body: str = "",
    links: Iterable[str] = (),
) -> str:
    head = [f"<title>{title}</title>"] if title is not None else []
    if meta:
        head.append('<meta name="description" content="An example page">')
    if canonical:
        head.append('<link rel="canonical" href="https://example.com/">')
    if json_ld:
        head.append('<script type="application/ld+json">{"@type": "Organization"}</script>')

    parts = [f"<h1>Heading {i}</h1>" for i in range(h1)]
    parts += [f"<h2>Section {i}</h2>" for i in range(h2)]
    parts.append(f"<p>{body}</p>")
    parts += [f'<a href="{href}">{href}</a>' for href in links]

    return (
        "<!DOCTYPE html><html><head>"
        + "".join(head)
        + "</head><body>"
        + "".join(parts)
        + "</body></html>"
    )


def rich_page(links: Iterable[str] = ()) -> str:
    return page_html(h1=1, h2=6, body=RICH_COPY + FILLER, links=links)


def sitemap_xml(urls: Iterable[str]) -> str:
    entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"{entries}</urlset>"
    )


Response = Union[str, int, type, Exception]


def serve_site(
    router: respx.MockRouter,
    pages: Dict[str, Response],
    sitemap: Optional[Response] = 404,
    fallback: Response = 404,
) -> None:
    """Route each URL to HTML (str), a bare status (int) or an httpx exception.

    Anything not listed gets `fallback`.
    """

    def _mock(route, reply: Response):
        if isinstance(reply, str):
            route.mock(return_value=httpx.Response(200, text=reply))
        elif isinstance(reply, int):
            route.mock(return_value=httpx.Response(reply, text=""))
        else:
            route.mock(side_effect=reply)

    if sitemap is not None:
        _mock(router.get(f"{ORIGIN}/sitemap.xml"), sitemap)
    for url, reply in pages.items():
        _mock(router.get(url), reply)
    _mock(router.route(), fallback)


class FakeClock:
    """Clock that advances by `step` seconds on every read."""

    def __init__(self, start: float = 0.0, step: float = 0.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value

    def advance(self, seconds: float) -> None:
        self.now += seconds
