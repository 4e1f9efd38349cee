"""Scrape a company's public website to bootstrap its configuration.

Only the home page fetch is required. Logo, colours, metadata and the
services/about sub-pages are best-effort extras.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from callcoach.errors import ScrapeError
from callcoach.scraper.colors import DEFAULT_PALETTE, extract_colors_from_css, normalize_to_hex

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

MAIN_PAGE_TIMEOUT = 15.0
LINKED_PAGE_TIMEOUT = 10.0
GUESSED_PAGE_TIMEOUT = 5.0

MAX_TEXT_CHARS = 15000
MAX_SUBPAGE_CHARS = 5000

SERVICES_PATHS = ["services", "pest-control", "what-we-do"]
ABOUT_PATHS = ["about", "about-us", "our-company"]

CONTENT_SELECTORS = ["main", "article", ".content", ".main", "#content", "#main", "body"]
SUBPAGE_SELECTORS = ["main", "article", ".content", "body"]

COLOR_TOKEN_RE = re.compile(r"#[0-9a-fA-F]{3,6}|rgba?\([^)]+\)")


def normalize_url(url: str) -> str:
    url = url.strip()
    if not url.startswith("http"):
        url = "https://" + url
    return url


def _origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _first_match_text(soup: BeautifulSoup, selectors: list[str]) -> str:
    for selector in selectors:
        elements = soup.select(selector)
        if elements:
            return " ".join(el.get_text(" ") for el in elements)
    return ""


# ── Extractors ─────────────────────────────────────────────────────

def extract_logo(soup: BeautifulSoup, base_url: str) -> str | None:
    """Best logo candidate as an absolute URL.

    Priority: header/logo containers, then any image mentioning "logo",
    then the favicon, then og:image.
    """
    candidates: list[tuple[int, str]] = []

    for img in soup.select('header img, .logo img, .navbar img, .header img, [class*="logo"] img'):
        if img.get("src"):
            candidates.append((1, img["src"]))

    for img in soup.find_all("img"):
        src = img.get("src") or ""
        alt = img.get("alt") or ""
        class_name = " ".join(img.get("class") or [])
        if "logo" in src.lower() or "logo" in alt.lower() or "logo" in class_name.lower():
            candidates.append((2, src))

    for link in soup.select('link[rel*="icon"]'):
        if link.get("href"):
            candidates.append((3, link["href"]))

    og_image = soup.select_one('meta[property="og:image"]')
    if og_image and og_image.get("content"):
        candidates.append((4, og_image["content"]))

    # Stable sort keeps document order within a priority
    candidates.sort(key=lambda c: c[0])
    for _, src in candidates:
        if src:
            if src.startswith("//"):
                return "https:" + src
            return urljoin(base_url, src)
    return None


def extract_colors(soup: BeautifulSoup, html: str) -> dict:
    """Brand colours from CSS variables, then by frequency in the raw HTML."""
    inline_css = "\n".join(style.get_text() for style in soup.find_all("style"))
    css_colors = extract_colors_from_css(inline_css)

    counts: Counter = Counter()
    for token in COLOR_TOKEN_RE.findall(html):
        normalized = normalize_to_hex(token)
        if normalized and normalized not in ("#ffffff", "#000000"):
            counts[normalized] += 1
    by_frequency = [color for color, _ in counts.most_common()]

    def _pick(kind: str, index: int) -> str:
        if css_colors.get(kind):
            return css_colors[kind]
        if len(by_frequency) > index:
            return by_frequency[index]
        return DEFAULT_PALETTE[kind]

    return {
        "primary": _pick("primary", 0),
        "secondary": _pick("secondary", 1),
        "accent": _pick("accent", 2),
        "background": css_colors.get("background"),
        "text": css_colors.get("text"),
    }


def extract_text_content(soup: BeautifulSoup) -> str:
    """Visible page text without navigation chrome, capped at MAX_TEXT_CHARS.

    Removes script/style/nav/footer elements from `soup` in place.
    """
    for el in soup.select("script, style, nav, footer, .nav, .footer, .menu"):
        el.decompose()
    return _collapse(_first_match_text(soup, CONTENT_SELECTORS))[:MAX_TEXT_CHARS]


def extract_metadata(soup: BeautifulSoup) -> dict:
    def _meta(selector: str) -> str:
        tag = soup.select_one(selector)
        return (tag.get("content") or "") if tag else ""

    title = soup.title.get_text().strip() if soup.title else ""
    return {
        "title": title,
        "description": _meta('meta[name="description"]'),
        "ogTitle": _meta('meta[property="og:title"]'),
        "ogDescription": _meta('meta[property="og:description"]'),
    }


# ── Sub-pages ──────────────────────────────────────────────────────

def _fetch_page_text(http: httpx.Client, url: str, timeout: float) -> str:
    response = http.get(url, headers={"User-Agent": BROWSER_HEADERS["User-Agent"]}, timeout=timeout)
    response.raise_for_status()
    page = BeautifulSoup(response.text, "html.parser")
    for el in page.select("script, style, nav, footer"):
        el.decompose()
    return _collapse(_first_match_text(page, SUBPAGE_SELECTORS))[:MAX_SUBPAGE_CHARS]


def try_fetch_page(
    soup: BeautifulSoup,
    base_url: str,
    path_candidates: list[str],
    http: httpx.Client,
) -> str | None:
    """Text of the first reachable page matching one of `path_candidates`.

    Links on the page are tried first, then guessed paths off the site
    root. Every failure just moves on to the next candidate.
    """
    origin = _origin(base_url)

    for path in path_candidates:
        link = soup.select_one(f'a[href*="{path}"]')
        href = link.get("href") if link else None
        if not href:
            continue
        page_url = href if href.startswith("http") else urljoin(origin + "/", href)
        try:
            return _fetch_page_text(http, page_url, LINKED_PAGE_TIMEOUT)
        except httpx.HTTPError as e:
            logger.debug(f"Skipping {page_url}: {e}")

    for path in path_candidates:
        page_url = f"{origin}/{path}"
        try:
            return _fetch_page_text(http, page_url, GUESSED_PAGE_TIMEOUT)
        except httpx.HTTPError as e:
            logger.debug(f"Skipping {page_url}: {e}")

    return None


# ── Entry point ────────────────────────────────────────────────────

def scrape_company_website(url: str, analyzer, http_client: httpx.Client | None = None) -> dict:
    """Fetch a company site and extract branding plus structured company facts.

    `analyzer` must provide ``extract_company_intelligence(text)``.
    Raises ScrapeError when the home page cannot be fetched.
    """
    url = normalize_url(url)
    http = http_client or httpx.Client(follow_redirects=True)

    try:
        logger.info(f"Fetching: {url}")
        try:
            response = http.get(url, headers=BROWSER_HEADERS, timeout=MAIN_PAGE_TIMEOUT)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Error scraping website: {e}")
            raise ScrapeError(f"Failed to scrape website: {e}", url=url) from e

        html = response.text
        soup = BeautifulSoup(html, "html.parser")

        logo = extract_logo(soup, url)
        colors = extract_colors(soup, html)
        metadata = extract_metadata(soup)
        # Link discovery must run before the text extractor strips nav/footer
        services_text = try_fetch_page(soup, url, SERVICES_PATHS, http)
        about_text = try_fetch_page(soup, url, ABOUT_PATHS, http)
        text_content = extract_text_content(soup)
    finally:
        if http_client is None:
            http.close()

    if services_text:
        text_content += "\n\nSERVICES PAGE:\n" + services_text
    if about_text:
        text_content += "\n\nABOUT PAGE:\n" + about_text

    logger.info("Extracting company intelligence with Claude...")
    extracted = analyzer.extract_company_intelligence(text_content)

    return {
        "url": url,
        "logo": logo,
        "colors": colors,
        "textContent": text_content,
        "metadata": metadata,
        "extracted": extracted,
    }
