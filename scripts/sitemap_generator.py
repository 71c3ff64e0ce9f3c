#!/usr/bin/env python3
"""
Sitemap Generator Module - Generates XML sitemap and robots.txt for SEO.

Includes:
- Static program and information pages
- One page per state and per city
- Automatic lastmod timestamps
- Priority and changefreq settings
"""

import re
import unicodedata
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import xml.etree.ElementTree as ET

from config import setup_logging
from data_client import City, State

logger = setup_logging("sitemap_generator")

STATIC_PAGES = [
    "",
    "/eligibility",
    "/programs",
    "/providers",
    "/faq",
    "/contact",
    "/apply",
    "/lifeline-program",
    "/acp-program",
    "/tribal-programs",
    "/state-programs",
    "/emergency-broadband",
    "/free-government-phone-near-me",
    "/states",
]


def create_city_slug(city_name: str) -> str:
    """
    Convert a city name to a URL-safe slug.

    Accents are folded (Española -> espanola), apostrophes and periods dropped
    (St. Mary's -> st-marys), and runs of spaces or dashes become one hyphen.
    """
    if not city_name:
        return ""

    slug = unicodedata.normalize("NFD", city_name)
    slug = "".join(ch for ch in slug if not unicodedata.combining(ch))
    slug = re.sub(r"['‘’′]", "", slug)
    slug = re.sub(r"[\"“”″]", "", slug)
    slug = re.sub(r"[–—]", "-", slug)
    slug = slug.replace(".", "")
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = slug.lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _add_url(urlset: ET.Element, loc: str, lastmod: str, changefreq: str, priority: str) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    ET.SubElement(url, "lastmod").text = lastmod
    ET.SubElement(url, "changefreq").text = changefreq
    ET.SubElement(url, "priority").text = priority


def generate_sitemap(
    site_url: str,
    states: Sequence[State] = (),
    cities: Optional[Dict[int, List[City]]] = None,
    today: Optional[str] = None,
) -> str:
    """
    Generate XML sitemap for a site.

    Args:
        site_url: Base URL of the website, without trailing slash
        states: States to list at /{abbr}/
        cities: Cities per state id, listed at /{abbr}/{city-slug}/
        today: lastmod date (YYYY-MM-DD); defaults to the current date

    Returns:
        XML string for sitemap.xml
    """
    urlset = ET.Element("urlset")
    urlset.set("xmlns", "http://www.sitemaps.org/schemas/sitemap/0.9")

    today = today or datetime.now().strftime("%Y-%m-%d")
    site_url = site_url.rstrip("/")

    for page in STATIC_PAGES:
        is_home = page == ""
        _add_url(
            urlset,
            f"{site_url}{page}/",
            today,
            "daily" if is_home else "weekly",
            "1.0" if is_home else "0.8",
        )

    # Track added URLs to prevent duplicates
    added_urls = set()
    abbr_by_state: Dict[int, str] = {}

    for state in states:
        abbr = state.abbreviation.lower()
        abbr_by_state[state.id] = abbr
        loc = f"{site_url}/{abbr}/"
        if loc in added_urls:
            continue
        added_urls.add(loc)
        _add_url(urlset, loc, today, "weekly", "0.7")

    for state_id, state_cities in (cities or {}).items():
        abbr = abbr_by_state.get(state_id)
        if not abbr:
            continue
        for city in state_cities:
            slug = create_city_slug(city.name)
            loc = f"{site_url}/{abbr}/{slug}/"
            if not slug or loc in added_urls:
                continue
            added_urls.add(loc)
            _add_url(urlset, loc, today, "monthly", "0.6")

    # Add proper indentation for readability and compatibility
    ET.indent(urlset, space="  ")

    xml_string = ET.tostring(urlset, encoding="unicode", method="xml")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_string}'


def generate_robots_txt(site_url: str) -> str:
    """
    Generate robots.txt with sitemap reference.

    Args:
        site_url: Base URL of the website

    Returns:
        robots.txt content string
    """
    site_url = site_url.rstrip("/")
    return f"""# Robots.txt for {site_url}
User-agent: *
Allow: /

# Sitemaps
Sitemap: {site_url}/sitemap.xml

# Crawl-delay
Crawl-delay: 1

# Disallow admin areas
Disallow: /admin/
Disallow: /api/
"""


def save_sitemap(
    public_dir: Path,
    site_url: str,
    states: Sequence[State] = (),
    cities: Optional[Dict[int, List[City]]] = None,
) -> None:
    """
    Save sitemap.xml and robots.txt to the public directory.

    Args:
        public_dir: Path to the public output directory
        site_url: Base URL of the website
        states: States to include
        cities: Cities per state id
    """
    public_dir.mkdir(parents=True, exist_ok=True)

    sitemap_path = public_dir / "sitemap.xml"
    sitemap_path.write_text(generate_sitemap(site_url, states, cities), encoding="utf-8")
    logger.info("Created %s (%d URLs)", sitemap_path, count_urls_in_sitemap(sitemap_path))

    robots_path = public_dir / "robots.txt"
    robots_path.write_text(generate_robots_txt(site_url), encoding="utf-8")
    logger.info("Created %s", robots_path)


def count_urls_in_sitemap(sitemap_path: Path) -> int:
    """
    Count the number of URLs in a sitemap.

    Args:
        sitemap_path: Path to sitemap.xml

    Returns:
        Number of URL entries
    """
    try:
        tree = ET.parse(sitemap_path)
    except (OSError, ET.ParseError):
        return 0

    root = tree.getroot()
    # Handle namespace
    ns = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}
    urls = root.findall(".//sm:url", ns)
    if not urls:
        # Try without namespace
        urls = root.findall(".//url")
    return len(urls)
