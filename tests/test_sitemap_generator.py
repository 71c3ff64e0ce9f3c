#!/usr/bin/env python3
"""Tests for sitemap.xml and robots.txt generation."""

import xml.etree.ElementTree as ET

import pytest

NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


def _entries(xml_string):
    root = ET.fromstring(xml_string.split("\n", 1)[1])
    return {
        url.find("sm:loc", NS).text: (
            url.find("sm:changefreq", NS).text,
            url.find("sm:priority", NS).text,
            url.find("sm:lastmod", NS).text,
        )
        for url in root.findall("sm:url", NS)
    }


def _states_and_cities():
    from data_client import City, State

    states = [
        State(id=1, name="Texas", abbreviation="TX"),
        State(id=2, name="New Mexico", abbreviation="NM"),
    ]
    cities = {
        1: [City(id=10, name="El Paso", state_id=1), City(id=11, name="El Paso", state_id=1)],
        2: [City(id=20, name="Española", state_id=2)],
        99: [City(id=30, name="Orphan", state_id=99)],
    }
    return states, cities


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Austin", "austin"),
        ("St. Mary's", "st-marys"),
        ("Española", "espanola"),
        ("Winston–Salem", "winston-salem"),
        ("  Coeur d’Alene  ", "coeur-dalene"),
        ("", ""),
    ],
)
def test_create_city_slug(name, expected):
    from sitemap_generator import create_city_slug

    assert create_city_slug(name) == expected


def test_sitemap_lists_static_state_and_city_pages():
    from sitemap_generator import STATIC_PAGES, generate_sitemap

    states, cities = _states_and_cities()
    xml_string = generate_sitemap("https://example.com/", states, cities, today="2024-01-15")

    assert xml_string.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    entries = _entries(xml_string)

    assert entries["https://example.com/"] == ("daily", "1.0", "2024-01-15")
    assert entries["https://example.com/faq/"] == ("weekly", "0.8", "2024-01-15")
    assert entries["https://example.com/tx/"] == ("weekly", "0.7", "2024-01-15")
    assert entries["https://example.com/tx/el-paso/"] == ("monthly", "0.6", "2024-01-15")
    assert entries["https://example.com/nm/espanola/"][1] == "0.6"

    # duplicates collapse and cities without a known state are skipped
    assert len(entries) == len(STATIC_PAGES) + 2 + 2
    assert not any("orphan" in loc for loc in entries)


def test_sitemap_without_data_has_only_static_pages():
    from sitemap_generator import STATIC_PAGES, generate_sitemap

    assert len(_entries(generate_sitemap("https://example.com"))) == len(STATIC_PAGES)


def test_robots_txt_points_at_sitemap():
    from sitemap_generator import generate_robots_txt

    robots = generate_robots_txt("https://example.com/")
    assert "Sitemap: https://example.com/sitemap.xml" in robots
    assert "User-agent: *" in robots
    assert "Disallow: /api/" in robots


def test_save_sitemap_writes_both_files(temp_dir):
    from sitemap_generator import STATIC_PAGES, count_urls_in_sitemap, save_sitemap

    states, cities = _states_and_cities()
    public_dir = temp_dir / "public"
    save_sitemap(public_dir, "https://example.com", states, cities)

    assert (public_dir / "robots.txt").exists()
    assert count_urls_in_sitemap(public_dir / "sitemap.xml") == len(STATIC_PAGES) + 4


def test_count_urls_in_missing_or_broken_sitemap(temp_dir):
    from sitemap_generator import count_urls_in_sitemap

    assert count_urls_in_sitemap(temp_dir / "missing.xml") == 0

    broken = temp_dir / "sitemap.xml"
    broken.write_text("<urlset><url>")
    assert count_urls_in_sitemap(broken) == 0
