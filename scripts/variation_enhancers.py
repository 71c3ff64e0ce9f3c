#!/usr/bin/env python3
"""
Variation enhancers - small formatting changes that multiply uniqueness.

A base headline drawn from a table can be rendered in several ways (suffixes,
qualifiers, a checkmark, an injected site name). Each rendering is chosen per
domain, so two sites that land on the same base headline still differ.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from hash_utils import seeded_random, select_variation

H1_FORMATS: Tuple[Callable[[str], str], ...] = (
    lambda h1: h1,
    lambda h1: h1 if h1.endswith("?") else f"{h1}!",
    lambda h1: f"{h1} | Get Started",
    lambda h1: h1 if ":" in h1 else f"{h1}: Official Site",
    lambda h1: f"✓ {h1}",
)

META_TITLE_MODIFIERS: Tuple[Callable[[str], str], ...] = (
    lambda title: title,
    lambda title: f"{title} | 2024",
    lambda title: f"{title} - Official",
    lambda title: f"✓ {title}",
    lambda title: f"{title} | Apply Today",
)

META_DESC_INTROS: Tuple[str, ...] = (
    "",
    "Official Site: ",
    "Verified Program: ",
    "Start Today: ",
    "Limited Time: ",
)

SITE_NAME_SEPARATORS: Tuple[str, ...] = ("at", "with", "via", "through")

# Share of sites whose headlines carry the site name.
SITE_NAME_INJECT_RATE = 1 / 3

_REPEATED_PUNCTUATION = re.compile(r"([!?.])\1+")


@dataclass(frozen=True)
class UniqueCapacity:
    with_formatting: int
    with_site_names: int
    theoretical: int


def enhance_h1(base_h1: str, domain: str) -> str:
    fmt = select_variation(domain, H1_FORMATS, "h1-format")
    return _REPEATED_PUNCTUATION.sub(r"\1", fmt(base_h1))


def enhance_meta_title(base_title: str, domain: str) -> str:
    modifier = select_variation(domain, META_TITLE_MODIFIERS, "meta-title-modifier")
    return modifier(base_title)


def enhance_meta_description(base_description: str, domain: str) -> str:
    intro = select_variation(domain, META_DESC_INTROS, "meta-desc-intro")
    return f"{intro}{base_description}"


def inject_site_name(content: str, site_name: str, domain: str) -> str:
    """Append "<separator> <site name>" for roughly a third of domains."""
    if not site_name or seeded_random(domain, "site-name-inject") >= SITE_NAME_INJECT_RATE:
        return content

    separator = select_variation(domain, SITE_NAME_SEPARATORS, "site-name-separator")
    return f"{content} {separator} {site_name}"


def apply_h1_enhancements(base_h1: str, domain: str, site_name: Optional[str] = None) -> str:
    enhanced = enhance_h1(base_h1, domain)
    if site_name:
        enhanced = inject_site_name(enhanced, site_name, domain)
    return enhanced


def calculate_unique_capacity(base_variations: int) -> UniqueCapacity:
    formats = len(H1_FORMATS)
    return UniqueCapacity(
        with_formatting=base_variations * formats,
        with_site_names=base_variations * formats * 2,
        theoretical=base_variations * formats * len(SITE_NAME_SEPARATORS),
    )
