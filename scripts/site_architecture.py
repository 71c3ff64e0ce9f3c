#!/usr/bin/env python3
"""
Per-domain page structure.

Architectures are assigned by exact domain lookup, not by hashing: a small set
of flagship domains get hand-picked structures and every other domain uses the
default one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class SiteArchitecture:
    style: str  # detailed, quick, educational
    sections: Tuple[str, ...]
    provider_count: int
    faq_count: int
    word_target: int
    content_length: str  # concise, detailed, comprehensive
    eligibility_format: str  # numbered-list, checklist, table


DEFAULT_ARCHITECTURE_KEY = "final-1.com"

SITE_ARCHITECTURES: Dict[str, SiteArchitecture] = {
    "final-1.com": SiteArchitecture(
        style="detailed",
        sections=(
            "intro", "cityinfo", "toc", "eligibility", "howto", "providers",
            "benefits", "faq", "stateinfo", "contact", "cta",
        ),
        provider_count=4,
        faq_count=8,
        word_target=1600,
        content_length="detailed",
        eligibility_format="numbered-list",
    ),
    "final-2.com": SiteArchitecture(
        style="quick",
        sections=("intro", "quickstart", "howto", "providers", "eligibility", "faq", "cta"),
        provider_count=2,
        faq_count=4,
        word_target=1000,
        content_length="concise",
        eligibility_format="checklist",
    ),
    "final-3.com": SiteArchitecture(
        style="educational",
        sections=(
            "intro", "cityinfo", "program-deep", "toc", "eligibility", "benefits",
            "providers", "howto", "faq", "testimonials", "resources", "contact", "cta",
        ),
        provider_count=4,
        faq_count=6,
        word_target=1800,
        content_length="comprehensive",
        eligibility_format="table",
    ),
}


def get_site_architecture(domain: str) -> SiteArchitecture:
    return SITE_ARCHITECTURES.get(domain, SITE_ARCHITECTURES[DEFAULT_ARCHITECTURE_KEY])
