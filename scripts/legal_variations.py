#!/usr/bin/env python3
"""Per-site legal footer disclaimers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from hash_utils import select_variation
from variation_tables import GLOBAL_TABLES

DISCLAIMER_TEMPLATES: Tuple[str, ...] = GLOBAL_TABLES["legal"]["disclaimer_templates"]

_SCHEME_WWW = re.compile(r"^(https?://)?(www\.)?", re.IGNORECASE)


@dataclass(frozen=True)
class LegalFooter:
    disclaimer: str
    font_size: str = "text-xs"
    class_name: str = "text-zinc-400 leading-relaxed"


def clean_domain(domain: str) -> str:
    return _SCHEME_WWW.sub("", domain.strip())


def get_disclaimer_variation(domain: str) -> LegalFooter:
    """Pick a disclaimer template for the domain and name the domain in it."""
    cleaned = clean_domain(domain)
    template = select_variation(cleaned, DISCLAIMER_TEMPLATES, "legal-disclaimer")
    return LegalFooter(disclaimer=template.replace("{domain}", cleaned))
