#!/usr/bin/env python3
"""
Per-site build configuration.

Deployment writes ``site-config.json`` with the site's domain, name, keyword,
and design style (optionally with a hand-picked palette). Anything missing
falls back to defaults so a half-written config still builds.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from config import DEFAULT_KEYWORD_ID, SITE_CONFIG_PATH, setup_logging
from design_dna import (
    ColorPalette,
    DesignDNA,
    FontPair,
    Gradients,
    generate_design_dna,
    normalize_design_style,
)

logger = setup_logging("site_config")

PREVIEW_HOST_SUFFIXES = (".vercel.app",)
PREVIEW_HOSTS = ("localhost", "127.0.0.1")

_PALETTE_KEYS = {
    "primary": "primary",
    "secondary": "secondary",
    "accent": "accent",
    "background": "background",
    "text": "text",
    "text_on_primary": "text_on_primary",
    "textOnPrimary": "text_on_primary",
}


@dataclass
class SiteConfig:
    domain: str = "example.com"
    site_name: str = "Free Phone Service"
    keyword: str = "Free Government Phone"
    keyword_id: str = DEFAULT_KEYWORD_ID
    keyword_label: str = "Free Government Phone"
    owner_email: str = "admin@example.com"
    design_style: str = "basic"
    design_dna: Optional[Dict[str, Any]] = None
    environment: str = "staging"  # staging, production
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    version: str = "1.0.0"


# JSON key (as written by deployment) -> SiteConfig field
_CONFIG_KEYS = {
    "domain": "domain",
    "siteName": "site_name",
    "keyword": "keyword",
    "keywordId": "keyword_id",
    "keywordLabel": "keyword_label",
    "ownerEmail": "owner_email",
    "designStyle": "design_style",
    "designDNA": "design_dna",
    "environment": "environment",
    "createdAt": "created_at",
    "version": "version",
}


def normalize_domain(value: str) -> str:
    """
    Reduce a host or URL to a bare lowercase domain.

    >>> normalize_domain("https://WWW.Example.com:443/path")
    'example.com'
    """
    domain = value.strip().lower()
    domain = re.sub(r"^[a-z][a-z0-9+.-]*://", "", domain)
    domain = re.split(r"[/?#]", domain, maxsplit=1)[0]
    domain = domain.split(":", 1)[0]
    domain = domain.rstrip(".")
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def parse_site_config(data: Dict[str, Any]) -> SiteConfig:
    """Build a SiteConfig from deployment JSON; empty values keep defaults."""
    values: Dict[str, Any] = {}
    for json_key, attr in _CONFIG_KEYS.items():
        value = data.get(json_key, data.get(attr))
        if value:
            values[attr] = value

    config = SiteConfig(**values)
    config.domain = normalize_domain(config.domain)
    config.design_style = normalize_design_style(config.design_style)
    return config


def load_site_config(path: Optional[Path] = None) -> SiteConfig:
    """Load the site config file, or defaults when it is absent or unreadable."""
    path = path or SITE_CONFIG_PATH
    if not path.exists():
        logger.warning("Site config %s not found, using defaults", path)
        return SiteConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read site config %s: %s", path, e)
        return SiteConfig()

    if not isinstance(data, dict):
        logger.error("Site config %s is not a JSON object, using defaults", path)
        return SiteConfig()

    return parse_site_config(data)


def site_url(config: SiteConfig) -> str:
    return f"https://{config.domain}"


def _override_palette(colors: Dict[str, Any], base: ColorPalette) -> ColorPalette:
    values = {}
    for key, value in colors.items():
        attr = _PALETTE_KEYS.get(key)
        if attr and value:
            values[attr] = value
    return replace(base, **values)


def resolve_design_dna(config: SiteConfig) -> DesignDNA:
    """
    Design DNA for a site config.

    A hand-picked palette (and font pair) in ``design_dna`` wins; layout and
    advanced structure still come from the domain hash.
    """
    dna = generate_design_dna(config.domain, config.keyword, config.design_style)

    override = config.design_dna or {}
    colors = override.get("colors")
    if not colors:
        return dna

    palette = _override_palette(colors, dna.colors)
    gradients = Gradients(
        primary=f"linear-gradient(135deg, {palette.primary}, {palette.secondary})",
        hero=f"linear-gradient(180deg, {palette.primary}15 0%, {palette.background} 100%)",
        accent=f"linear-gradient(135deg, {palette.accent}, {palette.primary})",
    )

    fonts = dna.fonts
    override_fonts = override.get("fonts") or {}
    if override_fonts.get("heading") or override_fonts.get("body"):
        fonts = FontPair(
            heading=override_fonts.get("heading") or dna.fonts.heading,
            body=override_fonts.get("body") or dna.fonts.body,
        )

    return replace(dna, colors=palette, gradients=gradients, fonts=fonts)


def is_preview_host(host: str) -> bool:
    return host in PREVIEW_HOSTS or host.endswith(PREVIEW_HOST_SUFFIXES)


def canonical_redirect(host: str, path: str, query: str, configured_domain: str) -> Optional[str]:
    """
    Redirect target for a request, or None when the host is acceptable.

    Preview hosts and the configured domain (and its subdomains) pass; the
    ``www.`` variant and any foreign host get a 301 to the configured domain.
    """
    host = host.lower().split(":", 1)[0]
    domain = configured_domain.lower()
    query = query.lstrip("?")
    destination = f"https://{domain}{path}{('?' + query) if query else ''}"

    if is_preview_host(host):
        return None
    if host == f"www.{domain}":
        return destination
    if host == domain or host.endswith(f".{domain}"):
        return None
    return destination
