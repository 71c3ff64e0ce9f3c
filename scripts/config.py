#!/usr/bin/env python3
"""
Shared configuration for the variation engine scripts.

Paths, environment settings, cache TTLs, and the logging setup used by every
module in this directory.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv


ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"
VARIATIONS_DIR = DATA_DIR / "variations"
KEYWORD_TABLES_DIR = VARIATIONS_DIR / "keywords"

load_dotenv(ROOT_DIR / ".env")


def sanitize_env_var(value: Optional[str]) -> Optional[str]:
    """
    Undo the ways deploy dashboards mangle pasted values.

    Strips literal and escaped newlines, a leading ``KEY=`` prefix, surrounding
    quotes, trailing slashes after a host or path, and whitespace. Returns None
    for empty results.
    """
    if not value:
        return None

    value = value.replace("\\n", "").replace("\n", "").replace("\r", "")

    match = re.match(r"^[A-Z_]+=(.+)$", value, re.DOTALL)
    if match:
        value = match.group(1)

    value = re.sub(r"^[\"']|[\"']$", "", value)
    value = re.sub(r"([^:/])/+$", r"\1", value)
    value = value.strip()

    return value or None


def _env(*names: str) -> Optional[str]:
    for name in names:
        value = sanitize_env_var(os.getenv(name))
        if value:
            return value
    return None


SITE_CONFIG_PATH = Path(os.getenv("SITE_CONFIG_PATH", str(DATA_DIR / "site-config.json")))
SUPABASE_URL = _env("SUPABASE_URL", "PUBLIC_SUPABASE_URL")
SUPABASE_ANON_KEY = _env("SUPABASE_ANON_KEY", "PUBLIC_SUPABASE_ANON_KEY")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Only keyword with complete variation tables; every unknown id resolves here.
DEFAULT_KEYWORD_ID = "free-government-phone"

# Cache lifetimes in seconds for data fetched by the page layer.
CACHE_TTL: Dict[str, float] = {
    "homepage": 5 * 60,
    "state_page": 10 * 60,
    "city_page": 15 * 60,
    "static_data": 60 * 60,
    "sitemap": 30 * 60,
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(name: str) -> logging.Logger:
    """Return a module logger with a single stream handler attached."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return logger
