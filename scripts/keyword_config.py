#!/usr/bin/env python3
"""
Keyword registry.

Each keyword maps to a module folder of keyword-scoped variation tables under
``data/variations/keywords``. A keyword is only enabled once its tables are
complete; disabled entries are kept for phased rollout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from config import DEFAULT_KEYWORD_ID


@dataclass(frozen=True)
class KeywordConfig:
    id: str
    label: str
    module_folder: str
    category: str  # phone, program, benefit, service
    enabled: bool
    description: str = ""


AVAILABLE_KEYWORDS: List[KeywordConfig] = [
    KeywordConfig(
        id=DEFAULT_KEYWORD_ID,
        label="Free Government Phone",
        module_folder="free-government-phone",
        category="phone",
        enabled=True,
        description="Primary keyword targeting government phone assistance programs",
    ),
    KeywordConfig(
        id="lifeline-program",
        label="Lifeline Program",
        module_folder="lifeline-program",
        category="program",
        enabled=False,
        description="Planned keyword; variation tables not written yet",
    ),
]

_BY_ID: Dict[str, KeywordConfig] = {kw.id: kw for kw in AVAILABLE_KEYWORDS}


def get_keyword_config(keyword_id: str) -> Optional[KeywordConfig]:
    return _BY_ID.get(keyword_id)


def get_enabled_keywords() -> List[KeywordConfig]:
    return [kw for kw in AVAILABLE_KEYWORDS if kw.enabled]


def validate_keyword(keyword_id: str) -> bool:
    """True when the keyword exists and is enabled."""
    config = get_keyword_config(keyword_id)
    return config is not None and config.enabled


def get_keyword_label(keyword_id: str) -> str:
    config = get_keyword_config(keyword_id)
    return config.label if config else keyword_id


def get_keyword_module_folder(keyword_id: str) -> str:
    config = get_keyword_config(keyword_id)
    if config is None:
        raise KeyError(f"Invalid keyword ID: {keyword_id}")
    return config.module_folder


def get_all_keyword_ids() -> List[str]:
    return [kw.id for kw in AVAILABLE_KEYWORDS]


def is_keyword_module_available(keyword_id: str) -> bool:
    return get_keyword_config(keyword_id) is not None
