#!/usr/bin/env python3
"""
Keyword module loader.

Resolves a keyword id to its variation tables and returns one bundle holding
the keyword-scoped functions alongside the global ones. Unknown or disabled
ids never fail a build: they log a warning and resolve to the default keyword.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from functools import lru_cache
from typing import Callable, List, Optional

import global_variations
import keyword_config
from config import DEFAULT_KEYWORD_ID, setup_logging
from keyword_variations import KeywordContent

logger = setup_logging("keyword_loader")


@dataclass(frozen=True)
class KeywordVariations:
    """Keyword-scoped and global variation functions for one keyword."""

    keyword_id: str
    requested_id: Optional[str]
    label: str
    fallback: bool

    # Keyword-scoped
    get_h1_variation: Callable
    get_h2_variation: Callable
    get_meta_variations: Callable
    get_faq_variations: Callable
    get_faq_sections: Callable
    get_apply_page_variations: Callable

    # Global
    get_form_variations: Callable
    get_trust_variations: Callable
    get_program_variations: Callable
    get_provider_variations: Callable
    get_schema_variations: Callable
    get_cta_variation: Callable

    def function_names(self) -> List[str]:
        return [f.name for f in fields(self) if f.name.startswith("get_")]


def normalize_keyword_id(keyword_id: Optional[str]) -> str:
    """Trim and lowercase; empty or non-string ids become the default id."""
    if isinstance(keyword_id, str) and keyword_id.strip():
        return keyword_id.strip().lower()
    logger.warning("Invalid keyword ID %r. Falling back to %r.", keyword_id, DEFAULT_KEYWORD_ID)
    return DEFAULT_KEYWORD_ID


def resolve_keyword_id(normalized: str) -> str:
    """Enabled keyword id for a normalized id, or the default id."""
    if keyword_config.validate_keyword(normalized):
        return normalized

    logger.warning(
        "Keyword %r not found or disabled. Falling back to %r module.",
        normalized,
        DEFAULT_KEYWORD_ID,
    )
    return DEFAULT_KEYWORD_ID


@lru_cache(maxsize=None)
def _keyword_content(module_folder: str) -> KeywordContent:
    return KeywordContent(module_folder)


def load_keyword_variations(keyword_id: Optional[str]) -> KeywordVariations:
    """
    Load the variation bundle for a keyword.

    Args:
        keyword_id: Keyword identifier (e.g. "free-government-phone"); any
            casing or surrounding whitespace is accepted

    Returns:
        A bundle for the resolved keyword. ``fallback`` is True when the
        requested id was replaced by the default.
    """
    normalized = normalize_keyword_id(keyword_id)
    resolved = resolve_keyword_id(normalized)
    content = _keyword_content(keyword_config.get_keyword_module_folder(resolved))

    return KeywordVariations(
        keyword_id=resolved,
        requested_id=keyword_id,
        label=content.label,
        fallback=resolved != normalized or not (isinstance(keyword_id, str) and keyword_id.strip()),
        get_h1_variation=content.get_h1_variation,
        get_h2_variation=content.get_h2_variation,
        get_meta_variations=content.get_meta_variations,
        get_faq_variations=content.get_faq_variations,
        get_faq_sections=content.get_faq_sections,
        get_apply_page_variations=content.get_apply_page_variations,
        get_form_variations=global_variations.get_form_variations,
        get_trust_variations=global_variations.get_trust_variations,
        get_program_variations=global_variations.get_program_variations,
        get_provider_variations=global_variations.get_provider_variations,
        get_schema_variations=global_variations.get_schema_variations,
        get_cta_variation=global_variations.get_cta_variation,
    )


def can_load_keyword(keyword_id: str) -> bool:
    return keyword_config.validate_keyword(keyword_id)


def get_keyword_label(keyword_id: str) -> str:
    return keyword_config.get_keyword_label(keyword_id)
