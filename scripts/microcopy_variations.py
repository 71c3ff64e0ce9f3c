#!/usr/bin/env python3
"""
Microcopy: short UI strings (badges, nav labels, buttons, placeholders).

Every element is a member of the closed ``Microcopy`` enum, bound to its table
when the module is imported. Each element draws with its own context label, so
two elements on the same site vary independently.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

from hash_utils import select_variation
from variation_tables import MICROCOPY_TABLES


class Microcopy(Enum):
    URGENCY_BADGE = "urgency_badge"
    SECONDARY_HEADLINE = "secondary_headline"
    LEARN_MORE = "learn_more"
    VIEW_PROGRAMS = "view_programs"
    ELIGIBILITY_NAV = "eligibility_nav"
    GET_STARTED_CTA = "get_started_cta"
    LIFELINE_PROGRAM = "lifeline_program"
    ACP_PROGRAM = "acp_program"
    TRIBAL_PROGRAMS = "tribal_programs"
    STATE_PROGRAMS = "state_programs"
    CONTACT_US = "contact_us"
    ALL_STATES = "all_states"
    SIMILAR_CITIES = "similar_cities"
    RELATED_CONTENT = "related_content"
    RELATED_CONTENT_SUBTITLE = "related_content_subtitle"
    STATE_SELECTOR_SEARCH = "state_selector_search"
    POPULAR_STATES = "popular_states"
    SHOW_ALL_STATES = "show_all_states"
    BROWSE_CITIES = "browse_cities"
    EXPLORE_ALL_STATES = "explore_all_states"
    MOST_POPULAR_CITIES = "most_popular_cities"
    LOADING_STATES = "loading_states"
    LIMITED_TIME_STICKY = "limited_time_sticky"
    COUNTDOWN_LABEL = "countdown_label"
    COUNTDOWN_MESSAGE = "countdown_message"
    CHECK_ELIGIBILITY_CTA = "check_eligibility_cta"
    CHECK_ELIGIBILITY_BUTTON = "check_eligibility_button"
    SEARCH_PLACEHOLDER = "search_placeholder"

    def __init__(self, key: str):
        self.table: Tuple[Any, ...] = MICROCOPY_TABLES[key]

    @property
    def context(self) -> str:
        return "microcopy-" + self.value.replace("_", "-")


@dataclass(frozen=True)
class UrgencyBadge:
    mobile: str
    desktop: str


def get_microcopy_text(domain: str, element: Union[Microcopy, str]) -> Union[str, UrgencyBadge]:
    """
    Text for one UI element.

    Raises:
        ValueError: If ``element`` is a string naming no known element
    """
    item = element if isinstance(element, Microcopy) else Microcopy(element)
    value = select_variation(domain, item.table, item.context)
    if item is Microcopy.URGENCY_BADGE:
        return UrgencyBadge(mobile=value["mobile"], desktop=value["desktop"])
    return value


def get_microcopy(domain: str) -> Dict[str, Union[str, UrgencyBadge]]:
    """All microcopy for a site, keyed by element value."""
    return {item.value: get_microcopy_text(domain, item) for item in Microcopy}
