#!/usr/bin/env python3
"""
Keyword-scoped content variations.

Headlines, meta tags, FAQ items, and apply-page copy mention the keyword
naturally, so their tables live per keyword under
``data/variations/keywords/<module-folder>.json``. ``KeywordContent`` binds one
keyword's tables and exposes the selection functions for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from hash_utils import select_unique_variations, select_variation
from variation_tables import load_keyword_tables


class PageType(Enum):
    HOME = "home"
    ELIGIBILITY = "eligibility"
    APPLY = "apply"
    FAQ = "faq"
    PROVIDERS = "providers"
    PROGRAMS = "programs"
    CONTACT = "contact"


class MetaPage(Enum):
    HOME = "home"
    ELIGIBILITY = "eligibility"
    APPLY = "apply"
    FAQ = "faq"
    PROVIDERS = "providers"
    PROGRAMS = "programs"
    CONTACT = "contact"
    STATE = "state"
    CITY = "city"
    ACP = "acp"
    LIFELINE = "lifeline"
    TRIBAL = "tribal"
    STATE_PROGRAMS = "state-programs"
    EMERGENCY_BROADBAND = "emergency-broadband"

    @property
    def table_key(self) -> str:
        """Meta table (and context suffix) this page draws from."""
        return META_TABLE_FALLBACKS.get(self, self.value)


# Program pages without their own meta tables share the home ones.
META_TABLE_FALLBACKS: Dict[MetaPage, str] = {
    MetaPage.LIFELINE: "home",
    MetaPage.TRIBAL: "home",
    MetaPage.STATE_PROGRAMS: "home",
    MetaPage.EMERGENCY_BROADBAND: "home",
}


class FAQCategory(Enum):
    ELIGIBILITY = "eligibility"
    APPLICATION = "application"
    BENEFITS = "benefits"
    PROGRAMS = "programs"
    SUPPORT = "support"


TITLE_LENGTH = (50, 60)
DESCRIPTION_LENGTH = (150, 160)

TITLE_PADDINGS = (" | Apply Today", " | Get Started", " | Learn More", " | Check Now")
DESCRIPTION_PADDINGS = (
    " Learn more about federal communication assistance programs.",
    " Discover how to qualify and apply for free phone service.",
    " Find out if you qualify for federal communication benefits.",
)
DESCRIPTION_CONTEXT = (
    "Learn more about federal communication assistance programs and how to "
    "qualify for free phone service benefits."
)

# Order matters: ties go to the earlier category.
FAQ_CATEGORY_KEYWORDS: Dict[FAQCategory, Tuple[str, ...]] = {
    FAQCategory.ELIGIBILITY: (
        "qualify", "eligible", "qualification", "requirements", "income", "snap",
        "medicaid", "ssi", "credit", "seniors", "students",
    ),
    FAQCategory.APPLICATION: (
        "apply", "application", "documents", "proof", "activate", "activation",
        "receive", "approved", "denied", "appeal",
    ),
    FAQCategory.BENEFITS: (
        "get", "included", "data", "minutes", "texts", "service", "plan", "internet",
        "calling", "voicemail", "caller id", "hotspot", "speed",
    ),
    FAQCategory.PROGRAMS: (
        "program", "lifeline", "acp", "provider", "providers", "network", "switch",
        "available", "state",
    ),
    FAQCategory.SUPPORT: (
        "lost", "stolen", "requalify", "cancel", "working", "malfunction", "replacement",
        "upgrade", "move", "transfer", "keep number", "balance",
    ),
}

FAQ_SECTION_TITLES: Dict[FAQCategory, str] = {
    FAQCategory.ELIGIBILITY: "Eligibility Questions",
    FAQCategory.APPLICATION: "Application Process",
    FAQCategory.BENEFITS: "Benefits and Service",
    FAQCategory.PROGRAMS: "Programs and Providers",
    FAQCategory.SUPPORT: "Account Support",
}

DEFAULT_FAQ_COUNT = 10
FAQ_SECTION_ITEM_COUNT = 8
APPLY_TRUST_INDICATOR_COUNT = 3


@dataclass(frozen=True)
class MetaContent:
    title: str
    description: str


@dataclass(frozen=True)
class FAQItem:
    question: str
    answer: str


@dataclass(frozen=True)
class FAQContent:
    faqs: Tuple[FAQItem, ...]


@dataclass(frozen=True)
class FAQSection:
    title: str
    faqs: Tuple[FAQItem, ...]


@dataclass(frozen=True)
class FAQSections:
    sections: Dict[FAQCategory, FAQSection]


@dataclass(frozen=True)
class ApplyPageContent:
    headline: str
    subheadline: str
    instructions: str
    trust_indicators: Tuple[str, ...]
    privacy_statement: str


def ensure_length_optimal(
    text: str,
    min_length: int,
    max_length: int,
    context: Optional[str] = None,
    paddings: Tuple[str, ...] = (),
) -> str:
    """
    Fit text into [min_length, max_length] for search snippets.

    Long text is cut at a word boundary (when one falls in the last 30%) and
    ends in "...". Short text is extended with ``context`` if it is long
    enough, else with one of ``paddings``, else with spaces.
    """
    if len(text) > max_length:
        truncated = text[: max_length - 3]
        last_space = truncated.rfind(" ")
        if last_space > max_length * 0.7:
            return truncated[:last_space] + "..."
        return truncated + "..."

    if len(text) < min_length:
        needed = min_length - len(text)

        if context and needed <= len(context):
            return text + " " + context[: needed - 1]

        if paddings:
            padding = paddings[len(text) % len(paddings)]
            if len(text) + len(padding) <= max_length:
                return text + padding

        return text + " " * needed

    return text


def categorize_faq(faq: FAQItem) -> FAQCategory:
    """Category with the most keyword hits; benefits when nothing matches."""
    text = f"{faq.question} {faq.answer}".lower()
    scores = {
        category: sum(1 for word in words if word in text)
        for category, words in FAQ_CATEGORY_KEYWORDS.items()
    }
    best = max(scores.values())
    if best == 0:
        return FAQCategory.BENEFITS
    return next(category for category, score in scores.items() if score == best)


def _page(value: Union[PageType, str]) -> PageType:
    return value if isinstance(value, PageType) else PageType(value)


def _meta_page(value: Union[MetaPage, str]) -> MetaPage:
    return value if isinstance(value, MetaPage) else MetaPage(value)


class KeywordContent:
    """Selection functions bound to one keyword's variation tables."""

    def __init__(self, module_folder: str, tables: Optional[Mapping[str, Any]] = None):
        self.module_folder = module_folder
        self.tables = tables if tables is not None else load_keyword_tables(module_folder)
        self.label: str = self.tables["label"]
        self.faq_items: Tuple[FAQItem, ...] = tuple(
            FAQItem(question=self._render(item["question"]), answer=self._render(item["answer"]))
            for item in self.tables["faqs"]
        )

    def __repr__(self) -> str:
        return f"KeywordContent({self.module_folder!r})"

    def _render(self, template: str) -> str:
        """Fill the label placeholders: as written, lowercase, and sentence case."""
        lower = self.label.lower()
        return (
            template.replace("{keyword}", self.label)
            .replace("{keyword_lower}", lower)
            .replace("{keyword_sentence}", lower[:1].upper() + lower[1:])
        )

    def get_h1_variation(self, domain: str, page_type: Union[PageType, str] = PageType.HOME) -> str:
        page = _page(page_type)
        template = select_variation(domain, self.tables["h1"][page.value], f"h1-{page.value}")
        return self._render(template)

    def get_h2_variation(
        self,
        domain: str,
        page_type: Union[PageType, str] = PageType.HOME,
        position: int = 0,
    ) -> str:
        """H2 for one slot on a page; ``position`` separates the slots."""
        page = _page(page_type)
        template = select_variation(
            domain, self.tables["h2"][page.value], f"h2-{page.value}-{position}"
        )
        return self._render(template)

    def get_meta_variations(
        self,
        site_name: str,
        domain: str,
        page_type: Union[MetaPage, str] = MetaPage.HOME,
        state_name: Optional[str] = None,
        city_name: Optional[str] = None,
    ) -> MetaContent:
        key = _meta_page(page_type).table_key
        tables = self.tables["meta"][key]

        title = self._render(select_variation(domain, tables["titles"], f"meta-title-{key}"))
        description = self._render(
            select_variation(domain, tables["descriptions"], f"meta-desc-{key}")
        )

        if city_name:
            title = title.replace("{city}", city_name)
            description = description.replace("{city}", city_name)
        if state_name:
            title = title.replace("{state}", state_name)
            description = description.replace("{state}", state_name)

        return MetaContent(
            title=ensure_length_optimal(title, *TITLE_LENGTH, context=site_name, paddings=TITLE_PADDINGS),
            description=ensure_length_optimal(
                description, *DESCRIPTION_LENGTH, context=DESCRIPTION_CONTEXT, paddings=DESCRIPTION_PADDINGS
            ),
        )

    def get_faq_variations(self, domain: str, count: int = DEFAULT_FAQ_COUNT) -> FAQContent:
        """``count`` distinct FAQ items, capped at the table size."""
        count = min(count, len(self.faq_items))
        return FAQContent(faqs=tuple(select_unique_variations(domain, self.faq_items, count, "faq-items")))

    def get_faq_sections(self, domain: str) -> FAQSections:
        selected = select_unique_variations(
            domain, self.faq_items, min(FAQ_SECTION_ITEM_COUNT, len(self.faq_items)), "general-faq"
        )

        grouped: Dict[FAQCategory, List[FAQItem]] = {category: [] for category in FAQCategory}
        for faq in selected:
            grouped[categorize_faq(faq)].append(faq)

        return FAQSections(
            sections={
                category: FAQSection(title=FAQ_SECTION_TITLES[category], faqs=tuple(faqs))
                for category, faqs in grouped.items()
            }
        )

    def get_apply_page_variations(self, domain: str) -> ApplyPageContent:
        apply = self.tables["apply"]
        trust = select_unique_variations(
            domain, apply["trust_indicators"], APPLY_TRUST_INDICATOR_COUNT, "apply-trust"
        )
        return ApplyPageContent(
            headline=self._render(select_variation(domain, apply["headlines"], "apply-headline")),
            subheadline=self._render(select_variation(domain, apply["subheadlines"], "apply-subheadline")),
            instructions=self._render(select_variation(domain, apply["instructions"], "apply-instructions")),
            trust_indicators=tuple(self._render(t) for t in trust),
            privacy_statement=self._render(select_variation(domain, apply["privacy_statements"], "apply-privacy")),
        )
