#!/usr/bin/env python3
"""
Global content variations shared by every keyword.

Form labels, trust copy, program descriptions, provider intros, HowTo steps,
and CTA button text. None of these tables mention a keyword label, so they can
be rendered on any site regardless of its keyword.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from hash_utils import select_unique_variations, select_variation
from variation_tables import GLOBAL_TABLES


class FormField(Enum):
    """Form elements, each bound to its context label and label table."""

    FIRST_NAME = ("form-firstname", "first_name_labels")
    LAST_NAME = ("form-lastname", "last_name_labels")
    EMAIL = ("form-email", "email_labels")
    PHONE = ("form-phone", "phone_labels")
    ADDRESS = ("form-address", "address_labels")
    CITY = ("form-city", "city_labels")
    STATE = ("form-state", "state_labels")
    ZIP = ("form-zip", "zip_labels")
    DOB = ("form-dob", "dob_labels")
    INSTRUCTIONS = ("form-instructions", "form_instructions")
    SUBMIT = ("form-submit", "submit_buttons")

    def __init__(self, context: str, table_key: str):
        self.context = context
        self.table: Tuple[str, ...] = GLOBAL_TABLES["forms"][table_key]


class TrustElement(Enum):
    INDICATORS = ("trust-indicators", "trust_indicators")
    PRIVACY = ("privacy", "privacy_statements")
    SECURITY = ("security", "security_messages")

    def __init__(self, context: str, table_key: str):
        self.context = context
        self.table: Tuple[str, ...] = GLOBAL_TABLES["trust"][table_key]


class ProgramElement(Enum):
    LIFELINE = ("program-lifeline", "lifeline_descriptions")
    ACP = ("program-acp", "acp_descriptions")
    TRIBAL = ("program-tribal", "tribal_descriptions")
    ELIGIBILITY = ("program-eligibility", "eligibility_info")

    def __init__(self, context: str, table_key: str):
        self.context = context
        self.table: Tuple[str, ...] = GLOBAL_TABLES["programs"][table_key]


class CtaContext(Enum):
    """Pages that carry a CTA button; the value is the page part of ``cta-<page>``."""

    DEFAULT = "default"
    HOME = "home"
    HERO = "hero"
    ELIGIBILITY = "eligibility"
    PROGRAMS = "programs"
    PROVIDERS = "providers"
    FAQ = "faq"
    CONTACT = "contact"
    STATE = "state"
    CITY = "city"
    FOOTER = "footer"

    @property
    def context(self) -> str:
        return f"cta-{self.value}"


PROVIDER_INTROS: Tuple[str, ...] = GLOBAL_TABLES["providers"]["provider_intros"]
HOWTO_STEPS: Tuple[Tuple[str, ...], ...] = GLOBAL_TABLES["schema"]["howto_steps"]
CTA_TEXTS: Tuple[str, ...] = GLOBAL_TABLES["cta"]["cta_texts"]

TRUST_INDICATOR_COUNT = 3


@dataclass(frozen=True)
class FormLabels:
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip: str
    dob: str


@dataclass(frozen=True)
class FormContent:
    labels: FormLabels
    instructions: str
    submit_button: str


@dataclass(frozen=True)
class TrustContent:
    trust_indicators: Tuple[str, ...]
    privacy_statement: str
    security_message: str


@dataclass(frozen=True)
class ProgramContent:
    lifeline_description: str
    acp_description: str
    tribal_description: str
    eligibility_info: str


@dataclass(frozen=True)
class ProviderContent:
    intro_text: str


@dataclass(frozen=True)
class SchemaContent:
    howto_steps: Tuple[str, ...]

    def to_json_ld(self, site_url: str, name: str) -> Dict:
        """schema.org HowTo block for the application flow."""
        return {
            "@context": "https://schema.org",
            "@type": "HowTo",
            "name": name,
            "url": site_url,
            "step": [
                {"@type": "HowToStep", "position": i, "name": step}
                for i, step in enumerate(self.howto_steps, start=1)
            ],
        }


def _pick(domain: str, element: Union[FormField, TrustElement, ProgramElement]) -> str:
    return select_variation(domain, element.table, element.context)


def get_form_variations(domain: str) -> FormContent:
    return FormContent(
        labels=FormLabels(
            first_name=_pick(domain, FormField.FIRST_NAME),
            last_name=_pick(domain, FormField.LAST_NAME),
            email=_pick(domain, FormField.EMAIL),
            phone=_pick(domain, FormField.PHONE),
            address=_pick(domain, FormField.ADDRESS),
            city=_pick(domain, FormField.CITY),
            state=_pick(domain, FormField.STATE),
            zip=_pick(domain, FormField.ZIP),
            dob=_pick(domain, FormField.DOB),
        ),
        instructions=_pick(domain, FormField.INSTRUCTIONS),
        submit_button=_pick(domain, FormField.SUBMIT),
    )


def get_trust_variations(domain: str) -> TrustContent:
    # Three independent draws could repeat an indicator on the same page.
    indicators = select_unique_variations(
        domain, TrustElement.INDICATORS.table, TRUST_INDICATOR_COUNT, TrustElement.INDICATORS.context
    )
    return TrustContent(
        trust_indicators=tuple(indicators),
        privacy_statement=_pick(domain, TrustElement.PRIVACY),
        security_message=_pick(domain, TrustElement.SECURITY),
    )


def get_program_variations(domain: str) -> ProgramContent:
    return ProgramContent(
        lifeline_description=_pick(domain, ProgramElement.LIFELINE),
        acp_description=_pick(domain, ProgramElement.ACP),
        tribal_description=_pick(domain, ProgramElement.TRIBAL),
        eligibility_info=_pick(domain, ProgramElement.ELIGIBILITY),
    )


def get_provider_variations(domain: str) -> ProviderContent:
    return ProviderContent(intro_text=select_variation(domain, PROVIDER_INTROS, "provider-intro"))


def get_schema_variations(domain: str) -> SchemaContent:
    return SchemaContent(howto_steps=select_variation(domain, HOWTO_STEPS, "schema-howto"))


def get_cta_variation(domain: str, context: Union[CtaContext, str] = CtaContext.DEFAULT) -> str:
    """
    CTA button text for one page context.

    Args:
        domain: Site domain
        context: A ``CtaContext`` member or its value (e.g. "faq")

    Raises:
        ValueError: If ``context`` names no known CTA context
    """
    cta_context = context if isinstance(context, CtaContext) else CtaContext(context)
    return select_variation(domain, CTA_TEXTS, cta_context.context)


def content_as_dict(content) -> Dict:
    """JSON-ready view of any content dataclass: tuples as lists, enum keys as values."""
    def _listify(value):
        if isinstance(value, tuple):
            return [_listify(v) for v in value]
        if isinstance(value, dict):
            return {(k.value if isinstance(k, Enum) else k): _listify(v) for k, v in value.items()}
        return value

    return _listify(asdict(content))

