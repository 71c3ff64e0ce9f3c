#!/usr/bin/env python3
"""Tests for keyword-scoped content selection."""

import pytest


LABEL = "Free Government Phone"


@pytest.fixture
def content():
    from keyword_variations import KeywordContent

    return KeywordContent("free-government-phone")


def test_h1_renders_keyword_label(content):
    for page in ["home", "eligibility", "apply", "faq", "providers", "programs", "contact"]:
        h1 = content.get_h1_variation("example.com", page)
        assert LABEL in h1
        assert "{keyword}" not in h1


def test_h1_unknown_page_type_is_rejected(content):
    with pytest.raises(ValueError):
        content.get_h1_variation("example.com", "blog")


def test_h2_position_decorrelates_slots(content):
    h2s = {content.get_h2_variation("example.com", "home", position) for position in range(6)}
    assert len(h2s) > 1
    assert content.get_h2_variation("example.com", "home", 2) == content.get_h2_variation(
        "example.com", "home", 2
    )


def test_meta_lengths_are_bounded(content):
    for i in range(50):
        meta = content.get_meta_variations("Phone Help Center", f"site-{i}.com", "home")
        assert len(meta.title) <= 60
        assert len(meta.description) <= 160


def test_meta_state_and_city_placeholders(content):
    meta = content.get_meta_variations("Site", "example.com", "state", state_name="Texas")
    assert "Texas" in meta.title
    assert "{state}" not in meta.title + meta.description

    city = content.get_meta_variations(
        "Site", "example.com", "city", state_name="Texas", city_name="Austin"
    )
    assert "{city}" not in city.title + city.description
    assert "{state}" not in city.title + city.description


def test_keyword_tables_only_name_the_label_through_placeholders():
    from variation_audit import find_keyword_mentions
    from variation_tables import load_keyword_tables

    tables = load_keyword_tables("free-government-phone")
    body = {key: value for key, value in tables.items() if key != "label"}

    assert find_keyword_mentions(body, [LABEL]) == []


@pytest.fixture
def relabeled():
    from keyword_variations import KeywordContent
    from variation_tables import load_keyword_tables

    tables = dict(load_keyword_tables("free-government-phone"))
    tables["label"] = "Lifeline Phone Service"
    return KeywordContent("free-government-phone", tables)


def test_faqs_render_label_in_every_casing(relabeled):
    text = " ".join(f"{faq.question} {faq.answer}" for faq in relabeled.faq_items)

    assert "{keyword" not in text
    assert LABEL.lower() not in text.lower()
    assert "Lifeline Phone Service" in text


def test_h2_and_meta_render_relabeled_keyword(relabeled):
    outputs = []
    for i in range(30):
        domain = f"site-{i}.com"
        for page in ["home", "eligibility", "apply", "faq", "providers", "programs", "contact"]:
            outputs.append(relabeled.get_h2_variation(domain, page))
            meta = relabeled.get_meta_variations("Site", domain, page)
            outputs.extend([meta.title, meta.description])

    text = " ".join(outputs)
    assert "{keyword" not in text
    assert LABEL.lower() not in text.lower()
    assert "lifeline phone service" in text.lower()


@pytest.mark.parametrize("page", ["lifeline", "tribal", "state-programs", "emergency-broadband"])
def test_program_pages_share_home_meta(content, page):
    for i in range(20):
        domain = f"site-{i}.com"
        assert content.get_meta_variations("Site", domain, page) == content.get_meta_variations(
            "Site", domain, "home"
        )


def test_meta_unknown_page_type_is_rejected(content):
    with pytest.raises(ValueError):
        content.get_meta_variations("Site", "example.com", "blog")


def test_ensure_length_optimal_truncates_on_word_boundary():
    from keyword_variations import ensure_length_optimal

    text = " ".join(["word"] * 20)
    result = ensure_length_optimal(text, 50, 60)

    assert result == " ".join(["word"] * 11) + "..."
    assert len(result) <= 60


def test_ensure_length_optimal_pads_with_context():
    from keyword_variations import ensure_length_optimal

    result = ensure_length_optimal(
        "Short title", 50, 60, context="My Site Name That Is Quite Long Indeed For Padding Purposes"
    )
    assert len(result) == 50
    assert result.startswith("Short title My Site")


def test_ensure_length_optimal_pads_with_fixed_phrase():
    from keyword_variations import TITLE_PADDINGS, ensure_length_optimal

    text = "x" * 45
    assert ensure_length_optimal(text, 50, 60, paddings=TITLE_PADDINGS) == text + " | Get Started"


def test_ensure_length_optimal_leaves_fitting_text_alone():
    from keyword_variations import ensure_length_optimal

    text = "y" * 55
    assert ensure_length_optimal(text, 50, 60, context="ignored") == text


def test_faq_variations_are_distinct_and_capped(content):
    faqs = content.get_faq_variations("example.com").faqs
    assert len(faqs) == 10
    assert len(set(faqs)) == 10

    everything = content.get_faq_variations("example.com", count=500).faqs
    assert len(everything) == len(content.faq_items)


def test_faq_sections_hold_eight_distinct_items(content):
    from keyword_variations import FAQCategory

    sections = content.get_faq_sections("example.com").sections
    assert list(sections) == list(FAQCategory)

    items = [faq for section in sections.values() for faq in section.faqs]
    assert len(items) == 8
    assert len(set(items)) == 8
    assert sections[FAQCategory.ELIGIBILITY].title == "Eligibility Questions"


def test_categorize_faq_scores_keywords():
    from keyword_variations import FAQCategory, FAQItem, categorize_faq

    assert categorize_faq(
        FAQItem("How do I apply?", "Submit your application with proof of income.")
    ) == FAQCategory.APPLICATION
    assert categorize_faq(FAQItem("Hello?", "Yes.")) == FAQCategory.BENEFITS
    # One hit each for eligibility and support; the earlier category wins.
    assert categorize_faq(FAQItem("lost", "income")) == FAQCategory.ELIGIBILITY


def test_apply_page_content(content):
    apply = content.get_apply_page_variations("example.com")

    assert apply.headline
    assert len(apply.trust_indicators) == 3
    assert len(set(apply.trust_indicators)) == 3
    assert apply == content.get_apply_page_variations("example.com")
