#!/usr/bin/env python3
"""Tests for the Design DNA generator."""

import logging

import pytest


KEYWORD = "Free Government Phone"


def test_basic_dna_is_stable_for_known_domain():
    """Known domain should always map to the same palette, fonts, and layout."""
    from design_dna import generate_design_dna

    dna = generate_design_dna("example.com", KEYWORD, "basic")

    assert dna.design_style == "basic"
    assert dna.colors.primary == "#FF8A65"
    assert dna.colors.secondary == "#FF7043"
    assert dna.colors.accent == "#4DD0E1"
    assert dna.fonts.heading == "Nunito"
    assert dna.fonts.body == "Nunito Sans"
    assert (dna.layout.hero_style, dna.layout.card_style, dna.layout.cta_style) == (
        "centered",
        "rounded",
        "pill",
    )
    assert dna.advanced_layout is None


def test_advanced_dna_is_stable_for_known_domain():
    from design_dna import generate_design_dna

    adv = generate_design_dna("example.com", KEYWORD, "advanced").advanced_layout

    assert adv is not None
    assert adv.hero_variant == "card-overlay"
    assert adv.section_order == ("how_it_works", "programs", "features", "cta", "states", "cities")
    assert adv.card_layout == "list"
    assert adv.nav_style == "floating"
    assert adv.footer_style == "gradient"
    assert adv.button_style == "outline"


def test_dna_follows_seed_derivation():
    from design_dna import COLOR_PALETTES, FONT_PAIRS, LAYOUT_OPTIONS, generate_design_dna
    from hash_utils import hash_string

    domain, keyword = "benefits-now.org", KEYWORD
    dna = generate_design_dna(domain, keyword)

    assert dna.colors == COLOR_PALETTES[hash_string(domain + keyword) % len(COLOR_PALETTES)]
    assert dna.fonts == FONT_PAIRS[hash_string(domain[::-1]) % len(FONT_PAIRS)]

    seed = hash_string(keyword + domain)
    assert dna.layout.hero_style == LAYOUT_OPTIONS["hero_styles"][seed % 3]
    assert dna.layout.card_style == LAYOUT_OPTIONS["card_styles"][(seed >> 2) % 3]
    assert dna.layout.cta_style == LAYOUT_OPTIONS["cta_styles"][(seed >> 4) % 3]


def test_fonts_do_not_depend_on_keyword():
    from design_dna import generate_design_dna

    assert generate_design_dna("a-site.com", "one").fonts == generate_design_dna("a-site.com", "two").fonts


def test_gradients_use_palette_colors():
    from design_dna import generate_design_dna

    dna = generate_design_dna("example.com", KEYWORD)
    c = dna.colors
    assert dna.gradients.primary == f"linear-gradient(135deg, {c.primary} 0%, {c.secondary} 100%)"
    assert dna.gradients.hero == (
        f"linear-gradient(135deg, {c.primary} 0%, {c.secondary} 50%, {c.accent} 100%)"
    )
    assert dna.gradients.accent == f"linear-gradient(135deg, {c.accent} 0%, {c.primary} 100%)"


def test_palettes_vary_across_domains():
    from design_dna import generate_design_dna

    primaries = {generate_design_dna(f"site-{i}.com", KEYWORD).colors.primary for i in range(200)}
    assert len(primaries) > 30


def test_invalid_design_style_falls_back_to_basic(caplog):
    from design_dna import generate_design_dna

    with caplog.at_level(logging.WARNING):
        dna = generate_design_dna("example.com", KEYWORD, "fancy")

    assert dna.design_style == "basic"
    assert dna.advanced_layout is None
    assert "Invalid design style" in caplog.text


def test_unique_combinations_are_exact_products():
    from design_dna import calculate_unique_combinations

    assert calculate_unique_combinations("basic") == 99 * 30 * 3 * 3 * 3
    assert calculate_unique_combinations("advanced") == 78_829_977_600_000


def _custom_dna(primary="#1a2b3c", heading="Open Sans", body="Open Sans", style="basic", advanced=None):
    from design_dna import BasicLayout, ColorPalette, DesignDNA, FontPair, build_gradients

    colors = ColorPalette(
        primary=primary,
        secondary="#222222",
        accent="#333333",
        background="#FFFFFF",
        text="#000000",
        text_on_primary="#FFFFFF",
    )
    return DesignDNA(
        design_style=style,
        colors=colors,
        gradients=build_gradients(colors),
        fonts=FontPair(heading=heading, body=body),
        layout=BasicLayout(hero_style="centered", card_style="sharp", cta_style="square"),
        advanced_layout=advanced,
    )


def test_css_variables_for_basic_dna():
    from design_dna import generate_css_variables

    css = generate_css_variables(_custom_dna())

    assert "--color-primary: #1a2b3c;" in css
    assert "--color-primary-light: rgba(26, 43, 60, 0.1);" in css
    assert "--font-heading: 'Open Sans', sans-serif;" in css
    assert "--border-radius" not in css


@pytest.mark.parametrize(
    "primary,expected",
    [
        ("#fff", "rgba(255, 255, 255, 0.1)"),
        ("#1A2", "rgba(17, 170, 34, 0.1)"),
        ("navy", "color-mix(in srgb, navy 10%, transparent)"),
        ("rgb(0, 0, 128)", "color-mix(in srgb, rgb(0, 0, 128) 10%, transparent)"),
    ],
)
def test_css_variables_accept_short_hex_and_named_colors(primary, expected):
    from design_dna import generate_css_variables

    css = generate_css_variables(_custom_dna(primary=primary))
    assert f"--color-primary-light: {expected};" in css


def test_css_variables_for_advanced_dna_include_scales():
    from design_dna import generate_css_variables, generate_design_dna

    dna = generate_design_dna("example.com", KEYWORD, "advanced")
    css = generate_css_variables(dna)

    assert "--border-radius:" in css
    assert "--spacing-scale:" in css
    assert "--typography-scale:" in css
    assert "--shadow:" in css


def test_google_fonts_url_dedupes_single_family():
    from design_dna import get_google_fonts_url

    url = get_google_fonts_url(_custom_dna())
    assert url == "https://fonts.googleapis.com/css2?family=Open+Sans:wght@400;500;600;700&display=swap"


def test_google_fonts_url_with_two_families():
    from design_dna import get_google_fonts_url

    url = get_google_fonts_url(_custom_dna(heading="Playfair Display", body="Source Sans Pro"))
    assert url == (
        "https://fonts.googleapis.com/css2?"
        "family=Playfair+Display:wght@400;500;600;700&"
        "family=Source+Sans+Pro:wght@400;500;600;700&display=swap"
    )


def test_advanced_layout_classes():
    from design_dna import generate_design_dna, get_advanced_layout_classes

    assert get_advanced_layout_classes(generate_design_dna("example.com", KEYWORD)) == {}

    dna = generate_design_dna("example.com", KEYWORD, "advanced")
    classes = get_advanced_layout_classes(dna)
    assert classes["hero_class"] == "hero-card-overlay"
    assert classes["card_container_class"] == "cards-list"
    assert classes["nav_class"] == "nav-floating"
    assert classes["button_class"] == "btn-outline"
    assert set(classes) == {
        "hero_class",
        "card_container_class",
        "nav_class",
        "footer_class",
        "animation_class",
        "background_class",
        "button_class",
        "image_class",
        "cta_class",
    }


@pytest.mark.parametrize("pattern", ["dots", "grid", "gradient-mesh"])
def test_background_pattern_css_uses_primary_color(pattern):
    from design_dna import get_background_pattern_css

    assert "#123456" in get_background_pattern_css(pattern, "#123456")


def test_background_pattern_css_escapes_color_in_svg():
    from design_dna import get_background_pattern_css

    css = get_background_pattern_css("waves", "#123456")
    assert "fill='%23123456'" in css
    assert get_background_pattern_css("none", "#123456") == ""


def test_dna_to_dict_is_json_ready():
    import json

    from design_dna import generate_design_dna

    data = generate_design_dna("example.com", KEYWORD, "advanced").to_dict()
    encoded = json.loads(json.dumps(data))
    assert encoded["colors"]["primary"] == "#FF8A65"
    assert isinstance(encoded["advanced_layout"]["section_order"], list)
