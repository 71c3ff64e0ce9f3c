#!/usr/bin/env python3
"""
Design DNA Generator - unique visual styling for each site from its domain.

Two design styles:
- basic: palette, font pairing, and a small layout triple
- advanced: everything in basic plus thirteen structural dimensions and a
  section-order permutation

All choices are pure functions of (domain, keyword); nothing is random and
nothing is stored.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

from config import setup_logging
from hash_utils import hash_string
from variation_tables import DESIGN_TABLES

logger = setup_logging("design_dna")

BASIC = "basic"
ADVANCED = "advanced"
DESIGN_STYLES = (BASIC, ADVANCED)


@dataclass(frozen=True)
class ColorPalette:
    primary: str
    secondary: str
    accent: str
    background: str
    text: str
    text_on_primary: str


@dataclass(frozen=True)
class FontPair:
    heading: str
    body: str


@dataclass(frozen=True)
class Gradients:
    primary: str
    hero: str
    accent: str


@dataclass(frozen=True)
class BasicLayout:
    hero_style: str  # centered, left-aligned, split
    card_style: str  # rounded, sharp, minimal
    cta_style: str  # pill, square, rounded


@dataclass(frozen=True)
class AdvancedLayoutConfig:
    """Structural variations used only in advanced mode."""
    hero_variant: str
    section_order: Tuple[str, ...]
    card_layout: str
    nav_style: str
    footer_style: str
    spacing_scale: str
    animation_style: str
    border_radius: str
    shadow_style: str
    background_pattern: str
    cta_placement: str
    typography_scale: str
    image_style: str
    button_style: str


@dataclass(frozen=True)
class DesignDNA:
    """Full style descriptor for one site."""
    design_style: str
    colors: ColorPalette
    gradients: Gradients
    fonts: FontPair
    layout: BasicLayout
    advanced_layout: Optional[AdvancedLayoutConfig] = None

    def to_dict(self) -> Dict:
        data = asdict(self)
        if self.advanced_layout is not None:
            data["advanced_layout"]["section_order"] = list(self.advanced_layout.section_order)
        return data


COLOR_PALETTES: Tuple[ColorPalette, ...] = tuple(
    ColorPalette(**palette) for palette in DESIGN_TABLES["color_palettes"]
)
FONT_PAIRS: Tuple[FontPair, ...] = tuple(FontPair(**pair) for pair in DESIGN_TABLES["font_pairs"])
LAYOUT_OPTIONS = DESIGN_TABLES["layout_options"]
ADVANCED_LAYOUT_OPTIONS = DESIGN_TABLES["advanced_layout_options"]
SECTION_ORDERS: Tuple[Tuple[str, ...], ...] = DESIGN_TABLES["section_orders"]

# Advanced dimension -> table key, in the order they appear on the config.
ADVANCED_DIMENSIONS: Tuple[Tuple[str, str], ...] = (
    ("hero_variant", "hero_variants"),
    ("card_layout", "card_layouts"),
    ("nav_style", "nav_styles"),
    ("footer_style", "footer_styles"),
    ("spacing_scale", "spacing_scales"),
    ("animation_style", "animation_styles"),
    ("border_radius", "border_radii"),
    ("shadow_style", "shadow_styles"),
    ("background_pattern", "background_patterns"),
    ("cta_placement", "cta_placements"),
    ("typography_scale", "typography_scales"),
    ("image_style", "image_styles"),
    ("button_style", "button_styles"),
)

BORDER_RADIUS_VALUES = {"none": "0", "small": "4px", "medium": "8px", "large": "16px", "full": "9999px"}
SPACING_SCALE_VALUES = {"compact": "0.75", "balanced": "1", "generous": "1.25", "dramatic": "1.5"}
TYPOGRAPHY_SCALE_VALUES = {"compact": "0.9", "standard": "1", "large": "1.1", "dramatic": "1.25"}


def normalize_design_style(design_style: Optional[str]) -> str:
    """Unknown design styles render as basic rather than failing the build."""
    value = (design_style or "").strip().lower()
    if value in DESIGN_STYLES:
        return value
    logger.warning("Invalid design style %r, falling back to %r", design_style, BASIC)
    return BASIC


def _reverse(text: str) -> str:
    return text[::-1]


def _pick(options: Tuple[str, ...], seed: int) -> str:
    return options[seed % len(options)]


def build_gradients(colors: ColorPalette) -> Gradients:
    return Gradients(
        primary=f"linear-gradient(135deg, {colors.primary} 0%, {colors.secondary} 100%)",
        hero=(
            f"linear-gradient(135deg, {colors.primary} 0%, {colors.secondary} 50%, "
            f"{colors.accent} 100%)"
        ),
        accent=f"linear-gradient(135deg, {colors.accent} 0%, {colors.primary} 100%)",
    )


def generate_basic_layout(domain: str, keyword: str = "") -> BasicLayout:
    # One seed, shifted twice, yields three quasi-independent picks.
    layout_seed = hash_string(keyword + domain)
    return BasicLayout(
        hero_style=_pick(LAYOUT_OPTIONS["hero_styles"], layout_seed),
        card_style=_pick(LAYOUT_OPTIONS["card_styles"], layout_seed >> 2),
        cta_style=_pick(LAYOUT_OPTIONS["cta_styles"], layout_seed >> 4),
    )


def generate_advanced_layout(domain: str, keyword: str = "") -> AdvancedLayoutConfig:
    """Thirteen structural dimensions plus a section order for advanced mode."""
    seed1 = hash_string(domain)
    seed2 = hash_string(keyword + domain)
    seed3 = hash_string(_reverse(domain))
    seed4 = hash_string(domain + keyword + "layout")
    seed5 = hash_string(_reverse(keyword) + domain)

    opts = ADVANCED_LAYOUT_OPTIONS
    return AdvancedLayoutConfig(
        hero_variant=_pick(opts["hero_variants"], seed1),
        section_order=SECTION_ORDERS[seed2 % len(SECTION_ORDERS)],
        card_layout=_pick(opts["card_layouts"], seed3),
        nav_style=_pick(opts["nav_styles"], seed4),
        footer_style=_pick(opts["footer_styles"], seed1 + seed2),
        spacing_scale=_pick(opts["spacing_scales"], seed5),
        animation_style=_pick(opts["animation_styles"], seed3 + seed4),
        border_radius=_pick(opts["border_radii"], seed1 + seed3),
        shadow_style=_pick(opts["shadow_styles"], seed2 + seed4),
        background_pattern=_pick(opts["background_patterns"], seed1 + seed5),
        cta_placement=_pick(opts["cta_placements"], seed2 + seed5),
        typography_scale=_pick(opts["typography_scales"], seed3 + seed5),
        image_style=_pick(opts["image_styles"], seed4 + seed5),
        button_style=_pick(opts["button_styles"], seed1 + seed4),
    )


def generate_design_dna(domain: str, keyword: str = "", design_style: str = BASIC) -> DesignDNA:
    """Generate the Design DNA for a domain."""
    style = normalize_design_style(design_style)

    palette = COLOR_PALETTES[hash_string(domain + keyword) % len(COLOR_PALETTES)]
    # Reversed domain decorrelates the font pick from the palette pick.
    fonts = FONT_PAIRS[hash_string(_reverse(domain)) % len(FONT_PAIRS)]

    return DesignDNA(
        design_style=style,
        colors=palette,
        gradients=build_gradients(palette),
        fonts=fonts,
        layout=generate_basic_layout(domain, keyword),
        advanced_layout=generate_advanced_layout(domain, keyword) if style == ADVANCED else None,
    )


def _light_color(color: str) -> str:
    """10% tint of ``color``; non-hex colors are left to the browser."""
    value = color.strip()
    if re.fullmatch(r"#[0-9a-fA-F]{3}", value):
        value = "#" + "".join(ch * 2 for ch in value[1:])
    if not re.fullmatch(r"#[0-9a-fA-F]{6}", value):
        return f"color-mix(in srgb, {value} 10%, transparent)"

    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    return f"rgba({r}, {g}, {b}, 0.1)"


def generate_css_variables(dna: DesignDNA) -> str:
    """CSS custom properties for a ``:root`` block."""
    lines = [
        f"--color-primary: {dna.colors.primary};",
        f"--color-primary-light: {_light_color(dna.colors.primary)};",
        f"--color-secondary: {dna.colors.secondary};",
        f"--color-accent: {dna.colors.accent};",
        f"--color-background: {dna.colors.background};",
        f"--color-text: {dna.colors.text};",
        f"--color-text-on-primary: {dna.colors.text_on_primary};",
        f"--gradient-primary: {dna.gradients.primary};",
        f"--gradient-hero: {dna.gradients.hero};",
        f"--gradient-accent: {dna.gradients.accent};",
        f"--font-heading: '{dna.fonts.heading}', sans-serif;",
        f"--font-body: '{dna.fonts.body}', sans-serif;",
    ]

    adv = dna.advanced_layout
    if dna.design_style == ADVANCED and adv is not None:
        shadows = {
            "none": "none",
            "subtle": "0 1px 3px rgba(0,0,0,0.1)",
            "medium": "0 4px 6px rgba(0,0,0,0.1)",
            "strong": "0 10px 25px rgba(0,0,0,0.15)",
            "colored": f"0 10px 25px {dna.colors.primary}30",
        }
        lines.extend([
            f"--border-radius: {BORDER_RADIUS_VALUES[adv.border_radius]};",
            f"--spacing-scale: {SPACING_SCALE_VALUES[adv.spacing_scale]};",
            f"--typography-scale: {TYPOGRAPHY_SCALE_VALUES[adv.typography_scale]};",
            f"--shadow: {shadows[adv.shadow_style]};",
        ])

    return "\n".join(lines)


def get_google_fonts_url(dna: DesignDNA) -> str:
    fonts = [dna.fonts.heading]
    if dna.fonts.body != dna.fonts.heading:
        fonts.append(dna.fonts.body)
    params = "&".join(
        f"family={'+'.join(font.split())}:wght@400;500;600;700" for font in fonts
    )
    return f"https://fonts.googleapis.com/css2?{params}&display=swap"


def get_advanced_layout_classes(dna: DesignDNA) -> Dict[str, str]:
    """CSS class names for advanced layout elements; empty in basic mode."""
    adv = dna.advanced_layout
    if dna.design_style != ADVANCED or adv is None:
        return {}

    return {
        "hero_class": f"hero-{adv.hero_variant}",
        "card_container_class": f"cards-{adv.card_layout}",
        "nav_class": f"nav-{adv.nav_style}",
        "footer_class": f"footer-{adv.footer_style}",
        "animation_class": f"animate-{adv.animation_style}",
        "background_class": f"bg-pattern-{adv.background_pattern}",
        "button_class": f"btn-{adv.button_style}",
        "image_class": f"img-{adv.image_style}",
        "cta_class": f"cta-{adv.cta_placement}",
    }


def get_background_pattern_css(pattern: str, primary_color: str) -> str:
    if pattern == "dots":
        return (
            f"background-image: radial-gradient({primary_color}20 1px, transparent 1px); "
            "background-size: 20px 20px;"
        )
    if pattern == "grid":
        return (
            f"background-image: linear-gradient({primary_color}10 1px, transparent 1px), "
            f"linear-gradient(90deg, {primary_color}10 1px, transparent 1px); "
            "background-size: 40px 40px;"
        )
    if pattern == "waves":
        fill = quote(primary_color, safe="")
        return (
            "background-image: url(\"data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
            f"viewBox='0 0 1440 320'%3E%3Cpath fill='{fill}' fill-opacity='0.1' "
            "d='M0,96L48,112C96,128,192,160,288,160C384,160,480,128,576,122.7C672,117,768,139,"
            "864,154.7C960,171,1056,181,1152,165.3C1248,149,1344,107,1392,85.3L1440,64L1440,320"
            "L0,320Z'%3E%3C/path%3E%3C/svg%3E\");"
        )
    if pattern == "gradient-mesh":
        return (
            f"background: radial-gradient(at 40% 20%, {primary_color}30 0px, transparent 50%), "
            f"radial-gradient(at 80% 0%, {primary_color}20 0px, transparent 50%), "
            f"radial-gradient(at 0% 50%, {primary_color}25 0px, transparent 50%);"
        )
    if pattern == "noise":
        return (
            "background-image: url(\"data:image/svg+xml,%3Csvg viewBox='0 0 400 400' "
            "xmlns='http://www.w3.org/2000/svg'%3E%3Cfilter id='noiseFilter'%3E%3CfeTurbulence "
            "type='fractalNoise' baseFrequency='0.9' numOctaves='3' stitchTiles='stitch'/%3E"
            "%3C/filter%3E%3Crect width='100%25' height='100%25' filter='url(%23noiseFilter)'/%3E"
            "%3C/svg%3E\"); opacity: 0.05;"
        )
    return ""


def dimension_cardinalities(design_style: str) -> List[Tuple[str, int]]:
    """(dimension, table size) pairs that multiply into the combination count."""
    style = normalize_design_style(design_style)
    dims = [("color_palettes", len(COLOR_PALETTES)), ("font_pairs", len(FONT_PAIRS))]

    if style == BASIC:
        dims.extend((key, len(LAYOUT_OPTIONS[key])) for key in ("hero_styles", "card_styles", "cta_styles"))
    else:
        dims.extend((key, len(ADVANCED_LAYOUT_OPTIONS[key])) for _, key in ADVANCED_DIMENSIONS)
        dims.append(("section_orders", len(SECTION_ORDERS)))
    return dims


def calculate_unique_combinations(design_style: str) -> int:
    """Theoretical number of distinct DNA records for a design style."""
    total = 1
    for _, size in dimension_cardinalities(design_style):
        total *= size
    return total
