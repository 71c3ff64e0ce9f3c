#!/usr/bin/env python3
"""
Variation audits for a fleet of sites.

Commands:
- capacity: distinct Design DNA combinations vs. the number of planned sites
- collisions: domains whose compound hash collides for one context label
- dna: a domain's Design DNA with its CSS variables and font URL
- content: every content selection for a domain
- separation: global tables must never mention an enabled keyword label
- sitemap: write sitemap.xml and robots.txt for the configured site
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from config import DEFAULT_KEYWORD_ID, ROOT_DIR, setup_logging
from data_client import SiteDataClient
from design_dna import (
    ADVANCED,
    BASIC,
    calculate_unique_combinations,
    generate_css_variables,
    generate_design_dna,
    get_advanced_layout_classes,
    get_google_fonts_url,
)
from global_variations import content_as_dict
from hash_utils import detect_collisions
from keyword_config import get_enabled_keywords
from keyword_loader import load_keyword_variations
from legal_variations import get_disclaimer_variation
from microcopy_variations import get_microcopy
from page_cache import PageCache
from site_config import load_site_config, site_url
from sitemap_generator import save_sitemap
from variation_tables import GLOBAL_TABLES, MICROCOPY_TABLES, iter_strings

logger = setup_logging("variation_audit")

DEFAULT_SAFETY_MARGIN = 10.0
DEFAULT_SYNTHETIC_DOMAINS = 1000


def capacity_report(planned_sites: int, safety_margin: float = DEFAULT_SAFETY_MARGIN) -> Dict[str, Any]:
    """Combination counts per design style against ``planned_sites * safety_margin``."""
    required = int(planned_sites * safety_margin)
    styles = {}
    for style in (BASIC, ADVANCED):
        combinations = calculate_unique_combinations(style)
        styles[style] = {
            "combinations": combinations,
            "sufficient": combinations >= required,
        }
    return {
        "planned_sites": planned_sites,
        "safety_margin": safety_margin,
        "required": required,
        "styles": styles,
    }


def synthetic_domains(count: int) -> List[str]:
    return [f"site-{i}.com" for i in range(count)]


def read_domains(path: Path) -> List[str]:
    """One domain per line; blank lines and # comments are skipped."""
    with open(path, "r", encoding="utf-8") as f:
        lines = [line.strip() for line in f]
    return [line for line in lines if line and not line.startswith("#")]


def find_keyword_mentions(
    tables: Mapping[str, Any],
    labels: Sequence[str],
    prefix: str = "",
) -> List[Tuple[str, str, str]]:
    """(table name, label, text) for every global string naming a keyword label."""
    lowered = [(label, label.lower()) for label in labels]
    mentions = []
    for key, table in tables.items():
        name = f"{prefix}.{key}" if prefix else key
        for text in iter_strings(table):
            lower_text = text.lower()
            for label, lower_label in lowered:
                if lower_label in lower_text:
                    mentions.append((name, label, text))
    return mentions


def separation_violations(labels: Optional[Sequence[str]] = None) -> List[Tuple[str, str, str]]:
    if labels is None:
        labels = [kw.label for kw in get_enabled_keywords()]
    violations = find_keyword_mentions(GLOBAL_TABLES, labels, "global")
    violations.extend(find_keyword_mentions(MICROCOPY_TABLES, labels, "microcopy"))
    return violations


def dna_report(domain: str, keyword: str, design_style: str) -> Dict[str, Any]:
    dna = generate_design_dna(domain, keyword, design_style)
    return {
        "domain": domain,
        "dna": dna.to_dict(),
        "css_variables": generate_css_variables(dna),
        "google_fonts_url": get_google_fonts_url(dna),
        "layout_classes": get_advanced_layout_classes(dna),
    }


def content_report(domain: str, keyword_id: str, site_name: str) -> Dict[str, Any]:
    """Every selection the page layer would render for one domain."""
    variations = load_keyword_variations(keyword_id)
    microcopy = {
        key: content_as_dict(value) if is_dataclass(value) else value
        for key, value in get_microcopy(domain).items()
    }
    return {
        "domain": domain,
        "keyword_id": variations.keyword_id,
        "fallback": variations.fallback,
        "h1": variations.get_h1_variation(domain),
        "h2": variations.get_h2_variation(domain),
        "meta": content_as_dict(variations.get_meta_variations(site_name, domain)),
        "faq": content_as_dict(variations.get_faq_variations(domain)),
        "faq_sections": content_as_dict(variations.get_faq_sections(domain)),
        "apply": content_as_dict(variations.get_apply_page_variations(domain)),
        "form": content_as_dict(variations.get_form_variations(domain)),
        "trust": content_as_dict(variations.get_trust_variations(domain)),
        "programs": content_as_dict(variations.get_program_variations(domain)),
        "providers": content_as_dict(variations.get_provider_variations(domain)),
        "schema": content_as_dict(variations.get_schema_variations(domain)),
        "cta": variations.get_cta_variation(domain),
        "legal": content_as_dict(get_disclaimer_variation(domain)),
        "microcopy": microcopy,
    }


def _emit(data: Dict[str, Any]) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_capacity(args: argparse.Namespace) -> int:
    report = capacity_report(args.planned_sites, args.safety_margin)
    _emit(report)
    for style, result in report["styles"].items():
        logger.info(
            "%s: %s combinations (%s required)", style, f"{result['combinations']:,}", f"{report['required']:,}"
        )
    return 0 if report["styles"][args.design_style]["sufficient"] else 1


def cmd_collisions(args: argparse.Namespace) -> int:
    domains = read_domains(args.domains_file) if args.domains_file else synthetic_domains(args.synthetic)
    report = detect_collisions(domains, args.context)
    _emit(report.to_dict())
    logger.info(
        "%s domains, %s collisions (%.2f%%) for context %r",
        report.total_domains,
        report.collision_count,
        report.collision_rate,
        args.context,
    )
    if args.fail_over is not None and report.collision_rate > args.fail_over:
        return 1
    return 0


def cmd_dna(args: argparse.Namespace) -> int:
    _emit(dna_report(args.domain, args.keyword, args.design_style))
    return 0


def cmd_content(args: argparse.Namespace) -> int:
    _emit(content_report(args.domain, args.keyword_id, args.site_name))
    return 0


def cmd_separation(args: argparse.Namespace) -> int:
    violations = separation_violations(args.label or None)
    for table, label, text in violations:
        logger.error("%s mentions %r: %s", table, label, text)
    if violations:
        return 1
    logger.info("No global table mentions a keyword label")
    return 0


def cmd_sitemap(args: argparse.Namespace) -> int:
    config = load_site_config(args.config)
    client = SiteDataClient.from_env(PageCache())
    data = client.get_sitemap_data()
    save_sitemap(args.output, site_url(config), data.states, data.cities)
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Audit deterministic site variations")
    sub = parser.add_subparsers(dest="command", required=True)

    capacity = sub.add_parser("capacity", help="Design DNA combinations vs. planned sites")
    capacity.add_argument("--planned-sites", type=int, default=1000, help="Number of sites to deploy")
    capacity.add_argument(
        "--safety-margin",
        type=float,
        default=DEFAULT_SAFETY_MARGIN,
        help="Required combinations per planned site",
    )
    capacity.add_argument(
        "--design-style",
        choices=(BASIC, ADVANCED),
        default=ADVANCED,
        help="Style whose capacity decides the exit code",
    )
    capacity.set_defaults(func=cmd_capacity)

    collisions = sub.add_parser("collisions", help="Compound-hash collisions for a context label")
    collisions.add_argument("--context", default="cta-faq", help="Context label to audit")
    collisions.add_argument("--domains-file", type=Path, help="File with one domain per line")
    collisions.add_argument(
        "--synthetic",
        type=int,
        default=DEFAULT_SYNTHETIC_DOMAINS,
        help="Synthetic domain count when no file is given",
    )
    collisions.add_argument("--fail-over", type=float, help="Exit non-zero above this collision rate (percent)")
    collisions.set_defaults(func=cmd_collisions)

    dna = sub.add_parser("dna", help="Print a domain's Design DNA")
    dna.add_argument("domain")
    dna.add_argument("--keyword", default="")
    dna.add_argument("--design-style", default=BASIC)
    dna.set_defaults(func=cmd_dna)

    content = sub.add_parser("content", help="Print every content selection for a domain")
    content.add_argument("domain")
    content.add_argument("--keyword-id", default=DEFAULT_KEYWORD_ID)
    content.add_argument("--site-name", default="")
    content.set_defaults(func=cmd_content)

    separation = sub.add_parser("separation", help="Check global tables for keyword labels")
    separation.add_argument(
        "--label",
        action="append",
        help="Label to check (repeatable; default: every enabled keyword)",
    )
    separation.set_defaults(func=cmd_separation)

    sitemap = sub.add_parser("sitemap", help="Write sitemap.xml and robots.txt")
    sitemap.add_argument("--config", type=Path, help="Site config JSON (default: SITE_CONFIG_PATH)")
    sitemap.add_argument(
        "--output",
        type=Path,
        default=ROOT_DIR / "public",
        help="Output directory (default: public/)",
    )
    sitemap.set_defaults(func=cmd_sitemap)

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
