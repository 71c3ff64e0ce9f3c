#!/usr/bin/env python3
"""
Compound hashing and deterministic variation selection.

Every content and style decision for a site is derived from its domain string:
the domain, a context label naming the decision, and an optional salt are hashed
independently and combined with distinct primes. Rebuilding the same domain
always reproduces the same selections, with nothing persisted per site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Set, TypeVar


T = TypeVar("T")

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
UINT32_MASK = 0xFFFFFFFF

DOMAIN_PRIME = 7919
CONTEXT_PRIME = 6421
SALT_PRIME = 5381

SEEDED_RANDOM_RESOLUTION = 100000


class VariationError(ValueError):
    """Base class for variation table defects."""


class EmptyTableError(VariationError):
    """A variation table has no candidates."""

    def __init__(self, context: str):
        super().__init__(f"No variations available for context: {context}")
        self.context = context


class RequestExceedsCapacityError(VariationError):
    """More unique selections were requested than a table holds."""

    def __init__(self, requested: int, available: int, context: str = ""):
        super().__init__(
            f"Cannot select {requested} unique items from {available} variations"
            + (f" (context: {context})" if context else "")
        )
        self.requested = requested
        self.available = available
        self.context = context


def _code_units(text: str) -> Iterable[int]:
    """Yield UTF-16 code units so astral characters hash as surrogate pairs."""
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_string(text: str) -> int:
    """FNV-1a over UTF-16 code units, kept to unsigned 32 bits."""
    value = FNV_OFFSET_BASIS
    for unit in _code_units(text):
        value ^= unit
        value = (value * FNV_PRIME) & UINT32_MASK
    return value


def compound_hash(domain: str, context: str, salt: str = "") -> int:
    """
    Combine independently hashed domain, context, and salt.

    Args:
        domain: Normalized site domain (e.g. "example.com")
        context: Label of the decision being made (e.g. "form-email")
        salt: Optional extra string to decorrelate draws within one context

    Returns:
        Non-negative integer seed
    """
    domain_hash = hash_string(domain)
    context_hash = hash_string(context)
    salt_hash = hash_string(salt) if salt else 0

    return abs(
        domain_hash * DOMAIN_PRIME
        + context_hash * CONTEXT_PRIME
        + salt_hash * SALT_PRIME
    )


def select_variation(domain: str, variations: Sequence[T], context: str, salt: str = "") -> T:
    """Pick one element of ``variations`` for this domain and context."""
    if not variations:
        raise EmptyTableError(context)

    index = compound_hash(domain, context, salt) % len(variations)
    return variations[index]


def select_unique_variations(
    domain: str,
    variations: Sequence[T],
    count: int,
    context: str,
) -> List[T]:
    """
    Pick ``count`` distinct elements, in slot order.

    Each slot probes salted hashes until it lands on an unused index. After
    ``2 * len(variations)`` misses the slot takes the lowest unused index, so
    selection always terminates and stays deterministic.
    """
    if count > len(variations):
        raise RequestExceedsCapacityError(count, len(variations), context)

    selected: List[T] = []
    used: Set[int] = set()
    budget = len(variations) * 2

    for slot in range(count):
        index = -1
        for attempt in range(budget):
            probe = compound_hash(domain, context, f"index-{slot}-attempt-{attempt}") % len(variations)
            if probe not in used:
                index = probe
                break

        if index < 0:
            index = 0
            while index in used:
                index += 1

        used.add(index)
        selected.append(variations[index])

    return selected


def seeded_random(domain: str, context: str) -> float:
    """Deterministic value in [0, 1) for continuous choices."""
    return (compound_hash(domain, context) % SEEDED_RANDOM_RESOLUTION) / SEEDED_RANDOM_RESOLUTION


@dataclass
class CollisionReport:
    """Result of a collision audit over a batch of domains."""

    context: str
    total_domains: int
    collision_count: int
    collision_rate: float
    collisions: Dict[int, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "context": self.context,
            "total_domains": self.total_domains,
            "collision_count": self.collision_count,
            "collision_rate": round(self.collision_rate, 4),
            "collisions": {str(k): v for k, v in self.collisions.items()},
        }


def detect_collisions(domains: Sequence[str], context: str) -> CollisionReport:
    """
    Group domains whose compound hash for ``context`` is identical.

    ``collision_count`` counts every domain beyond the first in each group and
    ``collision_rate`` is that count as a percentage of the input size.
    """
    groups: Dict[int, List[str]] = {}
    for domain in domains:
        groups.setdefault(compound_hash(domain, context), []).append(domain)

    collisions = {h: group for h, group in groups.items() if len(group) > 1}
    collision_count = sum(len(group) - 1 for group in collisions.values())
    collision_rate = (collision_count / len(domains)) * 100 if domains else 0.0

    return CollisionReport(
        context=context,
        total_domains=len(domains),
        collision_count=collision_count,
        collision_rate=collision_rate,
        collisions=collisions,
    )
