#!/usr/bin/env python3
"""Tests for compound hashing and variation selection."""

import pytest


def test_hash_string_matches_fnv1a_vectors():
    from hash_utils import FNV_OFFSET_BASIS, hash_string

    assert hash_string("") == FNV_OFFSET_BASIS == 2166136261
    assert hash_string("a") == 0xE40C292C
    assert hash_string("foobar") == 0xBF9CF968


def test_hash_string_stays_within_uint32():
    from hash_utils import hash_string

    for text in ["example.com", "x" * 500, "café.com", "😀 emoji.com"]:
        assert 0 <= hash_string(text) <= 0xFFFFFFFF


def test_hash_string_hashes_astral_characters_as_surrogate_pairs():
    """An astral character contributes two code units, not one."""
    from hash_utils import hash_string

    assert hash_string("😀") == hash_string("😀")
    assert hash_string("😀") != hash_string("\ud83d")


def test_compound_hash_formula_and_empty_salt():
    from hash_utils import compound_hash, hash_string

    domain, context = "example-one.com", "cta-faq"
    expected = hash_string(domain) * 7919 + hash_string(context) * 6421
    assert compound_hash(domain, context) == expected
    assert compound_hash(domain, context, "") == expected

    salted = expected + hash_string("s") * 5381
    assert compound_hash(domain, context, "s") == salted


def test_compound_hash_is_sensitive_to_each_input():
    from hash_utils import compound_hash

    base = compound_hash("example.com", "form-email")
    assert compound_hash("example.org", "form-email") != base
    assert compound_hash("example.com", "form-phone") != base
    assert compound_hash("example.com", "form-email", "1") != base


def test_select_variation_is_deterministic():
    from hash_utils import compound_hash, select_variation

    table = ["a", "b", "c", "d", "e"]
    first = select_variation("example.com", table, "ctx")
    assert first == select_variation("example.com", table, "ctx")
    assert first == table[compound_hash("example.com", "ctx") % len(table)]


def test_select_variation_rejects_empty_table():
    from hash_utils import EmptyTableError, VariationError, select_variation

    with pytest.raises(EmptyTableError) as excinfo:
        select_variation("example.com", [], "empty-ctx")

    assert isinstance(excinfo.value, VariationError)
    assert isinstance(excinfo.value, ValueError)
    assert "empty-ctx" in str(excinfo.value)


def test_select_unique_variations_returns_distinct_items():
    from hash_utils import select_unique_variations

    table = list(range(20))
    for i in range(50):
        picked = select_unique_variations(f"site-{i}.com", table, 8, "faq-items")
        assert len(picked) == 8
        assert len(set(picked)) == 8


def test_select_unique_variations_can_take_whole_table():
    """Requesting every element terminates and yields a permutation."""
    from hash_utils import select_unique_variations

    table = ["a", "b", "c", "d"]
    picked = select_unique_variations("example.com", table, 4, "all")
    assert sorted(picked) == table


def test_select_unique_variations_rejects_over_capacity():
    from hash_utils import RequestExceedsCapacityError, select_unique_variations

    with pytest.raises(RequestExceedsCapacityError) as excinfo:
        select_unique_variations("example.com", ["a", "b"], 3, "ctx")

    assert excinfo.value.requested == 3
    assert excinfo.value.available == 2


def test_select_unique_variations_first_slot_uses_first_probe():
    from hash_utils import compound_hash, select_unique_variations

    table = list(range(10))
    picked = select_unique_variations("example.com", table, 1, "ctx")
    assert picked == [compound_hash("example.com", "ctx", "index-0-attempt-0") % 10]


def test_select_unique_variations_falls_back_to_lowest_unused_index(monkeypatch):
    import hash_utils

    calls = []

    def constant_hash(domain, context, salt=""):
        calls.append(salt)
        return 0

    monkeypatch.setattr(hash_utils, "compound_hash", constant_hash)

    assert hash_utils.select_unique_variations("d", ["a", "b", "c"], 3, "c") == ["a", "b", "c"]
    # slot 0 hits on its first probe; slots 1 and 2 exhaust 2 * len probes each
    assert len(calls) == 1 + 6 + 6
    assert calls[-1] == "index-2-attempt-5"


def test_seeded_random_range_and_determinism():
    from hash_utils import compound_hash, seeded_random

    for i in range(100):
        value = seeded_random(f"site-{i}.com", "site-name-inject")
        assert 0.0 <= value < 1.0

    expected = (compound_hash("example.com", "ctx") % 100000) / 100000
    assert seeded_random("example.com", "ctx") == expected


def test_detect_collisions_groups_duplicates():
    from hash_utils import detect_collisions

    domains = ["a.com", "b.com", "a.com", "c.com", "a.com"]
    report = detect_collisions(domains, "cta-faq")

    assert report.total_domains == 5
    assert report.collision_count == 2
    assert report.collision_rate == pytest.approx(40.0)
    assert list(report.collisions.values()) == [["a.com", "a.com", "a.com"]]


def test_detect_collisions_on_distinct_synthetic_domains():
    from hash_utils import detect_collisions

    report = detect_collisions([f"site-{i}.com" for i in range(1000)], "cta-faq")
    assert report.collision_rate < 1.0
    assert report.to_dict()["total_domains"] == 1000


def test_detect_collisions_handles_empty_input():
    from hash_utils import detect_collisions

    report = detect_collisions([], "ctx")
    assert report.collision_count == 0
    assert report.collision_rate == 0.0
