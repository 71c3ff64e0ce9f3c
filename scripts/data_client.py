#!/usr/bin/env python3
"""
Site data client - states, cities, and providers from a Supabase (PostgREST) API.

Every read goes through an injected ``PageCache`` and degrades to fallback
data on any request or decode error, so a database outage never breaks a
page build.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import urlparse

import requests

import page_cache
from config import SUPABASE_ANON_KEY, SUPABASE_URL, setup_logging
from page_cache import CacheTTL, PageCache

logger = setup_logging("data_client")

T = TypeVar("T")

DEFAULT_TIMEOUT = 10


@dataclass
class State:
    id: int
    name: str
    abbreviation: str
    slug: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class City:
    id: int
    name: str
    state_id: int
    population: Optional[int] = None
    slug: Optional[str] = None
    stats: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None


@dataclass
class Provider:
    id: int
    name: str
    plans: Dict[str, Any] = field(default_factory=dict)
    coverage: Dict[str, Any] = field(default_factory=dict)
    contact_info: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None


@dataclass
class SitemapData:
    states: List[State]
    cities: Dict[int, List[City]]


@dataclass
class HealthStatus:
    ok: bool
    latency: float
    error: Optional[str] = None


FALLBACK_STATES: List[State] = [
    State(id=1, name="California", abbreviation="CA", slug="california"),
    State(id=2, name="Texas", abbreviation="TX", slug="texas"),
    State(id=3, name="Florida", abbreviation="FL", slug="florida"),
    State(id=4, name="New York", abbreviation="NY", slug="new-york"),
    State(id=5, name="Pennsylvania", abbreviation="PA", slug="pennsylvania"),
]


def to_slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _is_valid_url(url: Optional[str]) -> bool:
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _state_from_row(row: Dict[str, Any]) -> State:
    return State(
        id=int(row["id"]),
        name=row["name"],
        abbreviation=row["abbreviation"],
        slug=row.get("slug") or to_slug(row["name"]),
        created_at=row.get("created_at"),
    )


def _city_from_row(row: Dict[str, Any]) -> City:
    return City(
        id=int(row["id"]),
        name=row["name"],
        state_id=int(row["state_id"]),
        population=row.get("population"),
        slug=to_slug(row["name"]),
        stats=row.get("stats") or {},
        created_at=row.get("created_at"),
    )


def _provider_from_row(row: Dict[str, Any]) -> Provider:
    return Provider(
        id=int(row["id"]),
        name=row["name"],
        plans=row.get("plans") or {},
        coverage=row.get("coverage") or {},
        contact_info=row.get("contact_info") or {},
        created_at=row.get("created_at"),
    )


class SiteDataClient:
    """Cached, fault-tolerant reads of site reference data."""

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str],
        cache: PageCache,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.cache = cache
        self.timeout = timeout
        self.available = _is_valid_url(base_url) and bool(api_key)

        self.session = session or requests.Session()
        if self.available:
            self.session.headers.update({
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            })
        else:
            logger.warning("Supabase URL or key missing or invalid; serving fallback data")

    @classmethod
    def from_env(cls, cache: PageCache, session: Optional[requests.Session] = None) -> "SiteDataClient":
        return cls(SUPABASE_URL, SUPABASE_ANON_KEY, cache, session=session)

    def _table_url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _fetch_rows(self, table: str, params: Dict[str, str]) -> Optional[List[Dict[str, Any]]]:
        """Rows from a table, or None when the request or payload fails."""
        if not self.available:
            return None

        try:
            response = self.session.get(self._table_url(table), params=params, timeout=self.timeout)
            response.raise_for_status()
            rows = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching %s: %s", table, e)
            return None

        if not isinstance(rows, list):
            logger.error("Unexpected payload for %s: %r", table, type(rows).__name__)
            return None
        return rows

    def _cached(self, key: str, fetcher: Callable[[], T], ttl: float) -> T:
        return self.cache.get_or_fetch(key, fetcher, ttl)

    def get_states(self) -> List[State]:
        def fetch() -> List[State]:
            rows = self._fetch_rows("states", {"select": "*", "order": "name"})
            if not rows:
                logger.warning("No states returned, using fallback states")
                return list(FALLBACK_STATES)
            try:
                return [_state_from_row(row) for row in rows]
            except (KeyError, TypeError, ValueError) as e:
                logger.error("Malformed state rows: %s", e)
                return list(FALLBACK_STATES)

        return self._cached(page_cache.states_key(), fetch, CacheTTL.STATIC_DATA)

    def get_state_by_slug(self, slug: str) -> Optional[State]:
        def fetch() -> Optional[State]:
            for state in self.get_states():
                if state.slug == slug or to_slug(state.name) == slug:
                    return state
            return None

        return self._cached(page_cache.state_key(slug), fetch, CacheTTL.STATE_PAGE)

    def get_cities_by_state(self, state_id: int) -> List[City]:
        def fetch() -> List[City]:
            rows = self._fetch_rows(
                "cities", {"select": "*", "state_id": f"eq.{state_id}", "order": "name"}
            )
            if rows is None:
                return []
            try:
                return [_city_from_row(row) for row in rows]
            except (KeyError, TypeError, ValueError) as e:
                logger.error("Malformed city rows for state %s: %s", state_id, e)
                return []

        return self._cached(page_cache.cities_key(state_id), fetch, CacheTTL.STATE_PAGE)

    def get_city_by_slug(self, state_slug: str, city_slug: str) -> Optional[City]:
        def fetch() -> Optional[City]:
            state = self.get_state_by_slug(state_slug)
            if state is None:
                return None
            for city in self.get_cities_by_state(state.id):
                if city.slug == city_slug or to_slug(city.name) == city_slug:
                    return city
            return None

        return self._cached(page_cache.city_key(state_slug, city_slug), fetch, CacheTTL.CITY_PAGE)

    def get_providers(self) -> List[Provider]:
        def fetch() -> List[Provider]:
            rows = self._fetch_rows("providers", {"select": "*", "order": "name"})
            if rows is None:
                return []
            try:
                return [_provider_from_row(row) for row in rows]
            except (KeyError, TypeError, ValueError) as e:
                logger.error("Malformed provider rows: %s", e)
                return []

        return self._cached(page_cache.providers_key(), fetch, CacheTTL.STATIC_DATA)

    def get_sitemap_data(self) -> SitemapData:
        def fetch() -> SitemapData:
            states = self.get_states()
            return SitemapData(
                states=states,
                cities={state.id: self.get_cities_by_state(state.id) for state in states},
            )

        return self._cached(page_cache.sitemap_key(), fetch, CacheTTL.SITEMAP)

    def get_total_city_count(self) -> int:
        """Exact row count of the cities table, 0 when unavailable."""
        def fetch() -> int:
            if not self.available:
                return 0
            try:
                response = self.session.head(
                    self._table_url("cities"),
                    params={"select": "*"},
                    headers={"Prefer": "count=exact"},
                    timeout=self.timeout,
                )
                response.raise_for_status()
                # Content-Range: 0-24/3100 or */3100
                total = response.headers.get("Content-Range", "").rsplit("/", 1)[-1]
                return int(total)
            except (requests.RequestException, ValueError) as e:
                logger.error("Error counting cities: %s", e)
                return 0

        return self._cached(page_cache.city_count_key(), fetch, CacheTTL.STATIC_DATA)

    def health_check(self) -> HealthStatus:
        """Probe the states table; never cached."""
        if not self.available:
            return HealthStatus(ok=False, latency=0.0, error="Supabase client not initialized")

        start = time.monotonic()
        try:
            response = self.session.get(
                self._table_url("states"),
                params={"select": "id", "limit": "1"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            return HealthStatus(ok=False, latency=time.monotonic() - start, error=str(e))

        return HealthStatus(ok=True, latency=time.monotonic() - start)
