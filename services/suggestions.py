"""Autocomplete suggestions for companies and job roles.

Local candidate lists answer every query; a slower remote lookup is consulted
only when the local matches are sparse, and its failures never reach callers.
Each call is a single pass: debouncing keystrokes is left to the client.
"""
from __future__ import annotations

import asyncio
import unicodedata
from collections.abc import Awaitable, Callable, Iterable, Sequence
from functools import partial

import httpx

from app.config import Settings
from app.log import get_logger
from services.catalog import JOB_ROLES, POPULAR_COMPANIES

LOGGER = get_logger("suggestions")

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10
REMOTE_THRESHOLD = 5

LocalSource = Callable[[str], Sequence[str]]
RemoteLookup = Callable[[str], Awaitable[Sequence[str]]]

ROLE_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "dev": ("developer", "development"),
    "eng": ("engineer", "engineering"),
    "mgr": ("manager", "management"),
    "sr": ("senior",),
    "jr": ("junior",),
    "swe": ("software engineer",),
    "sde": ("software development engineer",),
    "pm": ("product manager", "project manager", "program manager"),
    "ux": ("user experience", "ux designer", "ux researcher"),
    "ui": ("user interface", "ui designer"),
    "qa": ("quality assurance", "qa engineer", "qa analyst"),
    "ml": ("machine learning", "ml engineer"),
    "ai": ("artificial intelligence", "ai engineer"),
    "fe": ("frontend", "front-end", "front end"),
    "be": ("backend", "back-end", "back end"),
    "fs": ("full stack", "fullstack", "full-stack"),
    "devops": ("dev ops", "development operations"),
    "sre": ("site reliability engineer", "site reliability"),
    "tpm": ("technical program manager",),
    "em": ("engineering manager",),
    "vp": ("vice president",),
    "cto": ("chief technology officer",),
    "ceo": ("chief executive officer",),
    "cfo": ("chief financial officer",),
    "coo": ("chief operating officer",),
    "hr": ("human resources",),
    "ops": ("operations",),
    "biz": ("business",),
    "mktg": ("marketing",),
}


def normalize_query(query: str) -> str:
    return query.strip().lower()


def is_searchable(query: str, min_length: int = MIN_QUERY_LENGTH) -> bool:
    return len(normalize_query(query)) >= min_length


def match_candidates(query: str, candidates: Iterable[str]) -> list[str]:
    """Case-insensitive substring filter that keeps the candidates' order."""

    needle = normalize_query(query)
    return [candidate for candidate in candidates if needle in candidate.lower()]


def merge_unique(*groups: Iterable[str], limit: int = MAX_RESULTS) -> list[str]:
    """Concatenate groups, drop exact duplicates (first wins) and cap the result."""

    merged = dict.fromkeys(item for group in groups for item in group if isinstance(item, str))
    return list(merged)[:limit]


def expand_abbreviation(query: str) -> set[str]:
    """Return the normalized query plus expansions of any abbreviation it contains.

    ``"swe"`` widens to include ``"software engineer"``; a query that merely
    contains a key (``"sr dev"``) picks up every matching key's phrases.
    """

    normalized = normalize_query(query)
    expansions = {normalized}
    for abbreviation, phrases in ROLE_ABBREVIATIONS.items():
        if normalized == abbreviation or abbreviation in normalized:
            expansions.update(phrases)
    return expansions


def collation_key(value: str) -> tuple[str, str, str]:
    """Alphabetical key: base letters first, then accents, then lowercase before uppercase."""

    decomposed = unicodedata.normalize("NFKD", value.casefold())
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base, unicodedata.normalize("NFKC", value.casefold()), value.swapcase()


def rank_matches(query: str, candidates: Iterable[str], limit: int = MAX_RESULTS) -> list[str]:
    """Order by exact match, then prefix match, then alphabetically; cap at ``limit``."""

    needle = normalize_query(query)

    def sort_key(candidate: str) -> tuple[int, tuple[str, str, str]]:
        lowered = candidate.lower()
        if lowered == needle:
            tier = 0
        elif lowered.startswith(needle):
            tier = 1
        else:
            tier = 2
        return tier, collation_key(candidate)

    return sorted(candidates, key=sort_key)[:limit]


def search_job_roles(
    query: str,
    roles: Iterable[str] = JOB_ROLES,
    *,
    limit: int = MAX_RESULTS,
    min_length: int = MIN_QUERY_LENGTH,
) -> list[str]:
    """Abbreviation-aware role search ranked by relevance."""

    if not is_searchable(query, min_length):
        return []

    terms = expand_abbreviation(query)
    matches = dict.fromkeys(role for role in roles if any(term in role.lower() for term in terms))
    return rank_matches(query, matches, limit=limit)


async def suggest(
    query: str,
    local_candidates: Sequence[str] | LocalSource,
    remote_lookup: RemoteLookup | None = None,
    *,
    min_length: int = MIN_QUERY_LENGTH,
    max_results: int = MAX_RESULTS,
    remote_threshold: int = REMOTE_THRESHOLD,
    remote_timeout: float | None = None,
) -> list[str]:
    """Return up to ``max_results`` unique suggestions for ``query``.

    ``local_candidates`` is either a list to substring-match or a callable
    that already performs its own matching. The remote lookup receives the raw
    query and is only awaited when fewer than ``remote_threshold`` local
    matches exist. An empty result means the dropdown stays closed.
    """

    if not is_searchable(query, min_length):
        return []

    if callable(local_candidates):
        local = list(local_candidates(query))
    else:
        local = match_candidates(query, local_candidates)

    if remote_lookup is None or len(local) >= remote_threshold:
        return merge_unique(local, limit=max_results)

    try:
        remote = await asyncio.wait_for(remote_lookup(query), timeout=remote_timeout)
        if remote is None:
            remote = []
        if not isinstance(remote, (list, tuple)):
            raise TypeError(f"expected a list of names, got {type(remote).__name__}")
        return merge_unique(local, remote, limit=max_results)
    except Exception as exc:  # pylint: disable=broad-except
        LOGGER.warning("Remote suggestion lookup failed for %r: %s", query, exc)
        return merge_unique(local, limit=max_results)


class CompanyLookup:
    """Company-name autocomplete backed by the Clearbit suggest endpoint."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def __call__(self, query: str) -> list[str]:
        async with httpx.AsyncClient(timeout=self.settings.suggestion_remote_timeout_seconds) as client:
            response = await client.get(
                self.settings.company_lookup_url,
                params={"query": query},
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, list):
            return []
        names = [item.get("name") for item in payload if isinstance(item, dict)]
        return [name for name in names if isinstance(name, str) and name][: self.settings.suggestion_max_results]


class SuggestionService:
    """Bind the suggestion engine to the curated lists and configured limits."""

    def __init__(self, settings: Settings, company_lookup: RemoteLookup | None = None) -> None:
        self.settings = settings
        self.company_lookup = company_lookup

    async def companies(self, query: str) -> list[str]:
        return await suggest(
            query,
            POPULAR_COMPANIES,
            self.company_lookup,
            min_length=self.settings.suggestion_min_query_length,
            max_results=self.settings.suggestion_max_results,
            remote_threshold=self.settings.suggestion_remote_threshold,
            remote_timeout=self.settings.suggestion_remote_timeout_seconds,
        )

    async def roles(self, query: str) -> list[str]:
        local_source = partial(
            search_job_roles,
            roles=JOB_ROLES,
            limit=self.settings.suggestion_max_results,
            min_length=self.settings.suggestion_min_query_length,
        )
        return await suggest(
            query,
            local_source,
            min_length=self.settings.suggestion_min_query_length,
            max_results=self.settings.suggestion_max_results,
        )
