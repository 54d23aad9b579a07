from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

import services.suggestions as suggestions_module
from services.suggestions import (
    CompanyLookup,
    SuggestionService,
    expand_abbreviation,
    rank_matches,
    search_job_roles,
    suggest,
)

pytestmark = pytest.mark.unit

COMPANIES = ["Google", "Goldman Sachs", "Microsoft", "Meta", "Amazon"]


class RecordingLookup:
    def __init__(self, results: list[str] | None = None, error: Exception | None = None) -> None:
        self.results = results or []
        self.error = error
        self.calls: list[str] = []

    async def __call__(self, query: str) -> list[str]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.results


class StubResponse:
    def __init__(self, status_code: int, payload: Any) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://autocomplete.example.com")
            response = httpx.Response(self.status_code, request=request)
            raise httpx.HTTPStatusError("upstream error", request=request, response=response)


class StubAsyncClient:
    def __init__(self, response: StubResponse, capture: dict[str, Any]) -> None:
        self.response = response
        self.capture = capture

    async def __aenter__(self) -> StubAsyncClient:
        return self

    async def __aexit__(self, *_: object) -> bool:
        return False

    async def get(self, url: str, params: dict[str, str] | None = None, headers: dict[str, str] | None = None):
        self.capture["url"] = url
        self.capture["params"] = params
        return self.response


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "g", "  g  ", "   "])
async def test_short_queries_return_nothing_and_skip_remote(query: str) -> None:
    lookup = RecordingLookup(["Anything"])

    result = await suggest(query, COMPANIES, lookup)

    assert result == []
    assert lookup.calls == []


@pytest.mark.asyncio
async def test_local_matches_are_case_insensitive_and_keep_source_order() -> None:
    result = await suggest("GO", COMPANIES)

    assert result == ["Google", "Goldman Sachs"]


@pytest.mark.asyncio
async def test_remote_lookup_skipped_when_local_matches_are_plentiful() -> None:
    candidates = [f"Acme {index}" for index in range(6)]
    lookup = RecordingLookup(["Acme Remote"])

    result = await suggest("acme", candidates, lookup)

    assert result == candidates
    assert lookup.calls == []


@pytest.mark.asyncio
async def test_remote_results_follow_local_without_exact_duplicates() -> None:
    lookup = RecordingLookup(["Google", "Goodyear", "google", "Goodyear"])

    result = await suggest("Goo", COMPANIES, lookup)

    assert result == ["Google", "Goodyear", "google"]
    assert lookup.calls == ["Goo"]


@pytest.mark.asyncio
async def test_remote_failure_degrades_to_local_results() -> None:
    lookup = RecordingLookup(error=httpx.ConnectError("boom"))

    result = await suggest("me", COMPANIES, lookup)

    assert result == ["Meta"]
    assert lookup.calls == ["me"]


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [42, "Metabase", {"name": "Metabase"}])
async def test_malformed_remote_payload_degrades_to_local_results(payload: Any) -> None:
    async def odd_lookup(_: str) -> Any:
        return payload

    result = await suggest("meta", ["Meta"], odd_lookup)

    assert result == ["Meta"]


@pytest.mark.asyncio
async def test_remote_lookup_returning_none_keeps_local_results() -> None:
    async def empty_lookup(_: str) -> None:
        return None

    assert await suggest("meta", ["Meta"], empty_lookup) == ["Meta"]


@pytest.mark.asyncio
async def test_slow_remote_lookup_is_abandoned() -> None:
    async def slow_lookup(_: str) -> list[str]:
        await asyncio.sleep(1)
        return ["Too Late Inc"]

    result = await suggest("amaz", COMPANIES, slow_lookup, remote_timeout=0.01)

    assert result == ["Amazon"]


@pytest.mark.asyncio
async def test_results_never_exceed_ten_entries() -> None:
    candidates = [f"Data Co {index}" for index in range(3)]
    lookup = RecordingLookup([f"Data Remote {index}" for index in range(20)])

    result = await suggest("data", candidates, lookup)

    assert len(result) == 10
    assert result[:3] == candidates


@pytest.mark.asyncio
async def test_callable_local_source_is_used_as_is() -> None:
    result = await suggest("swe", search_job_roles)

    assert "Software Engineer" in result


def test_rank_matches_orders_exact_then_prefix_then_alphabetical() -> None:
    assert rank_matches("eng", ["Engineer", "Mechanical Engineer", "eng"]) == [
        "eng",
        "Engineer",
        "Mechanical Engineer",
    ]


def test_rank_matches_collates_accents_and_case() -> None:
    ranked = rank_matches("zz", ["Zed", "Émile", "ENG", "eng", "Emile"])

    assert ranked == ["Emile", "Émile", "eng", "ENG", "Zed"]


def test_rank_matches_truncates_after_sorting() -> None:
    candidates = [f"Role {chr(ord('z') - index)}" for index in range(15)]

    ranked = rank_matches("role", candidates)

    assert len(ranked) == 10
    assert ranked[0] == "Role l"


def test_expand_abbreviation_includes_all_manager_expansions() -> None:
    expanded = expand_abbreviation("pm")

    assert {"pm", "product manager", "project manager", "program manager"} <= expanded


def test_expand_abbreviation_matches_keys_inside_longer_queries() -> None:
    expanded = expand_abbreviation("Senior SWE ")

    assert "senior swe" in expanded
    assert "software engineer" in expanded


def test_search_job_roles_uses_expansions_and_ranking() -> None:
    assert search_job_roles("swe") == [
        "Embedded Software Engineer",
        "Principal Software Engineer",
        "Senior Software Engineer",
        "Software Engineer",
        "Staff Software Engineer",
    ]


def test_search_job_roles_puts_prefix_matches_first() -> None:
    roles = ["Senior Data Engineer", "Data Engineer", "Data Analyst"]

    assert search_job_roles("data", roles) == ["Data Analyst", "Data Engineer", "Senior Data Engineer"]


@pytest.mark.asyncio
async def test_company_lookup_extracts_names(monkeypatch: pytest.MonkeyPatch, settings) -> None:
    capture: dict[str, Any] = {}
    response = StubResponse(200, [{"name": "Stripe", "domain": "stripe.com"}, {"domain": "noname.io"}])
    monkeypatch.setattr(
        suggestions_module.httpx,
        "AsyncClient",
        lambda *_, **__: StubAsyncClient(response, capture),
    )

    names = await CompanyLookup(settings)("str")

    assert names == ["Stripe"]
    assert capture["params"] == {"query": "str"}
    assert capture["url"] == settings.company_lookup_url


@pytest.mark.asyncio
async def test_company_suggestions_survive_upstream_errors(monkeypatch: pytest.MonkeyPatch, settings) -> None:
    response = StubResponse(503, {"error": "unavailable"})
    monkeypatch.setattr(
        suggestions_module.httpx,
        "AsyncClient",
        lambda *_, **__: StubAsyncClient(response, {}),
    )

    result = await SuggestionService(settings, CompanyLookup(settings)).companies("netfl")

    assert result == ["Netflix"]
