"""
Tests for the EarningsFeed client and its resources against a mocked API.
"""
import time

import httpx
import pytest

import earningsfeed.client as client_module
from earningsfeed import (
    ClientConfig,
    ConfigurationError,
    EarningsFeed,
    FilingDetail,
    ListFilingsParams,
    NotFoundError,
    RateLimitError,
    RetryPolicy,
    ValidationError,
    get_client,
)

from conftest import BASE_URL, filing_payload, page_payload


# ---------------------------------------------------------------------------
# 1. Configuration
# ---------------------------------------------------------------------------

class TestConfiguration:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("EARNINGSFEED_API_KEY", "EARNINGSFEED_BASE_URL", "EARNINGSFEED_TIMEOUT", "EARNINGSFEED_MAX_RETRIES"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir("/")

    async def test_defaults(self):
        client = EarningsFeed("key")
        assert client.base_url == "https://earningsfeed.com"
        assert client.config.timeout == 30.0
        assert client.retry_policy.max_attempts == 3
        await client.aclose()

    async def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("EARNINGSFEED_BASE_URL", "https://env.example.com")
        client = EarningsFeed("key", base_url="https://explicit.example.com/", timeout=10, max_retries=5)
        assert client.base_url == "https://explicit.example.com"
        assert client.config.timeout == 10.0
        assert client.retry_policy.max_attempts == 5
        await client.aclose()

    async def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("EARNINGSFEED_API_KEY", "env-key")
        monkeypatch.setenv("EARNINGSFEED_TIMEOUT", "12.5")
        client = EarningsFeed()
        assert client.config.api_key == "env-key"
        assert client.config.timeout == 12.5
        await client.aclose()

    def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="API key is required"):
            EarningsFeed()

    def test_malformed_environment_value(self, monkeypatch):
        monkeypatch.setenv("EARNINGSFEED_TIMEOUT", "abc")
        with pytest.raises(ConfigurationError) as exc_info:
            EarningsFeed("key")
        assert exc_info.value.details["field"] == "EARNINGSFEED_TIMEOUT"

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"api_key": "  "}, "api_key"),
            ({"api_key": "k", "base_url": "ftp://example.com"}, "base_url"),
            ({"api_key": "k", "timeout": 0}, "timeout"),
            ({"api_key": "k", "max_retries": 0}, "max_retries"),
        ],
    )
    def test_invalid_values(self, kwargs, field):
        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig.build(**kwargs)
        assert exc_info.value.details["field"] == field
        assert isinstance(exc_info.value, ValueError)

    async def test_repr_hides_key(self):
        client = EarningsFeed("super-secret")
        assert "super-secret" not in repr(client)
        await client.aclose()

    async def test_from_config(self):
        config = ClientConfig(api_key="key", base_url="https://x.example.com")
        async with EarningsFeed.from_config(config) as client:
            assert client.config is config
            assert client.filings is not None


# ---------------------------------------------------------------------------
# 2. Filings
# ---------------------------------------------------------------------------

class TestFilings:

    async def test_list_sends_filters(self, api, client):
        route = api.get("/api/v1/filings").respond(
            200, json=page_payload([filing_payload(1), filing_payload(2)], "c2")
        )

        page = await client.filings.list(ticker="AAPL", forms=["10-K", "10-Q"], limit=2)

        assert [f.accession_number for f in page.items] == ["0000320193-24-000001", "0000320193-24-000002"]
        assert page.has_more is True
        assert page.next_cursor == "c2"
        params = route.calls.last.request.url.params
        assert params["ticker"] == "AAPL"
        assert params["forms"] == "10-K,10-Q"
        assert params["limit"] == "2"

    async def test_list_is_repeatable(self, api, client):
        route = api.get("/api/v1/filings").respond(200, json=page_payload([filing_payload(1)]))
        params = ListFilingsParams(ticker="AAPL")

        first = await client.filings.list(params)
        second = await client.filings.list(params)

        assert first == second
        assert route.call_count == 2

    async def test_list_with_cursor(self, api, client):
        route = api.get("/api/v1/filings").respond(200, json=page_payload([filing_payload(3)]))

        await client.filings.list(ListFilingsParams(cursor="c2"))

        assert route.calls.last.request.url.params["cursor"] == "c2"

    async def test_params_and_filters_are_exclusive(self, client):
        with pytest.raises(TypeError):
            await client.filings.list(ListFilingsParams(), ticker="AAPL")

    async def test_iter_walks_all_pages(self, api, client):
        def handler(request):
            if request.url.params.get("cursor") == "c2":
                return httpx.Response(200, json=page_payload([filing_payload(3)]))
            return httpx.Response(200, json=page_payload([filing_payload(1), filing_payload(2)], "c2"))

        route = api.get("/api/v1/filings").mock(side_effect=handler)

        titles = [f.title async for f in client.filings.iter(ticker="AAPL")]

        assert titles == ["Quarterly report 1", "Quarterly report 2", "Quarterly report 3"]
        assert route.call_count == 2

    async def test_get(self, api, client):
        api.get("/api/v1/filings/0000320193-24-000123").respond(200, json={
            "accessionNumber": "0000320193-24-000123",
            "cik": 320193,
            "formType": "10-K",
            "filedAt": "2024-11-01T16:30:00Z",
            "title": "Annual report",
            "url": "https://www.sec.gov/Archives/edgar/data/320193/000032019324000123/",
            "documents": [{"seq": 1, "filename": "aapl-20240928.htm", "docType": "10-K", "isPrimary": True}],
        })

        detail = await client.filings.get("0000320193-24-000123")

        assert isinstance(detail, FilingDetail)
        assert detail.primary_document.filename == "aapl-20240928.htm"

    async def test_get_unknown_is_not_found_without_retry(self, api, client, sleeps):
        route = api.get("/api/v1/filings/bad-id").respond(404, json={"error": "Not found"})

        with pytest.raises(NotFoundError) as exc_info:
            await client.filings.get("bad-id")

        assert exc_info.value.path == "/api/v1/filings/bad-id"
        assert route.call_count == 1
        assert sleeps == []

    async def test_validation_error_is_not_retried(self, api, client):
        route = api.get("/api/v1/filings").respond(400, json={"error": "limit must be <= 100"})

        with pytest.raises(ValidationError):
            await client.filings.list(limit=1000)
        assert route.call_count == 1


# ---------------------------------------------------------------------------
# 3. Rate limiting and retries
# ---------------------------------------------------------------------------

class TestRetries:

    async def test_waits_for_rate_limit_reset(self, api, client, sleeps):
        reset = f"{time.time() + 2.5:.3f}"
        route = api.get("/api/v1/filings").mock(side_effect=[
            httpx.Response(429, headers={"X-RateLimit-Reset": reset}),
            httpx.Response(200, json=page_payload([filing_payload(1)])),
        ])

        page = await client.filings.list(ticker="AAPL")

        assert len(page.items) == 1
        assert route.call_count == 2
        assert len(sleeps) == 1
        assert 2.0 <= sleeps[0] <= 2.5

    async def test_rate_limit_exhausts_attempts(self, api, sleeps):
        route = api.get("/api/v1/insider/transactions").respond(429)
        async with EarningsFeed("k", base_url=BASE_URL, retry_policy=RetryPolicy(max_attempts=2, jitter=False)) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.insider.list(ticker="AAPL")
        assert exc_info.value.reset_at is None
        assert route.call_count == 2

    async def test_server_errors_are_retried(self, api, client, sleeps):
        route = api.get("/api/v1/companies/320193").mock(side_effect=[
            httpx.Response(502),
            httpx.Response(200, json={"cik": 320193, "name": "Apple Inc.", "updatedAt": "2024-11-01T00:00:00Z"}),
        ])

        company = await client.companies.get(320193)

        assert company.name == "Apple Inc."
        assert route.call_count == 2
        assert sleeps == [0.5]


# ---------------------------------------------------------------------------
# 4. Other resources
# ---------------------------------------------------------------------------

class TestResources:

    async def test_insider_list(self, api, client):
        route = api.get("/api/v1/insider/transactions").respond(200, json=page_payload([]))

        page = await client.insider.list(ticker="AAPL", direction="buy", codes=["P"])

        assert page.items == []
        params = route.calls.last.request.url.params
        assert params["direction"] == "buy"
        assert params["codes"] == "P"

    async def test_institutional_iter(self, api, client):
        route = api.get("/api/v1/institutional/holdings").respond(200, json=page_payload([]))

        holdings = [h async for h in client.institutional.iter(manager_cik=1067983)]

        assert holdings == []
        assert route.calls.last.request.url.params["managerCik"] == "1067983"

    async def test_company_search(self, api, client):
        route = api.get("/api/v1/companies/search").respond(200, json=page_payload(
            [{"cik": 320193, "name": "Apple Inc.", "ticker": "AAPL", "sicCode": 3571}]
        ))

        page = await client.companies.search(q="apple")

        assert page.items[0].ticker == "AAPL"
        assert page.items[0].sic_code == 3571
        assert route.calls.last.request.url.params["q"] == "apple"

    async def test_company_search_iter(self, api, client):
        api.get("/api/v1/companies/search").respond(200, json=page_payload(
            [{"cik": 1, "name": "A"}, {"cik": 2, "name": "B"}]
        ))

        names = [c.name async for c in client.companies.iter_search(q="a")]

        assert names == ["A", "B"]


# ---------------------------------------------------------------------------
# 5. Shared client
# ---------------------------------------------------------------------------

class TestGetClient:

    async def test_returns_same_instance(self, monkeypatch):
        monkeypatch.setattr(client_module, "_client", None)
        first = get_client(api_key="key", base_url=BASE_URL)
        second = get_client()
        assert first is second
        await first.aclose()

    async def test_repeating_settings_is_allowed(self, monkeypatch):
        monkeypatch.setattr(client_module, "_client", None)
        first = get_client(api_key="key", base_url=BASE_URL)
        assert get_client(api_key="key", base_url=BASE_URL + "/") is first
        await first.aclose()

    async def test_conflicting_settings_are_rejected(self, monkeypatch):
        monkeypatch.setattr(client_module, "_client", None)
        first = get_client(api_key="key", base_url=BASE_URL)

        with pytest.raises(ConfigurationError) as exc_info:
            get_client(api_key="other-key")

        assert exc_info.value.details["fields"] == ["api_key"]
        assert "other-key" not in str(exc_info.value)
        await first.aclose()
