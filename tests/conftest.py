import pytest
import respx

from earningsfeed import EarningsFeed, RetryPolicy

BASE_URL = "https://api.test.earningsfeed.com"


def filing_payload(n: int, **overrides) -> dict:
    """A filing as the API returns it (camelCase keys)."""
    payload = {
        "accessionNumber": f"0000320193-24-{n:06d}",
        "accessionNoDashes": f"000032019324{n:06d}",
        "cik": 320193,
        "companyName": "Apple Inc.",
        "formType": "10-Q",
        "filedAt": "2024-08-02T16:30:00Z",
        "provisional": False,
        "sizeBytes": 1024,
        "url": f"https://www.sec.gov/Archives/edgar/data/320193/000032019324{n:06d}/",
        "title": f"Quarterly report {n}",
        "status": "final",
        "updatedAt": "2024-08-02T17:00:00Z",
        "primaryTicker": "AAPL",
        "sortedAt": "2024-08-02T16:30:00Z",
    }
    payload.update(overrides)
    return payload


def page_payload(items, next_cursor=None, has_more=None) -> dict:
    if has_more is None:
        has_more = next_cursor is not None
    return {"items": items, "nextCursor": next_cursor, "hasMore": has_more}


@pytest.fixture
def api():
    """Mocked EarningsFeed API; every httpx request is routed here."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def sleeps(monkeypatch):
    """Record retry backoff instead of sleeping."""
    recorded = []

    async def fake_sleep(seconds):
        recorded.append(seconds)

    monkeypatch.setattr("earningsfeed.http.retry._sleep", fake_sleep)
    return recorded


@pytest.fixture
async def client(api, sleeps):
    client = EarningsFeed(
        "test-key",
        base_url=BASE_URL,
        timeout=5.0,
        retry_policy=RetryPolicy(jitter=False),
    )
    yield client
    await client.aclose()
