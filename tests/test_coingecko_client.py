"""Tests for the CoinGecko adapter against a stubbed transport."""

import httpx
import pytest

from app.adapters.market.coingecko_client import CoinGeckoClient
from app.core.errors import MarketDataAppError

MARKETS_PAYLOAD = [
    {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "current_price": 50_000,
        "market_cap": 980_000_000_000,
        "market_cap_rank": 1,
        "total_volume": 25_000_000_000,
        "price_change_24h": 1_200.5,
        "price_change_percentage_24h": 2.46,
    },
    {
        "id": "ethereum",
        "symbol": "eth",
        "name": "Ethereum",
        "current_price": 3_200,
        "market_cap": 380_000_000_000,
        "market_cap_rank": 2,
        "total_volume": 12_000_000_000,
        "price_change_24h": -40,
        "price_change_percentage_24h": -1.23,
    },
]


def _client(handler) -> CoinGeckoClient:
    return CoinGeckoClient(
        base_url="https://api.example.test/api/v3",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_fetch_market_data_normalizes_quotes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=MARKETS_PAYLOAD)

    client = _client(handler)
    quotes = await client.fetch_market_data(["bitcoin", "ethereum"], "usd")
    await client.aclose()

    assert seen[0].url.path == "/api/v3/coins/markets"
    assert seen[0].url.params["ids"] == "bitcoin,ethereum"
    assert seen[0].url.params["vs_currency"] == "usd"
    assert seen[0].url.params["order"] == "market_cap_desc"

    btc = quotes[0]
    assert btc.symbol == "BTC"
    assert btc.price == 50_000
    assert btc.price_change_percentage_24h == 2.46
    assert btc.volume_24h == 25_000_000_000
    assert btc.volume_change_24h == 0
    assert btc.rank == 1
    assert quotes[1].price_change_24h == -40


@pytest.mark.asyncio
async def test_fetch_trending_resolves_top_ids_into_quotes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/search/trending"):
            coins = [{"item": {"id": f"coin-{i}"}} for i in range(15)]
            return httpx.Response(200, json={"coins": coins})
        assert request.url.params["ids"] == ",".join(f"coin-{i}" for i in range(10))
        return httpx.Response(200, json=MARKETS_PAYLOAD[:1])

    client = _client(handler)
    quotes = await client.fetch_trending_coins()
    await client.aclose()

    assert [q.asset for q in quotes] == ["bitcoin"]


@pytest.mark.asyncio
async def test_fetch_trending_empty() -> None:
    client = _client(lambda request: httpx.Response(200, json={"coins": []}))

    assert await client.fetch_trending_coins() == []
    await client.aclose()


@pytest.mark.asyncio
async def test_fetch_coin_history() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v3/coins/bitcoin/market_chart"
        assert request.url.params["days"] == "30"
        return httpx.Response(200, json={"prices": [[1_700_000_000_000, 35_000.5], [1_700_003_600_000, 35_100]]})

    client = _client(handler)
    history = await client.fetch_coin_history("bitcoin", days=30, vs_currency="eur")
    await client.aclose()

    assert history.asset == "bitcoin"
    assert history.vs_currency == "eur"
    assert [p.price for p in history.prices] == [35_000.5, 35_100.0]
    assert history.prices[0].timestamp == 1_700_000_000_000


@pytest.mark.asyncio
async def test_bad_status_raises_market_error() -> None:
    client = _client(lambda request: httpx.Response(429, json={"status": {"error_code": 429}}))

    with pytest.raises(MarketDataAppError) as exc_info:
        await client.fetch_market_data(["bitcoin"])
    await client.aclose()

    assert exc_info.value.code == "market_bad_status"
    assert exc_info.value.error == "HTTP error! status: 429"
    assert exc_info.value.details == {"upstream_status": 429}


@pytest.mark.asyncio
async def test_transport_error_raises_market_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(MarketDataAppError) as exc_info:
        await client.fetch_market_data(["bitcoin"])
    await client.aclose()

    assert exc_info.value.code == "market_unavailable"
    assert "ConnectError" in exc_info.value.error


@pytest.mark.asyncio
async def test_invalid_json_raises_market_error() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(MarketDataAppError) as exc_info:
        await client.fetch_market_data(["bitcoin"])
    await client.aclose()

    assert exc_info.value.code == "market_invalid_payload"


@pytest.mark.asyncio
async def test_unexpected_shape_raises_market_error() -> None:
    client = _client(lambda request: httpx.Response(200, json={"error": "nope"}))

    with pytest.raises(MarketDataAppError):
        await client.fetch_market_data(["bitcoin"])
    await client.aclose()
