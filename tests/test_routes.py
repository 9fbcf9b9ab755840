"""Contract tests for the data routes.

Every route must answer with the envelope, and every envelope must respect
the success/error pairing: 2xx responses carry ``success=True`` and no
``error``; non-2xx responses carry ``success=False``, ``data=None`` and an
``error``.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.core.errors import MarketDataAppError
from app.main import app
from app.schemas.market import MarketData, PriceHistory, PricePoint


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _assert_success(response, message: str) -> dict:
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == message
    assert "error" not in body
    assert "timestamp" in body
    return body


def _assert_failure(response, status_code: int, message: str, error: str | None = None) -> dict:
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["message"] == message
    assert body["error"]
    if error is not None:
        assert body["error"] == error
    return body


def _quote(asset: str, symbol: str, price: float) -> MarketData:
    return MarketData(
        asset=asset,
        symbol=symbol,
        name=asset.title(),
        price=price,
        price_change_24h=1.5,
        price_change_percentage_24h=0.5,
        volume_24h=1_000,
        market_cap=10_000,
        rank=1,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestMarketRoutes:
    @patch("app.api.routes.market._market_service")
    def test_default_ids(self, mock_service, client: TestClient) -> None:
        mock_service.get_market_data = AsyncMock(return_value=[_quote("bitcoin", "BTC", 50_000)])

        body = _assert_success(client.get("/v1/market"), "Market data fetched successfully")

        mock_service.get_market_data.assert_awaited_once_with(["bitcoin", "ethereum", "binancecoin"])
        quote = body["data"][0]
        assert quote["asset"] == "bitcoin"
        assert quote["priceChangePercentage24h"] == 0.5
        assert quote["volumeChange24h"] == 0

    @patch("app.api.routes.market._market_service")
    def test_explicit_ids(self, mock_service, client: TestClient) -> None:
        mock_service.get_market_data = AsyncMock(return_value=[])

        _assert_success(client.get("/v1/market?ids=solana,cardano"), "Market data fetched successfully")

        mock_service.get_market_data.assert_awaited_once_with(["solana", "cardano"])

    @patch("app.api.routes.market._market_service")
    def test_trending(self, mock_service, client: TestClient) -> None:
        mock_service.get_trending = AsyncMock(return_value=[_quote("pepe", "PEPE", 0.00001)])

        body = _assert_success(client.get("/v1/market?type=trending"), "Market data fetched successfully")

        assert body["data"][0]["symbol"] == "PEPE"
        mock_service.get_trending.assert_awaited_once()

    @patch("app.api.routes.market._market_service")
    def test_unknown_type_falls_back_to_market(self, mock_service, client: TestClient) -> None:
        mock_service.get_market_data = AsyncMock(return_value=[])

        _assert_success(client.get("/v1/market?type=bogus"), "Market data fetched successfully")

        mock_service.get_market_data.assert_awaited_once()

    @patch("app.api.routes.market._market_service")
    def test_provider_failure_returns_500_envelope(self, mock_service, client: TestClient) -> None:
        mock_service.get_market_data = AsyncMock(
            side_effect=MarketDataAppError(
                code="market_bad_status",
                message="Market data provider returned an error",
                error="HTTP error! status: 503",
            )
        )

        _assert_failure(
            client.get("/v1/market"),
            500,
            "Failed to fetch market data",
            "HTTP error! status: 503",
        )

    @patch("app.api.routes.market._market_service")
    def test_unexpected_failure_returns_500_envelope(self, mock_service, client: TestClient) -> None:
        mock_service.get_trending = AsyncMock(side_effect=RuntimeError("boom"))

        _assert_failure(client.get("/v1/market?type=trending"), 500, "Failed to fetch market data", "boom")

    @patch("app.api.routes.market._market_service")
    def test_history(self, mock_service, client: TestClient) -> None:
        mock_service.get_history = AsyncMock(
            return_value=PriceHistory(
                asset="bitcoin",
                vs_currency="usd",
                days=7,
                prices=[PricePoint(timestamp=1, price=2.0)],
            )
        )

        body = _assert_success(
            client.get("/v1/market/bitcoin/history?days=7"),
            "Price history fetched successfully",
        )

        assert body["data"]["vsCurrency"] == "usd"
        assert body["data"]["prices"] == [{"timestamp": 1, "price": 2.0}]
        mock_service.get_history.assert_awaited_once_with("bitcoin", 7, None)

    def test_history_rejects_out_of_range_days(self, client: TestClient) -> None:
        _assert_failure(
            client.get("/v1/market/bitcoin/history?days=0"),
            400,
            "Invalid history range",
        )


class TestPortfolioRoutes:
    def test_get_requires_user_id(self, client: TestClient) -> None:
        _assert_failure(
            client.get("/v1/portfolio"),
            400,
            "User ID is required",
            "Missing userId parameter",
        )

    def test_get_holdings(self, client: TestClient) -> None:
        body = _assert_success(
            client.get("/v1/portfolio?userId=user-1"),
            "Portfolio data fetched successfully",
        )

        btc, eth = body["data"]
        assert btc["userId"] == "user-1"
        assert btc["totalValue"] == 25_000
        assert btc["pnl"] == 2_500
        assert btc["pnlPercentage"] == 11.11
        assert eth["pnlPercentage"] == 6.67

    def test_summary(self, client: TestClient) -> None:
        body = _assert_success(
            client.get("/v1/portfolio/summary?userId=user-1"),
            "Portfolio summary computed successfully",
        )

        assert body["data"]["totalValue"] == 57_000
        assert body["data"]["totalPnl"] == 4_500
        assert body["data"]["totalPnlPercentage"] == 8.57
        assert body["data"]["holdingsCount"] == 2

    def test_summary_requires_user_id(self, client: TestClient) -> None:
        _assert_failure(client.get("/v1/portfolio/summary"), 400, "User ID is required")

    def test_post_creates_item(self, client: TestClient) -> None:
        body = _assert_success(
            client.post(
                "/v1/portfolio",
                json={"userId": "user-1", "asset": "solana", "quantity": 3, "averageBuyPrice": 120},
            ),
            "Portfolio item added successfully",
        )

        assert body["data"]["portfolioId"].startswith("portfolio_")
        assert body["data"]["asset"] == "solana"
        assert body["data"]["averageBuyPrice"] == 120

    @pytest.mark.parametrize(
        "payload",
        [
            {"asset": "solana", "quantity": 3, "averageBuyPrice": 120},
            {"userId": "u", "asset": "solana", "quantity": 0, "averageBuyPrice": 120},
            {"userId": "u", "asset": "", "quantity": 1, "averageBuyPrice": 120},
            {},
        ],
    )
    def test_post_missing_fields(self, payload: dict, client: TestClient) -> None:
        _assert_failure(
            client.post("/v1/portfolio", json=payload),
            400,
            "Missing required fields",
            "userId, asset, quantity, and averageBuyPrice are required",
        )

    def test_post_malformed_body_is_400(self, client: TestClient) -> None:
        response = client.post(
            "/v1/portfolio",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        _assert_failure(response, 400, "Invalid request")

    @patch("app.api.routes.portfolio._portfolio_service")
    def test_get_failure_returns_500_envelope(self, mock_service, client: TestClient) -> None:
        mock_service.get_holdings = AsyncMock(side_effect=RuntimeError("db down"))

        _assert_failure(
            client.get("/v1/portfolio?userId=u1"),
            500,
            "Failed to fetch portfolio data",
            "db down",
        )


class TestAlertsRoutes:
    def test_get_requires_user_id(self, client: TestClient) -> None:
        _assert_failure(client.get("/v1/alerts"), 400, "User ID is required", "Missing userId parameter")

    def test_list(self, client: TestClient) -> None:
        body = _assert_success(client.get("/v1/alerts?userId=u1"), "Alerts fetched successfully")

        assert [a["conditionType"] for a in body["data"]] == ["price_above", "price_below"]
        assert all(a["status"] == "active" and a["userId"] == "u1" for a in body["data"])

    def test_create(self, client: TestClient) -> None:
        body = _assert_success(
            client.post(
                "/v1/alerts",
                json={
                    "userId": "u1",
                    "asset": "bitcoin",
                    "symbol": "BTC",
                    "conditionType": "volume_spike",
                    "value": 2.5,
                },
            ),
            "Alert created successfully",
        )

        assert body["data"]["alertId"].startswith("alert_")
        assert body["data"]["status"] == "active"
        assert body["data"]["conditionType"] == "volume_spike"

    def test_create_missing_fields(self, client: TestClient) -> None:
        _assert_failure(
            client.post("/v1/alerts", json={"userId": "u1", "asset": "bitcoin"}),
            400,
            "Missing required fields",
            "userId, asset, symbol, conditionType, and value are required",
        )

    def test_create_invalid_condition(self, client: TestClient) -> None:
        _assert_failure(
            client.post(
                "/v1/alerts",
                json={
                    "userId": "u1",
                    "asset": "bitcoin",
                    "symbol": "BTC",
                    "conditionType": "moon",
                    "value": 1,
                },
            ),
            400,
            "Invalid condition type",
            "conditionType must be one of: price_above, price_below, volume_spike, news_mention",
        )

    def test_delete(self, client: TestClient) -> None:
        body = _assert_success(client.delete("/v1/alerts?alertId=alert_1"), "Alert deleted successfully")

        assert body["data"] == {"alertId": "alert_1"}

    def test_delete_requires_alert_id(self, client: TestClient) -> None:
        _assert_failure(client.delete("/v1/alerts"), 400, "Alert ID is required", "Missing alertId parameter")


class TestNewsRoute:
    def test_default_limit(self, client: TestClient) -> None:
        body = _assert_success(client.get("/v1/news"), "News fetched successfully")

        assert len(body["data"]) == 2
        assert body["data"][0]["source"]["name"] == "CryptoNews"
        assert "publishedAt" in body["data"][0]

    def test_limit_slices(self, client: TestClient) -> None:
        body = _assert_success(client.get("/v1/news?limit=1"), "News fetched successfully")

        assert len(body["data"]) == 1

    def test_non_integer_limit_is_400(self, client: TestClient) -> None:
        _assert_failure(client.get("/v1/news?limit=abc"), 400, "Invalid request")

    def test_negative_limit_is_400(self, client: TestClient) -> None:
        _assert_failure(client.get("/v1/news?limit=-1"), 400, "Invalid limit")


class TestFrameRoutes:
    def test_get_home_by_default(self, client: TestClient) -> None:
        body = _assert_success(client.get("/v1/frame"), "Frame data generated successfully")

        assert body["data"]["image"].endswith("/api/frame/image?type=home")
        assert len(body["data"]["buttons"]) == 4
        assert body["data"]["postUrl"].endswith("/api/frame")

    def test_post_button_navigation(self, client: TestClient) -> None:
        body = _assert_success(
            client.post(
                "/v1/frame",
                json={"untrustedData": {"buttonIndex": 3, "fid": 42}, "trustedData": {"messageBytes": "ab"}},
            ),
            "Frame interaction processed",
        )

        assert body["data"]["image"].endswith("type=alerts")

    def test_post_empty_untrusted_data_shows_home(self, client: TestClient) -> None:
        body = _assert_success(
            client.post("/v1/frame", json={"untrustedData": {}, "trustedData": {"messageBytes": "ab"}}),
            "Frame interaction processed",
        )

        assert body["data"]["image"].endswith("type=home")

    def test_post_boolean_button_index_shows_home(self, client: TestClient) -> None:
        body = _assert_success(
            client.post("/v1/frame", json={"untrustedData": {"buttonIndex": True}, "trustedData": {"messageBytes": "ab"}}),
            "Frame interaction processed",
        )

        assert body["data"]["image"].endswith("type=home")

    def test_post_requires_both_payloads(self, client: TestClient) -> None:
        _assert_failure(
            client.post("/v1/frame", json={"untrustedData": {"buttonIndex": 1}}),
            400,
            "Invalid frame data",
            "Missing untrustedData or trustedData",
        )


def test_unknown_route_is_enveloped(client: TestClient) -> None:
    _assert_failure(client.get("/v1/does-not-exist"), 404, "Not Found")


def test_health_is_plain(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_market_client_survives_repeated_lifespans() -> None:
    from app.api.routes import market as market_routes

    with TestClient(app):
        first = market_routes._market_client
        assert not first.is_closed

    assert first.is_closed

    with TestClient(app):
        second = market_routes._market_client
        assert second is not first
        assert not second.is_closed
        assert market_routes._market_service.client is second
