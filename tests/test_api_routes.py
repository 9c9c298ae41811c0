"""
Tests for the JSON API blueprint using Flask's test client.
"""

import logging

import pytest

from app import create_app
from models.price_table import PriceTable


# Fixtures

@pytest.fixture
def app():
    return create_app("config.TestingConfig")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def quote_payload():
    return {
        "quantity": 1,
        "format": "DIN A5",
        "policy": "continuous",
        "pages": {"B": 32, "C": 0},
        "prices": {"B": {"min": 2, "max": 10}, "C": {"min": 2, "max": 10}},
        "fixed_price": {"min": 50, "max": 50},
        "markup": 0,
    }


class TestQuoteEndpoint:

    def test_reference_quote(self, client, quote_payload):
        response = client.post("/api/quote", json=quote_payload)
        assert response.status_code == 200
        assert response.get_json() == {
            "single": 200,
            "total": 200,
            "units_produced": 1,
            "policy": "continuous",
        }

    def test_batch_quote(self, client, quote_payload):
        quote_payload.update(policy="batch", quantity=5)
        data = client.post("/api/quote", json=quote_payload).get_json()
        assert data["units_produced"] == 8
        assert data["policy"] == "batch"

    def test_invalid_format(self, client, quote_payload):
        quote_payload["format"] = "DIN A3"
        response = client.post("/api/quote", json=quote_payload)
        assert response.status_code == 400
        data = response.get_json()
        assert data["details"]["format"] == "DIN A3"
        assert "single" not in data

    def test_unknown_policy(self, client, quote_payload):
        quote_payload["policy"] = "overnight"
        response = client.post("/api/quote", json=quote_payload)
        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "policy"

    def test_missing_price_rejected(self, client, quote_payload):
        quote_payload["pages"] = {"B": 32, "X": 4}
        response = client.post("/api/quote", json=quote_payload)
        assert response.status_code == 400

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_price_rejected(self, client, literal):
        body = (
            '{"quantity": 1, "format": "DIN A5", "pages": {"B": 32}, '
            '"prices": {"B": {"min": %s, "max": 10}}, "markup": 0}' % literal
        )
        response = client.post("/api/quote", data=body, content_type="application/json")
        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "prices.B.min"

    def test_non_finite_markup_rejected(self, client):
        body = (
            '{"quantity": 1, "pages": {"B": 32}, '
            '"prices": {"B": {"min": 2, "max": 10}}, "markup": Infinity}'
        )
        response = client.post("/api/quote", data=body, content_type="application/json")
        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "markup"

    def test_repeated_quotes_register_no_new_loggers(self, client, quote_payload):
        client.post("/api/quote", json=quote_payload)
        before = len(logging.Logger.manager.loggerDict)
        for _ in range(50):
            assert client.post("/api/quote", json=quote_payload).status_code == 200
        assert len(logging.Logger.manager.loggerDict) == before

    def test_non_json_body(self, client):
        response = client.post("/api/quote", data="quantity=1")
        assert response.status_code == 400

    def test_configured_price_table_fills_prices(self, app, client, quote_payload):
        app.config["PRICE_TABLE"] = PriceTable.from_dict({
            "fixed": {"min": 50, "max": 50},
            "classes": {"B": {"min": 2, "max": 10}, "C": {"min": 2, "max": 10}},
        })
        del quote_payload["prices"]
        del quote_payload["fixed_price"]
        data = client.post("/api/quote", json=quote_payload).get_json()
        assert data["single"] == 200


class TestImpositionEndpoint:

    def test_a5(self, client):
        data = client.get("/api/imposition/A5").get_json()
        assert data["count"] == 4
        assert data["orientation"] == "normal"

    def test_unknown_format(self, client):
        response = client.get("/api/imposition/A3")
        assert response.status_code == 400


class TestHealth:

    def test_health_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "ok"
        assert data["checks"]["price_table"] == "not_configured"
