"""
Climate advisories, stock alerts and the weather lookup.
"""
import pytest
import requests

from warehouse.config import settings
from warehouse.schemas.dashboard import AlertType, AlertLevel
from warehouse.utils.alerts import check_stock_alerts, climate_advisory
from warehouse.utils.weather import WeatherClient


@pytest.mark.parametrize("temperature, expected", [
    (101.5, AlertType.CLIMATE_HOT),
    (100.0, AlertType.CLIMATE_OK),
    (72.0, AlertType.CLIMATE_OK),
    (40.0, AlertType.CLIMATE_OK),
    (12.0, AlertType.CLIMATE_COLD),
])
def test_climate_advisory(temperature, expected):
    assert climate_advisory(temperature)["alert_type"] == expected


def test_no_reading_no_advisory():
    assert climate_advisory(None) is None


def test_stock_alerts(tools_warehouse):
    tools_warehouse.set_quantity(3, 0)
    alerts = check_stock_alerts(tools_warehouse)

    by_product = {alert["product_id"]: alert for alert in alerts}
    assert set(by_product) == {1, 3}
    assert by_product[3]["alert_type"] == AlertType.STOCK_OUT
    assert by_product[3]["level"] == AlertLevel.CRITICAL
    assert by_product[1]["alert_type"] == AlertType.STOCK_LOW
    assert all(alert["category"] == "Tools" for alert in alerts)


def test_stock_alerts_skip_empty_categories(warehouse):
    warehouse.add_category("Food")
    assert check_stock_alerts(warehouse) == []


class FakeResponse:
    def __init__(self, payload=None, status_error=None):
        self.payload = payload
        self.status_error = status_error

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_weather_disabled_without_key():
    session = FakeSession(FakeResponse({"main": {"temp": 70}}))
    client = WeatherClient(api_key="", session=session)
    assert client.get_temperature() is None
    assert session.calls == []


def test_weather_reads_main_temp():
    session = FakeSession(FakeResponse({"main": {"temp": 71.6}}))
    client = WeatherClient(api_key="key", city="West Lafayette", units="imperial", session=session)

    assert client.get_temperature() == pytest.approx(71.6)
    url, kwargs = session.calls[0]
    assert kwargs["params"] == {"q": "West Lafayette", "appid": "key", "units": "imperial"}
    assert kwargs["timeout"] > 0


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.exceptions.ConnectionError("offline")),
    FakeSession(FakeResponse(status_error=requests.exceptions.HTTPError("401"))),
    FakeSession(FakeResponse({"cod": 404})),
    FakeSession(FakeResponse(ValueError("not json"))),
])
def test_weather_failures_yield_no_reading(session):
    assert WeatherClient(api_key="key", session=session).get_temperature() is None


def test_weather_timeout_zero_is_kept():
    assert WeatherClient(api_key="key", timeout=0).timeout == 0
    assert WeatherClient(api_key="key").timeout == settings.WEATHER_TIMEOUT_SECONDS
