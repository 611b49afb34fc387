from fastapi import Request

from warehouse.service import Warehouse
from warehouse.utils.weather import WeatherClient


def get_warehouse(request: Request) -> Warehouse:
    return request.app.state.warehouse


def get_weather_client(request: Request) -> WeatherClient:
    return request.app.state.weather_client
