import re
from typing import Optional
from fastapi import APIRouter, Depends, Query

from src.core.config_log import logger
from src.core.exceptions import ValidationError
from src.weather.schemas import WeatherResult
from src.weather.services import ForecastResolver, get_forecast_resolver

weather_router = APIRouter()

# Десятичная запись ASCII-цифрами: без "_", пробелов и юникодных цифр, которые пропускает float()
COORDINATE_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_coordinate(raw: str, message: str, field: str) -> float:
    if not COORDINATE_RE.fullmatch(raw):
        raise ValidationError(message, field=field)
    return float(raw)


@weather_router.get("/weather", response_model=WeatherResult)
async def get_weather(
    lat: Optional[str] = Query(None, description="Широта в десятичных градусах"),
    lon: Optional[str] = Query(None, description="Долгота в десятичных градусах"),
    resolver: ForecastResolver = Depends(get_forecast_resolver),
):
    """Краткий прогноз на сегодня и класс температуры (hot/cold/moderate) по координатам."""

    # Параметры разбираются вручную: порядок проверок и тексты ошибок фиксированы
    if not lat or not lon:
        raise ValidationError("Missing lat or lon parameter")
    latitude = _parse_coordinate(lat, "Invalid latitude", "lat")
    longitude = _parse_coordinate(lon, "Invalid longitude", "lon")

    result = await resolver.resolve(latitude, longitude)
    logger.info(f"Прогноз для ({latitude:.4f}, {longitude:.4f}): {result.temperature} -> {result.classification.value}")
    return result
