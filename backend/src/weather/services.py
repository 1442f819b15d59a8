from datetime import date
from typing import Callable, List, Optional, Type, TypeVar
import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from src.core.config_app import settings
from src.core.config_log import logger
from src.core.exceptions import DecodeError, EmptyResultError, UpstreamError
from src.weather.classifier import classify
from src.weather.schemas import ForecastPeriod, ForecastResponse, PointsResponse, WeatherResult


M = TypeVar("M", bound=BaseModel)


def select_period(periods: List[ForecastPeriod], today: date) -> ForecastPeriod:
    """
    Выбирает период прогноза на сегодня.

    Первый дневной период, начинающийся сегодня; если такого нет, то первый
    период последовательности. Пустая последовательность дает EmptyResultError.
    """
    if not periods:
        raise EmptyResultError("Погодный API вернул прогноз без периодов")

    today_str = today.isoformat()
    for period in periods:
        if period.is_daytime and period.start_date == today_str:
            return period

    fallback = periods[0]
    logger.info(f"Нет дневного периода на {today_str}, используется первый период: {fallback.name!r}")
    return fallback


class ForecastResolver:
    """Получение прогноза по координатам: /points -> ресурс прогноза -> выбор периода."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        today: Callable[[], date] = date.today,
    ):
        self.base_url = (base_url or settings.WEATHER_API_URL).rstrip("/")
        self.user_agent = user_agent or settings.WEATHER_USER_AGENT
        self.timeout = timeout if timeout is not None else settings.WEATHER_HTTP_TIMEOUT
        self._transport = transport
        self._today = today

    def points_url(self, latitude: float, longitude: float) -> str:
        return f"{self.base_url}/points/{latitude:.4f},{longitude:.4f}"

    async def _get_json(self, client: httpx.AsyncClient, url: str, model: Type[M]) -> M:
        """GET запрос и разбор ответа в модель. Сетевые ошибки -> UpstreamError, разбор -> DecodeError."""
        logger.debug(f"GET {url}")
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"{url}: HTTP {e.response.status_code}: {e.response.text[:200]}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"{url}: {type(e).__name__}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"{url}: ответ не является JSON: {e}") from e

        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise DecodeError(f"{url}: неожиданная структура ответа: {e}") from e

    async def fetch_periods(self, latitude: float, longitude: float) -> List[ForecastPeriod]:
        """Два последовательных запроса: ссылка на прогноз по точке, затем сам прогноз."""
        async with httpx.AsyncClient(
            headers={"User-Agent": self.user_agent, "Accept": "application/geo+json"},
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            points = await self._get_json(client, self.points_url(latitude, longitude), PointsResponse)
            forecast = await self._get_json(client, points.properties.forecast, ForecastResponse)
        return forecast.properties.periods

    async def resolve(self, latitude: float, longitude: float) -> WeatherResult:
        """Прогноз на сегодня с классификацией температуры."""
        periods = await self.fetch_periods(latitude, longitude)
        period = select_period(periods, self._today())
        return WeatherResult(
            forecast=period.short_forecast,
            temperature=period.temperature,
            classification=classify(period.temperature),
        )


def get_forecast_resolver() -> ForecastResolver:
    """Зависимость FastAPI: новый резолвер на каждый запрос."""
    return ForecastResolver()
