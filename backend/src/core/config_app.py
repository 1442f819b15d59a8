import os
from typing import List
from dotenv import find_dotenv, load_dotenv

from .config_log import logger


DEFAULT_USER_AGENT = "weather-service-example"


class Settings:
    """Конфигурация сервиса, загруженная из переменных окружения."""

    PROJECT_NAME = "WeatherService"
    PROJECT_VERSION = "1.0.0"
    PROJECT_DESCRIPTION = "Краткий прогноз на сегодня и классификация температуры по координатам (api.weather.gov)"

    def __init__(self):
        if not load_dotenv(find_dotenv(usecwd=True), override=False):
            logger.debug("Не найден .env файл, используются переменные окружения или значения по умолчанию")

        # Погодный API
        self.WEATHER_API_URL: str = os.getenv("WEATHER_API_URL", "https://api.weather.gov").rstrip("/")
        self.WEATHER_USER_AGENT: str = os.getenv("WEATHER_USER_AGENT") or DEFAULT_USER_AGENT
        self.WEATHER_HTTP_TIMEOUT: float = float(os.getenv("WEATHER_HTTP_TIMEOUT", "10.0"))

        # Сервер
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8080"))

        # CORS
        self.ALLOWED_ORIGINS: List[str] = [
            origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()
        ]

        self._validate_settings()

    def _validate_settings(self) -> None:
        """Проверяет настройки, от которых зависит работа с погодным API."""
        if self.WEATHER_USER_AGENT == DEFAULT_USER_AGENT:
            logger.warning(
                "WEATHER_USER_AGENT не задан, используется общий User-Agent. "
                "api.weather.gov может отклонять такие запросы."
            )
        if self.WEATHER_HTTP_TIMEOUT <= 0:
            logger.warning("WEATHER_HTTP_TIMEOUT должен быть положительным, используется 10 секунд")
            self.WEATHER_HTTP_TIMEOUT = 10.0


settings = Settings()
