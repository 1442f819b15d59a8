from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.weather.classifier import TemperatureClass


class PointsProperties(BaseModel):
    forecast: str = Field(..., min_length=1, description="URL прогноза для сетки, к которой относится точка")


class PointsResponse(BaseModel):
    """Ответ /points/{lat},{lon}. Нужна только ссылка на прогноз."""

    properties: PointsProperties


class ForecastPeriod(BaseModel):
    """Один период прогноза ("Today", "Tonight", ...)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    start_time: str = Field("", alias="startTime")
    temperature: int
    temperature_unit: str = Field("", alias="temperatureUnit")
    short_forecast: str = Field("", alias="shortForecast")
    is_daytime: bool = Field(False, alias="isDaytime")

    @field_validator("name", "start_time", "temperature_unit", "short_forecast", "is_daytime", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """null в необязательных полях равен значению по умолчанию."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def start_date(self) -> str:
        """Дата начала периода (YYYY-MM-DD) или пустая строка для слишком короткой метки времени."""
        if len(self.start_time) < 10:
            return ""
        return self.start_time[:10]


class ForecastProperties(BaseModel):
    periods: List[ForecastPeriod] = Field(default_factory=list)


class ForecastResponse(BaseModel):
    """Ответ ресурса прогноза по сетке."""

    properties: ForecastProperties


class WeatherResult(BaseModel):
    """Модель ответа эндпоинта /weather."""

    forecast: str
    temperature: int
    classification: TemperatureClass
