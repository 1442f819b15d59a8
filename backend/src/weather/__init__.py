from .routes import weather_router
from .classifier import TemperatureClass, classify


__all__ = ["weather_router", "TemperatureClass", "classify"]
