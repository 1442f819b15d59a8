from enum import Enum


HOT_THRESHOLD = 80
COLD_THRESHOLD = 50


class TemperatureClass(str, Enum):
    HOT = "hot"
    COLD = "cold"
    MODERATE = "moderate"


def classify(temperature: int) -> TemperatureClass:
    """Грубая классификация температуры: обе границы включительные."""
    if temperature >= HOT_THRESHOLD:
        return TemperatureClass.HOT
    if temperature <= COLD_THRESHOLD:
        return TemperatureClass.COLD
    return TemperatureClass.MODERATE
