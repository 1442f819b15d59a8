import traceback
import uuid
from typing import Optional
from contextvars import ContextVar
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.config_log import logger


request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

FORECAST_FAILURE_MESSAGE = "Failed to fetch forecast"


class WeatherServiceException(Exception):
    """
    Базовый класс для всех исключений сервиса.

    message уходит клиенту как есть, detail пишется только в лог.
    """
    def __init__(self, message: str, status_code: int = 500, detail: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail or message)


class ValidationError(WeatherServiceException):
    """Исключение для некорректных или отсутствующих параметров запроса."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message=message, status_code=400)


class ForecastError(WeatherServiceException):
    """Базовое исключение для любых сбоев при получении прогноза."""

    def __init__(self, detail: str):
        super().__init__(message=FORECAST_FAILURE_MESSAGE, status_code=500, detail=detail)


class UpstreamError(ForecastError):
    """Погодный API недоступен или ответил ошибкой."""


class DecodeError(ForecastError):
    """Ответ погодного API не является JSON ожидаемой структуры."""


class EmptyResultError(ForecastError):
    """Погодный API вернул прогноз без единого периода."""


def create_error_response(status_code: int, message: str) -> PlainTextResponse:
    """Создает текстовый ответ об ошибке."""

    return PlainTextResponse(content=message, status_code=status_code)


async def weather_service_exception_handler(request: Request, exc: WeatherServiceException) -> PlainTextResponse:
    """Обработчик для всех исключений, наследующихся от WeatherServiceException."""

    req_id = request_id_ctx.get()
    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__}: {exc.detail or exc.message} | Path: {request.url.path} | Request-ID: {req_id}"
        )
    else:
        logger.info(f"Client Error: {exc.message} | Path: {request.url.path} | Request-ID: {req_id}")
    return create_error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Обработчик для стандартных HTTP исключений от Starlette."""

    messages = {404: "Not Found", 405: "Method Not Allowed"}
    msg = messages.get(exc.status_code, str(exc.detail))
    return create_error_response(exc.status_code, msg)


async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Обработчик для всех непредвиденных исключений."""

    logger.error(f"Unhandled Exception: {type(exc).__name__}: {str(exc)} | Traceback: {traceback.format_exc()}")
    return create_error_response(500, "Internal Server Error")


async def request_id_middleware(request: Request, call_next):
    """Middleware для генерации уникального идентификатора запроса и его передачи в контекст."""

    req_id = str(uuid.uuid4())
    request_id_ctx.set(req_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = req_id
    return response


def setup_exception_handlers(app: FastAPI):
    """Функция для настройки всех обработчиков исключений и middleware в FastAPI приложении."""

    app.middleware("http")(request_id_middleware)
    app.add_exception_handler(WeatherServiceException, weather_service_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
