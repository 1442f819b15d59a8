from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config_app import settings
from src.core.config_log import logger
from src.core.exceptions import setup_exception_handlers
from src.weather import weather_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения."""
    logger.info(f"Запуск приложения, погодный API: {settings.WEATHER_API_URL}")
    try:
        yield
    finally:
        logger.info("Приложение остановлено")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Погода
app.include_router(weather_router, tags=["Weather"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Проверка здоровья приложения."""
    return {
        "status": "ok",
        "version": settings.PROJECT_VERSION,
        "service": settings.PROJECT_NAME
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        workers=1,
        log_level="info"
    )
