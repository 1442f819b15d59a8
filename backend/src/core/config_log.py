import logging
import os
import sys
from pathlib import Path


LOG_NAME = "weather_service"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(module)s:%(funcName)s:%(lineno)d | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str = LOG_NAME, log_dir: Path = Path(os.getenv("LOG_DIR", "logs"))) -> logging.Logger:
    """
    Логгер сервиса: консоль с INFO, файл <log_dir>/app.log с DEBUG.

    Повторный вызов не добавляет обработчики второй раз.
    """
    service_logger = logging.getLogger(name)
    if service_logger.handlers:
        return service_logger

    service_logger.setLevel(logging.DEBUG)
    service_logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    console.setFormatter(formatter)
    service_logger.addHandler(console)

    # Исходящие запросы к погодному API пишутся только сюда
    log_dir.mkdir(parents=True, exist_ok=True)
    debug_file = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
    debug_file.setLevel(logging.DEBUG)
    debug_file.setFormatter(formatter)
    service_logger.addHandler(debug_file)

    return service_logger


logger = setup_logger()
