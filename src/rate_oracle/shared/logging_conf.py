"""
Logging Configuration

Централизованная настройка logging: единый формат, stdout и/или файл
с ротацией. Модули пакета используют logging.getLogger(__name__).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Настройка logging для приложения.

    Args:
        level: Уровень логирования (int или имя, например "DEBUG")
        log_file: Путь к файлу логов (включает RotatingFileHandler)
        max_bytes: Размер файла до ротации
        backup_count: Количество хранимых ротаций
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    handlers = [stdout_handler]

    if log_file:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured: file=%s, level=%s", log_file, level)


def setup_logging_from_settings(settings) -> None:
    """Настройка logging по OracleSettings (log_level, log_file)."""
    setup_logging(level=settings.log_level, log_file=settings.log_file)
