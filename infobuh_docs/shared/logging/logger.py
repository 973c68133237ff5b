"""
Система логирования сервиса генерации документов

Конфигурация читается из YAML файла (dictConfig); если файла нет,
используется консольная конфигурация по умолчанию.
"""

import logging
import logging.config
import os
import sys
from typing import Optional

import yaml


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", log_format: Optional[str] = None) -> None:
    """
    Консольная конфигурация логирования

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR)
        log_format: Формат сообщений
    """
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": log_format or DEFAULT_LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": sys.stdout
            }
        },
        "loggers": {
            "app": {
                "level": level,
                "handlers": ["console"],
                "propagate": False
            }
        }
    }
    logging.config.dictConfig(logging_config)


def logger_configure(config_path: str = "./config/logging.yaml", level: str = "INFO") -> None:
    """Настраивает логирование из YAML файла, создавая каталоги для файловых обработчиков"""
    if not os.path.exists(config_path):
        setup_logging(level=level)
        logging.getLogger("app.logging").warning(
            f"Файл конфигурации логирования не найден: {config_path}, используется консольный вывод"
        )
        return

    with open(config_path, "rt", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    for handler in cfg.get("handlers", {}).values():
        filename = handler.get("filename")
        if filename:
            log_dir = os.path.dirname(filename) or "."
            os.makedirs(log_dir, exist_ok=True)

    logging.config.dictConfig(cfg)
