# -*- coding: utf-8 -*-
"""
mpguard/shared/config/logging_config.py

Logging del guard.

- plain: legible en desarrollo
- json: una línea por evento, con los `extra` como campos

httpx/httpcore loguean cada request en INFO; se limitan a WARNING para
no volcar URLs de la API del proveedor en los logs de la app.

Autor: MPGuard
Fecha: 2026-10-12
"""

import logging.config
from typing import Literal

from pythonjsonlogger.json import JsonFormatter

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["plain", "json"]

QUIET_LOGGERS = ("httpx", "httpcore")


def build_logging_config(level: LogLevel = "INFO", fmt: LogFormat = "plain") -> dict:
    """dictConfig del guard: un handler de consola en la raíz."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(asctime)s %(levelname)s [%(name)s]: %(message)s",
            },
            "json": {
                "()": JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "rename_fields": {"levelname": "level", "name": "logger"},
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": fmt,
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            name: {"level": "WARNING"} for name in QUIET_LOGGERS
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def setup_logging(level: LogLevel = "INFO", fmt: LogFormat = "plain") -> None:
    """
    Configura el logging raíz.

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json")
    """
    logging.config.dictConfig(build_logging_config(level, fmt))


__all__ = ["LogFormat", "LogLevel", "build_logging_config", "setup_logging"]
# Fin del archivo mpguard/shared/config/logging_config.py
