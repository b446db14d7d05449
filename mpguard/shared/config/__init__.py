# -*- coding: utf-8 -*-
"""
mpguard/shared/config/__init__.py

Configuración compartida: settings y logging.
"""

from .settings_mercadopago import (
    MercadoPagoSettings,
    get_mercadopago_settings,
    reset_mercadopago_settings,
)
from .logging_config import build_logging_config, setup_logging

__all__ = [
    "MercadoPagoSettings",
    "build_logging_config",
    "get_mercadopago_settings",
    "reset_mercadopago_settings",
    "setup_logging",
]
