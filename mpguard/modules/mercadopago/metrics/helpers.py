# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/metrics/helpers.py

Mapeo de excepciones del pipeline al label `reason` de métricas.

Autor: MPGuard
Fecha: 2026-10-14
"""
from __future__ import annotations

from mpguard.modules.mercadopago.errors import MercadoPagoError, MercadoPagoErrorCodes


def map_exception_to_reason(exc: BaseException) -> str:
    """
    Traduce una excepción a la razón de rechazo (label `reason`).

    Errores del guard usan su código estable; cualquier otra excepción
    es "processing_error".
    """
    if isinstance(exc, MercadoPagoError):
        return exc.code
    if isinstance(exc, ValueError):
        return MercadoPagoErrorCodes.VALIDATION_FAILED
    return "processing_error"


__all__ = [
    "map_exception_to_reason",
]
