# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/facades/checkout/__init__.py

Creación de preferencias de pago.
"""

from .checkout_service import (
    CHECKOUT_RATE_LIMIT_PREFIX,
    CheckoutService,
    build_checkout_rate_limit_key,
)

__all__ = [
    "CHECKOUT_RATE_LIMIT_PREFIX",
    "CheckoutService",
    "build_checkout_rate_limit_key",
]
