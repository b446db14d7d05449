# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/enums/__init__.py

Superficie de exportación de enums del módulo Mercado Pago.

Incluye:
- PaymentStatus
- WebhookState
- WebhookProcessingOutcome

Autor: MPGuard
Fecha: 2026-10-13
"""

from .payment_status_enum import PaymentStatus
from .webhook_state_enum import WebhookProcessingOutcome, WebhookState

__all__ = [
    "PaymentStatus",
    "WebhookState",
    "WebhookProcessingOutcome",
]

# Fin del archivo mpguard/modules/mercadopago/enums/__init__.py
