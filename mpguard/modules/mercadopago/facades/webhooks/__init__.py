# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/facades/webhooks/__init__.py

Procesamiento de webhooks de Mercado Pago.
"""

from .handler import WebhookHandler, get_header, parse_webhook_body
from .pipeline import PaymentUpdateCallback, WebhookPipeline, WebhookResult

__all__ = [
    "WebhookHandler",
    "get_header",
    "parse_webhook_body",
    "PaymentUpdateCallback",
    "WebhookPipeline",
    "WebhookResult",
]
