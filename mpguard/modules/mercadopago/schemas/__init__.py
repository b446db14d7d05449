# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/schemas/__init__.py

Modelos pydantic de entrada/salida del guard.
"""

from .webhook_schemas import WebhookData, WebhookNotification
from .preference_schemas import (
    EXTERNAL_REFERENCE_PATTERN,
    BackUrls,
    CheckoutResponse,
    PreferenceItem,
    PreferenceRequest,
)

__all__ = [
    "WebhookData",
    "WebhookNotification",
    "EXTERNAL_REFERENCE_PATTERN",
    "BackUrls",
    "CheckoutResponse",
    "PreferenceItem",
    "PreferenceRequest",
]
