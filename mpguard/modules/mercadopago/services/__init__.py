# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/services/__init__.py

Servicios del guard: idempotencia y validadores de seguridad.
"""

from .idempotency_store import (
    IdempotencyRecord,
    IdempotencyStore,
    build_webhook_dedup_key,
    validate_idempotency_key,
)
from .security import (
    SignatureVerifier,
    sanitize_metadata,
    validate_callback_url,
    validate_payment_amount,
    verify_webhook_signature,
)

__all__ = [
    "IdempotencyRecord",
    "IdempotencyStore",
    "build_webhook_dedup_key",
    "validate_idempotency_key",
    "SignatureVerifier",
    "sanitize_metadata",
    "validate_callback_url",
    "validate_payment_amount",
    "verify_webhook_signature",
]
