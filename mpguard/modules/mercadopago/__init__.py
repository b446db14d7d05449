# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/__init__.py

Guard de ingesta de pagos de Mercado Pago.

Este módulo gestiona:
- Rate limiting de webhooks y creación de pagos
- Verificación de firmas de notificaciones
- Idempotencia / dedup de notificaciones
- Validación de montos, metadata y URLs de callback

Estructura:
- enums: Estados de pago y de webhook
- schemas: Validación Pydantic de payloads
- middleware: Rate limiter
- services: Idempotencia y validadores de seguridad
- adapters: Cliente HTTP de Mercado Pago
- repositories: Registro local de pagos
- metrics: Métricas Prometheus
- facades: Pipeline de webhooks y checkout (API pública)

Autor: MPGuard
Fecha: 2026-10-12
"""

# ===== ERRORES =====
from .errors import (
    AmountMismatch,
    InternalError,
    MercadoPagoError,
    MercadoPagoErrorCodes,
    PaymentNotFound,
    ProviderUnavailable,
    RateLimited,
    SignatureInvalid,
    ValidationFailed,
)

# ===== ENUMS =====
from .enums import PaymentStatus, WebhookProcessingOutcome, WebhookState

# ===== SCHEMAS =====
from .schemas import (
    BackUrls,
    CheckoutResponse,
    PreferenceItem,
    PreferenceRequest,
    WebhookNotification,
)

# ===== COMPONENTES =====
from .middleware import FixedWindowRateLimiter
from .services import (
    IdempotencyStore,
    SignatureVerifier,
    sanitize_metadata,
    validate_callback_url,
    validate_payment_amount,
    verify_webhook_signature,
)
from .adapters import MercadoPagoClient, PaymentProviderClient, PreferenceResult, ProviderPayment
from .repositories import InMemoryPaymentRecordStore, PaymentRecord, PaymentRecordStore

# ===== FACHADAS =====
from .facades.webhooks import WebhookHandler, WebhookPipeline, WebhookResult
from .facades.checkout import CheckoutService

__all__ = [
    # Errores
    "AmountMismatch",
    "InternalError",
    "MercadoPagoError",
    "MercadoPagoErrorCodes",
    "PaymentNotFound",
    "ProviderUnavailable",
    "RateLimited",
    "SignatureInvalid",
    "ValidationFailed",
    # Enums
    "PaymentStatus",
    "WebhookProcessingOutcome",
    "WebhookState",
    # Schemas
    "BackUrls",
    "CheckoutResponse",
    "PreferenceItem",
    "PreferenceRequest",
    "WebhookNotification",
    # Componentes
    "FixedWindowRateLimiter",
    "IdempotencyStore",
    "SignatureVerifier",
    "sanitize_metadata",
    "validate_callback_url",
    "validate_payment_amount",
    "verify_webhook_signature",
    "MercadoPagoClient",
    "PaymentProviderClient",
    "PreferenceResult",
    "ProviderPayment",
    "InMemoryPaymentRecordStore",
    "PaymentRecord",
    "PaymentRecordStore",
    # Fachadas
    "WebhookHandler",
    "WebhookPipeline",
    "WebhookResult",
    "CheckoutService",
]

# Fin del archivo mpguard/modules/mercadopago/__init__.py
