# -*- coding: utf-8 -*-
"""
mpguard/bootstrap.py

Fábrica del guard: construye y conecta los componentes a partir de
MercadoPagoSettings. Es el único lugar que lee la configuración.

Uso:
    guard = build_guard(on_payment_update=notify_orders)
    ack = await guard.webhook_handler.handle(raw_body, request.headers)

Autor: MPGuard
Fecha: 2026-10-16
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mpguard.modules.mercadopago.adapters import MercadoPagoClient, PaymentProviderClient
from mpguard.modules.mercadopago.facades.checkout import CheckoutService
from mpguard.modules.mercadopago.facades.webhooks import (
    PaymentUpdateCallback,
    WebhookHandler,
    WebhookPipeline,
)
from mpguard.modules.mercadopago.middleware import FixedWindowRateLimiter
from mpguard.modules.mercadopago.repositories import (
    InMemoryPaymentRecordStore,
    PaymentRecordStore,
)
from mpguard.modules.mercadopago.services import IdempotencyStore, SignatureVerifier
from mpguard.shared.config import (
    MercadoPagoSettings,
    get_mercadopago_settings,
    setup_logging,
)

logger = logging.getLogger(__name__)


@dataclass
class MercadoPagoGuard:
    """Componentes conectados del guard."""

    settings: MercadoPagoSettings
    rate_limiter: FixedWindowRateLimiter
    webhook_dedup_store: IdempotencyStore
    checkout_idempotency_store: IdempotencyStore
    provider: PaymentProviderClient
    record_store: PaymentRecordStore
    pipeline: WebhookPipeline
    webhook_handler: WebhookHandler
    checkout: CheckoutService


def build_guard(
    settings: Optional[MercadoPagoSettings] = None,
    *,
    provider_client: Optional[PaymentProviderClient] = None,
    record_store: Optional[PaymentRecordStore] = None,
    on_payment_update: Optional[PaymentUpdateCallback] = None,
    configure_logging: bool = False,
) -> MercadoPagoGuard:
    """
    Construye el guard.

    Args:
        settings: Configuración (por defecto el singleton global)
        provider_client: Cliente del proveedor (por defecto MercadoPagoClient)
        record_store: Store de pagos (por defecto InMemoryPaymentRecordStore)
        on_payment_update: Callback tras persistir una actualización de pago
        configure_logging: Si True, aplica setup_logging() con los settings

    Returns:
        MercadoPagoGuard listo para usar

    Raises:
        ValueError: sin provider_client y sin access token configurado
    """
    settings = settings or get_mercadopago_settings()

    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)

    if provider_client is None:
        if not settings.mercadopago_access_token:
            raise ValueError("MERCADOPAGO_ACCESS_TOKEN no configurado")
        provider_client = MercadoPagoClient(
            settings.mercadopago_access_token,
            base_url=settings.mercadopago_api_base_url,
            timeout_seconds=settings.provider_timeout_seconds,
        )

    if record_store is None:
        logger.warning("build_guard: usando InMemoryPaymentRecordStore (no persistente)")
        record_store = InMemoryPaymentRecordStore()

    if settings.is_production and not settings.mercadopago_webhook_secret:
        logger.error("MERCADOPAGO_WEBHOOK_SECRET no configurado en producción")

    rate_limiter = FixedWindowRateLimiter()
    webhook_dedup_store = IdempotencyStore(max_entries=settings.idempotency_max_entries)
    checkout_idempotency_store = IdempotencyStore(max_entries=settings.idempotency_max_entries)

    pipeline = WebhookPipeline(
        provider=provider_client,
        record_store=record_store,
        rate_limiter=rate_limiter,
        dedup_store=webhook_dedup_store,
        signature_verifier=SignatureVerifier(
            settings.mercadopago_webhook_secret,
            tolerance_seconds=settings.mercadopago_webhook_tolerance_seconds,
        ),
        on_payment_update=on_payment_update,
        rate_limit_key=settings.webhook_rate_limit_key,
        rate_limit_requests=settings.webhook_rate_limit_requests,
        rate_limit_window_seconds=settings.webhook_rate_limit_window_seconds,
        dedup_ttl_seconds=settings.webhook_dedup_ttl_seconds,
        amount_tolerance=str(settings.amount_tolerance),
        provider_timeout_seconds=settings.provider_timeout_seconds,
    )

    checkout = CheckoutService(
        provider=provider_client,
        record_store=record_store,
        rate_limiter=rate_limiter,
        idempotency_store=checkout_idempotency_store,
        allowed_callback_hosts=settings.allowed_callback_hosts,
        allow_http_callbacks=not settings.is_production,
        default_notification_url=settings.mercadopago_notification_url,
        rate_limit_requests=settings.checkout_rate_limit_requests,
        rate_limit_window_seconds=settings.checkout_rate_limit_window_seconds,
        idempotency_ttl_seconds=settings.checkout_idempotency_ttl_seconds,
        provider_timeout_seconds=settings.provider_timeout_seconds,
        metadata_max_string_length=settings.metadata_max_string_length,
        metadata_max_depth=settings.metadata_max_depth,
    )

    logger.info(
        f"MercadoPago guard listo (environment={settings.environment}, "
        f"firma={'on' if settings.mercadopago_webhook_secret else 'off'})"
    )

    return MercadoPagoGuard(
        settings=settings,
        rate_limiter=rate_limiter,
        webhook_dedup_store=webhook_dedup_store,
        checkout_idempotency_store=checkout_idempotency_store,
        provider=provider_client,
        record_store=record_store,
        pipeline=pipeline,
        webhook_handler=WebhookHandler(pipeline),
        checkout=checkout,
    )


__all__ = ["MercadoPagoGuard", "build_guard"]

# Fin del archivo mpguard/bootstrap.py
