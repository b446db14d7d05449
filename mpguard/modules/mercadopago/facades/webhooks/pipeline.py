# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/facades/webhooks/pipeline.py

Pipeline de procesamiento de notificaciones de pago de Mercado Pago.

Pasos:
1. Filtrar: solo type == "payment" con data.id (el resto se ignora)
2. Rate limit global de webhooks
3. Dedup por (type, data.id)
4. Verificar firma (si hay secret configurado)
5. Consultar el pago al proveedor (fuente autoritativa)
6. Buscar el registro local por external_reference
7. Validar monto local vs. monto del proveedor
8. Persistir status / status_detail / mp_payment_id
9. Invocar el callback de actualización
10. Acusar recibo

Los pasos 5 a 9 corren bajo get_or_compute con la clave de dedup:
reintentos concurrentes de la misma notificación procesan una sola vez.
Firma inválida, pago no encontrado y errores NO quedan cacheados, así
el reintento del proveedor vuelve a intentarlo.

Autor: MPGuard
Fecha: 2026-10-15
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from mpguard.modules.mercadopago.adapters.provider_client import (
    PaymentProviderClient,
    ProviderPayment,
)
from mpguard.modules.mercadopago.enums import WebhookProcessingOutcome, WebhookState
from mpguard.modules.mercadopago.errors import (
    AmountMismatch,
    PaymentNotFound,
    ProviderUnavailable,
    RateLimited,
    SignatureInvalid,
    ValidationFailed,
)
from mpguard.modules.mercadopago.metrics import (
    observe_amount_mismatch,
    observe_rate_limited,
)
from mpguard.modules.mercadopago.middleware.rate_limiter import FixedWindowRateLimiter
from mpguard.modules.mercadopago.repositories.payment_record_store import (
    PaymentRecord,
    PaymentRecordStore,
)
from mpguard.modules.mercadopago.schemas.webhook_schemas import WebhookNotification
from mpguard.modules.mercadopago.services.idempotency_store import (
    IdempotencyStore,
    build_webhook_dedup_key,
)
from mpguard.modules.mercadopago.services.security.amount_validator import (
    validate_payment_amount,
)
from mpguard.modules.mercadopago.services.security.signature_verification import (
    SignatureVerifier,
)

from .constants import (
    PAYMENT_NOTIFICATION_TYPE,
    WEBHOOK_DEDUP_TTL_SECONDS,
    WEBHOOK_RATE_LIMIT_KEY,
    WEBHOOK_RATE_LIMIT_REQUESTS,
    WEBHOOK_RATE_LIMIT_WINDOW_SECONDS,
)

logger = logging.getLogger(__name__)


PaymentUpdateCallback = Callable[..., Any]


@dataclass(frozen=True)
class WebhookResult:
    """Resultado de procesar una notificación."""

    state: WebhookState
    outcome: WebhookProcessingOutcome
    trail: List[WebhookState] = field(default_factory=list)
    payment: Optional[PaymentRecord] = None
    mp_payment: Optional[ProviderPayment] = None

    @property
    def acknowledged(self) -> bool:
        return self.state in (WebhookState.ACKNOWLEDGED, WebhookState.IGNORED)


class WebhookPipeline:
    """
    Procesa notificaciones de pago con rate limit, dedup, firma y
    validación de monto.

    Todas las dependencias se inyectan; el pipeline no lee settings.
    """

    def __init__(
        self,
        *,
        provider: PaymentProviderClient,
        record_store: PaymentRecordStore,
        rate_limiter: FixedWindowRateLimiter,
        dedup_store: IdempotencyStore,
        signature_verifier: Optional[SignatureVerifier] = None,
        on_payment_update: Optional[PaymentUpdateCallback] = None,
        rate_limit_key: str = WEBHOOK_RATE_LIMIT_KEY,
        rate_limit_requests: int = WEBHOOK_RATE_LIMIT_REQUESTS,
        rate_limit_window_seconds: float = WEBHOOK_RATE_LIMIT_WINDOW_SECONDS,
        dedup_ttl_seconds: float = WEBHOOK_DEDUP_TTL_SECONDS,
        amount_tolerance: Union[float, str] = 0.01,
        provider_timeout_seconds: float = 10.0,
    ):
        self._provider = provider
        self._records = record_store
        self._rate_limiter = rate_limiter
        self._dedup = dedup_store
        self._verifier = signature_verifier
        self._on_payment_update = on_payment_update
        self._rate_limit_key = rate_limit_key
        self._rate_limit_requests = rate_limit_requests
        self._rate_limit_window = rate_limit_window_seconds
        self._dedup_ttl = dedup_ttl_seconds
        self._amount_tolerance = amount_tolerance
        self._timeout = provider_timeout_seconds

        if self._verifier is None or not self._verifier.enabled:
            logger.warning(
                "⚠️ WebhookPipeline sin secret de firma: las notificaciones "
                "NO se verifican. No usar así en producción."
            )

    @staticmethod
    def parse_notification(payload: Union[WebhookNotification, Dict[str, Any]]) -> WebhookNotification:
        if isinstance(payload, WebhookNotification):
            return payload
        if not isinstance(payload, dict):
            raise ValidationFailed("Webhook payload must be a JSON object")
        try:
            return WebhookNotification.model_validate(payload)
        except ValidationError as e:
            raise ValidationFailed("Invalid webhook payload", details={"errors": e.errors()}) from e

    async def process(
        self,
        payload: Union[WebhookNotification, Dict[str, Any]],
        *,
        signature_header: Optional[str],
        request_id_header: Optional[str],
    ) -> WebhookResult:
        """
        Procesa una notificación.

        Returns:
            WebhookResult con estado terminal ACKNOWLEDGED o IGNORED

        Raises:
            RateLimited: límite global excedido
            SignatureInvalid: firma ausente o incorrecta
            AmountMismatch: el monto del proveedor no coincide
            ProviderUnavailable: el proveedor no respondió a tiempo
            ValidationFailed: payload con forma inválida
        """
        notification = self.parse_notification(payload)
        trail: List[WebhookState] = [WebhookState.RECEIVED]

        # 1. Solo notificaciones de pago con data.id
        if notification.type != PAYMENT_NOTIFICATION_TYPE or not notification.data_id:
            logger.info(
                f"Webhook ignorado: type={notification.type} data.id={notification.data_id}"
            )
            trail.append(WebhookState.IGNORED)
            return WebhookResult(
                state=WebhookState.IGNORED,
                outcome=WebhookProcessingOutcome.IGNORED,
                trail=trail,
            )

        data_id = notification.data_id

        # 2. Rate limit global
        if not self._rate_limiter.check(
            self._rate_limit_key, self._rate_limit_requests, self._rate_limit_window
        ):
            observe_rate_limited("webhook")
            retry_after = self._rate_limiter.get_retry_after(
                self._rate_limit_key, self._rate_limit_window
            )
            logger.warning(f"Webhook rechazado por rate limit (data.id={data_id})")
            raise RateLimited(self._rate_limit_key, retry_after=retry_after)
        trail.append(WebhookState.RATE_CHECKED)

        # 3. Dedup
        dedup_key = build_webhook_dedup_key(notification.type, data_id)
        cached = self._dedup.get(dedup_key)
        if cached is not None:
            logger.info(f"Webhook duplicado, ya procesado: {dedup_key}")
            trail.extend([WebhookState.DEDUPED, WebhookState.ACKNOWLEDGED])
            return replace(
                cached,
                state=WebhookState.ACKNOWLEDGED,
                outcome=WebhookProcessingOutcome.DUPLICATE,
                trail=trail,
            )
        trail.append(WebhookState.DEDUPED)

        # 4. Firma
        if self._verifier is not None and self._verifier.enabled:
            if not self._verifier.verify(
                signature_header=signature_header,
                request_id_header=request_id_header,
                data_id=data_id,
            ):
                raise SignatureInvalid()
            trail.append(WebhookState.SIGNATURE_VERIFIED)

        # 5-9. Procesamiento single-flight
        async def compute() -> WebhookResult:
            return await self._apply_payment(data_id, list(trail))

        try:
            return await self._dedup.get_or_compute(dedup_key, self._dedup_ttl, compute)
        except PaymentNotFound:
            trail.append(WebhookState.ACKNOWLEDGED)
            return WebhookResult(
                state=WebhookState.ACKNOWLEDGED,
                outcome=WebhookProcessingOutcome.NOT_FOUND,
                trail=trail,
            )

    async def _apply_payment(self, data_id: str, trail: List[WebhookState]) -> WebhookResult:
        try:
            mp_payment = await asyncio.wait_for(
                self._provider.get_payment(data_id), timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Timeout consultando pago {data_id} a Mercado Pago")
            raise ProviderUnavailable(message="Mercado Pago request timed out") from e
        trail.append(WebhookState.FETCHED)

        record = None
        if mp_payment.external_reference:
            record = await self._records.find_one(
                external_reference=mp_payment.external_reference
            )
        if record is None:
            logger.warning(
                "Payment not found by external_reference",
                extra={
                    "context": {
                        "external_reference": mp_payment.external_reference,
                        "mp_payment_id": mp_payment.id,
                    }
                },
            )
            raise PaymentNotFound(mp_payment.external_reference or data_id)

        if not validate_payment_amount(record.amount, mp_payment.amount, self._amount_tolerance):
            observe_amount_mismatch()
            logger.error(
                f"Amount mismatch para {record.external_reference}: "
                f"local={record.amount} proveedor={mp_payment.amount}"
            )
            raise AmountMismatch(
                record.amount,
                mp_payment.amount,
                external_reference=record.external_reference,
            )
        trail.append(WebhookState.AMOUNT_VALIDATED)

        updated = await self._records.update(
            record.id,
            {
                "status": mp_payment.status,
                "status_detail": mp_payment.status_detail,
                "mp_payment_id": mp_payment.id,
            },
        )
        trail.append(WebhookState.PERSISTED)
        logger.info(
            f"Pago {updated.id} actualizado: status={mp_payment.status} "
            f"detail={mp_payment.status_detail} mp_payment_id={mp_payment.id}"
        )

        if self._on_payment_update is not None:
            await self._invoke_callback(updated, mp_payment)
            trail.append(WebhookState.CALLBACK_INVOKED)

        trail.append(WebhookState.ACKNOWLEDGED)
        return WebhookResult(
            state=WebhookState.ACKNOWLEDGED,
            outcome=WebhookProcessingOutcome.PROCESSED,
            trail=trail,
            payment=updated,
            mp_payment=mp_payment,
        )

    async def _invoke_callback(self, payment: PaymentRecord, mp_payment: ProviderPayment) -> None:
        try:
            result = self._on_payment_update(
                payment=payment,
                status=mp_payment.status,
                status_detail=mp_payment.status_detail,
                mp_payment=mp_payment,
            )
            if inspect.isawaitable(result):
                await result
        except Exception:
            # El pago ya quedó persistido; un fallo del callback no lo revierte
            logger.exception(f"Error en callback de actualización del pago {payment.id}")


__all__ = [
    "PaymentUpdateCallback",
    "WebhookPipeline",
    "WebhookResult",
]

# Fin del archivo mpguard/modules/mercadopago/facades/webhooks/pipeline.py
