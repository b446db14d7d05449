# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/facades/checkout/checkout_service.py

Creación de preferencias de pago (Checkout Pro).

Orquesta:
- Rate limit por usuario
- Validación / generación de la clave idempotente
- Sanitización de metadata
- Allow-list de back_urls y notification_url
- Creación de la preferencia en Mercado Pago
- Registro local del pago en estado "pending"

Autor: MPGuard
Fecha: 2026-10-15
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from mpguard.modules.mercadopago.adapters.provider_client import PaymentProviderClient
from mpguard.modules.mercadopago.enums import PaymentStatus
from mpguard.modules.mercadopago.errors import (
    ProviderUnavailable,
    RateLimited,
    ValidationFailed,
)
from mpguard.modules.mercadopago.metrics import (
    observe_checkout_started,
    observe_rate_limited,
)
from mpguard.modules.mercadopago.middleware.rate_limiter import FixedWindowRateLimiter
from mpguard.modules.mercadopago.repositories.payment_record_store import (
    PaymentRecord,
    PaymentRecordStore,
)
from mpguard.modules.mercadopago.schemas.preference_schemas import (
    CheckoutResponse,
    PreferenceRequest,
)
from mpguard.modules.mercadopago.services.idempotency_store import (
    IdempotencyStore,
    validate_idempotency_key,
)
from mpguard.modules.mercadopago.services.security.callback_url_validator import (
    validate_callback_url,
)
from mpguard.modules.mercadopago.services.security.metadata_sanitizer import (
    MAX_DEPTH,
    MAX_STRING_LENGTH,
    sanitize_metadata,
)

logger = logging.getLogger(__name__)


CHECKOUT_RATE_LIMIT_PREFIX = "mercadopago:payment:create"


def build_checkout_rate_limit_key(user_id: str) -> str:
    return f"{CHECKOUT_RATE_LIMIT_PREFIX}:{user_id}"


class CheckoutService:
    """
    Crea preferencias de pago de forma idempotente.

    Dos llamadas con la misma idempotency_key dentro del TTL devuelven la
    misma CheckoutResponse sin volver a llamar al proveedor.
    """

    def __init__(
        self,
        *,
        provider: PaymentProviderClient,
        record_store: PaymentRecordStore,
        rate_limiter: FixedWindowRateLimiter,
        idempotency_store: IdempotencyStore,
        allowed_callback_hosts: Sequence[str] = (),
        allow_http_callbacks: bool = False,
        default_notification_url: Optional[str] = None,
        rate_limit_requests: int = 10,
        rate_limit_window_seconds: float = 60.0,
        idempotency_ttl_seconds: float = 24 * 60 * 60,
        provider_timeout_seconds: float = 10.0,
        metadata_max_string_length: int = MAX_STRING_LENGTH,
        metadata_max_depth: int = MAX_DEPTH,
    ):
        self._provider = provider
        self._records = record_store
        self._rate_limiter = rate_limiter
        self._idempotency = idempotency_store
        self._allowed_hosts = list(allowed_callback_hosts)
        self._allow_http = allow_http_callbacks
        self._default_notification_url = default_notification_url
        self._rate_limit_requests = rate_limit_requests
        self._rate_limit_window = rate_limit_window_seconds
        self._idempotency_ttl = idempotency_ttl_seconds
        self._timeout = provider_timeout_seconds
        self._metadata_max_string_length = metadata_max_string_length
        self._metadata_max_depth = metadata_max_depth

    async def create_preference(self, user_id: str, request: PreferenceRequest) -> CheckoutResponse:
        """
        Crea (o recupera) la preferencia de pago de un usuario.

        Args:
            user_id: Usuario autenticado que inicia el pago
            request: Payload validado

        Returns:
            CheckoutResponse con el init_point del proveedor

        Raises:
            RateLimited: demasiadas creaciones en la ventana
            ValidationFailed: clave idempotente o URLs inválidas
            ProviderUnavailable: el proveedor no respondió a tiempo
        """
        # 1) Rate limit por usuario
        rate_key = build_checkout_rate_limit_key(user_id)
        if not self._rate_limiter.check(rate_key, self._rate_limit_requests, self._rate_limit_window):
            observe_rate_limited("checkout")
            retry_after = self._rate_limiter.get_retry_after(rate_key, self._rate_limit_window)
            logger.warning(f"Checkout rechazado por rate limit: user={user_id}")
            raise RateLimited(rate_key, retry_after=retry_after)

        # 2) Clave idempotente
        if request.idempotency_key is not None:
            if not validate_idempotency_key(request.idempotency_key):
                raise ValidationFailed(
                    "Invalid idempotency key",
                    details={"idempotency_key": "1-64 caracteres [A-Za-z0-9_-]"},
                )
            idempotency_key = request.idempotency_key
        else:
            idempotency_key = uuid4().hex

        async def compute() -> CheckoutResponse:
            return await self._create(user_id, request, idempotency_key)

        return await self._idempotency.get_or_compute(
            idempotency_key, self._idempotency_ttl, compute
        )

    def _validate_urls(self, request: PreferenceRequest) -> Optional[str]:
        urls: Dict[str, str] = {}
        if request.back_urls is not None:
            urls.update(
                {f"back_urls.{name}": url for name, url in request.back_urls.as_dict().items()}
            )

        notification_url = (
            str(request.notification_url) if request.notification_url else self._default_notification_url
        )
        if notification_url:
            urls["notification_url"] = notification_url

        rejected = [
            name
            for name, url in urls.items()
            if not validate_callback_url(url, self._allowed_hosts, allow_http=self._allow_http)
        ]
        if rejected:
            raise ValidationFailed("Callback URL not allowed", details={"fields": rejected})
        return notification_url

    async def _create(
        self,
        user_id: str,
        request: PreferenceRequest,
        idempotency_key: str,
    ) -> CheckoutResponse:
        # 3) Metadata no confiable
        metadata = sanitize_metadata(
            request.metadata,
            max_string_length=self._metadata_max_string_length,
            max_depth=self._metadata_max_depth,
        ) or {}

        # 4) URLs de retorno
        notification_url = self._validate_urls(request)

        external_reference = request.external_reference or uuid4().hex
        items: List[Dict[str, Any]] = [
            {
                "id": item.id,
                "title": item.title,
                "quantity": item.quantity,
                "unit_price": float(item.unit_price),
                "currency_id": item.currency_id or request.currency,
                **({"description": item.description} if item.description else {}),
            }
            for item in request.items
        ]

        # 5) Proveedor
        try:
            preference = await asyncio.wait_for(
                self._provider.create_preference(
                    items=items,
                    back_urls=request.back_urls.as_dict() if request.back_urls else None,
                    metadata=metadata,
                    external_reference=external_reference,
                    notification_url=notification_url,
                    idempotency_key=idempotency_key,
                    auto_return=request.auto_return,
                    statement_descriptor=request.statement_descriptor,
                    expires=request.expires,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Timeout creando preferencia (ref={external_reference})")
            raise ProviderUnavailable(message="Mercado Pago request timed out") from e

        # 6) Registro local
        record = await self._records.create(
            PaymentRecord(
                id=uuid4().hex,
                external_reference=external_reference,
                preference_id=preference.preference_id,
                user_id=user_id,
                amount=request.total_amount,
                currency=request.currency,
                status=PaymentStatus.PENDING.value,
                metadata=metadata,
            )
        )
        observe_checkout_started(request.currency)
        logger.info(
            f"Checkout iniciado: payment={record.id} preference={preference.preference_id} "
            f"user={user_id} amount={record.amount} {record.currency}"
        )

        return CheckoutResponse(
            payment_id=record.id,
            preference_id=preference.preference_id,
            checkout_url=preference.checkout_url,
            external_reference=external_reference,
            idempotency_key=idempotency_key,
            amount=record.amount,
            currency=record.currency,
            status=record.status,
        )


__all__ = [
    "CHECKOUT_RATE_LIMIT_PREFIX",
    "CheckoutService",
    "build_checkout_rate_limit_key",
]

# Fin del archivo mpguard/modules/mercadopago/facades/checkout/checkout_service.py
