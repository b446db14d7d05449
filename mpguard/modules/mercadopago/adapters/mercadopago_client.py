# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/adapters/mercadopago_client.py

Cliente HTTP (httpx) para la API REST de Mercado Pago.

Endpoints:
- POST /checkout/preferences   (header X-Idempotency-Key)
- GET  /v1/payments/{id}

Sin reintentos: la idempotencia y los reintentos de webhooks del propio
proveedor cubren los fallos transitorios.

Mapeo de errores:
- Timeout / error de red / 429 / 5xx  → ProviderUnavailable
- 404                                 → PaymentNotFound
- 401 / 403                           → MercadoPagoError(invalid_api_key, 401)
- Otros 4xx                           → ValidationFailed
- id de pago con formato inválido     → ValidationFailed (sin request)

Autor: MPGuard
Fecha: 2026-10-14
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from mpguard.modules.mercadopago.adapters.provider_client import (
    PreferenceResult,
    ProviderPayment,
)
from mpguard.modules.mercadopago.errors import (
    MercadoPagoError,
    MercadoPagoErrorCodes,
    PaymentNotFound,
    ProviderUnavailable,
    ValidationFailed,
)
from mpguard.modules.mercadopago.services.security.amount_validator import to_decimal

logger = logging.getLogger(__name__)


DEFAULT_API_BASE_URL = "https://api.mercadopago.com"

# Los ids de pago vienen del webhook (no confiable) y van al path
PAYMENT_ID_PATTERN = re.compile(r"^[0-9A-Za-z_-]{1,64}$")

# Límites de conexión del cliente compartido
MERCADOPAGO_HTTP_LIMITS = httpx.Limits(
    max_keepalive_connections=20,
    max_connections=50,
    keepalive_expiry=30.0,
)


def build_timeout(total_seconds: float) -> httpx.Timeout:
    """Timeout explícito: connect acotado a 5s, el resto al total."""
    return httpx.Timeout(
        connect=min(5.0, total_seconds),
        read=total_seconds,
        write=total_seconds,
        pool=5.0,
    )


def _error_payload(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {"body": response.text[:200]}
    return data if isinstance(data, dict) else {"body": data}


def _raise_for_status(response: httpx.Response, *, resource: str) -> None:
    code = response.status_code
    if code < 400:
        return

    payload = _error_payload(response)
    message = str(payload.get("message") or payload.get("error") or f"HTTP {code}")

    if code == 429 or code >= 500:
        logger.warning(f"Mercado Pago {resource}: error transitorio {code}")
        raise ProviderUnavailable(
            message=f"Mercado Pago unavailable ({code})",
            details={"status": code},
        )

    if code == 404:
        raise PaymentNotFound(resource)

    if code in (401, 403):
        logger.error(f"Mercado Pago {resource}: credenciales rechazadas ({code})")
        raise MercadoPagoError(
            code=MercadoPagoErrorCodes.INVALID_API_KEY,
            message="Invalid Mercado Pago credentials",
            status_code=401,
        )

    logger.warning(f"Mercado Pago {resource}: request rechazada {code} - {message}")
    raise ValidationFailed(message, details={"status": code, "provider": payload})


class MercadoPagoClient:
    """
    Adapter de PaymentProviderClient sobre httpx.AsyncClient.

    Si no se inyecta `http_client` se crea uno propio, que se libera con
    aclose() (o usando el cliente como context manager async).
    """

    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout_seconds: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not access_token:
            raise ValueError("access_token de Mercado Pago requerido")

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=build_timeout(timeout_seconds),
            limits=MERCADOPAGO_HTTP_LIMITS,
        )
        self._headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "MercadoPagoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, *, resource: str, **kwargs) -> Dict[str, Any]:
        headers = {**self._headers, **kwargs.pop("headers", {})}
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"Mercado Pago {resource}: timeout - {e}")
            raise ProviderUnavailable(message="Mercado Pago request timed out") from e
        except httpx.TransportError as e:
            logger.warning(f"Mercado Pago {resource}: error de red - {e}")
            raise ProviderUnavailable(message="Mercado Pago unreachable") from e

        _raise_for_status(response, resource=resource)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderUnavailable(message="Invalid JSON from Mercado Pago") from e
        if not isinstance(data, dict):
            raise ProviderUnavailable(message="Unexpected response from Mercado Pago")
        return data

    async def create_preference(
        self,
        *,
        items: List[Dict[str, Any]],
        back_urls: Optional[Dict[str, str]],
        metadata: Dict[str, Any],
        external_reference: str,
        notification_url: Optional[str],
        idempotency_key: str,
        auto_return: Optional[str] = None,
        statement_descriptor: Optional[str] = None,
        expires: bool = False,
    ) -> PreferenceResult:
        body: Dict[str, Any] = {
            "items": items,
            "metadata": metadata,
            "external_reference": external_reference,
        }
        if back_urls:
            body["back_urls"] = back_urls
        if notification_url:
            body["notification_url"] = notification_url
        if auto_return:
            body["auto_return"] = auto_return
        if statement_descriptor:
            body["statement_descriptor"] = statement_descriptor
        if expires:
            body["expires"] = True

        data = await self._request(
            "POST",
            "/checkout/preferences",
            resource=f"preference {external_reference}",
            json=body,
            headers={"X-Idempotency-Key": idempotency_key},
        )

        preference_id = data.get("id")
        checkout_url = data.get("init_point") or data.get("sandbox_init_point")
        if not preference_id or not checkout_url:
            raise ProviderUnavailable(message="Preference response without id/init_point")

        logger.info(f"Mercado Pago preference creada: {preference_id} (ref={external_reference})")
        return PreferenceResult(preference_id=str(preference_id), checkout_url=str(checkout_url))

    async def get_payment(self, payment_id: str) -> ProviderPayment:
        if not isinstance(payment_id, str) or not PAYMENT_ID_PATTERN.fullmatch(payment_id):
            logger.warning(f"Mercado Pago: id de pago con formato inválido {payment_id!r}")
            raise ValidationFailed(
                "Invalid payment id",
                details={"payment_id": "1-64 caracteres [0-9A-Za-z_-]"},
            )

        data = await self._request(
            "GET",
            f"/v1/payments/{quote(payment_id, safe='')}",
            resource=f"payment {payment_id}",
        )

        amount = to_decimal(data.get("transaction_amount"))
        if amount is None:
            raise ProviderUnavailable(message="Payment response without transaction_amount")

        return ProviderPayment(
            id=str(data.get("id", payment_id)),
            external_reference=data.get("external_reference"),
            status=str(data.get("status") or "unknown"),
            status_detail=data.get("status_detail"),
            amount=amount,
            payment_method_id=data.get("payment_method_id"),
            payment_type_id=data.get("payment_type_id"),
        )


__all__ = [
    "DEFAULT_API_BASE_URL",
    "MercadoPagoClient",
    "PAYMENT_ID_PATTERN",
    "build_timeout",
]

# Fin del archivo mpguard/modules/mercadopago/adapters/mercadopago_client.py
