# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/adapters/provider_client.py

Contrato del cliente del proveedor de pagos.

El guard solo depende de este Protocol; MercadoPagoClient es la
implementación HTTP y los tests usan dobles.

Autor: MPGuard
Fecha: 2026-10-14
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Protocol


@dataclass(frozen=True)
class PreferenceResult:
    """Preferencia creada en el proveedor."""

    preference_id: str
    checkout_url: str


@dataclass(frozen=True)
class ProviderPayment:
    """Vista autoritativa de un pago según el proveedor."""

    id: str
    external_reference: Optional[str]
    status: str
    status_detail: Optional[str]
    amount: Decimal
    payment_method_id: Optional[str] = None
    payment_type_id: Optional[str] = None


class PaymentProviderClient(Protocol):
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
        ...

    async def get_payment(self, payment_id: str) -> ProviderPayment:
        ...


__all__ = [
    "PreferenceResult",
    "ProviderPayment",
    "PaymentProviderClient",
]

# Fin del archivo mpguard/modules/mercadopago/adapters/provider_client.py
