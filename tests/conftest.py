# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para MPGuard.

Provee:
- Reloj falso para ventanas de rate limit y TTLs
- Proveedor de pagos falso (sin red)
- Store de pagos en memoria con un pago "pending" precargado
- Helpers para firmar notificaciones como lo hace Mercado Pago
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from mpguard.modules.mercadopago.adapters.provider_client import (
    PreferenceResult,
    ProviderPayment,
)
from mpguard.modules.mercadopago.errors import PaymentNotFound
from mpguard.modules.mercadopago.repositories.payment_record_store import (
    InMemoryPaymentRecordStore,
    PaymentRecord,
)
from mpguard.modules.mercadopago.services.security.signature_verification import (
    build_manifest,
    compute_signature,
)
from mpguard.shared.config import reset_mercadopago_settings

WEBHOOK_SECRET = "test-webhook-secret"


class FakeClock:
    """Reloj manual: avanza solo con advance()."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """Doble de PaymentProviderClient que registra las llamadas."""

    def __init__(self):
        self.payments: Dict[str, ProviderPayment] = {}
        self.get_payment_calls: List[str] = []
        self.create_preference_calls: List[Dict[str, Any]] = []
        self.delay: Optional[float] = None

    def add_payment(
        self,
        payment_id: str,
        *,
        external_reference: Optional[str],
        amount: str,
        status: str = "approved",
        status_detail: Optional[str] = "accredited",
    ) -> ProviderPayment:
        payment = ProviderPayment(
            id=payment_id,
            external_reference=external_reference,
            status=status,
            status_detail=status_detail,
            amount=Decimal(amount),
            payment_method_id="visa",
            payment_type_id="credit_card",
        )
        self.payments[payment_id] = payment
        return payment

    async def get_payment(self, payment_id: str) -> ProviderPayment:
        self.get_payment_calls.append(payment_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        try:
            return self.payments[payment_id]
        except KeyError:
            raise PaymentNotFound(payment_id)

    async def create_preference(self, **kwargs) -> PreferenceResult:
        self.create_preference_calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        n = len(self.create_preference_calls)
        return PreferenceResult(
            preference_id=f"pref-{n}",
            checkout_url=f"https://www.mercadopago.com.ar/checkout/v1/redirect?pref_id=pref-{n}",
        )


def sign_notification(
    data_id: str,
    request_id: str = "req-abc",
    ts: str = "1234567890",
    secret: str = WEBHOOK_SECRET,
) -> Dict[str, str]:
    """Headers x-signature / x-request-id válidos para data_id."""
    v1 = compute_signature(secret, build_manifest(data_id, request_id, ts))
    return {"x-signature": f"ts={ts},v1={v1}", "x-request-id": request_id}


def payment_notification(data_id: str = "999", **overrides) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": 12345,
        "live_mode": False,
        "type": "payment",
        "date_created": "2026-10-10T10:00:00Z",
        "user_id": 44444,
        "api_version": "v1",
        "action": "payment.updated",
        "data": {"id": data_id},
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def _reset_settings():
    reset_mercadopago_settings()
    yield
    reset_mercadopago_settings()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def pending_record() -> PaymentRecord:
    return PaymentRecord(
        id="pay-1",
        external_reference="order-1",
        preference_id="pref-1",
        user_id="user-1",
        amount=Decimal("99.99"),
        currency="ARS",
    )


@pytest.fixture
def record_store(pending_record) -> InMemoryPaymentRecordStore:
    return InMemoryPaymentRecordStore([pending_record])
