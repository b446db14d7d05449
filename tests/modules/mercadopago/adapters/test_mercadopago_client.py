# -*- coding: utf-8 -*-
"""
tests/modules/mercadopago/adapters/test_mercadopago_client.py

Tests del cliente httpx de Mercado Pago usando httpx.MockTransport.

Autor: MPGuard
Fecha: 2026-10-16
"""

from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from mpguard.modules.mercadopago.adapters.mercadopago_client import (
    MercadoPagoClient,
    build_timeout,
)
from mpguard.modules.mercadopago.errors import (
    MercadoPagoError,
    MercadoPagoErrorCodes,
    PaymentNotFound,
    ProviderUnavailable,
    ValidationFailed,
)

BASE_URL = "https://api.mercadopago.test"


def _client(handler) -> MercadoPagoClient:
    http = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return MercadoPagoClient("TEST-token", http_client=http)


class TestCreatePreference:
    @pytest.mark.asyncio
    async def test_posts_preference_with_idempotency_header(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                201,
                json={"id": "pref-123", "init_point": "https://mp.test/checkout?pref=123"},
            )

        client = _client(handler)
        result = await client.create_preference(
            items=[{"id": "sku", "title": "Plan", "quantity": 1, "unit_price": 10.0}],
            back_urls={"success": "https://shop.example.com/ok"},
            metadata={"order": "1"},
            external_reference="order-1",
            notification_url="https://shop.example.com/webhooks/mp",
            idempotency_key="idem-1",
        )

        assert result.preference_id == "pref-123"
        assert result.checkout_url == "https://mp.test/checkout?pref=123"
        assert seen["method"] == "POST"
        assert seen["path"] == "/checkout/preferences"
        assert seen["headers"]["x-idempotency-key"] == "idem-1"
        assert seen["headers"]["authorization"] == "Bearer TEST-token"
        assert seen["body"]["external_reference"] == "order-1"
        assert seen["body"]["notification_url"] == "https://shop.example.com/webhooks/mp"

    @pytest.mark.asyncio
    async def test_preference_options_are_sent_in_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "pref-1", "init_point": "https://mp.test/c"})

        await _client(handler).create_preference(
            items=[], back_urls=None, metadata={}, external_reference="r",
            notification_url=None, idempotency_key="k",
            auto_return="approved", statement_descriptor="MYSHOP", expires=True,
        )

        assert seen["body"]["auto_return"] == "approved"
        assert seen["body"]["statement_descriptor"] == "MYSHOP"
        assert seen["body"]["expires"] is True

    @pytest.mark.asyncio
    async def test_missing_init_point_is_provider_error(self):
        client = _client(lambda request: httpx.Response(201, json={"id": "pref-1"}))
        with pytest.raises(ProviderUnavailable):
            await client.create_preference(
                items=[], back_urls=None, metadata={}, external_reference="r",
                notification_url=None, idempotency_key="k",
            )


class TestGetPayment:
    @pytest.mark.asyncio
    async def test_maps_payment_fields(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/payments/999"
            return httpx.Response(
                200,
                json={
                    "id": 999,
                    "external_reference": "order-1",
                    "status": "approved",
                    "status_detail": "accredited",
                    "transaction_amount": 99.99,
                    "payment_method_id": "visa",
                    "payment_type_id": "credit_card",
                },
            )

        payment = await _client(handler).get_payment("999")

        assert payment.id == "999"
        assert payment.external_reference == "order-1"
        assert payment.status == "approved"
        assert payment.amount == Decimal("99.99")
        assert payment.payment_type_id == "credit_card"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [429, 500, 502, 503])
    async def test_transient_statuses_map_to_provider_unavailable(self, status_code):
        client = _client(lambda request: httpx.Response(status_code, json={"message": "x"}))
        with pytest.raises(ProviderUnavailable):
            await client.get_payment("1")

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = _client(lambda request: httpx.Response(404, json={"message": "not found"}))
        with pytest.raises(PaymentNotFound):
            await client.get_payment("1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_auth_errors(self, status_code):
        client = _client(lambda request: httpx.Response(status_code, json={}))
        with pytest.raises(MercadoPagoError) as exc_info:
            await client.get_payment("1")
        assert exc_info.value.code == MercadoPagoErrorCodes.INVALID_API_KEY
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_other_client_errors_are_validation_failures(self):
        client = _client(lambda request: httpx.Response(400, json={"message": "bad request"}))
        with pytest.raises(ValidationFailed) as exc_info:
            await client.get_payment("1")
        assert exc_info.value.message == "bad request"

    @pytest.mark.asyncio
    async def test_timeout_maps_to_provider_unavailable(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ProviderUnavailable):
            await _client(handler).get_payment("1")

    @pytest.mark.asyncio
    async def test_network_error_maps_to_provider_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ProviderUnavailable):
            await _client(handler).get_payment("1")

    @pytest.mark.asyncio
    async def test_no_retries(self):
        calls = []

        def handler(request):
            calls.append(1)
            return httpx.Response(503)

        with pytest.raises(ProviderUnavailable):
            await _client(handler).get_payment("1")
        assert len(calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payment_id",
        ["../../users/me?x=", "..", "1/../../v1/customers", "999#frag", "1 2", "1\n", ""],
    )
    async def test_malformed_payment_id_never_reaches_the_api(self, payment_id):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json={"id": 1, "transaction_amount": 1})

        with pytest.raises(ValidationFailed):
            await _client(handler).get_payment(payment_id)
        assert requested == []

    @pytest.mark.asyncio
    async def test_payment_id_stays_in_payments_path(self):
        requested = []

        def handler(request):
            requested.append(request.url.path)
            return httpx.Response(200, json={"id": "abc_12-3", "transaction_amount": 5})

        await _client(handler).get_payment("abc_12-3")
        assert requested == ["/v1/payments/abc_12-3"]


class TestClientConstruction:
    def test_requires_access_token(self):
        with pytest.raises(ValueError):
            MercadoPagoClient("")

    def test_explicit_timeout(self):
        timeout = build_timeout(10.0)
        assert timeout.read == 10.0
        assert timeout.connect == 5.0
