# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/schemas/preference_schemas.py

DTOs para la creación de preferencias de pago (Checkout Pro).

Autor: MPGuard
Fecha: 2026-10-13
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, HttpUrl, field_validator

EXTERNAL_REFERENCE_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"


class PreferenceItem(BaseModel):
    """Ítem cobrado en la preferencia."""

    id: str = Field(min_length=1, description="ID del ítem en el catálogo propio.")
    title: str = Field(min_length=1, max_length=256, description="Título visible en el checkout.")
    quantity: int = Field(ge=1, description="Cantidad (>= 1).")
    unit_price: Decimal = Field(gt=0, description="Precio unitario (> 0).")
    currency_id: Optional[str] = Field(default=None, description="Moneda ISO 4217 (ARS, BRL, MXN, ...).")
    description: Optional[str] = Field(default=None, max_length=600)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class BackUrls(BaseModel):
    """URLs a las que Mercado Pago redirige al terminar el checkout."""

    success: Optional[HttpUrl] = None
    pending: Optional[HttpUrl] = None
    failure: Optional[HttpUrl] = None

    def as_dict(self) -> Dict[str, str]:
        return {
            name: str(url)
            for name, url in (("success", self.success), ("pending", self.pending), ("failure", self.failure))
            if url is not None
        }


class PreferenceRequest(BaseModel):
    """
    Payload de entrada para crear una preferencia.

    - items: al menos uno
    - external_reference: si no se envía, el backend genera uno
    - idempotency_key: si no se envía, el backend genera una
    """

    items: List[PreferenceItem] = Field(min_length=1)
    back_urls: Optional[BackUrls] = None
    auto_return: Optional[Literal["approved", "all"]] = None
    external_reference: Optional[str] = Field(default=None, pattern=EXTERNAL_REFERENCE_PATTERN)
    notification_url: Optional[HttpUrl] = None
    statement_descriptor: Optional[str] = Field(default=None, max_length=13)
    expires: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)
    idempotency_key: Optional[str] = Field(
        default=None,
        description="Clave idempotente del intento (1-64 caracteres [A-Za-z0-9_-]).",
    )
    currency: str = Field(default="ARS", min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        return value.upper()

    @property
    def total_amount(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))


class CheckoutResponse(BaseModel):
    """
    Respuesta al crear una preferencia.

    checkout_url es el init_point al que se redirige al comprador.
    """

    payment_id: str
    preference_id: str
    checkout_url: str
    external_reference: str
    idempotency_key: str
    amount: Decimal
    currency: str
    status: str = "pending"


__all__ = [
    "EXTERNAL_REFERENCE_PATTERN",
    "PreferenceItem",
    "BackUrls",
    "PreferenceRequest",
    "CheckoutResponse",
]

# Fin del archivo mpguard/modules/mercadopago/schemas/preference_schemas.py
