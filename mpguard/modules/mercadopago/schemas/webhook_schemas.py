# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/schemas/webhook_schemas.py

Modelo del payload (no confiable) de notificaciones de Mercado Pago.

Ejemplo:
    {
        "id": 12345,
        "live_mode": true,
        "type": "payment",
        "date_created": "2026-10-10T10:00:00Z",
        "user_id": 44444,
        "api_version": "v1",
        "action": "payment.updated",
        "data": {"id": "999999999"}
    }

Autor: MPGuard
Fecha: 2026-10-13
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_id(value):
    # Mercado Pago envía ids numéricos o string según el tipo de evento
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        value = str(value).strip()
        return value or None
    return None


class WebhookData(BaseModel):
    """Bloque `data` de la notificación."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)


class WebhookNotification(BaseModel):
    """Notificación de webhook tal como llega del proveedor."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: Optional[str] = Field(default=None, description="Tipo de recurso (payment, ...)")
    action: Optional[str] = Field(default=None, description="payment.created / payment.updated")
    data: WebhookData = Field(default_factory=WebhookData)
    id: Optional[str] = Field(default=None, description="ID de la notificación")
    date_created: Optional[str] = None
    live_mode: Optional[bool] = None
    user_id: Optional[str] = None
    api_version: Optional[str] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def normalize_ids(cls, value):
        return _coerce_id(value)

    @field_validator("data", mode="before")
    @classmethod
    def normalize_data(cls, value):
        return value if isinstance(value, (dict, WebhookData)) else {}

    @property
    def data_id(self) -> Optional[str]:
        return self.data.id


__all__ = ["WebhookData", "WebhookNotification"]

# Fin del archivo mpguard/modules/mercadopago/schemas/webhook_schemas.py
