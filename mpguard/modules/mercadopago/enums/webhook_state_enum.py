# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/enums/webhook_state_enum.py

Estados del procesamiento de una notificación de webhook.

Flujo normal:
RECEIVED → RATE_CHECKED → DEDUPED → SIGNATURE_VERIFIED → FETCHED →
AMOUNT_VALIDATED → PERSISTED → CALLBACK_INVOKED → ACKNOWLEDGED

Terminales alternativos: REJECTED, IGNORED.

Autor: MPGuard
Fecha: 2026-10-13
"""

from enum import StrEnum


class WebhookState(StrEnum):
    """Etapa alcanzada por una notificación dentro del pipeline."""

    RECEIVED = "received"
    RATE_CHECKED = "rate_checked"
    DEDUPED = "deduped"
    SIGNATURE_VERIFIED = "signature_verified"
    FETCHED = "fetched"
    AMOUNT_VALIDATED = "amount_validated"
    PERSISTED = "persisted"
    CALLBACK_INVOKED = "callback_invoked"
    ACKNOWLEDGED = "acknowledged"
    REJECTED = "rejected"
    IGNORED = "ignored"


class WebhookProcessingOutcome(StrEnum):
    """Resultado de una notificación (label `outcome` en métricas)."""

    PROCESSED = "processed"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    NOT_FOUND = "not_found"
    ERROR = "error"


__all__ = ["WebhookState", "WebhookProcessingOutcome"]

# Fin del archivo mpguard/modules/mercadopago/enums/webhook_state_enum.py
