# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/facades/webhooks/handler.py

Capa externa del endpoint de webhooks.

Siempre responde {"received": True}, incluso ante errores. Cada error
se registra en logs y métricas con el id de la notificación, el type y
el data.id.

Autor: MPGuard
Fecha: 2026-10-15
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

from mpguard.modules.mercadopago.enums import WebhookProcessingOutcome
from mpguard.modules.mercadopago.errors import ValidationFailed
from mpguard.modules.mercadopago.metrics import (
    map_exception_to_reason,
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_rejected,
)

from .constants import ACK_RESPONSE, REQUEST_ID_HEADER, SIGNATURE_HEADER
from .pipeline import WebhookPipeline

logger = logging.getLogger(__name__)


def get_header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """Busca un header sin distinguir mayúsculas."""
    if not headers:
        return None
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def parse_webhook_body(payload: Union[bytes, str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convierte el body crudo a dict.

    Raises:
        ValidationFailed: JSON inválido o que no es un objeto
    """
    if isinstance(payload, dict):
        return payload
    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        data = json.loads(payload)
    except (UnicodeDecodeError, ValueError, TypeError) as e:
        raise ValidationFailed("Invalid JSON body") from e
    if not isinstance(data, dict):
        raise ValidationFailed("Webhook payload must be a JSON object")
    return data


class WebhookHandler:
    """Adaptador HTTP-agnóstico: body + headers → acuse."""

    def __init__(self, pipeline: WebhookPipeline):
        self._pipeline = pipeline

    async def handle(
        self,
        payload: Union[bytes, str, Dict[str, Any]],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        started = time.perf_counter()
        observe_webhook_received()

        data: Dict[str, Any] = {}
        try:
            data = parse_webhook_body(payload)
            result = await self._pipeline.process(
                data,
                signature_header=get_header(headers, SIGNATURE_HEADER),
                request_id_header=get_header(headers, REQUEST_ID_HEADER),
            )
            observe_webhook_outcome(result.outcome.value, time.perf_counter() - started)
        except Exception as e:
            reason = map_exception_to_reason(e)
            observe_webhook_rejected(reason)
            observe_webhook_outcome(WebhookProcessingOutcome.ERROR.value, time.perf_counter() - started)
            raw_data = data.get("data")
            logger.error(
                f"Error procesando webhook de Mercado Pago ({reason}): {e} | "
                f"notification_id={data.get('id')} type={data.get('type')} "
                f"data.id={raw_data.get('id') if isinstance(raw_data, dict) else None}",
                exc_info=reason == "processing_error",
            )

        return dict(ACK_RESPONSE)


__all__ = [
    "WebhookHandler",
    "get_header",
    "parse_webhook_body",
]

# Fin del archivo mpguard/modules/mercadopago/facades/webhooks/handler.py
