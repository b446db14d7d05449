# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/services/security/signature_verification.py

Verificación de firmas de webhooks de Mercado Pago.

Contrato de cable con el proveedor (NO modificar):
- Header x-signature: "ts=<unix-seconds>,v1=<hex-hmac>"
- Manifest: "id:<data.id>;request-id:<x-request-id>;ts:<ts>;"
- Firma: HMAC-SHA256(secret, manifest) en hex minúsculas

La verificación nunca lanza: cualquier entrada malformada es False.

Autor: MPGuard
Fecha: 2026-10-12
"""
from __future__ import annotations

import hashlib
import hmac
import logging
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


def build_manifest(data_id: str, request_id: str, ts: str) -> str:
    """Manifest canónico firmado por Mercado Pago."""
    return f"id:{data_id};request-id:{request_id};ts:{ts};"


def compute_signature(secret: str, manifest: str) -> str:
    return hmac.new(
        secret.encode("utf-8"),
        msg=manifest.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).hexdigest()


def secure_compare(a: str, b: str) -> bool:
    """Comparación en tiempo constante (False si difieren en longitud)."""
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def parse_signature_header(signature_header: str) -> Dict[str, str]:
    """
    Parsea "ts=...,v1=..." a dict.

    Tolera segmentos extra, orden arbitrario y espacios; segmentos sin
    "=" se ignoran. Si una clave se repite gana la primera.
    """
    elements: Dict[str, str] = {}
    for item in signature_header.split(","):
        item = item.strip()
        if "=" not in item:
            continue
        key, value = item.split("=", 1)
        elements.setdefault(key.strip(), value.strip())
    return elements


def verify_webhook_signature(
    signature_header: Optional[str],
    request_id_header: Optional[str],
    data_id: Optional[str],
    secret: Optional[str],
    *,
    tolerance_seconds: Optional[int] = None,
    now: Optional[Callable[[], float]] = None,
) -> bool:
    """
    Verifica la firma de una notificación de Mercado Pago.

    Args:
        signature_header: Header x-signature
        request_id_header: Header x-request-id
        data_id: data.id de la notificación
        secret: Secret de firma del webhook
        tolerance_seconds: Antigüedad máxima del ts (None = no se verifica)
        now: Reloj en segundos unix (para tests)

    Returns:
        True solo si la firma v1 coincide con el manifest reconstruido
    """
    if not secret:
        logger.error("Webhook rechazado: secret de firma no configurado")
        return False

    if not signature_header or not request_id_header:
        logger.warning("Webhook rechazado: faltan headers x-signature / x-request-id")
        return False

    if not data_id:
        logger.warning("Webhook rechazado: data.id ausente")
        return False

    try:
        elements = parse_signature_header(signature_header)
        ts = elements.get("ts")
        received = elements.get("v1")

        if not ts:
            logger.warning("Webhook rechazado: ts no encontrado en x-signature")
            return False

        if not received:
            logger.warning("Webhook rechazado: firma v1 no encontrada en x-signature")
            return False

        if tolerance_seconds is not None:
            current = (now or time.time)()
            if abs(current - int(ts)) > tolerance_seconds:
                logger.warning(
                    f"Webhook rechazado: ts fuera de tolerancia "
                    f"({abs(current - int(ts)):.0f}s > {tolerance_seconds}s)"
                )
                return False

        expected = compute_signature(secret, build_manifest(str(data_id), request_id_header, ts))

        if secure_compare(expected, received):
            logger.debug("Webhook: firma verificada correctamente")
            return True

        logger.warning("Webhook rechazado: firma v1 no coincide")
        return False

    except ValueError as e:
        logger.warning(f"Webhook rechazado: ts inválido - {e}")
        return False
    except Exception as e:
        logger.error(f"Webhook rechazado: error inesperado verificando firma - {e}")
        return False


class SignatureVerifier:
    """Verificador ligado a un secret y una tolerancia."""

    def __init__(self, secret: Optional[str], *, tolerance_seconds: Optional[int] = None):
        self.secret = secret
        self.tolerance_seconds = tolerance_seconds

    @property
    def enabled(self) -> bool:
        return bool(self.secret)

    def verify(
        self,
        *,
        signature_header: Optional[str],
        request_id_header: Optional[str],
        data_id: Optional[str],
    ) -> bool:
        return verify_webhook_signature(
            signature_header,
            request_id_header,
            data_id,
            self.secret,
            tolerance_seconds=self.tolerance_seconds,
        )


__all__ = [
    "build_manifest",
    "compute_signature",
    "secure_compare",
    "parse_signature_header",
    "verify_webhook_signature",
    "SignatureVerifier",
]

# Fin del archivo mpguard/modules/mercadopago/services/security/signature_verification.py
