# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/metrics/prometheus_exporter.py

Exporter Prometheus del guard de Mercado Pago.
Las métricas viven en un CollectorRegistry propio (no el global).

Autor: MPGuard
Fecha: 2026-10-14
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
import logging

logger = logging.getLogger(__name__)

PROVIDER = "mercadopago"

# --------------------------------------------------------------------------
# Registro de Prometheus
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

CHECKOUT_STARTED_TOTAL = Counter(
    "mpguard_checkout_started_total",
    "Número total de preferencias creadas",
    ["provider", "currency"],
    registry=registry,
)

RATE_LIMITED_TOTAL = Counter(
    "mpguard_rate_limited_total",
    "Requests rechazadas por rate limit",
    ["scope"],  # scope: webhook/checkout
    registry=registry,
)

WEBHOOKS_RECEIVED_TOTAL = Counter(
    "mpguard_webhook_received_total",
    "Total webhooks recibidos",
    ["provider"],
    registry=registry,
)
WEBHOOKS_OUTCOME_TOTAL = Counter(
    "mpguard_webhook_outcome_total",
    "Total webhooks por outcome (processed/duplicate/ignored/not_found/error)",
    ["provider", "outcome"],
    registry=registry,
)
WEBHOOKS_REJECTED_TOTAL = Counter(
    "mpguard_webhook_rejected_total",
    "Total webhooks rechazados por razón",
    ["provider", "reason"],
    registry=registry,
)
WEBHOOKS_PROCESSING_SECONDS = Histogram(
    "mpguard_webhook_processing_seconds",
    "Tiempo de procesamiento de webhooks (segundos)",
    ["provider"],
    registry=registry,
)
AMOUNT_MISMATCH_TOTAL = Counter(
    "mpguard_amount_mismatch_total",
    "Total de mismatches de monto detectados",
    ["provider"],
    registry=registry,
)

# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """
    Genera la salida actual de las métricas en formato Prometheus.
    """
    return generate_latest(registry)


def observe_webhook_received(provider: str = PROVIDER):
    """Registra recepción de un webhook."""
    WEBHOOKS_RECEIVED_TOTAL.labels(provider=provider).inc()


def observe_webhook_outcome(outcome: str, duration: float, provider: str = PROVIDER):
    """
    Registra outcome del webhook y su duración.

    Args:
        outcome: processed/duplicate/ignored/not_found/error
        duration: Tiempo de procesamiento en segundos
    """
    WEBHOOKS_OUTCOME_TOTAL.labels(provider=provider, outcome=outcome).inc()
    WEBHOOKS_PROCESSING_SECONDS.labels(provider=provider).observe(duration)
    logger.debug(f"[Prometheus] Webhook {provider} outcome={outcome} duration={duration:.4f}s")


def observe_webhook_rejected(reason: str, provider: str = PROVIDER):
    """
    Registra webhook rechazado.

    Args:
        reason: invalid_signature/rate_limited/amount_mismatch/...
    """
    WEBHOOKS_REJECTED_TOTAL.labels(provider=provider, reason=reason).inc()
    logger.debug(f"[Prometheus] Webhook {provider} rejected reason={reason}")


def observe_amount_mismatch(provider: str = PROVIDER):
    """Registra mismatch de monto."""
    AMOUNT_MISMATCH_TOTAL.labels(provider=provider).inc()
    logger.warning(f"[Prometheus] Amount mismatch detected for {provider}")


def observe_checkout_started(currency: str, provider: str = PROVIDER):
    CHECKOUT_STARTED_TOTAL.labels(provider=provider, currency=currency).inc()


def observe_rate_limited(scope: str):
    RATE_LIMITED_TOTAL.labels(scope=scope).inc()
    logger.debug(f"[Prometheus] Rate limited scope={scope}")


__all__ = [
    "registry",
    "CONTENT_TYPE_LATEST",
    "render_prometheus_metrics",
    "observe_webhook_received",
    "observe_webhook_outcome",
    "observe_webhook_rejected",
    "observe_amount_mismatch",
    "observe_checkout_started",
    "observe_rate_limited",
]

# Fin del archivo mpguard/modules/mercadopago/metrics/prometheus_exporter.py
