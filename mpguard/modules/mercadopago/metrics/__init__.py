# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/metrics/__init__.py

Métricas Prometheus del guard.
"""

from .helpers import map_exception_to_reason
from .prometheus_exporter import (
    CONTENT_TYPE_LATEST,
    observe_amount_mismatch,
    observe_checkout_started,
    observe_rate_limited,
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_rejected,
    registry,
    render_prometheus_metrics,
)

__all__ = [
    "map_exception_to_reason",
    "CONTENT_TYPE_LATEST",
    "observe_amount_mismatch",
    "observe_checkout_started",
    "observe_rate_limited",
    "observe_webhook_outcome",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "registry",
    "render_prometheus_metrics",
]
