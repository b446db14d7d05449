# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/enums/payment_status_enum.py

Estados de pago reportados por Mercado Pago (campo `status`).

Autor: MPGuard
Fecha: 2026-10-13
"""

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Estado del pago en el ciclo de vida con el proveedor."""

    PENDING = "pending"
    APPROVED = "approved"
    AUTHORIZED = "authorized"
    IN_PROCESS = "in_process"
    IN_MEDIATION = "in_mediation"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    CHARGED_BACK = "charged_back"


__all__ = ["PaymentStatus"]

# Fin del archivo mpguard/modules/mercadopago/enums/payment_status_enum.py
