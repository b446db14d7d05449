# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/services/security/amount_validator.py

Comparación de montos con tolerancia (monto local vs. monto del proveedor).

Autor: MPGuard
Fecha: 2026-10-13
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

Amount = Union[int, float, str, Decimal]

DEFAULT_AMOUNT_TOLERANCE = Decimal("0.01")


def to_decimal(value: Amount) -> Optional[Decimal]:
    """Decimal desde la representación string (evita 100.01 - 100.0 > 0.01)."""
    if isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not result.is_finite():
        return None
    return result


def validate_payment_amount(
    requested: Amount,
    authoritative: Amount,
    tolerance: Amount = DEFAULT_AMOUNT_TOLERANCE,
) -> bool:
    """True si |requested - authoritative| <= tolerance. Entradas no numéricas → False."""
    a = to_decimal(requested)
    b = to_decimal(authoritative)
    tol = to_decimal(tolerance)
    if a is None or b is None or tol is None:
        return False
    return abs(a - b) <= tol


__all__ = [
    "DEFAULT_AMOUNT_TOLERANCE",
    "to_decimal",
    "validate_payment_amount",
]
