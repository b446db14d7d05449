# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/repositories/__init__.py

Persistencia de registros de pago.
"""

from .payment_record_store import (
    InMemoryPaymentRecordStore,
    PaymentRecord,
    PaymentRecordStore,
)

__all__ = [
    "InMemoryPaymentRecordStore",
    "PaymentRecord",
    "PaymentRecordStore",
]
