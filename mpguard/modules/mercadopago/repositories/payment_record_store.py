# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/repositories/payment_record_store.py

Registro local de pagos y contrato del store que lo persiste.

El guard no conoce la base de datos: recibe un PaymentRecordStore.
InMemoryPaymentRecordStore sirve para desarrollo local y tests.

Autor: MPGuard
Fecha: 2026-10-14
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Protocol

from mpguard.modules.mercadopago.errors import PaymentNotFound

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PaymentRecord:
    """Pago local, creado al generar la preferencia."""

    id: str
    external_reference: str
    preference_id: Optional[str]
    user_id: str
    amount: Decimal
    currency: str
    status: str = "pending"
    status_detail: Optional[str] = None
    mp_payment_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class PaymentRecordStore(Protocol):
    async def create(self, record: PaymentRecord) -> PaymentRecord:
        ...

    async def find_one(self, *, external_reference: str) -> Optional[PaymentRecord]:
        ...

    async def update(self, record_id: str, patch: Dict[str, Any]) -> PaymentRecord:
        ...


class InMemoryPaymentRecordStore:
    """Implementación en memoria (dict id -> PaymentRecord)."""

    def __init__(self, records: Optional[List[PaymentRecord]] = None):
        self._records: Dict[str, PaymentRecord] = {}
        self._lock = asyncio.Lock()
        for record in records or []:
            self._records[record.id] = record

    async def create(self, record: PaymentRecord) -> PaymentRecord:
        async with self._lock:
            if record.id in self._records:
                raise ValueError(f"Payment record duplicado: {record.id}")
            self._records[record.id] = record
        logger.debug(f"Payment record creado: {record.id} (ref={record.external_reference})")
        return record

    async def find_one(self, *, external_reference: str) -> Optional[PaymentRecord]:
        for record in self._records.values():
            if record.external_reference == external_reference:
                return record
        return None

    async def update(self, record_id: str, patch: Dict[str, Any]) -> PaymentRecord:
        async with self._lock:
            current = self._records.get(record_id)
            if current is None:
                raise PaymentNotFound(record_id)
            updated = replace(current, **{**patch, "updated_at": _now()})
            self._records[record_id] = updated
        return updated

    def all(self) -> List[PaymentRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


__all__ = [
    "PaymentRecord",
    "PaymentRecordStore",
    "InMemoryPaymentRecordStore",
]

# Fin del archivo mpguard/modules/mercadopago/repositories/payment_record_store.py
