# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/services/idempotency_store.py

Store de idempotencia en memoria con TTL.

Dos usos:
- Creación de pagos: clave de idempotencia del cliente -> respuesta
  previa (TTL 24h).
- Dedup de webhooks: "mercadopago:webhook:<type>:<data.id>" -> resultado
  del procesamiento (TTL 72h).

get_or_compute() es single-flight por clave: llamadas concurrentes con
la misma clave esperan el MISMO cómputo. Si un llamador se cancela, el
cómputo sigue y el resultado igual queda cacheado. Los errores NO se
cachean.

Autor: MPGuard
Fecha: 2026-10-13
"""

from __future__ import annotations

import asyncio
import logging
import re
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)


IDEMPOTENCY_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def validate_idempotency_key(key: Optional[str]) -> bool:
    """Clave de 1 a 64 caracteres [A-Za-z0-9_-]."""
    return isinstance(key, str) and bool(IDEMPOTENCY_KEY_PATTERN.match(key))


def build_webhook_dedup_key(
    notification_type: str,
    data_id: str,
    prefix: str = "mercadopago",
) -> str:
    """Clave de dedup derivada solo de (type, data.id)."""
    return f"{prefix}:webhook:{notification_type}:{data_id}"


@dataclass
class IdempotencyRecord:
    """Resultado cacheado con su marca de tiempo."""

    key: str
    result: Any
    stored_at: float
    ttl_seconds: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl_seconds


class IdempotencyStore:
    """
    Mapa clave -> resultado con expiración por TTL.

    Las entradas expiradas se tratan como ausentes y se purgan al leerlas.
    Con max_entries se desaloja la entrada menos usada recientemente.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        max_entries: Optional[int] = None,
    ):
        self._clock = clock
        self._max_entries = max_entries
        self._records: "OrderedDict[str, IdempotencyRecord]" = OrderedDict()
        self._lock = threading.Lock()
        self._inflight: Dict[str, "asyncio.Future[Any]"] = {}

    # ------------------------------------------------------------------
    # Operaciones básicas
    # ------------------------------------------------------------------

    def get_record(self, key: str) -> Optional[IdempotencyRecord]:
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            if record.is_expired(self._clock()):
                del self._records[key]
                logger.debug(f"Idempotency: clave expirada {key}")
                return None
            self._records.move_to_end(key)
            return record

    def get(self, key: str, default: Any = None) -> Any:
        record = self.get_record(key)
        return default if record is None else record.result

    def set(self, key: str, result: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._records[key] = IdempotencyRecord(
                key=key,
                result=result,
                stored_at=self._clock(),
                ttl_seconds=ttl_seconds,
            )
            self._records.move_to_end(key)
            if self._max_entries is not None:
                while len(self._records) > self._max_entries:
                    evicted, _ = self._records.popitem(last=False)
                    logger.debug(f"Idempotency: clave desalojada (LRU) {evicted}")

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._records.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __contains__(self, key: str) -> bool:
        return self.get_record(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Single-flight
    # ------------------------------------------------------------------

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: float,
        compute: Callable[[], Awaitable[Any]],
    ) -> Any:
        """
        Devuelve el resultado cacheado o ejecuta `compute` una sola vez.

        Args:
            key: Clave de idempotencia
            ttl_seconds: TTL del resultado si el cómputo tiene éxito
            compute: Corrutina sin argumentos

        Returns:
            El resultado cacheado o recién calculado

        Raises:
            La excepción de `compute` (a todos los que esperaban esa clave)
        """
        record = self.get_record(key)
        if record is not None:
            logger.debug(f"Idempotency hit: {key}")
            return record.result

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(key, ttl_seconds, compute))
            task.add_done_callback(_consume_exception)
            self._inflight[key] = task
        else:
            logger.debug(f"Idempotency: uniendo cómputo en curso para {key}")

        return await asyncio.shield(task)

    async def _run(
        self,
        key: str,
        ttl_seconds: float,
        compute: Callable[[], Awaitable[Any]],
    ) -> Any:
        try:
            result = await compute()
            self.set(key, result, ttl_seconds)
            return result
        finally:
            self._inflight.pop(key, None)


def _consume_exception(task: "asyncio.Future[Any]") -> None:
    # Si todos los llamadores se cancelaron nadie lee la excepción
    if not task.cancelled():
        task.exception()


__all__ = [
    "IDEMPOTENCY_KEY_PATTERN",
    "IdempotencyRecord",
    "IdempotencyStore",
    "build_webhook_dedup_key",
    "validate_idempotency_key",
]

# Fin del archivo mpguard/modules/mercadopago/services/idempotency_store.py
