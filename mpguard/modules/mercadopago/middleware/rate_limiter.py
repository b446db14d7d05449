# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/middleware/rate_limiter.py

Rate limiter de ventana fija, en memoria, por clave.

Una entrada por clave: {count, window_start}. Si la ventana expiró
(now - window_start > window) la entrada se reinicia en sitio con
count=1. El incremento ocurre aunque la request se rechace.

En el borde de la ventana se aceptan hasta 2x max intentos seguidos.

Autor: MPGuard
Fecha: 2026-10-12
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class RateLimitEntry:
    """Contador de una clave dentro de su ventana actual."""

    key: str
    count: int
    window_start: float


class FixedWindowRateLimiter:
    """
    Rate limiter de ventana fija.

    Thread-safe: el check completo (leer, reiniciar o incrementar)
    ocurre bajo un único lock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def check(self, key: str, max_attempts: int, window_seconds: float) -> bool:
        """
        Registra un intento para `key` y dice si está dentro del límite.

        Nunca lanza: sin entrada previa equivale a cero intentos.

        Returns:
            True si el intento está permitido.
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)

            if entry is None or now - entry.window_start > window_seconds:
                self._entries[key] = RateLimitEntry(key=key, count=1, window_start=now)
                return True

            entry.count += 1
            allowed = entry.count <= max_attempts

        if not allowed:
            logger.debug(f"Rate limit excedido para {key}: {entry.count}/{max_attempts}")
        return allowed

    def get_entry(self, key: str) -> Optional[RateLimitEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return RateLimitEntry(entry.key, entry.count, entry.window_start)

    def get_retry_after(self, key: str, window_seconds: float) -> int:
        """Segundos (redondeados hacia arriba) hasta que la ventana de `key` expire."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return 0
            remaining = entry.window_start + window_seconds - self._clock()
        return max(1, math.ceil(remaining))

    def reset(self) -> None:
        """Limpia todos los contadores (útil para tests)."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = [
    "RateLimitEntry",
    "FixedWindowRateLimiter",
]

# Fin del archivo mpguard/modules/mercadopago/middleware/rate_limiter.py
