# -*- coding: utf-8 -*-
"""
tests/modules/mercadopago/middleware/test_fixed_window_rate_limiter.py

Tests del rate limiter de ventana fija.

Autor: MPGuard
Fecha: 2026-10-16
"""

from __future__ import annotations

import threading

from conftest import FakeClock

from mpguard.modules.mercadopago.middleware.rate_limiter import FixedWindowRateLimiter


class TestFixedWindowRateLimiter:
    """Tests para check() y helpers."""

    def test_allows_up_to_max_and_rejects_next(self):
        """Permite N intentos y rechaza el N+1."""
        limiter = FixedWindowRateLimiter(clock=FakeClock())

        for _ in range(5):
            assert limiter.check("user:1", 5, 60) is True

        assert limiter.check("user:1", 5, 60) is False

    def test_counter_increments_even_when_rejected(self):
        """El contador sigue subiendo aunque la request se rechace."""
        limiter = FixedWindowRateLimiter(clock=FakeClock())

        for _ in range(4):
            limiter.check("k", 2, 60)

        assert limiter.get_entry("k").count == 4

    def test_window_expiry_resets_counter(self):
        """Pasada la ventana el contador vuelve a 1."""
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(clock=clock)

        for _ in range(3):
            limiter.check("k", 3, 60)
        assert limiter.check("k", 3, 60) is False

        clock.advance(60.001)

        assert limiter.check("k", 3, 60) is True
        entry = limiter.get_entry("k")
        assert entry.count == 1
        assert entry.window_start == clock.now

    def test_window_boundary_is_inclusive(self):
        """now - window_start == window todavía pertenece a la ventana."""
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(clock=clock)

        limiter.check("k", 1, 60)
        clock.advance(60)

        assert limiter.check("k", 1, 60) is False

    def test_keys_are_independent(self):
        """Claves distintas tienen contadores separados."""
        limiter = FixedWindowRateLimiter(clock=FakeClock())

        limiter.check("a", 1, 60)
        assert limiter.check("a", 1, 60) is False
        assert limiter.check("b", 1, 60) is True

    def test_burst_at_window_boundary_is_accepted(self):
        """Hasta 2x max en poco tiempo cruzando el borde de la ventana."""
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(clock=clock)

        clock.advance(59)
        allowed_before = sum(limiter.check("k", 10, 60) for _ in range(10))
        clock.advance(61)
        allowed_after = sum(limiter.check("k", 10, 60) for _ in range(10))

        assert allowed_before + allowed_after == 20

    def test_first_check_allowed_even_with_zero_max(self):
        """Sin entrada previa el primer intento siempre pasa."""
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        assert limiter.check("k", 0, 60) is True
        assert limiter.check("k", 0, 60) is False

    def test_retry_after(self):
        """Retry-After redondea hacia arriba y nunca es menor a 1."""
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(clock=clock)

        assert limiter.get_retry_after("k", 60) == 0

        limiter.check("k", 1, 60)
        clock.advance(10.5)
        assert limiter.get_retry_after("k", 60) == 50

        clock.advance(49.9)
        assert limiter.get_retry_after("k", 60) == 1

    def test_reset_clears_entries(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        limiter.check("a", 1, 60)
        limiter.check("b", 1, 60)
        assert len(limiter) == 2

        limiter.reset()

        assert len(limiter) == 0
        assert limiter.get_entry("a") is None

    def test_concurrent_checks_never_exceed_max(self):
        """Bajo concurrencia de threads pasan exactamente max intentos."""
        limiter = FixedWindowRateLimiter()
        results = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                allowed = limiter.check("shared", 100, 60)
                with lock:
                    results.append(allowed)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(results) == 100
        assert limiter.get_entry("shared").count == 400
