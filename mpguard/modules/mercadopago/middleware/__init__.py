# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/middleware/__init__.py

Rate limiting del guard.
"""

from .rate_limiter import FixedWindowRateLimiter, RateLimitEntry

__all__ = [
    "FixedWindowRateLimiter",
    "RateLimitEntry",
]
