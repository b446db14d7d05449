# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/adapters/__init__.py

Adapters hacia la API del proveedor.
"""

from .provider_client import PaymentProviderClient, PreferenceResult, ProviderPayment
from .mercadopago_client import MercadoPagoClient, build_timeout

__all__ = [
    "PaymentProviderClient",
    "PreferenceResult",
    "ProviderPayment",
    "MercadoPagoClient",
    "build_timeout",
]
