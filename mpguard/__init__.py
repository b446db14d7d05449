# -*- coding: utf-8 -*-
"""
mpguard

Guard de ingesta de pagos y webhooks de Mercado Pago.
"""

__version__ = "0.1.0"
