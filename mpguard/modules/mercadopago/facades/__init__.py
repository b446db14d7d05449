# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/facades/__init__.py

Fachadas de alto nivel: webhooks y checkout.
"""
