# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/facades/webhooks/constants.py

Valores por defecto del procesamiento de webhooks.
Los valores efectivos vienen de MercadoPagoSettings vía build_guard().
"""

PAYMENT_NOTIFICATION_TYPE = "payment"

# Rate limit global (todas las notificaciones comparten la clave)
WEBHOOK_RATE_LIMIT_KEY = "mercadopago:webhook"
WEBHOOK_RATE_LIMIT_REQUESTS = 1000
WEBHOOK_RATE_LIMIT_WINDOW_SECONDS = 60.0

# Dedup: 72h cubre la ventana de reintentos de Mercado Pago
WEBHOOK_DEDUP_TTL_SECONDS = 72 * 60 * 60

# Headers relevantes (se buscan sin distinguir mayúsculas)
SIGNATURE_HEADER = "x-signature"
REQUEST_ID_HEADER = "x-request-id"

# Respuesta de acuse
ACK_RESPONSE = {"received": True}
