# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/services/security/callback_url_validator.py

Allow-list de URLs de retorno (back_urls / notification_url).

- https obligatorio; http solo con allow_http=True (modo no productivo).
  El flag es un parámetro explícito, nunca se lee del entorno.
- Host: coincidencia exacta con una entrada, o "*.dominio" que acepta
  el dominio y cualquier subdominio.

Autor: MPGuard
Fecha: 2026-10-13
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def _host_matches(host: str, allowed: str) -> bool:
    allowed = allowed.strip().lower().rstrip(".")
    if not allowed:
        return False
    if allowed.startswith("*."):
        domain = allowed[2:]
        return host == domain or host.endswith(f".{domain}")
    return host == allowed


def validate_callback_url(
    url: Optional[str],
    allowed_hosts: Iterable[str],
    *,
    allow_http: bool = False,
) -> bool:
    """
    Verifica que una URL de callback use un esquema permitido y un host
    de la allow-list.

    Args:
        url: URL a validar
        allowed_hosts: Hosts exactos o comodines "*.example.com"
        allow_http: Acepta http además de https (solo fuera de producción)

    Returns:
        True si la URL es aceptable
    """
    if not url or not isinstance(url, str):
        return False

    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError:
        logger.debug(f"Callback URL no parseable: {url!r}")
        return False

    scheme = parts.scheme.lower()
    schemes = ("https", "http") if allow_http else ("https",)
    if scheme not in schemes:
        logger.warning(f"Callback URL rechazada por esquema '{scheme}': {url}")
        return False

    if not host:
        return False

    host = host.rstrip(".")
    if any(_host_matches(host, allowed) for allowed in allowed_hosts):
        return True

    logger.warning(f"Callback URL rechazada: host '{host}' fuera de la allow-list")
    return False


__all__ = ["validate_callback_url"]

# Fin del archivo mpguard/modules/mercadopago/services/security/callback_url_validator.py
