# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/services/security/metadata_sanitizer.py

Sanitización de metadata no confiable antes de enviarla al proveedor
y persistirla.

Reglas (en todos los niveles):
- Se ELIMINAN las claves __proto__, constructor y prototype
- Strings de más de MAX_STRING_LENGTH se truncan (no se rechazan)
- dicts y listas se recorren recursivamente
- números, booleanos y None quedan igual
- Más allá de MAX_DEPTH el subárbol se omite
- Referencias cíclicas se omiten en lugar de seguirse

Nunca lanza.

Autor: MPGuard
Fecha: 2026-10-13
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, FrozenSet, Set

logger = logging.getLogger(__name__)


DANGEROUS_KEYS: FrozenSet[str] = frozenset({"__proto__", "constructor", "prototype"})

MAX_STRING_LENGTH = 5000
MAX_DEPTH = 10

# Centinela interno: el valor se omite del resultado
_OMIT = object()


def _sanitize_value(
    value: Any,
    depth: int,
    path: Set[int],
    max_string_length: int,
    max_depth: int,
) -> Any:
    if value is None or isinstance(value, (bool, int, float, Decimal)):
        return value

    if isinstance(value, str):
        return value[:max_string_length]

    if isinstance(value, (dict, list, tuple)):
        if depth > max_depth:
            logger.debug(f"Metadata: subárbol omitido por profundidad > {max_depth}")
            return _OMIT

        marker = id(value)
        if marker in path:
            logger.debug("Metadata: referencia cíclica omitida")
            return _OMIT

        path.add(marker)
        try:
            if isinstance(value, dict):
                result: Dict[str, Any] = {}
                for key, item in value.items():
                    try:
                        key = str(key)
                    except Exception:
                        logger.debug("Metadata: clave no convertible a string omitida")
                        continue
                    if key in DANGEROUS_KEYS:
                        continue
                    clean = _sanitize_value(item, depth + 1, path, max_string_length, max_depth)
                    if clean is not _OMIT:
                        result[key[:max_string_length]] = clean
                return result

            items = []
            for item in value:
                clean = _sanitize_value(item, depth + 1, path, max_string_length, max_depth)
                if clean is not _OMIT:
                    items.append(clean)
            return items
        finally:
            path.discard(marker)

    # Escalares no JSON (datetime, UUID, ...): se serializan como string
    try:
        return str(value)[:max_string_length]
    except Exception:
        return _OMIT


def sanitize_metadata(
    value: Any,
    *,
    max_string_length: int = MAX_STRING_LENGTH,
    max_depth: int = MAX_DEPTH,
) -> Any:
    """
    Sanitiza un valor arbitrario (normalmente el dict de metadata).

    Args:
        value: Valor no confiable
        max_string_length: Longitud máxima de cada string
        max_depth: Profundidad máxima de anidamiento (raíz = 0)

    Returns:
        Copia sanitizada. Si el valor completo debe omitirse, None.
    """
    clean = _sanitize_value(value, 0, set(), max_string_length, max_depth)
    return None if clean is _OMIT else clean


__all__ = [
    "sanitize_metadata",
    "DANGEROUS_KEYS",
    "MAX_STRING_LENGTH",
    "MAX_DEPTH",
]

# Fin del archivo mpguard/modules/mercadopago/services/security/metadata_sanitizer.py
