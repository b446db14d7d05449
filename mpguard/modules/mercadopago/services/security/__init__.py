# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/services/security/__init__.py

Validadores de seguridad: firma, metadata, montos y URLs de callback.
"""

from .signature_verification import (
    SignatureVerifier,
    build_manifest,
    compute_signature,
    parse_signature_header,
    secure_compare,
    verify_webhook_signature,
)
from .metadata_sanitizer import (
    DANGEROUS_KEYS,
    sanitize_metadata,
)
from .amount_validator import (
    DEFAULT_AMOUNT_TOLERANCE,
    to_decimal,
    validate_payment_amount,
)
from .callback_url_validator import validate_callback_url

__all__ = [
    # Firma
    "SignatureVerifier",
    "build_manifest",
    "compute_signature",
    "parse_signature_header",
    "secure_compare",
    "verify_webhook_signature",

    # Metadata
    "DANGEROUS_KEYS",
    "sanitize_metadata",

    # Montos
    "DEFAULT_AMOUNT_TOLERANCE",
    "to_decimal",
    "validate_payment_amount",

    # URLs
    "validate_callback_url",
]
