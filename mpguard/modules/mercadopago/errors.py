# -*- coding: utf-8 -*-
"""
mpguard/modules/mercadopago/errors.py

Excepciones de dominio del guard de Mercado Pago.

Cada excepción lleva un código estable y el status HTTP que le
corresponde; to_http_exception() la traduce a FastAPI.

Autor: MPGuard
Fecha: 2026-10-12
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class MercadoPagoErrorCodes:
    """Códigos de error conocidos (propios y de Mercado Pago)."""

    # Autenticación
    INVALID_API_KEY = "invalid_api_key"
    UNAUTHORIZED = "unauthorized"

    # Pagos
    INSUFFICIENT_FUNDS = "cc_rejected_insufficient_amount"
    INVALID_CARD = "cc_rejected_bad_filled_card_number"
    CARD_DISABLED = "cc_rejected_card_disabled"
    DUPLICATED_PAYMENT = "cc_rejected_duplicated_payment"
    HIGH_RISK = "cc_rejected_high_risk"

    # Suscripciones
    SUBSCRIPTION_NOT_FOUND = "subscription_not_found"

    # Guard
    RATE_LIMITED = "rate_limited"
    INVALID_SIGNATURE = "invalid_signature"
    AMOUNT_MISMATCH = "amount_mismatch"
    VALIDATION_FAILED = "validation_failed"
    PAYMENT_NOT_FOUND = "payment_not_found"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    INTERNAL_ERROR = "internal_error"


class MercadoPagoError(Exception):
    """Error base con código, status HTTP y detalles opcionales."""

    default_code: str = MercadoPagoErrorCodes.INTERNAL_ERROR
    default_status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        code: Optional[str] = None,
        message: str = "",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code or self.default_code
        self.message = message
        self.status_code = status_code or self.default_status_code
        self.details = details
        super().__init__(message)

    def to_http_exception(self) -> HTTPException:
        detail: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            detail["details"] = self.details
        return HTTPException(status_code=self.status_code, detail=detail)


class RateLimited(MercadoPagoError):
    """Se lanza cuando una clave supera su límite en la ventana actual."""
    default_code = MercadoPagoErrorCodes.RATE_LIMITED
    default_status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, key: str, retry_after: Optional[int] = None):
        self.key = key
        self.retry_after = retry_after
        details = {"retry_after_seconds": retry_after} if retry_after is not None else None
        super().__init__(message="Too many requests", details=details)

    def to_http_exception(self) -> HTTPException:
        exc = super().to_http_exception()
        if self.retry_after is not None:
            exc.headers = {"Retry-After": str(self.retry_after)}
        return exc


class SignatureInvalid(MercadoPagoError):
    """Firma de webhook ausente, malformada o que no coincide."""
    default_code = MercadoPagoErrorCodes.INVALID_SIGNATURE
    default_status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(message=message)


class AmountMismatch(MercadoPagoError):
    """El monto confirmado por el proveedor no coincide con el registro local."""
    default_code = MercadoPagoErrorCodes.AMOUNT_MISMATCH
    default_status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, expected, received, *, external_reference: Optional[str] = None):
        self.expected = expected
        self.received = received
        self.external_reference = external_reference
        super().__init__(
            message="Payment amount mismatch",
            details={
                "expected": str(expected),
                "received": str(received),
                "external_reference": external_reference,
            },
        )


class ValidationFailed(MercadoPagoError):
    """Payload o parámetros con forma inválida."""
    default_code = MercadoPagoErrorCodes.VALIDATION_FAILED
    default_status_code = 422

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)


class PaymentNotFound(MercadoPagoError):
    """Pago inexistente (en el store local o en el proveedor)."""
    default_code = MercadoPagoErrorCodes.PAYMENT_NOT_FOUND
    default_status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(message=f"Payment not found: {identifier}")


class ProviderUnavailable(MercadoPagoError):
    """Fallo transitorio del proveedor (timeout, red, 429, 5xx)."""
    default_code = MercadoPagoErrorCodes.PROVIDER_UNAVAILABLE
    default_status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Payment provider unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)


class InternalError(MercadoPagoError):
    """Error inesperado."""
    default_code = MercadoPagoErrorCodes.INTERNAL_ERROR
    default_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal error"):
        super().__init__(message=message)


__all__ = [
    "MercadoPagoErrorCodes",
    "MercadoPagoError",
    "RateLimited",
    "SignatureInvalid",
    "AmountMismatch",
    "ValidationFailed",
    "PaymentNotFound",
    "ProviderUnavailable",
    "InternalError",
]

# Fin del archivo mpguard/modules/mercadopago/errors.py
