# -*- coding: utf-8 -*-
"""
mpguard/shared/config/settings_mercadopago.py

Configuración del guard de Mercado Pago.

Descripción:
    Centraliza credenciales del proveedor, límites de rate limiting,
    TTLs de idempotencia, tolerancias de validación y logging.
    Los componentes reciben estos valores explícitamente; solo
    mpguard.bootstrap lee la configuración.

Autor: MPGuard
Fecha: 2026-10-12
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MercadoPagoSettings(BaseSettings):
    """Configuración del guard de pagos."""

    # =========================================================================
    # MERCADO PAGO
    # =========================================================================

    mercadopago_access_token: Optional[str] = Field(
        default=None,
        description="Access token de Mercado Pago (APP_USR-... o TEST-...)"
    )

    mercadopago_api_base_url: str = Field(
        default="https://api.mercadopago.com",
        description="URL base de la API de Mercado Pago"
    )

    mercadopago_webhook_secret: Optional[str] = Field(
        default=None,
        description="Secret de firma de webhooks. Sin secret NO se verifica la firma."
    )

    mercadopago_webhook_tolerance_seconds: Optional[int] = Field(
        default=None,
        description="Antigüedad máxima del ts firmado (None = sin ventana de frescura)"
    )

    mercadopago_notification_url: Optional[str] = Field(
        default=None,
        description="URL pública del webhook enviada al crear preferencias"
    )

    # =========================================================================
    # ENTORNO Y URLS DE CALLBACK
    # =========================================================================

    environment: str = Field(
        default="production",
        description="Entorno de ejecución (production, staging, development, test)"
    )

    allowed_callback_hosts: List[str] = Field(
        default_factory=list,
        description='Hosts permitidos para back_urls, en JSON: ["example.com", "*.example.com"]'
    )

    # =========================================================================
    # RATE LIMITING (ventana fija)
    # =========================================================================

    webhook_rate_limit_key: str = Field(
        default="mercadopago:webhook",
        description="Clave global del rate limiter de webhooks"
    )

    webhook_rate_limit_requests: int = Field(
        default=1000,
        description="Máximo de notificaciones por ventana (global)"
    )

    webhook_rate_limit_window_seconds: float = Field(
        default=60.0,
        description="Tamaño de la ventana de webhooks"
    )

    checkout_rate_limit_requests: int = Field(
        default=10,
        description="Máximo de creaciones de pago por usuario y ventana"
    )

    checkout_rate_limit_window_seconds: float = Field(
        default=60.0,
        description="Tamaño de la ventana de creación de pagos"
    )

    # =========================================================================
    # IDEMPOTENCIA
    # =========================================================================

    checkout_idempotency_ttl_seconds: float = Field(
        default=24 * 60 * 60,
        description="TTL de claves de idempotencia de creación de pagos (24h)"
    )

    webhook_dedup_ttl_seconds: float = Field(
        default=72 * 60 * 60,
        description="TTL de dedup de notificaciones (72h, cubre la ventana de reintentos)"
    )

    idempotency_max_entries: Optional[int] = Field(
        default=None,
        description="Tamaño máximo por store con evicción LRU (None = sin límite)"
    )

    # =========================================================================
    # VALIDACIONES
    # =========================================================================

    amount_tolerance: float = Field(
        default=0.01,
        description="Diferencia máxima aceptada entre monto local y monto del proveedor"
    )

    provider_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout de cada llamada al proveedor"
    )

    metadata_max_string_length: int = Field(
        default=5000,
        description="Longitud máxima de strings en metadata"
    )

    metadata_max_depth: int = Field(
        default=10,
        description="Profundidad máxima de metadata anidada"
    )

    # =========================================================================
    # LOGGING
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["plain", "json"] = "plain"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "prod")

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_mercadopago_settings: Optional[MercadoPagoSettings] = None


def get_mercadopago_settings() -> MercadoPagoSettings:
    """
    Obtiene la instancia global de configuración.

    Returns:
        MercadoPagoSettings: Configuración del guard
    """
    global _mercadopago_settings
    if _mercadopago_settings is None:
        _mercadopago_settings = MercadoPagoSettings()
    return _mercadopago_settings


def reset_mercadopago_settings() -> None:
    """Descarta el singleton (útil para tests con monkeypatch.setenv)."""
    global _mercadopago_settings
    _mercadopago_settings = None


__all__ = [
    "MercadoPagoSettings",
    "get_mercadopago_settings",
    "reset_mercadopago_settings",
]
# Fin del archivo mpguard/shared/config/settings_mercadopago.py
