# -*- coding: utf-8 -*-
"""
tests/shared/test_settings_mercadopago.py

Tests de MercadoPagoSettings y setup_logging.
"""

from __future__ import annotations

import logging

from mpguard.shared.config import (
    MercadoPagoSettings,
    get_mercadopago_settings,
    reset_mercadopago_settings,
    build_logging_config,
    setup_logging,
)


class TestMercadoPagoSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        settings = MercadoPagoSettings(_env_file=None)

        assert settings.webhook_rate_limit_requests == 1000
        assert settings.checkout_rate_limit_requests == 10
        assert settings.checkout_idempotency_ttl_seconds == 24 * 60 * 60
        assert settings.webhook_dedup_ttl_seconds == 72 * 60 * 60
        assert settings.amount_tolerance == 0.01
        assert settings.metadata_max_string_length == 5000
        assert settings.is_production is True

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MERCADOPAGO_WEBHOOK_SECRET", "s3cret")
        monkeypatch.setenv("ENVIRONMENT", " Development ")
        monkeypatch.setenv("ALLOWED_CALLBACK_HOSTS", '["shop.example.com", "*.example.org"]')
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = MercadoPagoSettings(_env_file=None)

        assert settings.mercadopago_webhook_secret == "s3cret"
        assert settings.environment == "development"
        assert settings.is_production is False
        assert settings.allowed_callback_hosts == ["shop.example.com", "*.example.org"]
        assert settings.log_level == "DEBUG"

    def test_singleton_and_reset(self, monkeypatch):
        monkeypatch.setenv("WEBHOOK_RATE_LIMIT_REQUESTS", "5")
        first = get_mercadopago_settings()
        assert get_mercadopago_settings() is first
        assert first.webhook_rate_limit_requests == 5

        reset_mercadopago_settings()
        assert get_mercadopago_settings() is not first


class TestSetupLogging:
    def test_plain_and_json(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        saved_quiet = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
        try:
            setup_logging("WARNING", "plain")
            assert root.level == logging.WARNING

            setup_logging("DEBUG", "json")
            assert root.level == logging.DEBUG
            assert type(root.handlers[0].formatter).__name__ == "JsonFormatter"
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            for name, lvl in saved_quiet.items():
                logging.getLogger(name).setLevel(lvl)

    def test_http_client_loggers_are_capped_at_warning(self):
        config = build_logging_config("DEBUG", "json")

        assert config["root"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["loggers"]["httpx"] == {"level": "WARNING"}
        assert config["loggers"]["httpcore"] == {"level": "WARNING"}

    def test_level_is_normalized(self):
        assert build_logging_config("info")["root"]["level"] == "INFO"
