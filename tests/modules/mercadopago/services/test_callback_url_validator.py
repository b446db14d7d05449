# -*- coding: utf-8 -*-
"""
tests/modules/mercadopago/services/test_callback_url_validator.py

Tests de la allow-list de URLs de callback.
"""

from __future__ import annotations

import pytest

from mpguard.modules.mercadopago.services.security.callback_url_validator import (
    validate_callback_url,
)

ALLOWED = ["shop.example.com", "*.example.org"]


class TestValidateCallbackUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://shop.example.com/success",
            "https://SHOP.example.com/ok?x=1",
            "https://example.org/back",
            "https://pay.example.org/back",
            "https://a.b.example.org/back",
            "https://shop.example.com:8443/path",
        ],
    )
    def test_allowed_urls(self, url):
        assert validate_callback_url(url, ALLOWED) is True

    @pytest.mark.parametrize(
        "url",
        [
            "https://evil.com/",
            "https://shop.example.com.evil.com/",
            "https://notexample.org/",
            "https://sub.shop.example.com/",
            "javascript:alert(1)",
            "ftp://shop.example.com/",
            "//shop.example.com/path",
            "https:///nohost",
            "not a url",
            "",
            None,
        ],
    )
    def test_rejected_urls(self, url):
        assert validate_callback_url(url, ALLOWED) is False

    def test_http_requires_explicit_flag(self):
        url = "http://shop.example.com/success"
        assert validate_callback_url(url, ALLOWED) is False
        assert validate_callback_url(url, ALLOWED, allow_http=True) is True

    def test_flag_is_not_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        assert validate_callback_url("http://shop.example.com/", ALLOWED) is False

    def test_empty_allow_list_rejects_everything(self):
        assert validate_callback_url("https://shop.example.com/", []) is False

    def test_userinfo_does_not_spoof_host(self):
        assert validate_callback_url("https://shop.example.com@evil.com/", ALLOWED) is False
