# -*- coding: utf-8 -*-
"""
tests/modules/mercadopago/services/test_metadata_sanitizer.py

Tests de sanitización de metadata.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from mpguard.modules.mercadopago.services.security.metadata_sanitizer import (
    sanitize_metadata,
)


class TestSanitizeMetadata:
    def test_drops_dangerous_keys_at_every_level(self):
        dirty = {
            "__proto__": {"admin": True},
            "constructor": "x",
            "order": {"prototype": 1, "sku": "A1", "items": [{"__proto__": 1, "q": 2}]},
        }

        clean = sanitize_metadata(dirty)

        assert clean == {"order": {"sku": "A1", "items": [{"q": 2}]}}

    def test_truncates_long_strings(self):
        clean = sanitize_metadata({"note": "x" * 6000})
        assert len(clean["note"]) == 5000

    def test_custom_string_limit(self):
        assert sanitize_metadata({"a": "abcdef"}, max_string_length=3) == {"a": "abc"}

    def test_primitives_are_preserved(self):
        data = {"n": 1, "f": 1.5, "b": False, "none": None, "d": Decimal("9.99")}
        assert sanitize_metadata(data) == data

    def test_tuples_become_lists(self):
        assert sanitize_metadata({"t": (1, "a")}) == {"t": [1, "a"]}

    def test_depth_cap_omits_deeper_subtrees(self):
        nested = {"l1": {"l2": {"l3": {"l4": "deep"}}}}

        clean = sanitize_metadata(nested, max_depth=2)

        assert clean == {"l1": {"l2": {}}}

    def test_default_depth_handles_ten_levels(self):
        value = "leaf"
        for i in range(10):
            value = {f"k{i}": value}
        assert sanitize_metadata(value) == value

    def test_cycles_are_omitted(self):
        data = {"name": "loop"}
        data["self"] = data
        items = [1]
        items.append(items)
        data["items"] = items

        clean = sanitize_metadata(data)

        assert clean == {"name": "loop", "items": [1]}

    def test_shared_references_that_are_not_cycles_are_kept(self):
        shared = {"k": "v"}
        assert sanitize_metadata({"a": shared, "b": shared}) == {"a": {"k": "v"}, "b": {"k": "v"}}

    def test_non_json_scalars_are_stringified(self):
        uid = UUID("12345678-1234-5678-1234-567812345678")
        assert sanitize_metadata({"id": uid}) == {"id": str(uid)}

    def test_unstringifiable_values_are_omitted(self):
        class Broken:
            def __str__(self):
                raise RuntimeError("boom")

        assert sanitize_metadata({"ok": 1, "bad": Broken()}) == {"ok": 1}

    def test_unstringifiable_keys_are_omitted(self):
        class BrokenKey:
            def __str__(self):
                raise RuntimeError("boom")

        data = {"a": {BrokenKey(): 1, "keep": 2}, BrokenKey(): "x"}
        assert sanitize_metadata(data) == {"a": {"keep": 2}}

    def test_non_string_keys_are_stringified(self):
        assert sanitize_metadata({1: "a"}) == {"1": "a"}

    def test_input_is_not_mutated(self):
        data = {"__proto__": 1, "keep": "x"}
        sanitize_metadata(data)
        assert "__proto__" in data
