"""Unit tests for action resolution."""

from uuid import uuid4

import pytest

from domain.entities.payment_method import PaymentMethod
from domain.payment_types import PAYMENT_TYPES, lookup
from domain.resolution import ActionKind, DisplayAndCopy, Navigate, resolve


def _method(type: str, handle: str) -> PaymentMethod:
    return PaymentMethod(user_id=uuid4(), type=type, handle=handle)


class TestResolve:
    @pytest.mark.parametrize("type_key", sorted(PAYMENT_TYPES) + ["unknown-rail"])
    def test_matches_registry_deep_link(self, type_key: str):
        method = _method(type_key, "@alice")
        uri = lookup(type_key).deep_link(method.handle)

        action = resolve(method)

        if uri is None:
            assert isinstance(action, DisplayAndCopy)
            assert action.text == "@alice"
        else:
            assert action == Navigate(uri=uri)

    def test_venmo_navigates_to_profile(self):
        action = resolve(_method("venmo", "@alice"))

        assert action.kind is ActionKind.NAVIGATE
        assert isinstance(action, Navigate)
        assert "venmo.com/u/alice" in action.uri

    def test_zelle_displays_handle_with_guidance(self):
        action = resolve(_method("zelle", "alice@example.com"))

        assert action.kind is ActionKind.DISPLAY_AND_COPY
        assert isinstance(action, DisplayAndCopy)
        assert action.text == "alice@example.com"
        assert "banking app" in action.instructions

    def test_is_pure(self):
        method = _method("cashapp", "alice")
        assert resolve(method) == resolve(method)
