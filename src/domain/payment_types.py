"""Payment type registry.

Static mapping from a payment-type identifier to its rendering and
resolution rules. Each entry carries a pure ``deep_link`` function that turns
a handle into a URI, or returns ``None`` for display-only types that have no
universal deep-link scheme. Lookups never fail: unknown types resolve to a
generic, display-only config.
"""

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

DeepLinkBuilder = Callable[[str], str | None]

DEFAULT_COLOR = "#666666"
DEFAULT_ICON = "💰"
DEFAULT_INSTRUCTIONS = (
    "Copy this identifier and use it to send payment from your payment app."
)


@dataclass(frozen=True, slots=True)
class PaymentTypeConfig:
    """Immutable rendering and resolution rules for one payment type."""

    key: str
    label: str
    color: str
    icon: str
    deep_link: DeepLinkBuilder
    guidance: str | None = None
    placeholder: str | None = None

    @property
    def display_only(self) -> bool:
        """True when the type never produces a deep link."""
        return self.deep_link is _no_link


def _no_link(handle: str) -> str | None:
    return None


def _strip_prefix(handle: str, prefix: str) -> str:
    return handle[len(prefix):] if handle.startswith(prefix) else handle


def _venmo(handle: str) -> str:
    return f"https://venmo.com/u/{_strip_prefix(handle, '@')}"


def _cashapp(handle: str) -> str:
    cashtag = handle if handle.startswith("$") else f"${handle}"
    return f"https://cash.app/{cashtag}"


def _paypal(handle: str) -> str:
    return f"https://paypal.me/{_strip_prefix(handle, '@')}"


def _bitcoin(handle: str) -> str:
    return f"bitcoin:{handle}"


def _ethereum(handle: str) -> str:
    return f"ethereum:{handle}"


_REGISTRY: dict[str, PaymentTypeConfig] = {
    config.key: config
    for config in (
        PaymentTypeConfig(
            key="venmo",
            label="Venmo",
            color="#3D95CE",
            icon="💙",
            deep_link=_venmo,
            placeholder="@username",
        ),
        PaymentTypeConfig(
            key="cashapp",
            label="Cash App",
            color="#00D632",
            icon="💚",
            deep_link=_cashapp,
            placeholder="$cashtag",
        ),
        PaymentTypeConfig(
            key="paypal",
            label="PayPal",
            color="#003087",
            icon="💳",
            deep_link=_paypal,
            placeholder="paypal.me username",
        ),
        PaymentTypeConfig(
            key="zelle",
            label="Zelle",
            color="#6D1ED4",
            icon="💜",
            deep_link=_no_link,
            guidance=(
                "Open your banking app, choose Zelle, and send to this "
                "email or phone number."
            ),
            placeholder="email or phone number",
        ),
        PaymentTypeConfig(
            key="bitcoin",
            label="Bitcoin",
            color="#F7931A",
            icon="₿",
            deep_link=_bitcoin,
            placeholder="wallet address",
        ),
        PaymentTypeConfig(
            key="ethereum",
            label="Ethereum",
            color="#627EEA",
            icon="Ξ",
            deep_link=_ethereum,
            placeholder="wallet address",
        ),
        PaymentTypeConfig(
            key="applepay",
            label="Apple Pay",
            color="#333333",
            icon="🍎",
            deep_link=_no_link,
            guidance=(
                "Open Messages or Wallet on your iPhone and send with "
                "Apple Pay to this phone number or email."
            ),
            placeholder="phone number or email",
        ),
        PaymentTypeConfig(
            key="googlepay",
            label="Google Pay",
            color="#4285F4",
            icon="🟢",
            deep_link=_no_link,
            guidance="Open Google Pay and send to this phone number or email.",
            placeholder="phone number or email",
        ),
    )
}

PAYMENT_TYPES: Mapping[str, PaymentTypeConfig] = MappingProxyType(_REGISTRY)

# (value, label, icon) triples in registry order, for type pickers.
PAYMENT_TYPE_OPTIONS: tuple[tuple[str, str, str], ...] = tuple(
    (key, config.label, config.icon) for key, config in PAYMENT_TYPES.items()
)


def is_known_type(type_key: str) -> bool:
    """Return True if the type has a dedicated registry entry."""
    return type_key in PAYMENT_TYPES


def lookup(type_key: str) -> PaymentTypeConfig:
    """Return the config for a payment type.

    Unrecognized types get a generic config labelled with the raw type
    string, a neutral color, and no deep link.
    """
    config = PAYMENT_TYPES.get(type_key)
    if config is not None:
        return config
    return PaymentTypeConfig(
        key=type_key,
        label=type_key,
        color=DEFAULT_COLOR,
        icon=DEFAULT_ICON,
        deep_link=_no_link,
    )


def instructions_for(config: PaymentTypeConfig) -> str:
    """Visitor-facing instructions for a display-only payment type."""
    return config.guidance or DEFAULT_INSTRUCTIONS
