"""Read-only projections served to anonymous visitors."""

from dataclasses import dataclass
from uuid import UUID

from domain.resolution import Action


@dataclass(frozen=True, slots=True)
class PublicPaymentMethod:
    """Visitor-facing subset of a payment method plus its resolved action."""

    id: UUID
    type: str
    label: str | None
    handle: str
    sort_order: int
    action: Action


@dataclass(frozen=True, slots=True)
class PublicPage:
    """A profile's public page: identity plus active methods in owner order."""

    username: str
    display_name: str | None
    avatar: str | None
    bio: str | None
    payment_methods: tuple[PublicPaymentMethod, ...]
