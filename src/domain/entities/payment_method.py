"""PaymentMethod domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.payment_types import lookup


@dataclass
class PaymentMethod:
    """One way to pay an owner: a registry type plus a provider handle."""

    user_id: UUID
    type: str
    handle: str
    id: UUID = field(default_factory=uuid4)
    label: str | None = None
    sort_order: int = 0
    active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def display_label(self) -> str:
        """Owner-chosen label, falling back to the registry label."""
        return self.label or lookup(self.type).label

    def toggle_active(self) -> None:
        """Flip the active flag."""
        self.active = not self.active
        self.updated_at = datetime.utcnow()

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
