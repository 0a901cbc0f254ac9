"""Resolve a payment method into the action a visitor can take."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from domain.payment_types import instructions_for, lookup


class ActionKind(StrEnum):
    """Kinds of visitor-facing actions."""

    NAVIGATE = "navigate"
    DISPLAY_AND_COPY = "display_and_copy"


@dataclass(frozen=True, slots=True)
class Navigate:
    """Open ``uri`` in the provider's app or site."""

    uri: str

    @property
    def kind(self) -> ActionKind:
        return ActionKind.NAVIGATE


@dataclass(frozen=True, slots=True)
class DisplayAndCopy:
    """Show ``text`` with a copy affordance and how-to ``instructions``."""

    text: str
    instructions: str

    @property
    def kind(self) -> ActionKind:
        return ActionKind.DISPLAY_AND_COPY


Action = Navigate | DisplayAndCopy


class Resolvable(Protocol):
    """Anything carrying a payment type and a handle."""

    @property
    def type(self) -> str: ...

    @property
    def handle(self) -> str: ...


def resolve(method: Resolvable) -> Action:
    """Map a method's ``(type, handle)`` to a navigable link or a copy display.

    Pure: the same type and handle always produce the same action.
    """
    config = lookup(method.type)
    uri = config.deep_link(method.handle)
    if uri is not None:
        return Navigate(uri=uri)
    return DisplayAndCopy(text=method.handle, instructions=instructions_for(config))
