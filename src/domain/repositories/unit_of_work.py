"""Unit of Work protocol.

One unit spans one service operation: both repositories share its
transaction, and nothing is persisted until ``commit``. Leaving the block
with an exception rolls back.
"""

from types import TracebackType
from typing import Optional, Protocol

from domain.repositories.payment_method_repository import IPaymentMethodRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Transaction boundary over the profile and payment method stores."""

    @property
    def profiles(self) -> IProfileRepository: ...

    @property
    def payment_methods(self) -> IPaymentMethodRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None: ...
