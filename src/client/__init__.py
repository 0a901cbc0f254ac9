"""Async client for the AllRails API and the owner-side method manager."""

from client.actions import action_from_response, trigger
from client.api_client import PaymentsApiClient
from client.manager import MethodCollectionManager
from client.session import Session

__all__ = [
    "MethodCollectionManager",
    "PaymentsApiClient",
    "Session",
    "action_from_response",
    "trigger",
]
