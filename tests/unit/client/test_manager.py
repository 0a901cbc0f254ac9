"""Unit tests for MethodCollectionManager against an in-memory API."""

import asyncio
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

import pytest

from api.v1.schemas.payment_method import PaymentMethodResponse
from client.manager import MethodCollectionManager
from client.session import Session
from core.exceptions import (
    AuthenticationError,
    InvalidHandleError,
    InvalidReorderError,
    PaymentMethodNotFoundError,
    TransportError,
)


class FakePaymentsApi:
    """Stores methods in memory and records every call."""

    def __init__(self) -> None:
        self.rows: dict[UUID, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.fail_list = False

    def seed(self, count: int) -> list[UUID]:
        ids = []
        for index in range(count):
            method_id = uuid4()
            self.rows[method_id] = {
                "type": "venmo",
                "handle": f"@user{index}",
                "label": None,
                "sort_order": index,
                "active": True,
            }
            ids.append(method_id)
        return ids

    def _response(self, method_id: UUID) -> PaymentMethodResponse:
        row = self.rows[method_id]
        now = datetime(2026, 1, 1)
        return PaymentMethodResponse(
            id=method_id,
            display_label=row["label"] or row["type"],
            created_at=now,
            updated_at=now,
            **row,
        )

    async def list_payment_methods(self, session: Session) -> list[PaymentMethodResponse]:
        self.calls.append("list")
        await asyncio.sleep(0)
        if self.fail_list:
            raise TransportError("connection reset")
        ordered = sorted(self.rows, key=lambda i: self.rows[i]["sort_order"])
        return [self._response(i) for i in ordered]

    async def create_payment_method(
        self, session: Session, type: str, handle: str, label: str | None = None
    ) -> PaymentMethodResponse:
        self.calls.append("create")
        method_id = uuid4()
        position = max((r["sort_order"] for r in self.rows.values()), default=-1) + 1
        self.rows[method_id] = {
            "type": type,
            "handle": handle,
            "label": label,
            "sort_order": position,
            "active": True,
        }
        return self._response(method_id)

    async def update_payment_method(
        self, session: Session, method_id: UUID, patch: dict[str, Any]
    ) -> PaymentMethodResponse:
        self.calls.append("update")
        if method_id not in self.rows:
            raise PaymentMethodNotFoundError(str(method_id))
        self.rows[method_id].update(patch)
        return self._response(method_id)

    async def toggle_payment_method(
        self, session: Session, method_id: UUID
    ) -> PaymentMethodResponse:
        self.calls.append("toggle")
        self.rows[method_id]["active"] = not self.rows[method_id]["active"]
        return self._response(method_id)

    async def delete_payment_method(self, session: Session, method_id: UUID) -> None:
        self.calls.append("delete")
        del self.rows[method_id]

    async def reorder_payment_methods(
        self, session: Session, ordered_ids: list[UUID]
    ) -> list[PaymentMethodResponse]:
        self.calls.append("reorder")
        await asyncio.sleep(0)
        if sorted(ordered_ids) != sorted(self.rows):
            raise InvalidReorderError("bad order")
        for index, method_id in enumerate(ordered_ids):
            self.rows[method_id]["sort_order"] = index
        return await self.list_payment_methods(session)


@pytest.fixture
def api() -> FakePaymentsApi:
    return FakePaymentsApi()


@pytest.fixture
def manager(api: FakePaymentsApi) -> MethodCollectionManager:
    return MethodCollectionManager(api, Session(token="token"))  # type: ignore[arg-type]


def _ids(manager: MethodCollectionManager) -> list[UUID]:
    return [m.id for m in manager.methods]


class TestSessionGate:
    async def test_rejects_mutation_without_session(self, api: FakePaymentsApi):
        manager = MethodCollectionManager(api, Session.anonymous())  # type: ignore[arg-type]

        with pytest.raises(AuthenticationError):
            await manager.create("venmo", "@alice")

        assert api.calls == []


class TestCreate:
    async def test_appends_and_reloads(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        api.seed(2)

        created = await manager.create("venmo", "@alice")

        assert created.sort_order == 2
        assert created.active is True
        assert api.calls == ["create", "list"]
        assert _ids(manager)[-1] == created.id

    @pytest.mark.parametrize("handle", ["", "  "])
    async def test_empty_handle_fails_before_request(
        self, manager: MethodCollectionManager, api: FakePaymentsApi, handle: str
    ):
        with pytest.raises(InvalidHandleError):
            await manager.create("venmo", handle)

        assert api.calls == []

    async def test_failed_reload_keeps_stale_list(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        api.seed(1)
        await manager.refresh()
        api.fail_list = True

        created = await manager.create("venmo", "@alice")

        assert created.handle == "@alice"
        assert len(manager.methods) == 1


class TestUpdateAndToggle:
    async def test_sends_only_given_fields(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        (method_id,) = api.seed(1)
        api.rows[method_id]["label"] = "Rent"

        updated = await manager.update(method_id, handle="@new")

        assert updated.handle == "@new"
        assert updated.label == "Rent"

    async def test_label_none_clears(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        (method_id,) = api.seed(1)
        api.rows[method_id]["label"] = "Rent"

        updated = await manager.update(method_id, label=None)

        assert updated.label is None

    async def test_toggle_twice_restores(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        (method_id,) = api.seed(1)

        assert (await manager.toggle_active(method_id)).active is False
        assert (await manager.toggle_active(method_id)).active is True
        assert api.calls == ["toggle", "list", "toggle", "list"]

    async def test_unknown_id_surfaces_not_found(self, manager: MethodCollectionManager):
        with pytest.raises(PaymentMethodNotFoundError):
            await manager.update(uuid4(), active=False)


class TestDelete:
    async def test_leaves_gap_until_reorder(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)

        await manager.delete(ids[1])

        assert [m.sort_order for m in manager.methods] == [0, 2]


class TestReorderAndMoves:
    async def test_reorder_assigns_index(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)

        result = await manager.reorder([ids[2], ids[0], ids[1]])

        assert [m.id for m in result] == [ids[2], ids[0], ids[1]]
        assert [m.sort_order for m in result] == [0, 1, 2]

    async def test_reorder_restores_contiguity_after_delete(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)
        await manager.delete(ids[0])

        result = await manager.reorder([ids[2], ids[1]])

        assert [m.sort_order for m in result] == [0, 1]

    async def test_move_up_swaps_with_previous(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)
        await manager.refresh()

        result = await manager.move_up(1)

        assert [m.id for m in result] == [ids[1], ids[0], ids[2]]
        assert api.rows[ids[2]]["sort_order"] == 2

    async def test_boundary_moves_are_no_ops(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)
        await manager.refresh()
        api.calls.clear()

        assert [m.id for m in await manager.move_up(0)] == ids
        assert [m.id for m in await manager.move_down(2)] == ids
        assert api.calls == []

    async def test_concurrent_moves_each_see_previous_result(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)
        await manager.refresh()

        await asyncio.gather(manager.move_down(0), manager.move_down(1))

        # First move: [b, a, c]; second move then swaps index 1 and 2: [b, c, a]
        assert _ids(manager) == [ids[1], ids[2], ids[0]]

    async def test_reorder_returns_server_order_when_reload_fails(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)
        await manager.refresh()
        apply_order = api.reorder_payment_methods

        async def reorder_then_drop_connection(session, ordered_ids):
            result = await apply_order(session, ordered_ids)
            api.fail_list = True
            return result

        api.reorder_payment_methods = reorder_then_drop_connection

        result = await manager.reorder(list(reversed(ids)))

        assert [m.id for m in result] == list(reversed(ids))
        assert _ids(manager) == ids

    async def test_move_waits_for_pending_delete(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(3)
        await manager.refresh()

        _, moved = await asyncio.gather(manager.delete(ids[2]), manager.move_up(1))

        assert [m.id for m in moved] == [ids[1], ids[0]]
        assert _ids(manager) == [ids[1], ids[0]]

    async def test_move_waits_for_pending_create(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(2)
        await manager.refresh()

        created, moved = await asyncio.gather(
            manager.create("cashapp", "$alice"), manager.move_up(2)
        )

        assert [m.id for m in moved] == [ids[0], created.id, ids[1]]


class TestClose:
    async def test_reload_after_close_is_discarded(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        api.seed(1)
        await manager.refresh()
        before = manager.methods

        manager.close()
        await manager.create("venmo", "@late")

        assert manager.closed
        assert manager.methods == before

    async def test_reorder_after_close_returns_new_order(
        self, manager: MethodCollectionManager, api: FakePaymentsApi
    ):
        ids = api.seed(2)
        await manager.refresh()

        manager.close()
        result = await manager.reorder([ids[1], ids[0]])

        assert [m.id for m in result] == [ids[1], ids[0]]
        assert _ids(manager) == ids
