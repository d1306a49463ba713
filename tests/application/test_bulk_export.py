"""Tests for the chunked bulk export."""

import pytest

from shopcore.application.export_collection import BulkExportHandler, ChunkPlan, ChunkWindow
from shopcore.domain.exceptions import DatasetTooLarge, ValidationError
from tests.fakes import FakeGateway


def _users(n: int) -> list[dict]:
    return [
        {
            "id": f"u{i:05d}",
            "name": f"User {i}",
            "email": f"user{i}@example.com",
            "role": "CUSTOMER",
            "created_at": f"2024-01-01T00:00:00.{i:06d}+00:00",
            "updated_at": "2024-02-01T10:00:00+00:00",
        }
        for i in range(n)
    ]


def _setup(users=0, ceiling=10_000, chunk=1_000):
    gateway = FakeGateway()
    gateway.seed("users", _users(users))
    return BulkExportHandler(gateway, size_ceiling=ceiling, chunk_size=chunk), gateway


class TestChunkPlan:

    def test_windows(self):
        plan = ChunkPlan(total=2500, chunk_size=1000)
        assert len(plan) == 3
        assert list(plan) == [
            ChunkWindow(0, 0, 1000),
            ChunkWindow(1, 1000, 1000),
            ChunkWindow(2, 2000, 500),
        ]

    def test_exact_multiple(self):
        assert [w.take for w in ChunkPlan(2000, 1000)] == [1000, 1000]

    def test_empty(self):
        plan = ChunkPlan(0, 1000)
        assert len(plan) == 0
        assert list(plan) == []

    def test_restartable(self):
        plan = ChunkPlan(30, 7)
        assert list(plan) == list(plan)

    def test_invalid_chunk_size(self):
        with pytest.raises(ValidationError):
            ChunkPlan(10, 0)


class TestBulkExport:

    def test_chunked_fetches(self):
        handler, gateway = _setup(users=2500)
        result = handler.handle("users")

        assert result.total == 2500
        assert len(result.data) == 2500
        assert gateway.fetches == [
            ("users", 0, 1000),
            ("users", 1000, 1000),
            ("users", 2000, 500),
        ]

    def test_rows_newest_first_without_duplicates(self):
        handler, _ = _setup(users=25, chunk=10)
        rows = handler.handle("users").data

        ids = [row["User ID"] for row in rows]
        assert len(set(ids)) == 25
        assert ids[0] == "u00024"
        assert ids[-1] == "u00000"

    def test_empty_collection_never_fetches(self):
        handler, gateway = _setup(users=0)
        result = handler.handle("users")

        assert result.data == []
        assert result.total == 0
        assert gateway.fetches == []

    def test_at_ceiling_succeeds(self):
        handler, _ = _setup(users=10, ceiling=10, chunk=4)
        assert handler.handle("users").total == 10

    def test_over_ceiling_refused_before_fetch(self):
        handler, gateway = _setup(users=11, ceiling=10, chunk=4)

        with pytest.raises(DatasetTooLarge) as info:
            handler.handle("users")

        assert gateway.fetches == []
        assert info.value.status_code == 413
        assert info.value.to_payload() == {
            "error": "Dataset too large",
            "message": "Cannot export more than 10 users at once. Please use filters or contact support.",
            "total": 11,
        }

    def test_ceiling_message_uses_thousands_separator(self):
        exc = DatasetTooLarge("orders", 12_000, 10_000)
        assert "more than 10,000 orders" in str(exc)

    def test_unknown_entity(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown export type"):
            handler.handle("invoices")

    def test_result_payload(self):
        handler, _ = _setup(users=2)
        payload = handler.handle("users").to_payload()

        assert payload["success"] is True
        assert payload["total"] == 2
        assert payload["message"] == "Successfully prepared 2 users for export"


class TestProjections:

    def test_user_row(self):
        gateway = FakeGateway()
        gateway.seed("users", _users(1))
        gateway.seed("orders", [{"id": "o1", "customer_id": "u00000"}, {"id": "o2", "customer_id": "u00000"}])
        row = BulkExportHandler(gateway).handle("users").data[0]

        assert row == {
            "User ID": "u00000",
            "Name": "User 0",
            "Email": "user0@example.com",
            "Role": "CUSTOMER",
            "Orders Count": 2,
            "Created At": "2024-01-01",
            "Updated At": "2024-02-01",
        }

    def test_order_row(self):
        gateway = FakeGateway()
        gateway.seed("users", [{"id": "u1", "name": None, "email": "a@example.com"}])
        gateway.seed(
            "orders",
            [
                {
                    "id": "o1",
                    "order_number": "ORD-1",
                    "customer_id": "u1",
                    "status": "CONFIRMED",
                    "total": "34.00",
                    "subtotal": "34.00",
                    "tax": "0",
                    "shipping": "0",
                    "discount": "0",
                    "shipping_address": '{"city": "London", "country": "UK"}',
                    "notes": None,
                    "created_at": "2024-03-05T12:00:00+00:00",
                }
            ],
        )
        gateway.seed("order_items", [{"id": "i1", "order_id": "o1"}, {"id": "i2", "order_id": "o1"}])

        row = BulkExportHandler(gateway).handle("orders").data[0]

        assert row["Customer Name"] == "No Name"
        assert row["Customer Email"] == "a@example.com"
        assert row["Items Count"] == 2
        assert row["Shipping City"] == "London"
        assert row["Notes"] == "No Notes"
        assert row["Created At"] == "2024-03-05"
        assert row["Updated At"] == "N/A"

    def test_category_row(self):
        gateway = FakeGateway()
        gateway.seed(
            "categories",
            [
                {"id": "c1", "name": "Tools", "slug": "tools", "parent_id": None},
                {"id": "c2", "name": "Saws", "slug": "saws", "parent_id": "c1"},
            ],
        )
        gateway.seed("products", [{"id": "p1", "category_id": "c1"}])

        rows = {r["Category ID"]: r for r in BulkExportHandler(gateway).handle("categories").data}

        assert rows["c1"]["Products Count"] == 1
        assert rows["c1"]["Subcategories Count"] == 1
        assert rows["c1"]["Parent ID"] == "N/A"
        assert rows["c2"]["Parent ID"] == "c1"
        assert rows["c2"]["Description"] == "No Description"
