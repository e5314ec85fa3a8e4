"""HTTP contract tests for /transactions and /totals."""

from __future__ import annotations

import asyncio

from app.core.storage import InMemoryBlobStore


def test_list_without_filters_returns_everything_sorted_by_date_desc(client, add_transaction) -> None:
    add_transaction(amount=10, category="Food", type="EXPENSE", date="2025-01-05", note="lunch")
    add_transaction(amount=1000, category="Salary", type="INCOME", date="2025-01-31", note="")
    add_transaction(amount=3, category="Transport", type="EXPENSE", date="2025-01-10", note="bus")

    response = client.get("/transactions")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Success"
    assert [tx["date"] for tx in body["data"]] == ["2025-01-31", "2025-01-10", "2025-01-05"]


def test_list_filters_by_exact_type(client, add_transaction) -> None:
    add_transaction(amount=10, category="Food", type="EXPENSE", date="2025-01-05")
    add_transaction(amount=1000, category="Salary", type="INCOME", date="2025-01-31")

    income = client.get("/transactions", params={"type": "INCOME"}).json()["data"]
    lowercase = client.get("/transactions", params={"type": "income"}).json()["data"]

    assert [tx["category"] for tx in income] == ["Salary"]
    assert lowercase == []


def test_list_filters_by_trimmed_category_membership(client, add_transaction) -> None:
    add_transaction(amount=10, category="Food", type="EXPENSE", date="2025-01-05")
    add_transaction(amount=20, category="Home", type="EXPENSE", date="2025-01-06")
    add_transaction(amount=30, category="Health", type="EXPENSE", date="2025-01-07")

    response = client.get("/transactions", params={"categoryIds": " Food , Health "})

    assert [tx["category"] for tx in response.json()["data"]] == ["Health", "Food"]


def test_list_with_only_empty_category_ids_matches_nothing(client, add_transaction) -> None:
    add_transaction(amount=10, category="Food", type="EXPENSE", date="2025-01-05")

    assert client.get("/transactions", params={"categoryIds": " , "}).json()["data"] == []
    assert len(client.get("/transactions", params={"categoryIds": ""}).json()["data"]) == 1


def test_text_search_runs_after_store_filters(client, add_transaction) -> None:
    add_transaction(amount=4, category="Food", type="EXPENSE", date="2025-01-01", note="Coffee beans")
    add_transaction(amount=50, category="Coffee", type="INCOME", date="2025-01-02", note="sold mugs")
    add_transaction(amount=9, category="Transport", type="EXPENSE", date="2025-01-03", note="taxi")
    add_transaction(amount=2, category="Food", type="EXPENSE", date="2025-01-04")

    everywhere = client.get("/transactions", params={"text": "COFFEE"}).json()["data"]
    expenses_only = client.get("/transactions", params={"text": "coffee", "type": "EXPENSE"}).json()["data"]

    assert [tx["date"] for tx in everywhere] == ["2025-01-02", "2025-01-01"]
    assert [tx["note"] for tx in expenses_only] == ["Coffee beans"]


def test_get_one_and_not_found(client, add_transaction) -> None:
    created = add_transaction(amount=10, category="Food", type="EXPENSE", date="2025-01-05", note="", photoUrl=None)

    found = client.get(f"/transactions/{created['id']}")
    missing = client.get("/transactions/does-not-exist")

    assert found.status_code == 200
    assert found.json()["data"]["id"] == created["id"]
    assert found.json()["data"]["photoUrl"] is None
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "data": None, "message": "Transaction not found"}


def test_create_applies_defaults_and_timestamps(client, store) -> None:
    response = client.post(
        "/transactions",
        json={"amount": "12.5", "category": "Food", "type": "EXPENSE", "date": "2025-02-01"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Transaction created successfully"
    assert body["data"]["amount"] == 12.5
    assert body["data"]["note"] == ""
    assert body["data"]["photoUrl"] is None
    assert body["data"]["createdAt"] is not None
    stored = asyncio.run(store.get_document("transactions", body["data"]["id"]))
    assert stored["category"] == "Food"
    assert "updatedAt" not in stored


def test_create_accepts_zero_amount_and_keeps_date_verbatim(client) -> None:
    response = client.post(
        "/transactions",
        json={"amount": 0, "category": "Other", "type": "EXPENSE", "date": 1738368000000, "note": "free"},
    )

    assert response.status_code == 201
    assert response.json()["data"]["date"] == 1738368000000


def test_create_missing_required_field_is_rejected_without_writing(client, store) -> None:
    for payload in (
        {"category": "Food", "type": "EXPENSE", "date": "2025-02-01"},
        {"amount": 3, "type": "EXPENSE", "date": "2025-02-01"},
        {"amount": 3, "category": "Food", "date": "2025-02-01"},
        {"amount": 3, "category": "Food", "type": "EXPENSE"},
        {"amount": 3, "category": "", "type": "EXPENSE", "date": "2025-02-01"},
        {"amount": None, "category": "Food", "type": "EXPENSE", "date": "2025-02-01"},
    ):
        response = client.post("/transactions", json=payload)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "data": None,
            "message": "Missing required fields: amount, category, type, date",
        }

    assert asyncio.run(store.list_documents("transactions")) == []


def test_create_with_non_numeric_amount_is_a_bad_request(client, store) -> None:
    response = client.post(
        "/transactions",
        json={"amount": "lots", "category": "Food", "type": "EXPENSE", "date": "2025-02-01"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "amount" in response.json()["message"]
    assert asyncio.run(store.list_documents("transactions")) == []


def test_update_only_touches_fields_present_in_body(client, add_transaction) -> None:
    created = add_transaction(amount=10, category="Food", type="EXPENSE", date="2025-01-05", note="lunch")

    response = client.put(f"/transactions/{created['id']}", json={"note": "", "amount": 0})

    assert response.status_code == 200
    data = response.json()["data"]
    assert response.json()["message"] == "Transaction updated successfully"
    assert data["note"] == ""
    assert data["amount"] == 0
    assert data["category"] == "Food"
    assert data["date"] == "2025-01-05"
    assert data["updatedAt"] is not None


def test_update_applies_explicit_null(client, add_transaction) -> None:
    created = add_transaction(
        amount=10, category="Food", type="EXPENSE", date="2025-01-05", photoUrl="https://x/receipts/a.jpg"
    )

    response = client.put(f"/transactions/{created['id']}", json={"photoUrl": None})

    assert response.json()["data"]["photoUrl"] is None


def test_update_missing_transaction_is_not_found(client, store) -> None:
    response = client.put("/transactions/missing", json={"note": "x"})

    assert response.status_code == 404
    assert response.json()["data"] is None
    assert asyncio.run(store.list_documents("transactions")) == []


def test_delete_removes_document_and_receipt(client, store, blobs, add_transaction) -> None:
    asyncio.run(blobs.save("receipts/r1.jpg", b"img", content_type="image/jpeg"))
    created = add_transaction(
        amount=10,
        category="Food",
        type="EXPENSE",
        date="2025-01-05",
        photoUrl="https://storage.googleapis.com/test-bucket/receipts/r1.jpg",
    )

    response = client.delete(f"/transactions/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": None, "message": "Transaction deleted successfully"}
    assert asyncio.run(store.get_document("transactions", created["id"])) is None
    assert "receipts/r1.jpg" not in blobs.blobs


def test_delete_succeeds_when_receipt_deletion_fails(client, store, add_transaction) -> None:
    from app.api.deps import get_blob_store
    from app.main import app

    class _FailingBlobStore(InMemoryBlobStore):
        async def delete(self, key):
            raise RuntimeError("storage unavailable")

    app.dependency_overrides[get_blob_store] = lambda: _FailingBlobStore()
    created = add_transaction(
        amount=10, category="Food", type="EXPENSE", date="2025-01-05", photoUrl="https://x/receipts/gone.jpg"
    )

    response = client.delete(f"/transactions/{created['id']}")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert asyncio.run(store.get_document("transactions", created["id"])) is None


def test_delete_missing_transaction_is_not_found(client) -> None:
    response = client.delete("/transactions/missing")

    assert response.status_code == 404
    assert response.json()["message"] == "Transaction not found"


def test_store_errors_surface_as_500_with_message(client, store, monkeypatch) -> None:
    async def _boom(*args, **kwargs):
        raise RuntimeError("firestore is down")

    monkeypatch.setattr(store, "list_documents", _boom)

    response = client.get("/transactions")

    assert response.status_code == 500
    assert response.json() == {"success": False, "data": None, "message": "firestore is down"}


def test_store_errors_keep_cors_headers(client, store, monkeypatch) -> None:
    async def _boom(*args, **kwargs):
        raise RuntimeError("firestore is down")

    monkeypatch.setattr(store, "list_documents", _boom)

    response = client.get("/transactions", headers={"Origin": "http://app.test"})

    assert response.status_code == 500
    assert response.json()["message"] == "firestore is down"
    assert response.headers.get("access-control-allow-origin") in ("*", "http://app.test")


def test_list_returns_stored_documents_as_written(client, add_transaction) -> None:
    created = add_transaction(
        amount="12,50", category=7, type="EXPENSE", date="2025-01-05", merchant="Cafe"
    )

    response = client.get("/transactions")

    assert response.status_code == 200
    [tx] = response.json()["data"]
    assert tx["id"] == created["id"]
    assert tx["amount"] == "12,50"
    assert tx["category"] == 7
    assert tx["merchant"] == "Cafe"

    one = client.get(f"/transactions/{created['id']}")
    assert one.status_code == 200
    assert one.json()["data"]["merchant"] == "Cafe"


def test_text_search_matches_numeric_category(client, add_transaction) -> None:
    add_transaction(amount=5, category=7, type="EXPENSE", date="2025-01-05")
    add_transaction(amount=5, category="Food", type="EXPENSE", date="2025-01-06")

    response = client.get("/transactions", params={"text": "7"})

    assert response.status_code == 200
    assert [tx["category"] for tx in response.json()["data"]] == [7]


def test_totals_cover_all_transactions(client, add_transaction) -> None:
    add_transaction(amount=100, category="Salary", type="INCOME", date="2025-01-01")
    add_transaction(amount=-40, category="Food", type="EXPENSE", date="2025-01-02")
    add_transaction(amount=10, category="Other", type="OTHER", date="2025-01-03")

    response = client.get("/totals", params={"type": "EXPENSE"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"income": 100.0, "expense": 40.0, "balance": 60.0},
        "message": "Success",
    }


def test_totals_honour_configured_rounding(client, add_transaction, monkeypatch) -> None:
    from app.core.config import settings

    monkeypatch.setattr(settings, "TOTALS_DECIMAL_PLACES", 2)
    add_transaction(amount=0.1, category="Salary", type="INCOME", date="2025-01-01")
    add_transaction(amount=0.2, category="Salary", type="INCOME", date="2025-01-02")

    assert client.get("/totals").json()["data"]["income"] == 0.3
