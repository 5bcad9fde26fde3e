"""
Tests for /api/transactions: validation, ownership, date-range filtering,
update and delete.
"""

import json
from datetime import datetime

import pytest

from helpers import create_category, create_transaction, current_user_id, transaction_body


MISSING_ID = "00000000-0000-4000-8000-000000000000"


def parse_date(value: str) -> datetime:
    return datetime.fromisoformat(value)


class TestCreateTransaction:
    async def test_future_dated_transaction_is_persisted_and_filterable(self, alice):
        category = await create_category(alice)
        tx = await create_transaction(
            alice, category["id"], amount=42.50, date="2031-03-10T09:30:00Z", description="Dinner"
        )

        assert tx["amount"] == 42.5
        assert parse_date(tx["date"]) == datetime(2031, 3, 10, 9, 30)
        assert tx["userId"] == await current_user_id(alice)
        assert tx["categoryId"] == category["id"]

        inside = await alice.get("/api/transactions", params={"startDate": "2031-03-01", "endDate": "2031-03-31"})
        assert [t["id"] for t in inside.json()] == [tx["id"]]

        outside = await alice.get("/api/transactions", params={"startDate": "2031-04-01", "endDate": "2031-04-30"})
        assert outside.json() == []

    @pytest.mark.parametrize("amount", [0, -5, -0.01])
    async def test_non_positive_amount_is_rejected(self, alice, amount):
        category = await create_category(alice)
        response = await alice.post("/api/transactions", json=transaction_body(category["id"], amount=amount))
        assert response.status_code == 400
        assert "amount" in response.json()["data"]

    async def test_non_finite_amount_is_rejected(self, alice):
        category = await create_category(alice)
        # 1e309 is valid JSON but overflows to inf
        payload = json.dumps(transaction_body(category["id"])).replace('"amount": 10', '"amount": 1e309')
        response = await alice.post(
            "/api/transactions", content=payload, headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert "amount" in response.json()["data"]
        assert (await alice.get("/api/transactions")).json() == []

    async def test_smallest_positive_amount_is_accepted(self, alice):
        category = await create_category(alice)
        tx = await create_transaction(alice, category["id"], amount=0.01)
        assert tx["amount"] == 0.01

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"description": ""}, "description"),
            ({"description": "x" * 501}, "description"),
            ({"type": "refund"}, "type"),
            ({"date": "not-a-date"}, "date"),
            ({"amount": "lots"}, "amount"),
        ],
    )
    async def test_invalid_fields_are_rejected(self, alice, overrides, field):
        category = await create_category(alice)
        response = await alice.post("/api/transactions", json=transaction_body(category["id"], **overrides))
        assert response.status_code == 400
        body = response.json()
        assert body["statusMessage"] == "Validation error"
        assert field in body["data"]

    async def test_missing_category_is_rejected(self, alice):
        body = transaction_body("ignored")
        del body["categoryId"]
        response = await alice.post("/api/transactions", json=body)
        assert response.status_code == 400
        assert "categoryId" in response.json()["data"]

    async def test_category_of_another_user_is_rejected(self, alice, bob):
        bob_category = await create_category(bob, name="Fuel")
        response = await alice.post("/api/transactions", json=transaction_body(bob_category["id"]))
        assert response.status_code == 400
        assert response.json()["data"] == {"categoryId": ["Category not found"]}

    async def test_offset_timestamps_are_stored_as_utc(self, alice):
        category = await create_category(alice)
        tx = await create_transaction(alice, category["id"], date="2030-01-01T05:30:00+05:30")
        assert parse_date(tx["date"]) == datetime(2030, 1, 1, 0, 0)

    async def test_requires_session(self, client):
        response = await client.post("/api/transactions", json=transaction_body(MISSING_ID))
        assert response.status_code == 401


class TestListTransactions:
    async def test_lists_only_own_transactions(self, alice, bob):
        alice_category = await create_category(alice)
        bob_category = await create_category(bob)
        alice_tx = await create_transaction(alice, alice_category["id"])
        bob_tx = await create_transaction(bob, bob_category["id"])

        assert [t["id"] for t in (await alice.get("/api/transactions")).json()] == [alice_tx["id"]]
        assert [t["id"] for t in (await bob.get("/api/transactions")).json()] == [bob_tx["id"]]

    async def test_category_filter_of_another_user_returns_nothing(self, alice, bob):
        bob_category = await create_category(bob)
        await create_transaction(bob, bob_category["id"])
        response = await alice.get("/api/transactions", params={"categoryId": bob_category["id"]})
        assert response.json() == []

    async def test_date_range_covers_whole_end_day(self, alice):
        category = await create_category(alice)
        dates = {
            "before": "2030-05-31T23:59:59Z",
            "first": "2030-06-01T00:00:00Z",
            "middle": "2030-06-15T12:00:00Z",
            "last": "2030-06-30T23:59:59Z",
            "after": "2030-07-01T00:00:00Z",
        }
        for label, date in dates.items():
            await create_transaction(alice, category["id"], date=date, description=label)

        response = await alice.get("/api/transactions", params={"startDate": "2030-06-01", "endDate": "2030-06-30"})
        assert response.status_code == 200
        assert {t["description"] for t in response.json()} == {"first", "middle", "last"}

    async def test_start_date_only(self, alice):
        category = await create_category(alice)
        await create_transaction(alice, category["id"], date="2030-01-01T00:00:00Z", description="old")
        await create_transaction(alice, category["id"], date="2030-02-01T00:00:00Z", description="new")

        response = await alice.get("/api/transactions", params={"startDate": "2030-01-15"})
        assert [t["description"] for t in response.json()] == ["new"]

    async def test_end_date_only(self, alice):
        category = await create_category(alice)
        await create_transaction(alice, category["id"], date="2030-01-01T00:00:00Z", description="old")
        await create_transaction(alice, category["id"], date="2030-02-01T00:00:00Z", description="new")

        response = await alice.get("/api/transactions", params={"endDate": "2030-01-15"})
        assert [t["description"] for t in response.json()] == ["old"]

    async def test_category_filter_combines_with_dates(self, alice):
        food = await create_category(alice, name="Food")
        rent = await create_category(alice, name="Rent")
        await create_transaction(alice, food["id"], date="2030-03-05T10:00:00Z", description="lunch")
        await create_transaction(alice, rent["id"], date="2030-03-01T10:00:00Z", description="march rent")
        await create_transaction(alice, food["id"], date="2030-04-05T10:00:00Z", description="april lunch")

        response = await alice.get(
            "/api/transactions",
            params={"categoryId": food["id"], "startDate": "2030-03-01", "endDate": "2030-03-31"},
        )
        assert [t["description"] for t in response.json()] == ["lunch"]

    async def test_newest_first(self, alice):
        category = await create_category(alice)
        for day in ("2030-01-02", "2030-01-03", "2030-01-01"):
            await create_transaction(alice, category["id"], date=f"{day}T08:00:00Z", description=day)

        response = await alice.get("/api/transactions")
        assert [t["description"] for t in response.json()] == ["2030-01-03", "2030-01-02", "2030-01-01"]

    @pytest.mark.parametrize("params", [{"startDate": "yesterday"}, {"endDate": "2030-13-01"}, {"categoryId": "abc"}])
    async def test_malformed_filters_are_rejected(self, alice, params):
        response = await alice.get("/api/transactions", params=params)
        assert response.status_code == 400
        assert list(response.json()["data"]) == list(params)

    async def test_requires_session(self, client):
        response = await client.get("/api/transactions")
        assert response.status_code == 401


class TestUpdateTransaction:
    async def test_owner_can_replace_fields(self, alice):
        food = await create_category(alice, name="Food")
        salary = await create_category(alice, name="Salary", type="income")
        tx = await create_transaction(alice, food["id"], amount=10)

        response = await alice.put(
            f"/api/transactions/{tx['id']}",
            json=transaction_body(
                salary["id"], type="income", amount=20, description="Bonus", date="2030-07-01T00:00:00Z"
            ),
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == tx["id"]
        assert updated["amount"] == 20
        assert updated["type"] == "income"
        assert updated["categoryId"] == salary["id"]
        assert updated["description"] == "Bonus"
        assert parse_date(updated["date"]) == datetime(2030, 7, 1)

        listed = (await alice.get("/api/transactions")).json()
        assert listed[0]["amount"] == 20

    async def test_other_user_gets_not_found(self, alice, bob):
        alice_category = await create_category(alice)
        bob_category = await create_category(bob)
        tx = await create_transaction(alice, alice_category["id"], amount=10)

        response = await bob.put(
            f"/api/transactions/{tx['id']}", json=transaction_body(bob_category["id"], amount=20)
        )
        assert response.status_code == 404
        assert response.json()["statusMessage"] == "Transaction not found"

        # Untouched
        assert (await alice.get("/api/transactions")).json()[0]["amount"] == 10

    @pytest.mark.parametrize("tx_id", ["00000000-0000-4000-8000-000000000000", "not-a-uuid"])
    async def test_unknown_id_is_not_found(self, alice, tx_id):
        category = await create_category(alice)
        response = await alice.put(f"/api/transactions/{tx_id}", json=transaction_body(category["id"]))
        assert response.status_code == 404

    async def test_other_user_sending_owner_body_gets_not_found(self, alice, bob):
        alice_category = await create_category(alice)
        tx = await create_transaction(alice, alice_category["id"], amount=10)

        response = await bob.put(
            f"/api/transactions/{tx['id']}", json=transaction_body(alice_category["id"], amount=99)
        )
        assert response.status_code == 404
        assert response.json()["statusMessage"] == "Transaction not found"
        assert (await alice.get("/api/transactions")).json()[0]["amount"] == 10

    async def test_unknown_id_with_foreign_category_is_not_found(self, alice, bob):
        bob_category = await create_category(bob)
        response = await alice.put(f"/api/transactions/{MISSING_ID}", json=transaction_body(bob_category["id"]))
        assert response.status_code == 404

    async def test_owner_cannot_move_to_foreign_category(self, alice, bob):
        alice_category = await create_category(alice)
        bob_category = await create_category(bob)
        tx = await create_transaction(alice, alice_category["id"])

        response = await alice.put(f"/api/transactions/{tx['id']}", json=transaction_body(bob_category["id"]))
        assert response.status_code == 400
        assert response.json()["data"] == {"categoryId": ["Category not found"]}
        assert (await alice.get("/api/transactions")).json()[0]["categoryId"] == alice_category["id"]

    async def test_unknown_id_then_valid_update_still_works(self, alice):
        category = await create_category(alice)
        tx = await create_transaction(alice, category["id"], amount=10)

        missed = await alice.put(f"/api/transactions/{MISSING_ID}", json=transaction_body(category["id"]))
        assert missed.status_code == 404
        assert missed.json() == {"statusCode": 404, "statusMessage": "Transaction not found"}

        response = await alice.put(f"/api/transactions/{tx['id']}", json=transaction_body(category["id"], amount=15))
        assert response.status_code == 200
        assert response.json()["amount"] == 15

    async def test_body_is_validated_like_create(self, alice):
        category = await create_category(alice)
        tx = await create_transaction(alice, category["id"])
        response = await alice.put(f"/api/transactions/{tx['id']}", json=transaction_body(category["id"], amount=-1))
        assert response.status_code == 400

    async def test_partial_body_is_rejected(self, alice):
        category = await create_category(alice)
        tx = await create_transaction(alice, category["id"])
        response = await alice.put(f"/api/transactions/{tx['id']}", json={"amount": 20})
        assert response.status_code == 400
        assert {"categoryId", "type", "description", "date"} <= set(response.json()["data"])

    async def test_missing_id_is_bad_request(self, alice):
        response = await alice.put("/api/transactions/", json={})
        assert response.status_code == 400
        assert response.json()["statusMessage"] == "Transaction ID is required"

    async def test_requires_session(self, client):
        response = await client.put(
            f"/api/transactions/{MISSING_ID}", json=transaction_body(MISSING_ID)
        )
        assert response.status_code == 401


class TestDeleteTransaction:
    async def test_owner_can_delete(self, alice):
        category = await create_category(alice)
        tx = await create_transaction(alice, category["id"])

        response = await alice.delete(f"/api/transactions/{tx['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert (await alice.get("/api/transactions")).json() == []

        # Second delete: nothing left to delete
        response = await alice.delete(f"/api/transactions/{tx['id']}")
        assert response.status_code == 404

    async def test_other_user_gets_not_found(self, alice, bob):
        category = await create_category(alice)
        tx = await create_transaction(alice, category["id"])

        response = await bob.delete(f"/api/transactions/{tx['id']}")
        assert response.status_code == 404
        assert len((await alice.get("/api/transactions")).json()) == 1

    @pytest.mark.parametrize("tx_id", ["00000000-0000-4000-8000-000000000000", "not-a-uuid"])
    async def test_unknown_id_is_not_found(self, alice, tx_id):
        response = await alice.delete(f"/api/transactions/{tx_id}")
        assert response.status_code == 404

    async def test_missing_id_is_bad_request(self, alice):
        response = await alice.delete("/api/transactions/")
        assert response.status_code == 400

    async def test_requires_session(self, client):
        response = await client.delete(f"/api/transactions/{MISSING_ID}")
        assert response.status_code == 401
