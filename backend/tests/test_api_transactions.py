"""Tests for transactions API endpoints."""

from datetime import date
from decimal import Decimal


class TestTransactionsAPI:
    """Test transaction endpoints."""

    def url(self, budget, suffix=""):
        return f"/api/v1/budgets/{budget.id}/transactions{suffix}"

    def test_list_transactions_empty(self, client, sample_budget):
        """Should return empty list."""
        response = client.get(self.url(sample_budget))
        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total"] == 0

    def test_list_transactions_with_data(self, client, sample_budget, sample_transactions):
        """Should return transactions ordered by date."""
        response = client.get(self.url(sample_budget))
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [t["description"] for t in data["items"]] == ["Paycheck", "Rent", "Dinner out"]

    def test_filter_by_category_and_month(self, client, sample_budget, sample_transactions, add_transaction):
        """Category matching ignores case."""
        add_transaction(sample_budget, "Concert", "-80", "Wants", date(2024, 2, 10))

        response = client.get(self.url(sample_budget), params={"category": "wants", "month": "2024-02"})
        assert response.status_code == 200
        assert [t["description"] for t in response.json()["items"]] == ["Concert"]

    def test_invalid_month(self, client, sample_budget):
        """Months must be YYYY-MM."""
        response = client.get(self.url(sample_budget), params={"month": "2024-13"})
        assert response.status_code == 422

    def test_create_transaction(self, client, sample_budget):
        """Should create a transaction with the given fields."""
        response = client.post(self.url(sample_budget), json={
            "description": "  Groceries ",
            "amount": "-42.50",
            "date": "2024-01-12",
            "category": "Essentials",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["description"] == "Groceries"
        assert Decimal(data["amount"]) == Decimal("-42.50")
        assert data["budget_id"] == sample_budget.id

    def test_create_defaults_to_essentials(self, client, sample_budget):
        """Category defaults to Essentials."""
        response = client.post(self.url(sample_budget), json={
            "description": "Bus pass",
            "amount": -60,
            "date": "2024-01-02",
        })
        assert response.status_code == 201
        assert response.json()["category"] == "Essentials"

    def test_create_blank_description(self, client, sample_budget):
        """Blank descriptions are rejected."""
        response = client.post(self.url(sample_budget), json={
            "description": "   ",
            "amount": -5,
            "date": "2024-01-02",
        })
        assert response.status_code == 422

    def test_create_too_many_decimals(self, client, sample_budget):
        """Amounts are stored to the cent."""
        response = client.post(self.url(sample_budget), json={
            "description": "Coffee",
            "amount": "-3.505",
            "date": "2024-01-02",
        })
        assert response.status_code == 422

    def test_get_transaction(self, client, sample_budget, sample_transactions):
        """Should return single transaction."""
        txn = sample_transactions[1]
        response = client.get(self.url(sample_budget, f"/{txn.id}"))
        assert response.status_code == 200
        assert response.json()["id"] == txn.id

    def test_get_transaction_other_budget(self, client, other_budget, sample_transactions):
        """Transactions are scoped to their budget."""
        response = client.get(self.url(other_budget, f"/{sample_transactions[0].id}"))
        assert response.status_code == 404

    def test_move_to_category(self, client, sample_budget, sample_transactions):
        """Should move a transaction to another category."""
        txn = sample_transactions[2]
        response = client.patch(self.url(sample_budget, f"/{txn.id}"), json={"category": "Savings"})
        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "Savings"
        assert data["description"] == "Dinner out"

    def test_update_amount(self, client, sample_budget, sample_transactions):
        """Should update the amount only."""
        txn = sample_transactions[1]
        response = client.patch(self.url(sample_budget, f"/{txn.id}"), json={"amount": "-525.00"})
        assert response.status_code == 200
        assert Decimal(response.json()["amount"]) == Decimal("-525.00")

    def test_delete_transaction(self, client, sample_budget, sample_transactions):
        """Should delete a transaction."""
        txn = sample_transactions[0]
        response = client.delete(self.url(sample_budget, f"/{txn.id}"))
        assert response.status_code == 204
        assert client.get(self.url(sample_budget, f"/{txn.id}")).status_code == 404

    def test_delete_all(self, client, sample_budget, other_budget, sample_transactions, add_transaction):
        """Reset removes only this budget's transactions."""
        add_transaction(other_budget, "Other rent", "-100", "Essentials")

        response = client.delete(self.url(sample_budget))
        assert response.status_code == 200
        assert response.json()["deleted"] == 3
        assert client.get(self.url(sample_budget)).json()["total"] == 0
        assert client.get(self.url(other_budget)).json()["total"] == 1

    def test_reorder(self, client, sample_budget, sample_transactions):
        """Manual order is persisted and used for listing."""
        ids = [sample_transactions[2].id, sample_transactions[0].id, sample_transactions[1].id]
        response = client.post(self.url(sample_budget, "/reorder"), json={"transaction_ids": ids})
        assert response.status_code == 200
        assert [t["order"] for t in response.json()["items"]] == [0, 1, 2]

        listed = client.get(self.url(sample_budget)).json()["items"]
        assert [t["id"] for t in listed] == ids

    def test_reorder_unknown(self, client, sample_budget):
        """Unknown ids are 404."""
        response = client.post(self.url(sample_budget, "/reorder"), json={"transaction_ids": ["missing"]})
        assert response.status_code == 404

    def test_copy_month(self, client, sample_budget, sample_transactions):
        """Copying reports added, updated and unchanged counts."""
        payload = {"category": "Essentials", "source_month": "2024-01", "target_month": "2024-02"}

        response = client.post(self.url(sample_budget, "/copy-month"), json=payload)
        assert response.status_code == 200
        assert response.json() == {"added": 1, "updated": 0, "unchanged": 0}

        response = client.post(self.url(sample_budget, "/copy-month"), json=payload)
        assert response.json() == {"added": 0, "updated": 0, "unchanged": 1}

    def test_copy_month_same_month(self, client, sample_budget):
        """Copying a month onto itself is a bad request."""
        response = client.post(self.url(sample_budget, "/copy-month"), json={
            "category": "Essentials", "source_month": "2024-01", "target_month": "2024-01",
        })
        assert response.status_code == 400
