from datetime import datetime

from app.categories.models import Category
from app.dashboard.service import current_local_time, summarize_expenses
from app.expenses.models import Expense


NOW = datetime(2024, 6, 15, 10, 0)


def _expense(amount, when, category=None):
    return Expense(amount=amount, description="x", date=when, category=category)


class TestSummary:
    def test_month_boundary(self):
        expenses = [
            _expense(20.0, datetime(2024, 6, 1, 0, 0)),
            _expense(7.0, datetime(2024, 5, 31, 23, 59)),
        ]
        summary = summarize_expenses(expenses, now=NOW)
        assert summary["this_month_total"] == 20.0
        assert summary["this_month_count"] == 1
        assert summary["total_count"] == 2

    def test_top_category_and_tie_break(self):
        food = Category(name="Food")
        travel = Category(name="Travel")
        expenses = [
            _expense(1.0, datetime(2024, 6, 10), travel),
            _expense(1.0, datetime(2024, 6, 9), food),
            _expense(1.0, datetime(2024, 6, 8), food),
            _expense(1.0, datetime(2024, 6, 7), travel),
            _expense(1.0, datetime(2024, 6, 6)),
        ]
        summary = summarize_expenses(expenses, now=NOW)
        assert summary["top_category"] == "Travel"
        assert summary["top_category_count"] == 2

    def test_no_categories(self):
        summary = summarize_expenses([_expense(3.0, datetime(2024, 6, 2))], now=NOW)
        assert summary["top_category"] == "N/A"
        assert summary["top_category_count"] == 0

    def test_recent_is_first_five(self):
        expenses = [_expense(float(i), datetime(2024, 6, 14 - i)) for i in range(8)]
        summary = summarize_expenses(expenses, now=NOW)
        assert [e.amount for e in summary["recent_expenses"]] == [0.0, 1.0, 2.0, 3.0, 4.0]

    def test_empty(self):
        summary = summarize_expenses([], now=NOW)
        assert summary["this_month_total"] == 0
        assert summary["total_count"] == 0
        assert summary["recent_expenses"] == []


class TestDashboardEndpoint:
    def test_dashboard_for_acting_user(self, client, alice, bob):
        category = client.post(
            "/categories", json={"name": "Food"}, headers=alice
        ).json()["category"]
        now = current_local_time().replace(microsecond=0)
        for amount in (5.0, 7.5):
            response = client.post(
                "/expenses",
                json={
                    "amount": amount,
                    "description": "Meal",
                    "categoryId": category["id"],
                    "date": now.isoformat(),
                },
                headers=alice,
            )
            assert response.status_code == 201

        body = client.get("/dashboard", headers=alice).json()
        assert body["totalCount"] == 2
        assert body["thisMonthTotal"] == 12.5
        assert body["topCategory"] == "Food"
        assert body["topCategoryCount"] == 2
        assert len(body["recentExpenses"]) == 2
        assert body["recentExpenses"][0]["category"]["name"] == "Food"

        body = client.get("/dashboard", headers=bob).json()
        assert body["totalCount"] == 0
        assert body["topCategory"] == "N/A"
