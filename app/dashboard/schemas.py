from typing import List

from app.users.schemas import CamelModel
from app.expenses.schemas import ExpenseOut


class DashboardOut(CamelModel):
    this_month_total: float
    this_month_count: int
    total_count: int
    top_category: str
    top_category_count: int
    recent_expenses: List[ExpenseOut]
