from datetime import datetime
from typing import Optional

import pytz
from sqlalchemy.orm import Session

from app.config import settings
from app.expenses import service as expense_service

RECENT_LIMIT = 5


def current_local_time() -> datetime:
    """Now in the configured server zone, naive like the stored dates."""
    tz = pytz.timezone(settings.TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)


def summarize_expenses(expenses, now: Optional[datetime] = None) -> dict:
    """
    Dashboard figures over a user's expenses, already sorted newest first.

    - this month: dates on or after the first day of the current month
    - top category: most frequent category name; on a tie the name seen
      first in the list wins; "N/A" when no expense has a category
    - recent: first RECENT_LIMIT entries
    """
    now = now or current_local_time()
    first_day_of_month = datetime(now.year, now.month, 1)

    this_month = [e for e in expenses if e.date >= first_day_of_month]

    category_count: dict = {}
    for expense in expenses:
        if expense.category is not None:
            name = expense.category.name
            category_count[name] = category_count.get(name, 0) + 1

    top_category, top_count = "N/A", 0
    for name, count in category_count.items():
        if count > top_count:
            top_category, top_count = name, count

    return {
        "this_month_total": sum(e.amount for e in this_month),
        "this_month_count": len(this_month),
        "total_count": len(expenses),
        "top_category": top_category,
        "top_category_count": top_count,
        "recent_expenses": expenses[:RECENT_LIMIT],
    }


def get_dashboard(db: Session, user_id: int, now: Optional[datetime] = None) -> dict:
    expenses = expense_service.list_expenses_by_user(db, user_id)
    return summarize_expenses(expenses, now=now)
