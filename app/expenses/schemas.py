from typing import Annotated, List, Literal, Optional
from datetime import datetime

import pytz
from pydantic import AfterValidator, Field, field_validator

from app.config import settings
from app.users.schemas import CamelModel, not_null
from app.categories.schemas import CategoryBrief


def _to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    # Stored dates are naive, in the configured server time zone
    if value is not None and value.tzinfo is not None:
        tz = pytz.timezone(settings.TIMEZONE)
        return value.astimezone(tz).replace(tzinfo=None)
    return value


LocalDateTime = Annotated[datetime, AfterValidator(_to_local_naive)]


# =========================
# Create
# =========================
class ExpenseCreate(CamelModel):
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    description: str = Field(..., min_length=1, max_length=200)
    category_id: Optional[int] = None
    date: LocalDateTime


# =========================
# Update
# =========================
class ExpenseUpdate(CamelModel):
    amount: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    description: Optional[str] = Field(None, min_length=1, max_length=200)
    category_id: Optional[int] = None  # explicit null clears the category
    date: Optional[LocalDateTime] = None

    @field_validator("amount", "description", "date", mode="before")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


# =========================
# Output
# =========================
class ExpenseOut(CamelModel):
    id: int
    user_id: int
    category_id: Optional[int] = None
    amount: float
    description: str
    date: datetime
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryBrief] = None


class ExpenseResponse(CamelModel):
    expense: ExpenseOut


class Pagination(CamelModel):
    page: int
    limit: int
    has_more: bool


class ExpenseListResponse(CamelModel):
    expenses: List[ExpenseOut]
    pagination: Pagination


SortBy = Literal["date", "amount"]
SortOrder = Literal["asc", "desc"]
