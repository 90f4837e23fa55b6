from typing import List, Optional
from datetime import datetime

from pydantic import Field, field_validator

from app.users.schemas import CamelModel, not_null


# ================= CREATE =================
class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=20)

    @field_validator("color", "icon", mode="before")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


# ================= UPDATE =================
class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=20)

    @field_validator("name", "color", "icon", mode="before")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


# ================= RESPONSE =================
class CategoryOut(CamelModel):
    id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    user_id: Optional[int] = None
    created_at: datetime


class CategoryBrief(CamelModel):
    """Category as nested inside an expense."""

    id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryResponse(CamelModel):
    category: CategoryOut


class CategoryListResponse(CamelModel):
    categories: List[CategoryOut]
