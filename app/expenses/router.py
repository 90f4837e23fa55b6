from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from loguru import logger

from app.database import get_db
from . import schemas, service
from app.categories import service as category_service
from app.users.auth import get_current_user
from app.users.schemas import CurrentUser, SuccessResponse


router = APIRouter()

# page * limit stays far inside SQLite's 64-bit OFFSET
MAX_PAGE = 1_000_000
MAX_LIMIT = 100


def _check_category_access(db: Session, category_id: int, current_user: CurrentUser):
    category = category_service.get_category_by_id(db, category_id, current_user.id)
    if not category:
        logger.warning(
            f"User {current_user.id} referenced inaccessible category {category_id}"
        )
        raise HTTPException(
            status_code=400,
            detail="Category not found or access denied",
        )


@router.get("", response_model=schemas.ExpenseListResponse)
def list_expenses(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(10, ge=1, le=MAX_LIMIT),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    sort_by: schemas.SortBy = Query("date", alias="sortBy"),
    sort_order: schemas.SortOrder = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    expenses = service.list_expenses_paginated(
        db,
        current_user.id,
        limit=limit,
        offset=(page - 1) * limit,
        category_id=category_id,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    return {
        "expenses": expenses,
        "pagination": {
            "page": page,
            "limit": limit,
            "has_more": len(expenses) == limit,
        },
    }


@router.post(
    "",
    response_model=schemas.ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_expense(
    expense: schemas.ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    if expense.category_id is not None:
        _check_category_access(db, expense.category_id, current_user)

    new_expense = service.create_expense(db, expense, current_user.id)
    logger.info(f"Expense {new_expense.id} created by user {current_user.id}")
    return {"expense": new_expense}


@router.get("/{expense_id}", response_model=schemas.ExpenseResponse)
def get_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    expense = service.get_expense_by_id(db, expense_id, current_user.id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return {"expense": expense}


@router.patch("/{expense_id}", response_model=schemas.ExpenseResponse)
def update_expense(
    expense_id: int,
    expense: schemas.ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    existing = service.get_expense_by_id(db, expense_id, current_user.id)
    if not existing:
        raise HTTPException(status_code=404, detail="Expense not found")

    if expense.category_id is not None:
        _check_category_access(db, expense.category_id, current_user)

    updated = service.update_expense(db, expense_id, current_user.id, expense)
    if not updated:
        logger.error(f"Update of expense {expense_id} matched no row after ownership check")
        raise HTTPException(status_code=500, detail="Failed to update expense")

    logger.info(f"Expense {expense_id} updated by user {current_user.id}")
    return {"expense": updated}


@router.delete("/{expense_id}", response_model=SuccessResponse)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    existing = service.get_expense_by_id(db, expense_id, current_user.id)
    if not existing:
        raise HTTPException(status_code=404, detail="Expense not found")

    if not service.delete_expense(db, expense_id, current_user.id):
        logger.error(f"Delete of expense {expense_id} matched no row after ownership check")
        raise HTTPException(status_code=500, detail="Failed to delete expense")

    logger.info(f"Expense {expense_id} deleted by user {current_user.id}")
    return {"success": True}
