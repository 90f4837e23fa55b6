from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from . import models, schemas


def _expenses_with_category(db: Session, user_id: int):
    # LEFT OUTER JOIN on category; expenses without one keep category=None
    return (
        db.query(models.Expense)
        .options(joinedload(models.Expense.category))
        .filter(models.Expense.user_id == user_id)
    )


def _apply_filters(
    query,
    category_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
):
    if category_id is not None:
        query = query.filter(models.Expense.category_id == category_id)

    if start_date:
        query = query.filter(
            models.Expense.date >= datetime.combine(start_date, time.min)
        )

    if end_date:
        # Whole end day is included: move to next midnight, then use <
        end_dt = datetime.combine(end_date, time.min) + timedelta(days=1)
        query = query.filter(models.Expense.date < end_dt)

    return query


# =========================
# Lists
# =========================
def list_expenses_by_user(db: Session, user_id: int):
    return (
        _expenses_with_category(db, user_id)
        .order_by(models.Expense.date.desc(), models.Expense.id.desc())
        .all()
    )


def list_expenses_by_date_range(
    db: Session,
    user_id: int,
    start_date: date,
    end_date: date,
):
    query = _apply_filters(
        _expenses_with_category(db, user_id),
        start_date=start_date,
        end_date=end_date,
    )
    return query.order_by(models.Expense.date.desc(), models.Expense.id.desc()).all()


def list_expenses_by_category(db: Session, user_id: int, category_id: int):
    query = _apply_filters(_expenses_with_category(db, user_id), category_id=category_id)
    return query.order_by(models.Expense.date.desc(), models.Expense.id.desc()).all()


def list_expenses_paginated(
    db: Session,
    user_id: int,
    limit: int = 10,
    offset: int = 0,
    category_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    sort_by: schemas.SortBy = "date",
    sort_order: schemas.SortOrder = "desc",
):
    """
    One page of the user's expenses, all filters applied together.
    Returns at most `limit` rows; callers treat a full page as "maybe more".
    """
    query = _apply_filters(
        _expenses_with_category(db, user_id),
        category_id=category_id,
        start_date=start_date,
        end_date=end_date,
    )

    column = models.Expense.amount if sort_by == "amount" else models.Expense.date
    if sort_order == "asc":
        query = query.order_by(column.asc(), models.Expense.id.asc())
    else:
        query = query.order_by(column.desc(), models.Expense.id.desc())

    return query.offset(offset).limit(limit).all()


# =========================
# Get Expense by ID
# =========================
def get_expense_by_id(db: Session, expense_id: int, user_id: int):
    """Scoped to (id, owner); someone else's expense looks exactly like a missing one."""
    return (
        _expenses_with_category(db, user_id)
        .filter(models.Expense.id == expense_id)
        .first()
    )


# =========================
# Create Expense
# =========================
def create_expense(db: Session, expense: schemas.ExpenseCreate, user_id: int):
    # Category access must already be checked by the caller
    new_expense = models.Expense(
        user_id=user_id,
        category_id=expense.category_id,
        amount=expense.amount,
        description=expense.description,
        date=expense.date,
    )

    db.add(new_expense)
    db.commit()

    return get_expense_by_id(db, new_expense.id, user_id)


# =========================
# Update Expense
# =========================
def update_expense(
    db: Session,
    expense_id: int,
    user_id: int,
    expense_data: schemas.ExpenseUpdate,
):
    # Schema rejects null for everything but category_id
    values = expense_data.model_dump(exclude_unset=True)
    values["updated_at"] = datetime.utcnow()

    affected = (
        db.query(models.Expense)
        .filter(
            models.Expense.id == expense_id,
            models.Expense.user_id == user_id,
        )
        .update(values, synchronize_session=False)
    )
    db.commit()

    if not affected:
        return None
    return get_expense_by_id(db, expense_id, user_id)


# =========================
# Delete Expense
# =========================
def delete_expense(db: Session, expense_id: int, user_id: int) -> bool:
    affected = (
        db.query(models.Expense)
        .filter(
            models.Expense.id == expense_id,
            models.Expense.user_id == user_id,
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    return affected > 0
