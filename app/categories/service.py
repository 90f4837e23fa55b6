from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from . import models, schemas


# ================= LIST =================
def list_categories_for_user(db: Session, user_id: int):
    """User's own categories plus every default (owner-less) one."""
    return (
        db.query(models.Category)
        .filter(
            or_(
                models.Category.user_id == user_id,
                models.Category.user_id.is_(None),
            )
        )
        .order_by(models.Category.name, models.Category.id)
        .all()
    )


def list_default_categories(db: Session):
    return (
        db.query(models.Category)
        .filter(models.Category.user_id.is_(None))
        .order_by(models.Category.id)
        .all()
    )


# ================= GET =================
def get_category_by_id(
    db: Session,
    category_id: int,
    user_id: Optional[int] = None,
):
    """
    Return the category when it is visible to user_id: owned by them, or a
    default category. Without user_id no ownership scoping is applied.
    Returns None otherwise.
    """
    query = db.query(models.Category).filter(models.Category.id == category_id)

    if user_id is not None:
        query = query.filter(
            or_(
                models.Category.user_id == user_id,
                models.Category.user_id.is_(None),
            )
        )

    return query.first()


# ================= CREATE =================
def create_category(db: Session, category: schemas.CategoryCreate, user_id: int):
    db_category = models.Category(
        name=category.name,
        color=category.color,
        icon=category.icon,
        user_id=user_id,
    )

    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


# ================= UPDATE =================
def update_category(
    db: Session,
    category_id: int,
    user_id: int,
    category: schemas.CategoryUpdate,
):
    """
    Update scoped to (id, owner). Default categories and other users'
    categories never match, so None comes back for them.
    """
    data = category.model_dump(exclude_unset=True)

    scoped = db.query(models.Category).filter(
        models.Category.id == category_id,
        models.Category.user_id == user_id,
    )

    if not data:
        return scoped.first()

    affected = scoped.update(data, synchronize_session=False)
    db.commit()

    if not affected:
        return None
    return scoped.first()


# ================= DELETE =================
def delete_category(db: Session, category_id: int, user_id: int) -> bool:
    """
    Delete scoped to (id, owner). Expenses pointing at the category keep
    existing; the store nulls their category_id.
    """
    affected = (
        db.query(models.Category)
        .filter(
            models.Category.id == category_id,
            models.Category.user_id == user_id,
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    return affected > 0
