from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from loguru import logger

from app.database import get_db
from . import schemas, service
from app.users.auth import get_current_user
from app.users.schemas import CurrentUser, SuccessResponse


router = APIRouter()


def _require_owned_category(db: Session, category_id: int, current_user: CurrentUser):
    """Visible-to-user fetch, then 404 when absent and 403 when not owned."""
    existing = service.get_category_by_id(db, category_id, current_user.id)

    if not existing:
        raise HTTPException(status_code=404, detail="Category not found")

    # Default categories are read-only
    if existing.user_id is None or existing.user_id != current_user.id:
        logger.warning(
            f"User {current_user.id} denied write access to category {category_id}"
        )
        raise HTTPException(status_code=403, detail="Forbidden")

    return existing


# ================= LIST =================
@router.get("", response_model=schemas.CategoryListResponse)
def list_categories(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return {"categories": service.list_categories_for_user(db, current_user.id)}


# ================= CREATE =================
@router.post(
    "",
    response_model=schemas.CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    category: schemas.CategoryCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    db_category = service.create_category(db, category, current_user.id)
    logger.info(f"Category {db_category.id} created by user {current_user.id}")
    return {"category": db_category}


# ================= GET =================
@router.get("/{category_id}", response_model=schemas.CategoryResponse)
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    category = service.get_category_by_id(db, category_id, current_user.id)

    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    if category.user_id is not None and category.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Forbidden")

    return {"category": category}


# ================= UPDATE =================
@router.patch("/{category_id}", response_model=schemas.CategoryResponse)
def update_category(
    category_id: int,
    category: schemas.CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    _require_owned_category(db, category_id, current_user)

    updated = service.update_category(db, category_id, current_user.id, category)
    if not updated:
        logger.error(f"Update of category {category_id} matched no row after ownership check")
        raise HTTPException(status_code=500, detail="Failed to update category")

    logger.info(f"Category {category_id} updated by user {current_user.id}")
    return {"category": updated}


# ================= DELETE =================
@router.delete("/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    _require_owned_category(db, category_id, current_user)

    if not service.delete_category(db, category_id, current_user.id):
        logger.error(f"Delete of category {category_id} matched no row after ownership check")
        raise HTTPException(status_code=500, detail="Failed to delete category")

    logger.info(f"Category {category_id} deleted by user {current_user.id}")
    return {"success": True}
