from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from . import schemas, service
from app.users.auth import get_current_user
from app.users.schemas import CurrentUser


router = APIRouter()


@router.get("", response_model=schemas.DashboardOut)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    This month's total, all-time count, most used category and the
    five most recent expenses for the acting user.
    """
    return service.get_dashboard(db, current_user.id)
