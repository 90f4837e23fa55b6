from sqlalchemy.orm import Session
from loguru import logger

from app.database import Base, SessionLocal, engine
from . import models, service

DEFAULT_CATEGORIES = [
    {"name": "Food & Dining", "color": "#ef4444", "icon": "🍔"},
    {"name": "Transportation", "color": "#3b82f6", "icon": "🚗"},
    {"name": "Shopping", "color": "#8b5cf6", "icon": "🛍️"},
    {"name": "Entertainment", "color": "#ec4899", "icon": "🎬"},
    {"name": "Bills & Utilities", "color": "#f59e0b", "icon": "💡"},
    {"name": "Healthcare", "color": "#10b981", "icon": "🏥"},
    {"name": "Other", "color": "#6b7280", "icon": "📦"},
]


def seed_default_categories(db: Session) -> int:
    """Insert the shared categories once; returns how many were created."""
    if service.list_default_categories(db):
        logger.debug("Default categories already present, skipping seed")
        return 0

    for data in DEFAULT_CATEGORIES:
        db.add(models.Category(user_id=None, **data))
    db.commit()

    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
    return len(DEFAULT_CATEGORIES)


if __name__ == "__main__":
    # Register every mapped table before create_all
    from app.users import models as _user_models  # noqa: F401
    from app.expenses import models as _expense_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_default_categories(db)
