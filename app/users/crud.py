from datetime import datetime

from sqlalchemy.orm import Session

from app.users.models import User
from app.users import schemas as user_schema


def create_user(db: Session, user: user_schema.RegisterSchema, hashed_password: str):
    new_user = User(
        email=user.email.strip().lower(),
        name=user.name,
        hashed_password=hashed_password,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_user_by_id(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def update_user(db: Session, user_id: int, data: dict):
    """Apply data to the user row; returns None when no row matched."""
    values = dict(data)
    if "email" in values and values["email"]:
        values["email"] = values["email"].strip().lower()
    values["updated_at"] = datetime.utcnow()

    affected = (
        db.query(User)
        .filter(User.id == user_id)
        .update(values, synchronize_session=False)
    )
    db.commit()

    if not affected:
        return None
    return get_user_by_id(db, user_id)
