from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from loguru import logger

from app.database import get_db
from app.security.passwords import hash_password, verify_password
from app.users.auth import authenticate_user, create_access_token, get_current_user
from app.users import crud as user_crud, schemas


auth_router = APIRouter()
router = APIRouter()


# ================= AUTH =================
@auth_router.post(
    "/register",
    response_model=schemas.UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(user: schemas.RegisterSchema, db: Session = Depends(get_db)):
    existing_user = user_crud.get_user_by_email(db, user.email)
    if existing_user:
        raise HTTPException(status_code=409, detail="Email already registered")

    new_user = user_crud.create_user(db, user, hash_password(user.password))
    logger.info(f"User registered: {new_user.email}")
    return {"user": new_user}


@auth_router.post("/token", response_model=schemas.TokenSchema)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    email = form_data.username.strip().lower()

    user = authenticate_user(db, email, form_data.password)
    if not user:
        logger.warning(f"Authentication denied for email: {email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": str(user.id), "email": user.email})
    logger.info(f"User authenticated: {email}")
    return {"access_token": access_token, "token_type": "bearer"}


# ================= PROFILE =================
@router.get("", response_model=schemas.UserResponse)
def get_profile(
    db: Session = Depends(get_db),
    current_user: schemas.CurrentUser = Depends(get_current_user),
):
    user = user_crud.get_user_by_id(db, current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": user}


@router.patch("", response_model=schemas.UserResponse)
def update_profile(
    payload: schemas.UserUpdateSchema,
    db: Session = Depends(get_db),
    current_user: schemas.CurrentUser = Depends(get_current_user),
):
    data = payload.model_dump(exclude_unset=True)

    try:
        user = user_crud.update_user(db, current_user.id, data)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already in use")

    if not user:
        logger.error(f"Profile update matched no row for user {current_user.id}")
        raise HTTPException(status_code=500, detail="Failed to update profile")

    logger.info(f"Profile updated for user {current_user.id}")
    return {"user": user}


@router.post("/password", response_model=schemas.SuccessResponse)
def change_password(
    payload: schemas.PasswordChangeSchema,
    db: Session = Depends(get_db),
    current_user: schemas.CurrentUser = Depends(get_current_user),
):
    user = user_crud.get_user_by_id(db, current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if not verify_password(payload.current_password, user.hashed_password):
        logger.warning(f"Wrong current password for user {current_user.id}")
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user_crud.update_user(
        db, current_user.id, {"hashed_password": hash_password(payload.new_password)}
    )
    logger.info(f"Password changed for user {current_user.id}")
    return {"success": True}
