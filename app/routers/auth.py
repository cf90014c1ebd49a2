from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.accounts import create_user, get_by_email
from app.utils.hashing import verify_password
from app.utils.auth import create_access_token, get_current_user
from app.schemas.user import UserCreate, UserLogin, UserOut, TokenOut
from app.models.user import User, Role

import logging
logger = logging.getLogger("app.auth")


router = APIRouter(prefix="/auth", tags=["Auth"])


# 註冊 (students only)
@router.post("/register", response_model=UserOut)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    if user_data.role != Role.STUDENT.value:
        raise HTTPException(status_code=400, detail="Only students can register here")

    user = create_user(db, user_data.name, user_data.email, user_data.password, Role.STUDENT)
    logger.info("registered student id=%s", user.id)
    return user


# 登入
@router.post("/login", response_model=TokenOut)
def login(body: UserLogin, db: Session = Depends(get_db)):
    user = get_by_email(db, body.email)
    if not user or not verify_password(body.password, user.password_hash):
        logger.warning("failed login for %s", body.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is deactivated")

    token = create_access_token(user)
    return TokenOut(access_token=token, user_id=user.id, name=user.name, role=user.role)


# 取得使用者資料
@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
