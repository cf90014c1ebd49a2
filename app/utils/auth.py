from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError, ExpiredSignatureError
from fastapi import HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer

from app.config import settings
from app.database import get_db
from sqlalchemy.orm import Session
from app.models.user import User, Role
from app.utils.permissions import can_manage_course, can_moderate_student_account

import logging
logger = logging.getLogger("app.auth")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

def create_access_token(user: User, expires_hours: int | None = None):
    if expires_hours is None:
        expires_hours = settings.ACCESS_TOKEN_EXPIRE_HOURS
    expire = datetime.now(timezone.utc) + timedelta(hours=expires_hours)
    to_encode = {"sub": str(user.id), "role": user.role, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid authentication token")

def get_current_user(token: str | None = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = decode_token(token)
    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token payload")

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is deactivated")
    return user

def require_roles(*roles: Role):
    allowed = {r.value for r in roles}

    def dependency(user: User = Depends(get_current_user)):
        if user.role not in allowed:
            logger.warning("role %s denied, needs one of %s (user=%s)", user.role, sorted(allowed), user.id)
            raise HTTPException(status_code=403, detail="Insufficient role")
        return user

    return dependency

require_admin = require_roles(Role.ADMIN)
require_staff = require_roles(Role.INSTRUCTOR, Role.ADMIN)

def require_permission(predicate, detail: str = "Admin only"):
    """Gate a route on a role-only predicate from app.utils.permissions."""

    def dependency(user: User = Depends(get_current_user)):
        if not predicate(user.role):
            logger.warning("%s denied for user %s (%s)", predicate.__name__, user.id, user.role)
            raise HTTPException(status_code=403, detail=detail)
        return user

    return dependency

require_course_manager = require_permission(can_manage_course)
require_account_moderator = require_permission(can_moderate_student_account)
