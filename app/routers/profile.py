from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.auth import get_current_user
from app.utils.hashing import normalize_email
from app.utils.permissions import can_moderate_student_account, ensure
from app.models.user import User
from app.schemas.profile import ProfileUpdateIn
from app.schemas.user import UserOut
from app.utils.accounts import email_taken, required_text
import logging
logger = logging.getLogger("app.profile")


router = APIRouter(prefix="/profile", tags=["Profile"])


def _editable_user(db: Session, user_id: int, caller: User) -> User:
    ensure(caller.id == user_id or can_moderate_student_account(caller.role), "You can only access your own profile")
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    return u


@router.get("/{user_id}", response_model=UserOut)
def get_profile(user_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return _editable_user(db, user_id, user)


@router.put("/{user_id}", response_model=UserOut)
def update_profile(user_id: int, body: ProfileUpdateIn, db: Session = Depends(get_db), user=Depends(get_current_user)):
    target = _editable_user(db, user_id, user)

    data = body.model_dump(exclude_unset=True)
    if data.get("email") is not None:
        email = normalize_email(required_text(data["email"], "Email"))
        if email_taken(db, email, exclude_id=target.id):
            raise HTTPException(status_code=409, detail="Email already registered")
        target.email = email
    if data.get("name") is not None:
        target.name = required_text(data["name"], "Name")

    db.commit()
    db.refresh(target)
    logger.info("profile %s updated by user %s", target.id, user.id)
    return target
