from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.auth import require_admin, require_account_moderator
from app.models.user import User
from app.schemas.admin_user import AdminUserCreateIn
from app.schemas.user import UserOut
from app.utils.accounts import create_user
from app.routers.admin_course import list_students

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/students", response_model=list[UserOut])
def admin_students(db: Session = Depends(get_db), admin=Depends(require_account_moderator)):
    return list_students(db)


# instructors and extra admins only come from here
@router.post("/users", response_model=UserOut)
def admin_create_user(body: AdminUserCreateIn, db: Session = Depends(get_db), admin=Depends(require_admin)):
    user = create_user(db, body.name, body.email, body.password, body.role)
    logger.info("admin %s created %s account id=%s", admin.id, user.role, user.id)
    return user


@router.delete("/users/{user_id}")
def admin_delete_user(user_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")

    # enrollments and announcements cascade, taught courses lose their instructor
    db.delete(u)
    db.commit()
    logger.info("admin %s deleted user %s", admin.id, user_id)
    return {"detail": "user deleted"}
