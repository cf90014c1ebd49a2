from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload

from app.database import get_db
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import User
from app.schemas.course import CourseOut
from app.schemas.enrollment import EnrollmentIn, EnrollmentOut
from app.utils.auth import get_current_user
from app.utils.course_views import course_out
from app.utils.enrollment import enroll
from app.utils.permissions import can_enroll, can_view_enrollments, ensure

import logging
logger = logging.getLogger("app.enrollments")


router = APIRouter(prefix="/enrollments", tags=["Enrollments"])


@router.post("", response_model=EnrollmentOut)
def enroll_in_course(body: EnrollmentIn, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    ensure(can_enroll(user.role), "Admins cannot enroll in courses")

    if not db.get(Course, body.course_id):
        raise HTTPException(status_code=404, detail="Course not found")

    enrollment = enroll(db, user.id, body.course_id)
    logger.info("user %s enrolled in course %s", user.id, body.course_id)
    return EnrollmentOut(id=enrollment.id, course_id=enrollment.course_id)


@router.get("/{user_id}", response_model=list[CourseOut])
def list_user_enrollments(user_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    allowed = can_view_enrollments(user.role, user.id, user_id)
    if not allowed:
        logger.warning("user %s denied enrollments of user %s", user.id, user_id)
    ensure(allowed, "You can only view your own enrollments")

    if not db.get(User, user_id):
        raise HTTPException(status_code=404, detail="User not found")

    courses = (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.user_id == user_id)
        .options(selectinload(Course.instructor), selectinload(Course.enrollments))
        .order_by(Enrollment.id.asc())
        .all()
    )
    # every row is one of user_id's courses; content follows the caller
    return [course_out(c, user).model_copy(update={"enrolled": True}) for c in courses]
