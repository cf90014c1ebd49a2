from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.enrollment import Enrollment

import logging
logger = logging.getLogger("app.enrollments")

DUPLICATE_DETAIL = "Already enrolled in this course"


def is_enrolled(db: Session, user_id: int, course_id: int) -> bool:
    return db.query(Enrollment.id).filter(
        Enrollment.user_id == user_id,
        Enrollment.course_id == course_id,
    ).first() is not None


def enroll(db: Session, user_id: int, course_id: int) -> Enrollment:
    """
    Insert one (user, course) ledger row.
    The existence check gives the friendly error; the unique constraint
    catches the concurrent case that slips past it.
    """
    if is_enrolled(db, user_id, course_id):
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)

    enrollment = Enrollment(user_id=user_id, course_id=course_id)
    db.add(enrollment)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("duplicate enrollment rejected by constraint user=%s course=%s", user_id, course_id)
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)
    db.refresh(enrollment)
    return enrollment
