# app/routers/courses.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload

from app.database import get_db
from app.models.course import Course
from app.models.user import User
from app.schemas.course import CourseOut, CourseDetailOut
from app.utils.auth import get_current_user
from app.utils.course_views import load_course, course_out, course_detail_out


router = APIRouter(prefix="/courses", tags=["Courses"])


# enrolled flag per caller, content redacted unless visible
@router.get("", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    courses = (
        db.query(Course)
        .options(selectinload(Course.instructor), selectinload(Course.enrollments))
        .order_by(Course.id.asc())
        .all()
    )
    return [course_out(c, user) for c in courses]


@router.get("/{course_id}", response_model=CourseDetailOut)
def get_course(course_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    course = load_course(db, course_id, with_users=True)
    return course_detail_out(course, user)
