from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, File
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.database import get_db
from app.utils.auth import require_course_manager, require_account_moderator

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import User, Role

from app.schemas.course import (
    CourseIn, CourseOut,
    AssignInstructorIn, AssignInstructorOut,
    RosterEntry, StudentEnrollmentOut, CourseImportOut,
)
from app.schemas.user import UserOut, StudentStatusOut
from app.utils.course_import import read_course_rows
from app.utils.course_views import load_course, course_out, roster
from app.utils.hashing import normalize_email

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/course", tags=["Admin - Courses"])


def list_students(db: Session) -> list[User]:
    return db.query(User).filter(User.role == Role.STUDENT.value).order_by(User.id.asc()).all()


@router.get("", response_model=list[CourseOut])
def admin_list_courses(db: Session = Depends(get_db), admin=Depends(require_course_manager)):
    courses = db.query(Course).options(selectinload(Course.instructor)).order_by(Course.id.asc()).all()
    return [course_out(c) for c in courses]


@router.post("", response_model=CourseOut)
def admin_create_course(body: CourseIn, db: Session = Depends(get_db), admin=Depends(require_course_manager)):
    course = Course(
        title=body.title.strip(),
        description=body.description,
        duration=body.duration,
        price=body.price,
        content=body.content,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info("course created id=%s by admin=%s", course.id, admin.id)
    return course_out(course)


#學生帳號管理
@router.get("/students", response_model=list[UserOut])
def admin_list_students(db: Session = Depends(get_db), admin=Depends(require_account_moderator)):
    return list_students(db)


@router.put("/students/{student_id}/status", response_model=StudentStatusOut)
def admin_update_student_status(
    student_id: int,
    is_active: bool = Query(..., description="true to activate, false to deactivate"),
    db: Session = Depends(get_db),
    admin=Depends(require_account_moderator),
):
    student = db.query(User).filter(User.id == student_id, User.role == Role.STUDENT.value).first()
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    student.is_active = is_active
    db.commit()
    logger.info("student %s active=%s by admin=%s", student_id, is_active, admin.id)
    return StudentStatusOut(id=student.id, is_active=student.is_active)


@router.get("/students/{student_id}/enrollments", response_model=list[StudentEnrollmentOut])
def admin_student_enrollments(student_id: int, db: Session = Depends(get_db), admin=Depends(require_account_moderator)):
    student = db.query(User).filter(User.id == student_id, User.role == Role.STUDENT.value).first()
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    rows = (
        db.query(Enrollment)
        .options(selectinload(Enrollment.course))
        .filter(Enrollment.user_id == student_id)
        .order_by(Enrollment.id.asc())
        .all()
    )
    return [
        StudentEnrollmentOut(course_id=e.course.id, course_title=e.course.title, enrolled_at=e.enrolled_at)
        for e in rows
    ]


@router.get("/courses/{course_id}/students", response_model=list[RosterEntry])
def admin_course_students(course_id: int, db: Session = Depends(get_db), admin=Depends(require_course_manager)):
    return roster(load_course(db, course_id, with_users=True))


#匯入課程api
@router.post("/import", response_model=CourseImportOut)
def admin_import_courses(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    admin=Depends(require_course_manager),
):
    try:
        rows = read_course_rows(file.file)
    except Exception:
        logger.exception("course import failed to read %s", file.filename)
        raise HTTPException(status_code=400, detail="Cannot read Excel file")

    existing = {t.lower() for (t,) in db.query(Course.title).all()}
    inserted = 0
    skipped = 0
    for row in rows:
        # same limits as POST /course
        try:
            body = CourseIn.model_validate(row)
        except ValidationError as e:
            logger.warning("course import row skipped (%s): %s", row["title"][:40], e.errors()[0]["msg"])
            skipped += 1
            continue

        key = body.title.lower()
        if key in existing:
            skipped += 1
            continue
        db.add(Course(**body.model_dump()))
        existing.add(key)
        inserted += 1

    db.commit()
    logger.info("course import by admin=%s inserted=%s skipped=%s", admin.id, inserted, skipped)
    return CourseImportOut(inserted=inserted, skipped=skipped)


@router.get("/{course_id}", response_model=CourseOut)
def admin_get_course(course_id: int, db: Session = Depends(get_db), admin=Depends(require_course_manager)):
    return course_out(load_course(db, course_id))


@router.put("/{course_id}", response_model=CourseOut)
def admin_update_course(
    course_id: int,
    body: CourseIn,
    db: Session = Depends(get_db),
    admin=Depends(require_course_manager),
):
    course = load_course(db, course_id)

    course.title = body.title.strip()
    course.description = body.description
    course.duration = body.duration
    course.price = body.price
    if body.content is not None:
        course.content = body.content

    db.commit()
    db.refresh(course)
    logger.info("course updated id=%s by admin=%s", course.id, admin.id)
    return course_out(course)


@router.delete("/{course_id}")
def admin_delete_course(course_id: int, db: Session = Depends(get_db), admin=Depends(require_course_manager)):
    course = load_course(db, course_id)

    # enrollments and announcements go with it
    db.delete(course)
    db.commit()
    logger.info("course deleted id=%s by admin=%s", course_id, admin.id)
    return {"detail": "Course deleted successfully"}


@router.put("/{course_id}/assign-instructor", response_model=AssignInstructorOut)
def admin_assign_instructor(
    course_id: int,
    body: AssignInstructorIn,
    db: Session = Depends(get_db),
    admin=Depends(require_course_manager),
):
    course = load_course(db, course_id)

    has_id = body.instructor_id is not None and body.instructor_id > 0
    email = (body.instructor_email or "").strip()
    if not has_id and not email:
        raise HTTPException(status_code=400, detail="instructor_id or instructor_email is required")

    q = db.query(User).filter(User.role == Role.INSTRUCTOR.value)
    if has_id:
        q = q.filter(User.id == body.instructor_id)
    else:
        q = q.filter(func.lower(User.email) == normalize_email(email))

    instructor = q.first()
    if not instructor:
        raise HTTPException(status_code=400, detail="Invalid instructor ID or user is not an instructor")

    course.instructor_id = instructor.id
    db.commit()
    logger.info("course %s assigned to instructor %s by admin=%s", course.id, instructor.id, admin.id)
    return AssignInstructorOut(course_id=course.id, instructor_id=instructor.id, instructor_name=instructor.name)
