from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session, selectinload

from app.database import get_db
from app.models.announcement import Announcement
from app.models.course import Course
from app.models.user import User, Role
from app.schemas.announcement import AnnouncementOut
from app.schemas.course import CourseOut, CourseContentIn, RosterEntry
from app.schemas.instructor import InstructorCourseDetailOut
from app.utils.auth import require_staff
from app.utils.course_views import load_course, course_out, roster
from app.utils.excel_export import table_to_xlsx_bytes, make_filename, ROSTER_COLUMNS, XLSX_MEDIA_TYPE
from app.utils.permissions import can_view_roster, can_edit_course_content, ensure

import logging
logger = logging.getLogger("app.instructor")


router = APIRouter(prefix="/instructor", tags=["Instructor"])

NOT_ASSIGNED = "You are not assigned to this course"


def _owned_course(db: Session, course_id: int, user: User, check) -> Course:
    course = load_course(db, course_id, with_users=True)
    allowed = check(user.role, user.id, course)
    if not allowed:
        logger.warning("user %s denied on course %s", user.id, course_id)
    ensure(allowed, NOT_ASSIGNED)
    return course


@router.get("/my-courses", response_model=list[CourseOut])
def my_courses(db: Session = Depends(get_db), user: User = Depends(require_staff)):
    q = db.query(Course).options(selectinload(Course.instructor))
    # admins see every course
    if user.role == Role.INSTRUCTOR.value:
        q = q.filter(Course.instructor_id == user.id)
    return [course_out(c) for c in q.order_by(Course.id.asc()).all()]


@router.get("/courses/{course_id}", response_model=InstructorCourseDetailOut)
def course_details(course_id: int, db: Session = Depends(get_db), user: User = Depends(require_staff)):
    course = _owned_course(db, course_id, user, can_view_roster)

    announcements = (
        db.query(Announcement)
        .filter(Announcement.course_id == course.id)
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        .all()
    )
    return InstructorCourseDetailOut(
        **course_out(course).model_dump(),
        students=roster(course),
        announcements=[AnnouncementOut.model_validate(a) for a in announcements],
    )


@router.get("/courses/{course_id}/students", response_model=list[RosterEntry])
def course_students(course_id: int, db: Session = Depends(get_db), user: User = Depends(require_staff)):
    course = _owned_course(db, course_id, user, can_view_roster)
    return roster(course)


@router.get("/courses/{course_id}/students/export")
def export_course_students(course_id: int, db: Session = Depends(get_db), user: User = Depends(require_staff)):
    """
    Roster of the course as an Excel (.xlsx) download.
    """
    course = _owned_course(db, course_id, user, can_view_roster)

    xlsx_bytes = table_to_xlsx_bytes(roster(course), ROSTER_COLUMNS, sheet_name="Roster")
    filename = make_filename(f"course_{course.id}_roster")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.put("/courses/{course_id}/content")
def update_course_content(
    course_id: int,
    body: CourseContentIn,
    db: Session = Depends(get_db),
    user: User = Depends(require_staff),
):
    if not body.content or not body.content.strip():
        raise HTTPException(status_code=400, detail="Content is required")

    course = _owned_course(db, course_id, user, can_edit_course_content)
    course.content = body.content
    db.commit()
    logger.info("content of course %s updated by user %s", course.id, user.id)
    return {"detail": "Course content updated successfully"}
