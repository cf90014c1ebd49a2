from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.schemas.course import CourseOut, CourseDetailOut, ClassmateOut, RosterEntry
from app.utils.permissions import can_view_course_content, is_enrolled


def load_course(db: Session, course_id: int, with_users: bool = False) -> Course:
    """Fetch a course with its instructor and enrollments, 404 if absent."""
    enrollments = selectinload(Course.enrollments)
    if with_users:
        enrollments = enrollments.selectinload(Enrollment.user)
    course = (
        db.query(Course)
        .options(selectinload(Course.instructor), enrollments)
        .filter(Course.id == course_id)
        .first()
    )
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


def course_out(course: Course, user=None) -> CourseOut:
    """
    Project a course for a caller.
    Without a caller (admin management views) the full record is returned.
    """
    out = CourseOut.model_validate(course)
    if user is None:
        return out
    return out.model_copy(update={
        "enrolled": is_enrolled(user.id, course),
        "content": course.content if can_view_course_content(user.role, user.id, course) else None,
    })


def course_detail_out(course: Course, user) -> CourseDetailOut:
    base = course_out(course, user)
    classmates = []
    if base.enrolled:
        classmates = [
            ClassmateOut(id=e.user.id, name=e.user.name)
            for e in sorted(course.enrollments, key=lambda e: e.id)
            if e.user_id != user.id
        ]
    return CourseDetailOut(**base.model_dump(), classmates=classmates)


def roster_entry(e: Enrollment) -> RosterEntry:
    return RosterEntry(id=e.user.id, name=e.user.name, email=e.user.email, enrolled_at=e.enrolled_at)


def roster(course: Course) -> list[RosterEntry]:
    return [roster_entry(e) for e in sorted(course.enrollments, key=lambda e: e.id)]
