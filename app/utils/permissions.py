"""Authorization policy.

Pure allow/deny predicates over a caller's role and id and the target
resource. None of them touch the database or raise; routes turn a denial
into a 403 through `ensure`.

`course` arguments only need `id`, `instructor_id` and, for the content
predicate, a loaded `enrollments` collection.
"""

from fastapi import HTTPException

from app.models.user import Role


def _role(role) -> Role:
    return role if isinstance(role, Role) else Role(role)


def owns_course(caller_id: int, course) -> bool:
    return course.instructor_id is not None and course.instructor_id == caller_id


def is_enrolled(caller_id: int, course) -> bool:
    return any(e.user_id == caller_id for e in course.enrollments)


def can_view_course_content(role, caller_id: int, course) -> bool:
    role = _role(role)
    if role is Role.ADMIN:
        return True
    if role is Role.INSTRUCTOR:
        return owns_course(caller_id, course)
    return is_enrolled(caller_id, course)


def can_manage_course(role) -> bool:
    """Create, update, delete a course or assign its instructor."""
    return _role(role) is Role.ADMIN


def can_edit_course_content(role, caller_id: int, course) -> bool:
    role = _role(role)
    if role is Role.ADMIN:
        return True
    return role is Role.INSTRUCTOR and owns_course(caller_id, course)


def can_post_announcement(role, caller_id: int, course) -> bool:
    return can_edit_course_content(role, caller_id, course)


def can_view_roster(role, caller_id: int, course) -> bool:
    return can_edit_course_content(role, caller_id, course)


def can_enroll(role) -> bool:
    # admins have no enrollment concept
    return _role(role) is not Role.ADMIN


def can_moderate_student_account(role) -> bool:
    """Activate/deactivate students and read anyone's enrollments."""
    return _role(role) is Role.ADMIN


def can_view_enrollments(role, caller_id: int, user_id: int) -> bool:
    return caller_id == user_id or can_moderate_student_account(role)


def ensure(allowed: bool, detail: str = "Forbidden"):
    if not allowed:
        raise HTTPException(status_code=403, detail=detail)
