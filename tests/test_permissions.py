import pytest

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import Role
from app.utils import permissions as p

INSTRUCTOR_ID = 10
STUDENT_ID = 20
OTHER_ID = 30


def _course(instructor_id=INSTRUCTOR_ID, enrolled=()):
    return Course(
        id=1,
        title="CS101",
        instructor_id=instructor_id,
        enrollments=[Enrollment(user_id=uid, course_id=1) for uid in enrolled],
    )


@pytest.mark.parametrize("enrolled, expected", [((STUDENT_ID,), True), ((), False), ((OTHER_ID,), False)])
def test_student_sees_content_iff_enrolled(enrolled, expected):
    assert p.can_view_course_content(Role.STUDENT, STUDENT_ID, _course(enrolled=enrolled)) is expected


def test_admin_sees_everything():
    course = _course(instructor_id=None)
    assert p.can_view_course_content(Role.ADMIN, 1, course)
    assert p.can_edit_course_content(Role.ADMIN, 1, course)
    assert p.can_view_roster(Role.ADMIN, 1, course)
    assert p.can_post_announcement(Role.ADMIN, 1, course)


def test_instructor_only_for_owned_course():
    owned = _course()
    other = _course(instructor_id=OTHER_ID)
    unassigned = _course(instructor_id=None)

    for check in (p.can_view_course_content, p.can_edit_course_content, p.can_view_roster, p.can_post_announcement):
        assert check(Role.INSTRUCTOR, INSTRUCTOR_ID, owned)
        assert not check(Role.INSTRUCTOR, INSTRUCTOR_ID, other)
        assert not check(Role.INSTRUCTOR, INSTRUCTOR_ID, unassigned)


def test_enrolled_instructor_still_needs_ownership():
    course = _course(instructor_id=OTHER_ID, enrolled=(INSTRUCTOR_ID,))
    assert not p.can_view_course_content(Role.INSTRUCTOR, INSTRUCTOR_ID, course)


def test_students_never_edit_or_see_roster():
    course = _course(instructor_id=STUDENT_ID, enrolled=(STUDENT_ID,))
    assert not p.can_edit_course_content(Role.STUDENT, STUDENT_ID, course)
    assert not p.can_view_roster(Role.STUDENT, STUDENT_ID, course)
    assert not p.can_post_announcement(Role.STUDENT, STUDENT_ID, course)


def test_role_only_predicates():
    assert p.can_manage_course(Role.ADMIN)
    assert not p.can_manage_course(Role.INSTRUCTOR)
    assert not p.can_manage_course(Role.STUDENT)

    assert p.can_enroll(Role.STUDENT)
    assert p.can_enroll(Role.INSTRUCTOR)
    assert not p.can_enroll(Role.ADMIN)

    assert p.can_moderate_student_account(Role.ADMIN)
    assert not p.can_moderate_student_account(Role.INSTRUCTOR)
    assert not p.can_moderate_student_account(Role.STUDENT)


def test_predicates_accept_stored_role_strings():
    assert p.can_manage_course("Admin")
    assert not p.can_enroll("Admin")
    assert p.can_view_course_content("Student", STUDENT_ID, _course(enrolled=(STUDENT_ID,)))


def test_can_view_enrollments():
    assert p.can_view_enrollments(Role.STUDENT, STUDENT_ID, STUDENT_ID)
    assert not p.can_view_enrollments(Role.STUDENT, STUDENT_ID, OTHER_ID)
    assert not p.can_view_enrollments(Role.INSTRUCTOR, INSTRUCTOR_ID, STUDENT_ID)
    assert p.can_view_enrollments(Role.ADMIN, 1, STUDENT_ID)


def test_ensure_raises_forbidden():
    from fastapi import HTTPException

    p.ensure(True)
    with pytest.raises(HTTPException) as exc:
        p.ensure(False, "nope")
    assert exc.value.status_code == 403
    assert exc.value.detail == "nope"
