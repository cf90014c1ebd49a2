import pytest
from fastapi import HTTPException

from app.models.enrollment import Enrollment
from app.models.user import Role
from app.utils.enrollment import enroll


def test_enroll_twice_conflicts(client, student, make_course, headers, db):
    course = make_course()
    h = headers(student)

    first = client.post("/enrollments", json={"course_id": course.id}, headers=h)
    assert first.status_code == 200
    assert first.json()["course_id"] == course.id

    second = client.post("/enrollments", json={"course_id": course.id}, headers=h)
    assert second.status_code == 409
    assert second.json()["detail"] == "Already enrolled in this course"

    assert db.query(Enrollment).filter(Enrollment.user_id == student.id).count() == 1


def test_instructor_can_enroll_admin_cannot(client, instructor, admin, make_course, headers):
    course = make_course()
    assert client.post("/enrollments", json={"course_id": course.id}, headers=headers(instructor)).status_code == 200
    assert client.post("/enrollments", json={"course_id": course.id}, headers=headers(admin)).status_code == 403


def test_enroll_unknown_course(client, student, headers):
    assert client.post("/enrollments", json={"course_id": 12345}, headers=headers(student)).status_code == 404


def test_enroll_requires_course_id(client, student, headers):
    assert client.post("/enrollments", json={}, headers=headers(student)).status_code == 422


def test_unique_constraint_backs_up_the_existence_check(student, make_course, db, monkeypatch):
    course = make_course()
    enroll(db, student.id, course.id)

    # simulate the race: the pre-insert check sees nothing
    monkeypatch.setattr("app.utils.enrollment.is_enrolled", lambda *_args: False)
    with pytest.raises(HTTPException) as exc:
        enroll(db, student.id, course.id)
    assert exc.value.status_code == 409
    assert db.query(Enrollment).count() == 1


def test_list_own_enrollments(client, student, make_course, headers):
    a = make_course("A", content="a notes")
    make_course("B")
    client.post("/enrollments", json={"course_id": a.id}, headers=headers(student))

    r = client.get(f"/enrollments/{student.id}", headers=headers(student))
    assert r.status_code == 200
    data = r.json()
    assert [c["title"] for c in data] == ["A"]
    assert data[0]["enrolled"] is True
    assert data[0]["content"] == "a notes"


def test_enrollments_of_others_need_admin(client, make_user, admin, make_course, headers):
    alice = make_user(Role.STUDENT)
    bob = make_user(Role.STUDENT)
    course = make_course()
    client.post("/enrollments", json={"course_id": course.id}, headers=headers(alice))

    assert client.get(f"/enrollments/{alice.id}", headers=headers(bob)).status_code == 403

    r = client.get(f"/enrollments/{alice.id}", headers=headers(admin))
    assert r.status_code == 200
    assert [c["id"] for c in r.json()] == [course.id]

    assert client.get("/enrollments/9999", headers=headers(admin)).status_code == 404
