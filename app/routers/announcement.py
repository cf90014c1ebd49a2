from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.announcement import Announcement
from app.models.course import Course
from app.models.user import User
from app.schemas.announcement import AnnouncementCreate, AnnouncementOut
from app.utils.auth import get_current_user, require_staff
from app.utils.permissions import can_post_announcement, ensure

import logging
logger = logging.getLogger("app.announcements")

router = APIRouter(prefix="/announcements", tags=["Announcements"])


@router.get("/course/{course_id}", response_model=list[AnnouncementOut])
def list_course_announcements(
    course_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not db.get(Course, course_id):
        raise HTTPException(status_code=404, detail="Course not found")

    return (
        db.query(Announcement)
        .filter(Announcement.course_id == course_id)
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        .all()
    )


# 只有講師/管理者可以新增
@router.post("", response_model=AnnouncementOut)
def create_announcement(
    body: AnnouncementCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_staff),
):
    title = body.title.strip()
    message = body.message.strip()
    if not title or not message:
        raise HTTPException(status_code=400, detail="Title and message are required")

    course = db.get(Course, body.course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")

    allowed = can_post_announcement(user.role, user.id, course)
    if not allowed:
        logger.warning("user %s denied announcement on course %s", user.id, course.id)
    ensure(allowed, "You are not assigned to this course")

    ann = Announcement(course_id=course.id, created_by_id=user.id, title=title, message=message)
    db.add(ann)
    db.commit()
    db.refresh(ann)
    logger.info("announcement %s posted on course %s by user %s", ann.id, course.id, user.id)
    return ann
