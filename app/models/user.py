import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from app.database import Base


class Role(str, enum.Enum):
    ADMIN = "Admin"
    INSTRUCTOR = "Instructor"
    STUDENT = "Student"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    # fixed at creation, there is no role-change path
    role = Column(String(20), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    enrollments = relationship("Enrollment", back_populates="user", cascade="all, delete")
    announcements = relationship("Announcement", back_populates="created_by", cascade="all, delete")
    taught_courses = relationship("Course", back_populates="instructor")
