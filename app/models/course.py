from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(String(500))

    # hours
    duration = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)

    instructor_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    content = Column(Text, nullable=True)

    # relationship
    instructor = relationship("User", back_populates="taught_courses")
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete")
    announcements = relationship("Announcement", back_populates="course", cascade="all, delete")

    @property
    def instructor_name(self):
        return self.instructor.name if self.instructor is not None else None
