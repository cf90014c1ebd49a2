from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CourseIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    duration: int = Field(0, ge=0, description="hours")
    price: float = Field(0, ge=0)
    content: Optional[str] = None


class AssignInstructorIn(BaseModel):
    instructor_id: Optional[int] = None
    instructor_email: Optional[str] = None


class CourseContentIn(BaseModel):
    content: Optional[str] = None


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    duration: int
    price: float
    instructor_id: Optional[int] = None
    instructor_name: Optional[str] = None
    content: Optional[str] = None
    enrolled: bool = False


class ClassmateOut(BaseModel):
    id: int
    name: str


class CourseDetailOut(CourseOut):
    classmates: List[ClassmateOut] = []


class RosterEntry(BaseModel):
    id: int
    name: str
    email: str
    enrolled_at: Optional[datetime] = None


class StudentEnrollmentOut(BaseModel):
    course_id: int
    course_title: str
    enrolled_at: Optional[datetime] = None


class AssignInstructorOut(BaseModel):
    course_id: int
    instructor_id: int
    instructor_name: str
    detail: str = "Instructor assigned successfully"


class CourseImportOut(BaseModel):
    inserted: int
    skipped: int
