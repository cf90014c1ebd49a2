from pydantic import BaseModel


class EnrollmentIn(BaseModel):
    course_id: int


class EnrollmentOut(BaseModel):
    id: int
    course_id: int
    detail: str = "Enrolled successfully"
