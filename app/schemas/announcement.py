from datetime import datetime
from pydantic import BaseModel, ConfigDict


class AnnouncementCreate(BaseModel):
    course_id: int
    title: str
    message: str


class AnnouncementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_id: int
    created_by_id: int
    title: str
    message: str
    created_at: datetime
