from pydantic import BaseModel, Field

from app.models.user import Role


class AdminUserCreateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=6, max_length=72)
    role: Role = Role.INSTRUCTOR
