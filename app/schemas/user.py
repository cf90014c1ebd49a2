from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role

class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=150)

class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    # accepted so the registration form can send it, only Student passes
    role: str = Role.STUDENT.value

class UserLogin(BaseModel):
    email: str
    password: str

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    is_active: bool

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    name: str
    role: str

class StudentStatusOut(BaseModel):
    id: int
    is_active: bool
    detail: str = "Student status updated"
