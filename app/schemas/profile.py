from typing import Optional
from pydantic import BaseModel, Field


class ProfileUpdateIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, min_length=3, max_length=150)
