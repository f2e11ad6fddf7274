from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class UpdateUser(BaseModel):
    id: int
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    password: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None


class DeleteUser(BaseModel):
    id: int
