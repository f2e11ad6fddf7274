from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class RegisterUser(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)
    email: Optional[EmailStr] = None
