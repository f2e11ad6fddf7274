from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserProfile(BaseModel):
    id: int
    username: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None


class LoginResponse(UserProfile):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
