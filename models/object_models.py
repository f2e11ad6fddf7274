from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PostObjectModel(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    owner_id: int


class ObjectDetails(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    owner_id: Optional[int] = None
    created_at: Optional[datetime] = None
