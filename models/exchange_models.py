from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum

from models.object_models import ObjectDetails


class ExchangeStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class ObjectRef(BaseModel):
    id: Optional[int] = None


class ExchangeRequest(BaseModel):
    # Missing ids are reported by ExchangeService, not by validation.
    proposedObject: Optional[ObjectRef] = None
    requestedObject: Optional[ObjectRef] = None
    message: Optional[str] = None


class ExchangeUpdate(BaseModel):
    status: Optional[ExchangeStatus] = None


class ExchangeDetails(BaseModel):
    id: int
    proposedObject: Optional[ObjectDetails] = None
    requestedObject: Optional[ObjectDetails] = None
    status: ExchangeStatus
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
