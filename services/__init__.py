from fastapi import Depends

from config import settings
from dataBase import get_db
from .exchange_service import ExchangeService
from .object_service import ObjectService
from .user_service import UserService


def get_exchange_service(db=Depends(get_db)) -> ExchangeService:
    return ExchangeService(db, strict=settings.strict_transitions)


def get_user_service(db=Depends(get_db)) -> UserService:
    return UserService(db)


def get_object_service(db=Depends(get_db)) -> ObjectService:
    return ObjectService(db)


__all__ = [
    'ExchangeService',
    'ObjectService',
    'UserService',
    'get_exchange_service',
    'get_object_service',
    'get_user_service',
]
