from .exchange_routes import router as exchange_routes
from .object_routes import router as object_routes
from .user_routes import router as user_routes

__all__ = [
    'exchange_routes',
    'object_routes',
    'user_routes'
]
