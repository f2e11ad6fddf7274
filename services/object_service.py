import logging
from typing import Any, Dict, List, Optional

from dataBase import next_id
from errors import NotFoundError
from utils import serialize_object, utcnow

logger = logging.getLogger(__name__)


class ObjectService:
    def __init__(self, db):
        self.db = db

    async def _find_all(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        objects = []
        async for obj in self.db.objects.find(query, sort=[("_id", 1)]):
            objects.append(serialize_object(obj))
        return objects

    async def get_all_objects(self) -> List[Dict[str, Any]]:
        return await self._find_all({})

    async def get_user_objects(self, user_id: int) -> List[Dict[str, Any]]:
        return await self._find_all({"owner_id": user_id})

    async def get_object(self, object_id: int) -> Optional[Dict[str, Any]]:
        obj = await self.db.objects.find_one({"_id": object_id})
        return serialize_object(obj) if obj else None

    async def create_object(self, name: str, owner_id: int, description: Optional[str] = None) -> Dict[str, Any]:
        if not await self.db.users.find_one({"_id": owner_id}):
            raise NotFoundError("User", owner_id)

        obj = {
            "_id": await next_id(self.db, "objects"),
            "name": name,
            "description": description,
            "owner_id": owner_id,
            "created_at": utcnow(),
        }
        await self.db.objects.insert_one(obj)
        logger.info("Object %s listed by user %s", obj["_id"], owner_id)
        return serialize_object(obj)

    async def delete_object(self, object_id: int) -> bool:
        # Exchanges referencing the object keep their id; they render it as null.
        result = await self.db.objects.delete_one({"_id": object_id})
        return result.deleted_count > 0
