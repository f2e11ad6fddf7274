import logging
from typing import Any, Dict, List, Optional

from dataBase import next_id
from errors import ConflictError, InvalidArgumentError, NotFoundError, UnauthorizedError
from utils import hash_password, serialize_user, utcnow, verify_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db):
        self.db = db

    async def get_all_users(self) -> List[Dict[str, Any]]:
        users = []
        async for user in self.db.users.find({}, sort=[("_id", 1)]):
            users.append(serialize_user(user))
        return users

    async def get_user(self, user_id: int) -> Optional[Dict[str, Any]]:
        user = await self.db.users.find_one({"_id": user_id})
        return serialize_user(user) if user else None

    async def create_user(self, username: str, password: str, email: Optional[str] = None) -> Dict[str, Any]:
        if await self.db.users.find_one({"username": username}):
            raise ConflictError("Username already exists")

        user = {
            "_id": await next_id(self.db, "users"),
            "username": username,
            "password": hash_password(password),
            "email": email,
            "created_at": utcnow(),
        }
        await self.db.users.insert_one(user)
        logger.info("User %s registered as %r", user["_id"], username)
        return serialize_user(user)

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        user = await self.db.users.find_one({"username": username})
        if not user or not verify_password(password, user["password"]):
            logger.warning("Failed login for %r", username)
            raise UnauthorizedError("Invalid username or password")
        return serialize_user(user)

    async def update_user(self, user_id: int, **fields) -> Dict[str, Any]:
        """Apply the non-None fields (username, password, email) to a user."""
        update = {k: v for k, v in fields.items() if v is not None}
        if not update:
            raise InvalidArgumentError("No fields provided for update")

        if not await self.db.users.find_one({"_id": user_id}):
            raise NotFoundError("User", user_id)

        if "username" in update:
            clash = await self.db.users.find_one({"username": update["username"], "_id": {"$ne": user_id}})
            if clash:
                raise ConflictError("Username already exists")
        if "password" in update:
            update["password"] = hash_password(update["password"])

        await self.db.users.update_one({"_id": user_id}, {"$set": update})
        return serialize_user(await self.db.users.find_one({"_id": user_id}))

    async def delete_user(self, user_id: int) -> None:
        # Objects and exchanges owned by the user are left in place.
        result = await self.db.users.delete_one({"_id": user_id})
        if result.deleted_count == 0:
            raise NotFoundError("User", user_id)
        logger.info("User %s deleted", user_id)
