import motor.motor_asyncio
from pymongo import ReturnDocument

from config import settings

client = motor.motor_asyncio.AsyncIOMotorClient(settings.mongo_url)
db = client[settings.mongo_db_name]


def get_db():
    """FastAPI dependency returning the database handle."""
    return db


async def next_id(database, name: str) -> int:
    """Allocate the next integer id for a collection.

    Counters live in the ``counters`` collection, one document per
    collection name; ``$inc`` with upsert keeps allocation atomic.
    """
    counter = await database.counters.find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return counter["seq"]
