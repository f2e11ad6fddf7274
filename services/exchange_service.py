"""
Exchange lifecycle.

An exchange proposes one object for another and moves through a small
state machine::

    (none) --create--> PENDING --accept--> ACCEPTED
                          |
                          +----reject--> REJECTED

ACCEPTED and REJECTED are terminal.  With ``strict`` enabled every status
change is applied as a compare-and-swap on the prior status, so a second
accept (or a racing reject) fails instead of silently overwriting.  With
``strict`` disabled the status is overwritten unconditionally.
"""

import logging
from typing import Any, Dict, List, Optional

from dataBase import next_id
from errors import InvalidArgumentError, InvalidTransitionError, NotFoundError
from models.exchange_models import ExchangeStatus
from utils import serialize_object, utcnow

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    ExchangeStatus.PENDING: {ExchangeStatus.ACCEPTED, ExchangeStatus.REJECTED},
    ExchangeStatus.ACCEPTED: set(),
    ExchangeStatus.REJECTED: set(),
}


class ExchangeService:
    def __init__(self, db, strict: bool = True):
        self.db = db
        self.strict = strict

    async def _serialize(self, exchange: Dict[str, Any]) -> Dict[str, Any]:
        proposed = await self.db.objects.find_one({"_id": exchange.get("proposed_object_id")})
        requested = await self.db.objects.find_one({"_id": exchange.get("requested_object_id")})
        return {
            "id": exchange["_id"],
            "proposedObject": serialize_object(proposed) if proposed else None,
            "requestedObject": serialize_object(requested) if requested else None,
            "status": exchange["status"],
            "message": exchange.get("message"),
            "created_at": exchange.get("created_at"),
            "updated_at": exchange.get("updated_at"),
        }

    async def _find_all(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        exchanges = []
        async for exchange in self.db.exchanges.find(query, sort=[("_id", 1)]):
            exchanges.append(await self._serialize(exchange))
        return exchanges

    async def _object_ids_owned_by(self, user_id: int) -> List[int]:
        ids = []
        async for obj in self.db.objects.find({"owner_id": user_id}, {"_id": 1}):
            ids.append(obj["_id"])
        return ids

    async def create_exchange(
        self,
        proposed_object_id: Optional[int],
        requested_object_id: Optional[int],
        message: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Persist a new PENDING exchange between two existing objects.

        Raises ``InvalidArgumentError`` for a missing id and
        ``NotFoundError`` when an id does not resolve.  The referenced
        objects are left untouched.
        """
        if proposed_object_id is None:
            raise InvalidArgumentError("Proposed object ID must not be null")
        if requested_object_id is None:
            raise InvalidArgumentError("Requested object ID must not be null")

        if not await self.db.objects.find_one({"_id": proposed_object_id}):
            raise NotFoundError("Proposed object", proposed_object_id)
        if not await self.db.objects.find_one({"_id": requested_object_id}):
            raise NotFoundError("Requested object", requested_object_id)

        now = utcnow()
        exchange = {
            "_id": await next_id(self.db, "exchanges"),
            "proposed_object_id": proposed_object_id,
            "requested_object_id": requested_object_id,
            "status": ExchangeStatus.PENDING.value,
            "message": message,
            "created_at": now,
            "updated_at": now,
        }
        await self.db.exchanges.insert_one(exchange)
        logger.info(
            "Exchange %s created: object %s proposed for object %s",
            exchange["_id"], proposed_object_id, requested_object_id,
        )
        return await self._serialize(exchange)

    async def _transition(self, exchange_id: int, target: ExchangeStatus) -> Dict[str, Any]:
        exchange = await self.db.exchanges.find_one({"_id": exchange_id})
        if not exchange:
            raise NotFoundError("Exchange", exchange_id)

        current = ExchangeStatus(exchange["status"])
        update = {"$set": {"status": target.value, "updated_at": utcnow()}}

        if not self.strict:
            result = await self.db.exchanges.update_one({"_id": exchange_id}, update)
            if result.matched_count == 0:
                raise NotFoundError("Exchange", exchange_id)
        else:
            if target not in ALLOWED_TRANSITIONS[current]:
                raise InvalidTransitionError(exchange_id, current.value, target.value)
            result = await self.db.exchanges.update_one(
                {"_id": exchange_id, "status": current.value}, update
            )
            if result.matched_count == 0:
                # Someone else moved (or deleted) the exchange between the read and the write.
                latest = await self.db.exchanges.find_one({"_id": exchange_id})
                if not latest:
                    raise NotFoundError("Exchange", exchange_id)
                raise InvalidTransitionError(exchange_id, latest["status"], target.value)

        logger.info("Exchange %s: %s -> %s", exchange_id, current.value, target.value)
        updated = await self.db.exchanges.find_one({"_id": exchange_id})
        if not updated:
            # Deleted right after the write.
            raise NotFoundError("Exchange", exchange_id)
        return await self._serialize(updated)

    async def accept_exchange(self, exchange_id: int) -> Dict[str, Any]:
        return await self._transition(exchange_id, ExchangeStatus.ACCEPTED)

    async def reject_exchange(self, exchange_id: int) -> Dict[str, Any]:
        return await self._transition(exchange_id, ExchangeStatus.REJECTED)

    async def update_exchange(self, exchange_id: int, new_status: Optional[ExchangeStatus]) -> Dict[str, Any]:
        """Set the status of an exchange.

        Only the status is writable; the object references are fixed at
        creation.  Re-applying the current status is a no-op.
        """
        if new_status is None:
            raise InvalidArgumentError("Status must not be null")
        new_status = ExchangeStatus(new_status)

        exchange = await self.db.exchanges.find_one({"_id": exchange_id})
        if not exchange:
            raise NotFoundError("Exchange", exchange_id)
        if self.strict and exchange["status"] == new_status.value:
            return await self._serialize(exchange)
        return await self._transition(exchange_id, new_status)

    async def delete_exchange(self, exchange_id: int) -> bool:
        result = await self.db.exchanges.delete_one({"_id": exchange_id})
        if result.deleted_count:
            logger.info("Exchange %s deleted", exchange_id)
        return result.deleted_count > 0

    async def get_exchange(self, exchange_id: int) -> Optional[Dict[str, Any]]:
        exchange = await self.db.exchanges.find_one({"_id": exchange_id})
        if not exchange:
            return None
        return await self._serialize(exchange)

    async def get_all_exchanges(self) -> List[Dict[str, Any]]:
        return await self._find_all({})

    async def get_received_exchanges(self, user_id: int) -> List[Dict[str, Any]]:
        """Exchanges whose requested object belongs to ``user_id``."""
        object_ids = await self._object_ids_owned_by(user_id)
        if not object_ids:
            return []
        return await self._find_all({"requested_object_id": {"$in": object_ids}})

    async def get_user_exchanges(self, user_id: int) -> List[Dict[str, Any]]:
        """Exchanges where ``user_id`` owns either side."""
        object_ids = await self._object_ids_owned_by(user_id)
        if not object_ids:
            return []
        return await self._find_all({
            "$or": [
                {"proposed_object_id": {"$in": object_ids}},
                {"requested_object_id": {"$in": object_ids}},
            ]
        })
