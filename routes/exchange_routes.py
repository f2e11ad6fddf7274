import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse
from typing import List

from errors import DomainError, InvalidArgumentError, InvalidTransitionError, NotFoundError
from models.exchange_models import ExchangeDetails, ExchangeRequest, ExchangeUpdate
from services import ExchangeService, get_exchange_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/exchanges", tags=["exchanges"])


@router.get("", response_model=List[ExchangeDetails])
async def get_all_exchanges(service: ExchangeService = Depends(get_exchange_service)):
    return await service.get_all_exchanges()


@router.post("/{exchange_id}/accept", response_class=PlainTextResponse)
async def accept_exchange(exchange_id: int, service: ExchangeService = Depends(get_exchange_service)):
    try:
        await service.accept_exchange(exchange_id)
        return PlainTextResponse("Exchange accepted successfully.")
    except DomainError as e:
        return PlainTextResponse(e.message, status_code=400)
    except Exception as e:
        logger.exception("Accepting exchange %s failed", exchange_id)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{exchange_id}/reject", response_class=PlainTextResponse)
async def reject_exchange(exchange_id: int, service: ExchangeService = Depends(get_exchange_service)):
    try:
        await service.reject_exchange(exchange_id)
        return PlainTextResponse("Exchange rejected successfully.")
    except DomainError as e:
        return PlainTextResponse(e.message, status_code=400)
    except Exception as e:
        logger.exception("Rejecting exchange %s failed", exchange_id)
        raise HTTPException(status_code=500, detail=str(e))


# Declared before "/{exchange_id}" so the literal paths win.
@router.get("/received", response_model=List[ExchangeDetails])
async def get_received_exchange_requests(
    userId: int = Query(...),
    service: ExchangeService = Depends(get_exchange_service),
):
    exchanges = await service.get_received_exchanges(userId)
    if not exchanges:
        return Response(status_code=204)
    return exchanges


@router.get("/user/{user_id}", response_model=List[ExchangeDetails])
async def get_exchanges_by_user_id(user_id: int, service: ExchangeService = Depends(get_exchange_service)):
    exchanges = await service.get_user_exchanges(user_id)
    if not exchanges:
        return Response(status_code=404)
    return exchanges


@router.get("/{exchange_id}", response_model=ExchangeDetails)
async def get_exchange_by_id(exchange_id: int, service: ExchangeService = Depends(get_exchange_service)):
    exchange = await service.get_exchange(exchange_id)
    if not exchange:
        return Response(status_code=404)
    return exchange


@router.post("", response_model=ExchangeDetails)
async def create_exchange(exchange: ExchangeRequest, service: ExchangeService = Depends(get_exchange_service)):
    proposed_id = exchange.proposedObject.id if exchange.proposedObject else None
    requested_id = exchange.requestedObject.id if exchange.requestedObject else None
    try:
        return await service.create_exchange(proposed_id, requested_id, exchange.message)
    except (InvalidArgumentError, NotFoundError) as e:
        return PlainTextResponse(e.message, status_code=400)


@router.put("/{exchange_id}", response_model=ExchangeDetails)
async def update_exchange(
    exchange_id: int,
    exchange: ExchangeUpdate,
    service: ExchangeService = Depends(get_exchange_service),
):
    try:
        return await service.update_exchange(exchange_id, exchange.status)
    except NotFoundError as e:
        return PlainTextResponse(e.message, status_code=404)
    except InvalidArgumentError as e:
        return PlainTextResponse(e.message, status_code=400)
    except InvalidTransitionError as e:
        return PlainTextResponse(e.message, status_code=409)


@router.delete("/{exchange_id}", status_code=204)
async def delete_exchange(exchange_id: int, service: ExchangeService = Depends(get_exchange_service)):
    await service.delete_exchange(exchange_id)
    return Response(status_code=204)
