from fastapi import APIRouter, Depends, HTTPException, Response
from typing import List

from errors import NotFoundError
from models.object_models import ObjectDetails, PostObjectModel
from services import ObjectService, get_object_service

router = APIRouter(prefix="/api/objects", tags=["objects"])


@router.get("", response_model=List[ObjectDetails])
async def get_all_objects(service: ObjectService = Depends(get_object_service)):
    return await service.get_all_objects()


@router.get("/user/{user_id}", response_model=List[ObjectDetails])
async def get_user_objects(user_id: int, service: ObjectService = Depends(get_object_service)):
    return await service.get_user_objects(user_id)


@router.get("/{object_id}", response_model=ObjectDetails)
async def get_object_by_id(object_id: int, service: ObjectService = Depends(get_object_service)):
    obj = await service.get_object(object_id)
    if not obj:
        return Response(status_code=404)
    return obj


@router.post("", response_model=ObjectDetails)
async def add_new_object(obj: PostObjectModel, service: ObjectService = Depends(get_object_service)):
    try:
        return await service.create_object(obj.name, obj.owner_id, obj.description)
    except NotFoundError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/{object_id}", status_code=204)
async def delete_object(object_id: int, service: ObjectService = Depends(get_object_service)):
    await service.delete_object(object_id)
    return Response(status_code=204)
