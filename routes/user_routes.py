from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from typing import Any, Dict, List

from config import settings
from errors import ConflictError, InvalidArgumentError, NotFoundError, UnauthorizedError
from models.login_model import LoginUser
from models.profile_model import LoginResponse, UserProfile
from models.register_model import RegisterUser
from models.update_user_model import DeleteUser, UpdateUser
from services import UserService, get_user_service
from utils import create_access_token

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserProfile])
async def get_all_users(service: UserService = Depends(get_user_service)):
    return await service.get_all_users()


@router.get("/{user_id}", response_model=UserProfile)
async def get_user_by_id(user_id: int, service: UserService = Depends(get_user_service)):
    user = await service.get_user(user_id)
    if not user:
        return Response(status_code=404)
    return user


@router.post("/register", response_model=UserProfile)
async def register_user(user: RegisterUser, service: UserService = Depends(get_user_service)):
    try:
        return await service.create_user(user.username, user.password, user.email)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/login", response_model=LoginResponse)
async def login_user(user: LoginUser, service: UserService = Depends(get_user_service)):
    try:
        existing_user = await service.login(user.username, user.password)
    except UnauthorizedError:
        return Response(status_code=401)

    access_token = create_access_token(
        data={"user_id": existing_user["id"], "username": existing_user["username"]}
    )
    return {
        **existing_user,
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": settings.access_token_expire_minutes * 60,
    }


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_user_fields(request: Request) -> Dict[str, Any]:
    """Collect user fields from the query string and, if present, a form body.

    Form values win over query values with the same name.
    """
    fields: Dict[str, Any] = dict(request.query_params)
    if request.headers.get("content-type", "").startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields.update({k: v for k, v in form.items() if isinstance(v, str)})
    return fields


def parse_user_fields(model, fields: Dict[str, Any]):
    try:
        return model(**fields)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


# Update and delete read the user from query parameters or a form, not a JSON body.
@router.post("/update", response_model=UserProfile)
async def update_user(
    fields: Dict[str, Any] = Depends(read_user_fields),
    service: UserService = Depends(get_user_service),
):
    user = parse_user_fields(UpdateUser, fields)
    try:
        return await service.update_user(
            user.id, username=user.username, password=user.password, email=user.email
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (ConflictError, InvalidArgumentError) as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/delete")
async def delete_user(
    fields: Dict[str, Any] = Depends(read_user_fields),
    service: UserService = Depends(get_user_service),
):
    user = parse_user_fields(DeleteUser, fields)
    try:
        await service.delete_user(user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return Response(status_code=200)
