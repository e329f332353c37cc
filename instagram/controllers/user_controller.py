from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from instagram.core.dependencies import get_current_user, get_user_service
from instagram.schemas import user_schema
from instagram.services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["Usuários"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[user_schema.UserDto])
def list_users(user_service: UserService = Depends(get_user_service)):
    return user_service.find_all()


@router.get("/{user_id}", response_model=user_schema.UserDto)
def get_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
):
    return user_service.find_by_id(user_id)


@router.put("", response_model=user_schema.UserDto)
def update_user(
    request: user_schema.UserDetailsRequest,
    user_service: UserService = Depends(get_user_service),
):
    return user_service.update_user(request.to_dto())


@router.delete("/{user_id}", response_class=PlainTextResponse)
def delete_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
):
    user_service.delete_user(user_id)
    return "user was deleted!"
