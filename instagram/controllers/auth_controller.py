from fastapi import APIRouter, Depends, status

from instagram.core.dependencies import get_auth_service, get_user_service
from instagram.schemas import user_schema
from instagram.services.auth_service import AuthService
from instagram.services.user_service import UserService

router = APIRouter(
    prefix="/auth",
    tags=["Autenticação"],
)


@router.post(
    "/signup",
    response_model=user_schema.UserDto,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(
    request: user_schema.UserDetailsRequest,
    user_service: UserService = Depends(get_user_service),
):
    return user_service.create_user(request.to_dto())


@router.post("/signin", response_model=user_schema.SignInResponse)
def sign_in(
    request: user_schema.LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    token = auth_service.authenticate(request)
    # devolve o username como enviado na requisição
    return user_schema.SignInResponse(token=token, username=request.username)
