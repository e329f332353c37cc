# Dependências da API: sessão do banco, serviços e usuário autenticado
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from instagram.core import database
from instagram.core.config import settings
from instagram.core.exceptions import InvalidTokenError
from instagram.core.security import PasswordHasher, password_hasher, token_config
from instagram.models.user_model import UserEntity
from instagram.repositories.user_repository import UserRepository
from instagram.services.auth_service import AuthService
from instagram.services.user_service import UserService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# Lifespan handler para startup (cria as tabelas) e shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    try:
        database.init_db()
    except Exception as e:
        logger.error(f"Erro no startup: {e}", exc_info=True)
        raise
    logger.info(f"API iniciada (ambiente: {settings.ENVIRONMENT})")
    yield
    database.engine.dispose()


def get_db():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(repository, hasher)


def get_auth_service(
    repository: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(repository, hasher, token_config)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserEntity:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidTokenError("Missing bearer token")
    username = auth_service.subject_of(credentials.credentials)
    user = auth_service.repository.find_by_username(username)
    if user is None:
        raise InvalidTokenError("Token subject no longer exists")
    return user
