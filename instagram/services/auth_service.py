"""
Autenticação por usuário/senha e tokens JWT de acesso
"""
import logging
from datetime import datetime, timezone
from typing import Callable

from jose import JWTError, jwt

from instagram.core.exceptions import InvalidCredentialsError, InvalidTokenError
from instagram.core.security import PasswordHasher, TokenConfig
from instagram.repositories.user_repository import UserRepository
from instagram.schemas.user_schema import LoginRequest

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    """
    Emite e valida tokens sem estado: o servidor não guarda sessões e não há
    revogação. O relógio é injetável para que a expiração possa ser testada.
    """

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        config: TokenConfig,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.hasher = hasher
        self.config = config
        self.clock = clock

    def authenticate(self, login: LoginRequest) -> str:
        user = self.repository.find_by_username(login.username)
        if user is None:
            # mesmo custo de bcrypt de uma senha errada: o tempo não revela se o usuário existe
            self.hasher.dummy_verify()
            logger.info(f"Falha de autenticação para '{login.username}'")
            raise InvalidCredentialsError()
        if not self.hasher.matches(login.password, user.encrypted_password):
            logger.info(f"Falha de autenticação para '{login.username}'")
            raise InvalidCredentialsError()
        return self.mint(user.username)

    def mint(self, subject: str) -> str:
        issued_at = int(self.clock().timestamp())
        expires_at = issued_at + int(self.config.ttl.total_seconds())
        return jwt.encode(
            {"sub": subject, "iat": issued_at, "exp": expires_at},
            self.config.secret_key,
            algorithm=self.config.algorithm,
        )

    def subject_of(self, token: str) -> str:
        try:
            # a expiração é conferida abaixo contra self.clock
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("Token has no subject")
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            raise InvalidTokenError("Token has no expiration")
        if expires_at <= self.clock().timestamp():
            raise InvalidTokenError("Token expired")
        return subject

    def validate(self, token: str) -> bool:
        try:
            self.subject_of(token)
        except InvalidTokenError:
            return False
        return True
