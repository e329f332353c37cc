import logging
from typing import List, Optional

from instagram.core.exceptions import (
    FieldAlreadyExistsError,
    InvalidArgumentError,
    UserNotFoundError,
)
from instagram.core.security import PasswordHasher
from instagram.models.user_model import UserEntity
from instagram.repositories.user_repository import UserRepository
from instagram.schemas.user_schema import UserDto

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class UserService:
    """
    Ciclo de vida dos usuários.

    A checagem de email/username antes do insert existe só para produzir uma
    mensagem clara; a unicidade real é garantida pelas constraints do banco.
    """

    def __init__(self, repository: UserRepository, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher

    def create_user(self, user_dto: UserDto) -> UserDto:
        if (
            _is_blank(user_dto.full_name)
            or _is_blank(user_dto.username)
            or _is_blank(user_dto.email)
            or _is_blank(user_dto.password)
        ):
            raise InvalidArgumentError("fullName, username, email and password are required")

        # email é verificado antes do username: em colisão dupla o erro reportado é o de email
        if self.repository.exists_by_email(user_dto.email):
            raise FieldAlreadyExistsError("email already in use")
        if self.repository.exists_by_username(user_dto.username):
            raise FieldAlreadyExistsError("username already in use")

        entity = UserEntity(
            full_name=user_dto.full_name,
            username=user_dto.username,
            email=user_dto.email,
            encrypted_password=self.hasher.hash(user_dto.password),
        )
        saved = self.repository.save(entity)
        logger.info(f"Usuário '{saved.username}' criado com id {saved.id}")
        return UserDto.from_entity(saved)

    def find_by_id(self, user_id: int) -> UserDto:
        entity = self.repository.find_by_id(user_id)
        if entity is None:
            raise UserNotFoundError.with_id(user_id)
        return UserDto.from_entity(entity)

    def find_all(self) -> List[UserDto]:
        return [UserDto.from_entity(entity) for entity in self.repository.find_all()]

    def update_user(self, user_dto: Optional[UserDto]) -> UserDto:
        """
        Atualização parcial: campos None são mantidos. Senha em branco ou só com
        espaços conta como não informada e preserva o hash atual.
        """
        if user_dto is None or user_dto.id is None:
            raise InvalidArgumentError("UserDto or UserDto.id must not be null")

        if not self.repository.exists_by_id(user_dto.id):
            raise UserNotFoundError.with_id(user_dto.id)

        encrypted_password = None
        if not _is_blank(user_dto.password):
            encrypted_password = self.hasher.hash(user_dto.password)

        affected = self.repository.update_partial(
            user_dto.full_name,
            user_dto.email,
            user_dto.username,
            encrypted_password,
            user_dto.id,
        )
        if affected == 0:
            # removido entre a checagem e o update
            raise UserNotFoundError.with_id(user_dto.id)

        logger.info(f"Usuário id {user_dto.id} atualizado")
        return self.find_by_id(user_dto.id)

    def delete_user(self, user_id: int) -> None:
        if not self.repository.exists_by_id(user_id):
            raise UserNotFoundError.with_id(user_id)
        self.repository.delete_by_id(user_id)
        logger.info(f"Usuário id {user_id} removido")
