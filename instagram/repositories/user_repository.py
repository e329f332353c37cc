"""
Persistência dos usuários sobre SQLAlchemy

Toda escrita faz commit próprio. Violação de unicidade vira UniquenessViolationError
e demais falhas do banco viram StorageError, sempre após rollback.
"""
import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from instagram.core.exceptions import StorageError, UniquenessViolationError, UserNotFoundError
from instagram.models.user_model import UserEntity

logger = logging.getLogger(__name__)

# SQLSTATE de unique_violation no PostgreSQL
UNIQUE_VIOLATION_SQLSTATE = "23505"


def _is_unique_violation(error: IntegrityError) -> bool:
    """Diferencia email/username duplicado de outras violações (NOT NULL, FK...)"""
    orig = error.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = str(orig).lower()
    # SQLite: "UNIQUE constraint failed"; MySQL: "Duplicate entry"
    return "unique" in message or "duplicate" in message


class UserRepository:

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self, operation: str):
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not _is_unique_violation(e):
                logger.error(f"Violação de integridade em {operation}: {e.orig}", exc_info=True)
                raise StorageError(f"Storage failure during {operation}") from e
            logger.warning(f"Violação de unicidade em {operation}: {e.orig}")
            raise UniquenessViolationError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Erro de banco de dados em {operation}: {e}", exc_info=True)
            raise StorageError(f"Storage failure during {operation}") from e

    @contextmanager
    def _reading(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Erro de banco de dados em {operation}: {e}", exc_info=True)
            raise StorageError(f"Storage failure during {operation}") from e

    def save(self, user: UserEntity) -> UserEntity:
        """Insere o usuário (id atribuído pelo banco) ou substitui a linha inteira"""
        with self._transaction("save"):
            if user.id is None:
                self.db.add(user)
            else:
                user = self.db.merge(user)
            self.db.flush()
        self.db.refresh(user)
        return user

    def find_by_id(self, user_id: int) -> Optional[UserEntity]:
        with self._reading("find_by_id"):
            return self.db.get(UserEntity, user_id)

    def find_by_username(self, username: str) -> Optional[UserEntity]:
        with self._reading("find_by_username"):
            return self.db.scalars(
                select(UserEntity).where(UserEntity.username == username)
            ).first()

    def exists_by_email(self, email: str) -> bool:
        with self._reading("exists_by_email"):
            return self._exists(UserEntity.email == email)

    def exists_by_username(self, username: str) -> bool:
        with self._reading("exists_by_username"):
            return self._exists(UserEntity.username == username)

    def exists_by_id(self, user_id: int) -> bool:
        with self._reading("exists_by_id"):
            return self._exists(UserEntity.id == user_id)

    def _exists(self, condition) -> bool:
        return bool(self.db.scalar(select(select(UserEntity.id).where(condition).exists())))

    def find_all(self) -> List[UserEntity]:
        with self._reading("find_all"):
            return list(self.db.scalars(select(UserEntity)).all())

    def count(self) -> int:
        with self._reading("count"):
            return self.db.scalar(select(func.count()).select_from(UserEntity))

    def delete_by_id(self, user_id: int) -> None:
        with self._transaction("delete_by_id"):
            user = self.db.get(UserEntity, user_id)
            if user is None:
                raise UserNotFoundError.with_id(user_id)
            self.db.delete(user)

    def update_partial(
        self,
        full_name: Optional[str],
        email: Optional[str],
        username: Optional[str],
        encrypted_password: Optional[str],
        user_id: int,
    ) -> int:
        """
        Atualiza apenas as colunas cujo valor não é None.

        Retorna o número de linhas afetadas: 1 se o usuário existe, 0 caso contrário.
        """
        values = {
            column: value
            for column, value in (
                ("full_name", full_name),
                ("email", email),
                ("username", username),
                ("encrypted_password", encrypted_password),
            )
            if value is not None
        }
        with self._transaction("update_partial"):
            if not values:
                return 1 if self._exists(UserEntity.id == user_id) else 0
            result = self.db.execute(
                update(UserEntity)
                .where(UserEntity.id == user_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            affected = result.rowcount
        logger.debug(f"update_partial id={user_id} colunas={sorted(values)} linhas={affected}")
        return affected
