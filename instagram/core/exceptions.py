"""
Erros de domínio e de armazenamento

Cada erro é convertido em uma única resposta HTTP por
instagram.core.exception_handlers.
"""


class InstagramError(Exception):
    """Base para todos os erros da aplicação"""

    default_message = "Unexpected error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class FieldAlreadyExistsError(InstagramError):
    """Email ou username já utilizado por outro usuário"""

    default_message = "field already in use"


class UserNotFoundError(InstagramError):
    default_message = "User not found"

    @classmethod
    def with_id(cls, user_id) -> "UserNotFoundError":
        return cls(f"User not found with id: {user_id}")


class InvalidArgumentError(InstagramError):
    """Entrada malformada enviada pelo cliente"""

    default_message = "Invalid argument"


class InvalidCredentialsError(InstagramError):
    """Usuário inexistente ou senha incorreta, sem distinção entre os dois casos"""

    default_message = "Invalid username or password"


class InvalidTokenError(InstagramError):
    default_message = "Invalid token"


class StorageError(InstagramError):
    """Falha do banco de dados não recuperada"""

    default_message = "Storage failure"


class UniquenessViolationError(StorageError):
    """Restrição de unicidade violada no banco (email ou username duplicado)"""

    default_message = "email or username already in use"
