"""
Hash de senhas e configuração dos tokens de acesso
"""
import hashlib
from dataclasses import dataclass
from datetime import timedelta

from passlib.context import CryptContext

from instagram.core.config import Settings, settings

# Limite de bytes que o bcrypt considera em uma senha
BCRYPT_MAX_BYTES = 72


def _prepare_password(password: str) -> str:
    """
    Senhas maiores que 72 bytes são reduzidas com SHA-256 antes do bcrypt.
    O hexdigest tem 64 caracteres, dentro do limite.
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        return hashlib.sha256(password_bytes).hexdigest()
    return password


class PasswordHasher:
    """Hash bcrypt com salt e custo configurável"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            bcrypt__ident="2b",
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(_prepare_password(plaintext))

    def matches(self, plaintext: str, digest: str) -> bool:
        if not plaintext or not digest:
            return False
        try:
            return self._context.verify(_prepare_password(plaintext), digest)
        except ValueError:
            # digest que não é um hash bcrypt reconhecível
            return False

    def dummy_verify(self) -> bool:
        """Gasta o mesmo tempo de uma verificação real; sempre retorna False"""
        return self._context.dummy_verify()


@dataclass(frozen=True)
class TokenConfig:
    secret_key: str
    algorithm: str
    ttl: timedelta

    @classmethod
    def from_settings(cls, source: Settings) -> "TokenConfig":
        return cls(
            secret_key=source.SECRET_KEY,
            algorithm=source.ALGORITHM,
            ttl=timedelta(minutes=source.ACCESS_TOKEN_EXPIRE_MINUTES),
        )


password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
token_config = TokenConfig.from_settings(settings)
