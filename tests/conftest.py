"""
Configuração global para testes

Este arquivo é carregado automaticamente pelo pytest antes de qualquer teste.
As variáveis de ambiente precisam existir antes do import de instagram.core.config.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest

# Configurações padrão para testes - definidas ANTES de qualquer import da aplicação
TEST_ENV_VARS = {
    "SECRET_KEY": "test_secret_key_for_testing_only",
    "DATABASE_URL": "sqlite:///:memory:",
    "ALGORITHM": "HS256",
    "ACCESS_TOKEN_EXPIRE_MINUTES": "30",
    "BCRYPT_ROUNDS": "4",
    "ENVIRONMENT": "testing",
    "CORS_ORIGINS": "*",
    "LOG_LEVEL": "WARNING",
}

for key, value in TEST_ENV_VARS.items():
    os.environ.setdefault(key, value)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from instagram.core.database import Base  # noqa: E402
from instagram.core.dependencies import get_db  # noqa: E402
from instagram.core.security import PasswordHasher  # noqa: E402
from instagram.main import app  # noqa: E402
from instagram.models import user_model  # noqa: E402,F401
from instagram.repositories.user_repository import UserRepository  # noqa: E402
from instagram.services.user_service import UserService  # noqa: E402

# Banco SQLite em memória compartilhado por todas as sessões do teste
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FrozenClock:
    """Relógio controlável para testar expiração de tokens"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def override_get_db():
    """Override da dependência get_db para testes"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db_session():
    """Cria uma sessão de banco de dados limpa para cada teste"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Cliente HTTP de teste usando o banco de teste"""
    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def repository(db_session):
    return UserRepository(db_session)


@pytest.fixture
def user_service(repository, hasher):
    return UserService(repository, hasher)


@pytest.fixture
def frozen_clock():
    return FrozenClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def signup_payload():
    return {
        "fullName": "João da Silva",
        "username": "joao.silva",
        "email": "joao.silva@example.com",
        "password": "password123",
    }


@pytest.fixture
def registered_user(client, signup_payload):
    """Cadastra um usuário pela API e retorna o corpo da resposta"""
    response = client.post("/auth/signup", json=signup_payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client, registered_user, signup_payload):
    """Obtém um token de acesso para o usuário cadastrado"""
    response = client.post(
        "/auth/signin",
        json={"username": signup_payload["username"], "password": signup_payload["password"]},
    )
    assert response.status_code == 200, f"Login failed: {response.status_code} - {response.text}"
    return {"Authorization": f"Bearer {response.json()['token']}"}
