"""
Engine, sessões e base declarativa do SQLAlchemy
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from instagram.core.config import settings

logger = logging.getLogger(__name__)


def build_database_url(url: str, user=None, password=None):
    """Aplica usuário e senha configurados separadamente sobre a URL do banco"""
    database_url = make_url(url)
    if user:
        database_url = database_url.set(username=user)
    if password:
        database_url = database_url.set(password=password)
    return database_url


def engine_options(database_url) -> dict:
    options = {}
    if database_url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        # SQLite em memória: todas as sessões compartilham a mesma conexão
        if database_url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
    return options


DATABASE_URL = build_database_url(
    settings.DATABASE_URL,
    settings.DATABASE_USER,
    settings.DATABASE_PASSWORD,
)

engine = create_engine(DATABASE_URL, **engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None) -> None:
    """Cria as tabelas que ainda não existem"""
    # Importa os modelos para registrá-los no metadata
    from instagram.models import user_model  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Tabelas do banco de dados verificadas")
