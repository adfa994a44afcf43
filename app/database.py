"""
Configuração do banco de dados com SQLAlchemy.

Usado apenas quando ANALYSIS_STORE_BACKEND = "sql".
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from app.config import DATABASE_URL


def create_db_engine(url: str):
    """
    Cria o engine para a URL informada.

    SQLite em memória usa uma única conexão compartilhada, senão
    cada conexão veria um banco vazio.
    """
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = create_db_engine(DATABASE_URL)
SessionLocal = sessionmaker(autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    """
    Inicializa o banco de dados criando todas as tabelas.
    """
    from app.models import analysis  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
