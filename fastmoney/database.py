# fastmoney/database.py
import logging
from urllib.parse import urlparse

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Settings

logger = logging.getLogger(__name__)

# 🔹 Base para los modelos
Base = declarative_base()


def normalize_database_url(database_url: str, sslmode: str = "") -> str:
    """Ajusta la URL para SQLAlchemy.

    Railway/Heroku entregan 'postgres://', SQLAlchemy necesita 'postgresql://'.
    Si se configura ``sslmode`` se añade a la query (solo PostgreSQL).
    """
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    if sslmode and database_url.startswith("postgresql"):
        parsed_url = urlparse(database_url)
        query_params = f"sslmode={sslmode}"
        if parsed_url.query:
            database_url = f"{database_url.split('?')[0]}?{query_params}"
        else:
            database_url = f"{database_url}?{query_params}"

    return database_url


def build_engine(settings: Settings) -> Engine:
    """Crea el motor según la URL configurada."""
    database_url = normalize_database_url(settings.database_url, settings.database_sslmode)
    parsed_url = urlparse(database_url)

    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # SQLite en memoria: una sola conexión compartida o cada sesión vería una BD vacía
        if parsed_url.path in ("", "/", "/:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=settings.debug, **kwargs)

    logger.info("Conectando a %s:%s", parsed_url.hostname, parsed_url.port)
    return create_engine(
        database_url,
        pool_size=10,  # Tamaño del pool de conexiones
        max_overflow=20,  # Conexiones adicionales cuando el pool está lleno
        pool_pre_ping=True,  # Verifica conexiones antes de usarlas
        echo=settings.debug,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def check_connection(engine: Engine) -> None:
    """Falla si la base de datos no responde. Se usa al arrancar."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


# -------------------------------
# Función para obtener sesión de DB
# -------------------------------
def get_db(request: Request):
    """Dependencia para obtener una sesión de base de datos."""
    db = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()
